# This file is part of django-x509ext.
#
# django-x509ext is free software: you can redistribute it and/or modify it under the terms of the GNU
# General Public License as published by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# django-x509ext is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even
# the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public
# License for more details.
#
# You should have received a copy of the GNU General Public License along with django-x509ext. If not, see
# <http://www.gnu.org/licenses/>.

"""Format extension values as text.

The text follows the format used by ``openssl x509 -text``::

    >>> from django_x509ext import encode
    >>> format_extension(encode("basicConstraints", True, "CA:TRUE, pathlen:0"))
    'CA:TRUE, pathlen:0'
    >>> format_extension(encode("keyUsage", False, "digitalSignature,keyCertSign"))
    'Digital Signature, Certificate Sign'

The subject alternative name is printed by a dedicated function that writes the exact bytes of e-mail
addresses, DNS names and URIs, so a name that contains a NUL byte is never truncated.
"""

import io
import logging
from typing import TYPE_CHECKING, Optional

import asn1crypto.core
from cryptography import x509
from cryptography.x509.oid import ExtensionOID

from django_x509ext.conf import model_settings
from django_x509ext.constants import VALUE_SEPARATOR, GeneralNameKind
from django_x509ext.exceptions import MalformedPayload, NoPrinterAvailable
from django_x509ext.registry import ExtensionMethod, ExtensionRegistry, get_default_registry
from django_x509ext.utils import format_general_name

if TYPE_CHECKING:
    from django_x509ext.extension import Extension

log = logging.getLogger(__name__)

#: Prefixes for general names that are written byte by byte.
RAW_NAME_PREFIXES = {
    GeneralNameKind.EMAIL: b"email:",
    GeneralNameKind.DNS: b"DNS:",
    GeneralNameKind.URI: b"URI:",
}


def _get_method(oid: x509.ObjectIdentifier, registry: ExtensionRegistry) -> ExtensionMethod:
    method = registry.get_method(oid)
    if method is None or method.spec is None:
        raise NoPrinterAvailable(f"{oid.dotted_string}: No printer available for extension.")
    return method


def _load(method: ExtensionMethod, data: bytes) -> asn1crypto.core.Asn1Value:
    assert method.spec is not None  # checked by _get_method()
    try:
        return method.spec.load(data, strict=model_settings.X509EXT_STRICT_DER)
    except ValueError as ex:
        raise MalformedPayload(f"{method.short_name}: Cannot decode value: {ex}") from ex


def _materialize(method: ExtensionMethod, buffer: io.BytesIO) -> str:
    try:
        return buffer.getvalue().decode("utf-8", errors=model_settings.X509EXT_TEXT_ERRORS)
    except UnicodeDecodeError as ex:
        raise MalformedPayload(f"{method.short_name}: Value cannot be converted to text: {ex}") from ex


def _format_subject_alternative_name(data: bytes, registry: ExtensionRegistry) -> str:
    method = _get_method(ExtensionOID.SUBJECT_ALTERNATIVE_NAME, registry)
    names = _load(method, data)

    with io.BytesIO() as buffer:
        try:
            for index, name in enumerate(names):
                if index:
                    buffer.write(VALUE_SEPARATOR.encode("ascii"))

                kind = GeneralNameKind(name.name)
                if kind in RAW_NAME_PREFIXES:
                    buffer.write(RAW_NAME_PREFIXES[kind])
                    buffer.write(name.chosen.contents)
                else:
                    buffer.write(format_general_name(name).encode("utf-8", errors="surrogateescape"))
        except ValueError as ex:
            raise MalformedPayload(f"{method.short_name}: Cannot decode value: {ex}") from ex

        return _materialize(method, buffer)


def _format_generic(oid: x509.ObjectIdentifier, data: bytes, registry: ExtensionRegistry) -> str:
    method = _get_method(oid, registry)
    if method.printer is None:
        raise NoPrinterAvailable(f"{method.short_name}: No printer available for extension.")

    value = _load(method, data)
    try:
        text = method.printer(value)
    except ValueError as ex:
        raise MalformedPayload(f"{method.short_name}: Cannot decode value: {ex}") from ex

    with io.BytesIO() as buffer:
        buffer.write(text.encode("utf-8", errors="surrogateescape"))
        return _materialize(method, buffer)


def format_extension(extension: "Extension", registry: Optional[ExtensionRegistry] = None) -> str:
    """Format the value of the given extension as text.

    Raises :py:class:`~django_x509ext.exceptions.NoPrinterAvailable` if the registry knows no printer for
    the extension and :py:class:`~django_x509ext.exceptions.MalformedPayload` if the value cannot be
    decoded.
    """
    if registry is None:
        registry = get_default_registry()

    oid = extension.oid
    if oid == ExtensionOID.SUBJECT_ALTERNATIVE_NAME:
        log.debug("Formatting subject alternative name.")
        return _format_subject_alternative_name(extension.raw_data(), registry)

    log.debug("%s: Formatting extension.", oid.dotted_string)
    return _format_generic(oid, extension.raw_data(), registry)
