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

"""Create extensions from values written in the OpenSSL extension configuration syntax.

>>> extension = encode("basicConstraints", True, "CA:TRUE")
>>> extension.critical()
True
>>> str(extension)
'CA:TRUE'
"""

import logging
from typing import Optional

from cryptography import x509

from django_x509ext.constants import CRITICAL_PREFIX
from django_x509ext.exceptions import InvalidValueSyntax, ResourceExhausted
from django_x509ext.extension import Extension
from django_x509ext.extensions.parse import ValueContext, parse_extension_value
from django_x509ext.registry import ExtensionRegistry, get_default_registry
from django_x509ext.typehints import ExtensionValue

log = logging.getLogger(__name__)


def add_critical_prefix(value: str, critical: bool) -> str:
    """Prefix `value` with ``critical,`` if `critical` is ``True``.

    >>> add_critical_prefix("CA:TRUE", True)
    'critical,CA:TRUE'
    >>> add_critical_prefix("CA:TRUE", False)
    'CA:TRUE'
    >>> add_critical_prefix("", True)
    'critical,'
    """
    if not critical:
        return value

    try:
        return CRITICAL_PREFIX + value
    except MemoryError as ex:
        raise ResourceExhausted("Cannot allocate extension value.") from ex


def encode(
    type_name: str,
    critical: bool,
    value: ExtensionValue,
    subject: Optional[x509.Certificate] = None,
    issuer: Optional[x509.Certificate] = None,
    registry: Optional[ExtensionRegistry] = None,
) -> Extension:
    """Create an extension from a value in the OpenSSL extension configuration syntax.

    `type_name` is the short name of the extension (e.g. ``"subjectAltName"``). Values starting with
    ``DER:`` or ``ASN1:`` may also use a long name or a dotted string. Some values require a `subject` (e.g.
    ``subjectKeyIdentifier=hash``) or an `issuer` (e.g. ``authorityKeyIdentifier=keyid`` or
    ``issuerAltName=issuer:copy``) certificate. The certificates are only read during this call.

    Raises :py:class:`~django_x509ext.exceptions.UnknownExtensionType` if the type name is not known and
    :py:class:`~django_x509ext.exceptions.InvalidValueSyntax` if the value cannot be parsed.

    >>> encode("subjectAltName", False, "DNS:example.com,email:user@example.com")
    <Extension: subjectAltName, critical=False>
    >>> encode("keyUsage", True, b"digitalSignature").format()
    'Digital Signature'
    """
    if registry is None:
        registry = get_default_registry()
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError as ex:
            raise InvalidValueSyntax(f"{type_name}: Value is not valid UTF-8: {ex}") from ex

    context = ValueContext(subject=subject, issuer=issuer)
    value = add_critical_prefix(value, critical)

    try:
        oid, parsed_critical, payload = parse_extension_value(type_name, value, context, registry)
        extension = Extension.from_values(oid, parsed_critical, payload)
    except MemoryError as ex:
        raise ResourceExhausted(f"{type_name}: Cannot allocate extension.") from ex

    log.debug("%s: Encoded extension (oid=%s, critical=%s).", type_name, oid.dotted_string, parsed_critical)
    return extension
