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

"""The :py:class:`~django_x509ext.extension.Extension` class.

An extension either owns its encoded structure (if it was created by
:py:func:`~django_x509ext.encoder.encode` or from DER) or borrows it from a certificate. A borrowed extension
keeps a reference to the certificate, so the certificate stays usable for as long as any of its extensions.
"""

import logging
from typing import Any, Optional, Union

import asn1crypto.core
import asn1crypto.x509
from cryptography import x509
from cryptography.hazmat.primitives.serialization import Encoding

from django_x509ext import constants
from django_x509ext.asn1 import ExtensionStructure
from django_x509ext.exceptions import MalformedPayload
from django_x509ext.formatter import format_extension
from django_x509ext.registry import ExtensionRegistry, get_default_registry

log = logging.getLogger(__name__)


class Owned:
    """The extension exclusively owns its encoded structure."""

    def __init__(self, structure: ExtensionStructure) -> None:
        self.structure = structure

    def __repr__(self) -> str:
        return "<Owned>"


class Borrowed:
    """The extension is a view into a structure owned by another object, usually a certificate."""

    def __init__(self, structure: ExtensionStructure, owner: Any) -> None:
        self.structure = structure
        self.owner = owner

    def __repr__(self) -> str:
        return f"<Borrowed: {self.owner!r}>"


Ownership = Union[Owned, Borrowed]


def _load_structure(data: bytes) -> ExtensionStructure:
    """Load an extension structure and make sure that all fields decode."""
    try:
        structure = ExtensionStructure.load(data, strict=True)
        structure["extn_id"].dotted  # noqa: B018  # access to force parsing of the field
        structure["critical"].native  # noqa: B018
        structure["extn_value"].native  # noqa: B018
    except ValueError as ex:
        raise MalformedPayload(f"Cannot decode extension: {ex}") from ex
    return structure


class Extension:
    """A single X.509 extension: an OID, a critical flag and the DER encoded value.

    Extensions are usually created with :py:func:`~django_x509ext.encoder.encode` or
    :py:func:`~django_x509ext.extension.extensions_from_certificate`.
    """

    def __init__(self, ownership: Ownership) -> None:
        self._ownership = ownership

    @classmethod
    def from_der(cls, data: bytes) -> "Extension":
        """Load an extension from its DER encoded ``Extension`` structure."""
        return cls(Owned(_load_structure(data)))

    @classmethod
    def from_values(cls, oid: x509.ObjectIdentifier, critical: bool, payload: bytes) -> "Extension":
        """Create an extension from its OID, critical flag and the DER encoded value."""
        values: dict[str, Any] = {"extn_id": oid.dotted_string, "extn_value": payload}
        if critical:  # DER requires that the default value is omitted
            values["critical"] = True

        return cls.from_der(ExtensionStructure(values).dump())

    def __repr__(self) -> str:
        return f"<Extension: {self.short_name().decode('ascii')}, critical={self.critical()}>"

    def __str__(self) -> str:
        return self.format()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Extension):
            return NotImplemented
        return (self.oid, self.critical(), self.raw_data()) == (other.oid, other.critical(), other.raw_data())

    def __hash__(self) -> int:
        return hash((self.oid, self.critical(), self.raw_data()))

    @property
    def _structure(self) -> ExtensionStructure:
        return self._ownership.structure

    @property
    def ownership(self) -> Ownership:
        """The ownership of the encoded structure, either ``Owned`` or ``Borrowed``."""
        return self._ownership

    @property
    def owns_payload(self) -> bool:
        """``True`` if this extension owns its encoded structure."""
        return isinstance(self._ownership, Owned)

    @property
    def oid(self) -> x509.ObjectIdentifier:
        """The object identifier of this extension."""
        return x509.ObjectIdentifier(self._structure["extn_id"].dotted)

    def critical(self) -> bool:
        """Returns ``True`` if the extension is marked as critical."""
        return bool(self._structure["critical"].native)

    def short_name(self, registry: Optional[ExtensionRegistry] = None) -> bytes:
        """Get the short name of the extension, or ``b"UNDEF"`` if the name is not known.

        >>> extension = Extension.from_values(x509.ObjectIdentifier("2.5.29.19"), True, b"0\\x00")
        >>> extension.short_name()
        b'basicConstraints'
        >>> Extension.from_values(x509.ObjectIdentifier("1.2.3"), True, b"0\\x00").short_name()
        b'UNDEF'
        """
        if registry is None:
            registry = get_default_registry()

        short_name = registry.get_short_name(self.oid)
        if short_name is None:
            return constants.UNDEFINED_SHORT_NAME
        return short_name.encode("ascii")

    def raw_data(self) -> bytes:
        """Get the DER encoded value of the extension, without the surrounding ``Extension`` structure."""
        return self._structure["extn_value"].native  # type: ignore[no-any-return]

    def public_bytes(self) -> bytes:
        """Get the DER encoded ``Extension`` structure."""
        return self._structure.dump()  # type: ignore[no-any-return]

    def as_extension_type(self) -> x509.UnrecognizedExtension:
        """Get the value as extension type that can be passed to cryptography builders.

        >>> from cryptography.x509.oid import ExtensionOID
        >>> extension = Extension.from_values(ExtensionOID.BASIC_CONSTRAINTS, True, b"0\\x00")
        >>> extension.as_extension_type()  # doctest: +ELLIPSIS
        <UnrecognizedExtension(oid=<ObjectIdentifier(oid=2.5.29.19, ...)>, value=b'0\\x00')>
        """
        return x509.UnrecognizedExtension(self.oid, self.raw_data())

    def as_extension(self) -> "x509.Extension[x509.UnrecognizedExtension]":
        """Get a cryptography extension for this extension."""
        return x509.Extension(oid=self.oid, critical=self.critical(), value=self.as_extension_type())

    def format(self, registry: Optional[ExtensionRegistry] = None) -> str:
        """Format the extension value as text, see :py:func:`~django_x509ext.formatter.format_extension`."""
        return format_extension(self, registry=registry)


def extensions_from_certificate(certificate: x509.Certificate) -> list[Extension]:
    """Get all extensions of a certificate, in the order they appear in the certificate.

    The returned extensions borrow their data from `certificate`.
    """
    parsed = asn1crypto.x509.Certificate.load(certificate.public_bytes(Encoding.DER))
    extensions = parsed["tbs_certificate"]["extensions"]
    if isinstance(extensions, asn1crypto.core.Void):
        return []

    borrowed = [Extension(Borrowed(_load_structure(ext.dump()), certificate)) for ext in extensions]
    log.debug("Loaded %s extension(s) from certificate %X.", len(borrowed), certificate.serial_number)
    return borrowed
