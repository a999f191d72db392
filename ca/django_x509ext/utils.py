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

"""Reusable utility functions used throughout django-x509ext."""

import binascii
import re
from datetime import datetime, timezone as tz
from ipaddress import ip_address, ip_network
from typing import Optional

import asn1crypto.core
import asn1crypto.x509
from cryptography import x509

from django_x509ext import constants
from django_x509ext.conf import model_settings
from django_x509ext.constants import GeneralNameKind
from django_x509ext.pydantic.validators import dns_validator, email_validator

_OBJECT_SHORT_NAMES = {names[0]: oid for oid, names in constants.OBJECT_NAMES.items()}
_OBJECT_LONG_NAMES = {names[1]: oid for oid, names in constants.OBJECT_NAMES.items()}

_DECIMAL_RE = re.compile(r"[0-9]+")
_HEXADECIMAL_RE = re.compile(r"0[xX][0-9a-fA-F]+")

#: Types that can be used in ``TYPE:value`` ASN.1 values, mapped to their canonical name.
ASN1_TYPE_ALIASES = {
    "BOOL": "BOOLEAN",
    "BOOLEAN": "BOOLEAN",
    "NULL": "NULL",
    "INT": "INTEGER",
    "INTEGER": "INTEGER",
    "OID": "OBJECT",
    "OBJECT": "OBJECT",
    "UTC": "UTCTIME",
    "UTCTIME": "UTCTIME",
    "GENTIME": "GENERALIZEDTIME",
    "GENERALIZEDTIME": "GENERALIZEDTIME",
    "OCT": "OCTETSTRING",
    "OCTETSTRING": "OCTETSTRING",
    "UTF8": "UTF8String",
    "UTF8String": "UTF8String",
    "UNIV": "UNIVERSALSTRING",
    "UNIVERSALSTRING": "UNIVERSALSTRING",
    "IA5": "IA5STRING",
    "IA5STRING": "IA5STRING",
    "PRINTABLE": "PRINTABLESTRING",
    "PRINTABLESTRING": "PRINTABLESTRING",
    "VISIBLE": "VISIBLESTRING",
    "VISIBLESTRING": "VISIBLESTRING",
    "BMP": "BMPSTRING",
    "BMPSTRING": "BMPSTRING",
    "NUMERIC": "NUMERICSTRING",
    "NUMERICSTRING": "NUMERICSTRING",
}

_ASN1_STRING_TYPES: dict[str, type[asn1crypto.core.AbstractString]] = {
    "UTF8String": asn1crypto.core.UTF8String,
    "UNIVERSALSTRING": asn1crypto.core.UniversalString,
    "IA5STRING": asn1crypto.core.IA5String,
    "PRINTABLESTRING": asn1crypto.core.PrintableString,
    "VISIBLESTRING": asn1crypto.core.VisibleString,
    "BMPSTRING": asn1crypto.core.BMPString,
    "NUMERICSTRING": asn1crypto.core.NumericString,
}


def add_colons(value: str, pad: str = "0") -> str:
    """Add colons after every second digit.

    >>> add_colons('teststring')
    'te:st:st:ri:ng'

    Parameters
    ----------
    value : str
        The string to add colons to
    pad : str, optional
        If not an empty string, pad the string so that the last element always has two characters. The default
        is ``"0"``.
    """
    if len(value) % 2 == 1 and pad:
        value = f"{pad}{value}"

    return ":".join([value[i : i + 2] for i in range(0, len(value), 2)])


def bytes_to_hex(value: bytes) -> str:
    """Convert a bytes array to hex.

    >>> bytes_to_hex(b'test')
    '74:65:73:74'
    """
    return add_colons(binascii.hexlify(value).upper().decode("utf-8"))


def hex_to_bytes(value: str) -> bytes:
    """Convert a hex number to bytes.

    This should be the inverse of :py:func:`~django_x509ext.utils.bytes_to_hex`, but colons are optional:

    >>> hex_to_bytes('74:65:73:74')
    b'test'
    >>> hex_to_bytes('74657374')
    b'test'
    """
    try:
        return binascii.unhexlify(value.replace(":", ""))
    except binascii.Error as ex:
        raise ValueError(f"{value}: Invalid hex string: {ex}") from ex


def int_to_bytes(value: int) -> bytes:
    """Convert a non-negative integer to its shortest big-endian representation.

    >>> int_to_bytes(0x0102)
    b'\\x01\\x02'
    >>> int_to_bytes(0)
    b'\\x00'
    """
    return value.to_bytes(max(1, (value.bit_length() + 7) // 8), "big")


def parse_int(value: str) -> int:
    """Parse an integer in decimal or (with a ``0x`` prefix) hexadecimal notation.

    >>> parse_int("10")
    10
    >>> parse_int("0x10")
    16
    >>> parse_int("-0x10")
    -16
    """
    negative = value.startswith("-")
    if negative:
        value = value[1:]
    if _HEXADECIMAL_RE.fullmatch(value):
        parsed = int(value[2:], 16)
    elif _DECIMAL_RE.fullmatch(value):
        parsed = int(value, 10)
    else:
        raise ValueError(f"{value}: Invalid integer value")
    return -parsed if negative else parsed


def parse_bool(value: str) -> bool:
    """Parse a boolean the way X509V3 configuration files do.

    >>> parse_bool("TRUE")
    True
    >>> parse_bool("no")
    False
    """
    if value in constants.BOOLEAN_TRUE:
        return True
    if value in constants.BOOLEAN_FALSE:
        return False
    raise ValueError(f"{value}: Invalid boolean value")


def decode_text(data: bytes) -> str:
    """Convert raw bytes from an encoded value to text, using the configured error handler.

    NUL bytes are preserved:

    >>> decode_text(b"a\\x00b")
    'a\\x00b'
    """
    return data.decode("utf-8", errors=model_settings.X509EXT_TEXT_ERRORS)


def _extra_oids() -> dict[x509.ObjectIdentifier, str]:
    return {x509.ObjectIdentifier(k): v for k, v in model_settings.X509EXT_EXTRA_OIDS.items()}


def oid_from_text(value: str) -> x509.ObjectIdentifier:
    """Get an object identifier from a short name, long name or dotted string.

    >>> oid_from_text("serverAuth")
    <ObjectIdentifier(oid=1.3.6.1.5.5.7.3.1, name=serverAuth)>
    >>> oid_from_text("CA Issuers")
    <ObjectIdentifier(oid=1.3.6.1.5.5.7.48.2, name=caIssuers)>
    >>> oid_from_text("1.2.3")
    <ObjectIdentifier(oid=1.2.3, name=Unknown OID)>
    """
    if value in _OBJECT_SHORT_NAMES:
        return _OBJECT_SHORT_NAMES[value]
    if value in _OBJECT_LONG_NAMES:
        return _OBJECT_LONG_NAMES[value]
    for oid, short_name in _extra_oids().items():
        if short_name == value:
            return oid

    try:
        return x509.ObjectIdentifier(value)
    except ValueError as ex:
        raise ValueError(f"{value}: Unknown object name") from ex


def oid_to_text(oid: x509.ObjectIdentifier) -> str:
    """Get the long name of an object identifier, falling back to its dotted string.

    >>> oid_to_text(x509.ObjectIdentifier("1.3.6.1.5.5.7.3.1"))
    'TLS Web Server Authentication'
    >>> oid_to_text(x509.ObjectIdentifier("1.2.3"))
    '1.2.3'
    """
    if oid in constants.OBJECT_NAMES:
        return constants.OBJECT_NAMES[oid][1]
    return _extra_oids().get(oid, oid.dotted_string)


def oid_to_short_name(oid: x509.ObjectIdentifier) -> Optional[str]:
    """Get the short name of an object identifier, or ``None`` if it has no name."""
    if oid in constants.OBJECT_NAMES:
        return constants.OBJECT_NAMES[oid][0]
    return _extra_oids().get(oid)


def encode_asn1_value(value: str) -> bytes:
    """Encode a ``TYPE:value`` string to DER.

    Only primitive types are supported, structured types require a configuration database.

    >>> encode_asn1_value("UTF8:example")
    b'\\x0c\\x07example'
    >>> encode_asn1_value("INT:0x10")
    b'\\x02\\x01\\x10'
    """
    try:
        asn1_type, asn1_value = value.split(":", 1)
    except ValueError:
        asn1_type, asn1_value = value, ""
    asn1_type = asn1_type.strip(constants.WHITESPACE)

    if asn1_type not in ASN1_TYPE_ALIASES:
        raise ValueError(f"Unsupported ASN.1 type: {asn1_type}")
    canonical_type = ASN1_TYPE_ALIASES[asn1_type]

    if canonical_type in _ASN1_STRING_TYPES:
        return _ASN1_STRING_TYPES[canonical_type](asn1_value).dump()
    if canonical_type == "BOOLEAN":
        return asn1crypto.core.Boolean(parse_bool(asn1_value)).dump()
    if canonical_type == "NULL":
        if asn1_value:
            raise ValueError("Invalid NULL specification: Value must not be present")
        return asn1crypto.core.Null().dump()
    if canonical_type == "INTEGER":
        return asn1crypto.core.Integer(parse_int(asn1_value)).dump()
    if canonical_type == "OBJECT":
        return asn1crypto.core.ObjectIdentifier(oid_from_text(asn1_value).dotted_string).dump()
    if canonical_type == "UTCTIME":
        parsed_datetime = datetime.strptime(asn1_value, "%y%m%d%H%M%SZ").replace(tzinfo=tz.utc)
        return asn1crypto.core.UTCTime(parsed_datetime).dump()
    if canonical_type == "GENERALIZEDTIME":
        parsed_datetime = datetime.strptime(asn1_value, "%Y%m%d%H%M%SZ").replace(tzinfo=tz.utc)
        return asn1crypto.core.GeneralizedTime(parsed_datetime).dump()

    # Only OCTETSTRING is left, the value is used verbatim.
    return asn1crypto.core.OctetString(asn1_value.encode("utf-8")).dump()


def parse_other_name(name: str) -> x509.OtherName:
    """Parse an otherName in the ``OID;TYPE:value`` format.

    >>> parse_other_name("2.5.4.3;UTF8:example.com")
    <OtherName(type_id=<ObjectIdentifier(oid=2.5.4.3, name=commonName)>, value=b'\\x0c\\x0bexample.com')>
    """
    try:
        oid_text, asn1_value = name.split(";", 1)
        oid = oid_from_text(oid_text.strip(constants.WHITESPACE))
    except ValueError as ex:
        raise ValueError(f"Incorrect otherName format: {name}") from ex
    return x509.OtherName(oid, encode_asn1_value(asn1_value))


def name_matches(name: str, expected: str) -> bool:
    """Test if `name` is `expected`, optionally followed by a dot and a suffix (e.g. ``DNS.1``)."""
    if not name.startswith(expected):
        return False
    return len(name) == len(expected) or name[len(expected)] == "."


def parse_general_name(name: str, value: Optional[str], name_constraint: bool = False) -> x509.GeneralName:
    """Parse a general name from its type name and value.

    Type names are case-sensitive and may carry a suffix so that a name can occur multiple times in a
    configuration section:

    >>> parse_general_name("DNS", "example.com")
    <DNSName(value='example.com')>
    >>> parse_general_name("DNS.2", "exämple.com")
    <DNSName(value='xn--exmple-cua.com')>
    >>> parse_general_name("IP", "127.0.0.1")
    <IPAddress(value=127.0.0.1)>
    >>> parse_general_name("IP", "10.0.0.0/255.0.0.0", name_constraint=True)
    <IPAddress(value=10.0.0.0/8)>

    ASCII values are never modified, so embedded control characters are encoded as given.
    """
    if value is None:
        raise ValueError(f"{name}: Missing value")

    if name_matches(name, "email"):
        if not value.isascii():
            value = email_validator(value)
        return x509.RFC822Name(value)
    if name_matches(name, "URI"):
        return x509.UniformResourceIdentifier(value)
    if name_matches(name, "DNS"):
        if not value.isascii():
            value = dns_validator(value)
        return x509.DNSName(value)
    if name_matches(name, "RID"):
        return x509.RegisteredID(oid_from_text(value))
    if name_matches(name, "IP"):
        if name_constraint:
            return x509.IPAddress(ip_network(value))
        return x509.IPAddress(ip_address(value))
    if name_matches(name, "otherName"):
        return parse_other_name(value)
    if name_matches(name, "dirName"):
        raise ValueError(f"{name}:{value}: Directory names require a configuration section.")

    raise ValueError(f"{name}: Unsupported general name type")


def format_ip_address(data: bytes) -> str:
    """Format the octets of an IPv4 or IPv6 address.

    >>> format_ip_address(b"\\x7f\\x00\\x00\\x01")
    '127.0.0.1'
    >>> format_ip_address(bytes.fromhex("20010db8000000000000000000000001"))
    '2001:DB8:0:0:0:0:0:1'
    """
    if len(data) == 4:
        return ".".join(str(octet) for octet in data)
    if len(data) == 16:
        return ":".join(f"{int.from_bytes(data[i : i + 2], 'big'):X}" for i in range(0, 16, 2))
    return "<invalid>"


def _escape_oneline(value: bytes) -> str:
    return "".join(chr(byte) if 0x20 <= byte <= 0x7E else f"\\x{byte:02X}" for byte in value)


def format_name_oneline(name: asn1crypto.x509.Name) -> str:
    """Format a distinguished name as a single line, e.g. ``/C=AT/CN=example.com``.

    Bytes outside the printable ASCII range are escaped as ``\\xHH``.
    """
    parts = []
    for rdn in name.chosen:
        for attribute in rdn:
            oid = x509.ObjectIdentifier(attribute["type"].dotted)
            attribute_name = oid_to_short_name(oid) or oid.dotted_string
            native = attribute["value"].native
            if isinstance(native, bytes):
                value = _escape_oneline(native)
            else:
                value = _escape_oneline(str(native).encode("utf-8"))
            parts.append(f"/{attribute_name}={value}")
    return "".join(parts)


def format_general_name(name: asn1crypto.x509.GeneralName) -> str:
    """Format a single general name.

    >>> format_general_name(asn1crypto.x509.GeneralName(name="dns_name", value="example.com"))
    'DNS:example.com'
    >>> format_general_name(asn1crypto.x509.GeneralName(name="ip_address", value="127.0.0.1"))
    'IP Address:127.0.0.1'
    """
    kind = GeneralNameKind(name.name)
    value = name.chosen

    if kind == GeneralNameKind.EMAIL:
        return f"email:{decode_text(value.contents)}"
    if kind == GeneralNameKind.DNS:
        return f"DNS:{decode_text(value.contents)}"
    if kind == GeneralNameKind.URI:
        return f"URI:{decode_text(value.contents)}"
    if kind == GeneralNameKind.IP_ADDRESS:
        return f"IP Address:{format_ip_address(value.contents)}"
    if kind == GeneralNameKind.REGISTERED_ID:
        return f"Registered ID:{oid_to_text(x509.ObjectIdentifier(value.dotted))}"
    if kind == GeneralNameKind.DIRECTORY_NAME:
        return f"DirName:{format_name_oneline(value)}"
    if kind == GeneralNameKind.OTHER_NAME:
        return "othername:<unsupported>"
    if kind == GeneralNameKind.X400_ADDRESS:
        return "X400Name:<unsupported>"
    return "EdiPartyName:<unsupported>"
