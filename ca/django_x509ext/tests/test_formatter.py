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

"""Test :py:func:`django_x509ext.formatter.format_extension`."""

import asn1crypto.core
from cryptography import x509
from cryptography.x509.oid import ExtensionOID, NameOID

import pytest
from pytest_django.fixtures import SettingsWrapper

from django_x509ext.encoder import encode
from django_x509ext.exceptions import MalformedPayload, NoPrinterAvailable
from django_x509ext.extension import Extension, extensions_from_certificate
from django_x509ext.formatter import format_extension
from django_x509ext.registry import ExtensionMethod, ExtensionRegistry
from django_x509ext.tests.base.constants import NUL_DNS_NAME, NUL_EMAIL, NUL_URI

#: A subjectAltName with a dNSName containing a byte that is not valid UTF-8.
INVALID_UTF8_SAN = b"\x30\x05\x82\x03a\xffb"


def _san(payload: bytes) -> Extension:
    return Extension.from_values(ExtensionOID.SUBJECT_ALTERNATIVE_NAME, False, payload)


def _get_san(certificate: x509.Certificate) -> Extension:
    for extension in extensions_from_certificate(certificate):
        if extension.oid == ExtensionOID.SUBJECT_ALTERNATIVE_NAME:
            return extension
    raise AssertionError("Certificate has no subjectAltName.")


def test_subject_alternative_name_order() -> None:
    """Test that names are printed in order and separated by a comma."""
    extension = encode("subjectAltName", False, "URI:https://example.com,email:a@example.com,DNS:example.com")
    assert format_extension(extension) == "URI:https://example.com, email:a@example.com, DNS:example.com"


def test_subject_alternative_name_single_entry() -> None:
    """Test that there is no separator after a single name."""
    assert format_extension(encode("subjectAltName", False, "DNS:example.com")) == "DNS:example.com"


def test_nul_bytes_in_certificate(nul_certificate: x509.Certificate) -> None:
    """Test that names with embedded NUL bytes from a certificate are not truncated."""
    text = _get_san(nul_certificate).format()
    assert text == f"DNS:{NUL_DNS_NAME}, email:{NUL_EMAIL}, URI:{NUL_URI}"
    assert "\x00" in text


def test_nul_bytes_in_encoded_value() -> None:
    """Test NUL bytes in a value passed to the encoder."""
    extension = encode("subjectAltName", False, "DNS:a\x00b.example.com,email:c\x00d@example.com")
    assert extension.format() == "DNS:a\x00b.example.com, email:c\x00d@example.com"


def test_other_general_names() -> None:
    """Test general names that are not printed byte by byte."""
    name = x509.Name(
        [x509.NameAttribute(NameOID.COUNTRY_NAME, "AT"), x509.NameAttribute(NameOID.COMMON_NAME, "ex\x01")]
    )
    san = x509.SubjectAlternativeName(
        [
            x509.DNSName("example.com"),
            x509.DirectoryName(name),
            x509.RegisteredID(x509.ObjectIdentifier("1.2.3")),
            x509.OtherName(x509.ObjectIdentifier("1.2.3"), b"\x05\x00"),
        ]
    )
    assert _san(san.public_bytes()).format() == (
        "DNS:example.com, DirName:/C=AT/CN=ex\\x01, Registered ID:1.2.3, othername:<unsupported>"
    )


def test_ipv6_address() -> None:
    """Test that IPv6 addresses are printed without a trailing newline."""
    extension = encode("subjectAltName", False, "IP:::1,DNS:example.com")
    assert extension.format() == "IP Address:0:0:0:0:0:0:0:1, DNS:example.com"


def test_invalid_utf8_default() -> None:
    """Test that bytes that are not valid UTF-8 are escaped by default."""
    assert _san(INVALID_UTF8_SAN).format() == "DNS:a\\xffb"


@pytest.mark.parametrize(
    "errors,expected", (("replace", "DNS:a\ufffdb"), ("surrogateescape", "DNS:a\udcffb"))
)
def test_invalid_utf8_error_handler(settings: SettingsWrapper, errors: str, expected: str) -> None:
    """Test configuring the error handler."""
    settings.X509EXT_TEXT_ERRORS = errors
    assert _san(INVALID_UTF8_SAN).format() == expected


def test_invalid_utf8_strict(settings: SettingsWrapper) -> None:
    """Test that invalid UTF-8 is an error with the strict error handler."""
    settings.X509EXT_TEXT_ERRORS = "strict"
    with pytest.raises(MalformedPayload, match=r"^subjectAltName: Value cannot be converted to text: "):
        _san(INVALID_UTF8_SAN).format()

    # Printers for other extensions raise the same error.
    extension = Extension.from_values(
        x509.ObjectIdentifier("2.16.840.1.113730.1.13"), False, b"\x16\x03a\xffb"
    )
    with pytest.raises(MalformedPayload, match=r"^nsComment: Cannot decode value: "):
        extension.format()


@pytest.mark.parametrize(
    "payload",
    (
        b"",  # no data at all
        b"\x30\x03\x82",  # truncated
        b"\x04\x00",  # not a sequence
        b"\x30\x03\x82\x05a",  # inner element is truncated
    ),
)
def test_malformed_subject_alternative_name(payload: bytes) -> None:
    """Test payloads that cannot be decoded."""
    with pytest.raises(MalformedPayload, match=r"^subjectAltName: Cannot decode value: "):
        _san(payload).format()


def test_trailing_data(settings: SettingsWrapper) -> None:
    """Test trailing data after the payload."""
    payload = encode("subjectAltName", False, "DNS:example.com").raw_data() + b"\x00"
    with pytest.raises(MalformedPayload, match=r"^subjectAltName: Cannot decode value: "):
        _san(payload).format()

    settings.X509EXT_STRICT_DER = False
    assert _san(payload).format() == "DNS:example.com"


def test_malformed_generic_payload() -> None:
    """Test a payload that does not decode with the template of the extension."""
    extension = Extension.from_values(ExtensionOID.BASIC_CONSTRAINTS, False, b"\x04\x00")
    with pytest.raises(MalformedPayload, match=r"^basicConstraints: Cannot decode value: "):
        extension.format()


@pytest.mark.parametrize(
    "oid",
    (
        x509.ObjectIdentifier("1.2.3.4"),  # unknown
        ExtensionOID.PRECERT_SIGNED_CERTIFICATE_TIMESTAMPS,  # known, but no printer
        x509.ObjectIdentifier("1.3.6.1.4.1.99999.1"),  # configured in X509EXT_EXTRA_OIDS
    ),
)
def test_no_printer_available(oid: x509.ObjectIdentifier) -> None:
    """Test extensions that cannot be formatted."""
    extension = Extension.from_values(oid, False, b"\x05\x00")
    with pytest.raises(NoPrinterAvailable, match=r": No printer available for extension\.$"):
        extension.format()

    # The exception is also a LookupError
    with pytest.raises(LookupError):
        str(extension)


def test_custom_registry() -> None:
    """Test formatting with a registry passed as argument."""
    oid = x509.ObjectIdentifier("1.2.3.4")
    registry = ExtensionRegistry(
        [
            ExtensionMethod(
                oid=oid,
                short_name="fakeExtension",
                long_name="Fake Extension",
                spec=asn1crypto.core.UTF8String,
                printer=lambda value: value.native.upper(),
            )
        ]
    )
    extension = Extension.from_values(oid, False, asn1crypto.core.UTF8String("hello").dump())
    assert format_extension(extension, registry=registry) == "HELLO"
    assert extension.format(registry=registry) == "HELLO"

    # The subjectAltName is not in the custom registry
    with pytest.raises(NoPrinterAvailable):
        format_extension(encode("subjectAltName", False, "DNS:example.com"), registry=registry)
