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

"""pytest configuration."""

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Optional

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import ExtendedKeyUsageOID, NameOID

import pytest

from django_x509ext.tests.base.constants import NUL_DNS_NAME, NUL_EMAIL, NUL_URI


def _name(common_name: str, email: Optional[str] = None) -> x509.Name:
    attributes = [
        x509.NameAttribute(NameOID.COUNTRY_NAME, "AT"),
        x509.NameAttribute(NameOID.COMMON_NAME, common_name),
    ]
    if email is not None:
        attributes.append(x509.NameAttribute(NameOID.EMAIL_ADDRESS, email))
    return x509.Name(attributes)


def _certificate(
    subject: x509.Name,
    key: ec.EllipticCurvePrivateKey,
    issuer: Optional[x509.Name] = None,
    signing_key: Optional[ec.EllipticCurvePrivateKey] = None,
    extensions: Iterable[tuple[x509.ExtensionType, bool]] = (),
    serial: int = 0x1234,
) -> x509.Certificate:
    now = datetime.now(tz=timezone.utc).replace(microsecond=0)
    builder = (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(subject if issuer is None else issuer)
        .public_key(key.public_key())
        .serial_number(serial)
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=30))
    )
    for extension, critical in extensions:
        builder = builder.add_extension(extension, critical=critical)
    return builder.sign(key if signing_key is None else signing_key, hashes.SHA256())


@pytest.fixture(scope="session")
def ca_key() -> ec.EllipticCurvePrivateKey:
    """Private key of the certificate authority."""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def subject_key() -> ec.EllipticCurvePrivateKey:
    """Private key of end entity certificates."""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ca_certificate(ca_key: ec.EllipticCurvePrivateKey) -> x509.Certificate:
    """A self-signed certificate authority with a subject key identifier and a subjectAltName."""
    return _certificate(
        _name("Test CA"),
        ca_key,
        extensions=[
            (x509.BasicConstraints(ca=True, path_length=0), True),
            (x509.SubjectKeyIdentifier.from_public_key(ca_key.public_key()), False),
            (
                x509.SubjectAlternativeName(
                    [x509.DNSName("ca.example.com"), x509.UniformResourceIdentifier("https://ca.example.com")]
                ),
                False,
            ),
        ],
        serial=0xABCDEF,
    )


@pytest.fixture(scope="session")
def ca_certificate_without_ski(ca_key: ec.EllipticCurvePrivateKey) -> x509.Certificate:
    """A self-signed certificate authority without any extensions."""
    return _certificate(_name("Test CA without SKI"), ca_key, serial=0x42)


@pytest.fixture(scope="session")
def subject_certificate(
    subject_key: ec.EllipticCurvePrivateKey,
    ca_key: ec.EllipticCurvePrivateKey,
    ca_certificate: x509.Certificate,
) -> x509.Certificate:
    """An end entity certificate with an email address in its subject."""
    return _certificate(
        _name("example.com", email="user@example.com"),
        subject_key,
        issuer=ca_certificate.subject,
        signing_key=ca_key,
        extensions=[
            (x509.BasicConstraints(ca=False, path_length=None), True),
            (
                x509.KeyUsage(
                    digital_signature=True,
                    content_commitment=False,
                    key_encipherment=True,
                    data_encipherment=False,
                    key_agreement=False,
                    key_cert_sign=False,
                    crl_sign=False,
                    encipher_only=False,
                    decipher_only=False,
                ),
                True,
            ),
            (x509.ExtendedKeyUsage([ExtendedKeyUsageOID.SERVER_AUTH]), False),
            (x509.SubjectAlternativeName([x509.DNSName("example.com")]), False),
        ],
    )


@pytest.fixture(scope="session")
def nul_certificate(
    subject_key: ec.EllipticCurvePrivateKey,
    ca_key: ec.EllipticCurvePrivateKey,
    ca_certificate: x509.Certificate,
) -> x509.Certificate:
    """A certificate with NUL bytes embedded in the names of its subjectAltName."""
    san = x509.SubjectAlternativeName(
        [
            x509.DNSName(NUL_DNS_NAME),
            x509.RFC822Name(NUL_EMAIL),
            x509.UniformResourceIdentifier(NUL_URI),
        ]
    )
    return _certificate(
        _name("evil.example.com"),
        subject_key,
        issuer=ca_certificate.subject,
        signing_key=ca_key,
        extensions=[(san, False)],
    )
