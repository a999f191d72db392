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

"""Registry of known extensions.

The registry maps short names to object identifiers and object identifiers to an
:py:class:`~django_x509ext.registry.ExtensionMethod`, which describes how a value is parsed, which ASN.1
structure the DER payload has and how it is printed. Registries are read-only once created. Functions that
need a registry accept one as argument and use :py:func:`~django_x509ext.registry.get_default_registry`
otherwise::

    >>> registry = get_default_registry()
    >>> registry.get_oid("basicConstraints")
    <ObjectIdentifier(oid=2.5.29.19, name=basicConstraints)>
    >>> registry.get_short_name(x509.ObjectIdentifier("2.5.29.19"))
    'basicConstraints'
"""

import functools
from collections.abc import Iterable, Iterator
from types import MappingProxyType
from typing import Optional

from pydantic import BaseModel, ConfigDict

import asn1crypto.core
import asn1crypto.x509
from cryptography import x509
from cryptography.x509.oid import ExtensionOID

from django_x509ext import asn1, constants
from django_x509ext.conf import model_settings
from django_x509ext.extensions import parse, text
from django_x509ext.typehints import ExtensionParser, ExtensionPrinter


class ExtensionMethod(BaseModel):
    """Description of a single extension type.

    An extension without a `parser` cannot be created from a value (but from a ``DER:`` value). An extension
    without a `spec` or `printer` cannot be formatted.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    oid: x509.ObjectIdentifier
    short_name: str
    long_name: str
    spec: Optional[type[asn1crypto.core.Asn1Value]] = None
    parser: Optional[ExtensionParser] = None
    printer: Optional[ExtensionPrinter] = None


class ExtensionRegistry:
    """Read-only registry of extension methods."""

    def __init__(self, methods: Iterable[ExtensionMethod]) -> None:
        by_oid = {}
        by_name = {}
        for method in methods:
            if method.oid in by_oid:
                raise ValueError(f"{method.oid.dotted_string}: Extension is registered more than once.")
            if method.short_name in by_name:
                raise ValueError(f"{method.short_name}: Short name is registered more than once.")
            by_oid[method.oid] = method
            by_name[method.short_name] = method.oid

        self._methods = MappingProxyType(by_oid)
        self._short_names = MappingProxyType(by_name)
        self._long_names = MappingProxyType({method.long_name: method.oid for method in by_oid.values()})

    def __contains__(self, oid: object) -> bool:
        return oid in self._methods

    def __iter__(self) -> Iterator[ExtensionMethod]:
        return iter(self._methods.values())

    def __len__(self) -> int:
        return len(self._methods)

    def get_method(self, oid: x509.ObjectIdentifier) -> Optional[ExtensionMethod]:
        """Get the extension method for the given OID."""
        return self._methods.get(oid)

    def get_oid(self, short_name: str) -> Optional[x509.ObjectIdentifier]:
        """Get the OID for a short name, e.g. ``"basicConstraints"``."""
        return self._short_names.get(short_name)

    def get_short_name(self, oid: x509.ObjectIdentifier) -> Optional[str]:
        """Get the short name for an OID, or ``None`` if the OID is not registered."""
        method = self._methods.get(oid)
        if method is None:
            return None
        return method.short_name

    def get_long_name(self, oid: x509.ObjectIdentifier) -> Optional[str]:
        """Get the long name for an OID, or ``None`` if the OID is not registered."""
        method = self._methods.get(oid)
        if method is None:
            return None
        return method.long_name

    def resolve(self, name: str) -> Optional[x509.ObjectIdentifier]:
        """Resolve a short name, long name or dotted string to an OID.

        >>> get_default_registry().resolve("X509v3 Key Usage")
        <ObjectIdentifier(oid=2.5.29.15, name=keyUsage)>
        >>> get_default_registry().resolve("1.2.3")
        <ObjectIdentifier(oid=1.2.3, name=Unknown OID)>
        >>> get_default_registry().resolve("wrong") is None
        True
        """
        if name in self._short_names:
            return self._short_names[name]
        if name in self._long_names:
            return self._long_names[name]
        try:
            return x509.ObjectIdentifier(name)
        except ValueError:
            return None


def _method(
    oid: x509.ObjectIdentifier,
    spec: Optional[type[asn1crypto.core.Asn1Value]] = None,
    parser: Optional[ExtensionParser] = None,
    printer: Optional[ExtensionPrinter] = None,
) -> ExtensionMethod:
    short_name, long_name = constants.EXTENSION_NAMES[oid]
    return ExtensionMethod(
        oid=oid, short_name=short_name, long_name=long_name, spec=spec, parser=parser, printer=printer
    )


# pylint: disable=protected-access  # functions are private to keep the public interface in the registry
BUILTIN_METHODS: tuple[ExtensionMethod, ...] = (
    _method(
        ExtensionOID.AUTHORITY_INFORMATION_ACCESS,
        asn1crypto.x509.AuthorityInfoAccessSyntax,
        parse._parse_authority_information_access,
        text._access_description_as_text,
    ),
    _method(
        ExtensionOID.AUTHORITY_KEY_IDENTIFIER,
        asn1crypto.x509.AuthorityKeyIdentifier,
        parse._parse_authority_key_identifier,
        text._authority_key_identifier_as_text,
    ),
    _method(
        ExtensionOID.BASIC_CONSTRAINTS,
        asn1crypto.x509.BasicConstraints,
        parse._parse_basic_constraints,
        text._basic_constraints_as_text,
    ),
    _method(
        ExtensionOID.CERTIFICATE_POLICIES,
        asn1crypto.x509.CertificatePolicies,
        parse._parse_certificate_policies,
        text._certificate_policies_as_text,
    ),
    _method(
        ExtensionOID.CRL_DISTRIBUTION_POINTS,
        asn1crypto.x509.CRLDistributionPoints,
        parse._parse_crl_distribution_points,
        text._distribution_points_as_text,
    ),
    _method(
        ExtensionOID.CRL_NUMBER,
        asn1crypto.core.Integer,
        parse._parse_crl_number,
        text._integer_as_text,
    ),
    _method(
        x509.ObjectIdentifier("2.5.29.21"),
        asn1.CRLReasonCode,
        parse._parse_crl_reason,
        text._crl_reason_as_text,
    ),
    _method(
        ExtensionOID.DELTA_CRL_INDICATOR,
        asn1crypto.core.Integer,
        parse._parse_delta_crl_indicator,
        text._integer_as_text,
    ),
    _method(
        ExtensionOID.EXTENDED_KEY_USAGE,
        asn1crypto.x509.ExtKeyUsageSyntax,
        parse._parse_extended_key_usage,
        text._extended_key_usage_as_text,
    ),
    _method(
        ExtensionOID.FRESHEST_CRL,
        asn1crypto.x509.CRLDistributionPoints,
        parse._parse_freshest_crl,
        text._distribution_points_as_text,
    ),
    _method(
        ExtensionOID.INHIBIT_ANY_POLICY,
        asn1crypto.core.Integer,
        parse._parse_inhibit_any_policy,
        text._integer_as_text,
    ),
    _method(
        x509.ObjectIdentifier("2.5.29.24"),
        asn1crypto.core.GeneralizedTime,
        parse._parse_invalidity_date,
        text._invalidity_date_as_text,
    ),
    _method(
        ExtensionOID.ISSUER_ALTERNATIVE_NAME,
        asn1crypto.x509.GeneralNames,
        parse._parse_issuer_alternative_name,
        text._general_names_as_text,
    ),
    _method(
        ExtensionOID.KEY_USAGE,
        asn1crypto.x509.KeyUsage,
        parse._parse_key_usage,
        text._key_usage_as_text,
    ),
    _method(
        ExtensionOID.NAME_CONSTRAINTS,
        asn1crypto.x509.NameConstraints,
        parse._parse_name_constraints,
        text._name_constraints_as_text,
    ),
    _method(
        x509.ObjectIdentifier("2.16.840.1.113730.1.1"),
        asn1.NetscapeCertificateType,
        parse._parse_netscape_certificate_type,
        text._netscape_certificate_type_as_text,
    ),
    _method(
        x509.ObjectIdentifier("2.16.840.1.113730.1.13"),
        asn1crypto.core.IA5String,
        parse._parse_netscape_comment,
        text._ia5_string_as_text,
    ),
    _method(
        ExtensionOID.OCSP_NO_CHECK,
        asn1crypto.core.Null,
        parse._parse_ocsp_no_check,
        text._null_as_text,
    ),
    _method(
        ExtensionOID.POLICY_CONSTRAINTS,
        asn1crypto.x509.PolicyConstraints,
        parse._parse_policy_constraints,
        text._policy_constraints_as_text,
    ),
    _method(
        ExtensionOID.POLICY_MAPPINGS,
        asn1.PolicyMappings,
        parse._parse_policy_mappings,
        text._policy_mappings_as_text,
    ),
    _method(
        ExtensionOID.PRECERT_POISON,
        asn1crypto.core.Null,
        parse._parse_precert_poison,
        text._precert_poison_as_text,
    ),
    _method(
        ExtensionOID.SUBJECT_ALTERNATIVE_NAME,
        asn1crypto.x509.GeneralNames,
        parse._parse_subject_alternative_name,
        text._general_names_as_text,
    ),
    _method(
        ExtensionOID.SUBJECT_INFORMATION_ACCESS,
        asn1crypto.x509.SubjectInfoAccessSyntax,
        parse._parse_subject_information_access,
        text._access_description_as_text,
    ),
    _method(
        ExtensionOID.SUBJECT_KEY_IDENTIFIER,
        asn1crypto.core.OctetString,
        parse._parse_subject_key_identifier,
        text._subject_key_identifier_as_text,
    ),
    _method(
        ExtensionOID.TLS_FEATURE,
        asn1.TLSFeatures,
        parse._parse_tls_feature,
        text._tls_feature_as_text,
    ),
    # Known names that can only be used with DER: or ASN1: values and are not printed
    _method(ExtensionOID.PRECERT_SIGNED_CERTIFICATE_TIMESTAMPS),
    _method(ExtensionOID.SUBJECT_DIRECTORY_ATTRIBUTES),
)
# pylint: enable=protected-access


@functools.lru_cache(maxsize=8)
def _build_registry(extra_oids: tuple[tuple[str, str], ...]) -> ExtensionRegistry:
    methods = list(BUILTIN_METHODS)
    for dotted_string, short_name in extra_oids:
        oid = x509.ObjectIdentifier(dotted_string)
        methods.append(ExtensionMethod(oid=oid, short_name=short_name, long_name=short_name))
    return ExtensionRegistry(methods)


def get_default_registry() -> ExtensionRegistry:
    """Get the default registry, including object identifiers configured in ``X509EXT_EXTRA_OIDS``."""
    return _build_registry(tuple(sorted(model_settings.X509EXT_EXTRA_OIDS.items())))
