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

"""``django_x509ext.extensions.parse`` contains functions to parse extension values.

Values use the syntax of extension sections in OpenSSL configuration files. No configuration database is
available, so any value referring to a section (``@section``, ``dirName:section``, ...) is rejected.
"""

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Optional

import asn1crypto.core
from cryptography import x509
from cryptography.x509.oid import NameOID

from django_x509ext import asn1, constants
from django_x509ext.constants import CRITICAL_PREFIX, WHITESPACE
from django_x509ext.exceptions import InvalidValueSyntax, UnknownExtensionType
from django_x509ext.extensions.utils import parse_value_list
from django_x509ext.typehints import ValueList
from django_x509ext.utils import (
    encode_asn1_value,
    hex_to_bytes,
    name_matches,
    oid_from_text,
    parse_bool,
    parse_general_name,
    parse_int,
)

if TYPE_CHECKING:
    from django_x509ext.registry import ExtensionRegistry

log = logging.getLogger(__name__)

_KEY_USAGE_POSITIONS = {
    name: position for position, names in enumerate(constants.KEY_USAGE_BITS) for name in names
}
_NS_CERT_TYPE_NAMES = {
    name: short_name
    for short_name, long_name in constants.NS_CERT_TYPE_BITS
    for name in (short_name, long_name)
}
_CRL_REASON_CODES = {name: code for code, names in constants.CRL_REASON_NAMES.items() for name in names}


class ValueContext:
    """Certificates that extension values may refer to.

    The `subject` is the certificate the extension is created for, the `issuer` is the certificate of the
    authority that signs it. Both are only read.
    """

    def __init__(
        self, subject: Optional[x509.Certificate] = None, issuer: Optional[x509.Certificate] = None
    ) -> None:
        self.subject = subject
        self.issuer = issuer

    def __repr__(self) -> str:
        return f"<ValueContext: subject={self.subject is not None}, issuer={self.issuer is not None}>"

    def get_subject(self, purpose: str) -> x509.Certificate:
        """Get the subject certificate, raise ``ValueError`` if it is not available."""
        if self.subject is None:
            raise ValueError(f"{purpose} requires a subject certificate.")
        return self.subject

    def get_issuer(self, purpose: str) -> x509.Certificate:
        """Get the issuer certificate, raise ``ValueError`` if it is not available."""
        if self.issuer is None:
            raise ValueError(f"{purpose} requires an issuer certificate.")
        return self.issuer


def _required(name: str, value: Optional[str]) -> str:
    if value is None:
        raise ValueError(f"{name}: Missing value")
    return value


def _not_empty(value: str) -> str:
    if not value:
        raise ValueError("Value must not be empty.")
    return value


def _value_list(value: str) -> ValueList:
    if value.startswith("@"):
        raise ValueError(f"{value}: Sections require a configuration database.")
    return parse_value_list(value)


def _copy_email(context: ValueContext) -> list[x509.GeneralName]:
    subject = context.get_subject("email:copy")
    return [
        x509.RFC822Name(attr.value)  # type: ignore[arg-type]  # email addresses are always str
        for attr in subject.subject.get_attributes_for_oid(NameOID.EMAIL_ADDRESS)
    ]


def _copy_issuer(context: ValueContext) -> list[x509.GeneralName]:
    issuer = context.get_issuer("issuer:copy")
    try:
        ext = issuer.extensions.get_extension_for_class(x509.SubjectAlternativeName)
    except x509.ExtensionNotFound:
        log.debug("Issuer has no subjectAltName extension, nothing to copy.")
        return []
    return list(ext.value)


def _parse_general_names(
    value: str, context: ValueContext, issuer_alt_name: bool = False
) -> list[x509.GeneralName]:
    names: list[x509.GeneralName] = []
    for name, item in _value_list(value):
        if issuer_alt_name and name == "issuer" and item == "copy":
            names += _copy_issuer(context)
        elif not issuer_alt_name and name_matches(name, "email") and item in ("copy", "move"):
            if item == "move":
                raise ValueError("email:move cannot be used, the subject certificate is read-only.")
            names += _copy_email(context)
        else:
            names.append(parse_general_name(name, item))
    return names


def _parse_authority_information_access(
    value: str, context: ValueContext
) -> x509.AuthorityInformationAccess:
    return x509.AuthorityInformationAccess(_parse_access_descriptions(value))


def _parse_access_descriptions(value: str) -> list[x509.AccessDescription]:
    descriptions = []
    for name, item in _value_list(value):
        if ";" not in name:
            raise ValueError(f"{name}: Invalid syntax, expected METHOD;TYPE:value.")
        method, name_type = name.split(";", 1)
        access_method = oid_from_text(method.strip(WHITESPACE))
        descriptions.append(x509.AccessDescription(access_method, parse_general_name(name_type, item)))
    return descriptions


def _parse_authority_key_identifier(value: str, context: ValueContext) -> x509.AuthorityKeyIdentifier:
    keyid = issuer_option = 0
    for name, item in _value_list(value):
        if name == "keyid":
            keyid = 2 if item == "always" else 1
        elif name == "issuer":
            issuer_option = 2 if item == "always" else 1
        else:
            raise ValueError(f"{name}: Unknown option.")

    issuer = context.get_issuer("authorityKeyIdentifier")

    key_identifier = None
    if keyid:
        try:
            ski = issuer.extensions.get_extension_for_class(x509.SubjectKeyIdentifier)
            key_identifier = ski.value.digest
        except x509.ExtensionNotFound as ex:
            if keyid == 2:
                raise ValueError("Unable to get key identifier of the issuer.") from ex

    authority_cert_issuer = authority_cert_serial_number = None
    if (issuer_option and key_identifier is None) or issuer_option == 2:
        authority_cert_issuer = [x509.DirectoryName(issuer.issuer)]
        authority_cert_serial_number = issuer.serial_number

    return x509.AuthorityKeyIdentifier(
        key_identifier=key_identifier,
        authority_cert_issuer=authority_cert_issuer,
        authority_cert_serial_number=authority_cert_serial_number,
    )


def _parse_basic_constraints(value: str, context: ValueContext) -> x509.BasicConstraints:
    ca = False
    path_length = None
    for name, item in _value_list(value):
        if name == "CA":
            ca = parse_bool(_required(name, item))
        elif name == "pathlen":
            path_length = parse_int(_required(name, item))
        else:
            raise ValueError(f"{name}: Invalid name.")
    return x509.BasicConstraints(ca=ca, path_length=path_length)


def _parse_certificate_policies(value: str, context: ValueContext) -> x509.CertificatePolicies:
    policies = []
    for name, item in parse_value_list(value):
        if name == "ia5org":  # only changes the encoding of user notices, which cannot be given here
            continue
        if name.startswith("@"):
            raise ValueError(f"{name}: Policy sections require a configuration database.")
        if item is not None:
            raise ValueError(f"{name}:{item}: Invalid policy identifier.")
        policies.append(x509.PolicyInformation(oid_from_text(name), policy_qualifiers=None))
    return x509.CertificatePolicies(policies)


def _parse_distribution_points(value: str) -> list[x509.DistributionPoint]:
    points = []
    for name, item in _value_list(value):
        if item is None:
            raise ValueError(f"{name}: Distribution point sections require a configuration database.")
        points.append(
            x509.DistributionPoint(
                full_name=[parse_general_name(name, item)], relative_name=None, reasons=None, crl_issuer=None
            )
        )
    return points


def _parse_crl_number(value: str, context: ValueContext) -> x509.CRLNumber:
    return x509.CRLNumber(parse_int(value.strip(WHITESPACE)))


def _parse_crl_reason(value: str, context: ValueContext) -> x509.CRLReason:
    value = value.strip(WHITESPACE)
    if value not in _CRL_REASON_CODES:
        raise ValueError(f"{value}: Unknown reason code.")
    return x509.CRLReason(constants.CRL_REASON_FLAGS[_CRL_REASON_CODES[value]])


def _parse_delta_crl_indicator(value: str, context: ValueContext) -> x509.DeltaCRLIndicator:
    return x509.DeltaCRLIndicator(parse_int(value.strip(WHITESPACE)))


def _parse_extended_key_usage(value: str, context: ValueContext) -> x509.ExtendedKeyUsage:
    return x509.ExtendedKeyUsage(
        [oid_from_text(name if item is None else item) for name, item in _value_list(value)]
    )


def _parse_freshest_crl(value: str, context: ValueContext) -> x509.FreshestCRL:
    return x509.FreshestCRL(_parse_distribution_points(value))


def _parse_crl_distribution_points(value: str, context: ValueContext) -> x509.CRLDistributionPoints:
    return x509.CRLDistributionPoints(_parse_distribution_points(value))


def _parse_inhibit_any_policy(value: str, context: ValueContext) -> x509.InhibitAnyPolicy:
    return x509.InhibitAnyPolicy(parse_int(value.strip(WHITESPACE)))


def _parse_invalidity_date(value: str, context: ValueContext) -> x509.InvalidityDate:
    try:
        return x509.InvalidityDate(datetime.strptime(value.strip(WHITESPACE), "%Y%m%d%H%M%SZ"))
    except ValueError as ex:
        raise ValueError(f"{value}: Date must be in YYYYMMDDHHMMSSZ format.") from ex


def _parse_issuer_alternative_name(value: str, context: ValueContext) -> x509.IssuerAlternativeName:
    return x509.IssuerAlternativeName(_parse_general_names(value, context, issuer_alt_name=True))


def _parse_key_usage(value: str, context: ValueContext) -> x509.KeyUsage:
    kwargs = dict.fromkeys(constants.KEY_USAGE_PARAMETERS, False)
    for name, _item in _value_list(value):
        if name not in _KEY_USAGE_POSITIONS:
            raise ValueError(f"{name}: Unknown key usage.")
        kwargs[constants.KEY_USAGE_PARAMETERS[_KEY_USAGE_POSITIONS[name]]] = True
    return x509.KeyUsage(**kwargs)


def _parse_name_constraints(value: str, context: ValueContext) -> x509.NameConstraints:
    permitted: list[x509.GeneralName] = []
    excluded: list[x509.GeneralName] = []
    for name, item in _value_list(value):
        if name.startswith("permitted") and len(name) > 9 and name[9] in ";.":
            permitted.append(parse_general_name(name[10:], item, name_constraint=True))
        elif name.startswith("excluded") and len(name) > 8 and name[8] in ";.":
            excluded.append(parse_general_name(name[9:], item, name_constraint=True))
        else:
            raise ValueError(f"{name}: Invalid syntax, expected permitted;TYPE:value or excluded;TYPE:value.")

    return x509.NameConstraints(permitted_subtrees=permitted or None, excluded_subtrees=excluded or None)


def _parse_netscape_certificate_type(value: str, context: ValueContext) -> x509.UnrecognizedExtension:
    names = set()
    for name, _item in _value_list(value):
        if name not in _NS_CERT_TYPE_NAMES:
            raise ValueError(f"{name}: Unknown certificate type.")
        names.add(_NS_CERT_TYPE_NAMES[name])
    der = asn1.NetscapeCertificateType(names).dump()
    return x509.UnrecognizedExtension(x509.ObjectIdentifier("2.16.840.1.113730.1.1"), der)


def _parse_netscape_comment(value: str, context: ValueContext) -> x509.UnrecognizedExtension:
    der = asn1crypto.core.IA5String(_not_empty(value)).dump()
    return x509.UnrecognizedExtension(x509.ObjectIdentifier("2.16.840.1.113730.1.13"), der)


def _parse_ocsp_no_check(value: str, context: ValueContext) -> x509.OCSPNoCheck:
    return x509.OCSPNoCheck()  # the value is ignored


def _parse_policy_constraints(value: str, context: ValueContext) -> x509.PolicyConstraints:
    require_explicit_policy = inhibit_policy_mapping = None
    for name, item in _value_list(value):
        if name == "requireExplicitPolicy":
            require_explicit_policy = parse_int(_required(name, item))
        elif name == "inhibitPolicyMapping":
            inhibit_policy_mapping = parse_int(_required(name, item))
        else:
            raise ValueError(f"{name}: Invalid name.")

    if require_explicit_policy is None and inhibit_policy_mapping is None:
        raise ValueError("Neither requireExplicitPolicy nor inhibitPolicyMapping given.")
    return x509.PolicyConstraints(
        require_explicit_policy=require_explicit_policy, inhibit_policy_mapping=inhibit_policy_mapping
    )


def _parse_policy_mappings(value: str, context: ValueContext) -> x509.UnrecognizedExtension:
    mappings = []
    for name, item in _value_list(value):
        mappings.append(
            {
                "issuer_domain_policy": oid_from_text(name).dotted_string,
                "subject_domain_policy": oid_from_text(_required(name, item)).dotted_string,
            }
        )
    der = asn1.PolicyMappings(mappings).dump()
    return x509.UnrecognizedExtension(x509.ObjectIdentifier("2.5.29.33"), der)


def _parse_precert_poison(value: str, context: ValueContext) -> x509.PrecertPoison:
    return x509.PrecertPoison()  # the value is ignored


def _parse_subject_alternative_name(value: str, context: ValueContext) -> x509.SubjectAlternativeName:
    return x509.SubjectAlternativeName(_parse_general_names(value, context))


def _parse_subject_information_access(value: str, context: ValueContext) -> x509.SubjectInformationAccess:
    return x509.SubjectInformationAccess(_parse_access_descriptions(value))


def _parse_subject_key_identifier(value: str, context: ValueContext) -> x509.SubjectKeyIdentifier:
    if value == "hash":
        subject = context.get_subject("subjectKeyIdentifier:hash")
        return x509.SubjectKeyIdentifier.from_public_key(subject.public_key())  # type: ignore[arg-type]
    return x509.SubjectKeyIdentifier(hex_to_bytes(_not_empty(value)))


def _parse_tls_feature(value: str, context: ValueContext) -> x509.TLSFeature:
    features = []
    for name, item in _value_list(value):
        feature = name if item is None else item
        for feature_name, feature_type in constants.TLS_FEATURE_NAMES.items():
            if feature.lower() == feature_name or feature == str(feature_type.value):
                features.append(feature_type)
                break
        else:
            raise ValueError(f"{feature}: Unknown TLS feature.")
    return x509.TLSFeature(features)


def split_critical(value: str) -> tuple[bool, str]:
    """Split the critical flag from an extension value.

    >>> split_critical("critical, CA:TRUE")
    (True, 'CA:TRUE')
    >>> split_critical("CA:TRUE")
    (False, 'CA:TRUE')
    """
    if not value.startswith(CRITICAL_PREFIX):
        return False, value
    return True, value[len(CRITICAL_PREFIX) :].lstrip(WHITESPACE)


def split_generic(value: str) -> Optional[tuple[str, str]]:
    """Split the ``DER:`` or ``ASN1:`` prefix of generic extension values.

    >>> split_generic("DER:01:02")
    ('DER', '01:02')
    >>> split_generic("CA:TRUE") is None
    True
    """
    for prefix in ("DER", "ASN1"):
        if value.startswith(f"{prefix}:"):
            return prefix, value[len(prefix) + 1 :].lstrip(WHITESPACE)
    return None


def parse_extension_value(
    type_name: str, value: str, context: ValueContext, registry: "ExtensionRegistry"
) -> tuple[x509.ObjectIdentifier, bool, bytes]:
    """Parse an extension value, optionally prefixed with ``critical,``.

    Returns a tuple of the extension OID, the critical flag and the DER encoded extension value.

    Generic values (``DER:<hex>`` or ``ASN1:<type>:<value>``) can be used with any type name known to the
    registry (short name or long name) and any dotted string. Otherwise `type_name` must be the short name of
    an extension that can be created from a value.
    """
    critical, value = split_critical(value)

    generic = split_generic(value)
    if generic is not None:
        oid = registry.resolve(type_name)
        if oid is None:
            raise UnknownExtensionType(f"{type_name}: Unknown extension name.")

        generic_type, generic_value = generic
        try:
            if generic_type == "DER":
                return oid, critical, hex_to_bytes(generic_value)
            return oid, critical, encode_asn1_value(generic_value)
        except ValueError as ex:
            raise InvalidValueSyntax(f"{type_name}: {ex}") from ex

    oid = registry.get_oid(type_name)
    if oid is None:
        raise UnknownExtensionType(f"{type_name}: Unknown extension name.")
    method = registry.get_method(oid)
    if method is None or method.parser is None:
        raise UnknownExtensionType(f"{type_name}: Extension cannot be created from a value.")

    try:
        extension_type = method.parser(value, context)
        return oid, critical, extension_type.public_bytes()
    except ValueError as ex:
        raise InvalidValueSyntax(f"{method.short_name}: {ex}") from ex


__all__ = ["ValueContext", "parse_extension_value", "split_critical", "split_generic"]
