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

"""Functions to render decoded extension values as text.

The output follows the format used by ``openssl x509 -text``. Single-line values are joined with ``", "``,
multi-line values end every line with a newline.
"""

import asn1crypto.core
import asn1crypto.x509
from cryptography import x509

from django_x509ext import asn1, constants
from django_x509ext.constants import VALUE_SEPARATOR, GeneralNameKind
from django_x509ext.extensions.utils import named_bits
from django_x509ext.utils import (
    bytes_to_hex,
    decode_text,
    format_general_name,
    format_ip_address,
    int_to_bytes,
    oid_to_short_name,
    oid_to_text,
)


def _is_present(value: asn1crypto.core.Asn1Value) -> bool:
    return not isinstance(value, asn1crypto.core.Void)


def _oid_text(value: asn1crypto.core.ObjectIdentifier) -> str:
    return oid_to_text(x509.ObjectIdentifier(value.dotted))


def _values_as_text(values: list[str], multiline: bool = False) -> str:
    if not values:
        return "<EMPTY>\n"
    if multiline:
        return "".join(f"{value}\n" for value in values)
    return VALUE_SEPARATOR.join(values)


def _general_names_as_text(value: asn1crypto.x509.GeneralNames) -> str:
    return _values_as_text([format_general_name(name) for name in value])


def _general_name_lines(value: asn1crypto.x509.GeneralNames, indent: int) -> list[str]:
    return [f"{' ' * indent}{format_general_name(name)}\n" for name in value]


def _relative_name_as_text(value: asn1crypto.x509.RelativeDistinguishedName) -> str:
    parts = []
    for attribute in value:
        oid = x509.ObjectIdentifier(attribute["type"].dotted)
        parts.append(f"{oid_to_short_name(oid) or oid.dotted_string} = {attribute['value'].native}")
    return " + ".join(parts)


def _access_description_as_text(value: asn1crypto.core.SequenceOf) -> str:
    values = [
        f"{_oid_text(description['access_method'])} - {format_general_name(description['access_location'])}"
        for description in value
    ]
    return _values_as_text(values, multiline=True)


def _authority_key_identifier_as_text(value: asn1crypto.x509.AuthorityKeyIdentifier) -> str:
    values = []
    if _is_present(value["key_identifier"]):
        values.append(f"keyid:{bytes_to_hex(value['key_identifier'].native)}")
    if _is_present(value["authority_cert_issuer"]):
        values += [format_general_name(name) for name in value["authority_cert_issuer"]]
    if _is_present(value["authority_cert_serial_number"]):
        serial = value["authority_cert_serial_number"].native
        values.append(f"serial:{bytes_to_hex(int_to_bytes(serial))}")
    return _values_as_text(values, multiline=True)


def _basic_constraints_as_text(value: asn1crypto.x509.BasicConstraints) -> str:
    if value["ca"].native is True:
        text = "CA:TRUE"
    else:
        text = "CA:FALSE"
    if _is_present(value["path_len_constraint"]):
        text += f", pathlen:{value['path_len_constraint'].native}"

    return text


def _user_notice_lines(value: asn1crypto.x509.UserNotice, indent: int) -> list[str]:
    prefix = " " * indent
    lines = []
    if _is_present(value["notice_ref"]):
        notice_ref = value["notice_ref"]
        lines.append(f"{prefix}Organization: {notice_ref['organization'].native}\n")
        numbers = [str(number.native) for number in notice_ref["notice_numbers"]]
        suffix = "s" if len(numbers) > 1 else ""
        lines.append(f"{prefix}Number{suffix}: {VALUE_SEPARATOR.join(numbers)}\n")
    if _is_present(value["explicit_text"]):
        lines.append(f"{prefix}Explicit Text: {value['explicit_text'].native}\n")
    return lines


def _certificate_policies_as_text(value: asn1crypto.x509.CertificatePolicies) -> str:
    lines = []

    for policy in value:
        lines.append(f"Policy: {_oid_text(policy['policy_identifier'])}\n")
        if not _is_present(policy["policy_qualifiers"]):
            continue

        for qualifier in policy["policy_qualifiers"]:
            qualifier_id = qualifier["policy_qualifier_id"].dotted
            if qualifier_id == "1.3.6.1.5.5.7.2.1":
                lines.append(f"  CPS: {decode_text(qualifier['qualifier'].contents)}\n")
            elif qualifier_id == "1.3.6.1.5.5.7.2.2":
                lines.append("  User Notice:\n")
                lines += _user_notice_lines(qualifier["qualifier"], indent=4)
            else:
                lines.append(f"  Unknown Qualifier: {_oid_text(qualifier['policy_qualifier_id'])}\n")
    return "".join(lines)


def _reasons_lines(value: asn1crypto.core.BitString, indent: int) -> list[str]:
    reasons = [constants.REASON_FLAG_NAMES[position] for position in named_bits(value)]
    text = VALUE_SEPARATOR.join(reasons) or "<EMPTY>"
    return [f"{' ' * indent}Reasons:\n", f"{' ' * (indent + 2)}{text}\n"]


def _distribution_points_as_text(value: asn1crypto.x509.CRLDistributionPoints) -> str:
    lines = []
    for dpoint in value:
        lines.append("\n")

        if _is_present(dpoint["distribution_point"]):
            name = dpoint["distribution_point"]
            if name.name == "full_name":
                lines.append("Full Name:\n")
                lines += _general_name_lines(name.chosen, indent=2)
            else:
                lines.append(f"Relative Name:\n  {_relative_name_as_text(name.chosen)}\n")

        if _is_present(dpoint["reasons"]):
            lines += _reasons_lines(dpoint["reasons"], indent=0)
        if _is_present(dpoint["crl_issuer"]):
            lines.append("CRL Issuer:\n")
            lines += _general_name_lines(dpoint["crl_issuer"], indent=2)
    return "".join(lines)


def _extended_key_usage_as_text(value: asn1crypto.x509.ExtKeyUsageSyntax) -> str:
    return _values_as_text([_oid_text(usage) for usage in value])


def _integer_as_text(value: asn1crypto.core.Integer) -> str:
    return str(value.native)


def _crl_reason_as_text(value: asn1.CRLReasonCode) -> str:
    code = int.from_bytes(value.contents, "big", signed=True)
    if code in constants.CRL_REASON_NAMES:
        return constants.CRL_REASON_NAMES[code][1]
    return str(code)


def _invalidity_date_as_text(value: asn1crypto.core.GeneralizedTime) -> str:
    timestamp = value.native
    return f"{timestamp:%b} {timestamp.day:2d} {timestamp:%H:%M:%S} {timestamp.year} GMT"


def _key_usage_as_text(value: asn1crypto.x509.KeyUsage) -> str:
    return _values_as_text([constants.KEY_USAGE_BITS[position][1] for position in named_bits(value)])


def _netscape_certificate_type_as_text(value: asn1.NetscapeCertificateType) -> str:
    return _values_as_text([constants.NS_CERT_TYPE_BITS[position][1] for position in named_bits(value)])


def _ia5_string_as_text(value: asn1crypto.core.IA5String) -> str:
    return decode_text(value.contents)


def _name_constraint_base_as_text(name: asn1crypto.x509.GeneralName) -> str:
    if GeneralNameKind(name.name) != GeneralNameKind.IP_ADDRESS:
        return format_general_name(name)

    data = name.chosen.contents
    if len(data) not in (8, 32):
        return "IP:IP Address:<invalid>"
    middle = len(data) // 2
    return f"IP:{format_ip_address(data[:middle])}/{format_ip_address(data[middle:])}"


def _name_constraints_as_text(value: asn1crypto.x509.NameConstraints) -> str:
    lines = []
    for label, field in (("Permitted", "permitted_subtrees"), ("Excluded", "excluded_subtrees")):
        if not _is_present(value[field]) or len(value[field]) == 0:
            continue

        lines.append(f"{label}:\n")
        lines += [f"  {_name_constraint_base_as_text(subtree['base'])}\n" for subtree in value[field]]
    return "".join(lines)


def _null_as_text(value: asn1crypto.core.Null) -> str:  # pylint: disable=unused-argument
    return ""


def _policy_constraints_as_text(value: asn1crypto.x509.PolicyConstraints) -> str:
    values = []
    if _is_present(value["require_explicit_policy"]):
        values.append(f"Require Explicit Policy:{value['require_explicit_policy'].native}")
    if _is_present(value["inhibit_policy_mapping"]):
        values.append(f"Inhibit Policy Mapping:{value['inhibit_policy_mapping'].native}")
    return _values_as_text(values)


def _policy_mappings_as_text(value: asn1.PolicyMappings) -> str:
    values = [
        f"{_oid_text(mapping['issuer_domain_policy'])}:{_oid_text(mapping['subject_domain_policy'])}"
        for mapping in value
    ]
    return _values_as_text(values)


def _precert_poison_as_text(value: asn1crypto.core.Null) -> str:  # pylint: disable=unused-argument
    return "NULL"


def _subject_key_identifier_as_text(value: asn1crypto.core.OctetString) -> str:
    return bytes_to_hex(value.native)


def _tls_feature_as_text(value: asn1.TLSFeatures) -> str:
    return _values_as_text([str(feature.native) for feature in value])
