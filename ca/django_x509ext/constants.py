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

"""Constants used throughout django-x509ext.

Names in this module follow the object table of OpenSSL, so that values written for ``openssl.cnf`` can be
used unchanged.
"""

import enum
from types import MappingProxyType

from cryptography import x509
from cryptography.x509.oid import AuthorityInformationAccessOID, ExtendedKeyUsageOID, ExtensionOID

#: Literal prefix marking an extension value as critical.
CRITICAL_PREFIX = "critical,"

#: Short name returned for object identifiers without a registered name.
UNDEFINED_SHORT_NAME = b"UNDEF"

#: Characters that are considered whitespace when splitting value lists.
WHITESPACE = " \t\n\v\f\r"

#: Separator between entries in formatted multi-value extensions.
VALUE_SEPARATOR = ", "


class GeneralNameKind(enum.Enum):
    """Closed set of GeneralName alternatives (RFC 5280, section 4.2.1.6).

    Values are the alternative names used by :py:class:`asn1crypto.x509.GeneralName`.
    """

    OTHER_NAME = "other_name"
    EMAIL = "rfc822_name"
    DNS = "dns_name"
    X400_ADDRESS = "x400_address"
    DIRECTORY_NAME = "directory_name"
    EDI_PARTY_NAME = "edi_party_name"
    URI = "uniform_resource_identifier"
    IP_ADDRESS = "ip_address"
    REGISTERED_ID = "registered_id"


#: Short and long names of extensions, as (short name, long name).
EXTENSION_NAMES: MappingProxyType[x509.ObjectIdentifier, tuple[str, str]] = MappingProxyType(
    {
        ExtensionOID.SUBJECT_DIRECTORY_ATTRIBUTES: (
            "subjectDirectoryAttributes",
            "X509v3 Subject Directory Attributes",
        ),
        ExtensionOID.SUBJECT_KEY_IDENTIFIER: ("subjectKeyIdentifier", "X509v3 Subject Key Identifier"),
        ExtensionOID.KEY_USAGE: ("keyUsage", "X509v3 Key Usage"),
        ExtensionOID.SUBJECT_ALTERNATIVE_NAME: ("subjectAltName", "X509v3 Subject Alternative Name"),
        ExtensionOID.ISSUER_ALTERNATIVE_NAME: ("issuerAltName", "X509v3 Issuer Alternative Name"),
        ExtensionOID.BASIC_CONSTRAINTS: ("basicConstraints", "X509v3 Basic Constraints"),
        ExtensionOID.CRL_NUMBER: ("crlNumber", "X509v3 CRL Number"),
        ExtensionOID.DELTA_CRL_INDICATOR: ("deltaCRL", "X509v3 Delta CRL Indicator"),
        x509.ObjectIdentifier("2.5.29.21"): ("CRLReason", "X509v3 CRL Reason Code"),
        x509.ObjectIdentifier("2.5.29.24"): ("invalidityDate", "Invalidity Date"),
        ExtensionOID.NAME_CONSTRAINTS: ("nameConstraints", "X509v3 Name Constraints"),
        ExtensionOID.CRL_DISTRIBUTION_POINTS: ("crlDistributionPoints", "X509v3 CRL Distribution Points"),
        ExtensionOID.CERTIFICATE_POLICIES: ("certificatePolicies", "X509v3 Certificate Policies"),
        ExtensionOID.POLICY_MAPPINGS: ("policyMappings", "X509v3 Policy Mappings"),
        ExtensionOID.AUTHORITY_KEY_IDENTIFIER: ("authorityKeyIdentifier", "X509v3 Authority Key Identifier"),
        ExtensionOID.POLICY_CONSTRAINTS: ("policyConstraints", "X509v3 Policy Constraints"),
        ExtensionOID.EXTENDED_KEY_USAGE: ("extendedKeyUsage", "X509v3 Extended Key Usage"),
        ExtensionOID.FRESHEST_CRL: ("freshestCRL", "X509v3 Freshest CRL"),
        ExtensionOID.INHIBIT_ANY_POLICY: ("inhibitAnyPolicy", "X509v3 Inhibit Any Policy"),
        ExtensionOID.AUTHORITY_INFORMATION_ACCESS: ("authorityInfoAccess", "Authority Information Access"),
        ExtensionOID.SUBJECT_INFORMATION_ACCESS: ("subjectInfoAccess", "Subject Information Access"),
        ExtensionOID.TLS_FEATURE: ("tlsfeature", "TLS Feature"),
        ExtensionOID.OCSP_NO_CHECK: ("noCheck", "OCSP No Check"),
        ExtensionOID.PRECERT_SIGNED_CERTIFICATE_TIMESTAMPS: ("ct_precert_scts", "CT Precertificate SCTs"),
        ExtensionOID.PRECERT_POISON: ("ct_precert_poison", "CT Precertificate Poison"),
        x509.ObjectIdentifier("2.16.840.1.113730.1.1"): ("nsCertType", "Netscape Cert Type"),
        x509.ObjectIdentifier("2.16.840.1.113730.1.13"): ("nsComment", "Netscape Comment"),
    }
)

#: Names of extended key usages, as (short name, long name).
EXTENDED_KEY_USAGE_NAMES: MappingProxyType[x509.ObjectIdentifier, tuple[str, str]] = MappingProxyType(
    {
        ExtendedKeyUsageOID.SERVER_AUTH: ("serverAuth", "TLS Web Server Authentication"),
        ExtendedKeyUsageOID.CLIENT_AUTH: ("clientAuth", "TLS Web Client Authentication"),
        ExtendedKeyUsageOID.CODE_SIGNING: ("codeSigning", "Code Signing"),
        ExtendedKeyUsageOID.EMAIL_PROTECTION: ("emailProtection", "E-mail Protection"),
        x509.ObjectIdentifier("1.3.6.1.5.5.7.3.5"): ("ipsecEndSystem", "IPSec End System"),
        x509.ObjectIdentifier("1.3.6.1.5.5.7.3.6"): ("ipsecTunnel", "IPSec Tunnel"),
        x509.ObjectIdentifier("1.3.6.1.5.5.7.3.7"): ("ipsecUser", "IPSec User"),
        ExtendedKeyUsageOID.TIME_STAMPING: ("timeStamping", "Time Stamping"),
        ExtendedKeyUsageOID.OCSP_SIGNING: ("OCSPSigning", "OCSP Signing"),
        ExtendedKeyUsageOID.IPSEC_IKE: ("ipsecIKE", "ipsec Internet Key Exchange"),
        x509.ObjectIdentifier("1.3.6.1.4.1.311.2.1.21"): ("msCodeInd", "Microsoft Individual Code Signing"),
        x509.ObjectIdentifier("1.3.6.1.4.1.311.2.1.22"): ("msCodeCom", "Microsoft Commercial Code Signing"),
        x509.ObjectIdentifier("1.3.6.1.4.1.311.10.3.1"): ("msCTLSign", "Microsoft Trust List Signing"),
        x509.ObjectIdentifier("1.3.6.1.4.1.311.10.3.3"): ("msSGC", "Microsoft Server Gated Crypto"),
        x509.ObjectIdentifier("1.3.6.1.4.1.311.10.3.4"): ("msEFS", "Microsoft Encrypted File System"),
        ExtendedKeyUsageOID.SMARTCARD_LOGON: ("msSmartcardLogin", "Microsoft Smartcard Login"),
        x509.ObjectIdentifier("2.16.840.1.113730.4.1"): ("nsSGC", "Netscape Server Gated Crypto"),
        ExtendedKeyUsageOID.ANY_EXTENDED_KEY_USAGE: ("anyExtendedKeyUsage", "Any Extended Key Usage"),
    }
)

#: Names of access methods in information access extensions, as (short name, long name).
ACCESS_METHOD_NAMES: MappingProxyType[x509.ObjectIdentifier, tuple[str, str]] = MappingProxyType(
    {
        AuthorityInformationAccessOID.OCSP: ("OCSP", "OCSP"),
        AuthorityInformationAccessOID.CA_ISSUERS: ("caIssuers", "CA Issuers"),
        x509.ObjectIdentifier("1.3.6.1.5.5.7.48.3"): ("ad_timestamping", "AD Time Stamping"),
        x509.ObjectIdentifier("1.3.6.1.5.5.7.48.5"): ("caRepository", "CA Repository"),
    }
)

#: Names of policies and policy qualifiers, as (short name, long name).
POLICY_NAMES: MappingProxyType[x509.ObjectIdentifier, tuple[str, str]] = MappingProxyType(
    {
        x509.ObjectIdentifier("2.5.29.32.0"): ("anyPolicy", "X509v3 Any Policy"),
        x509.ObjectIdentifier("1.3.6.1.5.5.7.2.1"): ("id-qt-cps", "Policy Qualifier CPS"),
        x509.ObjectIdentifier("1.3.6.1.5.5.7.2.2"): ("id-qt-unotice", "Policy Qualifier User Notice"),
    }
)

#: Names of attributes in distinguished names, as (short name, long name).
NAME_ATTRIBUTE_NAMES: MappingProxyType[x509.ObjectIdentifier, tuple[str, str]] = MappingProxyType(
    {
        x509.ObjectIdentifier("2.5.4.3"): ("CN", "commonName"),
        x509.ObjectIdentifier("2.5.4.4"): ("SN", "surname"),
        x509.ObjectIdentifier("2.5.4.5"): ("serialNumber", "serialNumber"),
        x509.ObjectIdentifier("2.5.4.6"): ("C", "countryName"),
        x509.ObjectIdentifier("2.5.4.7"): ("L", "localityName"),
        x509.ObjectIdentifier("2.5.4.8"): ("ST", "stateOrProvinceName"),
        x509.ObjectIdentifier("2.5.4.9"): ("street", "streetAddress"),
        x509.ObjectIdentifier("2.5.4.10"): ("O", "organizationName"),
        x509.ObjectIdentifier("2.5.4.11"): ("OU", "organizationalUnitName"),
        x509.ObjectIdentifier("2.5.4.12"): ("title", "title"),
        x509.ObjectIdentifier("2.5.4.17"): ("postalCode", "postalCode"),
        x509.ObjectIdentifier("2.5.4.42"): ("GN", "givenName"),
        x509.ObjectIdentifier("2.5.4.43"): ("initials", "initials"),
        x509.ObjectIdentifier("2.5.4.46"): ("dnQualifier", "dnQualifier"),
        x509.ObjectIdentifier("2.5.4.65"): ("pseudonym", "pseudonym"),
        x509.ObjectIdentifier("1.2.840.113549.1.9.1"): ("emailAddress", "emailAddress"),
        x509.ObjectIdentifier("0.9.2342.19200300.100.1.1"): ("UID", "userId"),
        x509.ObjectIdentifier("0.9.2342.19200300.100.1.25"): ("DC", "domainComponent"),
    }
)

#: All known object names, keyed by object identifier.
OBJECT_NAMES: MappingProxyType[x509.ObjectIdentifier, tuple[str, str]] = MappingProxyType(
    {
        **NAME_ATTRIBUTE_NAMES,
        **EXTENSION_NAMES,
        **EXTENDED_KEY_USAGE_NAMES,
        **ACCESS_METHOD_NAMES,
        **POLICY_NAMES,
    }
)

#: Bits of the KeyUsage extension, as (short name, long name), indexed by bit position.
KEY_USAGE_BITS: tuple[tuple[str, str], ...] = (
    ("digitalSignature", "Digital Signature"),
    ("nonRepudiation", "Non Repudiation"),
    ("keyEncipherment", "Key Encipherment"),
    ("dataEncipherment", "Data Encipherment"),
    ("keyAgreement", "Key Agreement"),
    ("keyCertSign", "Certificate Sign"),
    ("cRLSign", "CRL Sign"),
    ("encipherOnly", "Encipher Only"),
    ("decipherOnly", "Decipher Only"),
)

#: Keyword arguments for :py:class:`~cryptography.x509.KeyUsage`, indexed by bit position.
KEY_USAGE_PARAMETERS: tuple[str, ...] = (
    "digital_signature",
    "content_commitment",
    "key_encipherment",
    "data_encipherment",
    "key_agreement",
    "key_cert_sign",
    "crl_sign",
    "encipher_only",
    "decipher_only",
)

#: Bits of the Netscape certificate type extension, as (short name, long name).
NS_CERT_TYPE_BITS: tuple[tuple[str, str], ...] = (
    ("client", "SSL Client"),
    ("server", "SSL Server"),
    ("email", "S/MIME"),
    ("objsign", "Object Signing"),
    ("reserved", "Unused"),
    ("sslCA", "SSL CA"),
    ("emailCA", "S/MIME CA"),
    ("objCA", "Object Signing CA"),
)

#: Bits of the ReasonFlags in CRL distribution points, indexed by bit position.
REASON_FLAG_NAMES: tuple[str, ...] = (
    "Unused",
    "Key Compromise",
    "CA Compromise",
    "Affiliation Changed",
    "Superseded",
    "Cessation Of Operation",
    "Certificate Hold",
    "Privilege Withdrawn",
    "AA Compromise",
)

#: Names of CRL reason codes, as (short name, long name), indexed by reason code.
CRL_REASON_NAMES: MappingProxyType[int, tuple[str, str]] = MappingProxyType(
    {
        0: ("unspecified", "Unspecified"),
        1: ("keyCompromise", "Key Compromise"),
        2: ("CACompromise", "CA Compromise"),
        3: ("affiliationChanged", "Affiliation Changed"),
        4: ("superseded", "Superseded"),
        5: ("cessationOfOperation", "Cessation Of Operation"),
        6: ("certificateHold", "Certificate Hold"),
        8: ("removeFromCRL", "Remove From CRL"),
        9: ("privilegeWithdrawn", "Privilege Withdrawn"),
        10: ("AACompromise", "AA Compromise"),
    }
)

#: Map of reason codes to the enum used by cryptography.
CRL_REASON_FLAGS: MappingProxyType[int, x509.ReasonFlags] = MappingProxyType(
    {
        0: x509.ReasonFlags.unspecified,
        1: x509.ReasonFlags.key_compromise,
        2: x509.ReasonFlags.ca_compromise,
        3: x509.ReasonFlags.affiliation_changed,
        4: x509.ReasonFlags.superseded,
        5: x509.ReasonFlags.cessation_of_operation,
        6: x509.ReasonFlags.certificate_hold,
        8: x509.ReasonFlags.remove_from_crl,
        9: x509.ReasonFlags.privilege_withdrawn,
        10: x509.ReasonFlags.aa_compromise,
    }
)

#: TLS features (RFC 7633), as (name, feature).
TLS_FEATURE_NAMES: MappingProxyType[str, x509.TLSFeatureType] = MappingProxyType(
    {
        "status_request": x509.TLSFeatureType.status_request,
        "status_request_v2": x509.TLSFeatureType.status_request_v2,
    }
)

#: Values that X509V3 configuration accepts as boolean true or false.
BOOLEAN_TRUE = ("TRUE", "true", "Y", "y", "YES", "yes")
BOOLEAN_FALSE = ("FALSE", "false", "N", "n", "NO", "no")
