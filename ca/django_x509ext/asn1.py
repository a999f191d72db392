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

"""ASN.1 structures not (or not suitably) shipped by :py:mod:`asn1crypto.x509`."""

from asn1crypto.core import BitString, Boolean, Enumerated, Integer, ObjectIdentifier, OctetString, Sequence
from asn1crypto.core import SequenceOf

from django_x509ext import constants


class ExtensionStructure(Sequence):
    """The ``Extension`` structure from RFC 5280, section 4.1.

    Unlike :py:class:`asn1crypto.x509.Extension`, the value is never parsed, so the exact payload bytes are
    available even for extensions unknown to asn1crypto.
    """

    _fields = [
        ("extn_id", ObjectIdentifier),
        ("critical", Boolean, {"default": False}),
        ("extn_value", OctetString),
    ]


class NetscapeCertificateType(BitString):
    """The legacy ``nsCertType`` extension."""

    _map = {index: short_name for index, (short_name, _long_name) in enumerate(constants.NS_CERT_TYPE_BITS)}


class TLSFeature(Integer):
    """A single TLS feature (RFC 7633)."""

    _map = {feature.value: name for name, feature in constants.TLS_FEATURE_NAMES.items()}


class TLSFeatures(SequenceOf):
    """The ``Features`` structure of the TLS feature extension (RFC 7633)."""

    _child_spec = TLSFeature


class CRLReasonCode(Enumerated):
    """Reason code of a revoked certificate (RFC 5280, section 5.3.1)."""

    _map = {code: short_name for code, (short_name, _long_name) in constants.CRL_REASON_NAMES.items()}


class PolicyMapping(Sequence):
    """A single mapping of the policy mappings extension (RFC 5280, section 4.2.1.5)."""

    _fields = [
        ("issuer_domain_policy", ObjectIdentifier),
        ("subject_domain_policy", ObjectIdentifier),
    ]


class PolicyMappings(SequenceOf):
    """The policy mappings extension (RFC 5280, section 4.2.1.5)."""

    _child_spec = PolicyMapping
