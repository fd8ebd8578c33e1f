# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Object Identifier (OID) definitions used when deriving extension flags.

Extension OIDs are kept as dotted strings because raw extension lookup is
keyed by dotted string. Algorithm OIDs use cryptography's registry.
"""

from cryptography import x509
from cryptography.x509.oid import ExtensionOID, SignatureAlgorithmOID


class ExtensionOIDs:
    """Dotted OIDs of the extensions inspected by the flags engine."""

    # 2.5.29.19 - Basic Constraints
    BASIC_CONSTRAINTS = ExtensionOID.BASIC_CONSTRAINTS.dotted_string

    # 2.5.29.35 - Authority Key Identifier
    AUTHORITY_KEY_IDENTIFIER = ExtensionOID.AUTHORITY_KEY_IDENTIFIER.dotted_string

    # 2.5.29.14 - Subject Key Identifier
    SUBJECT_KEY_IDENTIFIER = ExtensionOID.SUBJECT_KEY_IDENTIFIER.dotted_string

    # 2.5.29.15 - Key Usage
    KEY_USAGE = ExtensionOID.KEY_USAGE.dotted_string

    # 1.3.6.1.5.5.7.1.14 - Proxy Certificate Information (RFC 3820)
    PROXY_CERT_INFO = "1.3.6.1.5.5.7.1.14"

    @classmethod
    def all_oids(cls) -> list[str]:
        """Return all inspected extension OIDs."""
        return [
            cls.BASIC_CONSTRAINTS,
            cls.AUTHORITY_KEY_IDENTIFIER,
            cls.SUBJECT_KEY_IDENTIFIER,
            cls.KEY_USAGE,
            cls.PROXY_CERT_INFO,
        ]


# Critical extensions a relying party built on this package understands
SUPPORTED_CRITICAL_EXTENSIONS = frozenset({
    ExtensionOID.BASIC_CONSTRAINTS.dotted_string,
    ExtensionOID.KEY_USAGE.dotted_string,
    ExtensionOID.EXTENDED_KEY_USAGE.dotted_string,
    ExtensionOID.SUBJECT_ALTERNATIVE_NAME.dotted_string,
    ExtensionOID.NAME_CONSTRAINTS.dotted_string,
    ExtensionOID.POLICY_CONSTRAINTS.dotted_string,
    ExtensionOID.CERTIFICATE_POLICIES.dotted_string,
    ExtensionOID.INHIBIT_ANY_POLICY.dotted_string,
    ExtensionOIDs.PROXY_CERT_INFO,
})


# Signature algorithm -> family of the key that produces it
_SIGNATURE_FAMILIES = {
    SignatureAlgorithmOID.RSA_WITH_MD5: "RSA",
    SignatureAlgorithmOID.RSA_WITH_SHA1: "RSA",
    SignatureAlgorithmOID.RSA_WITH_SHA224: "RSA",
    SignatureAlgorithmOID.RSA_WITH_SHA256: "RSA",
    SignatureAlgorithmOID.RSA_WITH_SHA384: "RSA",
    SignatureAlgorithmOID.RSA_WITH_SHA512: "RSA",
    SignatureAlgorithmOID.RSASSA_PSS: "RSA",
    SignatureAlgorithmOID.ECDSA_WITH_SHA1: "EC",
    SignatureAlgorithmOID.ECDSA_WITH_SHA224: "EC",
    SignatureAlgorithmOID.ECDSA_WITH_SHA256: "EC",
    SignatureAlgorithmOID.ECDSA_WITH_SHA384: "EC",
    SignatureAlgorithmOID.ECDSA_WITH_SHA512: "EC",
    SignatureAlgorithmOID.DSA_WITH_SHA1: "DSA",
    SignatureAlgorithmOID.DSA_WITH_SHA224: "DSA",
    SignatureAlgorithmOID.DSA_WITH_SHA256: "DSA",
    SignatureAlgorithmOID.ED25519: "Ed25519",
    SignatureAlgorithmOID.ED448: "Ed448",
}


def get_signature_family(oid: x509.ObjectIdentifier) -> str:
    """
    Get the key-algorithm family of a signature algorithm.

    Args:
        oid: Signature algorithm OID

    Returns:
        Family name ("RSA", "EC", ...) or the OID string if unknown
    """
    return _SIGNATURE_FAMILIES.get(oid, oid.dotted_string)
