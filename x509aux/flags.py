# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Extension flags derived from a certificate's extensions.

The flags summarize how a certificate classifies for path validation:
whether it is a CA, self-issued, self-signed, and which extensions it
carries. Values follow OpenSSL's EXFLAG_* constants.

Note: SELF_SIGNED is an approximation. It requires matching key
identifiers and a signature algorithm of the same family as the
certificate's own key, but does not verify the signature.
"""

import logging
from enum import IntFlag

from .exceptions import DecodeError, UnsupportedAlgorithmOrFormat
from .key_identifiers import decode_authority_key_identifier, decode_subject_key_identifier
from .names import names_equal
from .oids import ExtensionOIDs
from .view import CertificateAccessor

logger = logging.getLogger(__name__)


class ExtensionFlag(IntFlag):
    """Certificate classification bits."""

    BASIC_CONSTRAINTS_PRESENT = 0x0001
    KEY_USAGE_PRESENT = 0x0002
    CA = 0x0010
    SELF_ISSUED = 0x0020
    V1 = 0x0040
    PROXY = 0x0400
    SELF_SIGNED = 0x2000


def _key_identifiers_match(cert: CertificateAccessor) -> bool:
    """
    Check AKID and SKID are both present and carry the same key identifier.

    Raises:
        DecodeError: If either extension is malformed
    """
    raw_akid = cert.get_extension_value(ExtensionOIDs.AUTHORITY_KEY_IDENTIFIER)
    if raw_akid is None:
        return False
    akid = decode_authority_key_identifier(raw_akid)
    if akid.key_identifier is None:
        return False

    raw_skid = cert.get_extension_value(ExtensionOIDs.SUBJECT_KEY_IDENTIFIER)
    if raw_skid is None:
        return False
    skid = decode_subject_key_identifier(raw_skid)
    if skid.key_identifier is None:
        return False

    return akid.key_identifier == skid.key_identifier


def is_self_signed(cert: CertificateAccessor) -> bool:
    """
    Approximate self-signed check for a self-issued certificate.

    Args:
        cert: Certificate whose subject equals its issuer

    Returns:
        True if AKID matches SKID and the signature algorithm family
        equals the public key algorithm

    Raises:
        DecodeError: If a key identifier extension is malformed
        UnsupportedAlgorithmOrFormat: If the public key cannot be loaded
    """
    if not _key_identifiers_match(cert):
        return False
    return cert.signature_algorithm_name == cert.public_key_algorithm


def compute_extension_flags(cert: CertificateAccessor) -> ExtensionFlag:
    """
    Compute extension flags for a certificate.

    A malformed key identifier or an unsupported public key only leaves
    SELF_SIGNED unset; every other flag is still derived.

    Args:
        cert: Certificate accessor to inspect

    Returns:
        Bit-set of ExtensionFlag values
    """
    flags = ExtensionFlag(0)

    # V1 should mean no extensions
    if cert.version == 1:
        flags |= ExtensionFlag.V1

    if cert.get_extension_value(ExtensionOIDs.BASIC_CONSTRAINTS) is not None:
        if cert.basic_constraints != -1:
            flags |= ExtensionFlag.CA
        flags |= ExtensionFlag.BASIC_CONSTRAINTS_PRESENT

    if names_equal(cert.subject, cert.issuer):
        flags |= ExtensionFlag.SELF_ISSUED
        try:
            if is_self_signed(cert):
                flags |= ExtensionFlag.SELF_SIGNED
        except (DecodeError, UnsupportedAlgorithmOrFormat) as e:
            logger.warning(
                "Cannot check certificate serial %s for self-signature, not marking self-signed: %s",
                cert.serial_number,
                e,
            )

    if cert.key_usage is not None:
        flags |= ExtensionFlag.KEY_USAGE_PRESENT

    if cert.get_extension_value(ExtensionOIDs.PROXY_CERT_INFO) is not None:
        flags |= ExtensionFlag.PROXY

    logger.debug("Computed extension flags %r for certificate serial %s", flags, cert.serial_number)
    return flags
