# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
x509aux - X.509 Certificate Wrapper

Wraps decoded X.509 certificates together with auxiliary trust data and
derives cached extension flags (CA, self-issued, self-signed, ...) for
certificate path validation.

Modules:
    view: Certificate accessor contract and cryptography-backed view
    flags: Extension flag computation
    wrapper: Certificate wrapper, identity and cache reset
    key_identifiers: Authority/Subject Key Identifier decoding

Example:
    >>> from x509aux import CertificateWrapper, ExtensionFlag
    >>>
    >>> wrapper = CertificateWrapper.from_pem(pem_bytes)
    >>> ExtensionFlag.CA in wrapper.get_extension_flags()
    True
"""

__version__ = "0.1.0"
__author__ = "The Birthmark Standard Foundation"

from .auxinfo import AuxInfo

from .config import Settings, configure_logging, settings

from .exceptions import (
    CertificateExpiredError,
    CertificateNotYetValidError,
    CertificateValidityError,
    DecodeError,
    UnsupportedAlgorithmOrFormat,
)

from .flags import (
    ExtensionFlag,
    compute_extension_flags,
    is_self_signed,
)

from .key_identifiers import (
    AkidShape,
    AuthorityKeyId,
    SubjectKeyId,
    decode_authority_key_identifier,
    decode_subject_key_identifier,
)

from .names import canonical_name, names_equal

from .oids import ExtensionOIDs

from .view import CertificateAccessor, CertificateView

from .wrapper import (
    CertificateWrapper,
    cache_reset,
    subjects_equal,
)

__all__ = [
    # Wrapper
    "CertificateWrapper",
    "AuxInfo",
    "cache_reset",
    "subjects_equal",
    # Flags
    "ExtensionFlag",
    "compute_extension_flags",
    "is_self_signed",
    # Accessors
    "CertificateAccessor",
    "CertificateView",
    # Key identifiers
    "AkidShape",
    "AuthorityKeyId",
    "SubjectKeyId",
    "decode_authority_key_identifier",
    "decode_subject_key_identifier",
    # Names
    "canonical_name",
    "names_equal",
    # OIDs
    "ExtensionOIDs",
    # Config
    "Settings",
    "settings",
    "configure_logging",
    # Errors
    "DecodeError",
    "UnsupportedAlgorithmOrFormat",
    "CertificateValidityError",
    "CertificateExpiredError",
    "CertificateNotYetValidError",
]
