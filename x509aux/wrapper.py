# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Certificate wrapper carrying auxiliary trust data and cached extension flags.

A CertificateWrapper delegates every certificate read to its accessor and
adds two capabilities: memoized extension flags and identity over the
(certificate, aux) pair. Wrappers placed into long-lived caches should be
produced with clone_for_cache() so verification results computed in one
trust context are not reused in another.
"""

import datetime
import logging
import threading
from typing import Any, Optional

from cryptography import x509

from .auxinfo import AuxInfo
from .config import settings
from .flags import ExtensionFlag, compute_extension_flags
from .names import names_equal
from .view import CertificateAccessor, CertificateView

logger = logging.getLogger(__name__)


class CertificateWrapper:
    """X.509 certificate paired with optional auxiliary trust data."""

    def __init__(self, certificate: CertificateAccessor, aux: Optional[AuxInfo] = None):
        """
        Initialize certificate wrapper.

        Args:
            certificate: Decoded certificate accessor
            aux: Auxiliary trust data, if any
        """
        self.certificate = certificate
        self.aux = aux

        # Set once internal signature verification has succeeded
        self.verified = False
        self._extension_flags: Optional[ExtensionFlag] = None
        self._flags_lock = threading.Lock()

    @classmethod
    def from_certificate(cls, certificate: x509.Certificate, aux: Optional[AuxInfo] = None) -> "CertificateWrapper":
        """Wrap a certificate parsed by cryptography."""
        return cls(CertificateView(certificate), aux)

    @classmethod
    def from_der(cls, cert_bytes: bytes, aux: Optional[AuxInfo] = None) -> "CertificateWrapper":
        """Wrap a DER-encoded certificate."""
        return cls(CertificateView.from_der(cert_bytes), aux)

    @classmethod
    def from_pem(cls, cert_bytes: bytes, aux: Optional[AuxInfo] = None) -> "CertificateWrapper":
        """Wrap a PEM-encoded certificate."""
        return cls(CertificateView.from_pem(cert_bytes), aux)

    def clone_for_cache(self) -> "CertificateWrapper":
        """
        Copy this wrapper with fresh verification state.

        The clone shares the certificate accessor and aux data by reference;
        `verified` is reset and extension flags will be recomputed on demand.
        """
        logger.debug("Resetting cached state for certificate serial %s", self.serial_number)
        return CertificateWrapper(self.certificate, self.aux)

    # Extension flags

    @property
    def extension_flags_cached(self) -> bool:
        return self._extension_flags is not None

    def get_extension_flags(self) -> ExtensionFlag:
        """
        Get extension flags, computing them on first access.

        Returns:
            Bit-set of ExtensionFlag values
        """
        flags = self._extension_flags
        if flags is not None:
            return flags

        if not settings.synchronize_extension_flags:
            # Concurrent callers compute the same value; last write wins
            flags = compute_extension_flags(self.certificate)
            self._extension_flags = flags
            return flags

        with self._flags_lock:
            if self._extension_flags is None:
                self._extension_flags = compute_extension_flags(self.certificate)
            return self._extension_flags

    # Delegates

    @property
    def version(self) -> int:
        return self.certificate.version

    @property
    def not_before(self) -> datetime.datetime:
        return self.certificate.not_before

    @property
    def not_after(self) -> datetime.datetime:
        return self.certificate.not_after

    @property
    def issuer(self) -> x509.Name:
        return self.certificate.issuer

    @property
    def subject(self) -> x509.Name:
        return self.certificate.subject

    @property
    def serial_number(self) -> int:
        return self.certificate.serial_number

    @property
    def signature_algorithm_name(self) -> str:
        return self.certificate.signature_algorithm_name

    @property
    def signature(self) -> bytes:
        return self.certificate.signature

    @property
    def public_key(self) -> Any:
        return self.certificate.public_key

    @property
    def public_key_algorithm(self) -> str:
        return self.certificate.public_key_algorithm

    @property
    def basic_constraints(self) -> int:
        return self.certificate.basic_constraints

    @property
    def key_usage(self) -> Optional[list[bool]]:
        return self.certificate.key_usage

    def get_extension_value(self, oid: str) -> Optional[bytes]:
        return self.certificate.get_extension_value(oid)

    def check_validity(self, at: Optional[datetime.datetime] = None) -> None:
        self.certificate.check_validity(at)

    def verify(self, public_key: Any) -> None:
        self.certificate.verify(public_key)

    # Identity

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, CertificateWrapper):
            return NotImplemented
        return self.certificate == other.certificate and self.aux == other.aux

    def __hash__(self) -> int:
        return hash(self.certificate) + 3 * (1 if self.aux is None else hash(self.aux))

    def __repr__(self) -> str:
        return f"CertificateWrapper(certificate={self.certificate!r}, aux={self.aux!r})"


def cache_reset(wrapper: CertificateWrapper) -> CertificateWrapper:
    """Return a copy of wrapper with verification state and extension flags reset."""
    return wrapper.clone_for_cache()


def subjects_equal(a: CertificateWrapper, b: CertificateWrapper) -> bool:
    """
    Compare the subjects of two wrapped certificates.

    Wrappers sharing the same certificate accessor are equal without
    reading either subject name.
    """
    if a.certificate is b.certificate:
        return True
    return names_equal(a.subject, b.subject)
