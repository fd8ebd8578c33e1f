"""
Read-only certificate accessors.

CertificateAccessor is the field contract the extension flags engine and
the wrapper consume. CertificateView implements it over a certificate
parsed by cryptography.
"""

import datetime
from typing import Any, Optional, Protocol, runtime_checkable

from asn1crypto import core
from asn1crypto import x509 as asn1_x509
from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed448, ed25519, rsa
from cryptography.x509.oid import ExtensionOID

from .config import settings
from .exceptions import (
    CertificateExpiredError,
    CertificateNotYetValidError,
    UnsupportedAlgorithmOrFormat,
)
from .oids import SUPPORTED_CRITICAL_EXTENSIONS, ExtensionOIDs, get_signature_family

# Key usage bit names in RFC 5280 order
_KEY_USAGE_BITS = (
    "digital_signature",
    "non_repudiation",
    "key_encipherment",
    "data_encipherment",
    "key_agreement",
    "key_cert_sign",
    "crl_sign",
    "encipher_only",
    "decipher_only",
)


class _RawExtension(core.Sequence):
    """Extension whose extnValue is kept as opaque octets."""

    _fields = [
        ("extn_id", core.ObjectIdentifier),
        ("critical", core.Boolean, {"default": False}),
        ("extn_value", core.OctetString),
    ]


class _RawExtensions(core.SequenceOf):
    _child_spec = _RawExtension


@runtime_checkable
class CertificateAccessor(Protocol):
    """Fields of a decoded certificate."""

    @property
    def version(self) -> int: ...

    @property
    def not_before(self) -> datetime.datetime: ...

    @property
    def not_after(self) -> datetime.datetime: ...

    @property
    def issuer(self) -> x509.Name: ...

    @property
    def subject(self) -> x509.Name: ...

    @property
    def serial_number(self) -> int: ...

    @property
    def signature_algorithm_name(self) -> str: ...

    @property
    def signature(self) -> bytes: ...

    @property
    def public_key(self) -> Any: ...

    @property
    def public_key_algorithm(self) -> str: ...

    @property
    def basic_constraints(self) -> int: ...

    @property
    def key_usage(self) -> Optional[list[bool]]: ...

    def get_extension_value(self, oid: str) -> Optional[bytes]: ...


def get_public_key_algorithm(public_key: Any) -> str:
    """Return the algorithm family name of a public key."""
    if isinstance(public_key, rsa.RSAPublicKey):
        return "RSA"
    if isinstance(public_key, ec.EllipticCurvePublicKey):
        return "EC"
    if isinstance(public_key, dsa.DSAPublicKey):
        return "DSA"
    if isinstance(public_key, ed25519.Ed25519PublicKey):
        return "Ed25519"
    if isinstance(public_key, ed448.Ed448PublicKey):
        return "Ed448"
    return public_key.__class__.__name__


class CertificateView:
    """Immutable view over a cryptography X.509 certificate."""

    def __init__(self, certificate: x509.Certificate):
        """
        Initialize certificate view.

        Args:
            certificate: Parsed X.509 certificate
        """
        self._cert = certificate
        self._raw_extensions: Optional[dict[str, tuple[bool, bytes]]] = None

    @classmethod
    def from_der(cls, cert_bytes: bytes) -> "CertificateView":
        """
        Load DER-encoded certificate.

        Raises:
            UnsupportedAlgorithmOrFormat: If certificate cannot be parsed
        """
        try:
            return cls(x509.load_der_x509_certificate(cert_bytes))
        except ValueError as e:
            raise UnsupportedAlgorithmOrFormat(f"Failed to parse certificate: {e}") from e

    @classmethod
    def from_pem(cls, cert_bytes: bytes) -> "CertificateView":
        """
        Load PEM-encoded certificate.

        Raises:
            UnsupportedAlgorithmOrFormat: If certificate cannot be parsed
        """
        try:
            return cls(x509.load_pem_x509_certificate(cert_bytes))
        except ValueError as e:
            raise UnsupportedAlgorithmOrFormat(f"Failed to parse certificate: {e}") from e

    @property
    def certificate(self) -> x509.Certificate:
        return self._cert

    @property
    def encoded(self) -> bytes:
        """DER encoding of the certificate."""
        return self._cert.public_bytes(serialization.Encoding.DER)

    @property
    def version(self) -> int:
        """Certificate version, 1-based (1 for v1, 3 for v3)."""
        return self._cert.version.value + 1

    @property
    def not_before(self) -> datetime.datetime:
        return self._cert.not_valid_before_utc

    @property
    def not_after(self) -> datetime.datetime:
        return self._cert.not_valid_after_utc

    @property
    def issuer(self) -> x509.Name:
        return self._cert.issuer

    @property
    def subject(self) -> x509.Name:
        return self._cert.subject

    @property
    def serial_number(self) -> int:
        return self._cert.serial_number

    @property
    def signature_algorithm_oid(self) -> str:
        return self._cert.signature_algorithm_oid.dotted_string

    @property
    def signature_algorithm_name(self) -> str:
        """Family of the key the certificate was signed with ("RSA", "EC", ...)."""
        return get_signature_family(self._cert.signature_algorithm_oid)

    @property
    def signature(self) -> bytes:
        return self._cert.signature

    @property
    def public_key(self) -> Any:
        try:
            return self._cert.public_key()
        except (ValueError, UnsupportedAlgorithm) as e:
            raise UnsupportedAlgorithmOrFormat(f"Unsupported public key: {e}") from e

    @property
    def public_key_algorithm(self) -> str:
        return get_public_key_algorithm(self.public_key)

    @property
    def raw_extensions(self) -> dict[str, tuple[bool, bytes]]:
        """
        Extensions keyed by dotted OID, as (critical, extnValue octets).

        Values are read without interpreting them, so a malformed or
        non-standard extension only affects code that decodes it.

        Raises:
            UnsupportedAlgorithmOrFormat: If the extension list itself cannot be read
        """
        if self._raw_extensions is None:
            try:
                tbs = asn1_x509.Certificate.load(self.encoded)['tbs_certificate']
                table = {}
                for ext in _RawExtensions(contents=tbs['extensions'].contents):
                    table.setdefault(
                        ext['extn_id'].dotted,
                        (ext['critical'].native, ext['extn_value'].native),
                    )
            except (ValueError, TypeError) as e:
                raise UnsupportedAlgorithmOrFormat(f"Failed to read extensions: {e}") from e
            self._raw_extensions = table
        return self._raw_extensions

    def get_extension_value(self, oid: str) -> Optional[bytes]:
        """
        Get the raw value of an extension.

        Args:
            oid: Dotted extension OID

        Returns:
            DER OCTET STRING wrapping the extnValue, or None if absent
        """
        entry = self.raw_extensions.get(oid)
        if entry is None:
            return None
        return core.OctetString(entry[1]).dump()

    def _load_extension(self, oid: str, spec: type) -> Optional[core.Asn1Value]:
        entry = self.raw_extensions.get(oid)
        if entry is None:
            return None
        try:
            value = spec.load(entry[1], strict=True)
            # Parse every child now so errors surface here
            value.native
        except (ValueError, TypeError) as e:
            raise UnsupportedAlgorithmOrFormat(f"Failed to parse extension {oid}: {e}") from e
        return value

    @property
    def critical_extension_oids(self) -> set[str]:
        return {oid for oid, (critical, _) in self.raw_extensions.items() if critical}

    @property
    def non_critical_extension_oids(self) -> set[str]:
        return {oid for oid, (critical, _) in self.raw_extensions.items() if not critical}

    @property
    def has_unsupported_critical_extension(self) -> bool:
        return bool(self.critical_extension_oids - SUPPORTED_CRITICAL_EXTENSIONS)

    @property
    def basic_constraints(self) -> int:
        """
        CA path length.

        Returns:
            -1 if Basic Constraints is absent or not a CA, the path length
            constraint otherwise (settings.unlimited_path_length if unset)
        """
        value = self._load_extension(ExtensionOIDs.BASIC_CONSTRAINTS, asn1_x509.BasicConstraints)
        if value is None or not value['ca'].native:
            return -1
        path_length = value['path_len_constraint'].native
        if path_length is None:
            return settings.unlimited_path_length
        return path_length

    @property
    def key_usage(self) -> Optional[list[bool]]:
        """Key usage bits in RFC 5280 order, or None if the extension is absent."""
        value = self._load_extension(ExtensionOIDs.KEY_USAGE, asn1_x509.KeyUsage)
        if value is None:
            return None
        usage = value.native
        return [name in usage for name in _KEY_USAGE_BITS]

    @property
    def extended_key_usage(self) -> Optional[list[str]]:
        value = self._load_extension(
            ExtensionOID.EXTENDED_KEY_USAGE.dotted_string, asn1_x509.ExtKeyUsageSyntax
        )
        if value is None:
            return None
        return [purpose.dotted for purpose in value]

    def check_validity(self, at: Optional[datetime.datetime] = None) -> None:
        """
        Check the certificate is within its validity period.

        Args:
            at: Point in time to check (default: now, UTC)

        Raises:
            CertificateExpiredError: If at is after not_after
            CertificateNotYetValidError: If at is before not_before
        """
        at = at or datetime.datetime.now(datetime.timezone.utc)
        if at < self.not_before:
            raise CertificateNotYetValidError(
                f"Certificate not yet valid (valid from {self.not_before})"
            )
        if at > self.not_after:
            raise CertificateExpiredError(
                f"Certificate expired (expired {self.not_after})"
            )

    def verify(self, public_key: Any) -> None:
        """
        Verify the certificate signature with the given public key.

        Raises:
            cryptography.exceptions.InvalidSignature: If the signature does not verify
            UnsupportedAlgorithmOrFormat: If the key type is not supported
        """
        cert = self._cert
        if isinstance(public_key, rsa.RSAPublicKey):
            public_key.verify(
                cert.signature,
                cert.tbs_certificate_bytes,
                cert.signature_algorithm_parameters,
                cert.signature_hash_algorithm,
            )
        elif isinstance(public_key, ec.EllipticCurvePublicKey):
            public_key.verify(
                cert.signature,
                cert.tbs_certificate_bytes,
                ec.ECDSA(cert.signature_hash_algorithm),
            )
        elif isinstance(public_key, dsa.DSAPublicKey):
            public_key.verify(
                cert.signature,
                cert.tbs_certificate_bytes,
                cert.signature_hash_algorithm,
            )
        elif isinstance(public_key, (ed25519.Ed25519PublicKey, ed448.Ed448PublicKey)):
            public_key.verify(cert.signature, cert.tbs_certificate_bytes)
        else:
            raise UnsupportedAlgorithmOrFormat(
                f"Unsupported public key type: {public_key.__class__.__name__}"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CertificateView):
            return NotImplemented
        return self._cert == other._cert

    def __hash__(self) -> int:
        return hash(self._cert)

    def __repr__(self) -> str:
        return f"CertificateView(subject={self._cert.subject.rfc4514_string()})"
