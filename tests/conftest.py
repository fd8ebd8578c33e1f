"""Pytest configuration and fixtures."""

import datetime
from typing import Any, Optional

import pytest
from asn1crypto import core
from asn1crypto import x509 as asn1_x509
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from x509aux.oids import ExtensionOIDs


def make_name(common_name: str, organization: str = "Example Trust") -> x509.Name:
    """Build a two-attribute distinguished name."""
    return x509.Name([
        x509.NameAttribute(NameOID.COMMON_NAME, common_name),
        x509.NameAttribute(NameOID.ORGANIZATION_NAME, organization),
    ])


# ASN.1 extension values, wrapped the way CertificateView reports them

class BareAuthorityKeyIdentifier(core.Sequence):
    """Non-standard AKID: SEQUENCE { OCTET STRING }."""

    _fields = [('key_identifier', core.OctetString)]


def wrap_octets(der: bytes) -> bytes:
    return core.OctetString(der).dump()


def akid_value(key_id: bytes) -> bytes:
    return wrap_octets(asn1_x509.AuthorityKeyIdentifier({'key_identifier': key_id}).dump())


def bare_akid_value(key_id: bytes) -> bytes:
    return wrap_octets(BareAuthorityKeyIdentifier({'key_identifier': key_id}).dump())


def skid_value(key_id: bytes) -> bytes:
    return wrap_octets(core.OctetString(key_id).dump())


def basic_constraints_value(ca: bool) -> bytes:
    return wrap_octets(asn1_x509.BasicConstraints({'ca': ca}).dump())


PROXY_CERT_INFO_VALUE = wrap_octets(b"\x30\x00")


class FakeCertificate:
    """
    In-memory certificate accessor.

    Counts extension lookups and subject reads so tests can observe how much
    decoding work the wrapper performs.
    """

    def __init__(
        self,
        *,
        version: int = 3,
        subject: Optional[x509.Name] = None,
        issuer: Optional[x509.Name] = None,
        serial_number: int = 1,
        signature_algorithm_name: str = "RSA",
        public_key_algorithm: str = "RSA",
        basic_constraints: int = -1,
        key_usage: Optional[list[bool]] = None,
        extensions: Optional[dict[str, bytes]] = None,
    ):
        self.version = version
        self._subject = subject if subject is not None else make_name("Leaf")
        self.issuer = issuer if issuer is not None else make_name("Issuing CA")
        self.serial_number = serial_number
        self.signature_algorithm_name = signature_algorithm_name
        self.public_key_algorithm = public_key_algorithm
        self.basic_constraints = basic_constraints
        self.key_usage = key_usage
        self.extensions = dict(extensions or {})
        self.not_before = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
        self.not_after = datetime.datetime(2034, 1, 1, tzinfo=datetime.timezone.utc)
        self.signature = b"\x00" * 64
        self.public_key: Any = None

        self.extension_lookups = 0
        self.subject_reads = 0

    @property
    def subject(self) -> x509.Name:
        self.subject_reads += 1
        return self._subject

    def get_extension_value(self, oid: str) -> Optional[bytes]:
        self.extension_lookups += 1
        return self.extensions.get(oid)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FakeCertificate):
            return NotImplemented
        return (self.serial_number, self._subject) == (other.serial_number, other._subject)

    def __hash__(self) -> int:
        return hash((self.serial_number, self._subject))


def self_signed_ca(key_id: bytes = b"\xa1\xb2", **overrides) -> FakeCertificate:
    """Self-issued RSA CA with matching AKID/SKID."""
    name = make_name("Example Root CA")
    fields = dict(
        subject=name,
        issuer=name,
        basic_constraints=2**31 - 1,
        extensions={
            ExtensionOIDs.BASIC_CONSTRAINTS: basic_constraints_value(True),
            ExtensionOIDs.AUTHORITY_KEY_IDENTIFIER: akid_value(key_id),
            ExtensionOIDs.SUBJECT_KEY_IDENTIFIER: skid_value(key_id),
        },
    )
    fields.update(overrides)
    return FakeCertificate(**fields)


# Real certificates built with cryptography

def build_certificate(
    subject: x509.Name,
    subject_key,
    issuer: Optional[x509.Name] = None,
    issuer_key=None,
    ca: Optional[bool] = None,
    path_length: Optional[int] = None,
    key_usage: bool = False,
    key_identifiers: bool = True,
    akid_der: Optional[bytes] = None,
    extra_extensions: Optional[list[x509.ExtensionType]] = None,
    valid_from: Optional[datetime.datetime] = None,
    validity_days: int = 365,
) -> x509.Certificate:
    """
    Build and sign a certificate.

    Args:
        subject: Subject name
        subject_key: Subject private key
        issuer: Issuer name (default: subject, i.e. self-issued)
        issuer_key: Signing private key (default: subject_key)
        ca: Add Basic Constraints with this CA value (None: omit)
        path_length: pathLenConstraint for a CA
        key_usage: Add a Key Usage extension
        key_identifiers: Add SKID and AKID extensions
        akid_der: Raw AKID extnValue used instead of the computed one
        extra_extensions: Additional non-critical extensions
        valid_from: Start of validity (default: one day ago)
        validity_days: Validity period in days
    """
    issuer = issuer if issuer is not None else subject
    issuer_key = issuer_key if issuer_key is not None else subject_key
    valid_from = valid_from or datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(days=1)

    builder = (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer)
        .public_key(subject_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(valid_from)
        .not_valid_after(valid_from + datetime.timedelta(days=validity_days))
    )

    if ca is not None:
        builder = builder.add_extension(
            x509.BasicConstraints(ca=ca, path_length=path_length if ca else None),
            critical=True,
        )

    if key_usage:
        builder = builder.add_extension(
            x509.KeyUsage(
                digital_signature=True,
                content_commitment=False,
                key_encipherment=False,
                data_encipherment=False,
                key_agreement=False,
                key_cert_sign=False,
                crl_sign=False,
                encipher_only=False,
                decipher_only=False,
            ),
            critical=True,
        )

    if key_identifiers:
        builder = builder.add_extension(
            x509.SubjectKeyIdentifier.from_public_key(subject_key.public_key()),
            critical=False,
        )
        if akid_der is None:
            akid = x509.AuthorityKeyIdentifier.from_issuer_public_key(issuer_key.public_key())
        else:
            akid = x509.UnrecognizedExtension(x509.oid.ExtensionOID.AUTHORITY_KEY_IDENTIFIER, akid_der)
        builder = builder.add_extension(akid, critical=False)

    for extension in extra_extensions or []:
        builder = builder.add_extension(extension, critical=False)

    return builder.sign(issuer_key, hashes.SHA256())


@pytest.fixture(scope="session")
def ca_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def leaf_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def root_name():
    return make_name("Example Root CA")


@pytest.fixture(scope="session")
def root_certificate(ca_key, root_name) -> x509.Certificate:
    """Self-signed EC root CA."""
    return build_certificate(root_name, ca_key, ca=True)


@pytest.fixture(scope="session")
def leaf_certificate(ca_key, leaf_key, root_name) -> x509.Certificate:
    """End-entity certificate issued by the root CA."""
    return build_certificate(
        make_name("device-001.example.test"),
        leaf_key,
        issuer=root_name,
        issuer_key=ca_key,
        ca=False,
        key_usage=True,
    )
