"""
Decoding of the Authority and Subject Key Identifier extensions.

Raw extension values are expected the way a certificate reports them: a DER
OCTET STRING wrapping the extnValue. The Authority Key Identifier is also
accepted unwrapped, and in two shapes:

- standard: SEQUENCE { [0] keyIdentifier, [1] authorityCertIssuer, [2] serial }
- bare: SEQUENCE { OCTET STRING }, produced by some issuers; the lone octet
  string is re-wrapped as [0] before reading it as the standard structure.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from asn1crypto import core, parser
from asn1crypto import x509 as asn1_x509

from .exceptions import DecodeError


class AkidShape(Enum):
    """Wire shape an Authority Key Identifier was decoded from."""

    STANDARD = "standard"
    BARE_OCTET_STRING = "bare_octet_string"


@dataclass(frozen=True)
class AuthorityKeyId:
    """Decoded Authority Key Identifier."""

    key_identifier: Optional[bytes]
    shape: AkidShape
    authority_cert_serial_number: Optional[int] = None


@dataclass(frozen=True)
class SubjectKeyId:
    """Decoded Subject Key Identifier."""

    key_identifier: Optional[bytes]


# Universal class tag numbers
_OCTET_STRING = 4
_SEQUENCE = 16


def _parse(data: bytes, what: str) -> tuple:
    """Split one DER value into (class, method, tag, header, contents, trailer)."""
    try:
        return parser.parse(data, strict=True)
    except (ValueError, TypeError) as e:
        raise DecodeError(f"Failed to decode {what}: {e}") from e


def _octets(data: bytes, what: str) -> bytes:
    try:
        return core.OctetString.load(data, strict=True).native
    except (ValueError, TypeError) as e:
        raise DecodeError(f"{what} is not an OCTET STRING: {e}") from e


def _unwrap_sequence(raw: bytes, what: str) -> bytes:
    """Decode raw extension bytes down to the DER SEQUENCE they carry."""
    class_, method, tag, _, _, _ = _parse(raw, what)
    if class_ == 0 and tag == _OCTET_STRING:
        raw = _octets(raw, what)
        class_, method, tag, _, _, _ = _parse(raw, what)
    if (class_, method, tag) != (0, 1, _SEQUENCE):
        raise DecodeError(
            f"{what} is neither a SEQUENCE nor an OCTET STRING wrapper "
            f"(got class {class_}, tag {tag})"
        )
    return raw


def _children(sequence: bytes, what: str) -> list[tuple]:
    """Split the contents of a SEQUENCE into its child TLVs without a schema."""
    contents = _parse(sequence, what)[4]
    children = []
    while contents:
        try:
            length = parser.peek(contents)
        except ValueError as e:
            raise DecodeError(f"Failed to decode {what}: {e}") from e
        children.append(_parse(contents[:length], what))
        contents = contents[length:]
    return children


def _read_akid(sequence: bytes) -> tuple[AkidShape, asn1_x509.AuthorityKeyIdentifier]:
    children = _children(sequence, "authority key identifier")
    if len(children) == 1 and children[0][:3] == (0, 0, _OCTET_STRING):
        akid = asn1_x509.AuthorityKeyIdentifier({'key_identifier': children[0][4]})
        return AkidShape.BARE_OCTET_STRING, akid
    return AkidShape.STANDARD, asn1_x509.AuthorityKeyIdentifier.load(sequence, strict=True)


def decode_authority_key_identifier(raw: bytes) -> AuthorityKeyId:
    """
    Decode an Authority Key Identifier extension value.

    Args:
        raw: Extension value, OCTET STRING wrapped or bare SEQUENCE

    Returns:
        Decoded identifier with the shape it was read from

    Raises:
        DecodeError: If the value has an unexpected ASN.1 shape
    """
    seq = _unwrap_sequence(raw, "authority key identifier")
    try:
        shape, akid = _read_akid(seq)
        return AuthorityKeyId(
            key_identifier=akid['key_identifier'].native,
            shape=shape,
            authority_cert_serial_number=akid['authority_cert_serial_number'].native,
        )
    except (ValueError, TypeError, KeyError) as e:
        raise DecodeError(f"Malformed authority key identifier: {e}") from e


def decode_subject_key_identifier(raw: bytes) -> SubjectKeyId:
    """
    Decode a Subject Key Identifier extension value.

    The value is double wrapped: an OCTET STRING holding the DER of the
    SubjectKeyIdentifier, which is itself an OCTET STRING.

    Args:
        raw: OCTET STRING wrapped extension value

    Returns:
        Decoded identifier

    Raises:
        DecodeError: If the value has an unexpected ASN.1 shape
    """
    inner = _octets(raw, "subject key identifier wrapper")
    return SubjectKeyId(key_identifier=_octets(inner, "subject key identifier"))
