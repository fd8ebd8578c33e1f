"""
Structural comparison of X.509 distinguished names.

Two names are equal when they hold the same RDNs in the same order, where
each attribute value is compared in canonical form: surrounding whitespace
stripped, inner whitespace runs collapsed and case folded. This matches the
canonical comparison relying parties perform, rather than a byte comparison
of the encodings.
"""

import re
from typing import Optional

from cryptography import x509

from .config import settings


_WHITESPACE = re.compile(r"\s+")


def _canonical_value(value: str | bytes) -> str | bytes:
    if isinstance(value, bytes):
        return value
    return _WHITESPACE.sub(" ", value.strip()).casefold()


def canonical_name(name: x509.Name) -> tuple[frozenset, ...]:
    """
    Reduce a distinguished name to a comparable canonical form.

    Args:
        name: Name to canonicalize

    Returns:
        One frozenset of (dotted OID, canonical value) pairs per RDN
    """
    return tuple(
        frozenset(
            (attribute.oid.dotted_string, _canonical_value(attribute.value))
            for attribute in rdn
        )
        for rdn in name.rdns
    )


def names_equal(a: Optional[x509.Name], b: Optional[x509.Name], canonical: Optional[bool] = None) -> bool:
    """
    Compare two distinguished names.

    Args:
        a: First name
        b: Second name
        canonical: Compare canonical forms (default: settings.canonical_name_matching)

    Returns:
        True if the names are structurally equal
    """
    if a is None or b is None:
        return a is b
    if canonical is None:
        canonical = settings.canonical_name_matching
    if not canonical:
        return a == b
    return canonical_name(a) == canonical_name(b)
