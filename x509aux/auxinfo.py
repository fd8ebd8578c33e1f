"""
Auxiliary trust data attached to a certificate.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AuxInfo:
    """
    Trust settings carried next to a certificate (OpenSSL X509_CERT_AUX).

    Only equality and hashing are used by the wrapper; the contents are
    interpreted by trust-store code.
    """

    trust: tuple[str, ...] = ()  # Trusted purpose OIDs
    reject: tuple[str, ...] = ()  # Rejected purpose OIDs
    alias: Optional[str] = None
    key_id: Optional[bytes] = None
