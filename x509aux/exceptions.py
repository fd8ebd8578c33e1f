"""
Exceptions raised while inspecting wrapped certificates.
"""


class DecodeError(ValueError):
    """Malformed or unexpected ASN.1 shape in a key identifier extension."""


class UnsupportedAlgorithmOrFormat(ValueError):
    """The certificate (or one of its extensions) could not be parsed."""


class CertificateValidityError(ValueError):
    """Certificate is outside its validity period."""


class CertificateExpiredError(CertificateValidityError):
    """Certificate not_after lies in the past."""


class CertificateNotYetValidError(CertificateValidityError):
    """Certificate not_before lies in the future."""
