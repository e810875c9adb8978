from .section65b import (
    VALID_MESSAGE,
    VALIDITY_YEARS,
    Issuer,
    VerificationResult,
    document_hash,
    generate_certificate,
    render_certificate_text,
    verify_certificate,
)

__all__ = [
    "VALID_MESSAGE",
    "VALIDITY_YEARS",
    "Issuer",
    "VerificationResult",
    "document_hash",
    "generate_certificate",
    "render_certificate_text",
    "verify_certificate",
]
