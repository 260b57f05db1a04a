"""
signed-urls: canonical-form URL signing and verification.

Build URLs whose query string carries an HMAC-SHA256 ``signature`` parameter and
guard Starlette routes so only URLs issued by a holder of the shared secret get through.
"""

from signed_urls.common.errors import (
    ConfigError,
    InvalidSignature,
    MissingSignature,
    SignatureRejected,
    SignedUrlError,
)
from signed_urls.guard import SignedUrlMiddleware, check_request, signed_url_required
from signed_urls.signer import UrlSigner, build, verify

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "InvalidSignature",
    "MissingSignature",
    "SignatureRejected",
    "SignedUrlError",
    "SignedUrlMiddleware",
    "UrlSigner",
    "build",
    "check_request",
    "signed_url_required",
    "verify",
]
