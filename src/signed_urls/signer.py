"""Build and verify signed URLs."""

from __future__ import annotations

from urllib.parse import urlsplit

from signed_urls.canonical import (
    SIGNATURE_PARAM,
    Params,
    as_pairs,
    canonicalize,
    encode_query,
    parse_query,
    split_signature,
)
from signed_urls.common import hmac
from signed_urls.common.errors import ConfigError, InvalidSignature, MissingSignature, SignatureRejected
from signed_urls.common.logging import get_logger
from signed_urls.common.metrics import record_build
from signed_urls.common.settings import Settings, get_settings

logger = get_logger(__name__)


class UrlSigner:
    """
    Signs URLs with a shared secret and verifies inbound ones.

    The secret is read on every call, never modified. A missing secret is
    only reported when a URL is built or verified.
    """

    def __init__(
        self,
        secret: bytes | str | None,
        signature_param: str = SIGNATURE_PARAM,
    ) -> None:
        """
        Initialize signer.

        Args:
            secret: Shared signing secret (str is UTF-8 encoded)
            signature_param: Name of the query parameter carrying the signature
        """
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        self._secret = secret or None
        self._signature_param = signature_param

    @classmethod
    def from_settings(cls, settings: Settings) -> UrlSigner:
        """Create a signer from application settings."""
        return cls(settings.secret_bytes)

    @property
    def signature_param(self) -> str:
        return self._signature_param

    def _require_secret(self) -> bytes:
        if self._secret is None:
            raise ConfigError()
        return self._secret

    def signature(self, path: str, params: Params) -> str:
        """Compute the hex digest over the canonical form of ``path`` and ``params``."""
        secret = self._require_secret()
        return hmac.sign(secret, canonicalize(path, params))

    def build(self, path: str, params: Params) -> str:
        """
        Build a signed URL.

        The signature covers the unescaped canonical form; keys and values
        are percent-encoded on the wire. The signature pair is always
        appended last, after the sorted parameters, e.g.
        ``/path?baz=qux&foo=bar&signature=<hex>`` or ``/path?signature=<hex>``
        when there are no parameters.

        Raises:
            ConfigError: If no secret is configured
            ValueError: If ``params`` already contains the signature key
        """
        pairs = as_pairs(params)
        if any(key == self._signature_param for key, _ in pairs):
            raise ValueError(f"'{self._signature_param}' is a reserved query parameter")

        digest = self.signature(path, pairs)
        query = encode_query(pairs)
        separator = "&" if query else ""
        record_build()
        logger.debug("Signed URL built", path=path, params=len(pairs))
        return f"{path}?{query}{separator}{self._signature_param}={digest}"

    def verify(self, path: str, query_string: str) -> None:
        """
        Verify an inbound path and raw query string.

        Returns None when the signature matches.

        Raises:
            MissingSignature: If the query has no signature parameter
            InvalidSignature: If the signature does not match
            ConfigError: If no secret is configured
        """
        provided, others = split_signature(parse_query(query_string), self._signature_param)
        if provided is None:
            raise MissingSignature()

        secret = self._require_secret()
        if not hmac.verify(secret, canonicalize(path, others), provided):
            raise InvalidSignature()

    def verify_url(self, url: str) -> None:
        """Verify a full URL or a ``path?query`` string."""
        parts = urlsplit(url)
        self.verify(parts.path, parts.query)

    def is_valid(self, path: str, query_string: str) -> bool:
        """Check a signature without raising on rejection."""
        try:
            self.verify(path, query_string)
        except SignatureRejected:
            return False
        return True


def build(path: str, params: Params, settings: Settings | None = None) -> str:
    """Build a signed URL with the process-wide secret."""
    return UrlSigner.from_settings(settings or get_settings()).build(path, params)


def verify(path: str, query_string: str, settings: Settings | None = None) -> None:
    """Verify a path and query string with the process-wide secret."""
    UrlSigner.from_settings(settings or get_settings()).verify(path, query_string)
