"""Inbound guard rejecting requests whose URL signature does not verify."""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable, Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from signed_urls.common.errors import (
    ConfigError,
    InvalidSignature,
    MissingSignature,
    SignedUrlError,
    error_response,
)
from signed_urls.common.logging import get_logger
from signed_urls.common.metrics import record_verification
from signed_urls.signer import UrlSigner

logger = get_logger(__name__)

# Status policy for each failure; the signer itself knows nothing about HTTP.
REJECTION_STATUS: dict[type[SignedUrlError], int] = {
    MissingSignature: 401,
    InvalidSignature: 401,
    ConfigError: 500,
}

Endpoint = Callable[[Request], Awaitable[Response]]


def request_path(request: Request) -> str:
    """
    Get the path exactly as the client sent it.

    Uses the undecoded ``raw_path`` when the server provides one, prefixed
    with ``root_path`` when a proxy stripped it. Falls back to the decoded path.
    """
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return request.url.path

    path = raw_path.decode("latin-1")
    root_path = request.scope.get("root_path", "")
    if root_path and not path.startswith(root_path):
        path = root_path + path
    return path


def check_request(request: Request, signer: UrlSigner) -> None:
    """
    Verify the signature carried by a request URL.

    Raises the same errors as ``UrlSigner.verify``; returns None on success.
    """
    path = request_path(request)
    try:
        signer.verify(path, request.url.query)
    except ConfigError:
        record_verification(ConfigError.code)
        logger.error("Signing secret not configured", path=path)
        raise
    except SignedUrlError as exc:
        record_verification(exc.code)
        logger.warning("Signed URL rejected", path=path, reason=exc.code)
        raise
    record_verification("accepted")
    logger.debug("Signed URL accepted", path=path)


def rejection_response(exc: SignedUrlError) -> JSONResponse:
    """Map a verification failure to its HTTP response."""
    status_code = REJECTION_STATUS.get(type(exc), 401)
    return error_response(exc.code, exc.message, status_code)


class SignedUrlMiddleware(BaseHTTPMiddleware):
    """Signature check in front of every protected route."""

    def __init__(
        self,
        app: ASGIApp,
        signer: UrlSigner,
        protected_paths: Iterable[str] | None = None,
        exempt_paths: Iterable[str] = (),
    ) -> None:
        super().__init__(app)
        self._signer = signer
        self._protected_prefixes = tuple(protected_paths) if protected_paths is not None else None
        self._exempt_paths = set(exempt_paths)

    def _is_protected(self, path: str) -> bool:
        if path in self._exempt_paths:
            return False
        if self._protected_prefixes is None:
            return True
        return path.startswith(self._protected_prefixes)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self._is_protected(request.url.path):
            return await call_next(request)

        try:
            check_request(request, self._signer)
        except SignedUrlError as exc:
            return rejection_response(exc)

        request.state.signed_url = True
        return await call_next(request)


def signed_url_required(signer: UrlSigner) -> Callable[[Endpoint], Endpoint]:
    """Decorate a single Starlette endpoint so it only runs for signed URLs."""

    def decorator(endpoint: Endpoint) -> Endpoint:
        @functools.wraps(endpoint)
        async def wrapper(request: Request) -> Response:
            try:
                check_request(request, signer)
            except SignedUrlError as exc:
                return rejection_response(exc)
            request.state.signed_url = True
            return await endpoint(request)

        return wrapper

    return decorator
