"""Error taxonomy and JSON error helpers."""

from __future__ import annotations

from typing import Any

from starlette.responses import JSONResponse


class ErrorCode:
    CONFIG_ERROR = "config_error"
    MISSING_SIGNATURE = "missing_signature"
    INVALID_SIGNATURE = "invalid_signature"
    BAD_REQUEST = "bad_request"


class SignedUrlError(Exception):
    """Base class for signing and verification failures."""

    code = ErrorCode.BAD_REQUEST
    default_message = "Signed URL error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigError(SignedUrlError):
    """The signing secret is not available."""

    code = ErrorCode.CONFIG_ERROR
    default_message = "Signing secret not configured"


class SignatureRejected(SignedUrlError):
    """An inbound URL failed signature verification."""


class MissingSignature(SignatureRejected):
    """The query string carries no ``signature`` parameter."""

    code = ErrorCode.MISSING_SIGNATURE
    default_message = "Missing signature"


class InvalidSignature(SignatureRejected):
    """The ``signature`` parameter does not match the recomputed digest."""

    code = ErrorCode.INVALID_SIGNATURE
    default_message = "Invalid signature"


def error_response(
    code: str,
    message: str,
    status_code: int,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    payload = {
        "error": {
            "code": code,
            "message": message,
        }
    }
    if details:
        payload["error"]["details"] = details
    return JSONResponse(payload, status_code=status_code)
