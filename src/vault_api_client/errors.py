"""
Client errors.

Every failure the client surfaces is a ClientError. Callers can catch the
base class and branch on ``code``: 0 for failures without an HTTP status
(network, decoding, mapping), otherwise the response status.
"""

import json
from typing import Any

import httpx
import structlog

logger = structlog.get_logger()


class ClientError(Exception):
    """Base exception for all Vault API client failures."""

    def __init__(self, message: str, code: int = 0, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.cause = cause
        self.__cause__ = cause


class NetworkError(ClientError):
    """Connection, timeout or TLS failure. Never carries a response."""


class HttpStatusError(ClientError):
    """Terminal non-2xx response."""

    def __init__(
        self,
        message: str,
        code: int = 0,
        cause: BaseException | None = None,
        error_code: str | None = None,
        response: httpx.Response | None = None,
    ):
        super().__init__(message, code, cause)
        self.error_code = error_code
        self.response = response


class DecodeError(ClientError):
    """Response body is not the JSON shape expected."""


class MappingError(ClientError):
    """Response body parsed but could not be mapped to a response model."""


def _is_blank(value: Any) -> bool:
    """Empty in the error envelope sense: missing, zero, "0" or empty."""
    return not value or value == "0"


def translate_request_error(exc: Exception) -> HttpStatusError | None:
    """
    Build a structured error from the response attached to a failed request.

    Returns None when there is no response, or when its body does not
    carry the ``{"code": ..., "error": ...}`` envelope. A body that is not
    JSON at all yields an error with the original message; the parse
    failure itself is discarded.
    """
    if not isinstance(exc, httpx.HTTPStatusError):
        return None
    response = exc.response

    try:
        data = json.loads(response.content)
    except ValueError:
        return HttpStatusError(
            str(exc).strip(),
            response.status_code,
            exc,
            response=response,
        )

    if not isinstance(data, dict):
        return None
    if _is_blank(data.get("error")) or _is_blank(data.get("code")):
        return None

    return HttpStatusError(
        f"{data['code']}: {data['error']}".strip(),
        response.status_code,
        exc,
        error_code=str(data["code"]),
        response=response,
    )


def to_client_error(exc: Exception) -> ClientError:
    """Convert any httpx failure into exactly one ClientError."""
    error: ClientError | None = translate_request_error(exc)
    if error is None:
        if isinstance(exc, httpx.HTTPStatusError):
            error = HttpStatusError(str(exc).strip(), exc.response.status_code, exc, response=exc.response)
        else:
            error = NetworkError(str(exc).strip(), 0, exc)

    logger.debug(
        "vault_request_failed",
        error_type=type(error).__name__,
        code=error.code,
        message=error.message,
    )
    return error
