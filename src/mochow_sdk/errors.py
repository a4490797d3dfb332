"""Exception hierarchy for the Mochow SDK.

Every failure raised by the client derives from :class:`MochowError`. A single
call fails in exactly one stage:

- :class:`ParamsError`: local validation, raised before any network I/O
- :class:`TransportError`: connection failure or timeout, after retries
- :class:`ServiceError`: the service answered with a 4xx/5xx status
- :class:`OtherError`: anything else, e.g. an undecodable success body
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .api.common import CommonResponse
    from .api.enums import ServerErrorCode


class MochowError(Exception):
    """Base exception for all Mochow SDK errors.

    Attributes:
        message: Human-readable error description
        code: Optional numeric code for programmatic handling
        context: Optional diagnostic details (operation, url, ...)
    """

    def __init__(
        self, message: str, code: int | None = None, context: dict[str, Any] | None = None
    ) -> None:
        self.message = message
        self.code = code
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.code is not None:
            return f"{self.message} (Code: {self.code})"
        return self.message


class ParamsError(MochowError):
    """Raised when caller-supplied arguments are missing or invalid."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(f"params error: {message}", None, context)


class TransportError(MochowError):
    """Raised when the HTTP exchange itself fails (connect, read, timeout)."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(f"request error: {message}", None, context)


class OtherError(MochowError):
    """Raised for unexpected failures outside the other categories."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(f"other error: {message}", None, context)


class ServiceError(MochowError):
    """Raised when the service returns a 4xx/5xx response.

    Attributes:
        status_code: HTTP status code, e.g. 404
        request_id: Value of the ``Request-ID`` response header, or ``""``
        resp: Decoded ``{code, msg}`` error envelope
        server_code: Symbolic code looked up from ``resp.code``
    """

    def __init__(
        self,
        status_code: int,
        request_id: str,
        resp: CommonResponse,
        server_code: ServerErrorCode,
    ) -> None:
        self.status_code = status_code
        self.request_id = request_id
        self.resp = resp
        self.server_code = server_code
        super().__init__(
            f"service error: status_code: {status_code}, request_id: {request_id}, "
            f"code: {resp.code}, msg: {resp.msg}, server_code: {server_code.name}",
            status_code,
            {"request_id": request_id},
        )

    def __str__(self) -> str:
        return self.message


__all__ = [
    "MochowError",
    "OtherError",
    "ParamsError",
    "ServiceError",
    "TransportError",
]
