"""Uniform service results and backend error translation."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

import structlog
from fastapi.responses import JSONResponse

from futureedge_api.responses import error_response

log = structlog.get_logger(__name__)

ErrorKind = Literal[
    "validation", "not_found", "permission_denied", "conflict", "backend_error",
]

ERROR_STATUS: dict[str, int] = {
    "validation": 400,
    "permission_denied": 403,
    "not_found": 404,
    "conflict": 409,
    "backend_error": 502,
}


@dataclass
class ServiceResult:
    """Outcome of a data-access call.

    Services never raise for backend failures; they return a failed result
    carrying a user-facing message and an error kind the router maps to an
    HTTP status.
    """

    success: bool
    data: Any = None
    error: str | None = None
    error_kind: ErrorKind | None = None
    count: int | None = None
    message: str | None = None
    page: int | None = None
    page_size: int | None = None

    @classmethod
    def ok(cls, data: Any = None, **kwargs: Any) -> "ServiceResult":
        return cls(success=True, data=data, **kwargs)

    @classmethod
    def fail(
        cls,
        error: str,
        kind: ErrorKind = "backend_error",
        **kwargs: Any,
    ) -> "ServiceResult":
        return cls(success=False, error=error, error_kind=kind, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


def translate_backend_error(exc: Exception, action: str = "update") -> tuple[ErrorKind, str]:
    """
    Turn a PostgREST / Postgres error into an error kind and readable message.

    Args:
        exc:    Exception raised by the supabase client.
        action: Verb used in the message ("update", "delete", ...).

    Returns:
        (kind, message)
    """
    code = getattr(exc, "code", None)
    message = getattr(exc, "message", None) or str(exc)

    if code in ("PGRST301", "PGRST116"):
        return "not_found", f"Record not found or you do not have permission to {action} it."
    if code == "42501":
        return "permission_denied", (
            f"Permission denied. You do not have access to {action} this record."
        )
    if code == "23505":
        return "conflict", "A record with this unique value already exists."
    if code == "23503":
        return "conflict", "Invalid reference. The related record does not exist."
    if "RLS" in message:
        return "permission_denied", (
            "Access denied by security policy. Please contact an administrator."
        )
    return "backend_error", message


def failure_from_exception(
    exc: Exception,
    *,
    table: str,
    action: str,
    **kwargs: Any,
) -> ServiceResult:
    kind, message = translate_backend_error(exc, action)
    log.error(
        "backend_call_failed",
        table=table,
        action=action,
        code=getattr(exc, "code", None),
        error=str(exc),
    )
    return ServiceResult.fail(message, kind, **kwargs)


def result_error_response(result: ServiceResult) -> JSONResponse:
    """Render a failed ServiceResult as the standard error envelope."""
    kind = result.error_kind or "backend_error"
    return JSONResponse(
        status_code=ERROR_STATUS.get(kind, 502),
        content=error_response(kind, result.error or "Request failed"),
    )
