"""Result types returned by every wlsdomain service call.

Expected failures (a missing or invalid domain file, a rejected replica
count) come back as ``ok=False`` results carrying an :class:`ErrorCode`;
the CLI turns them into stderr output and exit status 1.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    DOMAIN_NOT_FOUND = "DOMAIN_NOT_FOUND"
    INVALID_DOMAIN = "INVALID_DOMAIN"
    INVALID_REPLICA_COUNT = "INVALID_REPLICA_COUNT"


class ServiceError(BaseModel):
    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        op: Operation name, e.g. ``"resolve_server"`` or ``"scale"``.
        data: Payload on success. Effective specs use wire (camelCase) names.
        warnings: Lookup misses and other non-fatal notes.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(
        cls, op: str, data: dict[str, Any], warnings: list[str] | None = None
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data, warnings=warnings or [])

    @classmethod
    def failure(cls, op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
