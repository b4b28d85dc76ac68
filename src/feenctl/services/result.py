"""ServiceResult and ServiceError — what every codec operation returns.

INVARIANT: service methods never raise FEEN errors to their caller.
A :class:`~feenctl.domain.errors.FeenError` becomes ``ok=False`` with the
error's code, message, and positional context in ``error.detail``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from feenctl.domain.errors import FeenError


class ServiceError(BaseModel):
    """Structured error payload: stable code, message, positional detail."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: FeenError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=exc.context())


class ServiceResult(BaseModel):
    """Outcome of a single operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"parse"``, ``"hands"``, ...); selects the renderer.
        data: Operation-specific payload on success.
        warnings: Non-fatal observations (e.g. input was not canonical).
        error: Structured error when ``ok`` is False.
        meta: Optional metadata such as telemetry spans.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, exc: FeenError) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
