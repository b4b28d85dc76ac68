"""Telemetry — timing spans for codec operations.

Disabled by default; a single ContextVar lookup per call.  ``--verbose``
enables it, and every ``@traced`` service method then returns its span
tree (parse/dump phases with timings and annotations) in
``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from feenctl.services.result import ServiceResult

log = structlog.get_logger("feenctl.telemetry")

_enabled: ContextVar[bool] = ContextVar("_enabled", default=False)
_active_span: ContextVar[Span | None] = ContextVar("_active_span", default=None)


@dataclass
class Span:
    """One timed phase, with nested child phases."""

    name: str
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def end(self) -> None:
        self.finished = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 3)}
        if self.annotations:
            out["annotations"] = dict(self.annotations)
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        return out


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Open a child span under the active one; yields None when disabled."""
    parent = _active_span.get() if _enabled.get() else None
    if parent is None:
        yield None
        return

    child = Span(name=name)
    parent.children.append(child)
    token = _active_span.set(child)
    try:
        yield child
    finally:
        child.end()
        _active_span.reset(token)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time a service method and attach its span tree to the ServiceResult."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        token = _active_span.set(root)
        try:
            result = func(*args, **kwargs)
        finally:
            root.end()
            _active_span.reset(token)

        ok = result.ok if isinstance(result, ServiceResult) else True
        log.debug("span.complete", span=root.name, duration_ms=round(root.duration_ms, 3), ok=ok)
        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": root.to_dict()}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        return result

    return wrapper


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def get_current_span() -> Span | None:
    """The active span for manual annotation, or None when disabled."""
    if not _enabled.get():
        return None
    return _active_span.get()
