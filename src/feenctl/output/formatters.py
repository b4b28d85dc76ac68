"""Output-mode dispatch for ServiceResult.

Three modes, chosen by global CLI flags:
- ``--json``: the full result as indented JSON
- ``--quiet``: the canonical FEEN text when the op produced one
- default: Rich renderers keyed by ``result.op``
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from feenctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from feenctl.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Presentation flags resolved from FeenSettings."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    empty_glyph: str = "."
    show_hierarchy: bool = True


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output mode; defaults to human-readable Rich output.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(
        result,
        verbose=settings.verbose,
        empty_glyph=settings.empty_glyph,
        show_hierarchy=settings.show_hierarchy,
    )
