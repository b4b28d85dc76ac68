"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``.  Owns logging setup, the codec service, and result
emission (stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from feenctl.config.logging import configure_logging
from feenctl.output.formatters import OutputSettings, format_result
from feenctl.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from feenctl.config.settings import FeenSettings
    from feenctl.services.codec import CodecService
    from feenctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: FeenSettings) -> None:
        self.settings = settings
        self._codec: CodecService | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @property
    def codec(self) -> CodecService:
        """The codec service (created on first access)."""
        if self._codec is None:
            from feenctl.services.codec import CodecService

            self._codec = CodecService(self.settings)
        return self._codec

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout.  Warnings go to stderr outside JSON mode so piped
          FEEN text stays clean.
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            empty_glyph=self.settings.display.empty_glyph,
            show_hierarchy=self.settings.display.show_hierarchy,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

