"""Main entry point for the priceprism command line interface."""

from __future__ import annotations

from pathlib import Path

import typer

from priceprism.core.logging import configure_logging

from .fetch import register as register_fetch_commands
from .formatters import FORMAT_NAMES, create_formatter


def create_app() -> typer.Typer:
    """Create a Typer application instance for priceprism."""

    app = typer.Typer(add_completion=False, help="priceprism: batch price downloads with quality control")

    @app.callback()
    def main(
        ctx: typer.Context,
        format: str = typer.Option(
            "table",
            "--format",
            "-f",
            help=f"Output format ({', '.join(FORMAT_NAMES)}).",
            show_default=True,
        ),
        output: Path | None = typer.Option(
            None,
            "--output",
            "-o",
            help="Write output to a file instead of stdout.",
        ),
        log_level: str | None = typer.Option(
            None,
            "--log-level",
            help="Logging level for the JSON logs written to stderr (default: configured level or INFO).",
        ),
        no_color: bool = typer.Option(
            False,
            "--no-color",
            help="Disable colorized output for table format.",
        ),
    ) -> None:
        ctx.ensure_object(dict)
        normalized_format = format.strip().lower()
        try:
            create_formatter(normalized_format, no_color=no_color)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc

        ctx.obj.update(
            {
                "format": normalized_format,
                "output_path": output,
                "log_level": log_level.upper() if log_level else None,
                "no_color": no_color,
            }
        )
        try:
            configure_logging((log_level or "INFO").upper())
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--log-level") from exc

    register_fetch_commands(app)
    return app


app = create_app()


if __name__ == "__main__":  # pragma: no cover
    app()
