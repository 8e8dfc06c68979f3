"""Batch download commands for the priceprism CLI."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from contextlib import ExitStack

import typer

from priceprism.core.config.settings import ConfigManager, PricePrismConfig, settings_from_config
from priceprism.core.data.providers.registry import classify_source
from priceprism.core.data.schema import PANEL_COLUMNS
from priceprism.core.exceptions import ConfigurationError, PricePrismError
from priceprism.core.logging import configure_logging
from priceprism.core.models.control import CONTROL_COLUMNS
from priceprism.core.services.batch import BatchOrchestrator

from .constants import SYSTEM_EXIT_CODE, VALIDATION_EXIT_CODE
from .utils import emit_error, frame_to_rows, prepare_output


def get_orchestrator() -> BatchOrchestrator:
    """Factory hook for obtaining a :class:`BatchOrchestrator` instance."""

    return BatchOrchestrator()


def get_config_manager() -> ConfigManager:
    return ConfigManager()


def _apply_logging_config(ctx: typer.Context, config: PricePrismConfig) -> None:
    # --log-level on the command line beats the configured level
    level = (ctx.obj or {}).get("log_level") or config.logging.level
    try:
        configure_logging(
            level.upper(),
            file_output=config.logging.file is not None,
            file_path=config.logging.file,
        )
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid logging level {level!r}: {exc}", param_hint="logging.level") from exc


def fetch_command(
    ctx: typer.Context,
    tickers: list[str] = typer.Argument(..., help="Tickers to download, e.g. AAPL MSFT PETR4.SA."),
    first_date: str | None = typer.Option(None, "--first-date", help="First date (YYYY-MM-DD), default 30 days ago."),
    last_date: str | None = typer.Option(None, "--last-date", help="Last date (YYYY-MM-DD), default today."),
    bench_ticker: str | None = typer.Option(None, "--bench-ticker", help="Benchmark ticker defining the date calendar."),
    type_return: str | None = typer.Option(None, "--type-return", help="Return type: arit or log."),
    freq: str | None = typer.Option(None, "--freq", help="Frequency: daily, weekly, monthly or yearly."),
    thresh: float | None = typer.Option(None, "--thresh", help="Minimum share of benchmark dates to keep a ticker."),
    complete: bool | None = typer.Option(None, "--complete/--no-complete", help="Balance the panel over all dates."),
    fill: bool | None = typer.Option(None, "--fill/--no-fill", help="Fill missing prices in a completed panel."),
    cache: bool | None = typer.Option(None, "--cache/--no-cache", help="Use the on-disk cache."),
    cache_folder: str | None = typer.Option(None, "--cache-folder", help="Where cache files are stored."),
    workers: int = typer.Option(1, "--workers", min=1, help="Fetch tickers in parallel with N threads."),
    control_only: bool = typer.Option(False, "--control-only", help="Only print the control table."),
) -> None:
    """Download prices for TICKERS and print the control table and the panel."""

    config = get_config_manager().get_config()
    _apply_logging_config(ctx, config)
    formatter, stream, stack, options = prepare_output(ctx)
    settings = settings_from_config(
        config,
        first_date=first_date,
        last_date=last_date,
        bench_ticker=bench_ticker,
        return_type=type_return,
        frequency=freq,
        thresh_bad_data=thresh,
        do_complete_data=complete,
        do_fill_missing_prices=fill,
        do_cache=cache,
        cache_folder=cache_folder,
        do_parallel=workers > 1,
    )

    orchestrator = get_orchestrator()
    with stack, ExitStack() as pool_stack:
        executor = None
        if workers > 1:
            # the CLI owns the pool; the orchestrator only uses it
            executor = pool_stack.enter_context(ThreadPoolExecutor(max_workers=workers))
        try:
            result = orchestrator.run(tickers, settings, executor=executor)
        except ConfigurationError as error:
            emit_error(error.message, error.error_code, details=error.details)
            raise typer.Exit(code=VALIDATION_EXIT_CODE) from error
        except PricePrismError as error:
            emit_error(error.message, error.error_code, details=error.details)
            raise typer.Exit(code=SYSTEM_EXIT_CODE) from error

        if options.format == "csv":
            frame, columns = (result.control, CONTROL_COLUMNS) if control_only else (result.prices, PANEL_COLUMNS)
            formatter.render(frame_to_rows(frame), stream=stream, columns=list(columns))
            return

        formatter.render(frame_to_rows(result.control), stream=stream, columns=list(CONTROL_COLUMNS), title="control")
        if not control_only:
            formatter.render(frame_to_rows(result.prices), stream=stream, columns=list(PANEL_COLUMNS), title="prices")


def sources_command(
    ctx: typer.Context,
    tickers: list[str] = typer.Argument(..., help="Tickers to classify."),
) -> None:
    """Show the price source each ticker resolves to."""

    formatter, stream, stack, _ = prepare_output(ctx)
    rows = []
    for ticker in tickers:
        source = classify_source(ticker)
        rows.append({"ticker": ticker, "source": source.value, "deprecated": source.deprecated})
    with stack:
        formatter.render(rows, stream=stream, columns=["ticker", "source", "deprecated"])


def register(app: typer.Typer) -> None:
    """Register the batch commands on the provided application."""

    app.command("fetch")(fetch_command)
    app.command("sources")(sources_command)


__all__ = ["fetch_command", "get_config_manager", "get_orchestrator", "register", "sources_command"]
