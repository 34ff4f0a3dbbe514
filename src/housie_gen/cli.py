from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, cast

import typer
from rich.console import Console

from .config import resolve_parameters
from .core import build_tickets
from .logging_setup import setup_logging
from .render import print_ticket
from .rng import fresh_seed
from .serialize import (
    build_run_meta,
    emit_report_json,
    emit_summary_csv,
    emit_tickets_json,
    load_tickets_json,
)
from .verify import verify as verify_tickets
from .version import __version__

app = typer.Typer(help="Housie ticket generator CLI")
logger = logging.getLogger(__name__)


def _make_console(colors: str) -> Console:
    if colors == "always":
        return Console(force_terminal=True)
    if colors == "never":
        return Console(no_color=True)
    return Console()


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(0)


@app.callback()
def common_options(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show application version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Housie ticket generator."""


@app.command()
def generate(
    config: str = typer.Option(
        None,
        "--config",
        help="Path to config file (YAML/JSON)",
    ),
    count: int = typer.Option(None, "--count", "-n", help="Number of tickets to build"),
    seed: int = typer.Option(None, "--seed", help="Fixed seed for reproducible tickets"),
    rng_engine: str = typer.Option(None, "--rng-engine", help="py_random|numpy_pcg64"),
    max_attempts: int = typer.Option(
        None, "--max-attempts", help="Attempts per ticket before giving up"
    ),
    out_tickets: str = typer.Option(None, "--out-tickets", help="tickets.json output path"),
    out_report: str = typer.Option(None, "--out-report", help="report.json output path"),
    summary_csv: str = typer.Option(None, "--summary-csv", help="Path to summary.csv (optional)"),
    csv_by_column: bool = typer.Option(
        False, "--csv-by-column", help="Include per-column counts in CSV"
    ),
    print_tickets: Optional[bool] = typer.Option(
        None, "--print/--no-print", help="Render tickets to the console"
    ),
    log_file: str = typer.Option(None, "--log-file", help="Log file path"),
    colors: str = typer.Option(None, "--colors", help="auto|always|never"),
    log_level: str = typer.Option(None, "--log-level", help="DEBUG|INFO|WARN|ERROR"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Resolve params and exit"),
    force: bool = typer.Option(False, "--force", help="Overwrite outputs if they exist"),
    no_mkdirs: bool = typer.Option(False, "--no-mkdirs", help="Do not create parent directories"),
) -> None:
    """Build Housie tickets, print them and optionally write JSON/CSV outputs."""

    cli_overrides: Dict[str, Any] = {}
    if count is not None:
        cli_overrides["count"] = count
    if seed is not None:
        cli_overrides["seed.value"] = seed
    if rng_engine:
        cli_overrides["seed.engine"] = rng_engine
    if max_attempts is not None:
        cli_overrides["max_attempts"] = max_attempts
    if out_tickets:
        cli_overrides["out_tickets"] = out_tickets
    if out_report:
        cli_overrides["out_report"] = out_report
    if summary_csv:
        cli_overrides["summary_csv"] = summary_csv
    if print_tickets is not None:
        cli_overrides["print"] = print_tickets
    if log_file:
        cli_overrides["log_file"] = log_file
    if colors:
        cli_overrides["colors"] = colors
    if log_level:
        cli_overrides["log_level"] = log_level

    resolved, params_hash, _cfg_path_unused = resolve_parameters(
        config_path_str=config, cli_overrides=cli_overrides
    )

    setup_logging(
        level=str(resolved.get("log_level", "INFO")),
        log_file=resolved.get("log_file"),
        json_format=(str(resolved.get("log_format", "text")) == "json"),
    )

    if dry_run:
        typer.echo(f"Params hash: {params_hash}")
        raise typer.Exit(0)

    seed_cfg = resolved["seed"]
    seed_value = int(seed_cfg["value"]) if seed_cfg["mode"] == "fixed" else fresh_seed()
    engine = str(seed_cfg.get("engine", "py_random"))
    n_tickets = int(resolved.get("count", 1))

    start_time = time.time()
    batch = build_tickets(
        n_tickets,
        seed=seed_value,
        rng_engine=engine,
        max_attempts=int(resolved.get("max_attempts", 10)),
    )
    elapsed = time.time() - start_time
    logger.info(
        "Generated %d tickets in %.3fs (seed=%d, retries=%d)",
        len(batch.tickets),
        elapsed,
        seed_value,
        batch.total_retries,
    )

    if resolved.get("print", True):
        console = _make_console(str(resolved.get("colors", "auto")))
        for idx, ticket in enumerate(batch.tickets, start=1):
            print_ticket(ticket, title=f"HOUSIE TICKET {idx}", console=console)

    report = verify_tickets(batch.tickets)

    run_meta = build_run_meta(
        app_version=__version__,
        params_hash=params_hash,
        seed=seed_value,
        rng_engine=engine,
    )

    if resolved.get("out_tickets"):
        emit_tickets_json(
            Path(resolved["out_tickets"]),
            tickets=batch.tickets,
            run_meta=run_meta,
            mkdirs=(not no_mkdirs),
            overwrite=force,
        )
        typer.echo(f"Tickets written to {resolved['out_tickets']}")

    if resolved.get("out_report"):
        emit_report_json(
            Path(resolved["out_report"]),
            report=report,
            mkdirs=(not no_mkdirs),
            overwrite=force,
        )
        typer.echo(f"Report written to {resolved['out_report']}")

    if resolved.get("summary_csv"):
        freqs = report.get("frequencies", {})
        if not isinstance(freqs, dict):
            freqs = {}
        emit_summary_csv(
            Path(resolved["summary_csv"]),
            freqs=freqs,
            by_column=csv_by_column,
            mkdirs=(not no_mkdirs),
            overwrite=force,
        )

    typer.echo(f"Generated {len(batch.tickets)} tickets (seed {seed_value})")
    raise typer.Exit(code=0)


@app.command()
def verify(
    tickets: str = typer.Option(..., "--tickets", help="Path to tickets.json"),
    report: str = typer.Option(None, "--report", help="Write report.json to this path"),
    force: bool = typer.Option(False, "--force", help="Overwrite report if it exists"),
) -> None:
    """Check every ticket in a tickets.json file; exit 1 if any is invalid."""
    loaded = load_tickets_json(Path(tickets))
    result = verify_tickets(loaded)

    invalid = cast(Dict[str, List[str]], result["invalid_tickets"])
    for idx, problems in invalid.items():
        for problem in problems:
            typer.echo(f"ticket {int(idx) + 1}: {problem}")

    if report:
        emit_report_json(Path(report), report=result, mkdirs=True, overwrite=force)

    typer.echo(f"Checked {len(loaded)} tickets, {len(invalid)} invalid")
    raise typer.Exit(code=0 if result["ok_all_valid"] else 1)


def main(_argv: list[str] | None = None) -> int:
    try:
        app(standalone_mode=True)
        return 0
    except SystemExit as e:
        return int(e.code) if e.code is not None else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
