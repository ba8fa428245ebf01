"""
Command-line interface for perturbation-bench.

Measures the run-to-run variation of a CPU spin loop or a memory read loop,
to be read as the noise floor of a later microbenchmark of similar duration.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import typer

from pb_common.api import ConfigurationError, PBError, configure_logging, error_to_payload
from pb_ui.cli.commands.measure import run_measurement
from pb_ui.cli.options import UsageRequested, build_config
from pb_ui.wiring.dependencies import UIContext

logger = logging.getLogger(__name__)

ctx_store = UIContext()

EXAMPLES = """
eg,
    p1bench          # 100ms (default) CPU spin loop
    p1bench 300      # 300ms CPU spin loop
    p1bench 300 100  # 300ms CPU spin loop, 100 times
    p1bench -m 1024  # 1GB memory read loop
"""

app = typer.Typer(
    help="Perturbation benchmark: measure CPU or memory loop variation.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _usage(ctx: typer.Context, message: str = "") -> None:
    if message:
        ctx_store.ui.present.line(message)
    typer.echo(ctx.get_help())


@app.command(epilog=EXAMPLES)
def measure(
    ctx: typer.Context,
    args: Optional[List[str]] = typer.Argument(
        None,
        metavar="[TIME_MS [COUNT]]",
        help="Target run time in ms (default 100) and number of runs (default 100).",
        show_default=False,
    ),
    memory_mb: Optional[int] = typer.Option(
        None,
        "-m",
        "--memory",
        metavar="MBYTES",
        help="Memory test working set.",
    ),
    verbose: bool = typer.Option(
        False,
        "-v",
        "--verbose",
        help="Verbose: per run details.",
    ),
    stride: Optional[int] = typer.Option(
        None,
        "--stride",
        metavar="BYTES",
        help="Bytes between memory test reads (default 64, or PB_STRIDE).",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Emit debug logs on stderr.",
    ),
) -> None:
    """Run a CPU spin loop (or memory loop with -m) and report its perturbation."""
    configure_logging(debug=debug, force=True)
    ui = ctx_store.ui

    try:
        config = build_config(args, memory_mb=memory_mb, verbose=verbose, stride=stride)
    except UsageRequested as exc:
        _usage(ctx, exc.message)
        raise typer.Exit(0)
    except ConfigurationError as exc:
        ui.present.error(str(exc))
        _usage(ctx)
        raise typer.Exit(exc.exit_code)

    try:
        run_measurement(config, ui)
    except PBError as exc:
        logger.error("Measurement failed: %s", error_to_payload(exc))
        ui.present.error(str(exc))
        raise typer.Exit(exc.exit_code)


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
