"""
Command-line entry point for the metrics pipeline.

Commands:
- simulate: run the synthetic producers against a collector and write the
  collected cycles to the metrics output file.
"""

from __future__ import annotations

from pathlib import Path

import typer

from metrics_pipeline import __version__
from metrics_pipeline.collection import PersisterOpenError
from metrics_pipeline.config import get_settings
from metrics_pipeline.lib.logger import configure_logging, get_logger
from metrics_pipeline.simulation import run_simulation

app = typer.Typer(help="In-process metrics collection pipeline", no_args_is_help=True)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"metrics-pipeline {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """In-process metrics collection pipeline."""


@app.command()
def simulate(
    duration: float | None = typer.Option(
        None, "--duration", "-d", min=0, help="Simulation length in seconds (default: settings)"
    ),
    interval: float | None = typer.Option(
        None, "--interval", "-i", min=0.001, help="Collection interval in seconds (default: settings)"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Metrics output file (default: settings)"
    ),
    seed: int | None = typer.Option(None, "--seed", help="Seed for reproducible synthetic load"),
) -> None:
    """Run synthetic producers and persist one metrics line per collection cycle."""

    settings = get_settings()
    configure_logging(level=settings.log_level, diagnostic_path=settings.diagnostic_log_path)
    logger = get_logger("metrics_pipeline.simulation")

    output_path = output or settings.output_path
    try:
        result = run_simulation(
            output_path,
            duration if duration is not None else settings.simulation_duration_seconds,
            interval if interval is not None else settings.collect_interval_seconds,
            seed=seed,
            logger=logger,
        )
    except PersisterOpenError as exc:
        logger.error("Main execution failed: %s", exc)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(
        f"Metrics collection completed: {result.cycles} cycles written to {result.output_path}"
    )


if __name__ == "__main__":
    app()
