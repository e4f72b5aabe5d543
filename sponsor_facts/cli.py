"""
Command-line interface for sponsor fact lookups.

Uses Typer to expose the pipeline entry point with options for the most
common configuration settings. Supports loading .env files for settings
such as SPONSOR_FACTS_USER_AGENT.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console

from .api import handle_query
from .config import load_config
from .logging_utils import setup_logging

app = typer.Typer(add_completion=False)
console = Console()


@app.callback()
def main():
    """Neutral, de-duplicated facts about sponsors."""


@app.command()
def lookup(
    sponsor: str = typer.Argument(..., help="Sponsor (organization) name."),
    website: str | None = typer.Option(None, "--website", "-w", help="Sponsor website URL or hostname."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_dir: Path | None = typer.Option(
        None, "--log-dir", help="Directory for the log file (enables file logging)."
    ),
    max_facts: int | None = typer.Option(None, "--max-facts", min=1, help="Output fact cap."),
    parallel: bool | None = typer.Option(
        None,
        "--parallel/--sequential",
        help="Query the website and Wikipedia concurrently.",
    ),
):
    """Look up neutral facts about a sponsor.

    Prints the JSON response envelope and exits with a non-zero status
    when the envelope is an error.

    Args:
        sponsor: Sponsor (organization) name
        website: Optional website hint
        config: Optional path to YAML config file
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for the log file
        max_facts: Override the output fact cap
        parallel: Run the website and Wikipedia providers concurrently
    """
    load_dotenv()

    cfg = load_config(str(config) if config else None)

    if log_level:
        cfg.logging.level = log_level
    if log_dir is not None:
        cfg.logging.file = True
    if max_facts is not None:
        cfg.output.max_facts = max_facts
    if parallel is not None:
        cfg.sources.parallel_primary = parallel

    setup_logging(cfg.logging, log_dir)

    response = asyncio.run(handle_query({"sponsor": sponsor, "website": website}, cfg))
    console.print_json(response.body)
    if response.status_code >= 400:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
