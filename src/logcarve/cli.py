"""CLI entry point for logcarve."""

from __future__ import annotations

import logging
import os
from typing import Annotated

import typer

from logcarve.commands.config import config_app
from logcarve.commands.parse import parse
from logcarve.commands.profile import profile_app

app = typer.Typer(add_completion=False, no_args_is_help=True)
app.command()(parse)
app.add_typer(profile_app, name="profile")
app.add_typer(config_app, name="config")


@app.callback()
def _configure_logging(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging to stderr")] = False,  # noqa: FBT002
) -> None:
    """Extract, filter and re-serialize fields from access logs."""
    level_name = "DEBUG" if verbose else os.getenv("LOGCARVE_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Entry point for the CLI."""
    app()
