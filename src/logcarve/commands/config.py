"""Config subcommands for logcarve."""

from __future__ import annotations

from typing import Annotated

import typer

from logcarve.config import get_config_dir, load_config, save_config
from logcarve.formatters import OutputFormat

config_app = typer.Typer(name="config", help="Show or change default output options")


@config_app.command("show")
def show() -> None:
    """Print the effective defaults and where they are stored."""
    typer.echo(f"# {get_config_dir() / 'config.toml'}")
    for key, value in load_config().model_dump(mode="json").items():
        typer.echo(f"{key} = {value!r}")


@config_app.command("set")
def set_(
    fmt: Annotated[OutputFormat | None, typer.Option("--format", "-F", help="Default output format")] = None,
    prefix: Annotated[bool | None, typer.Option("--prefix/--no-prefix", help="Mark output lines")] = None,
    unmatch: Annotated[bool | None, typer.Option("--unmatch/--no-unmatch", help="Output unmatched lines")] = None,
    line_number: Annotated[
        bool | None, typer.Option("--line-number/--no-line-number", help="Add the input line number")
    ] = None,
) -> None:
    """Change default output options; unspecified options keep their value."""
    changes = {
        "output_format": fmt,
        "prefix": prefix,
        "unmatch_lines": unmatch,
        "line_number": line_number,
    }
    config = load_config().model_copy(update={k: v for k, v in changes.items() if v is not None})
    path = save_config(config)
    typer.echo(f"Saved config to {path}")
