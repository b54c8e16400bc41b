"""Profile subcommands for logcarve."""

from __future__ import annotations

from typing import Annotated

import typer

from logcarve.decoders import DecoderName
from logcarve.errors import LogcarveError
from logcarve.formatters import OutputFormat
from logcarve.profiles import create_profile, delete_profile, list_profiles, load_profile, save_profile

profile_app = typer.Typer(name="profile", help="Manage saved parse profiles")


@profile_app.command("save")
def save(  # noqa: PLR0913
    name: Annotated[str, typer.Argument(help="Profile name")],
    decoder: Annotated[DecoderName, typer.Option("--decoder", "-d", help="Line decoder or preset")] = DecoderName.REGEX,
    patterns: Annotated[list[str] | None, typer.Option("--pattern", "-p", help="Regex with named groups")] = None,
    field_delimiter: Annotated[str, typer.Option("--field-delimiter", help="LTSV field delimiter")] = "\t",
    kv_delimiter: Annotated[str, typer.Option("--kv-delimiter", help="LTSV label/value delimiter")] = ":",
    labels: Annotated[list[str] | None, typer.Option("--labels", "-l", help="Labels to output, in order")] = None,
    filters: Annotated[list[str] | None, typer.Option("--filter", "-f", help="Filter expression")] = None,
    skip: Annotated[list[int] | None, typer.Option("--skip", "-s", help="Line number to skip")] = None,
    fmt: Annotated[OutputFormat | None, typer.Option("--format", "-F", help="Output format")] = None,
    prefix: Annotated[bool | None, typer.Option("--prefix/--no-prefix", help="Mark output lines")] = None,
    unmatch: Annotated[bool | None, typer.Option("--unmatch/--no-unmatch", help="Output unmatched lines")] = None,
    line_number: Annotated[
        bool | None, typer.Option("--line-number/--no-line-number", help="Add the input line number")
    ] = None,
) -> None:
    """Save parse options under a name, replacing any profile of that name."""
    try:
        path = save_profile(
            create_profile(
                name,
                decoder=decoder,
                patterns=patterns or [],
                field_delimiter=field_delimiter,
                kv_delimiter=kv_delimiter,
                labels=[n.strip() for v in labels or [] for n in v.split(",") if n.strip()],
                filters=filters or [],
                skip_lines=skip or [],
                output_format=fmt,
                prefix=prefix,
                unmatch_lines=unmatch,
                line_number=line_number,
            )
        )
    except LogcarveError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)  # noqa: B904
    typer.echo(f"Saved profile '{name}' to {path}")


@profile_app.command("list")
def list_() -> None:
    """List saved profiles."""
    for name in list_profiles():
        typer.echo(name)


@profile_app.command("show")
def show(name: Annotated[str, typer.Argument(help="Profile name")]) -> None:
    """Print a saved profile."""
    try:
        profile = load_profile(name)
    except LogcarveError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)  # noqa: B904
    for key, value in profile.model_dump(mode="json", exclude={"name"}, exclude_none=True).items():
        typer.echo(f"{key} = {value!r}")


@profile_app.command("delete")
def delete(name: Annotated[str, typer.Argument(help="Profile name")]) -> None:
    """Delete a saved profile."""
    try:
        delete_profile(name)
    except LogcarveError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)  # noqa: B904
    typer.echo(f"Deleted profile '{name}'")
