"""CLI application for lockparse."""

import json
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from lockparse.detect import identify
from lockparse.errors import LockfileError
from lockparse.lookup import ResolvedPackage, resolve_version, split_spec, unique_packages
from lockparse.models import Lockfile
from lockparse.parse_yarn import parse_lockfile

console = Console()


def configure_logging(verbose: bool) -> None:
    """Send lockparse debug logs through rich when --verbose is set."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def read_input(file_path: str) -> tuple[str, str]:
    """Read lockfile text from a path or stdin, returning (content, label)."""
    if file_path == "-":
        return sys.stdin.read(), "<stdin>"

    path_obj = Path(file_path)
    if not path_obj.exists():
        console.print(f"Error: File {file_path} not found", style="red")
        raise typer.Exit(1)

    try:
        return path_obj.read_text(encoding="utf-8"), file_path
    except UnicodeDecodeError:
        console.print(f"Error: File {file_path} must be valid UTF-8 text", style="red")
        raise typer.Exit(1)
    except OSError as e:
        console.print(f"Error: Cannot read {file_path}: {e.strerror}", style="red")
        raise typer.Exit(1)


def load_lockfile(file_path: str) -> Lockfile:
    """Read and parse a yarn lockfile, exiting with status 1 on failure."""
    content, display_path = read_input(file_path)

    filename = file_path if file_path != "-" else None
    lock_format = identify(content, filename)
    if lock_format == "npm":
        console.print("Error: Unsupported lockfile format: npm", style="red")
        raise typer.Exit(1)

    try:
        return parse_lockfile(content, display_path)
    except LockfileError as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(1)


def format_json_output(lockfile: Lockfile) -> str:
    """Format the parsed entries as JSON."""
    return json.dumps(lockfile.entries, indent=2)


def format_table(packages: list[ResolvedPackage], title: str) -> Table:
    """Build a rich table with one row per locked package."""
    table = Table(title=title)
    table.add_column("Package")
    table.add_column("Version")
    table.add_column("Specifiers")
    table.add_column("Dependencies", justify="right")

    for package in packages:
        table.add_row(
            package.name,
            package.info.version or "-",
            ", ".join(package.specs),
            str(len(package.info.dependencies)),
        )
    return table


app = typer.Typer(
    name="lockparse",
    help="lockparse - Read yarn.lock files and look up locked versions",
    add_completion=False,
)


@app.command()
def show(
    file_path: str = typer.Argument(help="Path to yarn.lock (use '-' for stdin)"),
    format_type: str = typer.Option("json", "--format", help="Output format: json or table"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Print the parsed contents of a yarn.lock file."""
    configure_logging(verbose)
    lockfile = load_lockfile(file_path)

    if format_type == "json":
        # Plain print keeps the JSON free of rich markup
        print(format_json_output(lockfile))
    elif format_type == "table":
        console.print(format_table(unique_packages(lockfile.entries), lockfile.source_label))
    else:
        console.print(f"Error: Unknown format: {format_type}", style="red")
        raise typer.Exit(1)


@app.command()
def lookup(
    file_path: str = typer.Argument(help="Path to yarn.lock (use '-' for stdin)"),
    specs: list[str] = typer.Argument(help="Specifiers to resolve, e.g. lodash@^4.17.0"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Print the locked version for each name@range specifier."""
    configure_logging(verbose)
    lockfile = load_lockfile(file_path)

    missing = False
    for spec in specs:
        name, version_range = split_spec(spec)
        version = resolve_version(lockfile.entries, name, version_range)
        if version is None:
            console.print(f"{spec}: not found", style="red", markup=False)
            missing = True
        else:
            console.print(f"{spec}: {version}", markup=False)

    if missing:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
