"""Volleyball rotation validator CLI using Typer."""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from .errors import RotationError
from .io import load_document
from .logging_utils import configure_logging, get_logger
from .models import AppConfig
from .report import format_report
from .validation import validate_document

app = typer.Typer(help="Validate volleyball rotation files against the overlap rules")

USAGE = (
    "Usage: volley-validate <rotation-file.json> [lineup]\n"
    "  lineup: comma-separated player IDs in Z1-Z6 order for rotation 1\n"
    "  If omitted, lineup is auto-detected from servingBase R1 positions.\n"
    "\n"
    'Example: volley-validate rotations/4-2.json "s1,m1,h2,s2,m2,h1"'
)


@app.command()
def validate(
    path: Annotated[Optional[Path], typer.Argument(help="Rotation JSON file")] = None,
    lineup: Annotated[Optional[str], typer.Argument(help="Comma-separated player IDs, Z1..Z6 in rotation 1")] = None,
    level_ok: Annotated[bool, typer.Option("--level-ok", help="Treat exact alignment as legal (FIVB 7.4.3)")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging on stderr")] = False,
    json_logs: Annotated[bool, typer.Option("--json-logs", help="Emit logs as JSON")] = False,
):
    """Check every phase and rotation in a rotation file; exit 1 on any error."""
    configure_logging("DEBUG" if verbose else "WARNING", json_format=json_logs)
    logger = get_logger(__name__)

    if path is None:
        typer.echo(USAGE, err=True)
        raise typer.Exit(1)
    if not path.is_file():
        typer.echo(f"File not found: {path.resolve()}", err=True)
        typer.echo(USAGE, err=True)
        raise typer.Exit(1)

    try:
        doc = load_document(path)
        report = validate_document(doc, lineup, AppConfig(level_is_legal=level_ok))
    except RotationError as e:
        logger.error("validation_aborted", path=str(path), error=str(e))
        typer.secho(f"Error: {e}", err=True, fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.echo(format_report(doc, report))
    raise typer.Exit(report.exit_code)


def main():
    app()


if __name__ == "__main__":
    main()
