"""
seqcite command-line interface.

Thin Typer/Rich surface over the check service and the accession catalog.
"""

import json
import logging
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from seqcite.config.settings import get_settings
from seqcite.core.identifiers import extract_accession_from_text, match_accession
from seqcite.core.schemas import CheckReport
from seqcite.tools.check_service import CheckService
from seqcite.tools.validators import (
    ValidatorRegistry,
    deadline_after,
    get_validator_registry,
    register_accession_validators,
)
from seqcite.utils.logger import enable_rich_logging
from seqcite.version import __version__

console = Console()

app = typer.Typer(
    name="seqcite",
    help="Identify and validate sequence-archive accessions (SRA/ENA/DDBJ, GSA, GEO)",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool):
    if value:
        console.print(f"seqcite {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show debug logging"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """seqcite - sequence-archive accession validator."""
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.getLevelName(get_settings().LOG_LEVEL)
        if not isinstance(level, int):
            level = logging.WARNING
    enable_rich_logging(level)


def _build_registry(fetch_metadata: bool) -> ValidatorRegistry:
    if fetch_metadata:
        return get_validator_registry()
    registry = ValidatorRegistry()
    register_accession_validators(registry, fetch_metadata=False)
    return registry


def _status(valid: bool) -> str:
    return "[green]valid[/green]" if valid else "[red]invalid[/red]"


def _print_report(report: CheckReport, show_all: bool) -> None:
    if report.best is None:
        console.print(f"[red]✗[/red] {report.input}: {report.error}")
        return

    results = report.results if show_all else [report.best]

    table = Table(
        title=report.input,
        box=box.SIMPLE,
        show_header=True,
        header_style="bold",
        title_justify="left",
    )
    table.add_column("Validator")
    table.add_column("Status")
    table.add_column("Accession")
    table.add_column("Type")
    table.add_column("Confidence", justify="right")
    table.add_column("Likelihood", justify="right")
    table.add_column("URL", overflow="fold")

    for result in results:
        kind = result.dataset_type
        if result.subtype:
            kind = f"{kind} ({result.subtype})"
        table.add_row(
            result.validator_name,
            _status(result.valid),
            result.normalized_id or "-",
            kind or "-",
            f"{result.confidence:.2f}",
            f"{result.likelihood:.2f}",
            result.primary_url or "-",
        )
    console.print(table)

    best = report.best
    if best.error:
        console.print(f"  [red]error:[/red] {best.error}")
    for warning in best.warnings:
        console.print(f"  [yellow]warning:[/yellow] {warning}")
    if best.tags:
        console.print(f"  [dim]tags: {', '.join(best.tags)}[/dim]")


@app.command()
def check(
    inputs: List[str] = typer.Argument(
        ..., help="Accessions, URLs or text snippets to check"
    ),
    output_json: bool = typer.Option(
        False, "--json", "-j", help="Output results as JSON"
    ),
    show_all: bool = typer.Option(
        False, "--all", "-a", help="Show results from every capable validator"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Overall time budget per input in seconds"
    ),
    fetch_metadata: bool = typer.Option(
        True, "--metadata/--no-metadata", help="Fetch remote archive metadata"
    ),
):
    """Validate accessions and check that the referenced records are reachable."""
    service = CheckService(_build_registry(fetch_metadata))

    reports = []
    for value in inputs:
        deadline = deadline_after(timeout) if timeout is not None else None
        reports.append(service.check(value, deadline=deadline))

    if output_json:
        payload = [r.to_dict() for r in reports]
        print(json.dumps(payload[0] if len(payload) == 1 else payload, indent=2))
    else:
        for report in reports:
            _print_report(report, show_all)

    if any(r.best is None for r in reports):
        raise typer.Exit(1)


@app.command()
def validators(
    output_json: bool = typer.Option(
        False, "--json", "-j", help="Output as JSON"
    ),
):
    """List registered validators."""
    infos = get_validator_registry().list_validators()

    if output_json:
        print(json.dumps([info.model_dump(mode="json") for info in infos], indent=2))
        return

    table = Table(box=box.SIMPLE, header_style="bold")
    table.add_column("Name")
    table.add_column("Domain")
    table.add_column("Priority", justify="right")
    table.add_column("Patterns", justify="right")
    table.add_column("Description")
    for info in infos:
        table.add_row(
            info.name,
            info.domain,
            str(info.priority),
            str(len(info.patterns)),
            info.description,
        )
    console.print(table)


@app.command()
def extract(
    text: str = typer.Argument(..., help="Free text to scan for accessions"),
    output_json: bool = typer.Option(
        False, "--json", "-j", help="Output as JSON"
    ),
):
    """List accessions found in free text, without any network access."""
    found = extract_accession_from_text(text)

    if output_json:
        rows = []
        for accession in found:
            pattern = match_accession(accession)
            rows.append(
                {
                    "accession": accession,
                    "type": pattern.type.value,
                    "database": pattern.database,
                }
            )
        print(json.dumps(rows, indent=2))
        return

    if not found:
        console.print("[dim]No accessions found[/dim]")
        return

    table = Table(box=box.SIMPLE, header_style="bold")
    table.add_column("Accession")
    table.add_column("Type")
    table.add_column("Archive")
    for accession in found:
        pattern = match_accession(accession)
        table.add_row(accession, pattern.type.value, pattern.database)
    console.print(table)


if __name__ == "__main__":
    app()
