"""Command-line interface for checkdigits."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from checkdigits.api import calculate, check, check_vatin, is_valid
from checkdigits.routines import ROUTINES, CheckDigitError, UnknownRoutineError
from checkdigits.rules import RuleFileError, infer_rules

app = typer.Typer(
    name="checkdigits",
    help="Check digit calculation and identifier validation powered by Polars",
    add_completion=False,
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log routine decisions to stderr"),
    ] = False,
) -> None:
    """Check digit calculation and identifier validation."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command(name="calculate")
def calculate_cmd(
    routine: Annotated[str, typer.Argument(help="Routine name (see 'checkdigits routines')")],
    code: Annotated[str, typer.Argument(help="Code without its check digit(s)")],
) -> None:
    """Calculate the check digit(s) for a code."""
    try:
        typer.echo(calculate(routine, code))
    except (CheckDigitError, UnknownRoutineError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command(name="validate")
def validate_cmd(
    routine: Annotated[str, typer.Argument(help="Routine name (see 'checkdigits routines')")],
    codes: Annotated[list[str], typer.Argument(help="Codes to validate")],
) -> None:
    """Validate codes with a routine. Exits with 1 if any code is invalid."""
    try:
        results = [(code, is_valid(routine, code)) for code in codes]
    except UnknownRoutineError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for code, valid in results:
        typer.echo(f"{code}: {'valid' if valid else 'invalid'}")

    if not all(valid for _, valid in results):
        raise typer.Exit(1)


@app.command(name="vat")
def vat_cmd(
    codes: Annotated[list[str], typer.Argument(help="VAT numbers with country prefix")],
) -> None:
    """Validate VAT numbers (country format and check digits)."""
    all_valid = True
    for code in codes:
        result = check_vatin(code.replace(" ", "").upper())
        if result.valid:
            typer.echo(f"{code}: valid ({result.country_code})")
        else:
            all_valid = False
            typer.echo(f"{code}: invalid ({result.reason})")

    if not all_valid:
        raise typer.Exit(1)


@app.command(name="check")
def check_cmd(
    file: Annotated[Path, typer.Argument(help="Path to the data file")],
    rules_file: Annotated[
        Optional[Path],
        typer.Option("--rules", "-r", help="YAML rule file binding columns to routines"),
    ] = None,
    min_severity: Annotated[
        Optional[str],
        typer.Option("--min-severity", "-s", help="Minimum severity level (low, medium, high, critical)"),
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (console, json)"),
    ] = "console",
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output file path"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with code 1 if issues are found"),
    ] = False,
) -> None:
    """Validate identifier columns in a file.

    Without --rules, rules are inferred from the data.
    """
    if not file.exists():
        typer.echo(f"Error: File not found: {file}", err=True)
        raise typer.Exit(1)

    if rules_file and not rules_file.exists():
        typer.echo(f"Error: Rule file not found: {rules_file}", err=True)
        raise typer.Exit(1)

    try:
        rules = rules_file if rules_file else infer_rules(str(file))
        if not rules_file and not len(rules):
            typer.echo("No identifier columns recognized")
            return
        report = check(str(file), rules=rules, min_severity=min_severity)
    except (RuleFileError, UnknownRoutineError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if format == "json":
        result = report.to_json()
        if output:
            output.write_text(result)
            typer.echo(f"Report written to {output}")
        else:
            typer.echo(result)
    else:
        report.print()

    if strict and report.has_issues:
        raise typer.Exit(1)


@app.command(name="infer")
def infer_cmd(
    file: Annotated[Path, typer.Argument(help="Path to the data file to infer rules from")],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output rule file path"),
    ] = Path("rules.yaml"),
    min_ratio: Annotated[
        float,
        typer.Option("--min-ratio", help="Share of values that must validate"),
    ] = 0.9,
) -> None:
    """Infer a rule file from a data file."""
    if not file.exists():
        typer.echo(f"Error: File not found: {file}", err=True)
        raise typer.Exit(1)

    try:
        rules = infer_rules(str(file), min_ratio=min_ratio)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    rules.save(output)
    typer.echo(f"Rules saved to {output}")
    for name in rules:
        typer.echo(f"  {name}: {rules[name].routine}")


@app.command(name="routines")
def routines_cmd() -> None:
    """List the registered check digit routines."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Class")

    for name in sorted(ROUTINES):
        table.add_row(name, type(ROUTINES[name]).__name__)

    Console().print(table)


if __name__ == "__main__":
    app()
