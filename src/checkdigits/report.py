"""Report generation for check digit validation results."""

import json
from dataclasses import dataclass, field

from rich.console import Console
from rich.table import Table

from checkdigits.types import Severity
from checkdigits.validators.base import ValidationIssue, ValidatorExecutionResult


@dataclass
class Report:
    """Validation report containing all issues found.

    ``skipped`` holds the executions that did not complete (missing column
    or validator error) when graceful degradation is enabled.
    """

    issues: list[ValidationIssue] = field(default_factory=list)
    source: str = "unknown"
    row_count: int = 0
    column_count: int = 0
    skipped: list[ValidatorExecutionResult] = field(default_factory=list)

    def __str__(self) -> str:
        """Return a formatted string representation using Rich."""
        console = Console(force_terminal=True, width=80)
        with console.capture() as capture:
            self._print_to_console(console)
        return capture.get()

    def _print_to_console(self, console: Console) -> None:
        """Print the report to a Rich console."""
        console.print()
        console.print(f"[bold]Check Digit Report[/bold] ({self.source}, {self.row_count:,} rows)")
        console.print("━" * 52)

        for result in self.skipped:
            console.print(
                f"[yellow]! {result.validator_name} {result.status.value}: "
                f"{result.error_message}[/yellow]",
                markup=True,
                highlight=False,
            )

        if not self.issues:
            console.print("[green]✓ No issues found[/green]")
            console.print()
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Column", style="cyan")
        table.add_column("Issue", style="white")
        table.add_column("Count", justify="right")
        table.add_column("Severity", justify="center")

        # Sort issues by severity (highest first)
        severity_order = {
            Severity.CRITICAL: 0,
            Severity.HIGH: 1,
            Severity.MEDIUM: 2,
            Severity.LOW: 3,
        }
        sorted_issues = sorted(self.issues, key=lambda x: severity_order[x.severity])

        for issue in sorted_issues:
            severity_style = self._get_severity_style(issue.severity)
            table.add_row(
                issue.column,
                issue.issue_type,
                f"{issue.count:,}",
                f"[{severity_style}]{issue.severity.value}[/{severity_style}]",
            )

        console.print(table)
        console.print()

        unique_columns = len({i.column for i in self.issues})
        console.print(f"Summary: {len(self.issues)} issues found in {unique_columns} columns")
        console.print()

    def _get_severity_style(self, severity: Severity) -> str:
        """Get Rich style for severity level."""
        return {
            Severity.CRITICAL: "bold red",
            Severity.HIGH: "red",
            Severity.MEDIUM: "yellow",
            Severity.LOW: "dim",
        }[severity]

    def print(self) -> None:
        """Print the report to stdout."""
        console = Console()
        self._print_to_console(console)

    def to_dict(self) -> dict:
        """Convert report to dictionary for JSON serialization."""
        result = {
            "source": self.source,
            "row_count": self.row_count,
            "column_count": self.column_count,
            "issue_count": len(self.issues),
            "issues": [issue.to_dict() for issue in self.issues],
        }
        if self.skipped:
            result["skipped"] = [r.to_dict() for r in self.skipped]
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert report to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def filter_by_severity(self, min_severity: Severity) -> "Report":
        """Return a new report with only issues at or above the given severity."""
        filtered_issues = [i for i in self.issues if i.severity >= min_severity]
        return Report(
            issues=filtered_issues,
            source=self.source,
            row_count=self.row_count,
            column_count=self.column_count,
            skipped=list(self.skipped),
        )

    @property
    def has_issues(self) -> bool:
        """Check if the report contains any issues."""
        return len(self.issues) > 0

    @property
    def has_critical(self) -> bool:
        """Check if the report contains critical issues."""
        return any(i.severity == Severity.CRITICAL for i in self.issues)

    @property
    def has_high(self) -> bool:
        """Check if the report contains high severity issues."""
        return any(i.severity >= Severity.HIGH for i in self.issues)
