# Rich console output: format violations for terminal display.

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from rulelint.findings.models import Violation

# Remediation hints per rule (shown with --verbose)
RULE_REMEDIATIONS: dict[str, str] = {
    "UnnecessarySemicolon": (
        "Delete the trailing ';'. To keep it, add @SuppressWarnings(\"UnnecessarySemicolon\") "
        "to the enclosing type or method."
    ),
    "MethodSize": "Extract parts of the method into smaller, named helpers.",
}

SEVERITY_STYLE = {
    "error": "bold red",
    "warning": "bold yellow",
    "info": "bold blue",
}

DEFAULT_SEVERITY_STYLE = "bold white"


def _severity_style(severity: str) -> str:
    return SEVERITY_STYLE.get(severity.lower(), DEFAULT_SEVERITY_STYLE)


def print_violations(
    violations: Sequence[Violation],
    analyzed_files: Sequence[Path] | None = None,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> None:
    """
    Print violations grouped by file, one table per file with the offending
    source lines, followed by a per-file summary and totals.
    """
    console = console or Console()

    if not violations and not analyzed_files:
        console.print(
            Panel(
                "[green]No violations found.[/green]",
                title="rulelint",
                border_style="green",
                box=box.ROUNDED,
            )
        )
        return

    by_file: dict[str, list[Violation]] = {}
    for v in violations:
        by_file.setdefault(str(v.path or "<memory>"), []).append(v)

    for path in sorted(by_file):
        file_violations = sorted(by_file[path], key=lambda v: (v.line_number, v.rule_id))

        console.print()
        console.print(
            Panel(
                f"[bold cyan]{escape(path)}[/bold cyan]",
                box=box.SIMPLE_HEAD,
                border_style="blue",
                padding=(0, 1),
            )
        )

        table = Table(
            show_header=True,
            header_style="bold magenta",
            box=box.SIMPLE,
            padding=(0, 1),
            expand=False,
        )
        table.add_column("Line", justify="right", style="dim", width=5)
        table.add_column("Severity", width=8)
        table.add_column("Rule", width=22)
        table.add_column("Message", style="white")
        table.add_column("Source", style="dim")

        for v in file_violations:
            table.add_row(
                str(v.line_number),
                Text(v.severity.upper(), style=_severity_style(v.severity)),
                Text(f"[{v.rule_id}]", style="dim"),
                Text(v.message),
                Text(v.source_line.strip()),
            )
        console.print(table)

        if verbose:
            for rule_id in sorted({v.rule_id for v in file_violations}):
                hint = RULE_REMEDIATIONS.get(rule_id)
                if hint:
                    console.print(f"  [dim]Fix[/dim] {escape(f'[{rule_id}]')} {escape(hint)}")

    if analyzed_files:
        _print_file_summary_table(violations, analyzed_files, console)

    _print_summary(violations, console)


def _print_file_summary_table(
    violations: Sequence[Violation],
    analyzed_files: Sequence[Path],
    console: Console,
) -> None:
    counts: dict[str, int] = {}
    for v in violations:
        key = str(v.path)
        counts[key] = counts.get(key, 0) + 1

    table = Table(
        title="Files Summary",
        show_header=True,
        header_style="bold cyan",
        box=box.ROUNDED,
        padding=(0, 1),
    )
    table.add_column("File", style="white")
    table.add_column("Status", width=10)
    table.add_column("Violations", justify="right", width=10)

    for p in sorted(analyzed_files, key=lambda p: (str(p) not in counts, str(p))):
        count = counts.get(str(p), 0)
        status = Text("FAIL", style="bold red") if count else Text("OK", style="bold green")
        table.add_row(str(p), status, str(count))

    console.print()
    console.print(Panel(table, border_style="cyan", box=box.ROUNDED))


def _print_summary(violations: Sequence[Violation], console: Console) -> None:
    by_severity: dict[str, int] = {}
    for v in violations:
        by_severity[v.severity] = by_severity.get(v.severity, 0) + 1

    total = len(violations)
    parts = [f"[bold]{total} violation{'s' if total != 1 else ''}[/bold]"]
    for sev in ("error", "warning", "info"):
        if sev in by_severity:
            parts.append(f"[{_severity_style(sev)}]{by_severity[sev]} {sev}[/]")

    console.print()
    console.print(
        Panel(
            " | ".join(parts),
            title="Summary",
            border_style="yellow" if total > 0 else "green",
            box=box.ROUNDED,
        )
    )
