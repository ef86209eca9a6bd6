# Rich console output: render lint findings in the terminal.

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from nullguard.findings.models import Finding
from nullguard.rules.undefined_or_null_comparison import UndefinedOrNullComparisonRule

# Remediation hints per rule (shown with --verbose)
RULE_REMEDIATIONS: dict[str, str] = {
    UndefinedOrNullComparisonRule.id: UndefinedOrNullComparisonRule.metadata.remediation or "",
}

SEVERITY_STYLE = {
    "error": "bold red",
    "warning": "bold yellow",
    "info": "bold blue",
}

DEFAULT_SEVERITY_STYLE = "bold white"


def _severity_style(severity: str) -> str:
    return SEVERITY_STYLE.get(severity.lower(), DEFAULT_SEVERITY_STYLE)


def _get_remediation(finding: Finding) -> str | None:
    return RULE_REMEDIATIONS.get(finding.rule_id) or None


def format_finding(finding: Finding) -> str:
    """Plain `path:line:col: SEVERITY [rule] message` line."""
    loc = finding.location
    return (
        f"{loc.path}:{loc.line}:{loc.column}: {finding.severity.upper()} "
        f"[{finding.rule_id}] {finding.message}"
    )


def print_findings(
    findings: Sequence[Finding],
    analyzed_files: Sequence[Path] | None = None,
    verbose: bool = False,
    console: Console | None = None,
) -> None:
    """
    Print findings grouped by file, one table per file.

    Findings keep the order the rules reported them in (tree order). Snippets
    of the offending operands are listed under each table; with verbose,
    remediation hints follow. If analyzed_files is given, a clean/flagged
    summary table is printed as well.
    """
    if console is None:
        console = Console()

    if not findings and not analyzed_files:
        console.print(
            Panel(
                "[green]No issues found.[/green]",
                title="nullguard",
                border_style="green",
                box=box.ROUNDED,
            )
        )
        return

    if not findings and analyzed_files:
        _print_file_summary_table([], analyzed_files, console)
        _print_summary([], console)
        return

    by_file: dict[str, list[Finding]] = {}
    for f in findings:
        by_file.setdefault(str(f.location.path), []).append(f)

    for path in sorted(by_file):
        file_findings = by_file[path]

        console.print()
        console.print(Panel(
            f"[bold cyan]{_shorten_path(path)}[/bold cyan]",
            box=box.SIMPLE_HEAD,
            border_style="blue",
            padding=(0, 1),
        ))

        table = Table(
            show_header=True,
            header_style="bold magenta",
            box=box.SIMPLE,
            padding=(0, 1),
            expand=False,
        )
        table.add_column("Line", justify="right", style="dim", width=5)
        table.add_column("Col", justify="right", style="dim", width=4)
        table.add_column("Severity", width=10)
        table.add_column("Rule", width=34)
        table.add_column("Message", style="white")

        for f in file_findings:
            loc = f.location
            table.add_row(
                str(loc.line),
                str(loc.column),
                Text(f.severity.upper(), style=_severity_style(f.severity)),
                Text(f"[{f.rule_id}]", style="dim"),
                f.message,
            )

        console.print(table)

        snippets = [f for f in file_findings if f.location.snippet]
        if snippets:
            for f in snippets:
                console.print(Text.assemble(
                    (f"  {f.location.line}:{f.location.column} |-- ", "dim"),
                    f.location.snippet or "",
                ))
            console.print()

        if verbose:
            seen_rules: set[str] = set()
            for f in file_findings:
                if f.rule_id in seen_rules:
                    continue
                seen_rules.add(f.rule_id)
                rem = _get_remediation(f)
                if rem:
                    console.print(Text(f"  [Fix] [{f.rule_id}] {rem}", style="dim"))
            if seen_rules:
                console.print()

    if analyzed_files:
        _print_file_summary_table(findings, analyzed_files, console)

    _print_summary(findings, console)


def _shorten_path(path: str | Path) -> str:
    """Return the path relative to the working directory when possible."""
    p = Path(path)
    try:
        return p.relative_to(Path.cwd()).as_posix()
    except ValueError:
        return p.as_posix()


def _print_file_summary_table(
    findings: Sequence[Finding],
    analyzed_files: Sequence[Path],
    console: Console,
) -> None:
    """Print a table of clean vs flagged files."""
    by_path: dict[str, int] = {}
    for f in findings:
        key = str(f.location.path)
        by_path[key] = by_path.get(key, 0) + 1

    table = Table(
        title="Files Summary",
        show_header=True,
        header_style="bold cyan",
        box=box.ROUNDED,
        padding=(0, 1),
    )
    table.add_column("File", style="white")
    table.add_column("Status", width=10)
    table.add_column("Findings", justify="right", width=8)

    for p in sorted(analyzed_files, key=lambda p: (str(p) not in by_path, str(p))):
        count = by_path.get(str(p), 0)
        status = Text("FLAGGED", style="bold yellow") if count else Text("OK", style="bold green")
        table.add_row(_shorten_path(p), status, str(count))

    console.print()
    console.print(Panel(table, border_style="cyan", box=box.ROUNDED))


def _print_summary(findings: Sequence[Finding], console: Console) -> None:
    by_severity: dict[str, int] = {}
    for f in findings:
        s = f.severity.lower()
        by_severity[s] = by_severity.get(s, 0) + 1

    total = len(findings)
    summary_parts = [f"[bold]{total} finding{'s' if total != 1 else ''}[/bold]"]
    for sev in ("error", "warning", "info"):
        if sev in by_severity:
            summary_parts.append(f"[{_severity_style(sev)}]{by_severity[sev]} {sev}[/]")

    console.print()
    console.print(
        Panel(
            " | ".join(summary_parts),
            title="Summary",
            border_style="yellow" if total > 0 else "green",
            box=box.ROUNDED,
        )
    )
