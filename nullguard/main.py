from __future__ import annotations

"""
Typer CLI entry point and orchestration of the lint run.

- Accepts a file or directory path
- Finds script files (traversal.find_script_files for directories)
- Builds a FileContext for each file
- Runs all enabled rules from config.py
- Prints findings as plain `file:line:col: [rule] message` lines or as Rich tables

Exits with status 1 when anything was reported, 0 otherwise.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import List, Sequence

import typer

from nullguard.config import Config, get_default_config, get_enabled_rules
from nullguard.context import create_context
from nullguard.findings.models import Finding
from nullguard.parser import dialect_for_path
from nullguard.reporting.console import format_finding, print_findings
from nullguard.traversal import find_script_files

logger = logging.getLogger(__name__)

app = typer.Typer(help="nullguard - flag comparisons to null and undefined in JavaScript/TypeScript.")


class OutputFormat(str, Enum):
    text = "text"
    rich = "rich"


def _collect_script_files(target: Path) -> List[Path]:
    """
    Resolve a target path into a list of script files to lint.

    - A supported file (.js, .ts, .tsx, ...) is returned as-is
    - A directory is traversed with traversal.find_script_files()
    - Anything else is a usage error
    """
    if target.is_file():
        if dialect_for_path(target) is None:
            raise typer.BadParameter(
                f"Target file must be a JavaScript or TypeScript file, got: {target}"
            )
        return [target]

    if target.is_dir():
        files = find_script_files(target)
        if not files:
            logger.warning("No script files found under %s", target)
        return files

    raise typer.BadParameter(f"Target path is neither a file nor a directory: {target}")


def run_rules(files: Sequence[Path], config: Config) -> List[Finding]:
    """Run every enabled rule over every readable file, in file order."""
    all_findings: List[Finding] = []
    rules = list(get_enabled_rules(config))
    for path in files:
        ctx = create_context(path)
        if ctx is None:
            # Unreadable; already logged by create_context
            continue
        for rule in rules:
            try:
                all_findings.extend(rule.run(ctx, config))
            except Exception:
                logger.exception("Rule %s failed on %s", rule.id, path)
    return all_findings


@app.command()
def analyze(
    target: Path = typer.Argument(
        ...,
        exists=True,
        readable=True,
        resolve_path=True,
        help="Script file or directory to lint.",
    ),
    allow_null_check: bool = typer.Option(
        False, "--allow-null-check", help="Allow comparisons to `null`."
    ),
    allow_undefined_check: bool = typer.Option(
        False, "--allow-undefined-check", help="Allow comparisons to `undefined`."
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.text, "--format", "-f", help="Output format."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show remediation hints (rich format)."
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    """
    Lint a single file or every JavaScript/TypeScript file under a directory.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = get_default_config(
        allow_null_check=allow_null_check,
        allow_undefined_check=allow_undefined_check,
    )
    if not config.rules:
        typer.echo("No rules are enabled in the current configuration.")
        raise typer.Exit(code=1)

    files = _collect_script_files(target)
    findings = run_rules(files, config)

    if output_format is OutputFormat.rich:
        print_findings(findings, analyzed_files=files, verbose=verbose)
    elif findings:
        for f in findings:
            typer.echo(format_finding(f))
    else:
        typer.echo("No findings.")

    if findings:
        raise typer.Exit(code=1)


def main() -> None:
    """Entry point for `python -m nullguard.main` and the `nullguard` script."""
    app()


if __name__ == "__main__":
    main()
