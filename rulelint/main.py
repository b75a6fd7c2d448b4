from __future__ import annotations

"""
Typer CLI entry point: discover files, run the engine, print the report.

Exit status is 1 when any violation is reported (or no rule is enabled),
so the command can gate CI pipelines directly.
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer

from rulelint.config import Config, get_default_config, get_enabled_rules
from rulelint.engine import RuleEngine
from rulelint.reporting.console import print_violations
from rulelint.traversal import find_java_files, is_java_file

logger = logging.getLogger(__name__)

app = typer.Typer(help="rulelint - line and declaration rules with scoped suppression for Java sources.")


def _collect_java_files(target: Path) -> List[Path]:
    """
    Resolve a target path into a list of .java files to analyze.

    - If target is a .java file, return [target]
    - If target is a directory, use traversal.find_java_files()
    - Otherwise, exit with an error.
    """
    if target.is_file():
        if not is_java_file(target):
            raise typer.BadParameter(f"Target file must have .java extension, got: {target}")
        return [target]

    if target.is_dir():
        files = find_java_files(target)
        if not files:
            logger.warning("No .java files found under %s", target)
        return files

    raise typer.BadParameter(f"Target path is neither a file nor a directory: {target}")


@app.callback()
def cli() -> None:
    """rulelint - line and declaration rules with scoped suppression for Java sources."""


@app.command()
def analyze(
    target: Path = typer.Argument(
        ...,
        exists=True,
        readable=True,
        resolve_path=True,
        help="Java file or directory to analyze.",
    ),
    disable: Optional[List[str]] = typer.Option(
        None,
        "--disable",
        "-d",
        help="Rule id to skip; may be repeated. UnnecessarySemicolon reports every statement-ending ';' in plain Java.",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        help="Number of files analyzed in parallel.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show remediation hints."),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    """
    Analyze a single Java file or all .java files under a directory.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG)

    config: Config = get_default_config(disabled_rules=disable or (), workers=workers)
    rules = list(get_enabled_rules(config))

    if not rules:
        typer.echo("No rules are enabled in the current configuration.")
        raise typer.Exit(code=1)

    files = _collect_java_files(target)
    engine = RuleEngine(rules, max_workers=config.workers)
    results = engine.analyze_files(files)

    violations = [v for result in results for v in result.violations]
    analyzed = [result.path for result in results if result.loaded]
    print_violations(violations, analyzed_files=analyzed, verbose=verbose)

    if violations:
        raise typer.Exit(code=1)


def main() -> None:
    """Entry point for `python -m rulelint.main` and the `rulelint` script."""
    app()


if __name__ == "__main__":
    main()
