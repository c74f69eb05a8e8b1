"""lintgate CLI - Command Line Interface.

This module provides the command-line interface for lintgate. It detects the
languages present in a repository and runs the matching linters, formatters
and secret scanners, each in a throwaway container.

Synopsis
--------
check
    Run lint, format-check and secret-scan phases
lint
    Run linters, optionally for one language
format
    Check formatting, or fix it with --fix
security
    Run Gitleaks and detect-secrets (with baseline management)
test
    Syntax-check shell scripts with bash -n
ci
    lint + test
all
    check + test
clean
    Remove temporary files and tool caches
init
    Install pre-commit hooks
pre-commit
    Run pre-commit hooks on all files

Exit Codes
----------
0   every fatal check passed
1   at least one fatal check failed
2   the container engine or a required tool was unavailable
3   configuration error; no check was run

Examples
--------
Run everything on the current directory:
    $ lintgate check

Lint only Terraform under another root:
    $ lintgate --root ../infra lint --language terraform

Fix formatting in place:
    $ lintgate format --fix

Lint one script, bypassing discovery:
    $ lintgate --script scripts/deploy.sh lint --language shell
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import typer

from lintgate import __version__
from lintgate.application.housekeeping import clean_tree, install_hooks, run_hooks
from lintgate.application.orchestrator import ALL_PHASES, CHECK_PHASES, CI_PHASES, CheckOrchestrator
from lintgate.config import load_config
from lintgate.core.exceptions import ConfigurationError, EnvironmentUnavailableError
from lintgate.core.logging_config import setup_logging
from lintgate.core.models import (
    EXIT_CONFIGURATION,
    EXIT_ENVIRONMENT,
    EXIT_FAILED,
    Outcome,
    Phase,
    RunReport,
    Severity,
)
from lintgate.infra.sandbox import HostRunner

app = typer.Typer(
    help="lintgate - multi-language lint, format and secret-scan orchestration",
    add_completion=False,
)


_OUTCOME_COLORS = {
    Outcome.passed: typer.colors.GREEN,
    Outcome.failed: typer.colors.RED,
    Outcome.skipped: typer.colors.YELLOW,
}


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"lintgate {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    root: Optional[str] = typer.Option(
        None, "--root", "-r", help="Directory to scan (default: current directory)"
    ),
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="Configuration file (YAML or TOML)"
    ),
    script: Optional[str] = typer.Option(
        None, "--script", "-s", help="Shell script to check instead of auto-discovery"
    ),
    engine: Optional[str] = typer.Option(
        None, "--engine", help="Container engine: docker or podman"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level: DEBUG, INFO, WARNING, ERROR"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """lintgate - run the right checkers for the languages in a repository."""
    ctx.obj = {
        "config_file": config,
        "args": {
            "root": root,
            "script": script,
            "engine": engine,
            "log_level": "DEBUG" if verbose else log_level,
        },
    }


def _load(ctx: typer.Context):
    """Load configuration and set up logging, exiting on configuration errors."""
    obj = ctx.obj or {}
    try:
        config = load_config(config_file=obj.get("config_file"), args=obj.get("args"))
    except ConfigurationError as e:
        typer.secho(f"Error: {e.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_CONFIGURATION)

    setup_logging(
        log_level=config.logging.level,
        log_file=config.logging.file,
        console_output=config.logging.console,
        file_output=config.logging.file_output,
        max_bytes=config.logging.max_bytes,
        backup_count=config.logging.backup_count,
    )
    return config


def _build_orchestrator(config, fix: bool = False) -> CheckOrchestrator:
    return CheckOrchestrator(config, fix=fix)


def print_report(report: RunReport) -> None:
    """Print one line per check, failed diagnostics, then the overall status."""
    for result in report.results:
        outcome = typer.style(
            result.outcome.value.upper(), fg=_OUTCOME_COLORS[result.outcome], bold=True
        )
        line = f"{result.profile:<10} {result.phase.value:<9} {result.check:<20} {outcome}"
        if result.classification is not None:
            line += f" [{result.classification.value}]"
        if result.severity == Severity.advisory and result.outcome == Outcome.failed:
            line += " (advisory)"
        typer.echo(line)

    failed = [r for r in report.results if r.outcome == Outcome.failed]
    for result in failed:
        typer.echo("")
        typer.secho(f"--- {result.profile}/{result.check} ---", bold=True)
        typer.echo(result.diagnostic)

    typer.echo("")
    if report.outcome == Outcome.failed:
        typer.secho("Overall: FAIL", fg=typer.colors.RED, bold=True)
    else:
        typer.secho("Overall: PASS", fg=typer.colors.GREEN, bold=True)


def _run_phases(
    ctx: typer.Context,
    phases: Sequence[Phase],
    language: Optional[str] = None,
    fix: bool = False,
) -> None:
    config = _load(ctx)
    orchestrator = _build_orchestrator(config, fix=fix)
    try:
        report = orchestrator.run(phases, language=language)
    except ConfigurationError as e:
        typer.secho(f"Error: {e.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_CONFIGURATION)

    print_report(report)
    raise typer.Exit(code=report.exit_code)


@app.command("check")
def check(ctx: typer.Context) -> None:
    """Run all checks: lint, format (check-only) and security."""
    _run_phases(ctx, CHECK_PHASES)


@app.command("lint")
def lint(
    ctx: typer.Context,
    language: Optional[str] = typer.Option(
        None, "--language", "-l", help="Only lint this language (shell, python, terraform)"
    ),
) -> None:
    """Run linting for all detected languages."""
    _run_phases(ctx, [Phase.lint], language=language)


@app.command("format")
def format_(
    ctx: typer.Context,
    fix: bool = typer.Option(False, "--fix", help="Rewrite files instead of checking them"),
    language: Optional[str] = typer.Option(
        None, "--language", "-l", help="Only format this language (shell, python, terraform)"
    ),
) -> None:
    """Check formatting for all detected languages, or fix it with --fix."""
    _run_phases(ctx, [Phase.format], language=language, fix=fix)


@app.command("security")
def security(ctx: typer.Context) -> None:
    """Run secret scans (Gitleaks + detect-secrets)."""
    _run_phases(ctx, [Phase.security])


@app.command("test")
def test(ctx: typer.Context) -> None:
    """Syntax-check shell scripts with bash -n."""
    _run_phases(ctx, [Phase.syntax])


@app.command("ci")
def ci(ctx: typer.Context) -> None:
    """Run CI checks: lint and shell syntax."""
    _run_phases(ctx, CI_PHASES)


@app.command("all")
def all_checks(ctx: typer.Context) -> None:
    """Run every check: lint, format, security and shell syntax."""
    _run_phases(ctx, ALL_PHASES)


@app.command("clean")
def clean(
    ctx: typer.Context,
    dry_run: bool = typer.Option(False, "--dry-run", help="List what would be removed"),
) -> None:
    """Remove backups, bytecode and tool caches."""
    config = _load(ctx)
    root = config.project.root_path
    removed = clean_tree(root, dry_run=dry_run)
    verb = "Would remove" if dry_run else "Removed"
    for path in removed:
        typer.echo(f"{verb} {path.relative_to(root)}")
    typer.secho(f"✓ Clean complete ({len(removed)} path(s))", fg=typer.colors.GREEN)


def _host(ctx: typer.Context) -> HostRunner:
    config = _load(ctx)
    return HostRunner(Path(config.project.root_path))


@app.command("init")
def init(ctx: typer.Context) -> None:
    """Install pre-commit hooks."""
    host = _host(ctx)
    try:
        results = install_hooks(host)
    except EnvironmentUnavailableError:
        typer.secho(
            "Error: pre-commit not found. Install it with: pip install pre-commit",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=EXIT_ENVIRONMENT)

    for result in results:
        if result.output:
            typer.echo(result.output)
    if results[-1].returncode != 0:
        raise typer.Exit(code=EXIT_FAILED)
    typer.secho("✓ Pre-commit hooks installed", fg=typer.colors.GREEN)


@app.command("pre-commit")
def pre_commit(ctx: typer.Context) -> None:
    """Run pre-commit hooks on all files."""
    host = _host(ctx)
    try:
        result = run_hooks(host)
    except EnvironmentUnavailableError:
        typer.secho(
            "Error: pre-commit not found. Install it with: pip install pre-commit",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=EXIT_ENVIRONMENT)

    if result.output:
        typer.echo(result.output)
    if result.returncode != 0:
        raise typer.Exit(code=EXIT_FAILED)


__all__ = ["app", "print_report"]
