"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from apidocs.config import Settings, load_config
from apidocs.core.pipeline import run_check, run_scan
from apidocs.core.report import render_catalog, render_json, render_text
from apidocs.core.scenario import load_scenarios


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _configure_logging(settings: Settings, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )


def scan_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to scan")],
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """List the resources and request/response methods documented under PATH."""
    settings = _settings(overrides={"parser_config": parser})
    _configure_logging(settings, verbose)
    try:
        docs = run_scan(path, settings.parser_config)
    except RuntimeError as e:
        _fail(str(e))
    if not docs:
        typer.echo("No .md/.mdx files found.")
        raise typer.Exit(1)
    for line in render_catalog(docs):
        typer.echo(line)
    typer.echo(f"Scanned {len(docs)} document(s)")


def check_cmd(
    path: Annotated[str, typer.Argument(help="File or directory of documentation")],
    scenarios_file: Annotated[Path, typer.Argument(help="YAML file of scenarios")],
    base_url: Annotated[Optional[str], typer.Option("--base-url", help="Service root for live requests")] = None,
    offline: Annotated[bool, typer.Option("--offline", help="Check documented responses instead of live ones")] = False,
    timeout: Annotated[Optional[float], typer.Option("--timeout", help="HTTP timeout in seconds")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="Report format: text or json")] = None,
    fail_on_warning: Annotated[Optional[bool], typer.Option("--fail-on-warning", help="Treat warnings as failures")] = None,
    names: Annotated[Optional[list[str]], typer.Option("--scenario", help="Only run the named scenario(s)")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Check scenario expectations against live or documented responses."""
    settings = _settings(overrides={
        "base_url": base_url, "timeout": timeout, "output_format": fmt,
        "fail_on_warning": fail_on_warning, "parser_config": parser,
    })
    _configure_logging(settings, verbose)

    try:
        docs = run_scan(path, settings.parser_config)
        scenarios = load_scenarios(scenarios_file)
    except (RuntimeError, ValueError) as e:
        _fail(str(e))

    target = None if offline else settings.base_url
    if target is None and not offline:
        _fail("No base URL configured. Pass --base-url, set APIDOCS_BASE_URL, or use --offline.")

    results = run_check(docs, scenarios, target, names=names, timeout=settings.timeout)
    if not results:
        typer.echo("No scenarios selected.")
        raise typer.Exit(1)

    if settings.output_format == "json":
        typer.echo(render_json(results))
    else:
        for line in render_text(results):
            typer.echo(line)

    failed = any(not r.passed for r in results)
    warned = any(r.warnings for r in results)
    if failed or (settings.fail_on_warning and warned):
        raise typer.Exit(1)
