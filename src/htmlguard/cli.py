"""htmlguard CLI entry point."""

# htmlguard:service=cli

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from htmlguard import __version__

if TYPE_CHECKING:
    from htmlguard.infrastructure.config import GuardConfig

logger = logging.getLogger(__name__)


def _configure_logging(*, verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


# htmlguard:service=cli
@click.group()
@click.version_option(version=__version__, prog_name="htmlguard")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors only).")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: .htmlguard/config.yml or htmlguard.yml in the project).",
)
@click.pass_context
def main(ctx: click.Context, *, verbose: bool, quiet: bool, config_path: Path | None) -> None:
    """htmlguard - heuristic linter and pre-deployment gate for HTML pages."""
    _configure_logging(verbose=verbose, quiet=quiet)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path


def _load_config_or_exit(ctx: click.Context, project_root: Path) -> GuardConfig:
    from htmlguard.infrastructure.config import ConfigError, load_config

    try:
        return load_config(project_root, ctx.obj.get("config_path"))
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)


def _resolve_report_path(project_root: Path, report: Path | None, default: str) -> Path:
    if report is not None:
        return report
    return project_root / default


# htmlguard:domain=analysis
@main.command()
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "json", "porcelain"]),
    default="rich",
    help="Output format.",
)
@click.option(
    "--report",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Report artifact path (default: from config or code-analysis-report.json).",
)
@click.option("--no-report", is_flag=True, default=False, help="Do not write the report file.")
@click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root (default: current directory).",
)
@click.pass_context
def analyze(
    ctx: click.Context,
    *,
    fmt: str,
    report: Path | None,
    no_report: bool,
    project: Path | None,
) -> None:
    """Analyze every HTML document under the project.

    Exit codes: 0 = no errors, 1 = errors found or unexpected failure,
    2 = configuration error.
    """
    from htmlguard.analysis.analyzer import analyze_project
    from htmlguard.analysis.report import format_json, format_porcelain, format_rich, write_report

    project_root = project or Path.cwd()
    config = _load_config_or_exit(ctx, project_root)

    try:
        session = analyze_project(project_root, config)
    except Exception:
        logger.exception("Analysis aborted")
        sys.exit(1)

    formatters = {
        "rich": format_rich,
        "json": format_json,
        "porcelain": format_porcelain,
    }
    output = formatters[fmt](session)
    quiet = ctx.obj.get("quiet")
    if fmt == "rich":
        if not quiet:
            from rich.console import Console

            Console().print(output, markup=False, highlight=False)
    elif output:
        click.echo(output)

    if not no_report:
        path = _resolve_report_path(project_root, report, config.report_path)
        if write_report(session, path) is not None and fmt == "rich" and not quiet:
            click.echo(f"Report saved to: {path}")

    if not session.passed:
        sys.exit(1)


# htmlguard:domain=deploy
@main.command()
@click.option(
    "--report",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Deployment report path (default: from config or deployment-report.json).",
)
@click.option("--no-report", is_flag=True, default=False, help="Do not write report files.")
@click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root (default: current directory).",
)
@click.pass_context
def predeploy(
    ctx: click.Context,
    *,
    report: Path | None,
    no_report: bool,
    project: Path | None,
) -> None:
    """Run the analyzer plus deployment checks and decide whether to deploy.

    Exit codes: 0 = deployment allowed, 1 = blocked or unexpected failure,
    2 = configuration error.
    """
    from rich.console import Console

    from htmlguard.analysis.report import format_rich
    from htmlguard.deploy.gate import run_predeploy_check
    from htmlguard.deploy.report import format_deployment, write_deployment_report

    project_root = project or Path.cwd()
    config = _load_config_or_exit(ctx, project_root)

    try:
        result = run_predeploy_check(
            project_root,
            config,
            analysis_report_path=None if no_report else project_root / config.report_path,
        )
    except Exception:
        logger.exception("Pre-deployment check aborted")
        sys.exit(1)

    console = Console()
    if not ctx.obj.get("quiet"):
        console.print(format_rich(result.session), markup=False, highlight=False)
        console.print()
    click.echo(format_deployment(result), nl=False)

    if not no_report:
        path = _resolve_report_path(project_root, report, config.deployment_report_path)
        if write_deployment_report(result, path) is not None:
            click.echo(f"Deployment report saved to: {path}")

    if result.allowed:
        click.echo("Pre-deployment check passed.")
    else:
        click.echo("Pre-deployment check failed.")
        sys.exit(1)
