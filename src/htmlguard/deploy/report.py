# htmlguard:domain=deploy
"""Deployment report: console summary and JSON artifact."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from htmlguard.analysis.report import write_json_artifact
from htmlguard.deploy.gate import DeploymentStatus

if TYPE_CHECKING:
    from pathlib import Path

    from htmlguard.deploy.gate import DeploymentResult


def deployment_report_to_dict(
    result: DeploymentResult, *, timestamp: str | None = None
) -> dict[str, object]:
    session = result.session
    return {
        "timestamp": timestamp or datetime.now(tz=timezone.utc).isoformat(),
        "deploymentStatus": result.status.value,
        "summary": {
            "totalErrors": len(session.errors),
            "totalWarnings": len(session.warnings),
            "criticalIssues": result.critical_count,
        },
        "files": session.documents_analyzed,
        "recommendations": list(result.recommendations),
    }


def write_deployment_report(result: DeploymentResult, path: Path) -> Path | None:
    """Persist the deployment report to *path* (best effort)."""
    return write_json_artifact(deployment_report_to_dict(result), path)


_STATUS_STYLES: dict[DeploymentStatus, str] = {
    DeploymentStatus.ALLOWED: "green",
    DeploymentStatus.WARNING: "yellow",
    DeploymentStatus.BLOCKED: "red",
}


def format_deployment(result: DeploymentResult) -> str:
    """Format the gate outcome as a Rich-rendered string.

    Lists the blocking findings when the deployment is blocked, every error
    when it is only discouraged, and the warning count otherwise, followed by
    the recommendations.
    """
    from io import StringIO

    from rich.console import Console
    from rich.panel import Panel
    from rich.text import Text

    session = result.session
    buf = StringIO()
    console = Console(file=buf, width=100)

    console.print(f"  Total errors:    {len(session.errors)}", highlight=False)
    console.print(f"  Warnings:        {len(session.warnings)}", highlight=False)
    console.print(f"  Critical issues: {result.critical_count}", highlight=False)
    console.print()

    if result.status is DeploymentStatus.BLOCKED:
        banner = "DEPLOYMENT BLOCKED - critical issues detected"
        listed = [f for f in session.errors if f.severity.is_blocking]
    elif result.status is DeploymentStatus.WARNING:
        banner = "DEPLOYMENT DISCOURAGED - errors detected"
        listed = list(session.errors)
    elif session.warnings:
        banner = f"DEPLOYMENT ALLOWED - {len(session.warnings)} warnings to review"
        listed = []
    else:
        banner = "DEPLOYMENT ALLOWED - no issues detected"
        listed = []

    style = _STATUS_STYLES[result.status]
    console.print(Panel(Text(banner, style=f"bold {style}"), border_style=style))
    for index, finding in enumerate(listed, 1):
        console.print(Text(f"  {index}. {finding.file}: {finding.message}"), soft_wrap=True)
    if listed:
        console.print()

    console.print("Recommendations:", style="bold")
    for text in result.recommendations:
        console.print(Text(f"  - {text}"), soft_wrap=True)

    return buf.getvalue()
