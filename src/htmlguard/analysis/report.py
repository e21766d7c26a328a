# htmlguard:domain=analysis
"""Report generator: human-readable summary, JSON artifact, porcelain output."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from htmlguard.analysis.findings import AnalysisSession, Finding

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


def _finding_blocks(title: str, findings: list[Finding]) -> list[str]:
    lines = [title]
    for index, finding in enumerate(findings, 1):
        lines.append(f"{index}. [{finding.severity.name}] {finding.file}")
        lines.append(f"   Type: {finding.kind.value}")
        lines.append(f"   Message: {finding.message}")
        lines.append("")
    return lines


def format_rich(session: AnalysisSession) -> str:
    """Format a session as human-readable text.

    Example output::

        Files analyzed: 2
        Errors found: 1
        Warnings: 0

        Errors:
        1. [HIGH] index.html
           Type: MISSING_ELEMENT
           Message: Element with ID 'menu' not found in markup

        \u2717 Analysis failed: 1 errors
    """
    lines: list[str] = [
        f"Files analyzed: {session.documents_analyzed}",
        f"Errors found: {len(session.errors)}",
        f"Warnings: {len(session.warnings)}",
        "",
    ]

    if session.errors:
        lines.extend(_finding_blocks("Errors:", session.errors))
    if session.warnings:
        lines.extend(_finding_blocks("Warnings:", session.warnings))

    if not session.errors and not session.warnings:
        lines.append("\u2713 No issues detected. The code is clean.")
    elif session.passed:
        lines.append(f"\u2713 Analysis passed with {len(session.warnings)} warnings")
    else:
        lines.append(f"\u2717 Analysis failed: {len(session.errors)} errors")

    return "\n".join(lines)


def report_to_dict(session: AnalysisSession, *, timestamp: str | None = None) -> dict[str, object]:
    """Build the analysis report artifact."""
    return {
        "timestamp": timestamp or _timestamp(),
        "analyzedFiles": session.documents_analyzed,
        "errors": [f.to_dict() for f in session.errors],
        "warnings": [f.to_dict() for f in session.warnings],
        "summary": {
            "totalErrors": len(session.errors),
            "totalWarnings": len(session.warnings),
            "status": "PASS" if session.passed else "FAIL",
        },
    }


def format_json(session: AnalysisSession) -> str:
    return json.dumps(report_to_dict(session), indent=2)


def format_porcelain(session: AnalysisSession) -> str:
    """One line per finding: ``severity:kind:file:message``.

    Errors come first, then warnings.  Empty string when there are none.
    """
    return "\n".join(
        f"{f.severity.name}:{f.kind.value}:{f.file}:{f.message}"
        for f in [*session.errors, *session.warnings]
    )


def write_json_artifact(data: dict[str, object], path: Path) -> Path | None:
    """Write *data* as indented JSON.  Returns *path*, or None if the write failed.

    A failed write is logged, never raised.
    """
    try:
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not write report %s: %s", path, exc)
        return None
    logger.debug("Report saved to %s", path)
    return path


def write_report(session: AnalysisSession, path: Path) -> Path | None:
    """Persist the analysis report to *path* (best effort)."""
    return write_json_artifact(report_to_dict(session), path)
