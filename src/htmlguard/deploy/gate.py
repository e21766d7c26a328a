# htmlguard:domain=deploy
"""Deployment gate: project-level checks layered on top of the analyzer.

The gate reuses the analyzer's session.  Required-document, embedded-config
and security checks append to the same error/warning buckets, and the final
status is decided from the combined findings.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from htmlguard.analysis.analyzer import analyze_project
from htmlguard.analysis.findings import Finding, FindingKind, Severity
from htmlguard.analysis.report import write_report
from htmlguard.infrastructure.config import GuardConfig
from htmlguard.infrastructure.document_source import iter_documents, printable

if TYPE_CHECKING:
    from pathlib import Path

    from htmlguard.analysis.findings import AnalysisSession

logger = logging.getLogger(__name__)


class DeploymentStatus(enum.Enum):
    """Outcome of the deployment gate."""

    ALLOWED = "ALLOWED"
    WARNING = "WARNING"
    BLOCKED = "BLOCKED"


@dataclass(frozen=True)
class SecurityPattern:
    """One row of the security scan table."""

    pattern: re.Pattern[str]
    kind: FindingKind
    message: str
    severity: Severity


# Order matters: it is the order findings appear for each document.
SECURITY_PATTERNS: tuple[SecurityPattern, ...] = (
    SecurityPattern(
        re.compile(r"eval\s*\("),
        FindingKind.DANGEROUS_EVAL,
        "Dangerous use of eval()",
        Severity.HIGH,
    ),
    SecurityPattern(
        re.compile(r"innerHTML\s*="),
        FindingKind.XSS_RISK,
        "innerHTML assigned without sanitization",
        Severity.MEDIUM,
    ),
    SecurityPattern(
        re.compile(r"document\.write"),
        FindingKind.XSS_RISK,
        "Use of document.write",
        Severity.MEDIUM,
    ),
    SecurityPattern(
        re.compile(r"""password\s*=\s*["'][^"']*["']"""),
        FindingKind.HARDCODED_PASSWORD,
        "Hardcoded password in source",
        Severity.CRITICAL,
    ),
    SecurityPattern(
        re.compile(r"""api[_-]?key\s*=\s*["'][^"']*["']"""),
        FindingKind.EXPOSED_API_KEY,
        "API key exposed in source",
        Severity.HIGH,
    ),
)

# (marker, kind, message) checked in the entry document.
_EMBEDDED_CONFIG_MARKERS: tuple[tuple[str, FindingKind, str], ...] = (
    ("firebase-app-compat.js", FindingKind.MISSING_FIREBASE_SDK, "Firebase SDK missing"),
    ("firebaseConfig", FindingKind.MISSING_FIREBASE_CONFIG, "Firebase configuration missing"),
    (
        "firebase.initializeApp",
        FindingKind.MISSING_FIREBASE_INIT,
        "Firebase initialization missing",
    ),
)

READY_RECOMMENDATION = "Code is ready for deployment"


@dataclass(frozen=True)
class DeploymentResult:
    """Outcome of a pre-deployment check."""

    session: AnalysisSession
    status: DeploymentStatus
    critical_count: int
    recommendations: list[str]

    @property
    def allowed(self) -> bool:
        """True unless a HIGH or CRITICAL error was found."""
        return self.critical_count == 0


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def check_required_documents(project_root: Path, required: tuple[str, ...]) -> list[Finding]:
    """One CRITICAL finding per required document missing at *project_root*."""
    findings: list[Finding] = []
    for name in required:
        if (project_root / name).exists():
            logger.debug("Required document present: %s", name)
            continue
        findings.append(
            Finding(
                file=name,
                kind=FindingKind.MISSING_CRITICAL_FILE,
                message=f"Missing critical file: {name}",
                severity=Severity.CRITICAL,
            )
        )
    return findings


def validate_embedded_config(project_root: Path, entry_document: str) -> list[Finding]:
    """Check the entry document for SDK inclusion, config object and init call.

    An unreadable entry document yields a single ``FIREBASE_CONFIG_ERROR``.
    """
    try:
        text = (project_root / entry_document).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return [
            Finding(
                file=entry_document,
                kind=FindingKind.FIREBASE_CONFIG_ERROR,
                message=f"Error while validating Firebase configuration: {exc}",
                severity=Severity.HIGH,
            )
        ]

    return [
        Finding(file=entry_document, kind=kind, message=message, severity=Severity.HIGH)
        for marker, kind, message in _EMBEDDED_CONFIG_MARKERS
        if marker not in text
    ]


def scan_text_for_security_issues(text: str, name: str) -> list[Finding]:
    """Match *text* against every row of :data:`SECURITY_PATTERNS`.

    Each row fires at most once; rows do not short-circuit each other.
    """
    return [
        Finding(file=name, kind=row.kind, message=row.message, severity=row.severity)
        for row in SECURITY_PATTERNS
        if row.pattern.search(text)
    ]


def scan_security_patterns(project_root: Path, config: GuardConfig) -> list[Finding]:
    """Re-scan every document for dangerous patterns.  Unreadable documents are skipped."""
    findings: list[Finding] = []
    for ref in iter_documents(
        project_root, extension=config.extension, skip_dirs=config.skip_dirs
    ):
        try:
            text = ref.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not scan %s: %s", printable(str(ref.path)), exc)
            continue
        findings.extend(scan_text_for_security_issues(text, ref.name))
    return findings


# ---------------------------------------------------------------------------
# Decision
# ---------------------------------------------------------------------------


def decide_status(session: AnalysisSession) -> DeploymentStatus:
    """BLOCKED on any HIGH/CRITICAL error, WARNING on other errors, else ALLOWED."""
    if session.blocking_count > 0:
        return DeploymentStatus.BLOCKED
    if session.errors:
        return DeploymentStatus.WARNING
    return DeploymentStatus.ALLOWED


def get_recommendations(session: AnalysisSession) -> list[str]:
    """Map present finding kinds to remediation hints."""
    triggers: list[tuple[bool, str]] = [
        (
            session.has_error(FindingKind.UNDEFINED_FUNCTION),
            "Fix undefined functions before deploying",
        ),
        (
            session.has_error(FindingKind.MISSING_ELEMENT),
            "Make sure every referenced element exists in the markup",
        ),
        (
            session.has_error(FindingKind.SYNTAX_ERROR),
            "Fix JavaScript syntax errors",
        ),
        (
            session.has_warning(FindingKind.FIREBASE_ERROR_HANDLING),
            "Add error handling to every Firebase operation",
        ),
    ]
    recommendations = [text for triggered, text in triggers if triggered]
    return recommendations or [READY_RECOMMENDATION]


def run_predeploy_check(
    project_root: Path,
    config: GuardConfig | None = None,
    *,
    analysis_report_path: Path | None = None,
) -> DeploymentResult:
    """Run the analyzer, then the gate checks, and decide the deployment status.

    When *analysis_report_path* is given, the analysis report is written
    there before the gate checks add their findings.
    """
    config = config or GuardConfig()
    session = analyze_project(project_root, config)
    if analysis_report_path is not None:
        write_report(session, analysis_report_path)

    session.extend(check_required_documents(project_root, config.required_files))
    session.extend(validate_embedded_config(project_root, config.entry_document))
    session.extend(scan_security_patterns(project_root, config))

    status = decide_status(session)
    logger.info("Deployment status: %s", status.value)
    return DeploymentResult(
        session=session,
        status=status,
        critical_count=session.blocking_count,
        recommendations=get_recommendations(session),
    )
