# htmlguard:domain=analysis
"""Finding model: severities, finding kinds, and the per-run analysis session."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class Severity(enum.IntEnum):
    """Severity of a finding, ordered for gate comparison."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @property
    def is_blocking(self) -> bool:
        """HIGH and CRITICAL findings are errors; the rest are advisory."""
        return self >= Severity.HIGH


class FindingKind(str, enum.Enum):
    """Closed set of finding identifiers."""

    FILE_READ_ERROR = "FILE_READ_ERROR"
    UNDEFINED_FUNCTION = "UNDEFINED_FUNCTION"
    MISSING_ELEMENT = "MISSING_ELEMENT"
    DUPLICATE_FUNCTION = "DUPLICATE_FUNCTION"
    SYNTAX_ERROR = "SYNTAX_ERROR"
    FIREBASE_INIT = "FIREBASE_INIT"
    FIREBASE_ERROR_HANDLING = "FIREBASE_ERROR_HANDLING"
    MISSING_EVENT_HANDLER = "MISSING_EVENT_HANDLER"
    UNUSED_CSS_ID = "UNUSED_CSS_ID"
    UNDEFINED_VARIABLE = "UNDEFINED_VARIABLE"
    MISSING_CRITICAL_FILE = "MISSING_CRITICAL_FILE"
    MISSING_FIREBASE_SDK = "MISSING_FIREBASE_SDK"
    MISSING_FIREBASE_CONFIG = "MISSING_FIREBASE_CONFIG"
    MISSING_FIREBASE_INIT = "MISSING_FIREBASE_INIT"
    FIREBASE_CONFIG_ERROR = "FIREBASE_CONFIG_ERROR"
    DANGEROUS_EVAL = "DANGEROUS_EVAL"
    XSS_RISK = "XSS_RISK"
    HARDCODED_PASSWORD = "HARDCODED_PASSWORD"
    EXPOSED_API_KEY = "EXPOSED_API_KEY"


@dataclass(frozen=True)
class Finding:
    """A single reported issue."""

    file: str  # display name of the document, not the full path
    kind: FindingKind
    message: str
    severity: Severity

    def to_dict(self) -> dict[str, str]:
        """Serialize using the report artifact's field names."""
        return {
            "file": self.file,
            "type": self.kind.value,
            "message": self.message,
            "severity": self.severity.name,
        }


@dataclass
class AnalysisSession:
    """Accumulator for one analysis run.

    Created empty by every ``analyze_project`` call and returned to the
    caller; nothing is shared between runs.  Findings are appended in
    discovery order and never deduplicated.
    """

    errors: list[Finding] = field(default_factory=list)
    warnings: list[Finding] = field(default_factory=list)
    documents_analyzed: int = 0

    def add(self, finding: Finding) -> None:
        """Route *finding* to the error or warning bucket by severity."""
        if finding.severity.is_blocking:
            self.errors.append(finding)
        else:
            self.warnings.append(finding)

    def extend(self, findings: Iterable[Finding]) -> None:
        for finding in findings:
            self.add(finding)

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def blocking_count(self) -> int:
        """Number of errors with HIGH or CRITICAL severity."""
        return sum(1 for f in self.errors if f.severity.is_blocking)

    def has_error(self, kind: FindingKind) -> bool:
        return any(f.kind is kind for f in self.errors)

    def has_warning(self, kind: FindingKind) -> bool:
        return any(f.kind is kind for f in self.warnings)
