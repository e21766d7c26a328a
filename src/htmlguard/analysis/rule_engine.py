# htmlguard:domain=analysis
"""Rule engine: heuristic, text-pattern checks over a single document.

Every rule is a pure function ``(text, name) -> list[Finding]``.  Rules run
independently on the raw document text (markup and inline script together);
none of them parses the document, so false positives and false negatives are
expected.  ``RULES`` fixes the canonical evaluation order, which is also the
order findings appear in reports.
"""

from __future__ import annotations

import re
from collections import Counter
from functools import partial
from typing import TYPE_CHECKING

from htmlguard.analysis.findings import Finding, FindingKind, Severity

if TYPE_CHECKING:
    from collections.abc import Callable

    RuleFunc = Callable[[str, str], list[Finding]]

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_CALL_RE = re.compile(r"\b(\w+)\s*\(")
_FUNCTION_DEF_RE = re.compile(r"function\s+(\w+)\s*\(")
_GET_ELEMENT_RE = re.compile(r"""getElementById\(['"`]([^'"`]+)['"`]\)""")
_FIREBASE_WRITE_RE = re.compile(r"database\.ref\([^)]+\)\.(?:push|set|update|once|on)\(")
_ONCLICK_RE = re.compile(r"""onclick=["']([^"']+)["']""")
_HANDLER_CALL_RE = re.compile(r"^(\w+)\(")
_CSS_ID_RE = re.compile(r"#[\w-]+")
_SESSION_VARIABLE_RE = re.compile(r"\b(?:currentUser|currentUserRole|auth|database)\b")

_ERROR_HANDLING_TOKENS = ("catch", "error")

# Names that are never reported as undefined calls: language built-ins, DOM
# and browser APIs that show up as ``name(`` in page scripts.
BUILTIN_FUNCTIONS: frozenset[str] = frozenset(
    {
        "console", "alert", "confirm", "prompt", "parseInt", "parseFloat",
        "setTimeout", "setInterval", "clearTimeout", "clearInterval",
        "addEventListener", "removeEventListener", "getElementById",
        "querySelector", "querySelectorAll", "createElement",
        "appendChild", "removeChild", "classList", "style",
        "push", "pop", "shift", "unshift", "slice", "splice",
        "JSON", "Date", "Math", "Array", "Object", "String",
        "Number", "Boolean", "RegExp", "Error", "Promise",
        "fetch", "localStorage", "sessionStorage", "location",
        "window", "document", "navigator", "history",
    }
)

EVENT_HANDLER_PREFIX = "on"

DEFAULT_ERROR_HANDLING_WINDOW = 5


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _is_bound(text: str, name: str) -> bool:
    """True if *name* is assigned through a ``const``/``let``/``var`` declaration."""
    return any(f"{keyword} {name} =" in text for keyword in ("const", "let", "var"))


def _has_id_attribute(text: str, identifier: str) -> bool:
    return re.search(rf"""id=["']{re.escape(identifier)}["']""", text, re.IGNORECASE) is not None


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def check_undefined_functions(text: str, name: str) -> list[Finding]:
    """Flag called identifiers that are neither built in, defined nor bound.

    Does not resolve scope: method calls such as ``user.save()`` are matched
    by their bare name.  Documents without any ``function`` definition are
    skipped entirely.  Each call occurrence is reported.
    """
    calls = _CALL_RE.findall(text)
    defined = set(_FUNCTION_DEF_RE.findall(text))
    if not calls or not defined:
        return []

    findings: list[Finding] = []
    for func in calls:
        if (
            func in BUILTIN_FUNCTIONS
            or func in defined
            or func.startswith(EVENT_HANDLER_PREFIX)
            or _is_bound(text, func)
        ):
            continue
        findings.append(
            Finding(
                file=name,
                kind=FindingKind.UNDEFINED_FUNCTION,
                message=f"Potentially undefined function: {func}",
                severity=Severity.MEDIUM,
            )
        )
    return findings


def check_missing_elements(text: str, name: str) -> list[Finding]:
    """Every ``getElementById('x')`` needs an ``id="x"`` attribute in the same document."""
    return [
        Finding(
            file=name,
            kind=FindingKind.MISSING_ELEMENT,
            message=f"Element with ID '{element_id}' not found in markup",
            severity=Severity.HIGH,
        )
        for element_id in _GET_ELEMENT_RE.findall(text)
        if not _has_id_attribute(text, element_id)
    ]


def check_duplicate_functions(text: str, name: str) -> list[Finding]:
    """One finding per function name defined more than once."""
    counts = Counter(_FUNCTION_DEF_RE.findall(text))
    return [
        Finding(
            file=name,
            kind=FindingKind.DUPLICATE_FUNCTION,
            message=f"Duplicate function: {func} ({count} occurrences)",
            severity=Severity.HIGH,
        )
        for func, count in counts.items()
        if count > 1
    ]


def check_bracket_balance(text: str, name: str) -> list[Finding]:
    """Compare open/close counts of braces and parentheses across the whole document.

    Brackets inside strings, comments and text content are counted too.
    """
    findings: list[Finding] = []
    for label, opener, closer in (("braces", "{", "}"), ("parentheses", "(", ")")):
        opened = text.count(opener)
        closed = text.count(closer)
        if opened != closed:
            findings.append(
                Finding(
                    file=name,
                    kind=FindingKind.SYNTAX_ERROR,
                    message=f"Unbalanced {label}: {opened} opened, {closed} closed",
                    severity=Severity.HIGH,
                )
            )
    return findings


def check_firebase_usage(
    text: str,
    name: str,
    *,
    window: int = DEFAULT_ERROR_HANDLING_WINDOW,
) -> list[Finding]:
    """Check backend initialisation and error handling around database writes.

    For each ``database.ref(...).<op>(`` call, the first line containing it
    and the following ``window - 1`` lines must mention ``catch`` or
    ``error``.
    """
    findings: list[Finding] = []

    if ("database.ref(" in text or "auth." in text) and "firebase.initializeApp" not in text:
        findings.append(
            Finding(
                file=name,
                kind=FindingKind.FIREBASE_INIT,
                message="Firebase used without explicit initialization",
                severity=Severity.MEDIUM,
            )
        )

    lines = text.split("\n")
    for call in _FIREBASE_WRITE_RE.findall(text):
        if not _handles_errors(lines, call, window):
            findings.append(
                Finding(
                    file=name,
                    kind=FindingKind.FIREBASE_ERROR_HANDLING,
                    message=f"Firebase operation without error handling: {call}",
                    severity=Severity.MEDIUM,
                )
            )
    return findings


def _handles_errors(lines: list[str], call: str, window: int) -> bool:
    for i, line in enumerate(lines):
        if call in line:
            return any(
                token in following
                for following in lines[i : i + window]
                for token in _ERROR_HANDLING_TOKENS
            )
    # Call spans several lines; nothing to anchor the window on.
    return False


def check_event_handlers(text: str, name: str) -> list[Finding]:
    """Inline ``onclick`` handlers must name a function defined or bound in the document."""
    findings: list[Finding] = []
    for handler in _ONCLICK_RE.findall(text):
        match = _HANDLER_CALL_RE.match(handler)
        if match is None:
            continue
        func = match.group(1)
        if f"function {func}(" in text or _is_bound(text, func):
            continue
        findings.append(
            Finding(
                file=name,
                kind=FindingKind.MISSING_EVENT_HANDLER,
                message=f"Event handler not found: {func}",
                severity=Severity.HIGH,
            )
        )
    return findings


def check_css_ids(text: str, name: str) -> list[Finding]:
    """Every ``#name`` token needs a matching ``id`` attribute.

    Any ``#`` token counts, including colour literals and URL fragments.
    """
    return [
        Finding(
            file=name,
            kind=FindingKind.UNUSED_CSS_ID,
            message=f"Unused CSS ID selector: {selector}",
            severity=Severity.LOW,
        )
        for selector in _CSS_ID_RE.findall(text)
        if not _has_id_attribute(text, selector[1:])
    ]


def check_session_variables(text: str, name: str) -> list[Finding]:
    """Report session-critical globals used without their local declaration."""
    if _SESSION_VARIABLE_RE.search(text) is None:
        return []

    # (usage marker, declaration patterns, message)
    checks: tuple[tuple[str, tuple[str, ...], str], ...] = (
        (
            "currentUser",
            ("let currentUser", "var currentUser"),
            "Variable currentUser used but not declared",
        ),
        (
            "currentUserRole",
            ("let currentUserRole", "var currentUserRole"),
            "Variable currentUserRole used but not declared",
        ),
        (
            "auth.",
            ("const auth = firebase.auth()",),
            "Variable auth used but not initialized",
        ),
        (
            "database.",
            ("const database = firebase.database()",),
            "Variable database used but not initialized",
        ),
    )

    findings: list[Finding] = []
    for usage, declarations, message in checks:
        if usage in text and not any(decl in text for decl in declarations):
            findings.append(
                Finding(
                    file=name,
                    kind=FindingKind.UNDEFINED_VARIABLE,
                    message=message,
                    severity=Severity.HIGH,
                )
            )
    return findings


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

RULES: tuple[RuleFunc, ...] = (
    check_undefined_functions,
    check_missing_elements,
    check_duplicate_functions,
    check_bracket_balance,
    check_firebase_usage,
    check_event_handlers,
    check_css_ids,
    check_session_variables,
)


def build_rules(
    *, error_handling_window: int = DEFAULT_ERROR_HANDLING_WINDOW
) -> tuple[RuleFunc, ...]:
    """Return ``RULES`` with the Firebase rule bound to *error_handling_window*."""
    return tuple(
        partial(rule, window=error_handling_window) if rule is check_firebase_usage else rule
        for rule in RULES
    )


def evaluate_document(
    text: str,
    name: str,
    *,
    error_handling_window: int = DEFAULT_ERROR_HANDLING_WINDOW,
) -> list[Finding]:
    """Run every rule in canonical order and concatenate their findings.

    Rule exceptions are not caught: rules are total over text, so a failure
    is a defect and aborts the run.
    """
    findings: list[Finding] = []
    for rule in build_rules(error_handling_window=error_handling_window):
        findings.extend(rule(text, name))
    return findings
