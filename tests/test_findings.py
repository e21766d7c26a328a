"""Tests for htmlguard.analysis.findings — severities, findings, session routing."""

from __future__ import annotations

import dataclasses

import pytest

from htmlguard.analysis.findings import AnalysisSession, Finding, FindingKind, Severity


def _finding(severity: Severity, kind: FindingKind = FindingKind.SYNTAX_ERROR) -> Finding:
    return Finding(file="page.html", kind=kind, message="msg", severity=severity)


class TestSeverity:
    def test_ordering(self) -> None:
        assert Severity.LOW < Severity.MEDIUM < Severity.HIGH < Severity.CRITICAL

    @pytest.mark.parametrize(
        ("severity", "blocking"),
        [
            (Severity.LOW, False),
            (Severity.MEDIUM, False),
            (Severity.HIGH, True),
            (Severity.CRITICAL, True),
        ],
    )
    def test_is_blocking(self, severity: Severity, blocking: bool) -> None:
        assert severity.is_blocking is blocking


class TestFinding:
    def test_is_immutable(self) -> None:
        finding = _finding(Severity.HIGH)
        with pytest.raises(dataclasses.FrozenInstanceError):
            finding.message = "changed"  # type: ignore[misc]

    def test_to_dict(self) -> None:
        finding = Finding(
            file="index.html",
            kind=FindingKind.MISSING_ELEMENT,
            message="Element with ID 'menu' not found in markup",
            severity=Severity.HIGH,
        )
        assert finding.to_dict() == {
            "file": "index.html",
            "type": "MISSING_ELEMENT",
            "message": "Element with ID 'menu' not found in markup",
            "severity": "HIGH",
        }


class TestAnalysisSession:
    def test_routing_by_severity(self) -> None:
        session = AnalysisSession()
        session.extend(
            [
                _finding(Severity.LOW),
                _finding(Severity.HIGH),
                _finding(Severity.MEDIUM),
                _finding(Severity.CRITICAL),
            ]
        )
        assert [f.severity for f in session.errors] == [Severity.HIGH, Severity.CRITICAL]
        assert [f.severity for f in session.warnings] == [Severity.LOW, Severity.MEDIUM]

    def test_duplicates_are_kept(self) -> None:
        session = AnalysisSession()
        session.add(_finding(Severity.HIGH))
        session.add(_finding(Severity.HIGH))
        assert len(session.errors) == 2

    def test_passed_and_blocking_count(self) -> None:
        session = AnalysisSession()
        assert session.passed
        session.add(_finding(Severity.MEDIUM))
        assert session.passed
        session.add(_finding(Severity.CRITICAL))
        assert not session.passed
        assert session.blocking_count == 1

    def test_has_error_and_warning(self) -> None:
        session = AnalysisSession()
        session.add(_finding(Severity.HIGH, FindingKind.SYNTAX_ERROR))
        session.add(_finding(Severity.MEDIUM, FindingKind.FIREBASE_ERROR_HANDLING))
        assert session.has_error(FindingKind.SYNTAX_ERROR)
        assert not session.has_warning(FindingKind.SYNTAX_ERROR)
        assert session.has_warning(FindingKind.FIREBASE_ERROR_HANDLING)

    def test_sessions_are_independent(self) -> None:
        first = AnalysisSession()
        first.add(_finding(Severity.HIGH))
        assert AnalysisSession().errors == []
