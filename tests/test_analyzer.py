"""Tests for htmlguard.analysis.analyzer — project traversal and aggregation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from htmlguard.analysis.analyzer import analyze_project
from htmlguard.analysis.findings import FindingKind
from htmlguard.infrastructure.config import GuardConfig

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


class TestAnalyzeProject:
    def test_clean_project(
        self, make_project: Callable[[dict[str, str]], Path], clean_page: str
    ) -> None:
        root = make_project({"a.html": clean_page, "sub/b.html": clean_page})
        session = analyze_project(root)
        assert session.documents_analyzed == 2
        assert session.errors == []
        assert session.warnings == []
        assert session.passed

    def test_empty_tree(self, tmp_path: Path) -> None:
        session = analyze_project(tmp_path)
        assert session.documents_analyzed == 0
        assert session.passed

    def test_findings_use_display_name(
        self, make_project: Callable[[dict[str, str]], Path]
    ) -> None:
        root = make_project({"pages/forum.html": "<p>:)</p>"})
        session = analyze_project(root)
        assert [f.file for f in session.errors] == ["forum.html"]

    def test_order_is_documents_then_rules(
        self, make_project: Callable[[dict[str, str]], Path]
    ) -> None:
        root = make_project(
            {
                "b.html": "{",
                "a.html": "<style>#ghost{}</style>\nfunction x() {}\nfunction x() {}\n",
            }
        )
        session = analyze_project(root)
        assert [(f.file, f.kind) for f in session.errors] == [
            ("a.html", FindingKind.DUPLICATE_FUNCTION),
            ("b.html", FindingKind.SYNTAX_ERROR),
        ]
        assert [(f.file, f.kind) for f in session.warnings] == [
            ("a.html", FindingKind.UNUSED_CSS_ID),
        ]

    def test_unreadable_document_does_not_abort(
        self, make_project: Callable[[dict[str, str]], Path], clean_page: str
    ) -> None:
        root = make_project({"a.html": clean_page, "c.html": clean_page})
        broken = root / "b.html"
        broken.write_bytes(b"\xff\xfe\xfa")
        session = analyze_project(root)
        assert session.documents_analyzed == 2
        assert len(session.errors) == 1
        assert session.errors[0].kind is FindingKind.FILE_READ_ERROR
        assert session.errors[0].file == str(broken)

    def test_idempotent(self, make_project: Callable[[dict[str, str]], Path]) -> None:
        root = make_project(
            {
                "a.html": "<button onclick=\"go()\">x</button>{",
                "b.html": "function f() { g(); }\n<style>#x{}</style>",
            }
        )
        first = analyze_project(root)
        second = analyze_project(root)
        assert first.errors == second.errors
        assert first.warnings == second.warnings
        assert first is not second

    def test_config_extension(self, make_project: Callable[[dict[str, str]], Path]) -> None:
        root = make_project({"a.htm": "{", "b.html": "{"})
        session = analyze_project(root, GuardConfig(extension=".htm"))
        assert session.documents_analyzed == 1
        assert [f.file for f in session.errors] == ["a.htm"]

    def test_rule_exception_propagates(
        self,
        make_project: Callable[[dict[str, str]], Path],
        clean_page: str,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def _boom(*_args: object, **_kwargs: object) -> list[object]:
            msg = "rule defect"
            raise RuntimeError(msg)

        monkeypatch.setattr("htmlguard.analysis.analyzer.evaluate_document", _boom)
        root = make_project({"a.html": clean_page})
        with pytest.raises(RuntimeError, match="rule defect"):
            analyze_project(root)
