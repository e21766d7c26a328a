"""Shared test fixtures for htmlguard."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

# Entry document carrying the three Firebase integration markers and no findings.
INDEX_PAGE = (
    "<html><head>\n"
    '<script src="https://www.gstatic.com/firebasejs/9.0.0/firebase-app-compat.js"></script>\n'
    "</head><body>\n"
    "<script>\n"
    'const firebaseConfig = { projectId: "demo" };\n'
    "firebase.initializeApp(firebaseConfig);\n"
    "</script>\n"
    "</body></html>\n"
)

# A page that triggers no rule at all.
CLEAN_PAGE = (
    "<html><body>\n"
    '<div id="app"></div>\n'
    "<script>\n"
    "function render() {\n"
    "  return 1;\n"
    "}\n"
    "render();\n"
    "</script>\n"
    "</body></html>\n"
)

REQUIRED_PAGES = ("index.html", "admin.html", "category-posts.html", "profile.html", "messages.html")


@pytest.fixture()
def make_project(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Return a builder that writes ``{relative_path: text}`` under a fresh project root."""

    def _make(files: dict[str, str]) -> Path:
        root = tmp_path / "site"
        root.mkdir(exist_ok=True)
        for rel, text in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return root

    return _make


@pytest.fixture()
def clean_site(make_project: Callable[[dict[str, str]], Path]) -> Path:
    """A deployable site: every required page present, no findings."""
    files = {name: CLEAN_PAGE for name in REQUIRED_PAGES}
    files["index.html"] = INDEX_PAGE
    return make_project(files)


@pytest.fixture()
def clean_page() -> str:
    """Text of a page that triggers no rule."""
    return CLEAN_PAGE


@pytest.fixture()
def index_page() -> str:
    """Text of an entry page with every Firebase integration marker."""
    return INDEX_PAGE
