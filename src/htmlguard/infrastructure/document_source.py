# htmlguard:domain=infrastructure
"""Document source: lazy traversal of markup documents under a project root."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from htmlguard.analysis.findings import Finding, FindingKind, Severity

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

logger = logging.getLogger(__name__)


def printable(text: str) -> str:
    """Replace undecodable filename bytes so *text* can be printed and serialized."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


@dataclass(frozen=True)
class DocumentRef:
    """A document found during traversal."""

    path: Path

    @property
    def name(self) -> str:
        """Display name used in findings."""
        return printable(self.path.name)


def iter_documents(
    root: Path,
    *,
    extension: str = ".html",
    skip_dirs: tuple[str, ...] = ("node_modules",),
) -> Iterator[DocumentRef]:
    """Yield every document with *extension* under *root*, depth first.

    Entries are visited in sorted name order so repeated runs over an
    unchanged tree produce identical output.  Names starting with ``.`` and
    directories listed in *skip_dirs* are skipped.  A directory reached
    through a symlink is entered at most once per resolved path.
    """
    seen: set[Path] = set()
    yield from _walk(root, extension, frozenset(skip_dirs), seen)


def _walk(
    directory: Path,
    extension: str,
    skip_dirs: frozenset[str],
    seen: set[Path],
) -> Iterator[DocumentRef]:
    real = directory.resolve()
    if real in seen:
        logger.debug("Skipping already visited directory %s", directory)
        return
    seen.add(real)

    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.name.startswith("."):
            continue
        if entry.is_dir():
            if entry.name in skip_dirs:
                continue
            yield from _walk(entry, extension, skip_dirs, seen)
        elif entry.name.endswith(extension):
            yield DocumentRef(entry)


def read_document(ref: DocumentRef) -> str | Finding:
    """Return the text of *ref*, or a ``FILE_READ_ERROR`` finding on failure."""
    try:
        return ref.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read %s: %s", printable(str(ref.path)), exc)
        return Finding(
            file=printable(str(ref.path)),
            kind=FindingKind.FILE_READ_ERROR,
            message=f"Unable to read file: {exc}",
            severity=Severity.HIGH,
        )
