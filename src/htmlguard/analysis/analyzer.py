# htmlguard:domain=analysis
"""Analyzer orchestrator: walk documents, evaluate rules, aggregate findings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from htmlguard.analysis.findings import AnalysisSession, Finding
from htmlguard.analysis.rule_engine import evaluate_document
from htmlguard.infrastructure.config import GuardConfig
from htmlguard.infrastructure.document_source import iter_documents, read_document

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def analyze_project(project_root: Path, config: GuardConfig | None = None) -> AnalysisSession:
    """Analyze every markup document under *project_root*.

    Parameters
    ----------
    project_root:
        Directory to traverse.
    config:
        Traversal and rule settings.  Defaults to :class:`GuardConfig`.

    Returns
    -------
    AnalysisSession
        A fresh session holding errors and warnings in traversal order
        (documents in listing order, then rules in canonical order).

    A document that cannot be read contributes a single ``FILE_READ_ERROR``
    and is not counted as analyzed.  Exceptions raised by rules propagate.
    """
    config = config or GuardConfig()
    session = AnalysisSession()

    for ref in iter_documents(
        project_root, extension=config.extension, skip_dirs=config.skip_dirs
    ):
        text = read_document(ref)
        if isinstance(text, Finding):
            session.add(text)
            continue

        session.documents_analyzed += 1
        logger.debug("Analyzing %s", ref.path)
        session.extend(
            evaluate_document(
                text, ref.name, error_handling_window=config.error_handling_window
            )
        )

    logger.info(
        "Analyzed %d documents: %d errors, %d warnings",
        session.documents_analyzed,
        len(session.errors),
        len(session.warnings),
    )
    return session
