"""Analysis domain — finding model, rule engine, analyzer, report generator."""

# htmlguard:domain=analysis

from htmlguard.analysis.analyzer import analyze_project
from htmlguard.analysis.findings import AnalysisSession, Finding, FindingKind, Severity
from htmlguard.analysis.report import (
    format_json,
    format_porcelain,
    format_rich,
    report_to_dict,
    write_report,
)
from htmlguard.analysis.rule_engine import RULES, build_rules, evaluate_document

__all__ = [
    "RULES",
    "AnalysisSession",
    "Finding",
    "FindingKind",
    "Severity",
    "analyze_project",
    "build_rules",
    "evaluate_document",
    "format_json",
    "format_porcelain",
    "format_rich",
    "report_to_dict",
    "write_report",
]
