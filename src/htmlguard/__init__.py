"""htmlguard - heuristic linter and pre-deployment gate for script-heavy HTML pages."""

__version__ = "1.0.0"
