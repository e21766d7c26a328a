"""Infrastructure domain — configuration and document traversal.

``htmlguard.infrastructure.document_source`` imports the finding model from
``htmlguard.analysis``, so it is not re-exported here.  Import it directly::

    from htmlguard.infrastructure.document_source import iter_documents
"""

from htmlguard.infrastructure.config import ConfigError, GuardConfig, load_config

__all__ = [
    "ConfigError",
    "GuardConfig",
    "load_config",
]
