"""Allow ``python -m htmlguard``."""

from htmlguard.cli import main

main()
