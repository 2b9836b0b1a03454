"""Allow ``python -m verba_mcp``."""

from .server import main

main()
