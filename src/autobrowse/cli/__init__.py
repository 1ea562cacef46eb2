"""autobrowse Command Line Interface.

Provides CLI commands for:
- Running task files against a browser
- Creating a default config and sample tasks
- Validating task documents

Usage:
    autobrowse --help
    autobrowse run --config config.yaml --tasks tasks.yaml
    autobrowse validate tasks.yaml --verbose
"""

from .main import main

__all__ = ["main"]
