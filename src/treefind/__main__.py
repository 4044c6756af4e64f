"""Allow running treefind as ``python -m treefind``."""

from treefind.cli import app

app()
