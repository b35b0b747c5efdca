"""Entry point for ``python -m contentconv``."""

from contentconv.cli import app

app()
