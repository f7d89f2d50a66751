"""Entry point for ``python -m teamhex.cli``."""

from __future__ import annotations

from teamhex.cli.main import app

app(prog_name="teamhex")
