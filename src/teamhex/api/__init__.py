"""HTTP API module."""

from __future__ import annotations

from teamhex.api.app import JSONLineResponse, create_app

__all__ = ["JSONLineResponse", "create_app"]
