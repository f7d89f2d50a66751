"""Shared pytest fixtures for the teamhex test suite.

Fixtures defined here are available to all tests without explicit imports.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from teamhex.catalog.model import TeamCatalog

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def classic_file() -> Path:
    """Flat-colors data file: Apples, Bananas, The Pears (Fruit) and Pizzas (Italian Food)."""
    return FIXTURES_DIR / "teamhex.json"


@pytest.fixture
def eras_file() -> Path:
    """Eras-layout data file with NFL/nfl and NBA teams."""
    return FIXTURES_DIR / "teamhex-eras.json"


@pytest.fixture
def catalog(classic_file: Path) -> TeamCatalog:
    return TeamCatalog.from_file(classic_file)


@pytest.fixture
def eras_catalog(eras_file: Path) -> TeamCatalog:
    return TeamCatalog.from_file(eras_file)


@pytest.fixture
def write_data_file(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory that writes a data file into a temporary directory.

    Args:
        tmp_path: pytest built-in temporary directory fixture.

    Returns:
        A callable taking a list of team dicts (and optionally a
        ``generated`` timestamp and file name) that returns the file path.
    """

    def _write(
        teams: list[dict[str, Any]],
        generated: object = "2020-02-22T12:00:00Z",
        name: str = "teams.json",
    ) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps({"generated": generated, "teams": teams}), encoding="utf-8")
        return path

    return _write
