"""Team color catalog: loading, indexing and lookups."""

from __future__ import annotations

from teamhex.catalog.errors import (
    CatalogError,
    DataFileParseError,
    DataFileReadError,
    LeagueNotFoundError,
    LoadError,
    LookupFailedError,
    TeamNotFoundError,
)
from teamhex.catalog.index import CatalogIndex, LeagueBucket, build_index, normalize_key
from teamhex.catalog.loader import load_data_file
from teamhex.catalog.model import CatalogHolder, TeamCatalog
from teamhex.catalog.schema import (
    ClassicDataFile,
    ClassicTeam,
    Color,
    DataFile,
    Era,
    LeagueRecord,
    Team,
)

__all__ = [
    "CatalogError",
    "CatalogHolder",
    "CatalogIndex",
    "ClassicDataFile",
    "ClassicTeam",
    "Color",
    "DataFile",
    "DataFileParseError",
    "DataFileReadError",
    "Era",
    "LeagueBucket",
    "LeagueNotFoundError",
    "LeagueRecord",
    "LoadError",
    "LookupFailedError",
    "Team",
    "TeamCatalog",
    "TeamNotFoundError",
    "build_index",
    "load_data_file",
    "normalize_key",
]
