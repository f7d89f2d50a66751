"""Read-only query surface over a loaded team catalog.

A :class:`TeamCatalog` is built once from a data file and never changes.
It may be shared by any number of concurrent readers without locking.
:class:`CatalogHolder` adds reloading by building a fresh catalog and
swapping the published reference.
"""

from __future__ import annotations

import datetime
import threading
from pathlib import Path

from teamhex.catalog.errors import LeagueNotFoundError, TeamNotFoundError
from teamhex.catalog.index import CatalogIndex, LeagueBucket, build_index, normalize_key
from teamhex.catalog.loader import VariantOption, load_data_file
from teamhex.catalog.schema import AnyDataFile, AnyTeam, LeagueRecord, SchemaVariant
from teamhex.utils.logger import get_logger

logger = get_logger("catalog.model")


class TeamCatalog:
    """Lookups over one immutable snapshot of team color data.

    Args:
        data: A validated data file, teams in source order.
    """

    def __init__(self, data: AnyDataFile) -> None:
        self._generated = data.generated
        self._timestamp = data.generation_timestamp()
        self._variant: SchemaVariant = data.variant
        self._index: CatalogIndex = build_index(data.teams)

    @classmethod
    def from_file(cls, path: Path | str, variant: VariantOption = "auto") -> TeamCatalog:
        """Load *path* and build a catalog from it.

        Raises:
            DataFileReadError: The file could not be read.
            DataFileParseError: The file is malformed.
        """
        catalog = cls(load_data_file(path, variant=variant))
        logger.info(
            "Catalog ready: %d teams, %d leagues, generated %s",
            len(catalog.all_teams()),
            len(catalog.leagues()),
            catalog.generation_timestamp(),
        )
        return catalog

    @property
    def schema_variant(self) -> SchemaVariant:
        return self._variant

    def all_teams(self) -> tuple[AnyTeam, ...]:
        """Every team, sorted by name."""
        return self._index.teams

    def leagues(self) -> tuple[LeagueRecord, ...]:
        """Every league with its link, sorted by display name."""
        return self._index.leagues

    def _bucket(self, league: str) -> LeagueBucket:
        try:
            return self._index.buckets[normalize_key(league)]
        except KeyError:
            raise LeagueNotFoundError from None

    def teams_by_league(self, league: str) -> tuple[AnyTeam, ...]:
        """Teams in *league* (any case), sorted by name.

        Raises:
            LeagueNotFoundError: No such league.
        """
        return self._bucket(league).teams

    def team_by_league_and_name(self, league: str, name: str) -> AnyTeam:
        """The team called *name* in *league*, both matched case-insensitively.

        Raises:
            LeagueNotFoundError: No such league.
            TeamNotFoundError: The league has no team with that name.
        """
        bucket = self._bucket(league)
        try:
            return bucket.by_name[normalize_key(name)]
        except KeyError:
            raise TeamNotFoundError from None

    def search(self, match: str) -> list[AnyTeam]:
        """Teams whose name contains *match*, ignoring case, in name order.

        An empty *match* returns every team; no match returns an empty list.
        """
        needle = normalize_key(match)
        return [team for team in self._index.teams if needle in normalize_key(team.name)]

    def generation_date(self) -> datetime.datetime:
        """Timestamp recorded in the data file."""
        return self._generated

    def generation_timestamp(self) -> str:
        """The generation timestamp as RFC 3339 text, fractional seconds intact."""
        return self._timestamp


class CatalogHolder:
    """Publishes the current :class:`TeamCatalog` and swaps it on reload.

    Readers call :attr:`catalog` and use the returned snapshot for the rest
    of their request.  :meth:`reload` never touches the live snapshot: it
    builds a replacement first and only publishes it on success.
    """

    def __init__(self, catalog: TeamCatalog, path: Path | str, variant: VariantOption = "auto") -> None:
        self._catalog = catalog
        self._path = Path(path)
        self._variant: VariantOption = variant
        self._lock = threading.Lock()

    @classmethod
    def from_file(cls, path: Path | str, variant: VariantOption = "auto") -> CatalogHolder:
        return cls(TeamCatalog.from_file(path, variant=variant), path, variant)

    @property
    def catalog(self) -> TeamCatalog:
        return self._catalog

    @property
    def path(self) -> Path:
        return self._path

    def reload(self) -> TeamCatalog:
        """Rebuild from the data file and publish the new catalog.

        Raises:
            LoadError: The file could not be loaded; the previous catalog
                stays published.
        """
        with self._lock:
            fresh = TeamCatalog.from_file(self._path, variant=self._variant)
            self._catalog = fresh
        logger.info("Catalog reloaded from %s", self._path)
        return fresh
