"""Derived lookup structures for the team catalog.

:func:`build_index` runs once per loaded file and produces a
:class:`CatalogIndex`:

* every team, sorted by name (ordinal, not locale collation);
* one :class:`LeagueBucket` per case-insensitive league key, holding the
  league's teams in the same name order plus a name -> team map;
* the league list with generated links, sorted by display name.

Keys are produced by :func:`normalize_key` exactly once per record while
building, and once per argument when querying.  Display strings are never
modified.

Duplicate team names inside one league are not rejected.  The bucket's
ordered list keeps every record while the name map keeps the one loaded
last in the file (see :func:`_merge_last_wins`).  Two leagues whose
names differ only by case share a bucket.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence
from operator import attrgetter
from types import MappingProxyType
from urllib.parse import quote

from teamhex.catalog.schema import AnyTeam, LeagueRecord
from teamhex.utils.logger import get_logger

# Sub-delimiters allowed unescaped in a path segment.  Everything else
# outside the unreserved set (space, ",", "/", ";", "?", ...) is %XX.
_SEGMENT_SAFE = "$&+:=@"

logger = get_logger("catalog.index")


def normalize_key(value: str) -> str:
    """Return the lookup key for a league or team display string."""
    return value.lower()


def escape_path_segment(segment: str) -> str:
    """Percent-encode *segment* for use as one URL path segment."""
    return quote(segment, safe=_SEGMENT_SAFE)


def league_link(league_key: str) -> str:
    return f"/leagues/{escape_path_segment(league_key)}"


def team_link(league_key: str, team_key: str) -> str:
    return f"{league_link(league_key)}/{escape_path_segment(team_key)}"


@dataclasses.dataclass(frozen=True)
class LeagueBucket:
    """All teams that share one normalized league key."""

    display: str
    teams: tuple[AnyTeam, ...]
    by_name: Mapping[str, AnyTeam]


@dataclasses.dataclass(frozen=True)
class CatalogIndex:
    """Immutable result of :func:`build_index`."""

    teams: tuple[AnyTeam, ...]
    leagues: tuple[LeagueRecord, ...]
    buckets: Mapping[str, LeagueBucket]


@dataclasses.dataclass
class _StagedBucket:
    display: str
    teams: list[AnyTeam] = dataclasses.field(default_factory=list)
    by_name: dict[str, tuple[int, AnyTeam]] = dataclasses.field(default_factory=dict)

    def freeze(self) -> LeagueBucket:
        return LeagueBucket(
            display=self.display,
            teams=tuple(self.teams),
            by_name=MappingProxyType({key: team for key, (_, team) in self.by_name.items()}),
        )


def _merge_last_wins(by_name: dict[str, tuple[int, AnyTeam]], name_key: str, position: int, team: AnyTeam) -> None:
    """Store *team* under *name_key* unless a record later in the file holds it.

    *position* is the record's index in source order.  Names that differ
    only by case do not sort next to each other, so the position decides
    rather than the iteration order.
    """
    previous = by_name.get(name_key)
    if previous is not None:
        logger.debug("Duplicate team %r in league %r; keeping the later record", team.name, team.league)
        if previous[0] > position:
            return
    by_name[name_key] = (position, team)


def build_index(teams: Sequence[AnyTeam]) -> CatalogIndex:
    """Sort, link and bucket *teams*.

    Args:
        teams: Team records in source order.

    Returns:
        The derived lookup structures.  Every team in the result is a copy
        of its input record with ``link`` filled in.
    """
    ordered = sorted(enumerate(teams), key=lambda item: item[1].name)

    linked: list[AnyTeam] = []
    staged: dict[str, _StagedBucket] = {}
    for position, record in ordered:
        league_key = normalize_key(record.league)
        name_key = normalize_key(record.name)
        team = record.model_copy(update={"link": team_link(league_key, name_key)})

        bucket = staged.get(league_key)
        if bucket is None:
            bucket = staged[league_key] = _StagedBucket(display=team.league)
        bucket.teams.append(team)
        _merge_last_wins(bucket.by_name, name_key, position, team)
        linked.append(team)

    leagues = sorted(
        (LeagueRecord(league=bucket.display, link=league_link(key)) for key, bucket in staged.items()),
        key=attrgetter("league"),
    )

    logger.debug("Indexed %d teams across %d leagues", len(linked), len(leagues))
    return CatalogIndex(
        teams=tuple(linked),
        leagues=tuple(leagues),
        buckets=MappingProxyType({key: bucket.freeze() for key, bucket in staged.items()}),
    )
