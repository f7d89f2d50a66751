"""Exception hierarchy for the team catalog.

Load failures are fatal: callers must not serve anything when one is
raised.  Lookup failures are expected and carry the short message the
HTTP layer returns verbatim.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base exception for all catalog errors."""


# ---------------------------------------------------------------------------
# Load errors
# ---------------------------------------------------------------------------


class LoadError(CatalogError):
    """The data file could not be turned into a catalog."""


class DataFileReadError(LoadError, OSError):
    """The data file is missing or unreadable."""


class DataFileParseError(LoadError, ValueError):
    """The data file is not valid JSON or does not match the schema."""


# ---------------------------------------------------------------------------
# Lookup errors
# ---------------------------------------------------------------------------


class LookupFailedError(CatalogError, LookupError):
    """A league or team lookup found nothing."""

    message: str = "not found"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)

    def __str__(self) -> str:
        return str(self.args[0])


class LeagueNotFoundError(LookupFailedError):
    """No league bucket exists for the requested name."""

    message = "league not found"


class TeamNotFoundError(LookupFailedError):
    """The league exists but has no team with the requested name."""

    message = "team not found"
