"""Pydantic v2 schema models for team color data.

Two on-disk layouts exist.  The current one nests colors inside eras
(``Team`` / ``DataFile``); the older one keeps a flat list of hex values
per team (``ClassicTeam`` / ``ClassicDataFile``).  Both share the same
``{"generated": ..., "teams": [...]}`` envelope.

All models are frozen: once the catalog is built nothing changes.
"""

from __future__ import annotations

import datetime
import re
from typing import Any, ClassVar, Literal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, StrictInt, field_validator, model_validator

SchemaVariant = Literal["eras", "classic"]


def _null_as_empty(value: Any) -> Any:
    """JSON null decodes to an empty list, as a missing key does."""
    return () if value is None else value


class Color(BaseModel):
    """A named color swatch."""

    model_config = ConfigDict(frozen=True)

    name: str
    hex: str


class Era(BaseModel):
    """The palette a team used starting in a given year."""

    model_config = ConfigDict(frozen=True)

    year: StrictInt
    colors: tuple[Color, ...] = ()

    @field_validator("colors", mode="before")
    @classmethod
    def _null_colors(cls, value: Any) -> Any:
        return _null_as_empty(value)


class Team(BaseModel):
    """A team in the eras layout.

    ``link`` is derived while indexing and serialized as ``_link``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: StrictInt | None = None
    name: str
    eras: tuple[Era, ...] = ()
    league: str
    division: str | None = None
    link: str = Field(default="", alias="_link")

    @field_validator("eras", mode="before")
    @classmethod
    def _null_eras(cls, value: Any) -> Any:
        return _null_as_empty(value)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ClassicTeam(BaseModel):
    """A team in the flat-colors layout."""

    model_config = ConfigDict(frozen=True)

    name: str
    colors: tuple[str, ...] = ()
    league: str
    conference: str | None = None
    link: str = ""

    @field_validator("colors", mode="before")
    @classmethod
    def _null_colors(cls, value: Any) -> Any:
        return _null_as_empty(value)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


AnyTeam = Team | ClassicTeam


class LeagueRecord(BaseModel):
    """A league display name and the path listing its teams."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    league: str
    link: str = Field(..., alias="_link")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Data file envelope
# ---------------------------------------------------------------------------

_RFC3339 = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.(?P<fraction>\d+))?(?:Z|[+-]\d{2}:\d{2})")


def format_timestamp(value: datetime.datetime, source: str = "") -> str:
    """Render *value* as RFC 3339 with nanosecond precision.

    Trailing zeros in the fractional seconds are dropped and a zero UTC
    offset is written as ``Z``.  When *source* is the text *value* was
    parsed from, its fraction is used so that digits finer than a
    microsecond are kept.
    """
    match = _RFC3339.fullmatch(source)
    if match:
        digits = (match["fraction"] or "")[:9]
    else:
        digits = f"{value.microsecond:06d}"
    digits = digits.rstrip("0")

    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if digits:
        text += f".{digits}"

    offset = value.utcoffset()
    if not offset:
        return text + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


class _Envelope(BaseModel):
    """Fields shared by both data file layouts.

    ``generated_text`` keeps the timestamp as written in the file.
    """

    model_config = ConfigDict(frozen=True)

    generated: AwareDatetime
    generated_text: str = Field(default="", exclude=True)

    @field_validator("generated", mode="before")
    @classmethod
    def _check_generated(cls, value: Any) -> Any:
        if isinstance(value, datetime.datetime):
            return value
        if not isinstance(value, str) or not _RFC3339.fullmatch(value):
            msg = "generated must be an RFC 3339 timestamp such as 2020-02-22T12:00:00Z"
            raise ValueError(msg)
        return value

    @model_validator(mode="before")
    @classmethod
    def _keep_generated_text(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("generated"), str):
            return {**data, "generated_text": data["generated"]}
        return data

    def generation_timestamp(self) -> str:
        return format_timestamp(self.generated, self.generated_text)


class DataFile(_Envelope):
    """Eras-layout data file as stored on disk."""

    variant: ClassVar[SchemaVariant] = "eras"

    teams: tuple[Team, ...]


class ClassicDataFile(_Envelope):
    """Flat-colors data file as stored on disk."""

    variant: ClassVar[SchemaVariant] = "classic"

    teams: tuple[ClassicTeam, ...]


AnyDataFile = DataFile | ClassicDataFile
