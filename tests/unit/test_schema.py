"""Unit tests for teamhex.catalog.schema Pydantic models."""

from __future__ import annotations

import datetime

import pytest
from pydantic import ValidationError

from teamhex.catalog.schema import (
    ClassicDataFile,
    ClassicTeam,
    Color,
    DataFile,
    Era,
    LeagueRecord,
    Team,
    format_timestamp,
)

# ---------------------------------------------------------------------------
# Team (eras layout)
# ---------------------------------------------------------------------------


class TestTeam:
    """Tests for the eras-layout Team model."""

    def test_valid_construction(self) -> None:
        team = Team.model_validate({
            "name": "Green Bay Packers",
            "league": "NFL",
            "division": "NFC North",
            "eras": [{"year": 1980, "colors": [{"name": "Gold", "hex": "FFB612"}]}],
        })
        assert team.name == "Green Bay Packers"
        assert team.league == "NFL"
        assert team.division == "NFC North"
        assert team.eras == (Era(year=1980, colors=(Color(name="Gold", hex="FFB612"),)),)
        assert team.link == ""
        assert team.id is None

    def test_link_alias(self) -> None:
        team = Team.model_validate({"name": "A", "league": "L", "_link": "/leagues/l/a"})
        assert team.link == "/leagues/l/a"

    def test_missing_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Team.model_validate({"league": "NFL"})

    def test_missing_league_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Team.model_validate({"name": "Bears"})

    def test_wrong_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Team.model_validate({"name": 42, "league": "NFL"})

    def test_era_year_must_be_int(self) -> None:
        with pytest.raises(ValidationError):
            Team.model_validate({"name": "A", "league": "L", "eras": [{"year": "nineteen", "colors": []}]})

    def test_null_eras_and_colors_are_empty(self) -> None:
        team = Team.model_validate({"name": "A", "league": "L", "eras": [{"year": 2000, "colors": None}]})
        assert team.eras[0].colors == ()
        assert Team.model_validate({"name": "A", "league": "L", "eras": None}).eras == ()
        assert ClassicTeam.model_validate({"name": "A", "league": "L", "colors": None}).colors == ()

    def test_frozen(self) -> None:
        team = Team(name="A", league="L")
        with pytest.raises(ValidationError):
            team.name = "B"  # type: ignore[misc]

    def test_payload_field_names_and_order(self) -> None:
        team = Team(
            name="Bears",
            league="NFL",
            eras=(Era(year=1974, colors=(Color(name="Orange", hex="C83803"),)),),
            link="/leagues/nfl/bears",
        )
        payload = team.to_payload()
        assert list(payload) == ["name", "eras", "league", "_link"]
        assert payload["eras"] == [{"year": 1974, "colors": [{"name": "Orange", "hex": "C83803"}]}]

    def test_payload_includes_optional_fields_when_set(self) -> None:
        team = Team(id=7, name="Packers", league="NFL", division="NFC North")
        assert list(team.to_payload()) == ["id", "name", "eras", "league", "division", "_link"]


# ---------------------------------------------------------------------------
# ClassicTeam (flat colors layout)
# ---------------------------------------------------------------------------


class TestClassicTeam:
    """Tests for the flat-colors ClassicTeam model."""

    def test_valid_construction(self) -> None:
        team = ClassicTeam.model_validate({
            "name": "Apples",
            "colors": ["#f00", "#0f0"],
            "league": "Fruit",
            "conference": "Sweet",
        })
        assert team.colors == ("#f00", "#0f0")
        assert team.conference == "Sweet"

    def test_colors_must_be_strings(self) -> None:
        with pytest.raises(ValidationError):
            ClassicTeam.model_validate({"name": "A", "league": "L", "colors": [{"hex": "#f00"}]})

    def test_payload_omits_missing_conference(self) -> None:
        team = ClassicTeam(name="Bananas", colors=("#ff0", "#000"), league="Fruit", link="/leagues/fruit/bananas")
        assert team.to_payload() == {
            "name": "Bananas",
            "colors": ["#ff0", "#000"],
            "league": "Fruit",
            "link": "/leagues/fruit/bananas",
        }


# ---------------------------------------------------------------------------
# LeagueRecord and data files
# ---------------------------------------------------------------------------


class TestLeagueRecord:
    def test_payload_uses_underscore_link(self) -> None:
        record = LeagueRecord(league="Italian Food", link="/leagues/italian%20food")
        assert record.to_payload() == {"league": "Italian Food", "_link": "/leagues/italian%20food"}


class TestDataFiles:
    def test_generated_parsed_with_timezone(self) -> None:
        data = DataFile.model_validate({"generated": "2020-02-22T12:00:00Z", "teams": []})
        assert data.generated == datetime.datetime(2020, 2, 22, 12, tzinfo=datetime.timezone.utc)

    def test_missing_generated_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ClassicDataFile.model_validate({"teams": []})

    def test_missing_teams_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DataFile.model_validate({"generated": "2020-02-22T12:00:00Z"})

    def test_variants(self) -> None:
        assert DataFile.variant == "eras"
        assert ClassicDataFile.variant == "classic"

    def test_generated_must_be_timestamp_text(self) -> None:
        with pytest.raises(ValidationError, match="RFC 3339"):
            DataFile.model_validate({"generated": 1582372800, "teams": []})

    def test_naive_generated_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DataFile.model_validate({"generated": "2020-02-22T12:00:00", "teams": []})

    def test_generated_text_not_serialized(self) -> None:
        data = DataFile.model_validate({"generated": "2020-02-22T12:00:00Z", "teams": []})
        assert data.generated_text == "2020-02-22T12:00:00Z"
        assert "generated_text" not in data.model_dump()


# ---------------------------------------------------------------------------
# format_timestamp
# ---------------------------------------------------------------------------

_UTC = datetime.timezone.utc
_EST = datetime.timezone(datetime.timedelta(hours=-5))
_IST = datetime.timezone(datetime.timedelta(hours=5, minutes=30))


class TestFormatTimestamp:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (datetime.datetime(2020, 2, 22, 12, tzinfo=_UTC), "2020-02-22T12:00:00Z"),
            (datetime.datetime(2020, 2, 22, 12, 0, 0, 500000, tzinfo=_UTC), "2020-02-22T12:00:00.5Z"),
            (datetime.datetime(2020, 2, 22, 12, 0, 0, 120, tzinfo=_UTC), "2020-02-22T12:00:00.00012Z"),
            (datetime.datetime(2021, 3, 1, 8, 30, tzinfo=_EST), "2021-03-01T08:30:00-05:00"),
            (datetime.datetime(2021, 3, 1, 8, 30, tzinfo=_IST), "2021-03-01T08:30:00+05:30"),
        ],
    )
    def test_without_source(self, value: datetime.datetime, expected: str) -> None:
        assert format_timestamp(value) == expected

    def test_source_fraction_beyond_microseconds(self) -> None:
        value = datetime.datetime(2020, 2, 22, 12, 0, 0, 123456, tzinfo=_UTC)
        assert format_timestamp(value, "2020-02-22T12:00:00.123456789Z") == "2020-02-22T12:00:00.123456789Z"

    def test_source_trailing_zeros_dropped(self) -> None:
        value = datetime.datetime(2020, 2, 22, 12, 0, 0, 100000, tzinfo=_UTC)
        assert format_timestamp(value, "2020-02-22T12:00:00.100Z") == "2020-02-22T12:00:00.1Z"
