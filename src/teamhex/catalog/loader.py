"""Read a team color data file from disk.

The loader only decodes and validates; deriving lookup structures is the
job of :mod:`teamhex.catalog.index`.  Numbers given as strings and
timestamps without a UTC offset are schema violations.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import ValidationError

from teamhex.catalog.errors import DataFileParseError, DataFileReadError
from teamhex.catalog.schema import AnyDataFile, ClassicDataFile, DataFile, SchemaVariant
from teamhex.utils.logger import VERBOSE, get_logger

VariantOption = Literal["auto", "eras", "classic"]

VARIANT_OPTIONS: tuple[str, ...] = ("auto", "eras", "classic")

_FILE_MODELS: dict[SchemaVariant, type[DataFile] | type[ClassicDataFile]] = {
    "eras": DataFile,
    "classic": ClassicDataFile,
}

logger = get_logger("catalog.loader")


def detect_variant(raw: Any) -> SchemaVariant:
    """Decide which layout a decoded data file uses.

    A file whose teams carry ``colors`` is classic; anything else is eras.
    Files mixing both layouts are rejected rather than merged.

    Raises:
        DataFileParseError: The layouts are mixed.
    """
    teams = raw.get("teams") if isinstance(raw, dict) else None
    if not isinstance(teams, list):
        # Let schema validation report the real problem.
        return "eras"

    has_eras = any(isinstance(t, dict) and "eras" in t for t in teams)
    has_colors = any(isinstance(t, dict) and "colors" in t for t in teams)
    if has_eras and has_colors:
        msg = "teams mix the 'eras' and flat 'colors' layouts"
        raise DataFileParseError(msg)
    return "classic" if has_colors else "eras"


def load_data_file(path: Path | str, variant: VariantOption = "auto") -> AnyDataFile:
    """Open, decode and validate a data file.

    Args:
        path: JSON file to read.
        variant: ``"eras"`` or ``"classic"`` to force a layout, ``"auto"``
            to detect it from the team records.

    Returns:
        The validated file contents, teams in source order.

    Raises:
        DataFileReadError: The file could not be opened or read.
        DataFileParseError: Malformed JSON or a schema violation.
    """
    path = Path(path)
    if variant not in VARIANT_OPTIONS:
        msg = f"unknown schema variant {variant!r}. Valid variants: {', '.join(VARIANT_OPTIONS)}"
        raise ValueError(msg)

    try:
        content = path.read_bytes()
    except OSError as exc:
        msg = f"could not read {path}: {exc}"
        raise DataFileReadError(msg) from exc

    try:
        raw = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        msg = f"{path.name}: invalid JSON: {exc}"
        raise DataFileParseError(msg) from exc

    resolved: SchemaVariant = detect_variant(raw) if variant == "auto" else variant
    model = _FILE_MODELS[resolved]
    try:
        data = model.model_validate_json(content)
    except ValidationError as exc:
        msg = f"{path.name}: does not match the {resolved} schema: {exc}"
        raise DataFileParseError(msg) from exc

    logger.log(VERBOSE, "Loaded %d teams from %s (%s layout)", len(data.teams), path, resolved)
    return data
