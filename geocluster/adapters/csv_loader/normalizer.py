"""CSV cell and header cleanup for marker exports (BOM, stray spaces, decimal commas)."""

from __future__ import annotations

import re

_SEPARATORS = re.compile(r"\W+")


def normalize_column_name(name: str) -> str:
    """Turn a header into a snake_case key: '\\ufeff Latitude (deg) ' → 'latitude_deg'.

    Any run of non-word characters (spaces, NBSP, BOM, punctuation) acts as
    a separator; accented letters are kept.
    """
    words = _SEPARATORS.split(name.lower())
    return "_".join(w for w in words if w)


def clean_string(value: str | None) -> str | None:
    """Stripped cell value, or None for missing / blank cells."""
    if value is None:
        return None
    return value.strip() or None


def parse_coordinate(value: str | None) -> float | None:
    """Parse '48.8566' or '48,8566' into a float; None when empty or garbage."""
    value = clean_string(value)
    if value is None:
        return None
    try:
        return float(value.replace(",", "."))
    except ValueError:
        return None
