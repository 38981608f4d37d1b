"""CSV marker source — reads marker exports into GeoPoints."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from geocluster.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_coordinate,
)
from geocluster.domain.value_objects.geo_point import GeoPoint, InvalidCoordinateError

logger = logging.getLogger(__name__)

# Accepted header spellings (after normalization), first match wins
_ID_COLUMNS = ("id", "marker_id", "item_id", "uuid")
_LAT_COLUMNS = ("latitude", "lat", "latitude_deg")
_LON_COLUMNS = ("longitude", "lng", "lon", "long")
_TITLE_COLUMNS = ("title", "name", "titre", "nom")
_CATEGORY_COLUMNS = ("category", "type", "catégorie", "categorie")


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Detect the delimiter (comma/semicolon/tab); French Excel exports use ';'."""
    if not sample:
        return csv.excel

    first_line = sample.splitlines()[0]
    delims = [";", ",", "\t"]
    counts = {d: first_line.count(d) for d in delims}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect

    return csv.excel


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization."""
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = [
            {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            for raw_row in reader
        ]

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def _first(row: dict[str, str | None], columns: tuple[str, ...]) -> str | None:
    for col in columns:
        if row.get(col):
            return row[col]
    return None


def load_markers(file_path: Path) -> list[GeoPoint]:
    """Load markers from a CSV file, in file order.

    Rows without usable coordinates are skipped with a warning; rows without
    an id get a positional one (``row-<n>``, 1-based).
    """
    rows = _read_csv(file_path)
    markers: list[GeoPoint] = []
    skipped = 0

    for n, row in enumerate(rows, start=1):
        latitude = parse_coordinate(_first(row, _LAT_COLUMNS))
        longitude = parse_coordinate(_first(row, _LON_COLUMNS))
        marker_id = _first(row, _ID_COLUMNS) or f"row-{n}"

        if latitude is None or longitude is None:
            logger.warning("Row %d (%s): missing coordinates, skipped", n, marker_id)
            skipped += 1
            continue

        point = GeoPoint(
            id=marker_id,
            latitude=latitude,
            longitude=longitude,
            title=_first(row, _TITLE_COLUMNS) or "",
            category=_first(row, _CATEGORY_COLUMNS),
        )
        try:
            markers.append(point.ensure_valid())
        except InvalidCoordinateError as e:
            logger.warning("Row %d: %s, skipped", n, e)
            skipped += 1

    logger.info("Parsed %d markers (%d skipped)", len(markers), skipped)
    return markers
