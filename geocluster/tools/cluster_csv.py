"""Cluster a CSV marker export from the command line.

Usage:
    python -m geocluster.tools.cluster_csv markers.csv --zoom 10
    python -m geocluster.tools.cluster_csv markers.csv --zoom 10 --json
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from geocluster.adapters.cache.lru_distance_cache import LRUDistanceCache
from geocluster.adapters.csv_loader.loader import load_markers
from geocluster.application.use_cases.cluster_markers import ClusterMarkersUseCase
from geocluster.config import settings
from geocluster.domain.entities.render_item import Cluster
from geocluster.domain.policies.clustering import ClusteringParams

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


def run(csv_path: Path, zoom: float, enabled: bool = True) -> dict:
    """Load, cluster and summarize a marker file."""
    markers = load_markers(csv_path)

    cache = LRUDistanceCache(
        capacity=settings.distance_cache_capacity,
        precision=settings.distance_cache_precision,
        earth_radius_km=settings.earth_radius_km,
    )
    params = dataclasses.replace(ClusteringParams.from_settings(settings), enabled=enabled)
    result = ClusterMarkersUseCase(distance=cache, params=params).cluster_with_stats(markers, zoom)

    return {
        "file": str(csv_path),
        "zoom": zoom,
        "radius_km": result.radius_km,
        "skipped": result.skipped,
        "stats": dataclasses.asdict(result.stats),
        "clusters": [
            {
                "id": item.id,
                "label": item.label,
                "latitude": item.centroid_latitude,
                "longitude": item.centroid_longitude,
                "members": [m.id for m in item.members],
            }
            for item in result.items
            if isinstance(item, Cluster)
        ],
        "singletons": [item.id for item in result.items if not isinstance(item, Cluster)],
    }


def _print_summary(summary: dict) -> None:
    stats = summary["stats"]
    logger.info("=" * 50)
    logger.info("File:        %s", summary["file"])
    logger.info("Zoom:        %s", summary["zoom"])
    if summary["skipped"]:
        logger.info("Clustering skipped (too few markers or zoomed in)")
    else:
        logger.info("Radius:      %.4f km", summary["radius_km"])
    logger.info(
        "Markers:     %d → %d items (%d clusters, %d singletons, -%d%%)",
        stats["original_count"], stats["processed_count"],
        stats["cluster_count"], stats["item_count"], stats["reduction_percentage"],
    )
    for c in summary["clusters"]:
        logger.info("  %s  %s  (%.6f, %.6f)", c["id"], c["label"], c["latitude"], c["longitude"])
    logger.info("=" * 50)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Cluster map markers from a CSV file")
    parser.add_argument("csv_path", type=str, help="CSV file with id/latitude/longitude columns")
    parser.add_argument(
        "--zoom", type=float, default=10,
        help="Map zoom level (default: 10)",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print the full result as JSON instead of a summary",
    )
    parser.add_argument(
        "--no-clustering", action="store_true",
        help="Return every marker as a singleton",
    )
    args = parser.parse_args(argv)

    csv_path = Path(args.csv_path)
    if not csv_path.exists():
        logger.error("CSV file not found: %s", csv_path)
        return 1

    summary = run(csv_path, args.zoom, enabled=not args.no_clustering)
    if args.json:
        print(json.dumps(summary, ensure_ascii=False, indent=2))
    else:
        _print_summary(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
