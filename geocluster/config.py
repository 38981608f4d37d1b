"""Application configuration via Pydantic Settings.

NOTE: Every clustering constant is mapped to an explicit env variable name
(CLUSTER_MIN_POINTS, DISTANCE_CACHE_CAPACITY, etc.) so a map deployment can
retune it without code changes.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Clustering
    cluster_min_points: int = Field(default=50, ge=0, validation_alias="CLUSTER_MIN_POINTS")
    cluster_max_zoom: float = Field(default=12, validation_alias="CLUSTER_MAX_ZOOM")
    cluster_base_radius_km: float = Field(
        default=0.1, gt=0, validation_alias="CLUSTER_BASE_RADIUS_KM"
    )
    cluster_radius_zoom_offset: float = Field(
        default=8, validation_alias="CLUSTER_RADIUS_ZOOM_OFFSET"
    )
    cluster_radius_floor_km: float = Field(
        default=0.01, ge=0, validation_alias="CLUSTER_RADIUS_FLOOR_KM"
    )
    cluster_label_template: str = Field(
        default="{count} objets", validation_alias="CLUSTER_LABEL_TEMPLATE"
    )
    clustering_enabled: bool = Field(default=True, validation_alias="CLUSTERING_ENABLED")

    # Distance
    earth_radius_km: float = Field(default=6371.0, gt=0, validation_alias="EARTH_RADIUS_KM")
    distance_cache_capacity: int = Field(
        default=1000, ge=1, validation_alias="DISTANCE_CACHE_CAPACITY"
    )
    distance_cache_precision: int = Field(
        default=6, ge=0, validation_alias="DISTANCE_CACHE_PRECISION"
    )

    # App
    debug: bool = Field(default=False, validation_alias="DEBUG")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ],
        validation_alias="CORS_ORIGINS",
    )

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
