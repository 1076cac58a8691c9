"""
Configuration for the catalog data layer.

Dataset locations default to the static paths the storytelling page serves;
any of them may be a local path or an http(s) URL.
"""
import os
from dataclasses import dataclass, replace

DEFAULT_BILLBOARD_URL = "data/processed/billboard.ndjson"
DEFAULT_LOADINGS_URL = "data/processed/spotify_track_pca_loadings.csv"
DEFAULT_MIN_CHART_YEAR = 1980


@dataclass(frozen=True)
class CatalogConfig:
    """Where the datasets live and how strictly they are parsed."""
    billboard_url: str = DEFAULT_BILLBOARD_URL
    loadings_url: str = DEFAULT_LOADINGS_URL
    min_chart_year: int = DEFAULT_MIN_CHART_YEAR
    request_timeout: float = 30.0
    # False: log and skip malformed NDJSON lines instead of failing the dataset
    strict_parsing: bool = True

    @classmethod
    def from_env(cls) -> "CatalogConfig":
        """
        Builds a config from VINYL_* environment variables, falling back to
        the defaults for anything unset.
        """
        config = cls()
        overrides = {}
        if os.environ.get("VINYL_BILLBOARD_URL"):
            overrides["billboard_url"] = os.environ["VINYL_BILLBOARD_URL"]
        if os.environ.get("VINYL_LOADINGS_URL"):
            overrides["loadings_url"] = os.environ["VINYL_LOADINGS_URL"]
        if os.environ.get("VINYL_MIN_CHART_YEAR"):
            overrides["min_chart_year"] = int(os.environ["VINYL_MIN_CHART_YEAR"])
        if os.environ.get("VINYL_STRICT_PARSING"):
            overrides["strict_parsing"] = os.environ["VINYL_STRICT_PARSING"].lower() not in ("0", "false", "no")
        return replace(config, **overrides) if overrides else config
