"""
DataManager - loads and indexes the datasets behind the storytelling page.

Manages track data, Billboard charts and PCA loadings. The three loads are
independent: a failure in one is logged and leaves that dataset empty
without affecting the others.
"""
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union
import datetime

from loguru import logger

from .charts import ChartIndex, load_chart_entries
from .config import CatalogConfig
from .core import SUPERGENRE_COLORS, SUPERGENRE_ORDER, GenreCount, LoadingVector, Supergenre
from .errors import CatalogError
from .genres import GenreClassifier
from .loadings import parse_loading_vectors
from .sources import fetch_text, parse_ndjson


class DataManager:
    """
    Holds every dataset the visualizations read from.

    All structures are built once by the load methods and only read
    afterwards; accessors of a dataset that failed to load return empty
    collections.
    """

    def __init__(
        self,
        data_url: str,
        config: Optional[CatalogConfig] = None,
        classifier: Optional[GenreClassifier] = None,
    ):
        self.data_url = data_url
        self.config = config or CatalogConfig()
        self.classifier = classifier or GenreClassifier()

        # Track data
        self.parsed_data: List[Dict[str, Any]] = []
        self.all_genres: List[GenreCount] = []

        # Billboard data
        self.chart_index = ChartIndex()

        # PCA data
        self.loading_vectors: Dict[str, LoadingVector] = {}

        # dataset name -> error that stopped it loading
        self.load_errors: Dict[str, CatalogError] = {}

    def load_all_data(self) -> Dict[str, CatalogError]:
        """
        Loads tracks, chart data and PCA loadings concurrently and waits for
        all three. Returns the errors of datasets that failed (empty when
        everything loaded).
        """
        loaders: Dict[str, Callable[[], None]] = {
            "tracks": self.load_track_data,
            "billboard": self.load_billboard_data,
            "loadings": self.load_pca_loadings,
        }
        self.load_errors = {}
        with ThreadPoolExecutor(max_workers=len(loaders)) as executor:
            futures = {name: executor.submit(load) for name, load in loaders.items()}

        for name, future in futures.items():
            try:
                future.result()
            except CatalogError as exc:
                logger.error("Error loading {} data: {}", name, exc)
                self.load_errors[name] = exc
                self._clear_dataset(name)
        return dict(self.load_errors)

    def _clear_dataset(self, name: str):
        if name == "tracks":
            self.parsed_data = []
            self.all_genres = []
        elif name == "billboard":
            self.chart_index = ChartIndex()
        elif name == "loadings":
            self.loading_vectors = {}

    def _read_ndjson(self, source: str) -> List[Dict[str, Any]]:
        text = fetch_text(source, timeout=self.config.request_timeout)
        return parse_ndjson(text, source=source, strict=self.config.strict_parsing)

    def load_track_data(self):
        """Loads the track NDJSON and builds the supergenre distribution."""
        parsed = self._read_ndjson(self.data_url)
        logger.info("Loaded {} data points", len(parsed))
        if parsed:
            logger.debug("Sample data point: {}", parsed[0])

        genres = self.classifier.build_genre_distribution(parsed)
        self.parsed_data, self.all_genres = parsed, genres
        logger.info("Supergenre distribution: {}", [g.to_dict() for g in genres])

    def load_billboard_data(self):
        """Loads Billboard Hot 100 entries and rebuilds the chart indexes."""
        source = self.config.billboard_url
        text = fetch_text(source, timeout=self.config.request_timeout)
        entries = load_chart_entries(
            text,
            source=source,
            min_year=self.config.min_chart_year,
            strict=self.config.strict_parsing,
        )
        self.chart_index = ChartIndex(entries)
        logger.info(
            "Found {} unique years and {} unique weeks in Billboard data",
            len(self.chart_index.available_years), len(self.chart_index.available_weeks),
        )

    def load_pca_loadings(self):
        """Loads PCA loading vectors from CSV."""
        source = self.config.loadings_url
        text = fetch_text(source, timeout=self.config.request_timeout)
        self.loading_vectors = parse_loading_vectors(text, source=source)
        logger.info("Loaded PCA loading vectors for {} features", len(self.loading_vectors))

    # --- Track accessors ---

    def get_track_data(self) -> List[Dict[str, Any]]:
        return self.parsed_data

    def get_all_genres(self) -> List[GenreCount]:
        """Supergenres with track counts, in display order, zero counts dropped."""
        return self.all_genres

    def get_super_genre(self, track: Mapping[str, Any]) -> Supergenre:
        return self.classifier.super_genre_of(track)

    def get_super_genre_order(self) -> Sequence[Supergenre]:
        return SUPERGENRE_ORDER

    def get_super_genre_colors(self) -> Mapping[Supergenre, str]:
        return SUPERGENRE_COLORS

    # --- Billboard accessors ---

    def get_billboard_peak_rankings_for_year(self, year: Union[int, str]) -> Dict[str, int]:
        return self.chart_index.peak_ranks_for_year(year)

    def get_billboard_rankings_up_to_week(self, target_week: Union[str, datetime.date]) -> Dict[str, int]:
        """Best rank per track in the year following `target_week` (inclusive start)."""
        return self.chart_index.peak_ranks_in_rolling_year(target_week)

    def get_available_years(self) -> List[int]:
        """Years with chart data, most recent first."""
        return self.chart_index.available_years

    def get_available_weeks(self) -> List[str]:
        """Chart dates, chronological."""
        return self.chart_index.available_weeks

    # --- PCA accessors ---

    def get_pca_loadings(self) -> Dict[str, LoadingVector]:
        return self.loading_vectors
