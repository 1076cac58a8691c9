"""
Billboard chart loading, indexing and window queries.

Entries are kept sorted by date; the rolling-year query relies on that order
to binary-search its starting point.
"""
import datetime
from bisect import bisect_left
from itertools import islice
from typing import Dict, List, Sequence, Union

from loguru import logger

from .config import DEFAULT_MIN_CHART_YEAR
from .core import ChartEntry
from .errors import ParseError
from .sources import parse_ndjson

DateLike = Union[str, datetime.date]


def add_one_year(day: datetime.date) -> datetime.date:
    """Same month and day one year later; Feb 29 rolls over to Mar 1."""
    try:
        return day.replace(year=day.year + 1)
    except ValueError:
        return datetime.date(day.year + 1, 3, 1)


def _as_date(value: DateLike) -> datetime.date:
    if isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(value)


def load_chart_entries(
    text: str,
    source: str = "<text>",
    min_year: int = DEFAULT_MIN_CHART_YEAR,
    strict: bool = True,
) -> List[ChartEntry]:
    """
    Parses chart NDJSON, sorts it chronologically and drops weeks before
    `min_year`. In lenient mode records with a bad field are logged and
    skipped like malformed lines.
    """
    entries = []
    for record in parse_ndjson(text, source=source, strict=strict):
        try:
            entries.append(ChartEntry.from_record(record))
        except ParseError as exc:
            if strict:
                raise
            logger.warning("Skipping chart record in {}: {}", source, exc)
    entries.sort(key=lambda e: e.date)
    logger.info("Loaded {} Billboard chart entries", len(entries))

    entries = [e for e in entries if e.year >= min_year]
    logger.info("Filtered to {} entries from {}+", len(entries), min_year)
    return entries


class ChartIndex:
    """
    Read-only view over a sorted list of chart entries with by-week and
    by-year best-rank indexes.
    """

    def __init__(self, entries: Sequence[ChartEntry] = ()):
        self.entries: List[ChartEntry] = list(entries)
        self._dates: List[str] = [e.date for e in self.entries]
        if any(a > b for a, b in zip(self._dates, self._dates[1:])):
            raise ValueError("ChartIndex requires entries sorted by date")

        self.by_week: Dict[str, Dict[str, int]] = {}
        self.by_year: Dict[int, Dict[str, int]] = {}
        self._build_indexes()

        self.available_years: List[int] = sorted(self.by_year, reverse=True)
        self.available_weeks: List[str] = sorted(self.by_week)

    def _build_indexes(self):
        for entry in self.entries:
            _keep_best(self.by_week.setdefault(entry.date, {}), entry)
            _keep_best(self.by_year.setdefault(entry.year, {}), entry)
        if self.entries:
            logger.info(
                "Indexed {} weeks across {} years of chart data",
                len(self.by_week), len(self.by_year),
            )

    def __len__(self) -> int:
        return len(self.entries)

    def peak_ranks_for_year(self, year: Union[int, str]) -> Dict[str, int]:
        """Best rank per track id in a calendar year; empty for years without data."""
        return dict(self.by_year.get(int(year), {}))

    def peak_ranks_for_week(self, week: DateLike) -> Dict[str, int]:
        """Best rank per track id on one chart date; empty if that date has no chart."""
        return dict(self.by_week.get(_as_date(week).isoformat(), {}))

    def first_index_on_or_after(self, day: DateLike) -> int:
        """Index of the leftmost entry dated on or after `day`, or -1 if none."""
        idx = bisect_left(self._dates, _as_date(day).isoformat())
        return idx if idx < len(self._dates) else -1

    def peak_ranks_in_rolling_year(self, start_week: DateLike) -> Dict[str, int]:
        """
        Best rank per track id over the half-open window
        [start_week, start_week + 1 year).
        """
        start = _as_date(start_week)
        end = add_one_year(start).isoformat()

        rankings: Dict[str, int] = {}
        start_idx = self.first_index_on_or_after(start)
        if start_idx == -1:
            return rankings

        for entry in islice(self.entries, start_idx, None):
            if entry.date >= end:
                break
            _keep_best(rankings, entry)
        return rankings


def _keep_best(bucket: Dict[str, int], entry: ChartEntry):
    # Strict less-than: an equal rank never replaces the first one seen
    current = bucket.get(entry.id)
    if current is None or entry.rank < current:
        bucket[entry.id] = entry.rank
