"""
Yearly audio-feature trends for the helix chart.
"""
import csv
import datetime
import io
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np

HELIX_FEATURES = ("energy", "valence", "acousticness")
_YEAR_PREFIX = re.compile(r"^(\d{4})(?:-\d{1,2})?$")


def load_feature_table(text: str) -> List[Dict[str, str]]:
    """Parses a headed CSV (e.g. temp_dataset.csv) into one dict per row."""
    return list(csv.DictReader(io.StringIO(text)))


def _year_of(row: Mapping[str, Any]) -> Optional[int]:
    raw = row.get("date")
    if not raw:
        return None
    try:
        return datetime.date.fromisoformat(str(raw)[:10]).year
    except ValueError:
        pass
    # Release dates are often year-only or year-month ("1999", "1999-05")
    match = _YEAR_PREFIX.match(str(raw).strip())
    return int(match.group(1)) if match else None


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return np.nan


def yearly_feature_means(
    rows: Iterable[Mapping[str, Any]],
    features: Sequence[str] = HELIX_FEATURES,
) -> List[Dict[str, Any]]:
    """
    Averages each feature per release year.

    Returns [{"year": 1999, "energy": 0.61, ...}, ...] sorted by year. Cells
    that are empty or non-numeric are left out of the mean; a feature with
    no numeric values in a year comes back as NaN.
    """
    by_year: Dict[int, List[List[float]]] = {}
    for row in rows:
        year = _year_of(row)
        if year is None:
            continue
        by_year.setdefault(year, []).append([_as_float(row.get(f)) for f in features])

    results = []
    for year in sorted(by_year):
        mat = np.asarray(by_year[year], dtype=np.float64).reshape(-1, len(features))
        counts = np.sum(~np.isnan(mat), axis=0)
        sums = np.nansum(mat, axis=0)
        means = np.where(counts > 0, sums / np.maximum(counts, 1), np.nan)
        entry: Dict[str, Any] = {"year": year}
        entry.update({f: float(m) for f, m in zip(features, means)})
        results.append(entry)
    return results
