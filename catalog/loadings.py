"""
PCA loading vectors.

The loadings CSV has a header row (blank first cell, then component labels)
followed by one row per audio feature: `feature,pc0,pc1,pc2[,...]`. Only the
first three components are read. Fields are split on plain commas; quoted
fields are not supported.
"""
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np

from .core import LoadingVector
from .errors import ParseError

N_COMPONENTS = 3


def _rows(text: str) -> List[str]:
    return [line.rstrip("\r") for line in text.strip().split("\n") if line.strip()]


def component_labels(text: str) -> List[str]:
    """Labels of the first three components, taken from the header row."""
    rows = _rows(text)
    if not rows:
        return []
    return [h.strip() for h in rows[0].split(",")[1:1 + N_COMPONENTS]]


def parse_loading_vectors(text: str, source: str = "<text>") -> Dict[str, LoadingVector]:
    """Maps each feature name to its loadings on pc0, pc1 and pc2."""
    vectors: Dict[str, LoadingVector] = {}
    for lineno, line in enumerate(_rows(text)[1:], start=2):
        parts = line.split(",")
        if len(parts) < 1 + N_COMPONENTS:
            raise ParseError(f"{source}:{lineno}: expected a feature name and {N_COMPONENTS} loadings, got {line!r}")
        feature = parts[0].strip()
        try:
            pc0, pc1, pc2 = (float(p) for p in parts[1:1 + N_COMPONENTS])
        except ValueError as exc:
            raise ParseError(f"{source}:{lineno}: non-numeric loading in {line!r}") from exc
        vectors[feature] = LoadingVector(pc0, pc1, pc2)
    return vectors


def loading_matrix(vectors: Mapping[str, LoadingVector], features: Optional[Sequence[str]] = None) -> np.ndarray:
    """
    Stacks loadings into an (n_features, 3) matrix, rows in `features` order
    (defaults to the mapping's order). Unknown features raise KeyError.
    """
    names = list(features) if features is not None else list(vectors)
    if not names:
        return np.zeros((0, N_COMPONENTS))
    return np.stack([vectors[name].as_array() for name in names])


def project(track: Mapping[str, Any], vectors: Mapping[str, LoadingVector]) -> np.ndarray:
    """
    Projects a track's audio features onto the three components.
    Features the track lacks, or that are not numeric, contribute zero.
    """
    point = np.zeros(N_COMPONENTS)
    for feature, vector in vectors.items():
        value = track.get(feature)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        point += float(value) * vector.as_array()
    return point
