"""
Core Data Structures for the Vinyl Story catalog.
"""
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple
import datetime

import numpy as np

from .errors import ParseError


class Supergenre(str, Enum):
    """One of the ten coarse buckets raw genre tags roll up into."""
    POP = "Pop"
    HIP_HOP_RAP = "Hip-Hop/Rap"
    ROCK_METAL = "Rock/Metal"
    ELECTRONIC_DANCE = "Electronic/Dance"
    RNB_SOUL_FUNK = "R&B/Soul/Funk"
    COUNTRY_FOLK_AMERICANA = "Country/Folk/Americana"
    LATIN = "Latin"
    REGGAE_CARIBBEAN = "Reggae/Caribbean"
    JAZZ_BLUES = "Jazz/Blues"
    OTHER_UNKNOWN = "Other/Unknown"

    def __str__(self) -> str:
        return self.value


# Display order shared with the globalization charts
SUPERGENRE_ORDER: Tuple[Supergenre, ...] = (
    Supergenre.POP,
    Supergenre.HIP_HOP_RAP,
    Supergenre.ROCK_METAL,
    Supergenre.ELECTRONIC_DANCE,
    Supergenre.RNB_SOUL_FUNK,
    Supergenre.COUNTRY_FOLK_AMERICANA,
    Supergenre.LATIN,
    Supergenre.REGGAE_CARIBBEAN,
    Supergenre.JAZZ_BLUES,
    Supergenre.OTHER_UNKNOWN,
)

SUPERGENRE_COLORS: Mapping[Supergenre, str] = MappingProxyType({
    Supergenre.POP: "#4e79a7",
    Supergenre.HIP_HOP_RAP: "#f28e2c",
    Supergenre.ROCK_METAL: "#e15759",
    Supergenre.ELECTRONIC_DANCE: "#76b7b2",
    Supergenre.RNB_SOUL_FUNK: "#59a14f",
    Supergenre.COUNTRY_FOLK_AMERICANA: "#edc949",
    Supergenre.LATIN: "#af7aa1",
    Supergenre.REGGAE_CARIBBEAN: "#ff9da7",
    Supergenre.JAZZ_BLUES: "#9c755f",
    Supergenre.OTHER_UNKNOWN: "#bab0ab",
})


@dataclass(frozen=True)
class ChartEntry:
    """One track's position on the Billboard chart for one dated week."""
    date: str  # YYYY-MM-DD
    id: str
    rank: int

    @property
    def day(self) -> datetime.date:
        return datetime.date.fromisoformat(self.date)

    @property
    def year(self) -> int:
        return self.day.year

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "ChartEntry":
        """
        Validates a decoded NDJSON record and builds an entry from it.
        Raises ParseError when a field is missing or malformed.
        """
        try:
            date, track_id, rank = record["date"], record["id"], record["rank"]
        except (KeyError, TypeError) as exc:
            raise ParseError(f"Chart record is missing a field: {record!r}") from exc

        if not isinstance(date, str):
            raise ParseError(f"Chart date must be a string, got {date!r}")
        # Dates are compared as strings, so only the extended YYYY-MM-DD form is accepted
        try:
            if len(date) != 10:
                raise ValueError(date)
            datetime.date.fromisoformat(date)
        except ValueError as exc:
            raise ParseError(f"Chart date is not YYYY-MM-DD: {date!r}") from exc

        # bool is an int subclass; reject it explicitly
        if isinstance(rank, bool) or not isinstance(rank, int) or rank < 1:
            raise ParseError(f"Chart rank must be a positive integer, got {rank!r}")

        return cls(date=date, id=str(track_id), rank=rank)


@dataclass(frozen=True)
class GenreCount:
    """Number of tracks touching a supergenre."""
    genre: Supergenre
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"genre": self.genre.value, "count": self.count}


@dataclass(frozen=True)
class LoadingVector:
    """PCA loadings of one audio feature on the first three components."""
    pc0: float
    pc1: float
    pc2: float

    def as_array(self) -> np.ndarray:
        return np.array([self.pc0, self.pc1, self.pc2], dtype=np.float64)
