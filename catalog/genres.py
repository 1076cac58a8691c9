"""
Genre Classifier.

Rolls free-text genre tags up into the ten supergenres. Rules are tested in
order and the first match wins, so a tag such as "hip hop/pop" lands in
Hip-Hop/Rap rather than Pop.
"""
from typing import Any, Iterable, List, Mapping, Optional, Set, Tuple

from loguru import logger

from .core import SUPERGENRE_ORDER, GenreCount, Supergenre

# Mac-Roman rendering of UTF-8 "ñ", as found in the source genre data
MOJIBAKE_ESPANOL = "espa√±ol"
ESPANOL = "español"

GENRE_RULES: Tuple[Tuple[Tuple[str, ...], Supergenre], ...] = (
    (("hip hop", "rap", "drill", "trap", "grime"), Supergenre.HIP_HOP_RAP),
    (("rock", "metal", "punk", "grunge", "emo"), Supergenre.ROCK_METAL),
    (("edm", "electro", "house", "trance", "techno", "dance", "dubstep", "euro"), Supergenre.ELECTRONIC_DANCE),
    (("r&b", "soul", "motown", "funk", "quiet storm"), Supergenre.RNB_SOUL_FUNK),
    (("country", "americana", "bluegrass", "folk"), Supergenre.COUNTRY_FOLK_AMERICANA),
    (("latin", "reggaeton", "bachata", "merengue", "cumbia", "vallenato", ESPANOL), Supergenre.LATIN),
    (("reggae", "dancehall", "soca", "calypso", "ragga"), Supergenre.REGGAE_CARIBBEAN),
    (("jazz", "swing", "bossa"), Supergenre.JAZZ_BLUES),
    (("pop",), Supergenre.POP),
)


def repair_mojibake(label: str) -> str:
    """
    Undoes UTF-8 text that was decoded as Mac Roman ("espa√±ol" -> "español").
    Labels that do not round-trip are returned unchanged.
    """
    if "√" not in label:
        return label
    try:
        return label.encode("mac_roman").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return label


def genre_labels(track: Mapping[str, Any]) -> List[str]:
    """
    Non-blank, stripped genre labels of a track; a single string counts as
    one label. Values that are neither a string nor a list are ignored.
    """
    genres = track.get("genres")
    if isinstance(genres, str):
        genres = [genres]
    if not isinstance(genres, (list, tuple)):
        return []
    return [g.strip() for g in genres if isinstance(g, str) and g.strip()]


class GenreClassifier:
    """
    Maps raw genre tags to supergenres.

    With legacy_encoding=True labels are matched as-is and the Latin rule
    looks for the corrupted "espa√±ol" token instead of "español".
    """

    def __init__(self, legacy_encoding: bool = False):
        self.legacy_encoding = legacy_encoding
        if legacy_encoding:
            self.rules = tuple(
                (tuple(MOJIBAKE_ESPANOL if k == ESPANOL else k for k in keywords), genre)
                for keywords, genre in GENRE_RULES
            )
        else:
            self.rules = GENRE_RULES

    def classify(self, label: Optional[str]) -> Supergenre:
        s = (label or "Unknown")
        if not self.legacy_encoding:
            s = repair_mojibake(s)
        s = s.lower()
        for keywords, genre in self.rules:
            if any(k in s for k in keywords):
                return genre
        return Supergenre.OTHER_UNKNOWN

    def super_genre_of(self, track: Mapping[str, Any]) -> Supergenre:
        """Supergenre of the first non-blank genre label, used for per-track coloring."""
        labels = genre_labels(track)
        if not labels:
            return Supergenre.OTHER_UNKNOWN
        return self.classify(labels[0])

    def super_genres_of(self, track: Mapping[str, Any]) -> Set[Supergenre]:
        """Every distinct supergenre implied by any of the track's labels."""
        return {self.classify(label) for label in genre_labels(track)}

    def build_genre_distribution(self, tracks: Iterable[Mapping[str, Any]]) -> List[GenreCount]:
        """
        Counts tracks per supergenre. A track with labels in several
        supergenres is counted once in each of them.
        """
        counts = {genre: 0 for genre in SUPERGENRE_ORDER}
        for track in tracks:
            for genre in self.super_genres_of(track):
                counts[genre] += 1

        distribution = [GenreCount(genre, counts[genre]) for genre in SUPERGENRE_ORDER if counts[genre] > 0]
        logger.info("Found {} supergenres across tracks", len(distribution))
        return distribution
