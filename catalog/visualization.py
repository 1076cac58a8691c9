"""
Visualization Module for the Vinyl Story catalog.

Static figures for the supergenre distribution and the yearly audio-feature
trends; the interactive page draws the same data with D3.
"""
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
import numpy as np
from typing import Any, Dict, List, Sequence

from .core import SUPERGENRE_COLORS, GenreCount
from .trends import HELIX_FEATURES


class CatalogVisualizer:
    """Plots summaries of the loaded catalog."""

    @staticmethod
    def plot_genre_distribution(distribution: Sequence[GenreCount]) -> Figure:
        """Horizontal bar chart of tracks per supergenre in display order."""
        fig, ax = plt.subplots(figsize=(10, 6))
        if not distribution:
            ax.text(0.5, 0.5, "No track data", ha="center", va="center", transform=ax.transAxes)
            ax.set_axis_off()
            return fig

        labels = [g.genre.value for g in distribution]
        counts = [g.count for g in distribution]
        colors = [SUPERGENRE_COLORS[g.genre] for g in distribution]

        y = np.arange(len(labels))
        ax.barh(y, counts, color=colors)
        ax.set_yticks(y)
        ax.set_yticklabels(labels)
        ax.invert_yaxis()  # first supergenre on top
        ax.set_xlabel("Tracks")
        ax.set_title("Supergenre Distribution")

        for yi, c in zip(y, counts):
            ax.text(c, yi, f" {c}", va="center", fontsize=9)

        fig.tight_layout()
        return fig

    @staticmethod
    def plot_feature_trends(
        yearly: List[Dict[str, Any]],
        features: Sequence[str] = HELIX_FEATURES,
    ) -> Figure:
        """Line chart of yearly feature means (output of yearly_feature_means)."""
        fig, ax = plt.subplots(figsize=(12, 5))
        if not yearly:
            ax.text(0.5, 0.5, "No feature data", ha="center", va="center", transform=ax.transAxes)
            ax.set_axis_off()
            return fig

        years = [row["year"] for row in yearly]
        for feature in features:
            ax.plot(years, [row.get(feature, np.nan) for row in yearly], marker="o", markersize=3, label=feature)

        ax.set_xlabel("Year")
        ax.set_ylabel("Mean value")
        ax.set_ylim(0, 1)
        ax.set_title("Audio Features Over Time")
        ax.legend(loc="upper right")
        ax.grid(alpha=0.3)

        fig.tight_layout()
        return fig
