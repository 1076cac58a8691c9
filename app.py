"""
Gradio App for the Vinyl Story catalog.

Allows users to:
1. Inspect the supergenre distribution of the track dataset.
2. Look up Billboard peak ranks for a calendar year or a rolling year.
3. Browse the PCA loading vectors and yearly audio-feature trends.
"""
import gradio as gr
import os
from typing import Optional

from loguru import logger

from catalog.config import CatalogConfig
from catalog.data_manager import DataManager
from catalog.errors import CatalogError
from catalog.sources import fetch_text
from catalog.trends import load_feature_table, yearly_feature_means
from catalog.visualization import CatalogVisualizer

# Get current directory
current_dir = os.path.dirname(os.path.abspath(__file__))

# Global constants
PROCESSED_DIR = os.path.join(current_dir, "data/processed")
DEFAULT_TRACKS = os.path.join(PROCESSED_DIR, "spotify_tracks.ndjson")
DEFAULT_FEATURES = os.path.join(PROCESSED_DIR, "temp_dataset.csv")


def _ranking_rows(manager: DataManager, rankings):
    titles = {str(t.get("id")): t.get("track_name", "") for t in manager.get_track_data()}
    return [[track_id, titles.get(track_id, ""), rank] for track_id, rank in sorted(rankings.items(), key=lambda x: (x[1], x[0]))]


def build_demo(manager: DataManager, features_csv: Optional[str] = None) -> gr.Blocks:
    yearly = []
    if features_csv:
        try:
            yearly = yearly_feature_means(load_feature_table(fetch_text(features_csv)))
        except CatalogError as exc:
            logger.error("Feature trends unavailable: {}", exc)

    def year_rankings(year):
        if not year:
            return []
        return _ranking_rows(manager, manager.get_billboard_peak_rankings_for_year(year))

    def rolling_rankings(week):
        if not week:
            return []
        return _ranking_rows(manager, manager.get_billboard_rankings_up_to_week(week))

    years = manager.get_available_years()
    weeks = manager.get_available_weeks()
    loadings = manager.get_pca_loadings()

    with gr.Blocks(title="Vinyl Story Catalog") as demo:
        gr.Markdown("# Vinyl Story Catalog")
        if manager.load_errors:
            gr.Markdown("\n".join(f"- **{name}** unavailable: {err}" for name, err in manager.load_errors.items()))

        with gr.Tabs():
            with gr.TabItem("Genres"):
                gr.Plot(value=CatalogVisualizer.plot_genre_distribution(manager.get_all_genres()), label="Supergenres")

            with gr.TabItem("Billboard"):
                with gr.Row():
                    year_dropdown = gr.Dropdown(label="Calendar Year", choices=years, value=years[0] if years else None)
                    week_dropdown = gr.Dropdown(label="Rolling Year From Week", choices=weeks, value=weeks[0] if weeks else None)
                headers = ["Track ID", "Track", "Peak Rank"]
                year_table = gr.DataFrame(headers=headers, value=year_rankings(year_dropdown.value), interactive=False)
                week_table = gr.DataFrame(headers=headers, value=rolling_rankings(week_dropdown.value), interactive=False)

                year_dropdown.change(year_rankings, inputs=[year_dropdown], outputs=year_table)
                week_dropdown.change(rolling_rankings, inputs=[week_dropdown], outputs=week_table)

            with gr.TabItem("Audio Features"):
                gr.DataFrame(
                    headers=["Feature", "PC0", "PC1", "PC2"],
                    value=[[name, v.pc0, v.pc1, v.pc2] for name, v in loadings.items()],
                    interactive=False,
                )
                gr.Plot(value=CatalogVisualizer.plot_feature_trends(yearly), label="Feature Trends")

    return demo


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Vinyl Story Catalog Explorer")
    parser.add_argument("--tracks", default=DEFAULT_TRACKS, help="Track NDJSON path or URL")
    parser.add_argument("--features_csv", default=DEFAULT_FEATURES, help="Per-track audio feature CSV for trends")
    parser.add_argument("--server_name", type=str, default="0.0.0.0", help="Server name (default: 0.0.0.0)")
    parser.add_argument("--server_port", type=int, default=7860, help="Server port (default: 7860)")
    args = parser.parse_args()

    manager = DataManager(args.tracks, config=CatalogConfig.from_env())
    manager.load_all_data()

    build_demo(manager, features_csv=args.features_csv).launch(
        server_name=args.server_name,
        server_port=args.server_port,
    )
