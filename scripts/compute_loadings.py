"""
Compute Loadings Script.

Fits a PCA over per-track audio features and writes the loading vectors in
the CSV layout DataManager reads (blank first header cell, one row per
feature).
Usage: python scripts/compute_loadings.py --features_csv data/processed/temp_dataset.csv
"""
import os
import sys
import csv
import argparse
from typing import List, Sequence, Tuple

import numpy as np
from sklearn.decomposition import PCA
from sklearn.preprocessing import StandardScaler

# Add project root to python path to allow absolute imports of 'catalog'
current_dir = os.path.dirname(os.path.abspath(__file__))  # .../scripts
project_root = os.path.abspath(os.path.join(current_dir, ".."))
sys.path.insert(0, project_root)

from catalog.sources import fetch_text
from catalog.trends import load_feature_table

AUDIO_FEATURES = (
    "danceability", "energy", "loudness", "speechiness", "acousticness",
    "instrumentalness", "liveness", "valence", "tempo",
)


def feature_matrix(rows, features: Sequence[str]) -> np.ndarray:
    """Rows with a numeric value for every feature, as an (n_rows, n_features) matrix."""
    data = []
    for row in rows:
        try:
            data.append([float(row[f]) for f in features])
        except (KeyError, TypeError, ValueError):
            continue
    return np.asarray(data, dtype=np.float64).reshape(-1, len(features))


def compute_loadings(X: np.ndarray, n_components: int = 3) -> Tuple[np.ndarray, np.ndarray]:
    """
    Standardizes X and fits a PCA.
    Returns (loadings [n_features, n_components], explained_variance_ratio).
    """
    if X.shape[0] <= n_components:
        raise ValueError(f"PCA needs more than {n_components} complete rows, got {X.shape[0]}.")
    X_std = StandardScaler().fit_transform(X)
    pca = PCA(n_components=n_components)
    pca.fit(X_std)
    return pca.components_.T, pca.explained_variance_ratio_


def write_loadings_csv(path: str, features: Sequence[str], loadings: np.ndarray):
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow([""] + [f"PC{i}" for i in range(loadings.shape[1])])
        for name, row in zip(features, loadings):
            writer.writerow([name] + [repr(float(v)) for v in row])


def main(features_csv: str, output: str, features: List[str]):
    print(f"[compute_loadings] Reading {features_csv}...")
    rows = load_feature_table(fetch_text(features_csv))
    X = feature_matrix(rows, features)
    print(f"[compute_loadings] {X.shape[0]} of {len(rows)} rows have all {len(features)} features.")

    loadings, ratios = compute_loadings(X)
    for i, r in enumerate(ratios):
        print(f"  PC{i}: {r:.3f} of variance")

    write_loadings_csv(output, features, loadings)
    print(f"[compute_loadings] Saved loadings to {output}")


if __name__ == "__main__":
    default_dir = os.path.join(project_root, "data", "processed")

    parser = argparse.ArgumentParser(description="Compute PCA loading vectors for audio features")
    parser.add_argument("--features_csv", default=os.path.join(default_dir, "temp_dataset.csv"), help="Per-track feature CSV")
    parser.add_argument("--output", default=os.path.join(default_dir, "spotify_track_pca_loadings.csv"), help="Output CSV path")
    parser.add_argument("--features", nargs="+", default=list(AUDIO_FEATURES), help="Feature columns to include")
    args = parser.parse_args()

    main(args.features_csv, args.output, args.features)
