#!/usr/bin/env python3
"""Generate and persist Gaussian blob datasets for kmeanspp experiments.

Each dataset is written as a headerless CSV point matrix (the format
``load_matrix`` reads) plus a ``*_centers.csv`` with the true centers.

Usage:
    python experiments/generate_datasets.py
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import json
from datetime import datetime

from kmeanspp.data.matrix_io import write_matrix
from kmeanspp.data.synthetic import UNIT_SQUARE_CORNERS, generate_gaussian_blobs


# Dataset configurations. "unit_square" is the classic test set: four
# 750-point blobs around the vertices of the unit square (3000 points).
DATASET_CONFIGS = {
    "unit_square": {"centers": UNIT_SQUARE_CORNERS.tolist(), "n_per_cluster": 750, "std": 0.1},
    "unit_square_tight": {"centers": UNIT_SQUARE_CORNERS.tolist(), "n_per_cluster": 750, "std": 0.03},
    "cube_8": {
        "centers": [[x, y, z] for x in (0.0, 1.0) for y in (0.0, 1.0) for z in (0.0, 1.0)],
        "n_per_cluster": 250,
        "std": 0.1,
    },
}

SEED = 42
OUTPUT_DIR = Path(__file__).parent / "datasets"


def main():
    print("=" * 60)
    print("kmeanspp Dataset Generator")
    print("=" * 60)
    print(f"  Seed: {SEED}")
    print(f"  Output: {OUTPUT_DIR}")
    print(f"  Datasets: {list(DATASET_CONFIGS.keys())}")
    print()

    metadata = {
        "generated_at": datetime.now().isoformat(),
        "seed": SEED,
        "datasets": {},
    }

    for name, config in DATASET_CONFIGS.items():
        print(f"Generating '{name}' dataset...")
        dataset = generate_gaussian_blobs(
            config["centers"],
            n_per_cluster=config["n_per_cluster"],
            std=config["std"],
            seed=SEED,
        )

        points_path = OUTPUT_DIR / f"{name}.csv"
        write_matrix(points_path, dataset.points)
        write_matrix(OUTPUT_DIR / f"{name}_centers.csv", dataset.centers)

        rows, columns = dataset.points.shape
        print(f"  Saved: {points_path} ({rows} x {columns})")
        metadata["datasets"][name] = {
            "rows": rows,
            "columns": columns,
            "k": dataset.n_clusters,
            "std": config["std"],
        }

    meta_path = OUTPUT_DIR / "metadata.json"
    with open(meta_path, "w") as f:
        json.dump(metadata, f, indent=2)
    print(f"\nMetadata saved: {meta_path}")

    print("\n" + "=" * 60)
    print("Done! All datasets generated.")
    print("=" * 60)


if __name__ == "__main__":
    main()
