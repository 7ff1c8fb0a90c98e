"""Read and write dense numeric matrices as comma-separated text.

Format: one row per line, fields separated by commas, no header.
"""

import csv
from pathlib import Path
from typing import Union

import numpy as np

from ..errors import DimensionMismatch, MalformedInput


PathLike = Union[str, Path]


def load_matrix(source: PathLike, rows: int, columns: int) -> np.ndarray:
    """Parse a comma-delimited text file into a (rows x columns) matrix.

    Blank lines are skipped.

    Args:
        source: Path to the text file.
        rows: Expected number of rows.
        columns: Expected number of fields per row.

    Returns:
        Float matrix of shape (rows, columns).

    Raises:
        ValueError: If ``rows`` or ``columns`` is not positive.
        MalformedInput: If a row has the wrong number of fields or a
            field is not numeric.
        DimensionMismatch: If the file holds a different number of rows.
    """
    if rows <= 0 or columns <= 0:
        raise ValueError(f"Invalid dimensions: rows={rows}, columns={columns}")

    parsed = []
    with open(source, "r", newline="") as f:
        reader = csv.reader(f)
        for row in reader:
            if not row or all(not field.strip() for field in row):
                continue

            if len(row) != columns:
                raise MalformedInput(
                    f"{source}:{reader.line_num}: expected {columns} fields, "
                    f"got {len(row)}"
                )

            try:
                parsed.append([float(field) for field in row])
            except ValueError:
                raise MalformedInput(
                    f"{source}:{reader.line_num}: non-numeric field in {row!r}"
                ) from None

    if len(parsed) != rows:
        raise DimensionMismatch(
            f"{source}: expected {rows} rows, got {len(parsed)}"
        )

    return np.array(parsed, dtype=np.float64).reshape(rows, columns)


def write_matrix(destination: PathLike, matrix: np.ndarray) -> None:
    """Write a matrix as comma-separated rows, one row per line.

    Values are written with ``repr`` so they read back exactly.

    Args:
        destination: Output file path. Parent directories are created.
        matrix: 2D array-like.
    """
    matrix = np.asarray(matrix)
    if matrix.ndim != 2:
        raise DimensionMismatch(f"Expected a 2D matrix, got shape {matrix.shape}")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    with open(destination, "w", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        for row in matrix.tolist():
            writer.writerow([repr(value) for value in row])
