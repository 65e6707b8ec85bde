"""
Loader for COP sample files.

Reads delimited text with ``time, x, y`` columns as exported by force
platform acquisition software. Comma and whitespace delimiters are accepted
and a single header row is skipped when present.
"""

import logging

from pathlib import Path

import numpy as np

from stabilometry.analysis.types import Sample

logger = logging.getLogger(__name__)

EXPECTED_COLUMNS = 3


class SampleFormatError(Exception):
    """Raised when a sample file cannot be parsed."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


def _first_data_line(lines: list[str]) -> str | None:
    for line in lines:
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            return stripped
    return None


def _is_header(line: str, delimiter: str | None) -> bool:
    tokens = line.split(delimiter)
    try:
        [float(token) for token in tokens]
    except ValueError:
        return True
    return False


def load_sample_array(path: Path | str) -> np.ndarray:
    """
    Load a sample file into an (n, 3) float array.

    Args:
        path: Path to the sample file

    Returns:
        Array of [time, x, y] rows; shape (0, 3) for files without data

    Raises:
        SampleFormatError: If the file is unreadable or malformed
    """
    path = Path(path)

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise SampleFormatError(f"Cannot read {path}: {e}", path) from e

    first = _first_data_line(lines)
    if first is None:
        return np.empty((0, EXPECTED_COLUMNS))

    delimiter = "," if "," in first else None
    skip_rows = 1 if _is_header(first, delimiter) else 0

    data_lines = [
        line for line in lines if line.strip() and not line.strip().startswith("#")
    ][skip_rows:]
    if not data_lines:
        return np.empty((0, EXPECTED_COLUMNS))

    try:
        data = np.loadtxt(data_lines, delimiter=delimiter, ndmin=2, dtype=float)
    except ValueError as e:
        raise SampleFormatError(f"Malformed sample file {path}: {e}", path) from e

    if data.shape[1] != EXPECTED_COLUMNS:
        raise SampleFormatError(
            f"Expected {EXPECTED_COLUMNS} columns (time, x, y) in {path}, "
            f"found {data.shape[1]}",
            path,
        )

    if not np.all(np.isfinite(data)):
        raise SampleFormatError(f"Non-finite values in {path}", path)

    if np.any(np.diff(data[:, 0]) < 0):
        logger.warning(f"Timestamps in {path} are not non-decreasing")

    return data


def load_samples(path: Path | str) -> tuple[Sample, ...]:
    """
    Load a sample file as a tuple of Samples.

    Raises:
        SampleFormatError: If the file is unreadable or malformed
    """
    data = load_sample_array(path)
    samples = tuple(
        Sample(time=float(t), x=float(x), y=float(y)) for t, x, y in data
    )
    logger.debug(f"Loaded {len(samples)} samples from {path}")
    return samples
