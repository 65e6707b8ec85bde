"""Input file parsers."""

from stabilometry.parsers.samples import (
    SampleFormatError,
    load_sample_array,
    load_samples,
)

__all__ = ["SampleFormatError", "load_sample_array", "load_samples"]
