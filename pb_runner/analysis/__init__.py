"""Post-processing of completed run sets."""

from pb_runner.analysis.histogram import Histogram, bucket_index, bucket_value, slower_pct
from pb_runner.analysis.percentiles import PercentileReport, summarize

__all__ = [
    "Histogram",
    "PercentileReport",
    "bucket_index",
    "bucket_value",
    "slower_pct",
    "summarize",
]
