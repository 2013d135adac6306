"""Race reconstruction: split detection, per-entrant aggregation, formatting."""

from race_reconstruction.engine.aggregator import (
    NOT_FINISHED,
    EntrantAggregate,
    EntrantAggregator,
)
from race_reconstruction.engine.formatter import ResultFormatter, format_race_time
from race_reconstruction.engine.models import EntrantResult, TrackingStats
from race_reconstruction.engine.reconstructor import RaceReconstructor
from race_reconstruction.engine.splits import SplitDetector, SplitTimes

__all__ = [
    "NOT_FINISHED",
    "EntrantAggregate",
    "EntrantAggregator",
    "EntrantResult",
    "RaceReconstructor",
    "ResultFormatter",
    "SplitDetector",
    "SplitTimes",
    "TrackingStats",
    "format_race_time",
]
