"""RaceReconstructor: detection frames + roster → finalized race records."""

from __future__ import annotations

import logging
from datetime import datetime

from race_reconstruction.config import ReconstructionConfig
from race_reconstruction.engine.aggregator import EntrantAggregator
from race_reconstruction.engine.formatter import ResultFormatter
from race_reconstruction.engine.models import EntrantResult
from race_reconstruction.engine.splits import SplitDetector
from race_reconstruction.frames.models import DetectionFrame, Entrant

_logger = logging.getLogger(__name__)


class RaceReconstructor:
    """Rebuild per-entrant race results from a vision-derived frame sequence.

    Holds configuration only; every call works on its own local state, so
    one instance can serve independent races concurrently.

    Parameters
    ----------
    config:
        Engine constants.  Defaults to :class:`ReconstructionConfig` defaults.
    """

    def __init__(self, config: ReconstructionConfig | None = None) -> None:
        self.config = config or ReconstructionConfig()
        self._splits = SplitDetector(finish_pct=self.config.finish_pct)
        self._aggregator = EntrantAggregator(top_group_size=self.config.top_group_size)
        self._formatter = ResultFormatter(
            placeholder_peak_speed=self.config.placeholder_peak_speed,
            tracking_id_prefix=self.config.tracking_id_prefix,
        )

    def reconstruct(
        self,
        frames: list[DetectionFrame],
        roster: list[Entrant],
        total_distance_m: float | None = None,
        now: datetime | None = None,
    ) -> list[EntrantResult]:
        """Return one result per observed entrant, sorted by finish rank.

        *frames* must already be in race order; they are not re-sorted.

        Raises
        ------
        ValueError
            If *total_distance_m* is not positive.
        """
        distance = (
            self.config.default_distance_m if total_distance_m is None else total_distance_m
        )
        if distance <= 0:
            raise ValueError(f"total_distance_m must be positive, got {distance!r}")

        if not frames:
            _logger.debug("No detection frames; nothing to reconstruct")
            return []

        splits = self._splits.detect(frames, distance)
        aggregates = self._aggregator.aggregate(frames, roster)
        _logger.debug(
            "Reconstructing %d frames over %.0fm: t600=%s t200=%s finish=%s, %d/%d entrants seen",
            len(frames),
            distance,
            splits.t600,
            splits.t200,
            splits.finish,
            len(aggregates),
            len(roster),
        )
        if not aggregates:
            _logger.warning(
                "None of the %d roster entrants appear in %d frames", len(roster), len(frames)
            )

        return self._formatter.format(list(aggregates.values()), splits, now=now)
