"""Split detection: elapsed time at 600 m to go, 200 m to go and the finish.

Milestones are found from the leader's completion percentage, so they are the
race's sectional times rather than per-entrant ones.
"""

from __future__ import annotations

from dataclasses import dataclass

from race_reconstruction.frames.models import DetectionFrame


@dataclass(frozen=True)
class SplitTimes:
    """Elapsed times (seconds) at which each milestone was first reached.

    ``None`` means the milestone was never detected, which is not the same as
    a crossing at time zero.
    """

    t600: float | None = None
    t200: float | None = None
    finish: float | None = None

    @property
    def split_600m(self) -> float | None:
        """Duration of the last 600 m, or ``None`` when unknown."""
        return self._since(self.t600)

    @property
    def split_200m(self) -> float | None:
        """Duration of the last 200 m, or ``None`` when unknown."""
        return self._since(self.t200)

    def _since(self, t: float | None) -> float | None:
        if t is None or self.finish is None:
            return None
        return self.finish - t


class SplitDetector:
    """Find milestone crossings in a frame sequence.

    Args:
        finish_pct: Completion percentage counted as the finish.  Kept below
            100 because the on-screen distance rarely reads exactly 100.
    """

    def __init__(self, finish_pct: float = 99.0) -> None:
        self.finish_pct = finish_pct

    def detect(self, frames: list[DetectionFrame], total_distance_m: float) -> SplitTimes:
        """Scan *frames* once, in the order given.

        The first frame at or beyond each threshold sets that milestone.
        When no frame reaches the finish threshold the last frame's
        timestamp is used instead.
        """
        pct600 = (1 - 600 / total_distance_m) * 100
        pct200 = (1 - 200 / total_distance_m) * 100

        t600: float | None = None
        t200: float | None = None
        finish: float | None = None

        for f in frames:
            if t600 is None and f.distance_pct >= pct600:
                t600 = f.timestamp
            if t200 is None and f.distance_pct >= pct200:
                t200 = f.timestamp
            if finish is None and f.distance_pct >= self.finish_pct:
                finish = f.timestamp

        if finish is None and frames:
            finish = frames[-1].timestamp

        return SplitTimes(t600=t600, t200=t200, finish=finish)
