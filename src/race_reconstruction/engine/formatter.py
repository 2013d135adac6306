"""Result formatting: aggregates and splits to final entrant records."""

from __future__ import annotations

import math
import uuid
from datetime import datetime, timezone

from race_reconstruction.engine.aggregator import EntrantAggregate
from race_reconstruction.engine.models import EntrantResult, TrackingStats
from race_reconstruction.engine.splits import SplitTimes

ZERO_TIME = "00'00''00"


def format_race_time(seconds: float | None) -> str:
    """Render *seconds* as ``mm'ss''HH`` (minutes, seconds, hundredths).

    ``None``, NaN, zero and negative durations all render as ``00'00''00``.
    Hundredths are truncated after rounding to the millisecond, so
    ``208.53`` gives ``03'28''53``.
    """
    if seconds is None or math.isnan(seconds) or seconds <= 0:
        return ZERO_TIME
    total_ms = round(seconds * 1000)
    minutes, rest_ms = divmod(total_ms, 60_000)
    secs, ms = divmod(rest_ms, 1000)
    return f"{minutes:02d}'{secs:02d}''{ms // 10:02d}"


def format_rank(rank: int) -> str:
    """Zero-pad *rank* to two digits (``7`` → ``"07"``)."""
    return f"{rank:02d}"


def average_rank(positions: list[int]) -> int:
    """Mean of *positions* rounded to the nearest integer, halves up."""
    return math.floor(sum(positions) / len(positions) + 0.5)


def mid_race_rank(positions: list[int], fallback: int) -> int:
    """Rank at the middle of the position history, or *fallback*."""
    mid = len(positions) // 2
    if mid < len(positions):
        return positions[mid]
    return fallback


class ResultFormatter:
    """Turn :class:`EntrantAggregate` objects into sorted :class:`EntrantResult` records.

    Args:
        placeholder_peak_speed: Peak speed reported when no frame credited
            the entrant with a speed reading.
        tracking_id_prefix: Prefix of the generated tracking identifiers.
    """

    def __init__(
        self,
        placeholder_peak_speed: float = 62.5,
        tracking_id_prefix: str = "AI-",
    ) -> None:
        self.placeholder_peak_speed = placeholder_peak_speed
        self.tracking_id_prefix = tracking_id_prefix

    def format(
        self,
        aggregates: list[EntrantAggregate],
        splits: SplitTimes,
        now: datetime | None = None,
    ) -> list[EntrantResult]:
        """Return one result per aggregate, ascending by finish rank.

        Args:
            aggregates: Entrants with at least one observed position.
            splits: Milestones detected for the race.
            now: Timestamp stamped on every record; defaults to the current
                UTC time.
        """
        stamp = (now or datetime.now(timezone.utc)).isoformat()

        official = format_race_time(splits.finish)
        last_600m = format_race_time(splits.split_600m)
        last_200m = format_race_time(splits.split_200m)

        results = [
            self._format_one(agg, official, last_600m, last_200m, stamp)
            for agg in aggregates
        ]
        results.sort(key=lambda r: r.finish_rank)
        return results

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _format_one(
        self,
        agg: EntrantAggregate,
        official: str,
        last_600m: str,
        last_200m: str,
        stamp: str,
    ) -> EntrantResult:
        avg = average_rank(agg.positions)
        rank_str = format_rank(agg.finish_rank)

        return EntrantResult(
            entrant=agg.entrant,
            finish_rank=agg.finish_rank,
            finish_rank_code=rank_str,
            finish_rank_text=rank_str,
            tracking=TrackingStats(
                tracking_id=f"{self.tracking_id_prefix}{uuid.uuid4()}",
                peak_speed=agg.peak_speed or self.placeholder_peak_speed,
                official_time=official,
                last_600m=last_600m,
                last_200m=last_200m,
                last_100m=ZERO_TIME,  # no 100 m milestone is detected
                average_rank=avg,
                mid_race_rank=mid_race_rank(agg.positions, avg),
                distance_behind_leader_m=0.0,
                active=1,
                created_at=stamp,
                updated_at=stamp,
            ),
        )
