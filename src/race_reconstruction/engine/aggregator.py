"""Per-entrant aggregation of running order and peak speed."""

from __future__ import annotations

from dataclasses import dataclass, field

from race_reconstruction.frames.models import DetectionFrame, Entrant

NOT_FINISHED = 99
"""Finish rank of an entrant missing from the last frame."""


@dataclass
class EntrantAggregate:
    """Working state for one entrant during a single reconstruction."""

    entrant: Entrant
    positions: list[int] = field(default_factory=list)
    """Rank in every frame the entrant appeared in, in frame order."""

    peak_speed: float = 0.0
    """Highest speed credited so far; 0 means no qualifying reading."""

    finish_rank: int = NOT_FINISHED


class EntrantAggregator:
    """Build position history, peak speed and finish rank for each entrant.

    The speed on screen belongs to the leading group, so it is credited to
    every entrant ranked within the top *top_group_size* of that frame.

    Args:
        top_group_size: Number of leading ranks that receive the frame speed.
    """

    def __init__(self, top_group_size: int = 5) -> None:
        self.top_group_size = top_group_size

    def aggregate(
        self,
        frames: list[DetectionFrame],
        roster: list[Entrant],
    ) -> dict[int, EntrantAggregate]:
        """Return aggregates keyed by running number.

        Running numbers absent from *roster* are skipped.  Entrants that
        never appear in any frame are left out of the result.  Finish rank
        is read from the last frame of *frames*, whatever its timestamp.
        """
        state = {e.number: EntrantAggregate(entrant=e) for e in roster}

        for f in frames:
            for idx, number in enumerate(f.ranks):
                agg = state.get(number)
                if agg is None:
                    continue
                rank = idx + 1
                agg.positions.append(rank)
                if (
                    rank <= self.top_group_size
                    and f.speed is not None
                    and f.speed > agg.peak_speed
                ):
                    agg.peak_speed = f.speed

        if frames:
            for idx, number in enumerate(frames[-1].ranks):
                agg = state.get(number)
                if agg is not None:
                    agg.finish_rank = idx + 1

        return {number: agg for number, agg in state.items() if agg.positions}
