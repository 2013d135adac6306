"""Input data models: detection frames and roster entrants."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class DetectionFrame:
    """One timestamped observation produced by the video-analysis service.

    Optional fields are ``None`` when the vision stage read nothing for that
    frame; ``None`` never means zero.
    """

    timestamp: float
    """Elapsed race time in seconds (0 = race start)."""

    distance_pct: float
    """Share of the total race distance completed by the leader, 0 to 100."""

    ranks: list[int] = field(default_factory=list)
    """Running numbers in current running order.  Index 0 is the leader."""

    speed: float | None = None
    """Instantaneous speed reading (km/h) of the leading group, if shown."""

    clock_str: str | None = None
    """On-screen race clock text, as read."""

    distance_remaining_m: float | None = None
    distance_total_m: float | None = None


@dataclass(frozen=True)
class Entrant:
    """A race starter as recorded in the data store."""

    number: int
    """Running number ("num_partant"), unique within one race."""

    name: str
    uuid: str
    """Persistent identifier of the horse."""

    silk_slug: str
    """Reference to the jockey silk ("casaque") image."""
