"""FrameLoader: converts video-analysis payloads and roster rows to models."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any

from pydantic import ValidationError

from race_reconstruction.frames.models import DetectionFrame, Entrant
from race_reconstruction.frames.schemas import (
    AnalysisPayload,
    AnalysisSeries,
    StarterRecord,
)

_logger = logging.getLogger(__name__)


class FrameLoadError(Exception):
    """Raised when an analysis payload or roster cannot be validated."""


def _frames_from_series(series: AnalysisSeries) -> list[DetectionFrame]:
    """Rebuild per-timestamp frames from the column-oriented ``series`` form.

    Only timestamps with rank readings become frames; the running order is
    what the aggregator reads, and the last frame sets the finish order.
    ``distance_pct`` is carried forward from the latest reading at or before
    each frame, including readings at rank-less timestamps (starting at 0).
    Speed, clock and remaining distance are taken at the frame's own
    timestamp only.
    """
    speed = {s.t: s.v for s in series.speed}
    left = {s.t: s.v for s in series.distance_left_m}
    pct = {s.t: s.v for s in series.distance_pct}
    clock = {s.t: s.v for s in series.clock_str}

    placed: dict[float, list[tuple[int, int]]] = defaultdict(list)
    for number, samples in series.rank_positions.items():
        for sample in samples:
            placed[sample.t].append((sample.pos, number))

    timestamps = sorted(set(speed) | set(left) | set(pct) | set(clock) | set(placed))

    frames: list[DetectionFrame] = []
    last_pct = 0.0
    for t in timestamps:
        if pct.get(t) is not None:
            last_pct = pct[t]
        if t not in placed:
            continue
        frames.append(DetectionFrame(
            timestamp=t,
            distance_pct=last_pct,
            ranks=[number for _, number in sorted(placed[t])],
            speed=speed.get(t),
            clock_str=clock.get(t),
            distance_remaining_m=left.get(t),
        ))
    return frames


class FrameLoader:
    """Validates raw JSON-like payloads and converts them to engine inputs.

    The analysis service answers either with a ``points`` list (one object
    per frame) or with a ``series`` object (one list per measured quantity).
    ``points`` wins when both are present.
    """

    def load(self, payload: dict[str, Any]) -> list[DetectionFrame]:
        """Return the frames held in *payload*, in the order given.

        Raises
        ------
        FrameLoadError
            If *payload* does not match the analysis response schema.
        """
        try:
            parsed = AnalysisPayload.model_validate(payload)
        except ValidationError as exc:
            raise FrameLoadError(f"Invalid analysis payload: {exc}") from exc

        if parsed.points is not None:
            frames = [DetectionFrame(**p.model_dump()) for p in parsed.points]
        elif parsed.series is not None:
            frames = _frames_from_series(parsed.series)
        else:
            _logger.warning("Analysis payload has neither 'points' nor 'series'")
            frames = []

        _logger.debug("Loaded %d detection frames", len(frames))
        return frames

    def load_roster(self, rows: list[dict[str, Any]]) -> list[Entrant]:
        """Convert data-store starter rows to :class:`Entrant` objects.

        Raises
        ------
        FrameLoadError
            If any row lacks a required field.
        """
        try:
            records = [StarterRecord.model_validate(r) for r in rows]
        except ValidationError as exc:
            raise FrameLoadError(f"Invalid roster row: {exc}") from exc

        return [
            Entrant(
                number=r.num_partant,
                name=r.nom_cheval,
                uuid=r.uuid,
                silk_slug=r.casaque_slug,
            )
            for r in records
        ]
