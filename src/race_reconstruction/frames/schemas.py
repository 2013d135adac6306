"""Pydantic schemas for the video-analysis payload and roster rows."""

from __future__ import annotations

from pydantic import BaseModel


class AnalysisPoint(BaseModel):
    timestamp: float
    ranks: list[int] = []
    distance_pct: float = 0.0
    clock_str: str | None = None
    speed: float | None = None
    distance_remaining_m: float | None = None
    distance_total_m: float | None = None


class SeriesSample(BaseModel):
    t: float
    v: float | None = None


class ClockSample(BaseModel):
    t: float
    v: str | None = None


class RankSample(BaseModel):
    t: float
    pos: int


class AnalysisSeries(BaseModel):
    speed: list[SeriesSample] = []
    distance_left_m: list[SeriesSample] = []
    distance_pct: list[SeriesSample] = []
    clock_str: list[ClockSample] = []
    rank_positions: dict[int, list[RankSample]] = {}


class AnalysisPayload(BaseModel):
    points: list[AnalysisPoint] | None = None
    series: AnalysisSeries | None = None


class StarterRecord(BaseModel):
    num_partant: int
    nom_cheval: str
    uuid: str
    casaque_slug: str = ""
