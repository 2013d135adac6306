"""End-to-end tests for RaceReconstructor."""

from __future__ import annotations

import dataclasses
import json
import logging
from datetime import datetime, timezone

import pytest

from race_reconstruction.config import ReconstructionConfig
from race_reconstruction.engine.reconstructor import RaceReconstructor
from race_reconstruction.frames.loader import FrameLoader
from race_reconstruction.frames.models import DetectionFrame, Entrant

_NOW = datetime(2025, 12, 2, 14, 30, tzinfo=timezone.utc)

# ---------------------------------------------------------------------------
# Test-data helpers
# ---------------------------------------------------------------------------

ROSTER = [
    Entrant(number=10, name="VENUS OCEANE", uuid="5e994520-uuid", silk_slug="2025-p10.png"),
    Entrant(number=14, name="LORENZO DE MEDICI", uuid="3314e8d0-uuid", silk_slug="2025-p14.png"),
    Entrant(number=5, name="RIMBAULT", uuid="35085ba2-uuid", silk_slug="2025-p5.png"),
    Entrant(number=9, name="SUPER ALEX", uuid="b0a38f93-uuid", silk_slug="2025-p9.png"),
]


def make_race() -> list[DetectionFrame]:
    """A 3200 m race sampled every ~20 s; horse 9 is never detected."""
    return [
        DetectionFrame(timestamp=0.0, distance_pct=0.0, ranks=[10, 14, 5], speed=None),
        DetectionFrame(timestamp=40.0, distance_pct=20.0, ranks=[10, 14, 5], speed=58.0),
        DetectionFrame(timestamp=80.0, distance_pct=40.0, ranks=[14, 10, 5, 77], speed=61.0),
        DetectionFrame(timestamp=120.0, distance_pct=60.0, ranks=[14, 5, 10], speed=60.0),
        DetectionFrame(timestamp=160.0, distance_pct=81.3, ranks=[5, 14, 10], speed=63.5),
        DetectionFrame(timestamp=185.5, distance_pct=94.0, ranks=[5, 10, 14], speed=62.0),
        DetectionFrame(timestamp=208.53, distance_pct=99.2, ranks=[5, 10, 14], speed=None),
    ]


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


def test_one_result_per_observed_entrant():
    results = RaceReconstructor().reconstruct(make_race(), ROSTER, 3200, now=_NOW)
    assert {r.entrant.number for r in results} == {10, 14, 5}


def test_finish_order_from_last_frame():
    results = RaceReconstructor().reconstruct(make_race(), ROSTER, 3200, now=_NOW)
    assert [r.entrant.number for r in results] == [5, 10, 14]
    assert [r.finish_rank_code for r in results] == ["01", "02", "03"]


def test_timing_fields():
    results = RaceReconstructor().reconstruct(make_race(), ROSTER, 3200, now=_NOW)
    stats = results[0].tracking
    assert stats.official_time == "03'28''53"
    assert stats.last_600m == "00'48''53"
    assert stats.last_200m == "00'23''03"


def test_position_summaries():
    results = RaceReconstructor().reconstruct(make_race(), ROSTER, 3200, now=_NOW)
    by_number = {r.entrant.number: r.tracking for r in results}
    # horse 10: [1, 1, 2, 3, 3, 2, 2] -> mean 2.0, middle index 3
    assert by_number[10].average_rank == 2
    assert by_number[10].mid_race_rank == 3


def test_peak_speed_and_placeholder():
    frames = make_race()
    roster = ROSTER + [Entrant(number=77, name="OUTSIDER", uuid="u77", silk_slug="p77.png")]
    frames[2] = DetectionFrame(
        timestamp=80.0, distance_pct=40.0, ranks=[14, 10, 5, 1, 2, 77], speed=61.0
    )
    results = RaceReconstructor().reconstruct(frames, roster, 3200, now=_NOW)
    by_number = {r.entrant.number: r.tracking for r in results}
    assert by_number[5].peak_speed == pytest.approx(63.5)
    # only ever seen in 6th place with a speed reading
    assert by_number[77].peak_speed == pytest.approx(62.5)


def test_empty_frames_return_empty_list():
    assert RaceReconstructor().reconstruct([], ROSTER) == []


def test_no_roster_match_returns_empty_list(caplog):
    frames = [DetectionFrame(timestamp=1.0, distance_pct=10.0, ranks=[42, 43])]
    with caplog.at_level(logging.WARNING):
        results = RaceReconstructor().reconstruct(frames, ROSTER)
    assert results == []
    assert "None of the 4 roster entrants" in caplog.text


def test_finish_fallback_to_last_frame():
    frames = make_race()[:4]
    results = RaceReconstructor().reconstruct(frames, ROSTER, 3200, now=_NOW)
    assert results[0].tracking.official_time == "02'00''00"
    assert results[0].tracking.last_600m == "00'00''00"


def test_default_distance_from_config():
    frames = [
        DetectionFrame(timestamp=30.0, distance_pct=49.0, ranks=[10]),
        DetectionFrame(timestamp=35.0, distance_pct=50.0, ranks=[10]),
        DetectionFrame(timestamp=60.0, distance_pct=100.0, ranks=[10]),
    ]
    recon = RaceReconstructor(ReconstructionConfig(default_distance_m=1200.0))
    stats = recon.reconstruct(frames, ROSTER, now=_NOW)[0].tracking
    assert stats.last_600m == "00'25''00"


def test_non_positive_distance_rejected():
    with pytest.raises(ValueError, match="must be positive"):
        RaceReconstructor().reconstruct(make_race(), ROSTER, 0)


def test_repeated_calls_identical_except_tracking_id():
    recon = RaceReconstructor()
    first = recon.reconstruct(make_race(), ROSTER, 3200, now=_NOW)
    second = recon.reconstruct(make_race(), ROSTER, 3200, now=_NOW)

    def strip_ids(results):
        return [
            dataclasses.replace(r, tracking=dataclasses.replace(r.tracking, tracking_id=""))
            for r in results
        ]

    assert strip_ids(first) == strip_ids(second)
    assert first[0].tracking.tracking_id != second[0].tracking.tracking_id


def test_series_payload_with_trailing_speed_sample_keeps_finish_order():
    payload = {"series": {
        "speed": [{"t": 100.0, "v": 61.0}, {"t": 105.0, "v": 58.0}],
        "distance_pct": [{"t": 0.0, "v": 0.0}, {"t": 100.0, "v": 99.5}],
        "rank_positions": {
            "10": [{"t": 0.0, "pos": 2}, {"t": 100.0, "pos": 1}],
            "14": [{"t": 0.0, "pos": 1}, {"t": 100.0, "pos": 2}],
        },
    }}
    frames = FrameLoader().load(payload)
    results = RaceReconstructor().reconstruct(frames, ROSTER, 3200, now=_NOW)
    assert [r.finish_rank_code for r in results] == ["01", "02"]
    assert [r.entrant.number for r in results] == [10, 14]
    assert results[0].tracking.official_time == "01'40''00"


def test_results_json_serializable():
    results = RaceReconstructor().reconstruct(make_race(), ROSTER, 3200, now=_NOW)
    restored = json.loads(json.dumps([r.to_dict() for r in results]))
    assert restored[0]["num_partant"] == 5
    assert restored[0]["casaque"]["updated_at"] == _NOW.isoformat()
