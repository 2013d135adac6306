"""Reconstruction output models."""

from __future__ import annotations

from dataclasses import dataclass

from race_reconstruction.frames.models import Entrant


@dataclass
class TrackingStats:
    """Timing and position figures derived for one entrant.

    Times are ``mm'ss''HH`` strings; ``"00'00''00"`` means unknown.
    """

    tracking_id: str
    """Random, per-call identifier.  Not stable across reconstructions."""

    peak_speed: float
    official_time: str
    last_600m: str
    last_200m: str
    last_100m: str
    average_rank: int
    mid_race_rank: int
    distance_behind_leader_m: float
    active: int
    created_at: str
    updated_at: str


@dataclass
class EntrantResult:
    """Final race record for one entrant."""

    entrant: Entrant
    finish_rank: int
    finish_rank_code: str
    """Zero-padded finish rank, e.g. ``"01"``."""

    finish_rank_text: str
    tracking: TrackingStats

    def to_dict(self) -> dict:
        """Return the JSON-serializable tracking record used downstream."""
        t = self.tracking
        return {
            "casaque": {"updated_at": t.updated_at, "slug": self.entrant.silk_slug},
            "cheval": {"nom_cheval": self.entrant.name, "uuid": self.entrant.uuid},
            "num_place_arrivee": self.finish_rank_code,
            "num_partant": self.entrant.number,
            "texte_place_arrivee": self.finish_rank_text,
            "interne_tracking_gps": {
                "tracking_id_nav_partant": t.tracking_id,
                "vmax": t.peak_speed,
                "temps_officiel": t.official_time,
                "derniers_600m": t.last_600m,
                "derniers_200m": t.last_200m,
                "derniers_100m": t.last_100m,
                "pos_moy": t.average_rank,
                "pos_mi_course": t.mid_race_rank,
                "parcouru_vs_1er": t.distance_behind_leader_m,
                "active": t.active,
                "tracking_created_at": t.created_at,
                "tracking_updated_at": t.updated_at,
            },
        }
