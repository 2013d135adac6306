"""Reconstruction settings, overridable from the environment.

Variables are read from ``os.environ``; scripts call ``load_dotenv()`` first
so a project ``.env`` file is honoured too.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconstructionConfig:
    """Tunable constants of the reconstruction engine."""

    default_distance_m: float = 3200.0
    """Race distance used when the caller does not supply one."""

    placeholder_peak_speed: float = 62.5
    """Peak speed reported for entrants never seen in the top group with a
    speed reading.  A stand-in value, not a measurement."""

    top_group_size: int = 5
    """Only ranks ``<= top_group_size`` are credited with the frame speed."""

    finish_pct: float = 99.0
    """Completion percentage treated as crossing the finish line."""

    tracking_id_prefix: str = "AI-"

    @classmethod
    def from_env(cls) -> ReconstructionConfig:
        """Build a config from ``RACE_*`` environment variables.

        Unset variables keep their default; unparsable ones are logged and
        ignored.
        """
        defaults = cls()
        return cls(
            default_distance_m=_env_float(
                "RACE_DEFAULT_DISTANCE_M", defaults.default_distance_m
            ),
            placeholder_peak_speed=_env_float(
                "RACE_PLACEHOLDER_PEAK_SPEED", defaults.placeholder_peak_speed
            ),
            top_group_size=_env_int("RACE_TOP_GROUP_SIZE", defaults.top_group_size),
            finish_pct=_env_float("RACE_FINISH_PCT", defaults.finish_pct),
            tracking_id_prefix=os.environ.get(
                "RACE_TRACKING_ID_PREFIX", defaults.tracking_id_prefix
            ),
        )


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        _logger.warning("Ignoring %s=%r: not a number, using %s", name, raw, default)
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        _logger.warning("Ignoring %s=%r: not an integer, using %s", name, raw, default)
        return default
