"""Engine inputs: detection frames from video analysis and the race roster.

Public API
----------
DetectionFrame  - one timestamped observation of the running order
Entrant         - roster entry for one starter
FrameLoader     - analysis payload / roster rows → models
FrameLoadError  - raised on payloads that fail validation
"""

from race_reconstruction.frames.loader import FrameLoader, FrameLoadError
from race_reconstruction.frames.models import DetectionFrame, Entrant

__all__ = [
    "DetectionFrame",
    "Entrant",
    "FrameLoadError",
    "FrameLoader",
]
