"""Public enums used in run configurations and events."""
from loadpulse.config.constants import (
    EventKind,
    RunPhase,
    RunStatus,
    TargetProfile,
)

__all__ = ["EventKind", "RunPhase", "RunStatus", "TargetProfile"]
