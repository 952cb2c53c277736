"""
engine/
-------
Playback & recording layer.

    from engine import Stepper, Recorder, RunCache, compare
"""

from engine.stepper  import Stepper, StepperState, SPEED_PRESETS
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare
from engine.cache    import RunCache

__all__ = [
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "RunCache",
]
