"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper owns a run's Steps and a cursor into them.  It can be fed
lazily from an algorithm generator (steps are pulled on demand and
buffered, enabling rewind) or restored from an already-recorded list
of steps, which is how each HTTP request picks playback back up.

State machine:
    IDLE  →  start() / from_steps()  →  PAUSED
    PAUSED  →  play()   →  PLAYING
    PLAYING →  pause()  →  PAUSED
    any     →  (last step reached) → FINISHED
    any     →  reset()  →  IDLE

Thread safety:
  Not thread-safe.  One Stepper serves one request / one user at a time.
"""

import logging
from enum import Enum
from typing import Callable, Generator, Iterable, List, Optional

from algorithms.step import Step

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step) — the browser drives the timer
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.4,
    "fast":   0.15,
    "turbo":  0.05,
}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        steps       : Every Step fetched so far (buffer for rewind).
        current_idx : Index into `steps` that is currently displayed.
        on_step     : Optional callback(Step) fired whenever the cursor moves.
    """

    def __init__(self, on_step: Optional[Callable[[Step], None]] = None):
        self._generator:  Optional[Generator[Step, None, None]] = None
        self.steps:       List[Step]   = []
        self.current_idx: int          = -1
        self.state:       StepperState = StepperState.IDLE
        self.on_step:     Optional[Callable[[Step], None]] = on_step

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, generator: Generator[Step, None, None]) -> None:
        """Attach a fresh algorithm generator and load the first step."""
        self._generator  = generator
        self.steps       = []
        self.current_idx = -1
        self.state       = StepperState.PAUSED
        # eagerly fetch step 0 so the UI can show the initial state
        if self._fetch_next():
            self._goto(0)
        else:
            self.state = StepperState.FINISHED

    @classmethod
    def from_steps(cls, steps: Iterable[Step], index: int = 0) -> "Stepper":
        """Rebuild playback over recorded steps with the cursor at `index`."""
        stepper = cls()
        stepper.steps = list(steps)
        stepper.state = StepperState.PAUSED
        if stepper.steps:
            stepper._goto(max(0, min(index, len(stepper.steps) - 1)))
            stepper._update_finished()
        return stepper

    def reset(self) -> None:
        """Back to IDLE — caller must call start() again."""
        self._generator  = None
        self.steps       = []
        self.current_idx = -1
        self.state       = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step forward.  Returns False if already at end."""
        target = self.current_idx + 1
        if target >= len(self.steps) and not self._fetch_next():
            self.state = StepperState.FINISHED
            return False
        self._goto(target)
        self._update_finished()
        return True

    def prev_step(self) -> bool:
        """Rewind one step.  Returns False if already at start."""
        if self.current_idx <= 0:
            return False
        self._goto(self.current_idx - 1)
        if self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to an arbitrary step index, fetching forward if needed."""
        while idx >= len(self.steps):
            if not self._fetch_next():
                break
        if 0 <= idx < len(self.steps):
            self._goto(idx)
            if self.state == StepperState.FINISHED:
                self.state = StepperState.PAUSED
            self._update_finished()
            return True
        return False

    def rewind(self) -> None:
        """Jump back to step 0."""
        self.goto_step(0)

    def jump_to_end(self) -> None:
        """Exhaust the generator and jump to the final step."""
        while self._fetch_next():
            pass
        if self.steps:
            self._goto(len(self.steps) - 1)
        self.state = StepperState.FINISHED

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state == StepperState.FINISHED:
            return
        self.state = StepperState.PLAYING

    def pause(self) -> None:
        if self.state == StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.current_idx < len(self.steps):
            return self.steps[self.current_idx]
        return None

    @property
    def total_steps_fetched(self) -> int:
        return len(self.steps)

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _fetch_next(self) -> bool:
        """Pull one Step from the generator into the buffer."""
        if self._generator is None:
            return False
        try:
            step = next(self._generator)
        except StopIteration:
            self._generator = None
            return False
        self.steps.append(step)
        return True

    def _update_finished(self) -> None:
        step = self.current_step
        if step is not None and step.is_final:
            self.state = StepperState.FINISHED

    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        step = self.steps[idx] if 0 <= idx < len(self.steps) else None
        if self.on_step and step is not None:
            self.on_step(step)
