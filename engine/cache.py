"""
cache.py — Server-side Run Cache
=================================
Recorded runs are far too large for a signed session cookie, so the
browser session only keeps a run id and a cursor.  The Recorder itself
lives here, keyed by that id.

Design decisions:
  - Bounded LRU (OrderedDict.move_to_end) so abandoned runs age out.
  - A missing id is not an error: the caller treats it as "no run yet"
    and asks the user to press Run again.
  - One cache is shared by every request thread; a single lock guards
    the OrderedDict.
"""

import logging
import threading
import uuid
from collections import OrderedDict
from typing import Optional

from engine.recorder import Recorder

log = logging.getLogger(__name__)


class RunCache:

    def __init__(self, max_size: int = 64):
        if max_size < 1:
            raise ValueError("RunCache needs room for at least one run")
        self.max_size = max_size
        self._runs: "OrderedDict[str, Recorder]" = OrderedDict()
        self._lock = threading.Lock()

    def put(self, recorder: Recorder) -> str:
        """Store a finished run and return its new id."""
        run_id = uuid.uuid4().hex
        with self._lock:
            self._runs[run_id] = recorder
            while len(self._runs) > self.max_size:
                evicted, _ = self._runs.popitem(last=False)
                log.debug("run cache full, evicted %s", evicted)
        return run_id

    def get(self, run_id: Optional[str]) -> Optional[Recorder]:
        if not run_id:
            return None
        with self._lock:
            rec = self._runs.get(run_id)
            if rec is not None:
                self._runs.move_to_end(run_id)
            return rec

    def discard(self, run_id: Optional[str]) -> None:
        if run_id:
            with self._lock:
                self._runs.pop(run_id, None)

    def clear(self) -> None:
        with self._lock:
            self._runs.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._runs)

    def __contains__(self, run_id) -> bool:
        with self._lock:
            return run_id in self._runs
