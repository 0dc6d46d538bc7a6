# footpress/sessions/session.py
import time
import uuid
import logging
import threading
from typing import Callable, Dict, Optional

from footpress.analysis.bmi import BmiState
from footpress.analysis.thresholds import evaluate, all_normal
from footpress.reference.regions import region_by_key
from footpress.sensors.sampler import SamplingWindow, SAMPLING, CANCELLED
from footpress.suggestions.provider import SuggestionProvider, SuggestionState, PENDING

logger = logging.getLogger(__name__)

# Session status as seen by the dashboard
STATUS_SAMPLING = "sampling"
STATUS_ANALYZING = "analyzing"
STATUS_COMPLETE = "complete"
STATUS_CANCELLED = "cancelled"


class Session:
    """
    One pass through the analyzer: a single sampling window for one user,
    followed by verdicts and suggestions for the abnormal regions.
    """

    def __init__(self, name: str, bmi: BmiState, fetch: Callable[[], Dict[str, float]],
                 provider: SuggestionProvider, ticks: Optional[int] = None,
                 tick_seconds: Optional[float] = None):
        self.id = uuid.uuid4().hex
        self.name = name
        self.bmi = bmi
        self.provider = provider
        self.created_at = time.time()
        self.suggestions: Dict[str, SuggestionState] = {}
        self._discarded = False
        self._settled = False
        self._lock = threading.Lock()
        self.window = SamplingWindow(fetch, ticks=ticks, tick_seconds=tick_seconds,
                                     on_close=self._on_window_closed)

    def start(self):
        logger.info("Session %s started (bmi=%.1f, %s)", self.id, self.bmi.value, self.bmi.category.value)
        self.window.start()

    def cancel(self):
        with self._lock:
            self._discarded = True
        self.window.cancel()

    def _on_window_closed(self, averaged: Dict[str, int]):
        with self._lock:
            if self._discarded:
                self._settled = True
                return
        verdicts = evaluate(averaged, self.bmi.category)
        initial = self.provider.suggest(verdicts, self.bmi.category, self._publish)
        with self._lock:
            for key, state in initial.items():
                # A fast remote reply may already have landed
                self.suggestions.setdefault(key, state)
            self._settled = True

    def _publish(self, key: str, state: SuggestionState):
        with self._lock:
            if self._discarded:
                return
            self.suggestions[key] = state

    @property
    def status(self) -> str:
        if self._discarded or self.window.state == CANCELLED:
            return STATUS_CANCELLED
        if self.window.state == SAMPLING or self.window.result is None:
            return STATUS_SAMPLING
        with self._lock:
            if not self._settled:
                return STATUS_ANALYZING
            if any(s.status == PENDING for s in self.suggestions.values()):
                return STATUS_ANALYZING
        return STATUS_COMPLETE

    def snapshot(self) -> dict:
        out = {
            "session_id": self.id,
            "name": self.name,
            "bmi": {"value": round(self.bmi.value, 1), "category": self.bmi.category.value},
            "status": self.status,
            "remaining": self.window.remaining,
            "ticks": self.window.ticks,
            "regions": [],
            "all_normal": None,
        }

        averaged = self.window.result
        if averaged is None:
            return out

        verdicts = evaluate(averaged, self.bmi.category)
        with self._lock:
            suggestions = dict(self.suggestions)

        regions = []
        for v in verdicts:
            region = region_by_key(v.key)
            row = {
                "key": v.key,
                "name": v.name,
                "value": v.value,
                "range": list(v.range),
                "isNormal": v.is_normal,
                "topPx": region.top_px,
                "leftPx": region.left_px,
            }
            if not v.is_normal:
                state = suggestions.get(v.key)
                row["suggestion"] = state.to_dict() if state else None
            regions.append(row)

        out["regions"] = regions
        out["all_normal"] = all_normal(verdicts)
        return out
