# footpress/sensors/sampler.py
"""
Sampling window
================
Collects raw insole readings for a fixed number of ticks, then reduces them to a
single averaged reading per region.

Two periodic actions run side by side while the window is open:
- fetch tick: hands one sensor fetch to a worker pool (a slow fetch never holds
  up the countdown); successful readings are appended to the buffer
- countdown tick: decrements the remaining ticks and closes the window at zero

The buffer is only touched under the window lock. Closing flips the state before
draining, so a fetch that completes afterwards is dropped instead of reopening
the window.
"""

import math
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Iterable, List, Optional

from footpress import config
from footpress.reference.regions import REGION_KEYS

logger = logging.getLogger(__name__)

IDLE = "idle"
SAMPLING = "sampling"
CLOSED = "closed"
CANCELLED = "cancelled"


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def average_readings(buffer: List[Dict[str, float]], keys: Iterable[str] = REGION_KEYS) -> Dict[str, int]:
    """
    Average each region over every buffered reading.

    The divisor is the number of readings, not the number that carried the key.
    An empty buffer means no data: every region averages to 0.
    """
    keys = list(keys)
    if not buffer:
        return {k: 0 for k in keys}

    totals = {k: 0.0 for k in keys}
    for reading in buffer:
        for k in keys:
            totals[k] += reading.get(k, 0)

    n = len(buffer)
    return {k: round_half_up(totals[k] / n) for k in keys}


class _Periodic:
    """Calls `action` every `interval` seconds on a daemon thread until stopped."""

    def __init__(self, interval: float, action: Callable[[], None], name: str):
        self.interval = interval
        self.action = action
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def start(self):
        self._thread.start()

    def stop(self):
        self._stop.set()

    def _run(self):
        while not self._stop.wait(self.interval):
            self.action()


class SamplingWindow:
    def __init__(
        self,
        fetch: Callable[[], Dict[str, float]],
        ticks: Optional[int] = None,
        tick_seconds: Optional[float] = None,
        region_keys: Iterable[str] = REGION_KEYS,
        on_close: Optional[Callable[[Dict[str, int]], None]] = None,
        max_workers: int = 4,
    ):
        self.fetch = fetch
        self.ticks = ticks if ticks is not None else config.SAMPLING_TICKS
        self.tick_seconds = tick_seconds if tick_seconds is not None else config.TICK_SECONDS
        self.region_keys = list(region_keys)
        self.on_close = on_close
        self.max_workers = max_workers

        self.remaining = self.ticks
        self.state = IDLE
        self.result: Optional[Dict[str, int]] = None
        self.done = threading.Event()

        self._buffer: List[Dict[str, float]] = []
        self._lock = threading.Lock()
        self._pool: Optional[ThreadPoolExecutor] = None
        self._fetch_timer: Optional[_Periodic] = None
        self._countdown_timer: Optional[_Periodic] = None

        # Stats
        self.fetch_errors = 0
        self.discarded = 0

    # --- lifecycle ---

    def start(self):
        with self._lock:
            if self.state != IDLE:
                logger.warning("Sampling window already %s; start ignored", self.state)
                return
            self.state = SAMPLING
            self._pool = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="sensor-fetch")
            self._fetch_timer = _Periodic(self.tick_seconds, self._on_fetch_tick, "sampling-fetch")
            self._countdown_timer = _Periodic(self.tick_seconds, self.countdown, "sampling-countdown")

        self._fetch_timer.start()
        self._countdown_timer.start()
        logger.info("Sampling window started: %d ticks of %.2fs", self.ticks, self.tick_seconds)

    def cancel(self):
        """Stop both periodic actions; in-flight fetches finish but their results are dropped."""
        with self._lock:
            if self.state != SAMPLING:
                return
            self.state = CANCELLED
            self._stop_timers()
            self._buffer = []
        self.done.set()
        logger.info("Sampling window cancelled with %d ticks left", self.remaining)

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self.done.wait(timeout)

    @property
    def is_open(self) -> bool:
        return self.state == SAMPLING

    # --- periodic actions ---

    def countdown(self):
        with self._lock:
            if self.state != SAMPLING:
                return
            self.remaining -= 1
            if self.remaining > 0:
                return
            self.remaining = 0
            self.state = CLOSED
            self._stop_timers()
            buffer, self._buffer = self._buffer, []
            self.result = average_readings(buffer, self.region_keys)

        logger.info("Sampling window closed: %d readings averaged, %d fetch errors", len(buffer), self.fetch_errors)
        # Listeners run before `done` so waiters see their side effects
        try:
            if self.on_close is not None:
                self.on_close(self.result)
        finally:
            self.done.set()

    def record(self, reading: Dict[str, float]) -> bool:
        """Append one reading; returns False when the window is no longer open."""
        with self._lock:
            if self.state != SAMPLING:
                self.discarded += 1
                return False
            self._buffer.append(reading)
            return True

    def _on_fetch_tick(self):
        with self._lock:
            if self.state != SAMPLING:
                return
            self._pool.submit(self._fetch_once)

    def _fetch_once(self):
        try:
            reading = self.fetch()
        except Exception as e:
            with self._lock:
                self.fetch_errors += 1
            logger.warning("Sensor fetch failed, tick dropped: %s", e)
            return
        if not self.record(reading):
            logger.debug("Late sensor reading discarded (window %s)", self.state)

    def _stop_timers(self):
        # Caller holds the lock
        if self._fetch_timer:
            self._fetch_timer.stop()
        if self._countdown_timer:
            self._countdown_timer.stop()
        if self._pool:
            self._pool.shutdown(wait=False)
