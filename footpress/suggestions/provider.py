# footpress/suggestions/provider.py
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, asdict
from typing import Callable, Dict, Iterable, Optional

from footpress import config
from footpress.analysis.bmi import BmiCategory
from footpress.analysis.thresholds import Verdict, abnormal
from footpress.llm.provider import safe_call_llm
from footpress.reference.regions import region_by_key
from footpress.suggestions.prompt import suggestion_prompt, split_suggestion

logger = logging.getLogger(__name__)

PENDING = "pending"
AVAILABLE = "available"
UNAVAILABLE = "unavailable"

STATIC = "static"
REMOTE = "remote"


@dataclass(frozen=True)
class SuggestionState:
    status: str
    cause: Optional[str] = None
    treatment: Optional[str] = None
    text: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


def pending() -> SuggestionState:
    return SuggestionState(PENDING)


def unavailable() -> SuggestionState:
    return SuggestionState(UNAVAILABLE)


def from_text(text: str) -> SuggestionState:
    """Well-formed replies are split; anything else is kept verbatim."""
    cause, treatment = split_suggestion(text)
    return SuggestionState(AVAILABLE, cause=cause, treatment=treatment, text=text)


def request_suggestion(region_name: str, value, bmi_category, bounds, model: str | None = None):
    """Single LLM round trip. Returns (text, unavailable_flag) like safe_call_llm."""
    category = BmiCategory(bmi_category).value
    prompt = suggestion_prompt(region_name, value, category, bounds)
    return safe_call_llm(prompt, model=model)


class SuggestionProvider:
    """
    Fills in cause/treatment for abnormal regions.

    static: read from the reference table, immediately available.
    remote: one LLM request per region on a worker pool; each result lands under
    its own region key. Failures stay visible as "unavailable".
    """

    def __init__(self, mode: str | None = None, requester: Callable = request_suggestion,
                 max_workers: int | None = None):
        self.mode = (mode or config.SUGGESTION_MODE).strip().lower()
        if self.mode not in (STATIC, REMOTE):
            raise ValueError(f"Unknown suggestion mode: {self.mode!r}")
        self.requester = requester
        self.max_workers = max_workers or config.SUGGESTION_WORKERS
        self._pool: Optional[ThreadPoolExecutor] = None
        self._lock = threading.Lock()

    def static_for(self, key: str) -> SuggestionState:
        region = region_by_key(key)
        return SuggestionState(AVAILABLE, cause=region.cause, treatment=region.treatment)

    def remote_for(self, verdict: Verdict, category: BmiCategory) -> SuggestionState:
        try:
            text, unavail = self.requester(verdict.name, verdict.value, category, verdict.range)
        except Exception as e:
            logger.error("Suggestion request for %s failed: %s", verdict.key, e)
            return unavailable()
        if unavail or not text:
            return unavailable()
        return from_text(text)

    def suggest(self, verdicts: Iterable[Verdict], category: BmiCategory,
                publish: Callable[[str, SuggestionState], None]) -> Dict[str, SuggestionState]:
        """
        Start suggestions for every abnormal verdict.

        Returns the initial states (pending in remote mode) and reports each final
        state through `publish(region_key, state)` as it settles.
        """
        targets = abnormal(verdicts)
        initial = {}

        if self.mode == STATIC:
            for v in targets:
                initial[v.key] = self.static_for(v.key)
            return initial

        pool = self._get_pool()
        for v in targets:
            initial[v.key] = pending()
            pool.submit(self._run_one, v, category, publish)
        return initial

    def _run_one(self, verdict: Verdict, category: BmiCategory, publish):
        state = self.remote_for(verdict, category)
        logger.info("Suggestion for %s settled: %s", verdict.key, state.status)
        publish(verdict.key, state)

    def _get_pool(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._pool is None:
                self._pool = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="suggestion")
            return self._pool

    def shutdown(self):
        with self._lock:
            if self._pool is not None:
                self._pool.shutdown(wait=False)
                self._pool = None
