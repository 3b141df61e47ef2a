from __future__ import annotations

from dataclasses import asdict, dataclass, field
from threading import Lock
from time import time
from typing import Any, Dict, List, Optional

# Newest-first windows shown to the UI.
MAX_RECENT = 50


@dataclass
class TriageRunStatus:
    state: str = "idle"
    step: str = "idle"
    detail: Optional[str] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
    summary: Optional[Dict[str, Any]] = None
    recent_results: List[Dict[str, Any]] = field(default_factory=list)
    recent_errors: List[Dict[str, Any]] = field(default_factory=list)
    # Ids of emails whose category confidence fell below the threshold.
    review_queue: List[str] = field(default_factory=list)
    started_at: Optional[float] = None
    updated_at: float = field(default_factory=time)


def _prepend(window: List[Dict[str, Any]], item: Dict[str, Any]) -> List[Dict[str, Any]]:
    return ([item] + window)[:MAX_RECENT]


class TriageStatusStore:
    """Progress of the latest batch run, written by the worker thread and polled by the UI."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._status = TriageRunStatus()

    def start(self, total: int) -> None:
        with self._lock:
            self._status = TriageRunStatus(
                state="running",
                step="starting",
                detail=f"Triaging {total} emails",
                started_at=time(),
            )

    def on_progress(self, step: str, event: Dict[str, Any]) -> None:
        """Progress callback for run_once; folds one event into the status."""
        with self._lock:
            status = self._status
            status.step = step
            status.detail = event.get("detail")

            result = event.get("result")
            if result:
                status.recent_results = _prepend(status.recent_results, result)
                if result.get("manual_review"):
                    status.review_queue.append(result["email_id"])

            error = event.get("error")
            if error:
                status.recent_errors = _prepend(status.recent_errors, error)

            if "metrics" in event:
                status.metrics = dict(event.get("metrics") or {})
            status.updated_at = time()

    def finish(self, summary: Dict[str, Any]) -> None:
        with self._lock:
            self._status.state = "done"
            self._status.step = "done"
            self._status.detail = "Run completed"
            # Per-email results are already in recent_results.
            self._status.summary = {k: v for k, v in summary.items() if k != "results"}
            self._status.updated_at = time()

    def fail(self, message: str) -> None:
        with self._lock:
            self._status.state = "error"
            self._status.step = "error"
            self._status.detail = message
            self._status.updated_at = time()

    def reset(self) -> None:
        with self._lock:
            self._status = TriageRunStatus()

    def snapshot(self) -> Dict[str, Any]:
        # asdict deep-copies, so callers cannot mutate the live status.
        with self._lock:
            return asdict(self._status)


run_status_store = TriageStatusStore()
