"""FastAPI dependency injection: the shared analysis worker."""
from __future__ import annotations

import threading

from pagequote.analysis.worker import AnalysisWorker
from pagequote.core.settings import get_settings

_worker: AnalysisWorker | None = None
_worker_lock = threading.Lock()


def get_worker() -> AnalysisWorker:
    """Return the process-wide AnalysisWorker, creating it on first use."""
    global _worker
    if _worker is None:
        with _worker_lock:
            if _worker is None:
                _worker = AnalysisWorker(max_workers=get_settings().analysis_max_workers)
    return _worker


def shutdown_worker() -> None:
    """Stop the worker's thread pool; a later get_worker() starts a new one."""
    global _worker
    with _worker_lock:
        if _worker is not None:
            _worker.shutdown()
            _worker = None
