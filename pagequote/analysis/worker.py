"""Analysis worker: request/response envelope around the two estimators.

Runs estimations off the caller's thread on a ThreadPoolExecutor so a large
deep pass never blocks request handling.

Protocol
--------
Request::

    {"kind": "fastPass" | "deepPass", "id": str, "buffer": bytes,
     "fileName": str, "basePricePerPage": float}

Responses::

    {"kind": "fastPassDone" | "deepPassDone", "id": str, "result": {...}}
    {"kind": "error", "id": str, "message": str}

The id is chosen by the caller and echoed back unchanged so concurrent
analyses (one per uploaded file) can be matched to their completions.
There is no cancellation: a caller that loses interest discards the
response.  Fast and deep requests for the same file are independent and
share no state.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pagequote.analysis.deep import deep_estimate
from pagequote.analysis.fast import fast_estimate
from pagequote.analysis.pdf_backend import PdfBackend
from pagequote.analysis.types import AnalysisResult

logger = logging.getLogger(__name__)

RequestKind = Literal["fastPass", "deepPass"]
ResponseKind = Literal["fastPassDone", "deepPassDone", "error"]

_DONE_KINDS: dict[str, ResponseKind] = {
    "fastPass": "fastPassDone",
    "deepPass": "deepPassDone",
}


class AnalysisRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    kind: RequestKind
    id: str = Field(min_length=1)
    buffer: bytes
    file_name: str = Field(alias="fileName")
    base_price_per_page: float = Field(alias="basePricePerPage", ge=0, allow_inf_nan=False)


@dataclass(frozen=True)
class WorkerResponse:
    """Completion or error for one request, keyed by its id."""

    kind: ResponseKind
    id: str
    result: AnalysisResult | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind != "error"

    def to_dict(self) -> dict[str, Any]:
        if self.kind == "error":
            return {"kind": self.kind, "id": self.id, "message": self.message or "unknown"}
        return {"kind": self.kind, "id": self.id, "result": self.result.to_dict()}


def _request_id(message: object) -> str:
    """Best-effort correlation id of a possibly malformed message."""
    if isinstance(message, Mapping):
        value = message.get("id")
        if isinstance(value, str):
            return value
    return ""


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "request"
    return f"invalid request: {location}: {first['msg']}"


class AnalysisWorker:
    """Thread-pool backed executor for fastPass / deepPass requests.

    Usage::

        worker = AnalysisWorker(max_workers=4)
        response = worker.handle({"kind": "fastPass", "id": "a1", ...})
        future = worker.submit({"kind": "deepPass", "id": "a1", ...})
        response = await worker.run(message)
        worker.shutdown()
    """

    def __init__(self, max_workers: int = 4, backend: PdfBackend | None = None) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="pagequote-analysis"
        )
        self._backend = backend

    def handle(self, message: Mapping[str, Any]) -> WorkerResponse:
        """Process one request synchronously and return its response."""
        request_id = _request_id(message)
        try:
            request = AnalysisRequest.model_validate(message)
        except ValidationError as exc:
            logger.warning("Rejected analysis request id=%s: %s", request_id, _describe(exc))
            return WorkerResponse(kind="error", id=request_id, message=_describe(exc))

        try:
            if request.kind == "fastPass":
                result = fast_estimate(
                    request.buffer, request.file_name, request.base_price_per_page
                )
            else:
                result = deep_estimate(
                    request.buffer,
                    request.file_name,
                    request.base_price_per_page,
                    backend=self._backend,
                )
        except Exception as exc:
            logger.exception("Analysis request id=%s failed", request.id)
            return WorkerResponse(kind="error", id=request.id, message=str(exc) or "unknown")

        logger.info(
            "Analysis %s id=%s file=%s type=%s pages=%d total=%.2f",
            request.kind,
            request.id,
            request.file_name,
            result.file_type.value,
            result.total_pages,
            result.total_price,
        )
        return WorkerResponse(kind=_DONE_KINDS[request.kind], id=request.id, result=result)

    def submit(self, message: Mapping[str, Any]) -> Future[WorkerResponse]:
        """Queue a request; the future resolves to its WorkerResponse."""
        return self._executor.submit(self.handle, message)

    async def run(self, message: Mapping[str, Any]) -> WorkerResponse:
        """Await a request from asyncio without blocking the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.handle, message)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
