"""Analysis routes: fast and deep page estimation of one uploaded file.

POST /analysis/fast returns the instant /Count-based estimate.
POST /analysis/deep returns the full per-page parse.

Both accept multipart/form-data with ``file`` plus optional
``base_price_per_page`` and ``request_id`` fields, and answer with the
worker response envelope.  A rejected request answers 422 with the error
envelope as body.  Nothing is persisted.
"""
from __future__ import annotations

from uuid import uuid4

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from pagequote.analysis.worker import AnalysisWorker, RequestKind
from pagequote.api.deps import get_worker
from pagequote.api.routes.uploads import read_upload, resolve_base_price

router = APIRouter(prefix="/analysis", tags=["analysis"])


async def _analyse(
    kind: RequestKind,
    file: UploadFile,
    base_price_per_page: float | None,
    request_id: str | None,
    worker: AnalysisWorker,
) -> JSONResponse:
    buffer = await read_upload(file)
    message = {
        "kind": kind,
        "id": request_id or str(uuid4()),
        "buffer": buffer,
        "fileName": file.filename or "",
        "basePricePerPage": resolve_base_price(base_price_per_page),
    }
    response = await worker.run(message)
    status_code = 200 if response.ok else 422
    return JSONResponse(status_code=status_code, content=response.to_dict())


@router.post("/fast", summary="Instant page estimate")
async def fast_pass(
    file: UploadFile = File(...),
    base_price_per_page: float | None = Form(None),
    request_id: str | None = Form(None),
    worker: AnalysisWorker = Depends(get_worker),
) -> JSONResponse:
    return await _analyse("fastPass", file, base_price_per_page, request_id, worker)


@router.post("/deep", summary="Full per-page density analysis")
async def deep_pass(
    file: UploadFile = File(...),
    base_price_per_page: float | None = Form(None),
    request_id: str | None = Form(None),
    worker: AnalysisWorker = Depends(get_worker),
) -> JSONResponse:
    return await _analyse("deepPass", file, base_price_per_page, request_id, worker)
