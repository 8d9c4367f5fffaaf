"""POST /quotes: deep-analyse one upload and price it as a quote.

Accepts multipart/form-data with ``file``, ``urgent``, ``notarized`` and an
optional ``base_price_per_page``.  Returns ``{"analysis": ..., "quote": ...}``.
"""
from __future__ import annotations

from uuid import uuid4

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from pagequote.analysis.worker import AnalysisWorker
from pagequote.api.deps import get_worker
from pagequote.api.routes.uploads import read_upload, resolve_base_price
from pagequote.quotes.quote import build_quote

router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.post("", summary="Quote one document")
async def create_quote(
    file: UploadFile = File(...),
    urgent: bool = Form(False),
    notarized: bool = Form(False),
    base_price_per_page: float | None = Form(None),
    worker: AnalysisWorker = Depends(get_worker),
) -> JSONResponse:
    buffer = await read_upload(file)
    response = await worker.run({
        "kind": "deepPass",
        "id": str(uuid4()),
        "buffer": buffer,
        "fileName": file.filename or "",
        "basePricePerPage": resolve_base_price(base_price_per_page),
    })
    if not response.ok:
        return JSONResponse(status_code=422, content=response.to_dict())

    quote = build_quote(response.result, urgent=urgent, notarized=notarized)
    return JSONResponse(content={
        "analysis": response.result.to_dict(),
        "quote": quote.to_dict(),
    })
