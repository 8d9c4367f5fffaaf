"""Shared upload handling for the analysis and quote routes."""
from __future__ import annotations

from fastapi import HTTPException, UploadFile

from pagequote.core.settings import get_settings


async def read_upload(file: UploadFile) -> bytes:
    """Return the upload's bytes; 413 when it exceeds MAX_UPLOAD_BYTES."""
    limit = get_settings().max_upload_bytes
    buffer = await file.read(limit + 1)
    if len(buffer) > limit:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds the {limit}-byte upload limit",
        )
    return buffer


def resolve_base_price(base_price_per_page: float | None) -> float:
    """Use the caller's base price or fall back to BASE_PRICE_PER_PAGE."""
    if base_price_per_page is None:
        return get_settings().base_price_per_page
    return base_price_per_page
