# -*- coding: utf-8 -*-
"""Export — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from ..identity import get_current_user
from .generator import EXPORT_KINDS, export_filename, full_report, supplements_csv, water_csv

router = APIRouter(prefix="/api/export", tags=["Export"])

_GENERATORS = {
    "water": water_csv,
    "supplements": supplements_csv,
    "full": full_report,
}


@router.get("/{kind}", summary="Download history as CSV (water/supplements) or a text report (full)")
def export(
    kind: str,
    days: int = Query(default=30, ge=1, le=365),
    user: dict = Depends(get_current_user),
):
    if kind not in EXPORT_KINDS:
        raise HTTPException(status_code=404, detail=f"Unknown export kind: {kind}")
    content = _GENERATORS[kind](user["id"], days)
    media_type = "text/plain" if kind == "full" else "text/csv"
    return Response(
        content=content,
        media_type=f"{media_type}; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(kind, days)}"'},
    )
