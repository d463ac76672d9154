"""metascan — Scoring API endpoints."""

from __future__ import annotations

import io
import logging
from functools import lru_cache
from typing import Any

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from metascan.config import get_settings
from metascan.core.engine import score_metadata
from metascan.exceptions import MetascanError
from metascan.models.schemas import ScoreResult
from metascan.reporting.export import FileRecord, build_csv_row, write_csv
from metascan.scoring_config import ValidationConfig, load_validation_config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/score", tags=["Scoring"])


class ScoreRequest(BaseModel):
    """Score a single metadata map."""

    metadata: dict[str, Any]
    config: dict[str, Any] | None = None


class BatchItem(BaseModel):
    filename: str
    metadata: dict[str, Any]
    size_bytes: int | None = None
    mime_type: str | None = None


class BatchRequest(BaseModel):
    items: list[BatchItem] = Field(min_length=1)
    config: dict[str, Any] | None = None


class BatchResultItem(BaseModel):
    filename: str
    result: ScoreResult


@lru_cache(maxsize=8)
def base_config(path: str) -> ValidationConfig:
    """Server defaults with the override file at ``path`` applied, read once per path."""
    return load_validation_config(path)


def _effective_config(overrides: dict[str, Any] | None) -> ValidationConfig:
    """Server defaults (optional override file) with per-request overrides on top."""
    base = base_config(get_settings().scoring_config_path)
    return base.with_overrides(overrides)


def _check_batch_size(request: BatchRequest) -> None:
    limit = get_settings().max_batch_size
    if len(request.items) > limit:
        raise HTTPException(status_code=413, detail=f"Batch exceeds {limit} items")


@router.post("", response_model=ScoreResult)
async def score_one(request: ScoreRequest) -> ScoreResult:
    """Score one metadata map."""
    try:
        return score_metadata(request.metadata, _effective_config(request.config))
    except MetascanError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/batch", response_model=list[BatchResultItem])
async def score_batch(request: BatchRequest) -> list[BatchResultItem]:
    """Score many files independently."""
    _check_batch_size(request)
    try:
        config = _effective_config(request.config)
        return [
            BatchResultItem(filename=item.filename, result=score_metadata(item.metadata, config))
            for item in request.items
        ]
    except MetascanError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/report.csv", response_class=PlainTextResponse)
async def score_report_csv(request: BatchRequest) -> PlainTextResponse:
    """Score a batch and return the semicolon-separated CSV report."""
    _check_batch_size(request)
    try:
        config = _effective_config(request.config)
    except MetascanError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    rows = []
    for item in request.items:
        record = FileRecord(
            filename=item.filename,
            metadata=item.metadata,
            size_bytes=item.size_bytes,
            mime_type=item.mime_type,
        )
        rows.append(build_csv_row(record, score_metadata(item.metadata, config)))

    buf = io.StringIO()
    write_csv(rows, buf, bom=get_settings().csv_bom)
    logger.info("CSV report generated for %d file(s)", len(rows))
    return PlainTextResponse(buf.getvalue(), media_type="text/csv; charset=utf-8")


@router.get("/config", response_model=ValidationConfig)
async def effective_config() -> ValidationConfig:
    """Return the configuration applied when a request carries no overrides."""
    try:
        return _effective_config(None)
    except MetascanError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
