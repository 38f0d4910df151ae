"""
FastAPI application for loctable.

Exposes the localization workflow (scan, CSV export/import, JSON export) to
editor tooling over HTTP.

Run with:
    uvicorn loctable.api.app:app --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from loctable.codecs.csv_codec import export_csv
from loctable.codecs.json_codec import build_language_document
from loctable.config import get_settings
from loctable.core.errors import CsvFormatError
from loctable.core.events import get_event_bus
from loctable.services.pipeline import LocalizationPipeline
from loctable.services.scanner import ContentItem, RecordingContentMutator
from loctable.storage import create_local_storage, StorageProvider

logger = logging.getLogger(__name__)


# =============================================================================
# App State
# =============================================================================


class AppState:
    """Application state - initialized at startup."""

    storage: StorageProvider
    pipeline: LocalizationPipeline
    mutator: RecordingContentMutator


state = AppState()


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup app resources."""
    settings = get_settings()

    state.storage = create_local_storage(settings.data_dir)
    state.mutator = RecordingContentMutator()
    state.pipeline = LocalizationPipeline(
        state.storage.content,
        settings=settings,
        event_bus=get_event_bus(),
        mutator=state.mutator,
    )
    await state.pipeline.load_or_create_table()

    logger.info(f"loctable API starting in {settings.environment} mode (data: {settings.data_dir})")

    yield

    logger.info("loctable API shutting down")


# =============================================================================
# App Setup
# =============================================================================


app = FastAPI(
    title="loctable API",
    description="Localization table: scan content, exchange CSV with translators, export runtime JSON",
    version="0.1.0",
    lifespan=lifespan,
)


settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Dependencies
# =============================================================================


def get_pipeline() -> LocalizationPipeline:
    return state.pipeline


# =============================================================================
# Request/Response Models
# =============================================================================


class ScanRequest(BaseModel):
    items: list[ContentItem]


class ScanResponse(BaseModel):
    processed: int
    skipped_blank: int
    skipped_kind: int
    keys: list[str]
    failures: list[dict[str, str]]


class ImportCsvRequest(BaseModel):
    text: str | None = None  # omit to import the stored translator file
    source: str | None = None


class ImportResponse(BaseModel):
    touched: int
    created: int
    updated: int
    skipped_rows: int
    unknown_columns: list[str]
    languages_added: list[str]


class TableResponse(BaseModel):
    languages: list[str]
    rows: list[dict[str, Any]]
    count: int


# =============================================================================
# Health Check
# =============================================================================


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "loctable-api"}


# =============================================================================
# Table
# =============================================================================


@app.get("/table", response_model=TableResponse)
async def get_table(pipeline: LocalizationPipeline = Depends(get_pipeline)):
    """The current table, rows in table order."""
    table = pipeline.table
    return TableResponse(
        languages=list(table.languages),
        rows=[{"key": r.key, "values": list(r.values)} for r in table.rows],
        count=len(table.rows),
    )


@app.post("/scan", response_model=ScanResponse)
async def scan(request: ScanRequest, pipeline: LocalizationPipeline = Depends(get_pipeline)):
    """Assign keys to the posted content items and record their text."""
    report = await pipeline.scan_and_assign(request.items)
    return ScanResponse(**report.to_dict())


# =============================================================================
# CSV
# =============================================================================


@app.post("/export/csv", response_class=PlainTextResponse)
async def export_csv_file(pipeline: LocalizationPipeline = Depends(get_pipeline)):
    """Write the translator CSV and return its text."""
    await pipeline.export_csv()
    return PlainTextResponse(export_csv(pipeline.table), media_type="text/csv; charset=utf-8")


@app.post("/import/csv", response_model=ImportResponse)
async def import_csv_file(
    request: ImportCsvRequest,
    pipeline: LocalizationPipeline = Depends(get_pipeline),
):
    """Merge a translator CSV (posted text or the stored file) into the table."""
    try:
        report = await pipeline.import_csv(request.text, source=request.source)
    except CsvFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ImportResponse(**report.to_dict())


# =============================================================================
# JSON
# =============================================================================


@app.post("/export/json")
async def export_json_files(pipeline: LocalizationPipeline = Depends(get_pipeline)):
    """Write one runtime JSON file per language."""
    locations = await pipeline.export_json()
    return {"files": locations, "count": len(locations)}


@app.get("/languages/{lang}")
async def get_language(lang: str, pipeline: LocalizationPipeline = Depends(get_pipeline)):
    """The runtime document for one language."""
    if not pipeline.table.has_language(lang):
        raise HTTPException(status_code=404, detail="Language not found")
    return build_language_document(pipeline.table, lang).model_dump()
