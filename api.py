#!/usr/bin/env python3
"""
Weapon Reference - FastAPI Backend

Serves filtered weapon tables and filter badge counts to the web UI.
The weapon CSV is loaded on first use and kept in memory.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional, Any

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, FileResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from models import LoadResult, LoadStatus
from weapon_database import WeaponStore, load_from_source, default_source, DATA_SOURCE_ENV
from filter_engine import FilterEngine
from filter_counts import compute_filter_counts, character_counts
from filter_registry import FILTER_CONFIGS


SCRIPT_DIR = Path(__file__).parent


# =============================================================================
# FastAPI App Setup
# =============================================================================

app = FastAPI(
    title="Weapon Reference",
    description="Filter and compare weapons from the weapon CSV dataset",
    version="1.0.0"
)

# CORS middleware for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Global State
# =============================================================================

class AppState:
    """Global application state."""
    def __init__(self, source: Optional[str] = None):
        self.source: str = source or os.environ.get(DATA_SOURCE_ENV) or default_source()
        self.store = WeaponStore()
        self.engine = FilterEngine(self.store)
        self.counts: Dict[str, int] = {}
        self.last_load: Optional[LoadResult] = None

    def ensure_loaded(self) -> LoadResult:
        """Load the store if needed; badge counts are computed after the first load."""
        result = load_from_source(self.store, self.source)
        if result.status == LoadStatus.LOADED:
            self.counts = compute_filter_counts(self.store)
        if result.status != LoadStatus.ALREADY_LOADED:
            self.last_load = result
        return result


state = AppState()


# =============================================================================
# Pydantic Models for API
# =============================================================================

class StatusResponse(BaseModel):
    status: str
    weapons_loaded: bool
    weapon_count: int
    source: str
    last_error: str = ""


class LoadResponse(BaseModel):
    success: bool
    status: str
    weapon_count: int = 0
    skipped_rows: int = 0
    message: str = ""


class TableInfo(BaseModel):
    header: str
    rows: List[List[Any]]
    row_count: int
    column_count: int


class FilterInfo(BaseModel):
    filter_id: str
    kind: str


def _load_response(result: LoadResult) -> LoadResponse:
    return LoadResponse(
        success=result.ok,
        status=result.status.value,
        weapon_count=result.weapon_count,
        skipped_rows=result.skipped_rows,
        message=result.message,
    )


def _load_failure(result: LoadResult) -> Dict[str, Any]:
    """Failure payload for endpoints that need the weapon data."""
    return {
        "success": False,
        "error": result.message,
        "error_type": result.status.value,
    }


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/", response_class=HTMLResponse)
async def root():
    """Serve the main HTML page."""
    html_path = SCRIPT_DIR / "static" / "index.html"
    if html_path.exists():
        return FileResponse(html_path)
    return HTMLResponse("<h1>Weapon Reference API</h1><p>Static files not found</p>")


@app.get("/api/status", response_model=StatusResponse)
async def get_status():
    """Get the current application status."""
    loaded = state.store.is_loaded()
    last_error = ""
    if state.last_load is not None and not state.last_load.ok:
        last_error = state.last_load.message
    return StatusResponse(
        status="ready" if loaded else "not_loaded",
        weapons_loaded=loaded,
        weapon_count=len(state.store),
        source=state.source,
        last_error=last_error,
    )


# Endpoints that may load the store are plain defs: the fetch blocks on I/O
@app.post("/api/load", response_model=LoadResponse)
def load_weapons():
    """
    Load the weapon database from the configured source.

    No-op when already loaded; after a transport error this is the retry.
    """
    return _load_response(state.ensure_loaded())


@app.get("/api/filters", response_model=List[FilterInfo])
async def list_filters():
    """List the available filters."""
    return [
        FilterInfo(filter_id=filter_id, kind=config.kind.value)
        for filter_id, config in FILTER_CONFIGS.items()
    ]


@app.get("/api/filter/{filter_id}")
def run_filter(filter_id: str):
    """
    Run a filter and return its tables.

    Each table's rows include the column header row first. Unknown
    filters return no tables.
    """
    result = state.ensure_loaded()
    if not result.ok:
        return _load_failure(result)

    tables = state.engine.run(filter_id)
    return {
        "success": True,
        "filter_id": filter_id,
        "tables": [TableInfo(**table.to_dict()) for table in tables],
    }


@app.get("/api/counts")
def get_counts():
    """Get weapon counts for every filter badge."""
    result = state.ensure_loaded()
    if not result.ok:
        return _load_failure(result)
    return {"success": True, "counts": state.counts}


@app.get("/api/characters")
def get_characters():
    """Get every character name with its weapon count."""
    result = state.ensure_loaded()
    if not result.ok:
        return _load_failure(result)
    return {"success": True, "characters": character_counts(state.store)}
