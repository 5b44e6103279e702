"""FastAPI application -- routes for the Flashdeck study deck."""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Callable

_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from server.__version__ import __version__
from server.config import Settings
from server.dependencies import get_card_store, get_clock, get_settings
from server.schemas import (
    AddCardRequest,
    CardSchema,
    CardsResponse,
    DueCardsResponse,
    ResetResponse,
    ReviewRequest,
    ReviewResponse,
    StatsResponse,
    StatusResponse,
)
from server.services import study_service
from study.storage import CardStore, StorageError

logger = logging.getLogger("flashdeck")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan: log only. The card store is loaded lazily on first request."""
    settings = get_settings()
    ts = datetime.utcnow().isoformat() + "Z"
    logger.info("[%s] Startup: collection=%s unit=%s backend=%s", ts,
                settings.collection, settings.unit_label, settings.storage_backend)
    yield
    ts_end = datetime.utcnow().isoformat() + "Z"
    logger.info("[%s] Shutdown: complete", ts_end)


app = FastAPI(title="Flashdeck", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage unavailable on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": f"Storage unavailable: {exc}"})


@app.get("/health")
def health():
    """Minimal health check. No deps, no store load. Always returns immediately."""
    return {"ok": True}


@app.get("/status", response_model=StatusResponse)
def status(settings: Settings = Depends(get_settings)):
    """Server configuration for the UI header."""
    return {
        "version": __version__,
        "unit": settings.unit_label,
        "collection": settings.collection,
        "storage_backend": settings.storage_backend,
    }


# ---- Cards ----

@app.get("/cards", response_model=CardsResponse)
def browse_cards(store: CardStore = Depends(get_card_store)):
    """All cards, newest first."""
    return study_service.list_cards(store)


@app.post("/cards", response_model=CardSchema)
def add_card(
    body: AddCardRequest,
    store: CardStore = Depends(get_card_store),
    clock: Callable[[], int] = Depends(get_clock),
):
    """Create a card. It is due immediately."""
    try:
        return study_service.add_card(store, body.question, body.answer, clock())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.delete("/cards", response_model=ResetResponse)
def reset_cards(
    confirm: bool = False,
    store: CardStore = Depends(get_card_store),
):
    """Delete every card. Requires ?confirm=true."""
    if not confirm:
        raise HTTPException(status_code=400, detail="Reset all cards? Pass confirm=true; this cannot be undone.")
    return study_service.reset_cards(store)


# ---- Study ----

@app.get("/study/due", response_model=DueCardsResponse)
def study_due(
    store: CardStore = Depends(get_card_store),
    clock: Callable[[], int] = Depends(get_clock),
):
    """Cards due now, most overdue first."""
    return study_service.get_due_cards(store, clock())


@app.post("/study/review", response_model=ReviewResponse)
def study_review(
    body: ReviewRequest,
    store: CardStore = Depends(get_card_store),
    settings: Settings = Depends(get_settings),
    clock: Callable[[], int] = Depends(get_clock),
):
    """Submit a rating (again/hard/good/easy) for a card and reschedule it."""
    try:
        return study_service.review_card(
            store,
            body.card_id,
            body.rating,
            clock(),
            settings.unit_is_minutes,
        )
    except KeyError as e:
        raise HTTPException(status_code=404, detail=e.args[0])
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/stats", response_model=StatsResponse)
def stats(
    store: CardStore = Depends(get_card_store),
    settings: Settings = Depends(get_settings),
    clock: Callable[[], int] = Depends(get_clock),
):
    """Deck totals for the sidebar."""
    return study_service.get_stats(store, clock(), settings.unit_is_minutes)
