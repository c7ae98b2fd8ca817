"""Health check endpoints."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from forge.api.deps import get_db, get_settings
from forge.api.pages import index_page
from forge.api.schemas import HealthResponse
from forge.config import Settings
from forge.db.database import ping
from forge.db.migrations import get_session_revision

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/", response_class=HTMLResponse)
async def index(settings: Settings = Depends(get_settings)) -> HTMLResponse:
    return HTMLResponse(content=index_page(settings.version))


@router.get("/health", response_model=HealthResponse)
async def health(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    """Health check endpoint."""
    try:
        store_connected = ping(db)
    except SQLAlchemyError as e:
        logger.warning("Profile store ping failed: %s", e)
        store_connected = False

    try:
        revision = get_session_revision(db)
    except SQLAlchemyError as e:
        logger.warning("Migration revision lookup failed: %s", e)
        revision = None

    return HealthResponse(
        status="Online",
        version=settings.version,
        store_connected=store_connected,
        profile_path=settings.profile_path,
        db_revision=revision,
    )
