"""FastAPI server for the Forge bridge."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.orm import sessionmaker

from forge.api import auth, diagnostics, health, launch
from forge.api.errors import BridgeError, ErrorCode, ErrorResponse, log_error
from forge.auth.shopify import ShopifyConfig
from forge.config import Settings
from forge.db.database import init_db

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the server process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_shopify_config() -> ShopifyConfig | None:
    """Load Shopify credentials, or None if they are not set."""
    try:
        return ShopifyConfig.from_env()
    except ValueError as e:
        logger.warning("Shopify OAuth disabled: %s", e)
        return None


# ============================================================================
# Lifespan & App Setup
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup/shutdown."""
    from forge.db.migrations import run_migrations

    settings: Settings = app.state.settings

    if settings.auto_migrate:
        logger.info("Running database migrations...")
        try:
            run_migrations(settings.database_url)
            logger.info("Migrations complete")
        except Exception as e:
            logger.error("Migration failed: %s", e)
            # Continue anyway - tables might already exist

    logger.info(
        "Forge bridge v%s ready (oauth=%s, diagnostics=%s)",
        settings.version,
        "on" if app.state.shopify_config else "off",
        "on" if settings.enable_diagnostics else "off",
    )

    yield

    engine = app.state.engine
    if engine is not None:
        engine.dispose()


async def bridge_error_handler(request: Request, exc: BridgeError) -> PlainTextResponse:
    """Render handler errors as a plain message with the error's status."""
    log_error(exc, endpoint=request.url.path, exc=exc.__cause__)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 INVALID_REQUEST."""
    fields = [".".join(str(p) for p in err.get("loc", ())[1:]) for err in exc.errors()]
    body = ErrorResponse(
        error="Invalid request",
        code=ErrorCode.INVALID_REQUEST,
        detail=", ".join(f for f in fields if f) or None,
    )
    logger.warning("Invalid request to %s: %s", request.url.path, body.detail)
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))


def create_app(
    settings: Settings | None = None,
    shopify_config: ShopifyConfig | None = None,
    session_factory: sessionmaker | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Service settings, or None to load from env
        shopify_config: Shopify credentials, or None to load from env
        session_factory: Session factory to use instead of one built from
            ``settings.database_url``

    Returns:
        Configured FastAPI application
    """
    settings = settings or Settings.from_env()
    if shopify_config is None:
        shopify_config = load_shopify_config()

    engine = None
    if session_factory is None:
        engine, session_factory = init_db(settings.database_url, echo=settings.sql_echo)

    app = FastAPI(
        title="Forge Bridge",
        description="Shopify OAuth handshake and merchant tier upgrades",
        version=settings.version,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.shopify_config = shopify_config
    app.state.engine = engine
    app.state.session_factory = session_factory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BridgeError, bridge_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(launch.router)
    if settings.enable_diagnostics:
        app.include_router(diagnostics.router)

    return app


# ============================================================================
# Entry Point
# ============================================================================

def main():
    """Run the server."""
    import uvicorn

    load_dotenv()
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    uvicorn.run(
        create_app(settings),
        host="0.0.0.0",
        port=settings.port,
    )


if __name__ == "__main__":
    main()
