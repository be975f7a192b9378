"""FastAPI application entry point for the DentalAI portal."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from portal import __version__
from portal.config import ConfigLoadError, get_settings, load_accounts_config
from portal.session import SessionStore
from portal.web import (
    LoginRequired,
    api_router,
    auth_router,
    clinic_router,
    government_router,
    patient_router,
)

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.value),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    current = get_settings()
    logger.info("Starting DentalAI portal v%s", __version__)
    logger.info("Accounts path: %s", current.accounts_path)

    app.state.session_store = SessionStore()
    logger.info(
        "Session store initialized (cookie=%s, max_age=%ds)",
        current.session_cookie_name,
        current.session_cookie_max_age,
    )

    try:
        accounts_config = load_accounts_config(current.accounts_path)
        app.state.accounts_config = accounts_config
        logger.info("Loaded %d demo accounts", len(accounts_config.accounts))
        for account in accounts_config.accounts:
            logger.info("  - %s (%s)", account.username, account.role.value)
    except ConfigLoadError as e:
        logger.error("Failed to load demo accounts: %s", e)
        app.state.accounts_config = None

    yield

    logger.info(
        "Shutting down DentalAI portal (%d sessions discarded)",
        app.state.session_store.count(),
    )


app = FastAPI(
    title="DentalAI Portal",
    description="Demo portal for patients, clinics and government analysts",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired) -> RedirectResponse:
    """Send sessions without the required role back to the login page."""
    logger.debug("Redirecting %s to login: %s", request.url.path, exc)
    return RedirectResponse(url="/", status_code=303)


app.include_router(auth_router)
app.include_router(patient_router)
app.include_router(clinic_router)
app.include_router(government_router)
app.include_router(api_router)

STATIC_DIR = Path(__file__).resolve().parent / "static"

static_dir = Path(settings.static_dir) if settings.static_dir else STATIC_DIR
if static_dir.is_dir():
    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")
else:
    logger.warning("Static directory not found, assets disabled: %s", static_dir)


@app.get("/health/live", response_class=JSONResponse)
async def liveness() -> dict:
    """Liveness probe endpoint."""
    return {"status": "ok"}


@app.get("/health/ready", response_class=JSONResponse)
async def readiness() -> JSONResponse:
    """Readiness probe endpoint."""
    if getattr(app.state, "session_store", None) is None:
        return JSONResponse(
            status_code=503,
            content={"status": "not ready", "reason": "session store not initialized"},
        )
    if getattr(app.state, "accounts_config", None) is None:
        return JSONResponse(
            status_code=503,
            content={"status": "not ready", "reason": "demo accounts not loaded"},
        )
    return JSONResponse(
        content={"status": "ok", "sessions": app.state.session_store.count()}
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "portal.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
