import logging

from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy import text

from vocassion.db.base import get_db
from vocassion.core.config import settings
from vocassion.core.logging import configure_logging
from vocassion.schemas.common import ErrorResponse
from vocassion.routers import profile as profile_router
from vocassion.routers import gamification as gamification_router
from vocassion.routers import challenges as challenges_router
from vocassion.routers import goals as goals_router
from vocassion.routers import ikigai as ikigai_router
from vocassion.routers import reflection as reflection_router
from vocassion.routers import community as community_router
from vocassion.routers import chat as chat_router
from vocassion.routers import dashboard as dashboard_router
from vocassion.core.errors import (
    VocassionException,
    vocassion_exception_handler,
    validation_exception_handler,
    integrity_error_handler,
    no_result_handler,
    unhandled_exception_handler,
)

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Vocassion API",
    description=(
        "**Gamified Ikigai discovery**\n\n"
        "Ikigai assessment, goals unlocked with points, daily challenges, streaks, "
        "achievements, reflections and a community feed.\n\n"
        "Identity comes from the auth proxy headers (`X-Auth-Request-User`). "
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    responses={
        401: {"model": ErrorResponse, "description": "Missing auth proxy identity."},
        500: {"model": ErrorResponse, "description": "Unexpected server error."},
    },
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(VocassionException, vocassion_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(IntegrityError, integrity_error_handler)
app.add_exception_handler(NoResultFound, no_result_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(profile_router.router)
app.include_router(gamification_router.router)
app.include_router(gamification_router.achievements_router)
app.include_router(challenges_router.router)
app.include_router(goals_router.router)
app.include_router(ikigai_router.router)
app.include_router(reflection_router.router)
app.include_router(community_router.router)
app.include_router(chat_router.router)
app.include_router(dashboard_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health(db: Session = Depends(get_db)):
    """
    Returns `{"status": "ok", "db": "ok"}` when both the API and the database
    are reachable. Returns HTTP 503 if the DB is down.
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("health check: database unreachable: %s", exc)
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": "unreachable"},
        )
    return {"status": "ok", "db": "ok", "env": settings.APP_ENV}
