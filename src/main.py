import logging
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from src.config.logging import setup_logging
from src.config.settings import settings
from src.guests.errors import HANDLED_EXCEPTIONS, describe_error
from src.guests.routers import router as guests_router
from src.guests.schemas import MessageResponse
from src.routers.healthz.router import router as healthz_router
from src.tasks import get_background_queue

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    yield
    # Let queued admin notifications finish before shutting down
    await get_background_queue().drain()


if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        profiles_sample_rate=settings.SENTRY_PROFILES_SAMPLE_RATE,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )

app = FastAPI(
    title="Wedding RSVP API",
    description="API for guest name verification, RSVPs and the avatar plaza",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=MessageResponse(success=False, message=message).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get a fixed 400 instead of FastAPI's 422 detail."""
    if any("email" in error.get("loc", ()) for error in exc.errors()):
        return _error_response(400, "Invalid email address")
    return _error_response(400, "Invalid request format")


async def domain_error_handler(request: Request, exc: Exception):
    status_code, message = describe_error(exc)
    if status_code >= 500:
        logger.error("Error while processing %s %s: %s", request.method, request.url.path, exc)
    return _error_response(status_code, message)


for exception_class in HANDLED_EXCEPTIONS:
    app.add_exception_handler(exception_class, domain_error_handler)

# Include routers
app.include_router(healthz_router, tags=["Healthz"])
app.include_router(guests_router, tags=["Guests"])


@app.get("/", tags=["Root"])
async def root():
    return {"message": "Welcome to the Wedding RSVP API"}
