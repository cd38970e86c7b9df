# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api.v1.api import api_router
from app.core.config import settings
from app.core.error_handlers import booking_error_handler, validation_error_handler
from app.core.errors import BookingEngineError
from app.core.limiter import limiter

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Slot booking service starting up (ENV={settings.ENV})")
    yield
    logger.info("Slot booking service shutting down")


app = FastAPI(
    title="Slot Booking Service",
    version="1.0.0",
    description="""
        Multi-tenant appointment availability and booking admission.

        ## Features

        * **Availability**: Weekly templates, per-date overrides and manual sessions
        * **Booking**: Capacity-safe admission with notice periods and invitee tokens
        * **Self-service**: Cancel and reschedule via a private management link

        ## Authentication

        Endpoints under `/admin/` require a JWT via the `Authorization: Bearer <token>`
        header; the token's `tenantId` must match the tenant in the path.
        """,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(BookingEngineError, booking_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"status": "Slot Booking Service is running"}
