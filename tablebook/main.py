"""
TableBook - FastAPI Application
"""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tablebook.api import availability, blocks, reservations, restaurants, waitlist
from tablebook.config import settings
from tablebook.container import ServiceContainer
from tablebook.core.errors import ReservationError, reservation_error_handler
from tablebook.seed import seed_demo_data

VERSION = "1.0.0"

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer()
        if settings.log_format == "console"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting TableBook API", version=VERSION)

    # Tests install their own container before startup
    if getattr(app.state, "container", None) is None:
        app.state.container = ServiceContainer(settings)
    if settings.seed_demo_data:
        seed_demo_data(app.state.container)

    yield
    logger.info("Shutting down TableBook API")


# Create FastAPI application
app = FastAPI(
    title="TableBook",
    description="Table availability, allocation and booking for restaurants",
    version=VERSION,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ReservationError, reservation_error_handler)


@app.get("/health")
async def health():
    """Basic health check"""
    return {"status": "healthy", "service": "api", "version": VERSION}


@app.get("/health/ready")
async def ready():
    """Readiness check with dependency verification"""
    checks = {}

    # Check Redis
    try:
        from tablebook.jobs.celery_app import celery_app
        celery_app.control.ping(timeout=1)
        checks["redis"] = "ok"
    except Exception as e:
        checks["redis"] = f"failed: {str(e)}"

    all_ok = all(v == "ok" for v in checks.values())

    return {
        "status": "ready" if all_ok else "not_ready",
        "checks": checks,
    }


# Include API routers
app.include_router(restaurants.router, prefix="/restaurants", tags=["Restaurants"])
app.include_router(availability.router, prefix="/restaurants/{restaurant_id}/availability", tags=["Availability"])
app.include_router(reservations.router, prefix="/restaurants/{restaurant_id}/reservations", tags=["Reservations"])
app.include_router(blocks.router, prefix="/restaurants/{restaurant_id}/blocks", tags=["Blocks"])
app.include_router(waitlist.router, prefix="/restaurants/{restaurant_id}/waitlist", tags=["Waitlist"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tablebook.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
