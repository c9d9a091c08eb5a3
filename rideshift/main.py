from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import logging
import sys
import structlog

from .config import settings
from .database import AsyncSessionLocal, init_models, dispose_engine
from .errors import RideShiftError
from .services.seed import seed_demo_data
from .utils.redis_client import redis_client
from .routes import health, rides, drivers, governance, users, payments, nft, maps, realtime

# Configure structured logging
logging.basicConfig(
    format="%(message)s",
    stream=sys.stdout,
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
)

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
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info("Starting RideShift API")

    try:
        await init_models()
        if settings.seed_demo_data:
            async with AsyncSessionLocal() as session:
                await seed_demo_data(session)

        await redis_client.connect()
        logger.info("Connected to external services")

        yield

    except Exception as e:
        logger.error(f"Failed to start application: {e}")
        raise
    finally:
        # Shutdown
        logger.info("Shutting down RideShift API")
        try:
            await redis_client.disconnect()
            await dispose_engine()
            logger.info("Disconnected from external services")
        except Exception as e:
            logger.error(f"Error during shutdown: {e}")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Rides, drivers, users and commission governance for a demo rideshare",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "x-farcaster-id", "x-wallet-address"],
)


# Middleware for request logging
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming requests"""
    # Identity headers are asserted by the client, never verified
    caller = request.headers.get("x-farcaster-id", "anonymous")
    correlation_id = request.headers.get("x-correlation-id", "unknown")

    logger.info(
        "Request started",
        method=request.method,
        url=str(request.url),
        caller=caller,
        correlation_id=correlation_id
    )

    response = await call_next(request)

    logger.info(
        "Request completed",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code,
        caller=caller,
        correlation_id=correlation_id
    )

    return response


def _describe_validation_errors(errors) -> str:
    """Flatten pydantic errors into one message"""
    parts = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "request body"
        parts.append(f"{field}: {error.get('msg')}")
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(RideShiftError)
async def rideshift_error_handler(request: Request, exc: RideShiftError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": _describe_validation_errors(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception", url=str(request.url), error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


# Include routers
app.include_router(health.router)
app.include_router(rides.router)
app.include_router(drivers.router)
app.include_router(governance.router)
app.include_router(users.router)
app.include_router(payments.router)
app.include_router(nft.router)
app.include_router(maps.router)
app.include_router(realtime.router)


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "rideshift",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "rides": "/api/rides",
            "drivers": "/api/drivers",
            "governance": "/api/governance",
            "users": "/api/users",
            "health": "/api/health",
            "docs": "/docs",
        }
    }


# Health check for load balancers
@app.get("/health")
async def simple_health():
    """Simple health check for load balancers"""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rideshift.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
        log_level="info"
    )
