"""FastAPI application entry point."""
from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from authcache.core.database import engine, Base, SessionLocal
from authcache.core.exceptions import AuthorizationError
from authcache.core.logging_config import logger
from authcache.api.v1.router import api_router
from authcache.services.cache import get_permissions_cache
from authcache.services.permissions import PermissionsCache

logger.info("Starting Device Access Cache Service")

# Create database tables
try:
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables initialized successfully")
except Exception as e:
    logger.error(f"Failed to initialize database tables: {e}")
    raise

app = FastAPI(
    title="Device Access Cache Service",
    description="In-memory authorization cache for users, devices and device groups",
    version="1.0.0"
)

app.include_router(api_router)
logger.info("API routes registered successfully")


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request: Request, exc: AuthorizationError):
    """Turns a failed authorization gate into an access-denied response."""
    logger.warning(f"Access denied on {request.method} {request.url.path}: {exc.reason.value}")
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"detail": str(exc), "reason": exc.reason.value}
    )


@app.on_event("startup")
async def startup_event():
    """Load the permissions snapshot before serving requests."""
    get_permissions_cache()
    logger.info("Application startup complete")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutting down")


@app.get("/", tags=["Health"])
def read_root():
    """Basic health check endpoint."""
    return {"status": "Device Access Cache Service is Operational", "docs": "/docs"}


@app.get("/health", tags=["Health"], status_code=status.HTTP_200_OK)
def health_check(cache: PermissionsCache = Depends(get_permissions_cache)):
    """Detailed health check endpoint with system status."""
    health_status = {
        "status": "healthy",
        "service": "Device Access Cache Service",
        "version": "1.0.0",
        "checks": {}
    }

    # Database connectivity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        health_status["checks"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful"
        }
    except Exception as e:
        health_status["status"] = "degraded"
        health_status["checks"]["database"] = {
            "status": "unhealthy",
            "message": f"Database connection failed: {str(e)}"
        }
        logger.error(f"Database health check failed: {e}")

    # Cache status check
    cache_status = cache.status()
    health_status["checks"]["cache"] = {
        "status": "healthy" if cache_status.loaded else "warning",
        "message": "Snapshot loaded" if cache_status.loaded else "No successful refresh yet",
        "refreshed_at": cache_status.refreshed_at.isoformat() if cache_status.refreshed_at else None,
        "has_server_policy": cache_status.has_server_policy
    }

    status_code = status.HTTP_200_OK
    if health_status["status"] == "degraded":
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(content=health_status, status_code=status_code)
