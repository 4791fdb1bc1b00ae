from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.database import session_manager
from app.core.errors import CampusError

from app.api.v1.endpoints.auth import router as auth_router
from app.api.v1.endpoints.reports import router as reports_router
from app.api.v1.endpoints.notifications import router as notifications_router

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
import logging
from contextlib import asynccontextmanager
from app.core.config import settings
from app.core.limiter import limiter
from app.services.CampusStore import CampusStore, build_key_value_store

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Async context manager for app lifespan events"""

    uses_database = settings.STORAGE_BACKEND.lower() == "database"
    try:
        logger.info("🚀 Starting Campus Report application...")

        if uses_database:
            logger.info("🔌 Initializing database connection pool...")
            await session_manager.init()
            logger.info("✅ Database connection pool ready")

        kv = build_key_value_store(settings, session_manager)
        app.state.campus_store = await CampusStore(kv, settings).init()
        logger.info("✅ Campus state loaded")

    except Exception as e:
        logger.critical(f"🔥 Application startup failed: {str(e)}")
        raise

    try:
        logger.info("🏁 Campus Report application startup complete")
        yield
    finally:
        try:
            logger.info("🛑 Beginning application shutdown...")
            if uses_database:
                logger.info("🔌 Closing database connections...")
                await session_manager.close()
                logger.info("✅ Database connections closed cleanly")
        except Exception as e:
            logger.error(f"⚠️ Error during shutdown: {str(e)}")
            raise
        finally:
            logger.info("👋 Application shutdown complete")


app = FastAPI(
    title="Campus Report API",
    description="API for reporting and triaging campus facility issues",
    version="1.0.0",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"Request: {request.method} {request.url}")
    response = await call_next(request)
    logger.info(f"Response status: {response.status_code}")
    return response


# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Validation Error: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors()},
    )

@app.exception_handler(CampusError)
async def campus_exception_handler(request: Request, exc: CampusError):
    logger.info(f"{type(exc).__name__}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
    )

@app.get("/", tags=["Health Check"])
async def health_check(request: Request):
    store = getattr(request.app.state, "campus_store", None)
    health = {
        "status": "healthy" if store is not None else "starting",
        "service": "Campus Report API",
        "storage": settings.STORAGE_BACKEND,
    }
    if store is not None:
        health["reports"] = len(store.state.reports)
    if settings.STORAGE_BACKEND.lower() == "database":
        try:
            await session_manager.ping()
            health["database"] = "connected"
        except Exception as e:
            logger.error(f"Health check failed: {str(e)}")
            health["status"] = "unhealthy"
            health["database"] = "disconnected"
            health["error"] = str(e)
    return health


app.include_router(auth_router, prefix="/api/v1", tags=["Authentication"])
app.include_router(reports_router, prefix="/api/v1", tags=["Reports"])
app.include_router(notifications_router, prefix="/api/v1", tags=["Notifications"])

logger.info(f"✅ Loaded {len(app.routes)} routes")
