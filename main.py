import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from skillmatch import __version__
from skillmatch.config import settings
from skillmatch.database import close_db, get_engine, init_db
from skillmatch.health import check_database
from skillmatch.routers import matching, personnel, projects, skills

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables on the configured database
    logger.info(f"Starting {settings.app_name}")
    await init_db()
    logger.info("Database tables created successfully")
    yield
    # Shutdown: Close connections
    logger.info(f"Shutting down {settings.app_name}")
    await close_db()
    logger.info("Database connections closed")

app = FastAPI(
    title=settings.app_name,
    description="Skills and resource management with skill-coverage matching",
    version=__version__,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_cors_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(skills.router)
app.include_router(personnel.router)
app.include_router(projects.router)
app.include_router(matching.router)


@app.get("/")
async def root():
    return {"message": f"{settings.app_name} - Ready"}


@app.get("/health")
async def health_check():
    """Liveness probe."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/health/db")
async def db_health_check(engine: AsyncEngine = Depends(get_engine)):
    """Check database connectivity.

    Returns 503 when the database cannot be reached.
    """
    health = await check_database(engine)
    body = {
        "status": "ok" if health.status == "connected" else "unavailable",
        "database": {
            "connected": health.status == "connected",
            "dialect": health.dialect,
            "latency_ms": health.latency_ms,
            "time": health.server_time.isoformat() if health.server_time else None,
        },
    }
    if health.status != "connected":
        logger.error(f"Database health check failed: {health.error}")
        body["database"]["error"] = health.error
        return JSONResponse(status_code=503, content=body)
    return body
