"""
Agent ingestion backend — FastAPI application entry-point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.config import settings
from app.database import Base, engine

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s  %(name)-30s  %(levelname)-5s  %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Import models so Base.metadata knows about them
    from app import models  # noqa: F401
    if engine is None:
        logger.warning("Starting without a database; uploads will return 500")
    elif settings.CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ready (%s)", engine.url.render_as_string(hide_password=True))
    yield
    logger.info("Shutting down")


app = FastAPI(
    title="Agent Ingest",
    description="Accounting agent uploads → normalized vouchers → sales summary",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "agent ingest is running"


@app.get("/health")
async def health_check():
    return {"status": "healthy", "database": "configured" if engine is not None else "missing"}


# ── Register API routers ─────────────────────────────────────────────────
from app.routers.upload import router as upload_router  # noqa: E402
from app.routers.summary import router as summary_router  # noqa: E402

app.include_router(upload_router, prefix="/api", tags=["Agent Upload"])
app.include_router(summary_router, prefix="/api", tags=["Reporting"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)
