"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rift_counter.config import settings
from rift_counter.api.routes.analyze import router as analyze_router
from rift_counter.api.routes.champions import router as champions_router
from rift_counter.api.routes.items import router as items_router
from rift_counter.api.routes.sources import router as sources_router
from rift_counter.repositories.knowledge_store import KnowledgeStore
from rift_counter.repositories.source_status import SourceStatusRepository
from rift_counter.services.analysis_cache import AnalysisCache
from rift_counter.services.analysis_service import AnalysisService


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: load knowledge tables and wire services
    if not hasattr(app.state, "knowledge_store"):
        app.state.knowledge_store = KnowledgeStore(settings.knowledge_path)
    if not hasattr(app.state, "source_status"):
        app.state.source_status = SourceStatusRepository(
            source_weights=settings.source_weights,
            patch_version=settings.patch_version,
            patch_date=settings.patch_date,
        )
    if not hasattr(app.state, "analysis_cache"):
        app.state.analysis_cache = (
            AnalysisCache(default_ttl=settings.cache_ttl_seconds) if settings.cache_enabled else None
        )
    if not hasattr(app.state, "analysis_service"):
        app.state.analysis_service = AnalysisService(
            app.state.knowledge_store,
            cache=app.state.analysis_cache,
            cache_ttl=settings.cache_ttl_seconds,
            default_counter_limit=settings.default_counter_limit,
            max_counter_limit=settings.max_counter_limit,
        )
    yield


app = FastAPI(
    title="RiftCounter",
    description="Wild Rift matchup, counter-pick and build recommendations",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "rift-counter"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "RiftCounter API",
        "version": "0.1.0",
        "docs": "/docs",
    }


# Register routers
app.include_router(analyze_router)
app.include_router(champions_router)
app.include_router(items_router)
app.include_router(sources_router)
