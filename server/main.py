"""Main application entry point for the Placefinder API."""

import logging
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from fastapi import FastAPI

# Load environment variables first
load_dotenv()

# Import routers, config and db
from api.schemas import RootResponse
from modules.config import ConfigEnv
from routers.map import router as map_router
from db.connection import get_db, close_client
from db.map_repository import MapRepository
from services.geocoding import HybridReverseGeocodeService, NominatimService
from services.map_service import MapService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI app.
    Handles startup and shutdown events.
    """
    logger.info("Starting up Placefinder API...")
    ConfigEnv.validate()

    # MongoDB: connect and attach db to app state for routes
    db = get_db()
    app.state.db = db
    map_repository = MapRepository(db)
    if ConfigEnv.CREATE_INDEXES_ON_STARTUP:
        try:
            await map_repository.ensure_indexes()
        except Exception as e:
            logger.warning(f"Could not ensure geodata indexes: {e}")
    logger.info("✓ MongoDB connected")

    nominatim_service = NominatimService()
    if nominatim_service.is_configured:
        logger.info(f"✓ Nominatim configured at {nominatim_service.build_url()}")

    app.state.map_service = MapService(
        HybridReverseGeocodeService(map_repository, nominatim_service)
    )
    logger.info("✓ Startup complete")

    yield  # Application runs here

    logger.info("Shutting down Placefinder API...")
    close_client()
    logger.info("✓ Shutdown complete")


# Initialize FastAPI app with lifespan
app = FastAPI(
    title="Placefinder API",
    description="Reverse geocoding: coordinates → country, state, city",
    version="1.0.0",
    lifespan=lifespan,
)


# Include routers
app.include_router(map_router)


@app.get("/", response_model=RootResponse)
async def root():
    """Root endpoint for API health check."""
    map_service = getattr(app.state, "map_service", None)
    return RootResponse(
        name="Placefinder API",
        status="running",
        version="1.0.0",
        description="Reverse geocoding via Nominatim with a local geodata fallback",
        nominatim_configured=bool(map_service and map_service.nominatim_configured),
        endpoints={
            "reverse_geocode": "GET /api/map/reverse-geocode?lat={lat}&lon={lon}",
            "docs": "/docs",
        },
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="localhost", port=8000)
