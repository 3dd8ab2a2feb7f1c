"""Dependency injection for FastAPI routes."""

from fastapi import Request, HTTPException
from services.map_service import MapService


def get_map_service(request: Request) -> MapService:
    """
    Dependency to inject the map service into routes.
    
    Args:
        request: FastAPI request object containing app state.
        
    Returns:
        MapService instance from app state.
        
    Raises:
        HTTPException: If the map service is not initialized in app state.
    """
    map_service = getattr(request.app.state, "map_service", None)
    if map_service is None:
        raise HTTPException(
            status_code=500,
            detail="Map service not initialized. Server may be starting up."
        )
    return map_service
