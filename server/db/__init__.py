"""Database module: MongoDB connection, indexes and the local geodata repository."""

from .connection import get_db, get_client, close_client, DB_NAME
from .indexes import create_indexes
from .map_repository import MapRepository

__all__ = [
    "get_db",
    "get_client",
    "close_client",
    "DB_NAME",
    "create_indexes",
    "MapRepository",
]
