"""Game services package.

Re-exports the data store and the game service for convenient imports.
"""
from .repository import DataStore
from .services import GameService

__all__ = ["DataStore", "GameService"]
