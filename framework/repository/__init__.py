"""
Repository pattern: data access abstraction, decouples service layer from database session.
"""

from .base import BaseRepository, IRepository
from .unit_of_work import UnitOfWork
from .update_builder import UpdateCommand, UpdateField, build_update

__all__ = [
    "BaseRepository",
    "IRepository",
    "UnitOfWork",
    "UpdateCommand",
    "UpdateField",
    "build_update",
]
