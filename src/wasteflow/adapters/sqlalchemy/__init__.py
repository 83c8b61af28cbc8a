"""SQLAlchemy adapter package for wasteflow."""

from __future__ import annotations

from .document_store import SqlAlchemyDocumentStore
from .mappings import document_table, mapper_registry
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyDocumentStore",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "configured_engine",
    "document_table",
    "is_started",
    "mapper_registry",
    "shutdown",
    "startup",
]
