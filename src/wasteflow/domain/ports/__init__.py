"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    AgreementRepository,
    Document,
    DocumentStore,
    EntityRepository,
    OrderRepository,
    OrderTypeRepository,
    Repository,
    WasteTypeRepository,
)
from .unit_of_work import (
    MasterDataRepositories,
    MasterDataUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "AgreementRepository",
    "Document",
    "DocumentStore",
    "EntityRepository",
    "MasterDataRepositories",
    "MasterDataUnitOfWork",
    "OrderRepository",
    "OrderTypeRepository",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
    "WasteTypeRepository",
]
