"""JSON document persistence for the master-data collections."""

from __future__ import annotations

from .repositories import DocumentCollectionRepository
from .translator import (
    AGREEMENTS,
    ENTITIES,
    ORDER_TYPES,
    ORDERS,
    WASTE_TYPES,
    CollectionCodec,
)

__all__ = [
    "AGREEMENTS",
    "ENTITIES",
    "ORDERS",
    "ORDER_TYPES",
    "WASTE_TYPES",
    "CollectionCodec",
    "DocumentCollectionRepository",
]
