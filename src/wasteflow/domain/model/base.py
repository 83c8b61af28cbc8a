"""Common base for persisted master-data records."""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import ClassVar
from uuid import uuid4


def new_id(prefix: str) -> str:
    """Return a fresh record id such as ``agr-3f2a9c81d4e0``."""

    return f"{prefix}-{uuid4().hex[:12]}"


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(eq=False, kw_only=True)
class Record(ABC):
    """A record stored in one of the keyed document collections.

    Records compare by identity; use ``id`` to correlate copies loaded from
    different units of work.
    """

    ID_PREFIX: ClassVar[str]

    id: str
