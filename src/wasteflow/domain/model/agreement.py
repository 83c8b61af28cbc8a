"""Waste-stream agreements.

Aggregate root here:
- Agreement owns its WasteStreams, each WasteStream owns its Destinations

A stream always has at least one destination and exactly one default destination;
both are checked on every mutation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Final

from wasteflow.domain.errors import DuplicateWasteTypeError, WasteStreamError
from wasteflow.domain.model.base import Record, new_id, utcnow
from wasteflow.domain.model.enums import AgreementStatus

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import date, datetime

    from wasteflow.domain.model.enums import ProcessingMethod, ReportingSystem

DUPLICATE_WASTE_TYPE_MESSAGE: Final[str] = "This Waste Type already exists in this agreement."
LAST_DESTINATION_MESSAGE: Final[str] = (
    "Cannot remove the last receiver. "
    "A waste stream must have at least one receiver destination."
)
DEFAULT_REQUIRED_MESSAGE: Final[str] = (
    "Select a default receiver when a waste stream has more than one receiver."
)


@dataclass(frozen=True, slots=True, kw_only=True)
class Destination:
    """One receiver a waste stream may be delivered to."""

    id: str = field(default_factory=lambda: new_id("dest"))
    receiver_id: str
    processing_method: ProcessingMethod
    asn: str | None = None


@dataclass(eq=False, kw_only=True)
class WasteStream:
    waste_type_id: str

    _destinations: list[Destination] = field(default_factory=list["Destination"], repr=False)
    _default_destination_id: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        if not self._destinations:
            raise WasteStreamError(
                f"Waste stream {self.waste_type_id} needs at least one destination"
            )
        ids = [d.id for d in self._destinations]
        if len(ids) != len(set(ids)):
            raise WasteStreamError(f"Duplicate destination id in stream {self.waste_type_id}")
        if not self._default_destination_id and len(self._destinations) == 1:
            self._default_destination_id = self._destinations[0].id
        if not self._default_destination_id:
            raise WasteStreamError(DEFAULT_REQUIRED_MESSAGE)
        if self._default_destination_id not in ids:
            raise WasteStreamError(
                f"Default destination {self._default_destination_id} is not part of "
                f"stream {self.waste_type_id}"
            )

    @classmethod
    def create(
        cls,
        waste_type_id: str,
        destinations: Sequence[Destination],
        *,
        default_destination_id: str | None = None,
    ) -> WasteStream:
        return cls(
            waste_type_id=waste_type_id,
            _destinations=list(destinations),
            _default_destination_id=default_destination_id or "",
        )

    @property
    def destinations(self) -> tuple[Destination, ...]:
        return tuple(self._destinations)

    @property
    def default_destination_id(self) -> str:
        return self._default_destination_id

    @property
    def default_destination(self) -> Destination:
        return self.destination(self._default_destination_id)

    @property
    def receiver_ids(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(d.receiver_id for d in self._destinations))

    def destination(self, destination_id: str) -> Destination:
        for destination in self._destinations:
            if destination.id == destination_id:
                return destination
        raise WasteStreamError(
            f"Destination {destination_id} is not part of stream {self.waste_type_id}"
        )

    def destination_for_receiver(self, receiver_id: str) -> Destination | None:
        for destination in self._destinations:
            if destination.receiver_id == receiver_id:
                return destination
        return None

    def add_destination(self, destination: Destination, *, make_default: bool = False) -> None:
        if any(d.id == destination.id for d in self._destinations):
            raise WasteStreamError(f"Duplicate destination id {destination.id}")
        self._destinations.append(destination)
        if make_default:
            self._default_destination_id = destination.id

    def remove_destination(self, destination_id: str) -> None:
        target = self.destination(destination_id)
        if len(self._destinations) == 1:
            raise WasteStreamError(LAST_DESTINATION_MESSAGE)
        self._destinations.remove(target)
        if self._default_destination_id == destination_id:
            self._default_destination_id = self._destinations[0].id

    def set_default(self, destination_id: str) -> None:
        self.destination(destination_id)
        self._default_destination_id = destination_id


@dataclass(eq=False, kw_only=True)
class Agreement(Record):
    ID_PREFIX: ClassVar[str] = "agr"

    disposer_id: str
    reporting_system: ReportingSystem
    valid_from: date
    sender_id: str
    transporter_id: str
    service_point_id: str | None = None
    valid_until: date | None = None
    status: AgreementStatus = AgreementStatus.ACTIVE
    created_at: datetime = field(default_factory=utcnow)

    _waste_streams: list[WasteStream] = field(default_factory=list["WasteStream"], repr=False)

    def __post_init__(self) -> None:
        streams, self._waste_streams = self._waste_streams, []
        for stream in streams:
            self.add_waste_stream(stream)

    @property
    def waste_streams(self) -> tuple[WasteStream, ...]:
        return tuple(self._waste_streams)

    @property
    def waste_type_ids(self) -> tuple[str, ...]:
        return tuple(s.waste_type_id for s in self._waste_streams)

    @property
    def is_active(self) -> bool:
        return self.status == AgreementStatus.ACTIVE

    def stream_for(self, waste_type_id: str) -> WasteStream | None:
        for stream in self._waste_streams:
            if stream.waste_type_id == waste_type_id:
                return stream
        return None

    def add_waste_stream(self, stream: WasteStream) -> None:
        if self.stream_for(stream.waste_type_id) is not None:
            raise DuplicateWasteTypeError(DUPLICATE_WASTE_TYPE_MESSAGE)
        self._waste_streams.append(stream)

    def remove_waste_stream(self, waste_type_id: str) -> None:
        stream = self.stream_for(waste_type_id)
        if stream is None:
            raise WasteStreamError(f"Agreement {self.id} has no stream for {waste_type_id}")
        self._waste_streams.remove(stream)

    def replace_waste_streams(self, streams: Iterable[WasteStream]) -> None:
        previous, self._waste_streams = self._waste_streams, []
        try:
            for stream in streams:
                self.add_waste_stream(stream)
        except WasteStreamError:
            self._waste_streams = previous
            raise

    def references(self, entity_id: str) -> bool:
        """Return whether the entity is a party to this agreement in any capacity."""

        if entity_id in (self.disposer_id, self.sender_id, self.transporter_id):
            return True
        return any(
            d.receiver_id == entity_id for s in self._waste_streams for d in s.destinations
        )
