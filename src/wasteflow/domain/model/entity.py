"""Companies ("entities") and their role-specific regulatory configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from wasteflow.domain.model.base import Record, new_id, utcnow
from wasteflow.domain.model.enums import (
    EntityRole,
    EntityType,
    FacilityType,
    FleetSource,
    SenderLegalRole,
    TransporterCapability,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

DEFAULT_COUNTRY = "Netherlands"

# Sender legal roles that make a VIHB registration mandatory.
VIHB_SENDER_ROLES = frozenset({SenderLegalRole.HANDELAAR, SenderLegalRole.BEMIDDELAAR})


@dataclass(frozen=True, slots=True, kw_only=True)
class Address:
    street: str = ""
    house_number: str = ""
    postal_code: str = ""
    city: str = ""
    country: str = DEFAULT_COUNTRY


@dataclass(frozen=True, slots=True, kw_only=True)
class ServicePoint:
    """A physical pickup location owned by one entity."""

    id: str = field(default_factory=lambda: new_id("sp"))
    name: str
    address: Address = field(default_factory=Address)

    @property
    def is_complete(self) -> bool:
        return bool(self.name.strip()) and bool(self.address.city.strip())


@dataclass(frozen=True, slots=True, kw_only=True)
class SenderConfig:
    legal_roles: frozenset[SenderLegalRole] = frozenset()


@dataclass(frozen=True, slots=True, kw_only=True)
class TransporterConfig:
    fleet_source: FleetSource = FleetSource.INTERNAL
    legal_capabilities: frozenset[TransporterCapability] = frozenset()
    international_transport: bool = False
    eurovergunning: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ReceiverConfig:
    lma_reporting_obligated: bool = True
    processor_number: str | None = None
    allowed_waste_type_ids: tuple[str, ...] = ()
    facility_type: FacilityType | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class EntityDraft:
    """Editable entity data as submitted by a caller, before normalisation."""

    name: str
    entity_type: EntityType = EntityType.CUSTOMER
    roles: frozenset[EntityRole] = frozenset()
    address: Address = field(default_factory=Address)
    kvk_number: str = ""
    vihb_number: str | None = None
    is_tenant: bool = False
    is_default_internal_collector: bool = False
    sender_config: SenderConfig | None = None
    transporter_config: TransporterConfig | None = None
    receiver_config: ReceiverConfig | None = None
    service_points: tuple[ServicePoint, ...] = ()

    def requires_vihb(self) -> bool:
        return _requires_vihb(self.roles, self.sender_config)

    def validation_errors(self) -> dict[str, str]:
        """Return every form-level problem with this draft, keyed by field."""

        errors: dict[str, str] = {}
        if not self.name.strip():
            errors["name"] = "Name is required"
        if not self.kvk_number.strip():
            errors["kvk_number"] = "KVK Number is required"
        if not self.roles:
            errors["roles"] = "At least one role must be selected"
        if self.requires_vihb() and not (self.vihb_number or "").strip():
            errors["vihb_number"] = (
                "VIHB Number is required when Transporter role is enabled, "
                "or Sender has Handelaar/Bemiddelaar legal role"
            )
        if EntityRole.SENDER in self.roles and (
            self.sender_config is None or not self.sender_config.legal_roles
        ):
            errors["sender_legal_roles"] = "At least one legal role must be selected"
        transporter = self.transporter_config
        if (
            EntityRole.TRANSPORTER in self.roles
            and transporter is not None
            and transporter.international_transport
            and not (transporter.eurovergunning or "").strip()
        ):
            errors["eurovergunning"] = (
                "Eurovergunning number is required for international transport"
            )
        return errors

    def normalized(self) -> EntityDraft:
        """Drop configuration that does not apply to the selected roles."""

        roles = self.roles
        vihb = (self.vihb_number or "").strip() if self.requires_vihb() else ""
        transporter = self.transporter_config if EntityRole.TRANSPORTER in roles else None
        if transporter is not None and not transporter.international_transport:
            transporter = TransporterConfig(
                fleet_source=transporter.fleet_source,
                legal_capabilities=transporter.legal_capabilities,
                international_transport=False,
            )
        return EntityDraft(
            name=self.name.strip(),
            entity_type=self.entity_type,
            roles=roles,
            address=self.address,
            kvk_number=self.kvk_number.strip(),
            vihb_number=vihb or None,
            is_tenant=self.is_tenant,
            is_default_internal_collector=(
                self.is_default_internal_collector and EntityRole.TRANSPORTER in roles
            ),
            sender_config=self.sender_config if EntityRole.SENDER in roles else None,
            transporter_config=transporter,
            receiver_config=self.receiver_config if EntityRole.RECEIVER in roles else None,
            service_points=tuple(sp for sp in self.service_points if sp.is_complete),
        )


def _requires_vihb(roles: frozenset[EntityRole], sender_config: SenderConfig | None) -> bool:
    if EntityRole.TRANSPORTER in roles:
        return True
    if EntityRole.SENDER in roles and sender_config is not None:
        return bool(sender_config.legal_roles & VIHB_SENDER_ROLES)
    return False


@dataclass(eq=False, kw_only=True)
class Entity(Record):
    ID_PREFIX: ClassVar[str] = "ent"

    name: str
    entity_type: EntityType = EntityType.CUSTOMER
    roles: frozenset[EntityRole] = frozenset()
    address: Address = field(default_factory=Address)
    kvk_number: str = ""
    vihb_number: str | None = None
    is_tenant: bool = False
    sender_config: SenderConfig | None = None
    transporter_config: TransporterConfig | None = None
    receiver_config: ReceiverConfig | None = None
    created_at: datetime = field(default_factory=utcnow)

    _is_default_internal_collector: bool = field(default=False, repr=False)
    _service_points: list[ServicePoint] = field(
        default_factory=list["ServicePoint"], repr=False
    )

    def __post_init__(self) -> None:
        if self._is_default_internal_collector and not self.has_role(EntityRole.TRANSPORTER):
            raise ValueError("Only a Transporter can be the default internal collector")
        ids = [sp.id for sp in self._service_points]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate service point id on entity {self.id}")

    @classmethod
    def from_draft(
        cls,
        draft: EntityDraft,
        *,
        entity_id: str | None = None,
        created_at: datetime | None = None,
    ) -> Entity:
        draft = draft.normalized()
        return cls(
            id=entity_id or new_id(cls.ID_PREFIX),
            name=draft.name,
            entity_type=draft.entity_type,
            roles=draft.roles,
            address=draft.address,
            kvk_number=draft.kvk_number,
            vihb_number=draft.vihb_number,
            is_tenant=draft.is_tenant,
            sender_config=draft.sender_config,
            transporter_config=draft.transporter_config,
            receiver_config=draft.receiver_config,
            created_at=created_at or utcnow(),
            _is_default_internal_collector=draft.is_default_internal_collector,
            _service_points=list(draft.service_points),
        )

    def to_draft(self) -> EntityDraft:
        return EntityDraft(
            name=self.name,
            entity_type=self.entity_type,
            roles=self.roles,
            address=self.address,
            kvk_number=self.kvk_number,
            vihb_number=self.vihb_number,
            is_tenant=self.is_tenant,
            is_default_internal_collector=self.is_default_internal_collector,
            sender_config=self.sender_config,
            transporter_config=self.transporter_config,
            receiver_config=self.receiver_config,
            service_points=self.service_points,
        )

    @property
    def is_default_internal_collector(self) -> bool:
        return self._is_default_internal_collector

    @property
    def service_points(self) -> tuple[ServicePoint, ...]:
        return tuple(self._service_points)

    def has_role(self, role: EntityRole) -> bool:
        return role in self.roles

    def requires_vihb(self) -> bool:
        return _requires_vihb(self.roles, self.sender_config)

    def owns_service_point(self, service_point_id: str) -> bool:
        return any(sp.id == service_point_id for sp in self._service_points)

    def replace_service_points(self, service_points: Iterable[ServicePoint]) -> None:
        kept = [sp for sp in service_points if sp.is_complete]
        ids = [sp.id for sp in kept]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate service point id on entity {self.id}")
        self._service_points = kept

    # Registry-only primitive; exclusivity across entities is enforced by the caller.
    def _set_default_internal_collector(self, flag: bool) -> None:  # noqa: FBT001
        if flag and not self.has_role(EntityRole.TRANSPORTER):
            raise ValueError("Only a Transporter can be the default internal collector")
        self._is_default_internal_collector = flag
