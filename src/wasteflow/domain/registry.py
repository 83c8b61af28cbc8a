"""Entity registry: companies, their roles and the default internal collector."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from wasteflow.domain.errors import EntityValidationError, RecordNotFoundError
from wasteflow.domain.model import Entity, EntityRole, utcnow
from wasteflow.domain.resolution import default_internal_collector

if TYPE_CHECKING:
    from datetime import datetime

    from wasteflow.domain.model import EntityDraft, ServicePoint
    from wasteflow.domain.ports import AgreementRepository, EntityRepository

log = getLogger(__name__)

REFERENCED_ENTITY_MESSAGE: Final[str] = (
    "Cannot delete this entity because it is referenced in one or more "
    "Waste Stream Agreements."
)


@dataclass(frozen=True, slots=True)
class DeleteResult:
    success: bool
    reason: str | None = None


class EntityRegistry:
    """Reads and writes entities, keeping the default-collector flag unique.

    Setting the flag on one entity clears it on every other entity within the same
    call, so no reader of the collection ever sees two collectors.
    """

    def __init__(
        self,
        *,
        entities: EntityRepository,
        agreements: AgreementRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._entities = entities
        self._agreements = agreements
        self._clock = clock

    def list_all(self) -> tuple[Entity, ...]:
        return tuple(sorted(self._entities.all(), key=lambda e: e.name.casefold()))

    def list_by_role(self, role: EntityRole) -> tuple[Entity, ...]:
        return tuple(e for e in self.list_all() if e.has_role(role))

    def get_by_id(self, entity_id: str) -> Entity | None:
        return self._entities.get(entity_id)

    def require(self, entity_id: str) -> Entity:
        entity = self._entities.get(entity_id)
        if entity is None:
            raise RecordNotFoundError("Entity", entity_id)
        return entity

    def service_points_of(self, entity_id: str) -> tuple[ServicePoint, ...]:
        entity = self._entities.get(entity_id)
        return entity.service_points if entity is not None else ()

    def default_internal_collector(self) -> Entity | None:
        return default_internal_collector(self._entities.all())

    def create(self, draft: EntityDraft) -> Entity:
        errors = draft.validation_errors()
        if errors:
            raise EntityValidationError(errors)
        entity = Entity.from_draft(draft, created_at=self._clock())
        self._entities.add(entity)
        if entity.is_default_internal_collector:
            self._clear_other_collectors(entity.id)
        log.info("Created entity %s (%s)", entity.id, entity.name)
        return entity

    def update(self, entity_id: str, draft: EntityDraft) -> Entity:
        current = self.require(entity_id)
        errors = draft.validation_errors()
        if errors:
            raise EntityValidationError(errors)
        entity = Entity.from_draft(draft, entity_id=current.id, created_at=current.created_at)
        self._entities.save(entity)
        if entity.is_default_internal_collector:
            self._clear_other_collectors(entity.id)
        log.info("Updated entity %s (%s)", entity.id, entity.name)
        return entity

    def set_default_internal_collector(self, entity_id: str) -> Entity:
        entity = self.require(entity_id)
        entity._set_default_internal_collector(True)  # noqa: SLF001, FBT003
        self._entities.save(entity)
        self._clear_other_collectors(entity.id)
        log.info("Default internal collector is now %s", entity.id)
        return entity

    def references_of(self, entity_id: str) -> tuple[str, ...]:
        """Return the ids of agreements in which the entity takes part."""

        return tuple(a.id for a in self._agreements.all() if a.references(entity_id))

    def delete(self, entity_id: str) -> DeleteResult:
        self.require(entity_id)
        references = self.references_of(entity_id)
        if references:
            log.warning(
                "Refusing to delete entity %s referenced by agreements %s",
                entity_id,
                ", ".join(references),
            )
            return DeleteResult(success=False, reason=REFERENCED_ENTITY_MESSAGE)
        self._entities.remove(entity_id)
        log.info("Deleted entity %s", entity_id)
        return DeleteResult(success=True)

    def _clear_other_collectors(self, keep_id: str) -> None:
        for other in self._entities.all():
            if other.id != keep_id and other.is_default_internal_collector:
                other._set_default_internal_collector(False)  # noqa: SLF001, FBT003
                self._entities.save(other)
