"""Transfer-section draft with per-field provenance."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

from wasteflow.domain.model.provenance import TrackedValue


class TransferField(StrEnum):
    DISPOSER = "disposer"
    SENDER = "sender"
    RECEIVER = "receiver"
    TRANSPORTER = "transporter"


@dataclass(frozen=True, slots=True, kw_only=True)
class TransferDraft:
    """Parties named on the Begeleidingsbrief while an order is being prepared.

    ``transporter`` is the agreement transporter; an outsourced carrier is tracked
    separately and is always a manual choice.
    """

    disposer: TrackedValue = TrackedValue()
    sender: TrackedValue = TrackedValue()
    receiver: TrackedValue = TrackedValue()
    transporter: TrackedValue = TrackedValue()
    use_outsourced_carrier: bool = False
    outsourced_carrier_id: str | None = None

    def tracked(self, name: TransferField) -> TrackedValue:
        return getattr(self, name.value)

    def value(self, name: TransferField) -> str | None:
        return self.tracked(name).value

    def with_manual(self, name: TransferField, value: str | None) -> TransferDraft:
        return replace(self, **{name.value: TrackedValue.manual(value)})

    def propose(self, name: TransferField, value: str | None) -> TransferDraft:
        """Fill ``name`` with a resolved value unless the user set it by hand."""

        return replace(self, **{name.value: self.tracked(name).propose(value)})

    def force(self, name: TransferField, value: str | None) -> TransferDraft:
        """Set a value the reporting mode dictates, discarding any manual edit."""

        return replace(self, **{name.value: TrackedValue.auto(value)})

    def release(self, name: TransferField) -> TransferDraft:
        """Hand ``name`` back to the resolver."""

        return replace(self, **{name.value: TrackedValue.auto(None)})

    def with_outsourced_carrier(self, carrier_id: str | None) -> TransferDraft:
        return replace(
            self,
            use_outsourced_carrier=carrier_id is not None,
            outsourced_carrier_id=carrier_id,
        )
