from __future__ import annotations

import pytest

from tests.helpers.builders import make_agreement, make_stream
from wasteflow.domain.errors import DuplicateWasteTypeError, WasteStreamError
from wasteflow.domain.model import (
    DEFAULT_REQUIRED_MESSAGE,
    DUPLICATE_WASTE_TYPE_MESSAGE,
    LAST_DESTINATION_MESSAGE,
    Destination,
    ProcessingMethod,
    WasteStream,
)


def _destination(destination_id: str, receiver_id: str) -> Destination:
    return Destination(
        id=destination_id,
        receiver_id=receiver_id,
        processing_method=ProcessingMethod.ENERGY_RECOVERY,
    )


def test_single_destination_becomes_default() -> None:
    stream = WasteStream.create("rest", [_destination("d1", "avr")])

    assert stream.default_destination_id == "d1"
    assert stream.default_destination.receiver_id == "avr"


def test_several_destinations_need_an_explicit_default() -> None:
    with pytest.raises(WasteStreamError, match=DEFAULT_REQUIRED_MESSAGE):
        WasteStream.create("rest", [_destination("d1", "avr"), _destination("d2", "attero")])


def test_default_must_belong_to_the_stream() -> None:
    with pytest.raises(WasteStreamError):
        WasteStream.create(
            "rest",
            [_destination("d1", "avr"), _destination("d2", "attero")],
            default_destination_id="elsewhere",
        )


def test_stream_needs_at_least_one_destination() -> None:
    with pytest.raises(WasteStreamError):
        WasteStream.create("rest", [])


def test_removing_last_destination_is_rejected() -> None:
    stream = WasteStream.create("rest", [_destination("d1", "avr")])

    with pytest.raises(WasteStreamError, match="Cannot remove the last receiver"):
        stream.remove_destination("d1")

    assert LAST_DESTINATION_MESSAGE.startswith("Cannot remove the last receiver")
    assert [d.id for d in stream.destinations] == ["d1"]


def test_removing_default_promotes_first_remaining() -> None:
    stream = WasteStream.create(
        "rest",
        [_destination("d1", "avr"), _destination("d2", "attero"), _destination("d3", "suez")],
        default_destination_id="d2",
    )

    stream.remove_destination("d2")

    assert stream.default_destination_id == "d1"


def test_add_and_set_default_destination() -> None:
    stream = WasteStream.create("rest", [_destination("d1", "avr")])

    stream.add_destination(_destination("d2", "attero"))
    assert stream.default_destination_id == "d1"

    stream.set_default("d2")
    assert stream.default_destination.receiver_id == "attero"
    assert stream.receiver_ids == ("avr", "attero")

    with pytest.raises(WasteStreamError):
        stream.add_destination(_destination("d2", "suez"))


def test_receiver_ids_are_distinct_in_destination_order() -> None:
    stream = WasteStream.create(
        "rest",
        [_destination("d1", "avr"), _destination("d2", "attero"), _destination("d3", "avr")],
        default_destination_id="d1",
    )

    assert stream.receiver_ids == ("avr", "attero")
    assert stream.destination_for_receiver("avr") is not None
    assert stream.destination_for_receiver("indaver") is None


def test_agreement_rejects_duplicate_waste_type() -> None:
    agreement = make_agreement("agr-1", make_stream("gft", "indaver"))

    with pytest.raises(DuplicateWasteTypeError, match=DUPLICATE_WASTE_TYPE_MESSAGE):
        agreement.add_waste_stream(make_stream("gft", "attero"))

    with pytest.raises(DuplicateWasteTypeError):
        make_agreement("agr-2", make_stream("gft", "indaver"), make_stream("gft", "attero"))


def test_replace_waste_streams_keeps_previous_streams_on_error() -> None:
    agreement = make_agreement("agr-1", make_stream("gft", "indaver"))

    with pytest.raises(DuplicateWasteTypeError):
        agreement.replace_waste_streams(
            [make_stream("pmd", "avr"), make_stream("pmd", "renewi")]
        )

    assert agreement.waste_type_ids == ("gft",)


def test_remove_waste_stream() -> None:
    agreement = make_agreement("agr-1", make_stream("gft", "indaver"), make_stream("pmd", "avr"))

    agreement.remove_waste_stream("gft")

    assert agreement.waste_type_ids == ("pmd",)
    with pytest.raises(WasteStreamError):
        agreement.remove_waste_stream("gft")


def test_agreement_references_every_party() -> None:
    agreement = make_agreement(
        "agr-1",
        make_stream("gft", "indaver", "attero"),
        disposer_id="customer",
        sender_id="sender",
        transporter_id="carrier",
    )

    for entity_id in ("customer", "sender", "carrier", "indaver", "attero"):
        assert agreement.references(entity_id)
    assert not agreement.references("avr")
