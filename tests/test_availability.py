"""Tests for the availability engine"""

from uuid import uuid4

import pytest

from tablebook.core.errors import InvalidTimeFormat, NoAvailability, NotFound
from tablebook.core.timeslots import to_minutes
from tablebook.models import ReservationStatus, TableStatus
from tablebook.schemas.block import BlockCreate
from tablebook.schemas.waitlist import WaitlistCreate

from tests.conftest import MONDAY, booking_request


def test_single_table_evening(container, cafe, cafe_table):
    """One four-top: 19:00 taken, the late sitting still fits"""
    first = container.booking.create_reservation(cafe.id, booking_request("19:00"))
    assert first.table_id == cafe_table.id

    with pytest.raises(NoAvailability):
        container.booking.create_reservation(cafe.id, booking_request("19:00"))

    assert container.engine.find_best_table(cafe.id, MONDAY, "19:00", 2) is None

    late = container.booking.create_reservation(cafe.id, booking_request("21:30"))
    assert late.table_id == cafe_table.id


def test_sittings_are_end_exclusive(container, cafe):
    container.booking.create_reservation(cafe.id, booking_request("19:00"))

    with pytest.raises(NoAvailability):
        container.booking.create_reservation(cafe.id, booking_request("20:30"))

    back_to_back = container.booking.create_reservation(cafe.id, booking_request("21:00"))
    assert back_to_back.time == to_minutes("21:00")


def test_restaurant_wide_block(container, cafe, cafe_table):
    container.blocks.block_time_slot(cafe.id, BlockCreate(
        date=MONDAY,
        start_time="15:00",
        end_time="17:00",
        reason="Private tasting",
        created_by="manager",
    ))

    blocked = container.engine.check_slot_availability(cafe.id, MONDAY, "15:30")
    assert blocked.available is False
    assert blocked.table_ids == []
    assert blocked.capacity == 0

    at_end = container.engine.check_slot_availability(cafe.id, MONDAY, "17:00")
    assert at_end.available is True

    later = container.engine.check_slot_availability(cafe.id, MONDAY, "17:30")
    assert later.available is True
    assert later.table_ids == [cafe_table.id]
    assert later.capacity == 4

    with pytest.raises(NoAvailability):
        container.booking.create_reservation(cafe.id, booking_request("16:00"))


def test_table_block_only_closes_listed_tables(container, bistro):
    tables = {t.number: t for t in container.restaurants.tables_of(bistro.id)}
    container.blocks.block_time_slot(bistro.id, BlockCreate(
        date=MONDAY,
        start_time="18:00",
        end_time="20:00",
        reason="Wobbly leg",
        table_ids=[tables[1].id],
        created_by="host",
    ))

    slot = container.engine.check_slot_availability(bistro.id, MONDAY, "19:00")
    assert slot.available is True
    assert tables[1].id not in slot.table_ids
    assert slot.capacity == 24

    best = container.engine.find_best_table(bistro.id, MONDAY, "19:00", 2)
    assert best.number == 4


@pytest.mark.parametrize("party_size,expected_number", [
    (1, 1),
    (2, 1),
    (3, 2),
    (4, 2),
    (5, 3),
    (7, 6),
    (8, 6),
])
def test_best_fit_prefers_smallest_table(container, bistro, party_size, expected_number):
    best = container.engine.find_best_table(bistro.id, MONDAY, "19:00", party_size)

    assert best.number == expected_number
    assert best.capacity >= party_size


def test_no_table_for_oversized_party(container, bistro):
    assert container.engine.find_best_table(bistro.id, MONDAY, "19:00", 9) is None


def test_best_fit_moves_to_next_table_when_taken(container, bistro):
    container.booking.create_reservation(bistro.id, booking_request("19:00", party_size=3))

    best = container.engine.find_best_table(bistro.id, MONDAY, "19:00", 3)

    assert best.number == 5
    assert best.capacity == 4


def test_maintenance_table_is_never_offered(container, cafe, cafe_table):
    container.booking.set_table_status(cafe.id, cafe_table.id, TableStatus.MAINTENANCE)

    slot = container.engine.check_slot_availability(cafe.id, MONDAY, "12:00")
    assert slot.available is False
    assert container.engine.find_best_table(cafe.id, MONDAY, "12:00", 2) is None


def test_cancelled_reservation_releases_interval(container, cafe, cafe_table):
    reservation = container.booking.create_reservation(cafe.id, booking_request("19:00"))
    container.booking.update_status(cafe.id, reservation.id, ReservationStatus.CANCELLED)

    best = container.engine.find_best_table(cafe.id, MONDAY, "19:00", 4)

    assert best.id == cafe_table.id
    # Floor status is staff-managed and not reverted by cancellation
    assert container.restaurants.tables_of(cafe.id)[0].status == TableStatus.RESERVED


def test_calendar_is_stable_without_mutations(container, bistro):
    container.booking.create_reservation(bistro.id, booking_request("19:00", party_size=8))

    first = container.engine.build_calendar(bistro.id, MONDAY)
    second = container.engine.build_calendar(bistro.id, MONDAY)

    assert first.model_dump() == second.model_dump()


def test_calendar_capacity_figures(container, bistro):
    empty = container.engine.build_calendar(bistro.id, MONDAY)
    assert empty.total_capacity == 26
    assert len(empty.slots) == 19
    assert empty.booked_capacity == 0
    assert empty.available_capacity == 26

    container.booking.create_reservation(bistro.id, booking_request("19:00", party_size=8))
    busy = container.engine.build_calendar(bistro.id, MONDAY)

    # The eight-top is missing from the six slots overlapping 19:00-21:00
    assert busy.booked_capacity == 48
    assert busy.available_capacity == 26 - 48


def test_slot_reports_waitlist_count(container, cafe):
    for name in ("Ana", "Ben"):
        container.waitlist.add_to_waitlist(cafe.id, WaitlistCreate(
            date=MONDAY, time="19:00", party_size=2, customer_name=name,
        ))

    assert container.engine.check_slot_availability(cafe.id, MONDAY, "19:00").waitlist_count == 2
    assert container.engine.check_slot_availability(cafe.id, MONDAY, "19:30").waitlist_count == 0


def test_available_slots_skip_booked_sittings(container, cafe):
    container.booking.create_reservation(cafe.id, booking_request("19:00"))

    slots = container.engine.available_slots(cafe.id, MONDAY, 4)
    times = [s.time for s in slots]

    assert len(slots) == 14
    assert to_minutes("19:00") not in times
    assert to_minutes("17:00") in times
    assert to_minutes("21:00") in times
    assert container.engine.available_slots(cafe.id, MONDAY, 5) == []


def test_unknown_restaurant(container):
    with pytest.raises(NotFound):
        container.engine.check_slot_availability(uuid4(), MONDAY, "19:00")


def test_bad_time_string(container, cafe):
    with pytest.raises(InvalidTimeFormat):
        container.engine.check_slot_availability(cafe.id, MONDAY, "7pm")


def test_booking_may_not_run_into_a_block(container, cafe):
    container.blocks.block_time_slot(cafe.id, BlockCreate(
        date=MONDAY,
        start_time="15:00",
        end_time="17:00",
        reason="Private event",
        created_by="manager",
    ))

    # The start minute is free, so the slot view still offers it
    assert container.engine.check_slot_availability(cafe.id, MONDAY, "14:00").available is True

    with pytest.raises(NoAvailability):
        container.booking.create_reservation(cafe.id, booking_request("14:00"))

    early = container.booking.create_reservation(cafe.id, booking_request("12:30"))
    assert early.end_time == to_minutes("14:30")


def test_preselected_table_may_not_run_into_its_block(container, bistro):
    tables = {t.number: t for t in container.restaurants.tables_of(bistro.id)}
    container.blocks.block_time_slot(bistro.id, BlockCreate(
        date=MONDAY,
        start_time="20:00",
        end_time="22:00",
        reason="Anniversary setup",
        table_ids=[tables[6].id],
        created_by="host",
    ))

    with pytest.raises(NoAvailability):
        container.booking.create_reservation(
            bistro.id, booking_request("19:00", party_size=6, table_id=tables[6].id)
        )

    with pytest.raises(NoAvailability):
        container.booking.create_reservation(bistro.id, booking_request("19:00", party_size=7))

    moved = container.booking.create_reservation(bistro.id, booking_request("19:00", party_size=6))
    assert moved.table_id == tables[3].id


def test_unknown_restaurant_leaves_lock_registry_alone(container, cafe):
    before = len(container.locks)

    for _ in range(100):
        with pytest.raises(NotFound):
            container.engine.check_slot_availability(uuid4(), MONDAY, "19:00")

    assert len(container.locks) == before
    assert cafe.id in container.locks
