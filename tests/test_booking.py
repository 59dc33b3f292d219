"""Tests for the booking orchestrator and reservation lifecycle"""

import asyncio
from datetime import date
from uuid import uuid4

import pytest

from tablebook.core.errors import (
    InvalidRequest,
    InvalidStateTransition,
    NoAvailability,
    NotFound,
    PaymentDeclined,
)
from tablebook.models import PaymentStatus, ReservationStatus, TableStatus
from tablebook.payments import BasePaymentProvider, ChargeStatus, PaymentResult
from tablebook.schemas.restaurant import RestaurantCreate, TableCreate

from tests.conftest import MONDAY, booking_request


class UnreachableProvider(BasePaymentProvider):
    name = "unreachable"

    async def charge(self, amount, method):
        raise ConnectionError("payment gateway timed out")


class FailingProvider(BasePaymentProvider):
    name = "failing"

    async def charge(self, amount, method):
        return PaymentResult(payment_ref="pay-failed", status=ChargeStatus.FAILED)


class CountingProvider(BasePaymentProvider):
    name = "counting"

    def __init__(self):
        self.calls = 0

    async def charge(self, amount, method):
        self.calls += 1
        return PaymentResult(payment_ref="pay-counted", status=ChargeStatus.COMPLETED)


def test_new_reservation_is_pending(container, cafe, cafe_table):
    reservation = container.booking.create_reservation(cafe.id, booking_request())

    assert reservation.status == ReservationStatus.PENDING
    assert reservation.duration_minutes == 120
    assert reservation.end_time == reservation.time + 120
    assert reservation.payment_status is None
    assert container.restaurants.tables_of(cafe.id)[0].status == TableStatus.RESERVED


def test_payment_reference_confirms_immediately(container, cafe):
    reservation = container.booking.create_reservation(
        cafe.id, booking_request(payment_ref="ext-123")
    )

    assert reservation.status == ReservationStatus.CONFIRMED
    assert reservation.payment_ref == "ext-123"
    assert reservation.payment_status == PaymentStatus.COMPLETED


def test_custom_duration_extends_hold(container, cafe):
    container.booking.create_reservation(
        cafe.id, booking_request("18:00", duration_minutes=240)
    )

    with pytest.raises(NoAvailability):
        container.booking.create_reservation(cafe.id, booking_request("21:30"))


def test_past_date_rejected(container, cafe):
    with pytest.raises(InvalidRequest):
        container.booking.create_reservation(
            cafe.id, booking_request(on_date=date(2023, 12, 31))
        )


def test_preselected_table_checks(container, bistro):
    tables = {t.number: t for t in container.restaurants.tables_of(bistro.id)}

    with pytest.raises(InvalidRequest):
        container.booking.create_reservation(
            bistro.id, booking_request(party_size=4, table_id=tables[1].id)
        )

    chosen = container.booking.create_reservation(
        bistro.id, booking_request(party_size=2, table_id=tables[6].id)
    )
    assert chosen.table_id == tables[6].id

    with pytest.raises(NoAvailability):
        container.booking.create_reservation(
            bistro.id, booking_request("20:00", party_size=2, table_id=tables[6].id)
        )


def test_preselected_table_from_other_restaurant(container, cafe, cafe_table):
    other = container.restaurants.create_restaurant(RestaurantCreate(
        name="Across The Street",
        tables=[TableCreate(number=1, capacity=4)],
    ))

    with pytest.raises(NotFound):
        container.booking.create_reservation(
            other.id, booking_request(table_id=cafe_table.id)
        )


def test_reservation_scoped_to_restaurant(container, cafe, bistro):
    reservation = container.booking.create_reservation(cafe.id, booking_request())

    assert container.booking.get_reservation(cafe.id, reservation.id) is reservation
    with pytest.raises(NotFound):
        container.booking.get_reservation(bistro.id, reservation.id)
    with pytest.raises(NotFound):
        container.booking.get_reservation(cafe.id, uuid4())


def test_seating_requires_confirmation(container, cafe):
    reservation = container.booking.create_reservation(cafe.id, booking_request())

    with pytest.raises(InvalidStateTransition):
        container.booking.update_status(cafe.id, reservation.id, ReservationStatus.SEATED)

    container.booking.update_status(cafe.id, reservation.id, ReservationStatus.CONFIRMED)
    seated = container.booking.update_status(cafe.id, reservation.id, ReservationStatus.SEATED)
    assert seated.status == ReservationStatus.SEATED

    done = container.booking.update_status(cafe.id, reservation.id, ReservationStatus.COMPLETED)
    assert done.status == ReservationStatus.COMPLETED


@pytest.mark.parametrize("path,rejected", [
    ([ReservationStatus.CANCELLED], ReservationStatus.CONFIRMED),
    ([ReservationStatus.CONFIRMED, ReservationStatus.NO_SHOW], ReservationStatus.SEATED),
    ([ReservationStatus.CONFIRMED, ReservationStatus.SEATED], ReservationStatus.CANCELLED),
    ([ReservationStatus.CONFIRMED, ReservationStatus.SEATED, ReservationStatus.COMPLETED],
     ReservationStatus.CANCELLED),
    ([], ReservationStatus.COMPLETED),
])
def test_rejected_transitions(container, cafe, path, rejected):
    reservation = container.booking.create_reservation(cafe.id, booking_request())
    for status in path:
        container.booking.update_status(cafe.id, reservation.id, status)

    with pytest.raises(InvalidStateTransition):
        container.booking.update_status(cafe.id, reservation.id, rejected)

    assert reservation.status == (path[-1] if path else ReservationStatus.PENDING)


def test_record_payment(container, cafe):
    reservation = container.booking.create_reservation(cafe.id, booking_request())

    updated = container.booking.record_payment(
        cafe.id, reservation.id, "ext-9", 80.0, PaymentStatus.COMPLETED
    )

    assert updated.payment_ref == "ext-9"
    assert updated.payment_amount == 80.0
    assert updated.payment_status == PaymentStatus.COMPLETED
    assert updated.status == ReservationStatus.PENDING


def test_list_reservations_filters(container, bistro):
    late = container.booking.create_reservation(bistro.id, booking_request("20:00", party_size=2))
    early = container.booking.create_reservation(bistro.id, booking_request("12:00", party_size=2))
    other_day = container.booking.create_reservation(
        bistro.id, booking_request("12:00", party_size=2, on_date=date(2024, 1, 16))
    )
    container.booking.update_status(bistro.id, late.id, ReservationStatus.CONFIRMED)

    on_monday = container.booking.list_reservations(bistro.id, MONDAY)
    assert [r.id for r in on_monday] == [early.id, late.id]

    confirmed = container.booking.list_reservations(bistro.id, status=ReservationStatus.CONFIRMED)
    assert [r.id for r in confirmed] == [late.id]

    assert len(container.booking.list_reservations(bistro.id)) == 3
    assert other_day in container.booking.list_reservations(bistro.id)


@pytest.mark.asyncio
async def test_checkout_confirms_after_payment(container, cafe):
    reservation = await container.booking.book_with_payment(
        cafe.id, booking_request(), amount=60.0, method="card"
    )

    assert reservation.status == ReservationStatus.CONFIRMED
    assert reservation.payment_ref.startswith("pay-")
    assert reservation.payment_amount == 60.0
    assert reservation.payment_status == PaymentStatus.COMPLETED


@pytest.mark.asyncio
async def test_declined_payment_cancels_and_frees_table(container, cafe, cafe_table):
    with pytest.raises(PaymentDeclined):
        await container.booking.book_with_payment(
            cafe.id, booking_request(), amount=60.0, method="declined_card"
        )

    [abandoned] = container.booking.list_reservations(cafe.id)
    assert abandoned.status == ReservationStatus.CANCELLED
    assert abandoned.payment_status == PaymentStatus.FAILED

    best = container.engine.find_best_table(cafe.id, MONDAY, "19:00", 4)
    assert best.id == cafe_table.id


@pytest.mark.asyncio
async def test_provider_error_cancels_reservation(container, cafe):
    container.booking.payments = UnreachableProvider()

    with pytest.raises(ConnectionError):
        await container.booking.book_with_payment(cafe.id, booking_request(), 60.0, "card")

    [abandoned] = container.booking.list_reservations(cafe.id)
    assert abandoned.status == ReservationStatus.CANCELLED


@pytest.mark.asyncio
async def test_failed_charge_result_is_a_decline(container, cafe):
    container.booking.payments = FailingProvider()

    with pytest.raises(PaymentDeclined):
        await container.booking.book_with_payment(cafe.id, booking_request(), 60.0, "card")

    [abandoned] = container.booking.list_reservations(cafe.id)
    assert abandoned.payment_ref == "pay-failed"
    assert abandoned.status == ReservationStatus.CANCELLED


@pytest.mark.asyncio
async def test_no_charge_without_a_table(container, cafe):
    provider = CountingProvider()
    container.booking.payments = provider
    container.booking.create_reservation(cafe.id, booking_request())

    with pytest.raises(NoAvailability):
        await container.booking.book_with_payment(cafe.id, booking_request(), 60.0, "card")

    assert provider.calls == 0


class CancelledChargeProvider(BasePaymentProvider):
    name = "cancelled"

    async def charge(self, amount, method):
        raise asyncio.CancelledError()


class StaffCancelsDuringCharge(BasePaymentProvider):
    """Completes the charge after staff have cancelled the pending booking"""

    name = "staff-cancels"

    def __init__(self, container, restaurant_id):
        self.container = container
        self.restaurant_id = restaurant_id

    async def charge(self, amount, method):
        [pending] = self.container.booking.list_reservations(self.restaurant_id)
        self.container.booking.update_status(
            self.restaurant_id, pending.id, ReservationStatus.CANCELLED
        )
        return PaymentResult(payment_ref="pay-late", status=ChargeStatus.COMPLETED)


@pytest.mark.asyncio
async def test_cancelled_charge_releases_table(container, cafe, cafe_table):
    container.booking.payments = CancelledChargeProvider()

    with pytest.raises(asyncio.CancelledError):
        await container.booking.book_with_payment(cafe.id, booking_request(), 60.0, "card")

    [abandoned] = container.booking.list_reservations(cafe.id)
    assert abandoned.status == ReservationStatus.CANCELLED
    assert abandoned.payment_status == PaymentStatus.FAILED

    best = container.engine.find_best_table(cafe.id, MONDAY, "19:00", 4)
    assert best.id == cafe_table.id


@pytest.mark.asyncio
async def test_charge_completing_after_staff_cancel_is_kept(container, cafe):
    container.booking.payments = StaffCancelsDuringCharge(container, cafe.id)

    reservation = await container.booking.book_with_payment(
        cafe.id, booking_request(), 60.0, "card"
    )

    assert reservation.status == ReservationStatus.CANCELLED
    assert reservation.payment_ref == "pay-late"
    assert reservation.payment_amount == 60.0
    assert reservation.payment_status == PaymentStatus.COMPLETED
