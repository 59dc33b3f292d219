"""
Booking orchestrator.

Validates booking requests against the availability engine and commits
reservations. Each check-then-commit runs inside the restaurant's
exclusive section so two callers can never both take the same table.
"""

from datetime import date
from typing import Callable, List, Optional
from uuid import UUID

import structlog

from tablebook.core.errors import (
    InvalidRequest,
    InvalidStateTransition,
    NoAvailability,
    NotFound,
    PaymentDeclined,
)
from tablebook.core.timeslots import format_minutes
from tablebook.models import (
    PaymentStatus,
    Reservation,
    ReservationStatus,
    Table,
    TableStatus,
)
from tablebook.payments import BasePaymentProvider, ChargeStatus
from tablebook.schemas.reservation import ReservationCreate
from tablebook.services.availability import AvailabilityEngine

logger = structlog.get_logger()


class BookingService:
    """Creates reservations and drives their state machine"""

    def __init__(
        self,
        engine: AvailabilityEngine,
        payments: Optional[BasePaymentProvider] = None,
        clock: Callable[[], date] = date.today,
    ):
        self.engine = engine
        self.tables = engine.tables
        self.reservations = engine.reservations
        self.locks = engine.locks
        self.payments = payments
        self.clock = clock

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _table(self, restaurant_id: UUID, table_id: UUID) -> Table:
        table = self.tables.get(table_id)
        if table is None or table.restaurant_id != restaurant_id:
            raise NotFound("Table", table_id)
        return table

    def _reservation(self, restaurant_id: UUID, reservation_id: UUID) -> Reservation:
        reservation = self.reservations.get(reservation_id)
        if reservation is None or reservation.restaurant_id != restaurant_id:
            raise NotFound("Reservation", reservation_id)
        return reservation

    def get_reservation(self, restaurant_id: UUID, reservation_id: UUID) -> Reservation:
        with self.locks.hold(restaurant_id):
            return self._reservation(restaurant_id, reservation_id)

    def list_reservations(
        self,
        restaurant_id: UUID,
        on_date: Optional[date] = None,
        status: Optional[ReservationStatus] = None,
    ) -> List[Reservation]:
        with self.locks.hold(restaurant_id):
            self.engine.get_restaurant(restaurant_id)
            return self.reservations.for_restaurant(restaurant_id, on_date, status)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create_reservation(self, restaurant_id: UUID, data: ReservationCreate) -> Reservation:
        """
        Validate a booking request and commit it.

        Steps:
        1. Restaurant exists, party size is positive, date is not in the past
        2. Pre-selected table belongs to the restaurant, fits and is free;
           otherwise the best-fit table is chosen. Blocks are checked
           against the whole sitting, not only its start minute
        3. Status is confirmed when a payment reference is present, else pending
        4. The assigned table is marked reserved (not reverted on cancellation)
        5. The reservation is stored

        Raises:
            NotFound: unknown restaurant or table
            InvalidRequest: past date, party too big for the chosen table
            NoAvailability: no table can take the party at that time
        """
        with self.locks.hold(restaurant_id):
            reservation = self._commit(restaurant_id, data)

        logger.info(
            "Reservation created",
            restaurant_id=str(restaurant_id),
            reservation_id=str(reservation.id),
            table_id=str(reservation.table_id),
            date=reservation.date.isoformat(),
            time=format_minutes(reservation.time),
            party_size=reservation.party_size,
            status=reservation.status.value,
        )
        return reservation

    def _commit(self, restaurant_id: UUID, data: ReservationCreate) -> Reservation:
        self.engine.get_restaurant(restaurant_id)

        if data.party_size <= 0:
            raise InvalidRequest("Party size must be positive")

        if data.date < self.clock():
            raise InvalidRequest(f"Cannot book a date in the past: {data.date.isoformat()}")

        duration = data.duration_minutes or self.engine.dining_duration

        if data.table_id is not None:
            table = self._table(restaurant_id, data.table_id)
            if table.capacity < data.party_size:
                raise InvalidRequest(
                    f"Table {table.number} seats {table.capacity}, party of {data.party_size} requested"
                )
            if (
                self.engine.is_table_booked(table, data.date, data.time, duration)
                or self.engine.is_blocked_during(
                    restaurant_id, data.date, data.time, data.time + duration, table.id
                )
            ):
                raise NoAvailability(
                    f"Table {table.number} is not available at {format_minutes(data.time)}"
                )
        else:
            table = self.engine.find_best_table(
                restaurant_id, data.date, data.time, data.party_size, duration,
                whole_sitting=True,
            )
            if table is None:
                raise NoAvailability(
                    f"No table for {data.party_size} on {data.date.isoformat()} at {format_minutes(data.time)}"
                )

        reservation = Reservation(
            restaurant_id=restaurant_id,
            table_id=table.id,
            customer_id=data.customer_id,
            customer_name=data.customer_name,
            customer_email=data.customer_email,
            customer_phone=data.customer_phone,
            date=data.date,
            time=data.time,
            duration_minutes=duration,
            party_size=data.party_size,
            status=ReservationStatus.CONFIRMED if data.payment_ref else ReservationStatus.PENDING,
            special_requests=data.special_requests,
            payment_ref=data.payment_ref,
            payment_status=PaymentStatus.COMPLETED if data.payment_ref else None,
        )

        self.tables.set_status(table.id, TableStatus.RESERVED)
        self.reservations.add(reservation)
        return reservation

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def update_status(
        self,
        restaurant_id: UUID,
        reservation_id: UUID,
        new_status: ReservationStatus,
    ) -> Reservation:
        """Move a reservation along its state machine; the table status is left alone"""
        with self.locks.hold(restaurant_id):
            reservation = self._reservation(restaurant_id, reservation_id)

            if not reservation.can_transition_to(new_status):
                raise InvalidStateTransition(reservation.status.value, new_status.value)

            previous = reservation.status
            reservation.status = new_status
            reservation.touch()

        logger.info(
            "Reservation status updated",
            reservation_id=str(reservation_id),
            previous=previous.value,
            status=new_status.value,
        )
        return reservation

    def record_payment(
        self,
        restaurant_id: UUID,
        reservation_id: UUID,
        payment_ref: Optional[str],
        payment_amount: Optional[float],
        payment_status: PaymentStatus,
    ) -> Reservation:
        """Store the outcome of the external payment step"""
        with self.locks.hold(restaurant_id):
            reservation = self._reservation(restaurant_id, reservation_id)
            reservation.payment_ref = payment_ref
            reservation.payment_amount = payment_amount
            reservation.payment_status = payment_status
            reservation.touch()
        return reservation

    def set_table_status(self, restaurant_id: UUID, table_id: UUID, status: TableStatus) -> Table:
        """Staff re-status of a table; reservations are not touched"""
        with self.locks.hold(restaurant_id):
            table = self._table(restaurant_id, table_id)
            self.tables.set_status(table.id, status)

        logger.info("Table status updated", table_id=str(table_id), status=status.value)
        return table

    # ------------------------------------------------------------------
    # Two-phase booking with payment
    # ------------------------------------------------------------------

    async def book_with_payment(
        self,
        restaurant_id: UUID,
        data: ReservationCreate,
        amount: float,
        method: str,
    ) -> Reservation:
        """
        Reserve, charge, then confirm.

        The table is held by a pending reservation while the payment
        provider is called; no lock is held during the charge. A declined
        or failed charge cancels the pending reservation and raises
        PaymentDeclined; any other error or cancellation cancels it and
        propagates. If staff cancel the reservation while the charge is in
        flight, the captured payment is recorded and the cancelled
        reservation is returned.
        """
        if self.payments is None:
            raise RuntimeError("No payment provider configured")

        reservation = self.create_reservation(
            restaurant_id, data.model_copy(update={"payment_ref": None})
        )

        try:
            result = await self.payments.charge(amount, method)
        except PaymentDeclined:
            logger.info("Payment declined", reservation_id=str(reservation.id))
            self._abandon(restaurant_id, reservation.id, amount)
            raise
        except BaseException:
            # Includes task cancellation while the charge is awaited
            self._abandon(restaurant_id, reservation.id, amount)
            raise

        if result.status != ChargeStatus.COMPLETED:
            self._abandon(restaurant_id, reservation.id, amount, result.payment_ref)
            raise PaymentDeclined(f"Payment {result.payment_ref} failed")

        with self.locks.hold(restaurant_id):
            reservation = self.record_payment(
                restaurant_id,
                reservation.id,
                result.payment_ref,
                amount,
                PaymentStatus.COMPLETED,
            )
            if reservation.can_transition_to(ReservationStatus.CONFIRMED):
                return self.update_status(restaurant_id, reservation.id, ReservationStatus.CONFIRMED)

        # Cancelled by staff during the charge; the capture is kept for refunding
        logger.warning(
            "Payment captured for a reservation that can no longer be confirmed",
            reservation_id=str(reservation.id),
            status=reservation.status.value,
            payment_ref=result.payment_ref,
            amount=amount,
        )
        return reservation

    def _abandon(
        self,
        restaurant_id: UUID,
        reservation_id: UUID,
        amount: float,
        payment_ref: Optional[str] = None,
    ) -> None:
        with self.locks.hold(restaurant_id):
            reservation = self.record_payment(
                restaurant_id, reservation_id, payment_ref, amount, PaymentStatus.FAILED
            )
            if reservation.can_transition_to(ReservationStatus.CANCELLED):
                self.update_status(restaurant_id, reservation_id, ReservationStatus.CANCELLED)
