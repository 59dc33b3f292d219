"""Test configuration and fixtures"""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from tablebook.config import Settings
from tablebook.container import ServiceContainer
from tablebook.jobs.celery_app import celery_app
from tablebook.main import app
from tablebook.payments import SimulatedPaymentProvider
from tablebook.schemas.reservation import ReservationCreate
from tablebook.schemas.restaurant import RestaurantCreate, TableCreate
from tablebook.seed import seed_demo_data

# Fixed "today" so bookings in January 2024 are never in the past
TODAY = date(2024, 1, 1)
MONDAY = date(2024, 1, 15)


class RecordingNotifier:
    """Collects dispatched waitlist notifications instead of queueing them"""

    def __init__(self):
        self.sent = []

    def dispatch(self, entry, restaurant):
        self.sent.append((entry.id, restaurant.name))


def booking_request(time="19:00", party_size=4, on_date=MONDAY, **kwargs) -> ReservationCreate:
    return ReservationCreate(
        customer_name=kwargs.pop("customer_name", "Jordan Lee"),
        customer_phone=kwargs.pop("customer_phone", "+15551234567"),
        date=on_date,
        time=time,
        party_size=party_size,
        **kwargs,
    )


@pytest.fixture(autouse=True)
def celery_eager():
    """Run Celery tasks in-process"""
    celery_app.conf.task_always_eager = True
    yield
    celery_app.conf.task_always_eager = False


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def container(notifier):
    """Fresh stores and services per test"""
    return ServiceContainer(
        settings=Settings(_env_file=None),
        payments=SimulatedPaymentProvider(declined_methods=["declined_card"]),
        notifier=notifier,
        clock=lambda: TODAY,
    )


@pytest.fixture
def cafe(container):
    """Restaurant with a single four-top and default opening hours"""
    return container.restaurants.create_restaurant(RestaurantCreate(
        name="Corner Cafe",
        tables=[TableCreate(number=1, capacity=4)],
    ))


@pytest.fixture
def cafe_table(container, cafe):
    return container.restaurants.tables_of(cafe.id)[0]


@pytest.fixture
def bistro(container):
    """Demo restaurant: tables of 2, 4, 6, 2, 4 and 8 seats"""
    return seed_demo_data(container)


@pytest.fixture
async def client(container):
    """Create test client bound to the test container"""
    app.state.container = container

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.state.container = None
