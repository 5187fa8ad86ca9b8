import os
os.environ.setdefault("DATABASE_URI", "sqlite://:memory:")
from datetime import datetime
import httpx
import pytest
import pytz
from tortoise import Tortoise

from helpers.config import Settings
from helpers.errors import NotificationFailure
from helpers.tortoise_config import MODEL_MODULES
from main import create_app


ADMIN_KEY = "test-admin-key"
CLINIC_EMAIL = "clinic@example.com"

# 06:30 UTC is 12:00 in the clinic's UTC+5:30 zone
NOW_UTC = pytz.utc.localize(datetime(2025, 6, 10, 6, 30))
TODAY = "2025-06-10"


class FakeNotifier:
    """Records every message instead of sending it."""

    def __init__(self, fail_with=None):
        self.sent = []
        self.fail_with = fail_with

    async def send(self, message):
        self.sent.append(message)
        if self.fail_with:
            raise NotificationFailure(self.fail_with)
        return f"fake-{len(self.sent)}"


class FixedClock:
    def __init__(self, instant):
        self.instant = instant

    def __call__(self):
        return self.instant


@pytest.fixture
def settings():
    return Settings(admin_key=ADMIN_KEY, admin_email=CLINIC_EMAIL, database_uri="sqlite://:memory:")


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def clock():
    return FixedClock(NOW_UTC)


@pytest.fixture
async def db():
    await Tortoise.init(db_url="sqlite://:memory:", modules={"models": MODEL_MODULES})
    await Tortoise.generate_schemas()
    yield
    await Tortoise.close_connections()


@pytest.fixture
def app(settings, notifier, clock):
    return create_app(settings=settings, notifier=notifier, clock=clock)


@pytest.fixture
async def client(db, app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def admin_headers():
    return {"x-admin-key": ADMIN_KEY}
