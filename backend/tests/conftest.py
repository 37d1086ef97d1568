import pytest

from app.core.config import Settings
from fakes import HOST_USER_ID, FakeAttendeeRepository


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        ENVIRONMENT="test",
        HOST_USER_ID=HOST_USER_ID,
        MAX_ROWS=10000,
        EVENT_TIMEZONE="America/Chicago",
        EVENT_TIME_FORMAT="%m/%d/%Y, %I:%M %p",
    )


@pytest.fixture
def fake_repository() -> FakeAttendeeRepository:
    return FakeAttendeeRepository()
