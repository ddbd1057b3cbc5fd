"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sim import SIM_BOT_DID as BOT_DID  # noqa: E402

SESSION_SECRET = "test-session-secret"
ADMIN_PASSWORD = "correct horse"


class FakeClock:
    """Controllable replacement for time.time()."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Create a fake clock."""
    return FakeClock()


@pytest_asyncio.fixture
async def storage(clock):
    """Create in-memory storage for testing."""
    from autoreply.storage import Storage

    st = Storage(":memory:", clock=clock)
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def ledger(storage):
    """Create CorrespondentLedger with storage."""
    from autoreply.ledger import CorrespondentLedger

    return CorrespondentLedger(storage)


@pytest.fixture
def config_store(storage):
    """Create ConfigStore with storage."""
    from autoreply.storage import ConfigStore

    return ConfigStore(storage)


@pytest.fixture
def sim_source():
    """Create an empty simulated conversation source."""
    from sim import SimConversationSource

    return SimConversationSource(account_did=BOT_DID)


@pytest.fixture
def mock_sleep():
    """Sleep replacement that records requested delays."""
    return AsyncMock(return_value=None)


@pytest.fixture
def engine(sim_source, ledger, mock_sleep):
    """Create DispatchEngine over the simulator."""
    from autoreply.dispatch import DispatchEngine

    return DispatchEngine(sim_source, ledger, page_size=2, sleep=mock_sleep)


@pytest.fixture
def settings():
    """Settings with the scheduler off and a known session secret."""
    from autoreply.config import Settings

    return Settings(
        admin_session_secret=SESSION_SECRET,
        scheduler_enabled=False,
        page_size=10,
    )


@pytest.fixture
def application(settings, sim_source):
    """Create (but do not start) an Application over the simulator."""
    from autoreply.app import Application

    return Application(
        db_path=":memory:", settings=settings, source_factory=lambda: sim_source
    )


@pytest.fixture
def client(application):
    """FastAPI TestClient with the application lifespan running."""
    from fastapi.testclient import TestClient

    from autoreply.api import create_fastapi_app

    with TestClient(create_fastapi_app(application)) as test_client:
        yield test_client
