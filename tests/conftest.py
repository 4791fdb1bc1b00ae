import os

os.environ["STORAGE_BACKEND"] = "memory"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "development"

import httpx
import pytest

from app.constants.constants import UserRole
from app.core.config import settings
from app.core.storage import MemoryKeyValueStore
from app.schemas.userSchema import Session
from app.services.CampusStore import CampusStore
from helpers import make_png_data_url


@pytest.fixture
def kv():
    return MemoryKeyValueStore()


@pytest.fixture
def test_settings():
    return settings.model_copy(update={"SEED_ON_EMPTY": False})


@pytest.fixture
async def store(kv, test_settings):
    return await CampusStore(kv, test_settings).init()


@pytest.fixture
def admin_session():
    return Session(user_identifier="admin1", name="Admin Fasilkom", role=UserRole.admin)


@pytest.fixture
def student_session():
    return Session(user_identifier="u1", name="Udin Pelapor", role=UserRole.mahasiswa)


@pytest.fixture
def png_data_url():
    return make_png_data_url()


@pytest.fixture
def app(store):
    from app.main import app as fastapi_app

    fastapi_app.state.campus_store = store
    yield fastapi_app
    fastapi_app.state.campus_store = None


@pytest.fixture
def make_client(app):
    """Factory for independent clients, each with its own cookie jar."""

    def _make() -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://testserver",
        )

    return _make


@pytest.fixture
async def client(make_client):
    async with make_client() as c:
        yield c


@pytest.fixture
def settings_with_seed():
    return settings.model_copy(update={"SEED_ON_EMPTY": True})
