"""Pytest configuration and fixtures for recordvault.

Every test gets its own SQLite file database (aiosqlite) and storage root
under tmp_path. HTTP tests build the app with create_app() and swap the
unit-of-work factory and storage backend through dependency_overrides.
"""

import os
import tempfile

# Settings are read at import of recordvault.main; set env first.
_TEST_ROOT = tempfile.mkdtemp(prefix="recordvault-tests-")
os.environ.setdefault(
    "DATABASE_URL", f"sqlite+aiosqlite:///{_TEST_ROOT}/recordvault.db"
)
os.environ.setdefault("STORAGE_ROOT", os.path.join(_TEST_ROOT, "storage"))
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["OCR_ENABLED"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from recordvault.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from recordvault.api.v1.dependencies import (  # noqa: E402
    get_storage_service,
    get_uow_factory,
)
from recordvault.application.services import AuditRecorder, HashService  # noqa: E402
from recordvault.application.use_cases.documents import ContentStore  # noqa: E402
from recordvault.infrastructure.external.storage import LocalStorageService  # noqa: E402
from recordvault.infrastructure.persistence import models  # noqa: E402,F401
from recordvault.infrastructure.persistence.database import (  # noqa: E402
    Base,
    create_engine_for_url,
    create_session_factory,
)
from recordvault.infrastructure.persistence.unit_of_work import (  # noqa: E402
    make_uow_factory,
)
from recordvault.main import create_app  # noqa: E402


@pytest.fixture
async def engine(tmp_path):
    """Fresh database with the full schema for one test."""
    db_engine = create_engine_for_url(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield db_engine
    await db_engine.dispose()


@pytest.fixture
def uow_factory(engine):
    return make_uow_factory(create_session_factory(engine))


@pytest.fixture
def storage(tmp_path) -> LocalStorageService:
    return LocalStorageService(tmp_path / "storage")


@pytest.fixture
def audit(uow_factory) -> AuditRecorder:
    return AuditRecorder(uow_factory)


@pytest.fixture
def content_store(uow_factory, storage) -> ContentStore:
    return ContentStore(uow_factory=uow_factory, storage=storage, hasher=HashService())


@pytest.fixture
def app(uow_factory, storage):
    """FastAPI app wired to the per-test database and storage root."""
    application = create_app()
    application.dependency_overrides[get_uow_factory] = lambda: uow_factory
    application.dependency_overrides[get_storage_service] = lambda: storage
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def record_id(client: AsyncClient) -> str:
    """Id of a freshly created medical record."""
    response = await client.post(
        "/api/v1/records",
        json={"patient_id": "patient-001", "description": "Cardiology"},
        headers={"X-User-ID": "clerk-1"},
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]
