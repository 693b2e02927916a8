import os
from typing import AsyncIterator, Callable, Dict, List

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker  # noqa: E402

from helpdesk.core import database  # noqa: E402
from helpdesk.core.config import Settings, get_settings  # noqa: E402
from helpdesk.core.security import get_password_hash  # noqa: E402
from helpdesk.main import app  # noqa: E402
from helpdesk.models import User, UserRoleEnum  # noqa: E402


class TestSettings(Settings):
    database_url: str = "sqlite+aiosqlite:///./test.db"
    secret_key: str = "test-secret-key"
    cors_origins: List[str] = ["http://localhost"]
    run_migrations_on_startup: bool = False


@pytest.fixture(scope="session", autouse=True)
def override_settings() -> AsyncIterator[None]:
    original_engine = database.engine
    original_session_factory = database.AsyncSessionLocal
    original_settings_obj = database.settings

    test_settings = TestSettings()

    app.dependency_overrides[get_settings] = lambda: test_settings
    get_settings.cache_clear()
    database.settings = test_settings
    database.engine = database.build_engine(test_settings.database_url)
    database.AsyncSessionLocal = async_sessionmaker(bind=database.engine, expire_on_commit=False)
    yield
    app.dependency_overrides.pop(get_settings, None)
    get_settings.cache_clear()
    database.settings = original_settings_obj
    database.engine = original_engine
    database.AsyncSessionLocal = original_session_factory


@pytest.fixture(autouse=True)
async def setup_database() -> AsyncIterator[None]:
    async with database.engine.begin() as conn:
        await conn.run_sync(database.Base.metadata.create_all)
    yield
    async with database.engine.begin() as conn:
        await conn.run_sync(database.Base.metadata.drop_all)


@pytest.fixture()
async def async_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def make_user() -> Callable:
    async def _make_user(email: str, password: str = "userpass", role: UserRoleEnum = UserRoleEnum.USER) -> User:
        async with database.AsyncSessionLocal() as session:
            user = User(
                email=email,
                full_name=email.split("@")[0].title(),
                hashed_password=get_password_hash(password),
                role=role,
            )
            session.add(user)
            await session.commit()
            await session.refresh(user)
            return user

    return _make_user


@pytest.fixture
async def admin_user(make_user: Callable) -> User:
    return await make_user("admin@example.com", "adminpass", UserRoleEnum.ADMIN)


async def _login(client: AsyncClient, email: str, password: str) -> Dict[str, str]:
    response = await client.post(
        "/api/v1/auth/login",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
async def auth_headers(async_client: AsyncClient, admin_user: User) -> Dict[str, str]:
    return await _login(async_client, admin_user.email, "adminpass")


@pytest.fixture
def login() -> Callable:
    return _login
