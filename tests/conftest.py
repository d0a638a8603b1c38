import pytest
import pytest_asyncio

from app.crm.db import create_schema, init_engine, make_sessionmaker, session_scope
from app.crm.repository import SqlCustomerRepository
from app.crm.service import CustomerService

ENV_KEYS = (
    "ENV",
    "DATABASE_URL",
    "DATABASE_ECHO",
    "CREATE_SCHEMA",
    "REVIEWS_TIMEOUT_SECONDS",
    "LOG_LEVEL",
)


@pytest.fixture()
def clean_env(monkeypatch):
    for k in ENV_KEYS:
        monkeypatch.delenv(k, raising=False)
    return monkeypatch


@pytest_asyncio.fixture()
async def engine():
    engine = init_engine("sqlite+aiosqlite:///:memory:")
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def sessionmaker(engine):
    return make_sessionmaker(engine)


@pytest_asyncio.fixture()
async def context(sessionmaker):
    async with session_scope(sessionmaker) as ctx:
        yield ctx


@pytest.fixture()
def repo(context):
    return SqlCustomerRepository(context)


@pytest.fixture()
def service(repo):
    return CustomerService(repo)
