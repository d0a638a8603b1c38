import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from dotenv import load_dotenv

from app.crm.config import Settings, load_settings
from app.crm.db import create_schema, engine_from_settings, make_sessionmaker, session_scope
from app.crm.repository import SqlCustomerRepository
from app.crm.reviews import ReviewClient
from app.crm.service import CustomerService


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def open_customer_service(settings: Settings | None = None) -> AsyncIterator[CustomerService]:
    """
    Build engine -> session -> context -> repository -> service and yield the service.
    The engine is disposed when the block exits.
    """
    if settings is None:
        load_dotenv()
        settings = load_settings()
    configure_logging(settings.log_level)

    engine = engine_from_settings(settings)
    try:
        if settings.create_schema:
            await create_schema(engine)
        async with session_scope(make_sessionmaker(engine)) as ctx:
            yield CustomerService(SqlCustomerRepository(ctx))
    finally:
        await engine.dispose()
        logging.getLogger(__name__).info("Customer service closed; engine disposed")


def review_client_from_settings(settings: Settings) -> ReviewClient:
    if not settings.reviews_base_url:
        raise RuntimeError("REVIEWS_BASE_URL is not set.")
    return ReviewClient(base_url=settings.reviews_base_url, timeout_seconds=settings.reviews_timeout_seconds)
