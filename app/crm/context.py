from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import FlushError

from app.crm.errors import ConstraintViolation, TransportFailure
from app.crm.models import Customer

logger = logging.getLogger(__name__)


def _new_row(customer: Customer) -> Customer:
    return Customer(id=customer.id, name=customer.name, email=customer.email, phone=customer.phone)


class CustomerContext:
    """
    Unit-of-work over the `customers` table.

    Writes are staged on the session and only become durable (and visible to
    other sessions on the same store) after `save_changes()`.

    The session keeps no Customer objects between calls: reads always go to the
    store and hand back detached records, inserts stage fresh rows built from
    the caller's values, and the identity map is cleared after every commit.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(self, customer_id: int) -> Customer | None:
        customer = await self.session.get(Customer, customer_id, populate_existing=True)
        if customer is not None:
            self.session.expunge(customer)
        return customer

    async def all(self) -> list[Customer]:
        result = await self.session.execute(select(Customer).execution_options(populate_existing=True))
        rows = list(result.scalars().all())
        self.session.expunge_all()
        return rows

    def add(self, customer: Customer) -> None:
        self.session.add(_new_row(customer))

    def add_all(self, customers: Iterable[Customer]) -> None:
        self.session.add_all([_new_row(c) for c in customers])

    async def update(self, customer: Customer) -> int:
        """
        Overwrite name/email/phone of the row keyed by `customer.id`.
        Returns the number of rows matched (0 when the id is unknown).
        """
        stmt = (
            update(Customer)
            .where(Customer.id == customer.id)
            .values(name=customer.name, email=customer.email, phone=customer.phone)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def remove(self, customer_id: int) -> int:
        """Delete the row keyed by `customer_id`; returns the number of rows removed."""
        stmt = delete(Customer).where(Customer.id == customer_id).execution_options(synchronize_session=False)
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def save_changes(self) -> None:
        try:
            await self.session.commit()
        except (IntegrityError, FlushError) as e:
            await self._discard()
            logger.warning("Commit rejected by constraint; rolled back: %s", e)
            raise ConstraintViolation(str(e)) from e
        except SQLAlchemyError as e:
            await self._discard()
            logger.warning("Commit failed; rolled back: %s", e)
            raise TransportFailure(str(e)) from e
        self.session.expunge_all()
        logger.debug("Committed customer changes")

    async def _discard(self) -> None:
        # Detach first so the rollback cannot expire records callers still hold.
        self.session.expunge_all()
        await self.session.rollback()
