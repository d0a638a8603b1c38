"""
Customer repositories.

Two contracts:

BaseCustomerRepository   get_by_id / add / get_all
CustomerRepository       + update / delete / add_bulk

Callers should depend on the narrowest contract they need. The SQL-backed
extended repository reuses the base implementation by holding one, not by
subclassing it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from app.crm.context import CustomerContext
from app.crm.models import Customer

logger = logging.getLogger(__name__)


class BaseCustomerRepository(ABC):
    @abstractmethod
    async def get_by_id(self, customer_id: int) -> Customer | None:
        """Return the customer or None; a missing id is not an error."""

    @abstractmethod
    async def add(self, customer: Customer) -> None:
        """Insert one customer and commit. Duplicate ids raise ConstraintViolation."""

    @abstractmethod
    async def get_all(self) -> list[Customer]:
        pass


class CustomerRepository(BaseCustomerRepository):
    @abstractmethod
    async def update(self, customer: Customer) -> None:
        """Replace name/email/phone of the row with customer.id and commit. Unknown ids are ignored."""

    @abstractmethod
    async def delete(self, customer_id: int) -> None:
        """Remove the row if present and commit. Unknown ids are ignored."""

    @abstractmethod
    async def add_bulk(self, customers: Sequence[Customer]) -> None:
        """Insert all customers with a single commit."""


class SqlBaseCustomerRepository(BaseCustomerRepository):
    def __init__(self, context: CustomerContext):
        self.context = context

    async def get_by_id(self, customer_id: int) -> Customer | None:
        return await self.context.find(customer_id)

    async def add(self, customer: Customer) -> None:
        self.context.add(customer)
        await self.context.save_changes()

    async def get_all(self) -> list[Customer]:
        return await self.context.all()


class SqlCustomerRepository(CustomerRepository):
    def __init__(self, context: CustomerContext):
        self.context = context
        self._base = SqlBaseCustomerRepository(context)

    async def get_by_id(self, customer_id: int) -> Customer | None:
        return await self._base.get_by_id(customer_id)

    async def add(self, customer: Customer) -> None:
        await self._base.add(customer)

    async def get_all(self) -> list[Customer]:
        return await self._base.get_all()

    async def update(self, customer: Customer) -> None:
        matched = await self.context.update(customer)
        await self.context.save_changes()
        if not matched:
            logger.info("update: no customer with id=%s; nothing changed", customer.id)

    async def delete(self, customer_id: int) -> None:
        removed = await self.context.remove(customer_id)
        await self.context.save_changes()
        if not removed:
            logger.info("delete: no customer with id=%s; nothing to remove", customer_id)

    async def add_bulk(self, customers: Sequence[Customer]) -> None:
        if not customers:
            return
        self.context.add_all(customers)
        await self.context.save_changes()
        logger.debug("add_bulk: inserted %d customers", len(customers))
