from __future__ import annotations

from collections.abc import Sequence

from app.crm.models import Customer
from app.crm.repository import CustomerRepository


class CustomerService:
    """
    Entry point for application code. Delegates straight to the repository;
    missing results (None) and store errors come back unchanged.
    """

    def __init__(self, repository: CustomerRepository):
        self.repository = repository

    async def get_customer(self, customer_id: int) -> Customer | None:
        return await self.repository.get_by_id(customer_id)

    async def add_customer(self, customer: Customer) -> None:
        await self.repository.add(customer)

    async def list_customers(self) -> list[Customer]:
        return await self.repository.get_all()

    async def update_customer(self, customer: Customer) -> None:
        await self.repository.update(customer)

    async def delete_customer(self, customer_id: int) -> None:
        await self.repository.delete(customer_id)

    async def add_customers_bulk(self, customers: Sequence[Customer]) -> None:
        await self.repository.add_bulk(customers)
