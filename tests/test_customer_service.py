"""Service facade: end-to-end through the repository plus pass-through checks."""
import pytest

from app.crm.errors import ConstraintViolation, TransportFailure
from app.crm.models import Customer
from app.crm.repository import CustomerRepository
from app.crm.service import CustomerService

pytestmark = pytest.mark.asyncio


async def test_scenario(service):
    await service.add_customer(Customer(id=1, name="John Doe", email="elsaliu@gmail.com", phone="0420991325"))
    c1 = await service.get_customer(1)
    assert (c1.name, c1.email, c1.phone) == ("John Doe", "elsaliu@gmail.com", "0420991325")

    await service.add_customer(Customer(id=2, name="Jane Doe", email="jane@example.com", phone="0400000002"))
    await service.update_customer(Customer(id=2, name="Jane Smith", email="janesm@gmail.com", phone="1234567890"))
    c2 = await service.get_customer(2)
    assert (c2.id, c2.name, c2.email, c2.phone) == (2, "Jane Smith", "janesm@gmail.com", "1234567890")

    await service.add_customer(Customer(id=3, name="Temp", email="temp@example.com", phone="0400000003"))
    await service.delete_customer(3)
    assert await service.get_customer(3) is None

    await service.add_customers_bulk(
        [
            Customer(id=3, name="Alice", email="alice@example.com", phone="0400000013"),
            Customer(id=4, name="Bob", email="bob@example.com", phone="0400000014"),
            Customer(id=5, name="Charlie", email="charlie@example.com", phone="0400000015"),
        ]
    )
    assert [(await service.get_customer(i)).name for i in (3, 4, 5)] == ["Alice", "Bob", "Charlie"]
    assert sorted(c.id for c in await service.list_customers()) == [1, 2, 3, 4, 5]


async def test_missing_customer_is_none(service):
    assert await service.get_customer(1) is None


async def test_delete_missing_customer_does_not_raise(service):
    await service.delete_customer(42)


class RecordingRepository(CustomerRepository):
    """In-process fake that records calls and can be told to fail."""

    def __init__(self, fail_with: Exception | None = None):
        self.calls: list[tuple] = []
        self.fail_with = fail_with

    def _record(self, *call):
        self.calls.append(call)
        if self.fail_with is not None:
            raise self.fail_with

    async def get_by_id(self, customer_id):
        self._record("get_by_id", customer_id)
        return None

    async def add(self, customer):
        self._record("add", customer)

    async def get_all(self):
        self._record("get_all")
        return []

    async def update(self, customer):
        self._record("update", customer)

    async def delete(self, customer_id):
        self._record("delete", customer_id)

    async def add_bulk(self, customers):
        self._record("add_bulk", customers)


async def test_service_delegates_each_operation():
    repo = RecordingRepository()
    service = CustomerService(repo)
    c = Customer(id=1, name="x")
    batch = [Customer(id=2), Customer(id=3)]

    assert await service.get_customer(1) is None
    await service.add_customer(c)
    assert await service.list_customers() == []
    await service.update_customer(c)
    await service.delete_customer(1)
    await service.add_customers_bulk(batch)

    assert repo.calls == [
        ("get_by_id", 1),
        ("add", c),
        ("get_all",),
        ("update", c),
        ("delete", 1),
        ("add_bulk", batch),
    ]


@pytest.mark.parametrize("error", [ConstraintViolation("dup"), TransportFailure("down")])
async def test_service_propagates_errors_unchanged(error):
    service = CustomerService(RecordingRepository(fail_with=error))
    with pytest.raises(type(error)) as exc_info:
        await service.add_customer(Customer(id=1))
    assert exc_info.value is error


async def test_service_surfaces_constraint_violation_from_store(service):
    await service.add_customers_bulk([Customer(id=1), Customer(id=2)])
    with pytest.raises(ConstraintViolation):
        await service.add_customers_bulk([Customer(id=2), Customer(id=3)])
