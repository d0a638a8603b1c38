from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from sqlalchemy import Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Customer(Base):
    __tablename__ = "customers"

    # Keys are assigned by the caller, never generated by the store.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(Text, nullable=True)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email, "phone": self.phone}

    def __repr__(self) -> str:
        return f"Customer(id={self.id!r}, name={self.name!r}, email={self.email!r}, phone={self.phone!r})"


@dataclass
class Review:
    """
    Read-only review record served by the external review backend.
    Field names match the backend's JSON keys exactly.
    """
    id: int
    person_name: str | None = None
    job_role: str | None = None
    avatar: str | None = None
    rating: int = 0
    review: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Review":
        return cls(
            id=data.get("id") or 0,
            person_name=data.get("person_name"),
            job_role=data.get("job_role"),
            avatar=data.get("avatar"),
            rating=data.get("rating") or 0,
            review=data.get("review"),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
