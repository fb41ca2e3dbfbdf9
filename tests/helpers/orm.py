"""SQLAlchemy declarative models and matching pydantic payloads."""

from __future__ import annotations

from pydantic import BaseModel
from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    addresses: Mapped[list[Address]] = relationship(
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="Address.id",
    )


class Address(Base):
    __tablename__ = "addresses"

    id: Mapped[int] = mapped_column(primary_key=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"))
    street: Mapped[str] = mapped_column(String(200))
    customer: Mapped[Customer] = relationship(back_populates="addresses")


class AddressPayload(BaseModel):
    id: int
    street: str


class CustomerPayload(BaseModel):
    id: int
    name: str
    addresses: list[AddressPayload] = []
