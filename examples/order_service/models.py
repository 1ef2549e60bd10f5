"""Order service data model used to demonstrate JSON size bounds."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import ClassVar
from uuid import UUID

from jsonbound.schema import Int32, ZonedDateTime


class OrderStatus(Enum):
    NEW = "new"
    PAID = "paid"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"


@dataclass
class Entity:
    id: UUID
    created_at: ZonedDateTime


@dataclass
class Customer(Entity):
    name: str
    email: str
    tags: list[str] = field(default_factory=list)


@dataclass
class OrderLine:
    sku: str
    quantity: Int32
    unit_price: float


@dataclass
class Order(Entity):
    TABLE: ClassVar[str] = "orders"

    customer: Customer
    status: OrderStatus
    lines: list[OrderLine]
    placed_on: date
    notes: str | None = None
    replaces: Order | None = None  # Order this one supersedes
