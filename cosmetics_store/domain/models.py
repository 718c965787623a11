"""Value objects held by the inventory service.

Entities are frozen: a mutation replaces the stored instance, so any
Product or Sale handed out by the service is a stable snapshot that
callers cannot use to change catalog or ledger state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Product:
    id: int
    name: str
    price: float
    quantity: int
    brand: str
    category: str


@dataclass(frozen=True, slots=True)
class ProductSnapshot:
    """Identity and attributes of a product as they were when it was sold.

    Carries no stock: a refund that resurrects a deleted product
    sets the quantity from the refunded amount.
    """

    id: int
    name: str
    price: float
    brand: str
    category: str

    @classmethod
    def of(cls, product: Product) -> ProductSnapshot:
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            brand=product.brand,
            category=product.category,
        )

    def restore(self, quantity: int) -> Product:
        return Product(
            id=self.id,
            name=self.name,
            price=self.price,
            quantity=quantity,
            brand=self.brand,
            category=self.category,
        )


@dataclass(frozen=True, slots=True)
class Sale:
    id: int
    product: ProductSnapshot
    quantity: int
    # price * quantity at sale time; never recomputed
    total: float
    sold_at: datetime

    @property
    def product_id(self) -> int:
        return self.product.id


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Full copy of catalog and ledger exchanged with storage."""

    products: list[Product] = field(default_factory=list)
    sales: list[Sale] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class MutationResult:
    """Outcome of a service mutation.

    ``persisted`` is False when the in-memory change was applied but the
    save that follows it failed.
    """

    message: str
    persisted: bool = True
    product: Product | None = None
    sale: Sale | None = None
