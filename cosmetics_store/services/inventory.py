import logging
import math
import threading
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date, datetime
from typing import TypeVar

from cosmetics_store.domain.models import (
    MutationResult,
    Product,
    ProductSnapshot,
    Sale,
)
from cosmetics_store.domain.queries import ProductQuery, SaleQuery
from cosmetics_store.errors import (
    EmptyFieldError,
    NegativeValueError,
    NotFoundError,
    QuantityExceededError,
    StorageError,
)
from cosmetics_store.repositories.base import Storage

logger = logging.getLogger(__name__)

_Entity = TypeVar("_Entity", Product, Sale)
_Amount = TypeVar("_Amount", int, float)


def _require_text(value: str | None, message: str) -> None:
    if value is None or not value.strip():
        raise EmptyFieldError(message)


def _require_non_negative(value: float, message: str) -> None:
    # NaN compares False against everything, so check finiteness first
    if not math.isfinite(value) or value < 0:
        raise NegativeValueError(message)


def _sorted_desc(totals: dict[str, _Amount]) -> dict[str, _Amount]:
    return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))


def _index_by_id(items: Iterable[_Entity], label: str) -> dict[int, _Entity]:
    indexed: dict[int, _Entity] = {}
    for item in items:
        if item.id in indexed:
            logger.error("Duplicate %s id in stored data: %d", label, item.id)
            raise StorageError(f"Duplicate {label} id {item.id} in stored data")
        indexed[item.id] = item
    return indexed


class InventoryLedgerService:
    """
    Owns the product catalog and the sales ledger.

    Every mutation is validated before it touches state, then applied, then
    followed by a full save of both collections through the injected storage.
    A single lock guards the catalog+ledger pair, so the service can be
    shared between request threads.
    """

    def __init__(
        self,
        storage: Storage,
        clock: Callable[[], datetime] = datetime.now,
        currency_label: str = "тг.",
    ):
        self.storage = storage
        self.clock = clock
        self.currency_label = currency_label
        self._lock = threading.RLock()

        snapshot = storage.load()
        # Dicts keep insertion order, which is catalog/ledger order
        self._products: dict[int, Product] = _index_by_id(snapshot.products, "product")
        self._sales: dict[int, Sale] = _index_by_id(snapshot.sales, "sale")

        # Ids referenced by sales stay reserved so a refund can resurrect them
        known_ids = [*self._products, *(s.product_id for s in self._sales.values())]
        self._next_product_id = max(known_ids, default=0) + 1
        self._next_sale_id = max(self._sales, default=0) + 1

        logger.info(
            "Inventory loaded: products=%d, sales=%d, next_product_id=%d",
            len(self._products),
            len(self._sales),
            self._next_product_id,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> list[Product]:
        with self._lock:
            return list(self._products.values())

    def list_sales(self) -> list[Sale]:
        with self._lock:
            return list(self._sales.values())

    def find_product_by_id(self, product_id: int) -> Product | None:
        with self._lock:
            return self._products.get(product_id)

    def get_product(self, product_id: int) -> Product:
        """
        Get a product by ID.

        Raises:
            NotFoundError: If the product is not in the catalog
        """
        product = self.find_product_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found")
        return product

    def get_sale(self, sale_id: int) -> Sale:
        """
        Get a sale by ID.

        Raises:
            NotFoundError: If the sale is not in the ledger
        """
        with self._lock:
            sale = self._sales.get(sale_id)
        if sale is None:
            raise NotFoundError(f"Sale {sale_id} not found")
        return sale

    def search_products(
        self,
        name: str | None = None,
        brand: str | None = None,
        category: str | None = None,
    ) -> list[Product]:
        query = ProductQuery(name=name, brand=brand, category=category)
        return [p for p in self.list_products() if query.matches(p)]

    def search_sales(
        self,
        name: str | None = None,
        category: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[Sale]:
        query = SaleQuery(name=name, category=category, date_from=date_from, date_to=date_to)
        return [s for s in self.list_sales() if query.matches(s)]

    def revenue_total(self) -> float:
        return sum((s.total for s in self.list_sales()), 0.0)

    def total_revenue(self) -> str:
        """Total revenue over the whole ledger, formatted for display."""
        return f"Total revenue: {self.revenue_total():.2f} {self.currency_label}"

    def revenue_by_category(self) -> dict[str, float]:
        totals: dict[str, float] = {}
        for sale in self.list_sales():
            category = sale.product.category
            totals[category] = totals.get(category, 0.0) + sale.total
        return _sorted_desc(totals)

    def units_sold_by_category(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for sale in self.list_sales():
            category = sale.product.category
            counts[category] = counts.get(category, 0) + sale.quantity
        return _sorted_desc(counts)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_product(
        self,
        name: str,
        price: float,
        quantity: int,
        brand: str,
        category: str,
    ) -> MutationResult:
        """
        Add a product to the catalog under a freshly minted id.

        Raises:
            EmptyFieldError: If name, brand or category is blank
            NegativeValueError: If price or quantity is negative or not finite
        """
        _require_text(name, "Name cannot be empty")
        _require_text(brand, "Brand cannot be empty")
        _require_text(category, "Category cannot be empty")
        _require_non_negative(price, "Price cannot be negative")
        _require_non_negative(quantity, "Quantity cannot be negative")

        with self._lock:
            product = Product(
                id=self._next_product_id,
                name=name,
                price=price,
                quantity=quantity,
                brand=brand,
                category=category,
            )
            self._next_product_id += 1
            self._products[product.id] = product
            logger.info(
                "Product added: id=%d, name=%r, price=%s, qty=%d, brand=%r, category=%r",
                product.id,
                name,
                price,
                quantity,
                brand,
                category,
            )
            return self._persisted("Product added!", product=product)

    def update_product(
        self,
        product_id: int,
        name: str,
        price: float,
        quantity: int,
        brand: str | None = None,
        category: str | None = None,
    ) -> MutationResult:
        """
        Overwrite a product's attributes in place.

        Brand and category are left untouched when omitted.

        Raises:
            EmptyFieldError: If name, or a given brand/category, is blank
            NegativeValueError: If price or quantity is negative or not finite
            NotFoundError: If the product is not in the catalog
        """
        _require_text(name, "Name cannot be empty")
        if brand is not None:
            _require_text(brand, "Brand cannot be empty")
        if category is not None:
            _require_text(category, "Category cannot be empty")
        _require_non_negative(price, "Price cannot be negative")
        _require_non_negative(quantity, "Quantity cannot be negative")

        with self._lock:
            current = self.get_product(product_id)
            product = replace(
                current,
                name=name,
                price=price,
                quantity=quantity,
                brand=brand if brand is not None else current.brand,
                category=category if category is not None else current.category,
            )
            self._products[product_id] = product
            logger.info(
                "Product updated: id=%d, name=%r, price=%s, qty=%d, brand=%r, category=%r",
                product.id,
                product.name,
                product.price,
                product.quantity,
                product.brand,
                product.category,
            )
            return self._persisted("Product updated!", product=product)

    def delete_product(self, product_id: int) -> MutationResult:
        """Remove a product from the catalog. Deleting an absent product is a no-op."""
        with self._lock:
            product = self._products.pop(product_id, None)
            if product is None:
                logger.info("Delete requested for absent product id=%d", product_id)
            else:
                logger.info("Product deleted: id=%d, name=%r", product.id, product.name)
            return self._persisted("Product deleted!", product=product)

    def sell_product(self, product_id: int, quantity: int) -> MutationResult:
        """
        Record a sale and take the sold units out of stock.

        Raises:
            NegativeValueError: If quantity is not positive
            NotFoundError: If the product is not in the catalog
            QuantityExceededError: If quantity exceeds the product's stock
        """
        if quantity <= 0:
            raise NegativeValueError("Quantity must be greater than zero")

        with self._lock:
            product = self.get_product(product_id)
            if quantity > product.quantity:
                raise QuantityExceededError("Cannot sell more than is in stock")

            product = replace(product, quantity=product.quantity - quantity)
            self._products[product_id] = product
            sale = Sale(
                id=self._next_sale_id,
                product=ProductSnapshot.of(product),
                quantity=quantity,
                total=product.price * quantity,
                sold_at=self.clock(),
            )
            self._next_sale_id += 1
            self._sales[sale.id] = sale
            logger.info(
                "Sale recorded: id=%d, product_id=%d, qty=%d, total=%s",
                sale.id,
                product.id,
                quantity,
                sale.total,
            )
            return self._persisted("Sold!", product=product, sale=sale)

    def refund_sale(self, sale_id: int) -> MutationResult:
        """
        Undo a sale: return its units to stock and drop it from the ledger.

        When the sold product has been deleted since the sale, it is restored
        to the catalog under its original id, stocked with the refunded
        quantity only.

        Raises:
            NotFoundError: If the sale is not in the ledger
        """
        with self._lock:
            sale = self.get_sale(sale_id)
            existing = self._products.get(sale.product_id)
            if existing is not None:
                product = replace(existing, quantity=existing.quantity + sale.quantity)
            else:
                product = sale.product.restore(sale.quantity)
                logger.info("Product resurrected by refund: id=%d", product.id)
            self._products[product.id] = product
            del self._sales[sale_id]
            logger.info(
                "Sale refunded: id=%d, product_id=%d, qty=%d",
                sale.id,
                product.id,
                sale.quantity,
            )
            message = (
                f"Refund completed! Product: {product.name}, "
                f"quantity: {sale.quantity} pcs."
            )
            return self._persisted(message, product=product, sale=sale)

    def flush(self) -> None:
        """
        Save the current snapshot.

        Raises:
            StorageError: If the storage cannot write the snapshot
        """
        with self._lock:
            self.storage.save(list(self._products.values()), list(self._sales.values()))

    def _persisted(self, message: str, **affected) -> MutationResult:
        # The in-memory change stands even if the durable copy lags behind
        try:
            self.flush()
        except StorageError as e:
            logger.error("Failed to persist after mutation: %s", e)
            return MutationResult(message=message, persisted=False, **affected)
        return MutationResult(message=message, persisted=True, **affected)
