from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from cosmetics_store.domain.models import Product, Sale


def _normalize(text: str | None) -> str:
    return (text or "").strip().lower()


@dataclass(frozen=True, slots=True)
class ProductQuery:
    """Defines which catalog entries match a search.

    Semantics:
    - name and brand match case-insensitively on a substring
    - category matches exactly (after trimming)
    - a blank criterion matches everything
    """

    name: str | None = None
    brand: str | None = None
    category: str | None = None

    def matches(self, product: Product) -> bool:
        name_q = _normalize(self.name)
        brand_q = _normalize(self.brand)
        category_q = (self.category or "").strip()
        return (
            (not name_q or name_q in product.name.lower())
            and (not brand_q or brand_q in product.brand.lower())
            and (not category_q or product.category == category_q)
        )


@dataclass(frozen=True, slots=True)
class SaleQuery:
    """Defines which ledger entries match a search.

    Note: both date bounds are inclusive and compared against the calendar
    date of the sale, so a sale made late on ``date_to`` still matches.
    """

    name: str | None = None
    category: str | None = None
    date_from: date | None = None
    date_to: date | None = None

    def matches(self, sale: Sale) -> bool:
        name_q = _normalize(self.name)
        category_q = (self.category or "").strip()
        sold_on = sale.sold_at.date()
        return (
            (not name_q or name_q in sale.product.name.lower())
            and (not category_q or sale.product.category == category_q)
            and (self.date_from is None or sold_on >= self.date_from)
            and (self.date_to is None or sold_on <= self.date_to)
        )
