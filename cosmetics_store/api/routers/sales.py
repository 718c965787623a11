from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, Query

from cosmetics_store.api.deps import get_service
from cosmetics_store.schemas.product import Product, ProductMutation
from cosmetics_store.schemas.sale import Sale
from cosmetics_store.services.inventory import InventoryLedgerService

router = APIRouter(prefix="/sales", tags=["sales"])


@router.get("", response_model=list[Sale])
def get_all_sales(
    name: str | None = Query(None, description="Substring of the sold product's name"),
    category: str | None = Query(None, description="Exact category"),
    date_from: date | None = Query(None, description="First sale date, inclusive"),
    date_to: date | None = Query(None, description="Last sale date, inclusive"),
    service: InventoryLedgerService = Depends(get_service),
):
    """
    Get the ledger in chronological order, optionally filtered.
    """
    sales = service.search_sales(
        name=name, category=category, date_from=date_from, date_to=date_to
    )
    return [Sale.model_validate(asdict(s)) for s in sales]


@router.get("/{sale_id}", response_model=Sale)
def get_sale_by_id(
    sale_id: int,
    service: InventoryLedgerService = Depends(get_service),
):
    return Sale.model_validate(asdict(service.get_sale(sale_id)))


@router.post("/{sale_id}/refund", response_model=ProductMutation)
def refund_sale_by_id(
    sale_id: int,
    service: InventoryLedgerService = Depends(get_service),
):
    """
    Refund a sale: the units go back to stock and the sale leaves the ledger.

    If the product was deleted after the sale, it is restored under its
    original id with the refunded quantity as stock.
    """
    result = service.refund_sale(sale_id)
    return ProductMutation(
        message=result.message,
        persisted=result.persisted,
        product=Product.model_validate(asdict(result.product)),
    )
