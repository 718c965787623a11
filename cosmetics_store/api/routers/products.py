from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, status

from cosmetics_store.api.deps import get_service
from cosmetics_store.domain.models import MutationResult
from cosmetics_store.schemas.product import (
    Product,
    ProductCreate,
    ProductMutation,
    ProductUpdate,
)
from cosmetics_store.schemas.sale import Sale, SaleCreate, SaleMutation
from cosmetics_store.services.inventory import InventoryLedgerService

router = APIRouter(prefix="/products", tags=["products"])


def _product_mutation(result: MutationResult) -> ProductMutation:
    return ProductMutation(
        message=result.message,
        persisted=result.persisted,
        product=Product.model_validate(asdict(result.product)) if result.product else None,
    )


@router.get("", response_model=list[Product])
def get_all_products(
    name: str | None = Query(None, description="Substring of the product name"),
    brand: str | None = Query(None, description="Substring of the brand"),
    category: str | None = Query(None, description="Exact category"),
    service: InventoryLedgerService = Depends(get_service),
):
    """
    Get the catalog in insertion order.

    Optional filters narrow the list; name and brand match
    case-insensitively on a substring.
    """
    products = service.search_products(name=name, brand=brand, category=category)
    return [Product.model_validate(asdict(p)) for p in products]


@router.get("/{product_id}", response_model=Product)
def get_product_by_id(
    product_id: int,
    service: InventoryLedgerService = Depends(get_service),
):
    return Product.model_validate(asdict(service.get_product(product_id)))


@router.post("", response_model=ProductMutation, status_code=status.HTTP_201_CREATED)
def create_new_product(
    product_data: ProductCreate,
    service: InventoryLedgerService = Depends(get_service),
):
    """
    Add a product to the catalog. The id is assigned by the service.
    """
    result = service.add_product(
        name=product_data.name,
        price=product_data.price,
        quantity=product_data.quantity,
        brand=product_data.brand,
        category=product_data.category,
    )
    return _product_mutation(result)


@router.put("/{product_id}", response_model=ProductMutation)
def update_product_by_id(
    product_id: int,
    product_data: ProductUpdate,
    service: InventoryLedgerService = Depends(get_service),
):
    """
    Update a product. Omitted brand/category keep their current values.
    """
    result = service.update_product(
        product_id,
        name=product_data.name,
        price=product_data.price,
        quantity=product_data.quantity,
        brand=product_data.brand,
        category=product_data.category,
    )
    return _product_mutation(result)


@router.delete("/{product_id}", response_model=ProductMutation)
def delete_product_by_id(
    product_id: int,
    service: InventoryLedgerService = Depends(get_service),
):
    """
    Delete a product. Deleting an unknown id succeeds without changes.

    Sales of the product stay in the ledger and can still be refunded.
    """
    return _product_mutation(service.delete_product(product_id))


@router.post(
    "/{product_id}/sell",
    response_model=SaleMutation,
    status_code=status.HTTP_201_CREATED,
)
def sell_product_by_id(
    product_id: int,
    sale_data: SaleCreate,
    service: InventoryLedgerService = Depends(get_service),
):
    result = service.sell_product(product_id, sale_data.quantity)
    return SaleMutation(
        message=result.message,
        persisted=result.persisted,
        sale=Sale.model_validate(asdict(result.sale)),
        product=Product.model_validate(asdict(result.product)),
    )
