from datetime import datetime

from pydantic import BaseModel, Field

from cosmetics_store.schemas.product import Product


class SoldProduct(BaseModel):
    id: int
    name: str
    price: float
    brand: str
    category: str


class Sale(BaseModel):
    id: int
    product: SoldProduct
    quantity: int
    total: float
    sold_at: datetime


class SaleCreate(BaseModel):
    quantity: int = Field(..., description="Units to sell; must not exceed stock")


class SaleMutation(BaseModel):
    message: str
    persisted: bool
    sale: Sale
    product: Product
