from pydantic import BaseModel, ConfigDict


class Product(BaseModel):
    id: int
    name: str
    price: float
    quantity: int
    brand: str
    category: str


class ProductCreate(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    price: float
    quantity: int
    brand: str
    category: str


class ProductUpdate(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    price: float
    quantity: int
    brand: str | None = None
    category: str | None = None


class ProductMutation(BaseModel):
    message: str
    persisted: bool
    product: Product | None = None
