from cosmetics_store.db.models.product import Product
from cosmetics_store.db.models.sale import Sale

__all__ = ["Product", "Sale"]
