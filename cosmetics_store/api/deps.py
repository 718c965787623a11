from fastapi import Request

from cosmetics_store.core.config import Settings
from cosmetics_store.repositories.base import Storage
from cosmetics_store.repositories.json_storage import JsonStorage
from cosmetics_store.repositories.sql_storage import SqlStorage
from cosmetics_store.services.inventory import InventoryLedgerService


def build_storage(settings: Settings) -> Storage:
    """Pick the storage adapter named by STORAGE_BACKEND."""
    if settings.storage_backend == "sql":
        return SqlStorage(settings.database_url)
    return JsonStorage(settings.products_file, settings.sales_file)


def build_service(settings: Settings) -> InventoryLedgerService:
    return InventoryLedgerService(
        build_storage(settings),
        currency_label=settings.currency_label,
    )


def get_service(request: Request) -> InventoryLedgerService:
    """Return the process-wide service created on application startup."""
    return request.app.state.service
