import logging
import os
from collections.abc import Sequence
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, TypeAdapter, ValidationError

from cosmetics_store.domain.models import Product, ProductSnapshot, Sale, Snapshot
from cosmetics_store.errors import StorageError
from cosmetics_store.repositories.base import Storage

logger = logging.getLogger(__name__)


class ProductRecord(BaseModel):
    id: int
    name: str
    price: float
    quantity: int
    brand: str
    category: str


class SoldProductRecord(BaseModel):
    id: int
    name: str
    price: float
    brand: str
    category: str


class SaleRecord(BaseModel):
    id: int
    product: SoldProductRecord
    quantity_sold: int
    total: float
    date_time: datetime


_products_adapter = TypeAdapter(list[ProductRecord])
_sales_adapter = TypeAdapter(list[SaleRecord])


def _sale_to_record(sale: Sale) -> SaleRecord:
    return SaleRecord(
        id=sale.id,
        product=SoldProductRecord(**asdict(sale.product)),
        quantity_sold=sale.quantity,
        total=sale.total,
        date_time=sale.sold_at,
    )


def _record_to_sale(record: SaleRecord) -> Sale:
    return Sale(
        id=record.id,
        product=ProductSnapshot(**record.product.model_dump()),
        quantity=record.quantity_sold,
        total=record.total,
        sold_at=record.date_time,
    )


class JsonStorage(Storage):
    """Keeps the catalog and the ledger in two pretty-printed JSON files."""

    def __init__(self, products_path: str | Path, sales_path: str | Path):
        self.products_path = Path(products_path)
        self.sales_path = Path(sales_path)

    def _read(self, path: Path, adapter: TypeAdapter, label: str) -> list:
        logger.info("Loading %s from %s", label, path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning("%s file not found: %s. Starting empty.", label.capitalize(), path)
            return []
        except UnicodeDecodeError as e:
            logger.error("Malformed %s file %s: %s", label, path, e)
            raise StorageError(f"Malformed {label} file {path}") from e
        except OSError as e:
            logger.error("Failed to read %s from %s: %s", label, path, e)
            raise StorageError(f"Cannot read {label} file {path}") from e

        if not text.strip():
            logger.warning("%s file is empty: %s. Starting empty.", label.capitalize(), path)
            return []

        try:
            records = adapter.validate_json(text)
        except ValidationError as e:
            logger.error("Malformed %s file %s: %s", label, path, e)
            raise StorageError(f"Malformed {label} file {path}") from e

        logger.info("Loaded %s: count=%d", label, len(records))
        return records

    def _stage(self, path: Path, adapter: TypeAdapter, records: list, label: str) -> Path:
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(adapter.dump_json(records, indent=2))
        except OSError as e:
            logger.error("Failed to save %s to %s: %s", label, path, e)
            raise StorageError(f"Cannot write {label} file {path}") from e
        return tmp_path

    def load(self) -> Snapshot:
        product_records = self._read(self.products_path, _products_adapter, "products")
        sale_records = self._read(self.sales_path, _sales_adapter, "sales")
        return Snapshot(
            products=[Product(**r.model_dump()) for r in product_records],
            sales=[_record_to_sale(r) for r in sale_records],
        )

    def save(self, products: Sequence[Product], sales: Sequence[Sale]) -> None:
        """
        Write both files, replacing neither until both are fully staged.

        Raises:
            StorageError: If either file cannot be written
        """
        logger.info("Saving snapshot: products=%d, sales=%d", len(products), len(sales))
        staged: list[Path] = []
        try:
            staged.append(
                self._stage(
                    self.products_path,
                    _products_adapter,
                    [ProductRecord(**asdict(p)) for p in products],
                    "products",
                )
            )
            staged.append(
                self._stage(
                    self.sales_path,
                    _sales_adapter,
                    [_sale_to_record(s) for s in sales],
                    "sales",
                )
            )
            for tmp_path, path in zip(staged, (self.products_path, self.sales_path)):
                try:
                    os.replace(tmp_path, path)
                except OSError as e:
                    logger.error("Failed to replace %s: %s", path, e)
                    raise StorageError(f"Cannot write file {path}") from e
        finally:
            # Leftovers only exist when the save did not complete
            for tmp_path in staged:
                tmp_path.unlink(missing_ok=True)
        logger.info("Saved snapshot to %s and %s", self.products_path, self.sales_path)
