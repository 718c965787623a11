import logging
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from cosmetics_store.db.base import Base, make_engine
from cosmetics_store.db.models import Product as ProductModel
from cosmetics_store.db.models import Sale as SaleModel
from cosmetics_store.domain.models import Product, ProductSnapshot, Sale, Snapshot
from cosmetics_store.errors import StorageError
from cosmetics_store.repositories.base import Storage

logger = logging.getLogger(__name__)


def _product_from_row(row: ProductModel) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        price=row.price,
        quantity=row.quantity,
        brand=row.brand,
        category=row.category,
    )


def _sale_from_row(row: SaleModel) -> Sale:
    return Sale(
        id=row.id,
        product=ProductSnapshot(
            id=row.product_id,
            name=row.product_name,
            price=row.product_price,
            brand=row.product_brand,
            category=row.product_category,
        ),
        quantity=row.quantity_sold,
        total=row.total,
        sold_at=row.date_time,
    )


class SqlStorage(Storage):
    """
    Keeps the catalog and the ledger in two relational tables.

    Every save replaces both tables inside one transaction, so the database
    always holds a complete snapshot. Tables are created on first use.
    """

    def __init__(self, database_url: str):
        self.engine = make_engine(database_url)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        Base.metadata.create_all(self.engine)

    def load(self) -> Snapshot:
        logger.info("Loading snapshot from %s", self.engine.url.render_as_string())
        try:
            with self.SessionLocal() as db:
                products = db.query(ProductModel).order_by(ProductModel.position).all()
                sales = db.query(SaleModel).order_by(SaleModel.position).all()
                snapshot = Snapshot(
                    products=[_product_from_row(p) for p in products],
                    sales=[_sale_from_row(s) for s in sales],
                )
        except SQLAlchemyError as e:
            logger.error("Failed to load snapshot: %s", e)
            raise StorageError("Cannot load data from the database") from e

        if not snapshot.products and not snapshot.sales:
            logger.warning("Database is empty. Starting empty.")
        logger.info(
            "Loaded snapshot: products=%d, sales=%d",
            len(snapshot.products),
            len(snapshot.sales),
        )
        return snapshot

    def save(self, products: Sequence[Product], sales: Sequence[Sale]) -> None:
        logger.info("Saving snapshot: products=%d, sales=%d", len(products), len(sales))
        with self.SessionLocal() as db:
            try:
                db.query(SaleModel).delete()
                db.query(ProductModel).delete()
                db.add_all(
                    ProductModel(
                        id=p.id,
                        position=position,
                        name=p.name,
                        price=p.price,
                        quantity=p.quantity,
                        brand=p.brand,
                        category=p.category,
                    )
                    for position, p in enumerate(products)
                )
                db.add_all(
                    SaleModel(
                        id=s.id,
                        position=position,
                        product_id=s.product.id,
                        product_name=s.product.name,
                        product_price=s.product.price,
                        product_brand=s.product.brand,
                        product_category=s.product.category,
                        quantity_sold=s.quantity,
                        total=s.total,
                        date_time=s.sold_at,
                    )
                    for position, s in enumerate(sales)
                )
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error("Failed to save snapshot: %s", e)
                raise StorageError("Cannot save data to the database") from e
