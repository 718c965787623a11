from sqlalchemy import Column, Float, Integer, String

from cosmetics_store.db.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=False)
    # Catalog order; differs from id order once a product is resurrected
    position = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False)
    brand = Column(String, nullable=False)
    category = Column(String, nullable=False)
