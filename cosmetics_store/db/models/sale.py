from sqlalchemy import Column, DateTime, Float, Integer, String

from cosmetics_store.db.base import Base


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, autoincrement=False)
    position = Column(Integer, nullable=False)
    # No foreign key: the product may have been deleted since the sale
    product_id = Column(Integer, nullable=False, index=True)
    product_name = Column(String, nullable=False)
    product_price = Column(Float, nullable=False)
    product_brand = Column(String, nullable=False)
    product_category = Column(String, nullable=False)
    quantity_sold = Column(Integer, nullable=False)
    total = Column(Float, nullable=False)
    date_time = Column(DateTime, nullable=False)
