from sqlalchemy import (
    Column, Integer, String, Date, Numeric, ForeignKey, UniqueConstraint, Index
)
from sqlalchemy.orm import relationship

from .db import Base
from . import settings


class Product(Base):
    __tablename__ = "products"
    id = Column(Integer, primary_key=True)
    product_code = Column(String(settings.MAX_CODE_LEN), nullable=False, unique=True)
    name = Column(String(settings.MAX_NAME_LEN), nullable=False)

    records = relationship(
        "DailyRecord",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DailyRecord.record_date",
    )

    def to_dict(self) -> dict:
        return {"id": self.id, "productCode": self.product_code, "name": self.name}

    def __repr__(self):
        return f"<Product(code={self.product_code!r}, name={self.name!r})>"


class DailyRecord(Base):
    __tablename__ = "daily_records"
    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    record_date = Column(Date, nullable=False)
    opening_inventory = Column(Integer, nullable=False)
    procurement_qty = Column(Integer, nullable=False)
    procurement_price = Column(Numeric(10, 2), nullable=False)
    sales_qty = Column(Integer, nullable=False)
    sales_price = Column(Numeric(10, 2), nullable=False)
    closing_inventory = Column(Integer, nullable=False)  # may go negative (oversold)

    product = relationship("Product", back_populates="records")

    __table_args__ = (
        UniqueConstraint("product_id", "record_date", name="product_date_unique"),
        Index("product_date_idx", "product_id", "record_date"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "productId": self.product_id,
            "recordDate": self.record_date.isoformat(),
            "openingInventory": self.opening_inventory,
            "procurementQty": self.procurement_qty,
            "procurementPrice": str(self.procurement_price),
            "salesQty": self.sales_qty,
            "salesPrice": str(self.sales_price),
            "closingInventory": self.closing_inventory,
        }

    def __repr__(self):
        return f"<DailyRecord(product_id={self.product_id}, date={self.record_date})>"
