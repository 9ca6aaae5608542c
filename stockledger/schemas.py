from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from . import settings


class DayObservation(BaseModel):
    """One "Day N" slot of a spreadsheet row, before dates or balances are assigned."""

    day: int = Field(..., ge=0)
    procurement_qty: int = Field(default=0, ge=0, alias="procurementQty")
    procurement_price: Decimal = Field(default=Decimal("0.00"), ge=0, alias="procurementPrice")
    sales_qty: int = Field(default=0, ge=0, alias="salesQty")
    sales_price: Decimal = Field(default=Decimal("0.00"), ge=0, alias="salesPrice")
    # only day 1 carries the sheet's declared starting stock
    opening_inventory: Optional[int] = Field(default=None, ge=0, alias="openingInventory")

    model_config = ConfigDict(populate_by_name=True)


class ProductRow(BaseModel):
    product_code: str = Field(..., min_length=1, max_length=settings.MAX_CODE_LEN, alias="productCode")
    product_name: str = Field(..., min_length=1, max_length=settings.MAX_NAME_LEN, alias="productName")
    opening_inventory: int = Field(..., ge=0, alias="openingInventory")
    days: List[DayObservation] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class LedgerEntry(BaseModel):
    """
    One computed DailyRecord, keyed by product code; the persister swaps the code
    for the stored product id. Exports with the camelCase persisted names.
    """

    product_code: str = Field(..., alias="productCode")
    record_date: date = Field(..., alias="recordDate")
    opening_inventory: int = Field(..., alias="openingInventory")
    procurement_qty: int = Field(..., ge=0, alias="procurementQty")
    procurement_price: Decimal = Field(..., ge=0, alias="procurementPrice")
    sales_qty: int = Field(..., ge=0, alias="salesQty")
    sales_price: Decimal = Field(..., ge=0, alias="salesPrice")
    closing_inventory: int = Field(..., alias="closingInventory")

    model_config = ConfigDict(populate_by_name=True)

    def record_values(self, product_id: int) -> dict:
        """Column values for a daily_records insert."""
        values = self.model_dump(exclude={"product_code"})
        values["product_id"] = product_id
        return values


class IngestSummary(BaseModel):
    products_processed: int = Field(default=0, ge=0, alias="productsProcessed")
    records_created: int = Field(default=0, ge=0, alias="recordsCreated")

    model_config = ConfigDict(populate_by_name=True)


class DateRange(BaseModel):
    key: str = "all"
    start: Optional[date] = None
    end: Optional[date] = None
