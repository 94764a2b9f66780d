"""
Inventory Schemas
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime, timezone
from decimal import Decimal

from repairdesk.models.base import utcnow

class InventoryItemCreate(BaseModel):
    product_name: str = Field(..., min_length=1, max_length=100)
    stock_limit: int = Field(0, ge=0)

class InventoryItemResponse(BaseModel):
    id: int
    product_name: str
    stock_limit: int
    last_updated: Optional[datetime]

    class Config:
        from_attributes = True

class BatchCreate(BaseModel):
    quantity: int = Field(..., ge=1, le=9999)
    cost_per_item: Decimal = Field(..., ge=Decimal("1.00"))
    purchase_date: Optional[datetime] = None

    @field_validator("purchase_date")
    @classmethod
    def not_in_future(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return value
        # Stored as naive UTC
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        if value > utcnow():
            raise ValueError("Purchase date cannot be a future date")
        return value

class BatchResponse(BaseModel):
    id: int
    inventory_id: int
    quantity: int
    cost_per_item: Decimal
    total_amount: Optional[Decimal]
    purchase_date: datetime

    class Config:
        from_attributes = True

class ConsumeRequest(BaseModel):
    inventory_id: int
    # Validated by the service so that 0 and negatives raise InvalidQuantityError
    quantity: int

class ConsumptionLine(BaseModel):
    batch_id: int
    quantity_taken: int
    cost_per_item: Decimal
    line_total: Decimal

class ConsumeResponse(BaseModel):
    job_id: int
    inventory_id: int
    lines: List[ConsumptionLine]

class StockLevel(BaseModel):
    inventory_id: int
    product_name: str
    stock_limit: int
    total_quantity: int
    is_low: bool

class JobUsageLine(BaseModel):
    job_id: int
    inventory_id: int
    batch_id: int
    inventory_name: str
    quantity_used: int
    unit_price: Decimal
    total_amount: Decimal

class JobUsageSummary(BaseModel):
    job_id: int
    lines: List[JobUsageLine]
    total_inventory_cost: Decimal

class PurchaseItemResponse(BaseModel):
    id: int
    inventory_id: int
    batch_id: int
    quantity: int
    total_amount: Decimal
    purchase_date: datetime

    class Config:
        from_attributes = True
