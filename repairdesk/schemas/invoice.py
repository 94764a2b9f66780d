"""
Invoice, Advance Payment & Salary Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

class AdvancePaymentCreate(BaseModel):
    job_id: int
    owner_id: int
    amount: Decimal = Field(..., gt=0)

class AdvancePaymentResponse(BaseModel):
    id: int
    job_id: int
    customer_id: int
    owner_id: int
    amount: Decimal
    paid_at: datetime

    class Config:
        from_attributes = True

class InvoiceCreate(BaseModel):
    job_id: int
    owner_id: int
    labour_cost: Decimal = Field(Decimal("0"), ge=0)
    warranty_eligible: bool = False

class InvoiceResponse(BaseModel):
    id: int
    job_id: int
    customer_id: int
    owner_id: Optional[int]
    parts_cost: Decimal
    labour_cost: Decimal
    total_amount: Decimal
    warranty_eligible: bool
    warranty_expiry: Optional[datetime]
    created_at: datetime

    class Config:
        from_attributes = True

class InvoiceResult(BaseModel):
    invoice: InvoiceResponse
    employee_share: Decimal
    owner_share: Decimal

class FullTimeSalaryEntry(BaseModel):
    employee_id: int
    overtime_pay: Decimal = Decimal("0")
    bonus: Decimal = Decimal("0")
    deductions: Decimal = Decimal("0")

class FullTimeSalaryBatch(BaseModel):
    entries: List[FullTimeSalaryEntry] = Field(..., min_length=1)

class SalaryResponse(BaseModel):
    id: int
    employee_id: int
    payment_date: datetime
    basic_salary: Optional[Decimal]
    overtime_pay: Optional[Decimal]
    bonus: Optional[Decimal]
    deductions: Optional[Decimal]
    total_salary: Decimal

    class Config:
        from_attributes = True
