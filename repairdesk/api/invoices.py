"""
Invoices API - Full invoices and advance payments
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from repairdesk.core import get_db, settings
from repairdesk.services import InvoiceService
from repairdesk.schemas.invoice import (
    AdvancePaymentCreate, AdvancePaymentResponse, InvoiceCreate, InvoiceResponse, InvoiceResult,
)

router = APIRouter(prefix="/invoices", tags=["Invoices"])

@router.post("", response_model=InvoiceResult, status_code=201)
def create_invoice(data: InvoiceCreate, db: Session = Depends(get_db)):
    """Invoice a completed job and mark it Paid"""
    return InvoiceService.create_invoice(
        db,
        job_id=data.job_id,
        owner_id=data.owner_id,
        labour_cost=data.labour_cost,
        warranty_eligible=data.warranty_eligible,
        warranty_duration_days=settings.WARRANTY_DURATION_DAYS
    )

@router.get("", response_model=List[InvoiceResponse])
def list_invoices(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db)
):
    return InvoiceService.get_invoices(db, page, per_page)

@router.post("/advance-payments", response_model=AdvancePaymentResponse, status_code=201)
def add_advance_payment(data: AdvancePaymentCreate, db: Session = Depends(get_db)):
    return InvoiceService.add_advance_payment(db, data.job_id, data.owner_id, data.amount)

@router.get("/advance-payments", response_model=List[AdvancePaymentResponse])
def list_advance_payments(
    job_id: Optional[int] = Query(None),
    customer_id: Optional[int] = Query(None),
    db: Session = Depends(get_db)
):
    return InvoiceService.get_advance_payments(db, job_id, customer_id)

@router.get("/{invoice_id}", response_model=InvoiceResponse)
def get_invoice(invoice_id: int, db: Session = Depends(get_db)):
    return InvoiceService.get_invoice(db, invoice_id)
