"""
Inventory API - Items, purchase batches and stock levels
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime

from repairdesk.core import get_db
from repairdesk.services import InventoryService
from repairdesk.schemas.inventory import (
    InventoryItemCreate, InventoryItemResponse, BatchCreate, BatchResponse,
    StockLevel, PurchaseItemResponse,
)

router = APIRouter(prefix="/inventory", tags=["Inventory"])

@router.get("", response_model=List[InventoryItemResponse])
def list_items(db: Session = Depends(get_db)):
    return InventoryService.get_items(db)

@router.post("", response_model=InventoryItemResponse, status_code=201)
def create_item(data: InventoryItemCreate, db: Session = Depends(get_db)):
    return InventoryService.create_item(db, data.product_name, data.stock_limit)

@router.get("/stock-levels", response_model=List[StockLevel])
def stock_levels(low_only: bool = Query(False), db: Session = Depends(get_db)):
    """Totals per item; low_only lists items at or below their stock limit"""
    return InventoryService.get_stock_levels(db, low_only=low_only)

@router.get("/purchases")
def list_purchases(
    inventory_id: Optional[int] = Query(None),
    start: Optional[datetime] = Query(None),
    end: Optional[datetime] = Query(None),
    db: Session = Depends(get_db)
):
    ledger = InventoryService.get_purchase_items(db, inventory_id, start, end)
    return {
        "purchase_items": [PurchaseItemResponse.model_validate(p) for p in ledger["purchase_items"]],
        "total_purchase_amount": ledger["total_purchase_amount"],
        "total_quantity_purchased": ledger["total_quantity_purchased"],
        "count": ledger["count"],
    }

@router.get("/{inventory_id}", response_model=InventoryItemResponse)
def get_item(inventory_id: int, db: Session = Depends(get_db)):
    return InventoryService.get_item(db, inventory_id)

@router.post("/{inventory_id}/batches", response_model=BatchResponse, status_code=201)
def register_batch(inventory_id: int, data: BatchCreate, db: Session = Depends(get_db)):
    """Register a purchased batch (also written to the purchase ledger)"""
    return InventoryService.register_batch(
        db,
        inventory_id=inventory_id,
        quantity=data.quantity,
        cost_per_item=data.cost_per_item,
        purchase_date=data.purchase_date
    )

@router.get("/{inventory_id}/batches", response_model=List[BatchResponse])
def list_batches(inventory_id: int, available_only: bool = Query(False), db: Session = Depends(get_db)):
    InventoryService.get_item(db, inventory_id)
    return InventoryService.get_batches(db, inventory_id, available_only=available_only)
