"""
Inventory Service - Batches, purchasing and FIFO consumption by jobs
"""
from sqlalchemy.orm import Session
from sqlalchemy import func, update
from typing import List, Optional, Dict
from datetime import datetime
from decimal import Decimal
import logging

from repairdesk.core.errors import InvalidQuantityError, InsufficientStockError, NotFoundError, ValidationError
from repairdesk.models import InventoryItem, InventoryBatch, PurchaseItem, JobUsedInventory, Job, utcnow
from repairdesk.schemas.inventory import ConsumptionLine

logger = logging.getLogger(__name__)

MAX_BATCH_QUANTITY = 9999
MIN_COST_PER_ITEM = Decimal("1.00")


class InventoryService:
    """Inventory business logic"""

    # ===================== ITEMS =====================

    @staticmethod
    def create_item(db: Session, product_name: str, stock_limit: int = 0) -> InventoryItem:
        """Create new inventory item"""
        if stock_limit < 0:
            raise ValidationError("Stock limit must be a non-negative integer")

        item = InventoryItem(product_name=product_name, stock_limit=stock_limit)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def get_items(db: Session) -> List[InventoryItem]:
        return db.query(InventoryItem).order_by(InventoryItem.id).all()

    @staticmethod
    def get_item(db: Session, inventory_id: int) -> InventoryItem:
        """Get inventory item by ID, raising NotFoundError if absent"""
        item = db.query(InventoryItem).filter(InventoryItem.id == inventory_id).first()
        if not item:
            raise NotFoundError(f"Inventory item {inventory_id} not found")
        return item

    @staticmethod
    def get_stock_levels(db: Session, low_only: bool = False) -> List[Dict]:
        """Total remaining quantity per item; low_only keeps items at or below their stock limit"""
        rows = db.query(
            InventoryItem.id,
            InventoryItem.product_name,
            InventoryItem.stock_limit,
            func.coalesce(func.sum(InventoryBatch.quantity), 0).label("total_quantity")
        ).outerjoin(
            InventoryBatch, InventoryBatch.inventory_id == InventoryItem.id
        ).group_by(
            InventoryItem.id,
            InventoryItem.product_name,
            InventoryItem.stock_limit
        ).order_by(InventoryItem.id).all()

        results = []
        for r in rows:
            total = int(r.total_quantity or 0)
            is_low = total <= r.stock_limit
            if low_only and not is_low:
                continue
            results.append({
                "inventory_id": r.id,
                "product_name": r.product_name,
                "stock_limit": r.stock_limit,
                "total_quantity": total,
                "is_low": is_low,
            })

        return results

    # ===================== BATCHES =====================

    @staticmethod
    def register_batch(
        db: Session,
        inventory_id: int,
        quantity: int,
        cost_per_item: Decimal,
        purchase_date: Optional[datetime] = None
    ) -> InventoryBatch:
        """Register a purchased batch and its purchase ledger entry in one transaction"""
        if not 1 <= quantity <= MAX_BATCH_QUANTITY:
            raise InvalidQuantityError(f"Quantity must be an integer between 1 and {MAX_BATCH_QUANTITY}")
        cost_per_item = Decimal(str(cost_per_item))
        if cost_per_item < MIN_COST_PER_ITEM:
            raise ValidationError("Cost per item must be a positive number")
        now = utcnow()
        if purchase_date and purchase_date > now:
            raise ValidationError("Purchase date cannot be a future date")

        item = InventoryService.get_item(db, inventory_id)
        purchase_date = purchase_date or now
        total_amount = cost_per_item * quantity

        try:
            batch = InventoryBatch(
                inventory_id=item.id,
                quantity=quantity,
                cost_per_item=cost_per_item,
                total_amount=total_amount,
                purchase_date=purchase_date
            )
            db.add(batch)
            db.flush()

            db.add(PurchaseItem(
                inventory_id=item.id,
                batch_id=batch.id,
                quantity=quantity,
                total_amount=total_amount,
                purchase_date=purchase_date
            ))
            item.last_updated = now
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(batch)
        logger.info(f"Registered batch {batch.id} for inventory {item.id}: {quantity} x {cost_per_item}")
        return batch

    @staticmethod
    def get_batches(db: Session, inventory_id: int, available_only: bool = False) -> List[InventoryBatch]:
        """Batches of an item in consumption order (oldest purchase first)"""
        query = db.query(InventoryBatch).filter(InventoryBatch.inventory_id == inventory_id)

        if available_only:
            query = query.filter(InventoryBatch.quantity > 0)

        return query.order_by(InventoryBatch.purchase_date.asc(), InventoryBatch.id.asc()).all()

    @staticmethod
    def get_purchase_items(
        db: Session,
        inventory_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> Dict:
        """Purchase ledger, newest first, with totals"""
        query = db.query(PurchaseItem)

        if inventory_id is not None:
            query = query.filter(PurchaseItem.inventory_id == inventory_id)
        if start is not None:
            query = query.filter(PurchaseItem.purchase_date >= start)
        if end is not None:
            query = query.filter(PurchaseItem.purchase_date <= end)

        items = query.order_by(PurchaseItem.purchase_date.desc(), PurchaseItem.id.desc()).all()

        return {
            "purchase_items": items,
            "total_purchase_amount": sum((Decimal(p.total_amount) for p in items), Decimal("0")),
            "total_quantity_purchased": sum(p.quantity for p in items),
            "count": len(items),
        }

    # ===================== CONSUMPTION =====================

    @staticmethod
    def consume(db: Session, job_id: int, inventory_id: int, quantity: int) -> List[ConsumptionLine]:
        """
        Draw `quantity` units of an item for a job, oldest batch first.

        All batch decrements and usage rows are committed together or not at all.
        The item row and its batch rows are locked (SELECT ... FOR UPDATE) so
        concurrent consumers of the same item are serialized, and every
        decrement is conditional on the batch still holding enough stock.
        """
        if quantity is None or quantity <= 0:
            raise InvalidQuantityError()

        try:
            job = db.query(Job).filter(Job.id == job_id).first()
            if not job:
                raise NotFoundError(f"Job {job_id} not found")

            item = db.query(InventoryItem).filter(
                InventoryItem.id == inventory_id
            ).with_for_update().first()
            if not item:
                raise NotFoundError(f"Inventory item {inventory_id} not found")

            batches = db.query(InventoryBatch).filter(
                InventoryBatch.inventory_id == inventory_id,
                InventoryBatch.quantity > 0
            ).order_by(
                InventoryBatch.purchase_date.asc(),
                InventoryBatch.id.asc()
            ).with_for_update().all()

            available = sum(b.quantity for b in batches)
            if available < quantity:
                raise InsufficientStockError(shortfall=quantity - available)

            lines: List[ConsumptionLine] = []
            remaining = quantity
            for batch in batches:
                if remaining == 0:
                    break

                take = min(remaining, batch.quantity)
                cost = Decimal(batch.cost_per_item)

                result = db.execute(
                    update(InventoryBatch)
                    .where(InventoryBatch.id == batch.id, InventoryBatch.quantity >= take)
                    .values(quantity=InventoryBatch.quantity - take)
                )
                if result.rowcount != 1:
                    # Lost a race with another writer
                    raise InsufficientStockError(shortfall=remaining)

                InventoryService._add_usage(db, job.id, item.id, batch.id, take, cost)
                lines.append(ConsumptionLine(
                    batch_id=batch.id,
                    quantity_taken=take,
                    cost_per_item=cost,
                    line_total=cost * take
                ))
                remaining -= take

            item.last_updated = utcnow()
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(
            f"Job {job_id} consumed {quantity} of inventory {inventory_id} "
            f"from batches {[line.batch_id for line in lines]}"
        )
        return lines

    @staticmethod
    def _add_usage(db: Session, job_id: int, inventory_id: int, batch_id: int, quantity: int, cost: Decimal) -> JobUsedInventory:
        """Insert or accumulate the usage row for (job, item, batch)"""
        usage = db.query(JobUsedInventory).filter(
            JobUsedInventory.job_id == job_id,
            JobUsedInventory.inventory_id == inventory_id,
            JobUsedInventory.batch_id == batch_id
        ).first()

        if usage:
            usage.quantity_used += quantity
        else:
            usage = JobUsedInventory(
                job_id=job_id,
                inventory_id=inventory_id,
                batch_id=batch_id,
                quantity_used=quantity
            )
            db.add(usage)

        usage.total_amount = cost * usage.quantity_used
        db.flush()
        return usage

    @staticmethod
    def release_usage(db: Session, job_id: int, inventory_id: int, batch_id: int) -> int:
        """Remove a usage row and return its quantity to the batch"""
        try:
            usage = db.query(JobUsedInventory).filter(
                JobUsedInventory.job_id == job_id,
                JobUsedInventory.inventory_id == inventory_id,
                JobUsedInventory.batch_id == batch_id
            ).with_for_update().first()
            if not usage:
                raise NotFoundError("Job used inventory not found")

            released = usage.quantity_used
            db.execute(
                update(InventoryBatch)
                .where(InventoryBatch.id == batch_id)
                .values(quantity=InventoryBatch.quantity + released)
            )
            db.delete(usage)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Released {released} of inventory {inventory_id} (batch {batch_id}) from job {job_id}")
        return released

    @staticmethod
    def get_job_usage(db: Session, job_id: int) -> Dict:
        """Usage lines of a job with item names, unit prices and the total cost"""
        rows = db.query(JobUsedInventory, InventoryItem.product_name, InventoryBatch.cost_per_item).join(
            InventoryItem, InventoryItem.id == JobUsedInventory.inventory_id
        ).join(
            InventoryBatch, InventoryBatch.id == JobUsedInventory.batch_id
        ).filter(
            JobUsedInventory.job_id == job_id
        ).order_by(JobUsedInventory.inventory_id, JobUsedInventory.batch_id).all()

        lines = [
            {
                "job_id": usage.job_id,
                "inventory_id": usage.inventory_id,
                "batch_id": usage.batch_id,
                "inventory_name": name,
                "quantity_used": usage.quantity_used,
                "unit_price": Decimal(unit_price),
                "total_amount": Decimal(usage.total_amount),
            }
            for usage, name, unit_price in rows
        ]

        return {
            "job_id": job_id,
            "lines": lines,
            "total_inventory_cost": sum((line["total_amount"] for line in lines), Decimal("0")),
        }
