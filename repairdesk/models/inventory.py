"""
Inventory Models: items, purchase batches, purchase ledger and job usage
"""
from sqlalchemy import Column, String, Integer, Numeric, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from repairdesk.core import Base
from .base import IntIdMixin, utcnow

class InventoryItem(Base, IntIdMixin):
    """Spare part kept in stock"""
    __tablename__ = "inventory_item"
    
    product_name = Column(String(100), nullable=False)
    stock_limit = Column(Integer, default=0, nullable=False)  # Low stock alert threshold
    last_updated = Column(DateTime, default=utcnow, onupdate=utcnow)
    
    # Relationships
    batches = relationship("InventoryBatch", back_populates="item", cascade="all, delete-orphan")

class InventoryBatch(Base, IntIdMixin):
    """Purchase lot of an inventory item. `quantity` is what remains."""
    __tablename__ = "inventory_batch"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_inventory_batch_quantity_non_negative"),
        Index("ix_inventory_batch_fifo", "inventory_id", "purchase_date", "id"),
    )
    
    inventory_id = Column(Integer, ForeignKey("inventory_item.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False)
    cost_per_item = Column(Numeric(10, 2), nullable=False)
    total_amount = Column(Numeric(15, 2))  # As purchased
    purchase_date = Column(DateTime, default=utcnow, nullable=False)
    
    # Relationships
    item = relationship("InventoryItem", back_populates="batches")

class PurchaseItem(Base, IntIdMixin):
    """Purchase ledger entry, one per registered batch"""
    __tablename__ = "purchase_item"
    
    inventory_id = Column(Integer, ForeignKey("inventory_item.id", ondelete="CASCADE"), nullable=False, index=True)
    batch_id = Column(Integer, ForeignKey("inventory_batch.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False)
    total_amount = Column(Numeric(15, 2), nullable=False)
    purchase_date = Column(DateTime, default=utcnow, nullable=False)
    
    # Relationships
    item = relationship("InventoryItem")

class JobUsedInventory(Base):
    """Parts drawn from one batch for one job"""
    __tablename__ = "job_used_inventory"
    
    job_id = Column(Integer, ForeignKey("job.id", ondelete="CASCADE"), primary_key=True)
    inventory_id = Column(Integer, ForeignKey("inventory_item.id", ondelete="CASCADE"), primary_key=True)
    batch_id = Column(Integer, ForeignKey("inventory_batch.id"), primary_key=True)
    quantity_used = Column(Integer, nullable=False)
    total_amount = Column(Numeric(15, 2), nullable=False)
    
    # Relationships
    job = relationship("Job", back_populates="used_inventory")
    item = relationship("InventoryItem")
    batch = relationship("InventoryBatch")
