"""
Repair Job Model
"""
import enum
from sqlalchemy import Column, String, Text, Boolean, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from repairdesk.core import Base
from .base import IntIdMixin, utcnow


class JobStatus(str, enum.Enum):
    BOOKING_PENDING = "Booking Pending"
    BOOKING_APPROVED = "Booking Approved"
    BOOKING_CANCELLED = "Booking Cancelled"
    PENDING = "Pending"
    CANNOT_REPAIR = "Cannot Repair"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    PAID = "Paid"
    WARRANTY_CLAIMED = "Warranty-Claimed"


class Job(Base, IntIdMixin):
    """Repair Job"""
    __tablename__ = "job"
    
    product_id = Column(Integer, ForeignKey("product.id"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False, index=True)
    assigned_employee_id = Column(Integer, ForeignKey("employee.id", ondelete="SET NULL"))
    
    repair_description = Column(Text)
    repair_status = Column(String(30), default=JobStatus.PENDING.value, nullable=False, index=True)
    
    received_date = Column(DateTime, default=utcnow)
    handover_date = Column(DateTime)  # Set once, when the job is completed
    warranty_eligible = Column(Boolean, default=False, nullable=False)
    
    # Warranty claim link
    original_job_id = Column(Integer, ForeignKey("job.id"), index=True)
    
    # Relationships
    product = relationship("Product", back_populates="jobs")
    customer = relationship("Customer", back_populates="jobs")
    assigned_employee = relationship("Employee", back_populates="assigned_jobs")
    original_job = relationship("Job", remote_side="Job.id", back_populates="warranty_claims")
    warranty_claims = relationship("Job", back_populates="original_job")
    used_inventory = relationship("JobUsedInventory", back_populates="job")
    invoice = relationship("Invoice", back_populates="job", uselist=False)
    advance_payments = relationship("AdvancePayment", back_populates="job")
