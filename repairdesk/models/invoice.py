"""
Invoice, Advance Payment & Salary Models
"""
from sqlalchemy import Column, Integer, Numeric, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from repairdesk.core import Base
from .base import IntIdMixin, CreatedAtMixin, utcnow

class Invoice(Base, IntIdMixin, CreatedAtMixin):
    """Full payment invoice, one per job"""
    __tablename__ = "invoice"
    
    job_id = Column(Integer, ForeignKey("job.id", ondelete="CASCADE"), unique=True, nullable=False)
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False)
    owner_id = Column(Integer, ForeignKey("employee.id"))
    
    parts_cost = Column(Numeric(10, 2), default=0)
    labour_cost = Column(Numeric(10, 2), default=0)
    total_amount = Column(Numeric(10, 2), default=0)
    
    warranty_eligible = Column(Boolean, default=False, nullable=False)
    warranty_expiry = Column(DateTime)
    
    # Relationships
    job = relationship("Job", back_populates="invoice")

class AdvancePayment(Base, IntIdMixin):
    """Advance taken before the repair is finished"""
    __tablename__ = "advance_payment"
    
    job_id = Column(Integer, ForeignKey("job.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customer.id"), nullable=False)
    owner_id = Column(Integer, ForeignKey("employee.id"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    paid_at = Column(DateTime, default=utcnow, nullable=False)
    
    # Relationships
    job = relationship("Job", back_populates="advance_payments")

class Salary(Base, IntIdMixin):
    """Salary or revenue share paid to an employee"""
    __tablename__ = "salary"
    
    employee_id = Column(Integer, ForeignKey("employee.id", ondelete="CASCADE"), nullable=False, index=True)
    payment_date = Column(DateTime, default=utcnow, nullable=False)
    basic_salary = Column(Numeric(10, 2))
    overtime_pay = Column(Numeric(10, 2))
    bonus = Column(Numeric(10, 2))
    deductions = Column(Numeric(10, 2))
    total_salary = Column(Numeric(10, 2), nullable=False)
    
    # Relationships
    employee = relationship("Employee", back_populates="salaries")
