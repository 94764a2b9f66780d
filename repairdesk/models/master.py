"""
Master Tables: Customer, Employee, Product
"""
from sqlalchemy import Column, String, Numeric
from sqlalchemy.orm import relationship
from repairdesk.core import Base
from .base import IntIdMixin

EMPLOYEE_ROLES = ("technician", "owner")
EMPLOYMENT_TYPES = ("Full-Time", "Part-Time")

class Customer(Base, IntIdMixin):
    """Shop Customer"""
    __tablename__ = "customer"
    
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(100), nullable=False)
    phone = Column(String(20), index=True)
    
    # Relationships
    jobs = relationship("Job", back_populates="customer")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

class Employee(Base, IntIdMixin):
    """Technician or Owner"""
    __tablename__ = "employee"
    
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False)  # technician, owner
    employment_type = Column(String(20), nullable=False)  # Full-Time, Part-Time
    basic_salary = Column(Numeric(10, 2), default=0)
    
    # Relationships
    assigned_jobs = relationship("Job", back_populates="assigned_employee")
    salaries = relationship("Salary", back_populates="employee")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

class Product(Base, IntIdMixin):
    """Customer device brought in for repair"""
    __tablename__ = "product"
    
    product_name = Column(String(255), nullable=False)
    model = Column(String(255))
    model_number = Column(String(255))
    
    # Relationships
    jobs = relationship("Job", back_populates="product")
