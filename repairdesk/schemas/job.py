"""
Job & Warranty Schemas
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime, date

from repairdesk.models.job import JobStatus

class CustomerCreate(BaseModel):
    first_name: str
    last_name: str
    email: EmailStr
    phone: Optional[str] = None

class ProductCreate(BaseModel):
    product_name: str
    model: Optional[str] = None
    model_number: Optional[str] = None

class JobCreate(BaseModel):
    customer_id: Optional[int] = None
    customer: Optional[CustomerCreate] = None
    product_id: Optional[int] = None
    product: Optional[ProductCreate] = None
    assigned_employee_id: Optional[int] = None
    repair_description: str
    repair_status: JobStatus = JobStatus.PENDING
    received_date: Optional[datetime] = None

class JobStatusUpdate(BaseModel):
    status: JobStatus

class JobResponse(BaseModel):
    id: int
    product_id: int
    customer_id: int
    assigned_employee_id: Optional[int]
    repair_description: Optional[str]
    repair_status: str
    received_date: Optional[datetime]
    handover_date: Optional[datetime]
    warranty_eligible: bool
    original_job_id: Optional[int]

    class Config:
        from_attributes = True

class WarrantyStatusResponse(BaseModel):
    job_id: int
    status: str
    days_remaining: int
    expiry_date: Optional[date]

class WarrantyClaimCreate(BaseModel):
    original_job_id: int
    customer_id: int
    product_id: int
    description: str = Field(..., min_length=1)
    employee_id: Optional[int] = None
    received_date: Optional[datetime] = None

class WarrantyJobsResponse(BaseModel):
    jobs: List[WarrantyStatusResponse]
    total: int
