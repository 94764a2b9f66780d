"""
Jobs API - Registration, status, parts usage and warranty status
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from repairdesk.core import get_db, settings
from repairdesk.services import InventoryService, JobService, WarrantyService
from repairdesk.schemas.inventory import ConsumeRequest, ConsumeResponse, JobUsageSummary
from repairdesk.schemas.job import JobCreate, JobStatusUpdate, JobResponse, WarrantyStatusResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])

@router.get("")
def list_jobs(
    status: Optional[str] = Query(None),
    customer_id: Optional[int] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db)
):
    jobs, total = JobService.get_jobs(db, status, customer_id, page, per_page)
    return {
        "jobs": [JobResponse.model_validate(j) for j in jobs],
        "total": total,
        "page": page,
        "per_page": per_page
    }

@router.post("", response_model=JobResponse, status_code=201)
def register_job(data: JobCreate, db: Session = Depends(get_db)):
    """Register a job, with a new customer and product when no ids are given"""
    return JobService.register_job(db, data)

@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    return JobService.get_job(db, job_id)

@router.post("/{job_id}/status", response_model=JobResponse)
def update_status(job_id: int, data: JobStatusUpdate, db: Session = Depends(get_db)):
    return JobService.update_status(db, job_id, data.status.value)

# ===================== PARTS USAGE =====================

@router.post("/{job_id}/inventory", response_model=ConsumeResponse, status_code=201)
def consume_inventory(job_id: int, data: ConsumeRequest, db: Session = Depends(get_db)):
    """Draw parts for a job, oldest batch first"""
    lines = InventoryService.consume(db, job_id, data.inventory_id, data.quantity)
    return {"job_id": job_id, "inventory_id": data.inventory_id, "lines": lines}

@router.get("/{job_id}/inventory", response_model=JobUsageSummary)
def job_usage(job_id: int, db: Session = Depends(get_db)):
    JobService.get_job(db, job_id)
    return InventoryService.get_job_usage(db, job_id)

@router.delete("/{job_id}/inventory/{inventory_id}/{batch_id}")
def release_inventory(job_id: int, inventory_id: int, batch_id: int, db: Session = Depends(get_db)):
    released = InventoryService.release_usage(db, job_id, inventory_id, batch_id)
    return {"success": True, "released": released}

# ===================== WARRANTY =====================

@router.get("/{job_id}/warranty", response_model=WarrantyStatusResponse)
def warranty_status(job_id: int, db: Session = Depends(get_db)):
    job = JobService.get_job(db, job_id)
    status = WarrantyService.warranty_status(db, job, settings.WARRANTY_DURATION_DAYS)
    return {
        "job_id": job.id,
        "status": status.status,
        "days_remaining": status.days_remaining,
        "expiry_date": status.expiry_date,
    }
