"""
Warranty API - Warranty-eligible jobs and claim registration
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from repairdesk.core import get_db, settings
from repairdesk.services import WarrantyService
from repairdesk.schemas.job import WarrantyClaimCreate, WarrantyJobsResponse

router = APIRouter(prefix="/warranty", tags=["Warranty"])

@router.get("/jobs", response_model=WarrantyJobsResponse)
def warranty_jobs(db: Session = Depends(get_db)):
    jobs = WarrantyService.list_warranty_jobs(db, settings.WARRANTY_DURATION_DAYS)
    return {"jobs": jobs, "total": len(jobs)}

@router.post("/claims", status_code=201)
def register_claim(data: WarrantyClaimCreate, db: Session = Depends(get_db)):
    job_id = WarrantyService.register_claim(
        db,
        original_job_id=data.original_job_id,
        customer_id=data.customer_id,
        product_id=data.product_id,
        description=data.description,
        employee_id=data.employee_id,
        received_date=data.received_date
    )
    return {"message": "Warranty claim registered successfully!", "job_id": job_id}
