"""
Warranty Service - Warranty status derivation and claim registration
"""
from sqlalchemy.orm import Session
from typing import List, Optional
from dataclasses import dataclass
from datetime import date, datetime, timedelta
import logging

from repairdesk.core.errors import AlreadyClaimedError, NotFoundError
from repairdesk.models import Job, JobStatus, Customer, Product, Employee, utcnow

logger = logging.getLogger(__name__)

STATUS_ACTIVE = "Active"
STATUS_EXPIRED = "Expired"
STATUS_CLAIMED = "Warranty-Claimed"
STATUS_NOT_ELIGIBLE = "Not Eligible"

# A linked claim in one of these states no longer blocks a new claim
CLOSED_CLAIM_STATUSES = (
    JobStatus.PAID.value,
    JobStatus.CANNOT_REPAIR.value,
    JobStatus.BOOKING_CANCELLED.value,
)

# A claim job in one of these states is no longer under repair
FINISHED_CLAIM_STATUSES = (
    JobStatus.COMPLETED.value,
    JobStatus.PAID.value,
    JobStatus.CANNOT_REPAIR.value,
    JobStatus.BOOKING_CANCELLED.value,
)


@dataclass
class WarrantyStatus:
    status: str
    days_remaining: int = 0
    expiry_date: Optional[date] = None


class WarrantyService:
    """Warranty business logic"""

    @staticmethod
    def has_linked_claim(db: Session, job: Job) -> bool:
        return db.query(Job.id).filter(Job.original_job_id == job.id).first() is not None

    @staticmethod
    def is_open_claim(job: Job) -> bool:
        """A claim job that has not finished its repair"""
        if job.repair_status == JobStatus.WARRANTY_CLAIMED.value:
            return True
        return job.original_job_id is not None and job.repair_status not in FINISHED_CLAIM_STATUSES

    @staticmethod
    def warranty_status(db: Session, job: Job, duration_days: int, today: Optional[date] = None) -> WarrantyStatus:
        """
        Derive the warranty status of a job.

        Precedence: a claim wins (the job is itself an unfinished claim, or a
        claim links to it), then eligibility (handover date and flag), then
        date arithmetic.
        """
        today = today or utcnow().date()

        if WarrantyService.is_open_claim(job) or WarrantyService.has_linked_claim(db, job):
            expiry = WarrantyService.expiry_date(job, duration_days)
            return WarrantyStatus(STATUS_CLAIMED, 0, expiry)

        if not job.handover_date or not job.warranty_eligible:
            return WarrantyStatus(STATUS_NOT_ELIGIBLE)

        expiry = WarrantyService.expiry_date(job, duration_days)
        if today > expiry:
            return WarrantyStatus(STATUS_EXPIRED, 0, expiry)

        return WarrantyStatus(STATUS_ACTIVE, max((expiry - today).days, 0), expiry)

    @staticmethod
    def expiry_date(job: Job, duration_days: int) -> Optional[date]:
        if not job.handover_date:
            return None
        return job.handover_date.date() + timedelta(days=duration_days)

    @staticmethod
    def list_warranty_jobs(db: Session, duration_days: int, today: Optional[date] = None) -> List[dict]:
        """Every warranty-eligible job with its current status, newest handover first"""
        jobs = db.query(Job).filter(
            Job.warranty_eligible == True,
            Job.original_job_id.is_(None)
        ).order_by(Job.handover_date.desc(), Job.id.desc()).all()

        results = []
        for job in jobs:
            status = WarrantyService.warranty_status(db, job, duration_days, today)
            results.append({
                "job_id": job.id,
                "status": status.status,
                "days_remaining": status.days_remaining,
                "expiry_date": status.expiry_date,
            })

        return results

    @staticmethod
    def register_claim(
        db: Session,
        original_job_id: int,
        customer_id: int,
        product_id: int,
        description: str,
        employee_id: Optional[int] = None,
        received_date: Optional[datetime] = None
    ) -> int:
        """Create a warranty-claim job linked to the original job; returns the new job id"""
        try:
            original = db.query(Job).filter(Job.id == original_job_id).with_for_update().first()
            if not original:
                raise NotFoundError(f"Job {original_job_id} not found")
            if not db.query(Customer).filter(Customer.id == customer_id).first():
                raise NotFoundError(f"Customer {customer_id} not found")
            if not db.query(Product).filter(Product.id == product_id).first():
                raise NotFoundError(f"Product {product_id} not found")
            if employee_id is not None and not db.query(Employee).filter(Employee.id == employee_id).first():
                raise NotFoundError(f"Employee {employee_id} not found")

            open_claim = db.query(Job.id).filter(
                Job.original_job_id == original.id,
                Job.repair_status.notin_(CLOSED_CLAIM_STATUSES)
            ).first()
            if open_claim:
                raise AlreadyClaimedError(f"Job {original.id} already has an open warranty claim (job {open_claim.id})")

            claim = Job(
                original_job_id=original.id,
                customer_id=customer_id,
                product_id=product_id,
                assigned_employee_id=employee_id,
                repair_description=description,
                repair_status=JobStatus.WARRANTY_CLAIMED.value,
                warranty_eligible=True,
                received_date=received_date or utcnow()
            )
            db.add(claim)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Registered warranty claim job {claim.id} for job {original_job_id}")
        return claim.id
