"""
Job Service - Business Logic for Repair Jobs
"""
from sqlalchemy.orm import Session
from typing import List, Optional, Tuple
import logging

from repairdesk.core.errors import InvalidStatusTransitionError, NotFoundError, ValidationError
from repairdesk.models import Job, JobStatus, Customer, Product, Employee, utcnow
from repairdesk.schemas.job import JobCreate

logger = logging.getLogger(__name__)

S = JobStatus


class JobService:
    """Job business logic"""

    # Valid status transitions
    STATUS_TRANSITIONS = {
        S.BOOKING_PENDING.value: [S.BOOKING_APPROVED.value, S.BOOKING_CANCELLED.value],
        S.BOOKING_APPROVED.value: [S.PENDING.value, S.BOOKING_CANCELLED.value],
        S.PENDING.value: [S.IN_PROGRESS.value, S.CANNOT_REPAIR.value],
        S.IN_PROGRESS.value: [S.COMPLETED.value, S.CANNOT_REPAIR.value],
        S.WARRANTY_CLAIMED.value: [S.IN_PROGRESS.value, S.COMPLETED.value, S.CANNOT_REPAIR.value],
        S.COMPLETED.value: [S.PAID.value],
        S.PAID.value: [],
        S.CANNOT_REPAIR.value: [],
        S.BOOKING_CANCELLED.value: [],
    }

    @staticmethod
    def get_jobs(
        db: Session,
        status: Optional[str] = None,
        customer_id: Optional[int] = None,
        page: int = 1,
        per_page: int = 50
    ) -> Tuple[List[Job], int]:
        """Get jobs with filters and pagination"""
        query = db.query(Job)

        if status and status != "all":
            query = query.filter(Job.repair_status == status)

        if customer_id:
            query = query.filter(Job.customer_id == customer_id)

        total = query.count()

        jobs = query.order_by(Job.id.desc())\
            .offset((page - 1) * per_page)\
            .limit(per_page)\
            .all()

        return jobs, total

    @staticmethod
    def get_job(db: Session, job_id: int) -> Job:
        """Get job by ID, raising NotFoundError if absent"""
        job = db.query(Job).filter(Job.id == job_id).first()
        if not job:
            raise NotFoundError(f"Job {job_id} not found")
        return job

    @staticmethod
    def register_job(db: Session, job_data: JobCreate) -> Job:
        """Register a job, creating the customer and product first when no ids are given"""
        try:
            if job_data.customer_id:
                customer = db.query(Customer).filter(Customer.id == job_data.customer_id).first()
                if not customer:
                    raise NotFoundError(f"Customer {job_data.customer_id} not found")
            elif job_data.customer:
                customer = Customer(**job_data.customer.model_dump())
                db.add(customer)
            else:
                raise ValidationError("Either customer_id or customer details are required")

            if job_data.product_id:
                product = db.query(Product).filter(Product.id == job_data.product_id).first()
                if not product:
                    raise NotFoundError(f"Product {job_data.product_id} not found")
            elif job_data.product:
                product = Product(**job_data.product.model_dump())
                db.add(product)
            else:
                raise ValidationError("Either product_id or product details are required")

            if job_data.assigned_employee_id and not db.query(Employee).filter(
                Employee.id == job_data.assigned_employee_id
            ).first():
                raise NotFoundError(f"Employee {job_data.assigned_employee_id} not found")

            job = Job(
                customer=customer,
                product=product,
                assigned_employee_id=job_data.assigned_employee_id,
                repair_description=job_data.repair_description,
                repair_status=job_data.repair_status.value,
                received_date=job_data.received_date or utcnow(),
                warranty_eligible=False
            )
            db.add(job)
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(job)
        logger.info(f"Registered job {job.id} for customer {job.customer_id}")
        return job

    @staticmethod
    def update_status(db: Session, job_id: int, new_status: str) -> Job:
        """Update job status with validation; completing a job stamps its handover date once"""
        job = JobService.get_job(db, job_id)

        current_status = job.repair_status
        allowed = JobService.STATUS_TRANSITIONS.get(current_status, [])

        if new_status not in allowed:
            raise InvalidStatusTransitionError(f"Cannot transition from {current_status} to {new_status}")

        job.repair_status = new_status
        if new_status == S.COMPLETED.value and job.handover_date is None:
            job.handover_date = utcnow()

        db.commit()
        db.refresh(job)
        logger.info(f"Job {job_id} status {current_status} -> {new_status}")
        return job
