"""
Invoice Service - Advance payments, full invoices and revenue split
"""
from sqlalchemy.orm import Session
from typing import List, Optional, Dict
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP
import logging

from repairdesk.core.errors import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from repairdesk.models import Invoice, AdvancePayment, Salary, Job, JobStatus, Employee, utcnow
from .inventory_service import InventoryService

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

# Share of the invoice total paid to a part-time technician; the owner keeps the rest
PART_TIME_TECHNICIAN_SHARE = Decimal("0.40")


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


class InvoiceService:
    """Invoice business logic"""

    @staticmethod
    def _get_owner(db: Session, owner_id: int, message: str) -> Employee:
        owner = db.query(Employee).filter(Employee.id == owner_id).first()
        if not owner:
            raise NotFoundError(f"Owner {owner_id} not found")
        if owner.role != "owner":
            raise PermissionDeniedError(message)
        return owner

    @staticmethod
    def split_revenue(total: Decimal, technician: Optional[Employee]) -> Dict[str, Decimal]:
        """Part-time technicians take 40 %, everything else goes to the owner"""
        total = to_money(total)
        if technician and technician.role == "technician" and technician.employment_type == "Part-Time":
            employee_share = to_money(total * PART_TIME_TECHNICIAN_SHARE)
        else:
            employee_share = Decimal("0.00")
        return {"employee_share": employee_share, "owner_share": total - employee_share}

    # ===================== ADVANCE PAYMENTS =====================

    @staticmethod
    def add_advance_payment(db: Session, job_id: int, owner_id: int, amount: Decimal) -> AdvancePayment:
        """Record an advance; only owners may take one"""
        amount = to_money(amount)
        if amount <= 0:
            raise ValidationError("Advance amount must be positive")

        owner = InvoiceService._get_owner(db, owner_id, "Only owners can add advance payments")
        job = db.query(Job).filter(Job.id == job_id).first()
        if not job:
            raise NotFoundError("Job not found for the given Job ID")

        payment = AdvancePayment(
            job_id=job.id,
            customer_id=job.customer_id,
            owner_id=owner.id,
            amount=amount
        )
        db.add(payment)
        db.commit()
        db.refresh(payment)
        logger.info(f"Advance payment {payment.id} of {amount} for job {job_id}")
        return payment

    @staticmethod
    def get_advance_payments(
        db: Session,
        job_id: Optional[int] = None,
        customer_id: Optional[int] = None
    ) -> List[AdvancePayment]:
        query = db.query(AdvancePayment)

        if job_id is not None:
            query = query.filter(AdvancePayment.job_id == job_id)
        if customer_id is not None:
            query = query.filter(AdvancePayment.customer_id == customer_id)

        return query.order_by(AdvancePayment.paid_at.desc(), AdvancePayment.id.desc()).all()

    # ===================== INVOICES =====================

    @staticmethod
    def create_invoice(
        db: Session,
        job_id: int,
        owner_id: int,
        labour_cost: Decimal,
        warranty_eligible: bool,
        warranty_duration_days: int
    ) -> Dict:
        """
        Invoice a completed job.

        Parts cost is the snapshotted cost of the parts the job consumed.
        The total is split between the assigned technician and the owner as
        Salary rows, and the job moves to Paid. An eligible invoice flags the
        job for warranty, expiring `warranty_duration_days` after handover.
        """
        try:
            job = db.query(Job).filter(Job.id == job_id).with_for_update().first()
            if not job:
                raise NotFoundError("Job not found for the given Job ID")
            if db.query(Invoice.id).filter(Invoice.job_id == job.id).first():
                raise ConflictError("An invoice already exists for this job.")
            if job.repair_status != JobStatus.COMPLETED.value:
                raise ValidationError('Invoices can only be created for jobs with a status of "Completed".')

            owner = InvoiceService._get_owner(db, owner_id, "Only owners can create invoices")

            parts_cost = to_money(InventoryService.get_job_usage(db, job.id)["total_inventory_cost"])
            labour_cost = to_money(labour_cost)
            total = parts_cost + labour_cost

            warranty_expiry = None
            if warranty_eligible:
                job.warranty_eligible = True
                handover = job.handover_date or utcnow()
                warranty_expiry = handover + timedelta(days=warranty_duration_days)

            invoice = Invoice(
                job_id=job.id,
                customer_id=job.customer_id,
                owner_id=owner.id,
                parts_cost=parts_cost,
                labour_cost=labour_cost,
                total_amount=total,
                warranty_eligible=bool(warranty_eligible),
                warranty_expiry=warranty_expiry
            )
            db.add(invoice)

            shares = InvoiceService.split_revenue(total, job.assigned_employee)
            now = utcnow()
            if shares["employee_share"] > 0:
                db.add(Salary(employee_id=job.assigned_employee_id, payment_date=now, total_salary=shares["employee_share"]))
            if shares["owner_share"] > 0:
                db.add(Salary(employee_id=owner.id, payment_date=now, total_salary=shares["owner_share"]))

            job.repair_status = JobStatus.PAID.value
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(invoice)
        logger.info(
            f"Invoice {invoice.id} for job {job_id}: total {total} "
            f"(employee {shares['employee_share']}, owner {shares['owner_share']})"
        )
        return {"invoice": invoice, **shares}

    @staticmethod
    def get_invoice(db: Session, invoice_id: int) -> Invoice:
        invoice = db.query(Invoice).filter(Invoice.id == invoice_id).first()
        if not invoice:
            raise NotFoundError(f"Invoice {invoice_id} not found")
        return invoice

    @staticmethod
    def get_invoices(db: Session, page: int = 1, per_page: int = 50) -> List[Invoice]:
        return db.query(Invoice).order_by(Invoice.created_at.desc(), Invoice.id.desc())\
            .offset((page - 1) * per_page)\
            .limit(per_page)\
            .all()
