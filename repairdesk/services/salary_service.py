"""
Salary Service - Full-time salary registration
"""
from sqlalchemy.orm import Session
from typing import List, Optional
from decimal import Decimal
import logging

from repairdesk.core.errors import NotFoundError, ValidationError
from repairdesk.models import Salary, Employee, utcnow
from repairdesk.schemas.invoice import FullTimeSalaryEntry
from .invoice_service import to_money

logger = logging.getLogger(__name__)


class SalaryService:
    """Salary business logic"""

    @staticmethod
    def register_full_time_salaries(db: Session, entries: List[FullTimeSalaryEntry]) -> List[Salary]:
        """Record one salary per entry: basic + overtime + bonus - deductions. All or nothing."""
        if not entries:
            raise ValidationError("Provide salary data for at least one employee.")

        salaries = []
        now = utcnow()
        try:
            for entry in entries:
                employee = db.query(Employee).filter(Employee.id == entry.employee_id).first()
                if not employee:
                    raise NotFoundError(f"Employee with ID {entry.employee_id} not found")
                if employee.employment_type != "Full-Time":
                    raise ValidationError(f"Employee with ID {entry.employee_id} is not a full-time employee")

                basic = to_money(employee.basic_salary or 0)
                total = basic + to_money(entry.overtime_pay) + to_money(entry.bonus) - to_money(entry.deductions)

                salary = Salary(
                    employee_id=employee.id,
                    payment_date=now,
                    basic_salary=basic,
                    overtime_pay=to_money(entry.overtime_pay),
                    bonus=to_money(entry.bonus),
                    deductions=to_money(entry.deductions),
                    total_salary=total
                )
                db.add(salary)
                salaries.append(salary)

            db.commit()
        except Exception:
            db.rollback()
            raise

        for salary in salaries:
            db.refresh(salary)
        logger.info(f"Recorded {len(salaries)} full-time salaries")
        return salaries

    @staticmethod
    def get_salaries(db: Session, employee_id: Optional[int] = None) -> List[Salary]:
        query = db.query(Salary)

        if employee_id is not None:
            query = query.filter(Salary.employee_id == employee_id)

        return query.order_by(Salary.payment_date.desc(), Salary.id.desc()).all()

    @staticmethod
    def get_total_paid(db: Session, employee_id: int) -> Decimal:
        return sum((Decimal(s.total_salary) for s in SalaryService.get_salaries(db, employee_id)), Decimal("0"))
