"""
Salaries API
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from repairdesk.core import get_db
from repairdesk.services import SalaryService
from repairdesk.schemas.invoice import FullTimeSalaryBatch, SalaryResponse

router = APIRouter(prefix="/salaries", tags=["Salaries"])

@router.post("/full-time", response_model=List[SalaryResponse], status_code=201)
def register_full_time_salaries(data: FullTimeSalaryBatch, db: Session = Depends(get_db)):
    return SalaryService.register_full_time_salaries(db, data.entries)

@router.get("", response_model=List[SalaryResponse])
def list_salaries(employee_id: Optional[int] = Query(None), db: Session = Depends(get_db)):
    return SalaryService.get_salaries(db, employee_id)

@router.get("/employee/{employee_id}")
def employee_salaries(employee_id: int, db: Session = Depends(get_db)):
    salaries = SalaryService.get_salaries(db, employee_id)
    return {
        "salaries": [SalaryResponse.model_validate(s) for s in salaries],
        "total_paid": SalaryService.get_total_paid(db, employee_id),
    }
