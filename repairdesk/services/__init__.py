# Services Package
from .inventory_service import InventoryService
from .job_service import JobService
from .warranty_service import WarrantyService, WarrantyStatus
from .verification_service import VerificationService
from .invoice_service import InvoiceService
from .salary_service import SalaryService

__all__ = [
    "InventoryService",
    "JobService",
    "WarrantyService",
    "WarrantyStatus",
    "VerificationService",
    "InvoiceService",
    "SalaryService",
]
