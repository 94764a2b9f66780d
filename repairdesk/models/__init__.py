from .base import IntIdMixin, CreatedAtMixin, utcnow
from .master import Customer, Employee, Product
from .job import Job, JobStatus
from .inventory import InventoryItem, InventoryBatch, PurchaseItem, JobUsedInventory
from .invoice import Invoice, AdvancePayment, Salary
from .verification import VerificationCode

__all__ = [
    # Base
    "IntIdMixin", "CreatedAtMixin", "utcnow",
    # Master
    "Customer", "Employee", "Product",
    # Job
    "Job", "JobStatus",
    # Inventory
    "InventoryItem", "InventoryBatch", "PurchaseItem", "JobUsedInventory",
    # Invoice
    "Invoice", "AdvancePayment", "Salary",
    # Verification
    "VerificationCode",
]
