# Pydantic Schemas Package
from .inventory import (
    InventoryItemCreate, InventoryItemResponse, BatchCreate, BatchResponse,
    ConsumeRequest, ConsumptionLine, ConsumeResponse, StockLevel,
    JobUsageLine, JobUsageSummary, PurchaseItemResponse,
)
from .job import (
    CustomerCreate, ProductCreate, JobCreate, JobStatusUpdate, JobResponse,
    WarrantyStatusResponse, WarrantyClaimCreate, WarrantyJobsResponse,
)
from .invoice import (
    AdvancePaymentCreate, AdvancePaymentResponse, InvoiceCreate, InvoiceResponse,
    InvoiceResult, FullTimeSalaryEntry, FullTimeSalaryBatch, SalaryResponse,
)
from .verification import (
    SendVerificationRequest, VerifyCodeRequest, SendVerificationResponse, VerifyCodeResponse,
)

__all__ = [
    "InventoryItemCreate", "InventoryItemResponse", "BatchCreate", "BatchResponse",
    "ConsumeRequest", "ConsumptionLine", "ConsumeResponse", "StockLevel",
    "JobUsageLine", "JobUsageSummary", "PurchaseItemResponse",
    "CustomerCreate", "ProductCreate", "JobCreate", "JobStatusUpdate", "JobResponse",
    "WarrantyStatusResponse", "WarrantyClaimCreate", "WarrantyJobsResponse",
    "AdvancePaymentCreate", "AdvancePaymentResponse", "InvoiceCreate", "InvoiceResponse",
    "InvoiceResult", "FullTimeSalaryEntry", "FullTimeSalaryBatch", "SalaryResponse",
    "SendVerificationRequest", "VerifyCodeRequest", "SendVerificationResponse", "VerifyCodeResponse",
]
