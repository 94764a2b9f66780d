"""
API Router - JSON Endpoints
"""
from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from datetime import datetime
import logging

from repairdesk.core.errors import RepairDeskError, ValidationError
from repairdesk.api.inventory import router as inventory_router
from repairdesk.api.jobs import router as jobs_router
from repairdesk.api.warranty import router as warranty_router
from repairdesk.api.verification import router as verification_router
from repairdesk.api.invoices import router as invoices_router
from repairdesk.api.salaries import router as salaries_router

logger = logging.getLogger(__name__)

api_router = APIRouter(tags=["API"])

# Include sub-routers
api_router.include_router(inventory_router)
api_router.include_router(jobs_router)
api_router.include_router(warranty_router)
api_router.include_router(verification_router)
api_router.include_router(invoices_router)
api_router.include_router(salaries_router)

@api_router.get("/status")
async def api_status():
    return {"status": "ok", "version": "1.0.0", "timestamp": datetime.now().isoformat()}

async def repairdesk_error_handler(request: Request, exc: RepairDeskError) -> JSONResponse:
    """Render domain errors as {"detail", "error", ...} with the error's status code"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {type(exc).__name__}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and parameters are invalid input (400), same shape as domain errors"""
    errors = jsonable_encoder(exc.errors())
    logger.info(f"{request.method} {request.url.path} rejected: {len(errors)} validation error(s)")
    error = ValidationError(errors[0]["msg"] if errors else None, errors=errors)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())
