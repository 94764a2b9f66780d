"""
RepairDesk - Electronics Repair Shop Back End
FastAPI Application Entry Point
"""
import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
import logging

from repairdesk.core import settings, engine, Base
from repairdesk.core.errors import RepairDeskError
from repairdesk.api.router import api_router, repairdesk_error_handler, request_validation_error_handler

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Lifespan for startup/shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Create tables if not exist
    Base.metadata.create_all(bind=engine)
    logger.info(f"{settings.APP_NAME} starting on port {settings.APP_PORT} (dispatch mode: {settings.DISPATCH_MODE})")
    
    yield
    
    logger.info(f"{settings.APP_NAME} shutting down")

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Repair Jobs, FIFO Parts Inventory, Warranty & Verification",
    version="1.0.0",
    lifespan=lifespan
)

app.add_exception_handler(RepairDeskError, repairdesk_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)

# Include routers
app.include_router(api_router, prefix="/api")

# Health check
@app.get("/health")
async def health_check():
    return {"status": "healthy", "app": settings.APP_NAME}

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.APP_PORT,
        reload=settings.DEBUG
    )
