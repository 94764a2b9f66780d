"""
Verification API - Send and check email/SMS verification codes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from functools import lru_cache

from repairdesk.core import get_db, settings
from repairdesk.integrations import build_dispatcher
from repairdesk.services import VerificationService
from repairdesk.schemas.verification import (
    SendVerificationRequest, SendVerificationResponse, VerifyCodeRequest, VerifyCodeResponse,
)

router = APIRouter(prefix="/verification", tags=["Verification"])

@lru_cache()
def get_verification_service() -> VerificationService:
    return VerificationService(
        dispatcher=build_dispatcher(settings),
        ttl_minutes=settings.VERIFICATION_CODE_TTL_MINUTES,
        shop_name=settings.SHOP_NAME,
    )

@router.post("/send", response_model=SendVerificationResponse)
def send_code(
    data: SendVerificationRequest,
    db: Session = Depends(get_db),
    service: VerificationService = Depends(get_verification_service)
):
    code = service.issue(db, email=data.email, phone_number=data.phone_number)
    channel = "email" if data.email else "phone"
    
    if settings.DISPATCH_MODE.lower() == "noop":
        return {"message": f"Verification code generated (noop mode - nothing sent to your {channel})", "code": code}
    return {"message": f"Verification code sent to your {channel}"}

@router.post("/verify", response_model=VerifyCodeResponse)
def verify_code(
    data: VerifyCodeRequest,
    db: Session = Depends(get_db),
    service: VerificationService = Depends(get_verification_service)
):
    service.verify_or_raise(db, data.code, email=data.email, phone_number=data.phone_number)
    return {"success": True, "verified": True, "message": "Code verified successfully"}
