"""
Verification Code Model
"""
from sqlalchemy import Column, String, Boolean, DateTime, Index
from repairdesk.core import Base
from .base import IntIdMixin, CreatedAtMixin

class VerificationCode(Base, IntIdMixin, CreatedAtMixin):
    """Single-use code proving control of an email address or phone number"""
    __tablename__ = "verification_code"
    __table_args__ = (
        Index("ix_verification_code_email", "email", "used"),
        Index("ix_verification_code_phone", "phone_number", "used"),
    )
    
    code = Column(String(10), nullable=False)
    email = Column(String(100))
    phone_number = Column(String(20))
    expires_at = Column(DateTime, nullable=False)
    used = Column(Boolean, default=False, nullable=False)
    
    # "email:<addr>" or "phone:<number>" while this is the contact's current code, else NULL
    active_contact = Column(String(120), unique=True)
