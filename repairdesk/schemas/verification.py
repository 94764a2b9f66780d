"""
Verification Schemas
"""
from pydantic import BaseModel, EmailStr, model_validator
from typing import Optional

class ContactRequest(BaseModel):
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = None

    @model_validator(mode="after")
    def exactly_one_contact(self):
        if bool(self.email) == bool(self.phone_number):
            raise ValueError("Provide either email or phone number")
        return self

class SendVerificationRequest(ContactRequest):
    pass

class VerifyCodeRequest(ContactRequest):
    code: str

class SendVerificationResponse(BaseModel):
    success: bool = True
    message: str
    code: Optional[str] = None  # Echoed only when dispatch mode is noop

class VerifyCodeResponse(BaseModel):
    success: bool
    verified: bool
    message: str
