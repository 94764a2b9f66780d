from pydantic_settings import BaseSettings
from functools import lru_cache

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "RepairDesk"
    APP_PORT: int = 5000
    SHOP_NAME: str = "MN Electronics"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Database
    DATABASE_URL: str = "sqlite:///./repairdesk.db"
    
    # Warranty
    WARRANTY_DURATION_DAYS: int = 90
    
    # Verification
    VERIFICATION_CODE_TTL_MINUTES: int = 15
    DISPATCH_MODE: str = "noop"  # real, noop
    
    # Email (SMTP)
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    MAIL_FROM: str = "MN Electronics <noreply@example.com>"
    
    # SMS (Twilio)
    TWILIO_ACCOUNT_SID: str = ""
    TWILIO_AUTH_TOKEN: str = ""
    TWILIO_FROM_NUMBER: str = ""
    
    class Config:
        env_file = ".env"
        extra = "ignore"

@lru_cache()
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
