"""
Base Model Mixins
"""
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Integer


def utcnow() -> datetime:
    """Naive UTC timestamp, the storage convention for every DateTime column"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class IntIdMixin:
    """Mixin for autoincrement integer primary key"""
    id = Column(Integer, primary_key=True, autoincrement=True)


class CreatedAtMixin:
    """Mixin for created_at timestamp"""
    created_at = Column(DateTime, default=utcnow, nullable=False)
