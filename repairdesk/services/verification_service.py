"""
Verification Service - Single-use codes for email and phone confirmation
"""
from sqlalchemy.orm import Session
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from typing import Callable, Optional, Tuple
from datetime import datetime, timedelta
import secrets
import logging

from repairdesk.core.errors import ExpiredOrInvalidCodeError, ValidationError
from repairdesk.integrations.base import NotificationDispatcher
from repairdesk.models import VerificationCode, utcnow

logger = logging.getLogger(__name__)

# Attempts at storing a code when a concurrent issue for the same contact wins the insert
ISSUE_ATTEMPTS = 2


def generate_code() -> str:
    """Uniform 6-digit code in 100000-999999"""
    return str(100000 + secrets.randbelow(900000))


class VerificationService:
    """
    Issues and checks verification codes.

    At most one active (unused, unexpired) code exists per contact. The
    contact's current row holds a unique `active_contact` key, so issuing
    again rewrites that row in place and two concurrent first issues cannot
    both insert. The code is dispatched before the transaction commits, so a
    dispatch failure leaves no stored code behind.
    """

    def __init__(
        self,
        dispatcher: NotificationDispatcher,
        ttl_minutes: int = 15,
        shop_name: str = "MN Electronics",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.dispatcher = dispatcher
        self.ttl_minutes = ttl_minutes
        self.shop_name = shop_name
        self.clock = clock or utcnow

    @staticmethod
    def _contact(email: Optional[str], phone_number: Optional[str]) -> Tuple[object, str, str]:
        if bool(email) == bool(phone_number):
            raise ValidationError("Either email or phone number is required")
        if email:
            return VerificationCode.email, email, f"email:{email}"
        return VerificationCode.phone_number, phone_number, f"phone:{phone_number}"

    def _store(self, db: Session, key: str, email: Optional[str], phone_number: Optional[str],
               code: str, expires_at: datetime, now: datetime) -> None:
        current = db.query(VerificationCode).filter(
            VerificationCode.active_contact == key
        ).with_for_update().first()

        if current and current.expires_at > now:
            current.code = code
            current.expires_at = expires_at
            logger.debug(f"Updated existing verification code {current.id}")
        else:
            if current:
                # Expired codes stay unused but give up the contact key
                current.active_contact = None
                db.flush()
            db.add(VerificationCode(
                code=code,
                email=email,
                phone_number=phone_number,
                expires_at=expires_at,
                active_contact=key,
                created_at=now
            ))
        db.flush()

    def issue(self, db: Session, email: Optional[str] = None, phone_number: Optional[str] = None) -> str:
        """Store a fresh code for the contact and send it; returns the code"""
        _, contact, key = self._contact(email, phone_number)
        now = self.clock()
        code = generate_code()
        expires_at = now + timedelta(minutes=self.ttl_minutes)

        for attempt in range(1, ISSUE_ATTEMPTS + 1):
            try:
                self._store(db, key, email, phone_number, code, expires_at, now)
            except IntegrityError:
                db.rollback()
                if attempt == ISSUE_ATTEMPTS:
                    raise
                logger.info(f"Concurrent verification code issue for {contact}, retrying")
                continue
            except Exception:
                db.rollback()
                raise
            break

        try:
            self.dispatcher.send(
                contact,
                f"Your {self.shop_name} Verification Code",
                f"Your {self.shop_name} verification code is: {code}\n"
                f"This code expires in {self.ttl_minutes} minutes."
            )
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Verification code issued for {contact} (expires {expires_at.isoformat()})")
        return code

    def verify(self, db: Session, code: str, email: Optional[str] = None, phone_number: Optional[str] = None) -> bool:
        """Consume a matching active code; False when none matches"""
        column, contact, _ = self._contact(email, phone_number)
        now = self.clock()

        row = db.query(VerificationCode).filter(
            column == contact,
            VerificationCode.code == code,
            VerificationCode.used == False,
            VerificationCode.expires_at > now
        ).order_by(
            VerificationCode.created_at.desc(),
            VerificationCode.id.desc()
        ).first()

        if not row:
            db.rollback()
            return False
        row_id = row.id

        # Conditional flip so a concurrent verify cannot use the row twice
        result = db.execute(
            update(VerificationCode)
            .where(VerificationCode.id == row_id, VerificationCode.used == False)
            .values(used=True, active_contact=None)
        )
        db.commit()

        if result.rowcount != 1:
            return False

        logger.info(f"Verification code {row_id} used for {contact}")
        return True

    def verify_or_raise(self, db: Session, code: str, email: Optional[str] = None, phone_number: Optional[str] = None) -> None:
        if not self.verify(db, code, email=email, phone_number=phone_number):
            raise ExpiredOrInvalidCodeError()
