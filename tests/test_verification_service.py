"""Tests for issuing and checking verification codes."""

import pytest
from sqlalchemy import event
from sqlalchemy.orm import sessionmaker

from conftest import FakeClock, FakeDispatcher
from repairdesk.core import Base, create_db_engine
from repairdesk.core.errors import DispatchError, ExpiredOrInvalidCodeError, ValidationError
from repairdesk.models import VerificationCode
from repairdesk.services import VerificationService
from repairdesk.services import verification_service
from repairdesk.services.verification_service import generate_code

EMAIL = "customer@mnelectronics.lk"
PHONE = "+94771234567"


@pytest.fixture
def service(dispatcher, clock):
    return VerificationService(dispatcher, ttl_minutes=15, shop_name="MN Electronics", clock=clock)


@pytest.fixture
def fixed_codes(monkeypatch):
    codes = iter(["111111", "222222", "333333"])
    monkeypatch.setattr(verification_service, "generate_code", lambda: next(codes))


class TestGenerateCode:
    def test_six_digits_in_range(self):
        for _ in range(200):
            code = generate_code()
            assert len(code) == 6
            assert 100000 <= int(code) <= 999999


class TestIssue:
    def test_stores_and_dispatches(self, db, service, dispatcher):
        code = service.issue(db, email=EMAIL)

        row = db.query(VerificationCode).one()
        assert row.code == code
        assert row.email == EMAIL
        assert row.used is False
        assert len(dispatcher.sent) == 1
        assert dispatcher.sent[0].destination == EMAIL
        assert code in dispatcher.sent[0].body
        assert "MN Electronics" in dispatcher.sent[0].subject

    def test_expiry_from_ttl(self, db, service, clock):
        service.issue(db, phone_number=PHONE)
        row = db.query(VerificationCode).one()
        assert (row.expires_at - clock.now).total_seconds() == 15 * 60

    def test_reissue_overwrites_active_code(self, db, service, fixed_codes):
        service.issue(db, email=EMAIL)
        service.issue(db, email=EMAIL)

        rows = db.query(VerificationCode).all()
        assert len(rows) == 1
        assert rows[0].code == "222222"
        assert service.verify(db, "111111", email=EMAIL) is False
        assert service.verify(db, "222222", email=EMAIL) is True

    def test_reissue_after_expiry_creates_new_row(self, db, service, clock, fixed_codes):
        service.issue(db, email=EMAIL)
        clock.advance(minutes=16)
        service.issue(db, email=EMAIL)

        assert db.query(VerificationCode).count() == 2

    def test_contacts_are_independent(self, db, service, fixed_codes):
        service.issue(db, email=EMAIL)
        service.issue(db, phone_number=PHONE)

        assert db.query(VerificationCode).count() == 2
        assert service.verify(db, "111111", phone_number=PHONE) is False
        assert service.verify(db, "222222", phone_number=PHONE) is True

    def test_dispatch_failure_stores_nothing(self, db, clock):
        failing = VerificationService(FakeDispatcher(fail=True), clock=clock)

        with pytest.raises(DispatchError):
            failing.issue(db, email=EMAIL)

        assert db.query(VerificationCode).count() == 0

    def test_dispatch_failure_keeps_previous_code(self, db, dispatcher, clock, fixed_codes):
        service = VerificationService(dispatcher, clock=clock)
        service.issue(db, email=EMAIL)

        dispatcher.fail = True
        with pytest.raises(DispatchError):
            service.issue(db, email=EMAIL)

        assert db.query(VerificationCode).one().code == "111111"
        assert service.verify(db, "111111", email=EMAIL) is True

    @pytest.mark.parametrize("contact", [{}, {"email": EMAIL, "phone_number": PHONE}])
    def test_exactly_one_contact(self, db, service, contact):
        with pytest.raises(ValidationError):
            service.issue(db, **contact)


class TestVerify:
    def test_code_is_single_use(self, db, service):
        code = service.issue(db, email=EMAIL)

        assert service.verify(db, code, email=EMAIL) is True
        assert service.verify(db, code, email=EMAIL) is False
        assert db.query(VerificationCode).one().used is True

    def test_wrong_code(self, db, service, fixed_codes):
        service.issue(db, email=EMAIL)
        assert service.verify(db, "999999", email=EMAIL) is False

    def test_wrong_contact(self, db, service):
        code = service.issue(db, email=EMAIL)
        assert service.verify(db, code, email="someone@mnelectronics.lk") is False

    def test_expired_code(self, db, service, clock):
        code = service.issue(db, email=EMAIL)
        clock.advance(minutes=15)
        assert service.verify(db, code, email=EMAIL) is False

    def test_just_before_expiry(self, db, service, clock):
        code = service.issue(db, email=EMAIL)
        clock.advance(minutes=14, seconds=59)
        assert service.verify(db, code, email=EMAIL) is True

    def test_verify_or_raise_message_is_generic(self, db, service, clock):
        code = service.issue(db, email=EMAIL)
        clock.advance(minutes=20)

        with pytest.raises(ExpiredOrInvalidCodeError) as expired:
            service.verify_or_raise(db, code, email=EMAIL)
        with pytest.raises(ExpiredOrInvalidCodeError) as unknown:
            service.verify_or_raise(db, "123456", phone_number=PHONE)

        assert expired.value.message == unknown.value.message


class TestConcurrentIssue:
    def test_racing_first_issues_leave_one_active_code(self, tmp_path, fixed_codes):
        engine = create_db_engine(f"sqlite:///{tmp_path / 'codes.db'}")
        Base.metadata.create_all(bind=engine)
        Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        clock = FakeClock()
        service = VerificationService(FakeDispatcher(), clock=clock)
        rival_codes = []

        def issue_from_rival(conn, cursor, statement, parameters, context, executemany):
            # Another request issues for the same contact right after this one looked for an active row
            if rival_codes or "FROM verification_code" not in statement or "active_contact" not in statement:
                return
            rival_codes.append(None)
            with Session() as rival:
                rival_codes[0] = service.issue(rival, email=EMAIL)

        event.listen(engine, "after_cursor_execute", issue_from_rival)
        with Session() as session:
            code = service.issue(session, email=EMAIL)
        event.remove(engine, "after_cursor_execute", issue_from_rival)

        assert rival_codes == ["222222"]
        assert code == "111111"
        with Session() as check:
            rows = check.query(VerificationCode).filter(VerificationCode.email == EMAIL).all()
            assert len(rows) == 1
            assert rows[0].code == "111111"
            assert service.verify(check, "222222", email=EMAIL) is False
            assert service.verify(check, "111111", email=EMAIL) is True
        engine.dispose()


class TestActiveContactKey:
    def test_used_code_releases_contact(self, db, service, fixed_codes):
        service.issue(db, email=EMAIL)
        assert service.verify(db, "111111", email=EMAIL) is True

        service.issue(db, email=EMAIL)

        rows = db.query(VerificationCode).order_by(VerificationCode.id).all()
        assert [r.active_contact for r in rows] == [None, f"email:{EMAIL}"]
        assert service.verify(db, "222222", email=EMAIL) is True

    def test_expired_code_releases_contact(self, db, service, clock, fixed_codes):
        service.issue(db, phone_number=PHONE)
        clock.advance(minutes=16)
        service.issue(db, phone_number=PHONE)

        rows = db.query(VerificationCode).order_by(VerificationCode.id).all()
        assert [(r.code, r.active_contact, r.used) for r in rows] == [
            ("111111", None, False),
            ("222222", f"phone:{PHONE}", False),
        ]
