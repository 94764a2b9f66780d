"""Shared test fixtures."""

from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy.orm import sessionmaker

from repairdesk.core import Base, create_db_engine
from repairdesk.core.errors import DispatchError
from repairdesk.integrations.base import NotificationDispatcher, OutboundMessage
from repairdesk.models import (
    Customer, Employee, Product, Job, JobStatus, InventoryItem, InventoryBatch, utcnow,
)


class FakeDispatcher(NotificationDispatcher):
    """Records messages; raises DispatchError when `fail` is set."""
    CHANNEL_NAME = "fake"

    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    def send(self, destination, subject, body):
        if self.fail:
            raise DispatchError()
        self.sent.append(OutboundMessage(destination, subject, body))


class FakeClock:
    def __init__(self, now=None):
        self.now = now or utcnow()

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def engine():
    """Provide an in-memory SQLite engine with all tables created."""
    eng = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def dispatcher():
    return FakeDispatcher()


@pytest.fixture
def clock():
    return FakeClock()


# ===================== FACTORIES =====================

@pytest.fixture
def customer(db):
    c = Customer(first_name="Nimal", last_name="Perera", email="nimal@mnelectronics.lk", phone="0771234567")
    db.add(c)
    db.commit()
    return c


@pytest.fixture
def product(db):
    p = Product(product_name="Smart TV", model="Samsung", model_number="UA43T5400")
    db.add(p)
    db.commit()
    return p


def make_employee(db, role="technician", employment_type="Full-Time", basic_salary=Decimal("50000.00"), first_name="Kamal"):
    employee = Employee(
        first_name=first_name,
        last_name="Silva",
        email=f"{first_name.lower()}@mnelectronics.lk",
        role=role,
        employment_type=employment_type,
        basic_salary=basic_salary,
    )
    db.add(employee)
    db.commit()
    return employee


@pytest.fixture
def owner(db):
    return make_employee(db, role="owner", first_name="Malith")


@pytest.fixture
def technician(db):
    return make_employee(db, first_name="Kamal")


@pytest.fixture
def part_time_technician(db):
    return make_employee(db, employment_type="Part-Time", basic_salary=None, first_name="Sunil")


def make_job(db, customer, product, status=JobStatus.PENDING, employee=None, handover_date=None, warranty_eligible=False):
    job = Job(
        customer_id=customer.id,
        product_id=product.id,
        assigned_employee_id=employee.id if employee else None,
        repair_description="Display flickers",
        repair_status=status.value,
        handover_date=handover_date,
        warranty_eligible=warranty_eligible,
    )
    db.add(job)
    db.commit()
    return job


@pytest.fixture
def job(db, customer, product):
    return make_job(db, customer, product, status=JobStatus.IN_PROGRESS)


@pytest.fixture
def item(db):
    i = InventoryItem(product_name="HDMI Board", stock_limit=5)
    db.add(i)
    db.commit()
    return i


def make_batch(db, item, quantity, cost, days_ago=0, purchase_date=None):
    """Batch purchased `days_ago` days back; pass purchase_date to pin it exactly."""
    batch = InventoryBatch(
        inventory_id=item.id,
        quantity=quantity,
        cost_per_item=Decimal(str(cost)),
        total_amount=Decimal(str(cost)) * quantity,
        purchase_date=purchase_date or (utcnow() - timedelta(days=days_ago)),
    )
    db.add(batch)
    db.commit()
    return batch
