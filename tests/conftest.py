"""Pytest fixtures for testing"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from decimal import Decimal
from typing import Generator
from unittest.mock import Mock
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from invoice_gateway.api.main import create_app
from invoice_gateway.infrastructure.database.models import Base
from invoice_gateway.infrastructure.database.session import get_db
from invoice_gateway.domain.models import Invoice, InvoiceType, Payment
from invoice_gateway.domain.processor import PaymentProcessor


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def repository() -> Mock:
    """Stand-in for the invoice lookup/persistence collaborator"""
    return Mock()


@pytest.fixture
def processor(repository: Mock) -> PaymentProcessor:
    return PaymentProcessor(repository)


def make_invoice(
    amount: str,
    amount_paid: str = "0",
    payments: list[str] | None = None,
    invoice_type: InvoiceType = InvoiceType.STANDARD,
) -> Invoice:
    """Build an invoice whose history holds payments of the given amounts"""
    return Invoice(
        reference="REF01",
        amount=Decimal(amount),
        amount_paid=Decimal(amount_paid),
        type=invoice_type,
        payments=None if payments is None else [Payment(reference="REF01", amount=Decimal(p)) for p in payments],
    )


@pytest.fixture
def invoice_factory():
    return make_invoice
