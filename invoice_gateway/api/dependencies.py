"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from invoice_gateway.infrastructure.database.session import get_db
from invoice_gateway.infrastructure.database.repositories import InvoiceRepository
from invoice_gateway.domain.processor import PaymentProcessor


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_invoice_repository(db: Session = Depends(get_db)) -> InvoiceRepository:
    """Provide an invoice repository bound to the request session"""
    return InvoiceRepository(db)


def get_payment_processor(
    repository: InvoiceRepository = Depends(get_invoice_repository),
) -> PaymentProcessor:
    """Provide a payment processor backed by the database"""
    return PaymentProcessor(repository)
