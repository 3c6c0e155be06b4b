"""POST /v1/invoices and GET /v1/invoices/{reference} - invoice records"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from invoice_gateway.api.v1.schemas import InvoiceCreateRequest, InvoiceResponse
from invoice_gateway.api.dependencies import get_invoice_repository
from invoice_gateway.infrastructure.database.session import get_db
from invoice_gateway.infrastructure.database.repositories import InvoiceRepository
from invoice_gateway.domain.exceptions import DuplicateInvoiceError
from invoice_gateway.config import settings

router = APIRouter()


@router.post("/invoices", response_model=InvoiceResponse, status_code=201)
def create_invoice(
    request_body: InvoiceCreateRequest,
    db: Session = Depends(get_db),
    repository: InvoiceRepository = Depends(get_invoice_repository),
):
    """Register a new invoice with no payments"""
    try:
        invoice = repository.create_invoice(
            reference=request_body.reference,
            amount=request_body.amount,
            invoice_type=request_body.type,
        )
        db.commit()
    except DuplicateInvoiceError as e:
        db.rollback()
        raise HTTPException(status_code=409, detail=str(e))

    logging.info("Invoice created", extra={"reference": invoice.reference, "invoice_type": request_body.type.value})
    return InvoiceResponse.from_invoice(invoice, settings.history_limit)


@router.get("/invoices/{reference}", response_model=InvoiceResponse)
def get_invoice(reference: str, repository: InvoiceRepository = Depends(get_invoice_repository)):
    """
    Retrieve invoice totals and payment history.

    Returns:
        Invoice with its most recent payments (up to history_limit)
    """
    invoice = repository.get_invoice(reference)

    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")

    return InvoiceResponse.from_invoice(invoice, settings.history_limit)
