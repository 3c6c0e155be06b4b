"""POST /v1/payments - apply a payment to an invoice"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from invoice_gateway.api.v1.schemas import InvoiceResponse, PaymentRequest, PaymentResponse
from invoice_gateway.api.dependencies import get_payment_processor, get_request_id
from invoice_gateway.infrastructure.database.session import get_db
from invoice_gateway.domain.models import Payment
from invoice_gateway.domain.processor import PaymentProcessor
from invoice_gateway.domain.exceptions import InvoiceNotFoundError, InvalidInvoiceStateError
from invoice_gateway.infrastructure.observability.metrics import record_payment, record_invalid_payment
from invoice_gateway.infrastructure.observability.logging import log_payment_outcome
from invoice_gateway.config import settings

router = APIRouter()


@router.post("/payments", response_model=PaymentResponse)
def create_payment(
    request_body: PaymentRequest,
    request: Request,
    db: Session = Depends(get_db),
    processor: PaymentProcessor = Depends(get_payment_processor),
):
    """
    Process a payment against the invoice it references.

    Flow:
    1. Validate the payment against the invoice
    2. Apply it and work out the new invoice status (when accepted)
    3. Commit the invoice changes
    4. Return the outcome message

    Rejections such as overpayments come back as 200 with applied=false.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    payment = Payment(reference=request_body.reference, amount=request_body.amount)

    try:
        result = processor.process(payment)
        db.commit()

    except InvoiceNotFoundError as e:
        db.rollback()
        record_invalid_payment()
        logging.warning(f"Payment rejected: {e}", extra={"request_id": request_id, "reference": payment.reference})
        raise HTTPException(status_code=404, detail=str(e))

    except InvalidInvoiceStateError as e:
        db.rollback()
        record_invalid_payment()
        logging.warning(f"Payment rejected: {e}", extra={"request_id": request_id, "reference": payment.reference})
        raise HTTPException(status_code=409, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id, "reference": payment.reference})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_payment(result.message, payment.amount, result.applied)
    log_payment_outcome(request_id, payment.reference, payment.amount, result.message, result.applied, duration_ms)

    return PaymentResponse(
        reference=payment.reference,
        message=result.message,
        applied=result.applied,
        invoice=InvoiceResponse.from_invoice(result.invoice, settings.history_limit),
    )
