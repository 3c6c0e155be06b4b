"""Pydantic schemas for API request/response validation"""

from decimal import Decimal
from typing import List
from pydantic import BaseModel, Field
from invoice_gateway.domain.models import Invoice, InvoiceType


class InvoiceCreateRequest(BaseModel):
    """Request body for POST /v1/invoices"""

    reference: str = Field(..., min_length=1, description="Invoice reference")
    amount: Decimal = Field(..., ge=0, decimal_places=2, description="Total billed amount")
    type: InvoiceType = InvoiceType.STANDARD


class PaymentRequest(BaseModel):
    """Request body for POST /v1/payments"""

    reference: str = Field(..., min_length=1, description="Reference of the invoice being paid")
    amount: Decimal = Field(..., ge=0, decimal_places=2, description="Amount paid now")


class PaymentSchema(BaseModel):
    """Single payment in an invoice history"""

    amount: Decimal


class InvoiceResponse(BaseModel):
    """Invoice view with totals and recent payments"""

    reference: str
    type: str
    amount: Decimal
    amount_paid: Decimal
    tax_amount: Decimal
    payment_count: int
    payments: List[PaymentSchema]

    @classmethod
    def from_invoice(cls, invoice: Invoice, history_limit: int) -> "InvoiceResponse":
        history = invoice.payments or []
        recent = history[-history_limit:] if history_limit > 0 else []
        return cls(
            reference=invoice.reference,
            type=getattr(invoice.type, "value", str(invoice.type)),
            amount=invoice.amount,
            amount_paid=invoice.amount_paid,
            tax_amount=invoice.tax_amount,
            payment_count=len(history),
            payments=[PaymentSchema(amount=p.amount) for p in recent],
        )


class PaymentResponse(BaseModel):
    """Response for POST /v1/payments"""

    reference: str
    message: str
    applied: bool
    invoice: InvoiceResponse
