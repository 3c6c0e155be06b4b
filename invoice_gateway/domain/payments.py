"""Payment application and resulting invoice status"""

from decimal import Decimal
from invoice_gateway.domain.models import Invoice, InvoiceType, Payment
from invoice_gateway.domain.exceptions import UnsupportedInvoiceTypeError

COMMERCIAL_TAX_RATE = Decimal("0.14")

FULLY_PAID = "invoice is now fully paid"
FINAL_PARTIAL_PAYMENT = "final partial payment received, invoice is now fully paid"
PARTIALLY_PAID = "invoice is now partially paid"
ANOTHER_PARTIAL_PAYMENT = "another partial payment received, still not fully paid"


def apply_payment(invoice: Invoice, payment: Payment) -> None:
    """
    Record a validated payment on the invoice in place.

    Commercial invoices also accrue a 14% surcharge on every payment.

    Raises:
        UnsupportedInvoiceTypeError: Invoice type has no payment rule
    """
    if invoice.type == InvoiceType.STANDARD:
        surcharge = Decimal("0")
    elif invoice.type == InvoiceType.COMMERCIAL:
        surcharge = payment.amount * COMMERCIAL_TAX_RATE
    else:
        raise UnsupportedInvoiceTypeError(f"Unsupported invoice type: {invoice.type!r}")

    if invoice.payments is None:
        invoice.payments = []

    invoice.amount_paid += payment.amount
    invoice.tax_amount += surcharge
    invoice.payments.append(payment)


def determine_status(invoice: Invoice) -> str:
    """Describe the invoice after a payment; wording depends on payment count"""
    first_payment = len(invoice.payments or []) == 1

    if invoice.amount_paid == invoice.amount:
        return FULLY_PAID if first_payment else FINAL_PARTIAL_PAYMENT

    return PARTIALLY_PAID if first_payment else ANOTHER_PARTIAL_PAYMENT
