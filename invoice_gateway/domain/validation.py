"""Payment validation - decides whether an incoming payment may be applied"""

from dataclasses import dataclass
from typing import Optional, Type, Union
from invoice_gateway.domain.models import Invoice, Payment
from invoice_gateway.domain.exceptions import (
    InvalidOperationError,
    InvoiceNotFoundError,
    InvalidInvoiceStateError,
)

# Callers match on these strings, keep the wording stable
NO_MATCHING_INVOICE = "There is no invoice matching this payment"
INVALID_INVOICE_STATE = "The invoice is in an invalid state."
NO_PAYMENT_NEEDED = "no payment needed"
ALREADY_FULLY_PAID = "invoice was already fully paid"
EXCEEDS_PARTIAL_REMAINING = "the payment is greater than the partial amount remaining"
EXCEEDS_INVOICE_AMOUNT = "the payment is greater than the invoice amount"


@dataclass(frozen=True)
class Proceed:
    """Payment is cleared for application"""


@dataclass(frozen=True)
class Final:
    """Informational result, nothing further to do"""

    message: str


@dataclass(frozen=True)
class Terminal:
    """Unrecoverable condition, raised by the caller"""

    message: str
    error: Type[InvalidOperationError] = InvalidOperationError

    def to_exception(self) -> InvalidOperationError:
        return self.error(self.message)


Outcome = Union[Proceed, Final, Terminal]


def validate_payment(invoice: Optional[Invoice], payment: Payment) -> Outcome:
    """
    Check an incoming payment against the invoice state.

    Rules are evaluated in order, first match wins:
    1. Missing invoice -> Terminal
    2. Zero-amount invoice -> Final when there is no history, Terminal otherwise
    3. Existing history -> already paid / exceeds remaining, else Proceed
    4. No history -> exceeds invoice amount, else Proceed

    Rule 3 never re-checks the payment against the full invoice amount. A
    history made only of zero payments therefore lets an oversized payment
    through; this is kept as-is.
    """
    if invoice is None:
        return Terminal(NO_MATCHING_INVOICE, InvoiceNotFoundError)

    if invoice.amount == 0:
        if not invoice.payments:
            return Final(NO_PAYMENT_NEEDED)
        return Terminal(INVALID_INVOICE_STATE, InvalidInvoiceStateError)

    if invoice.payments:
        total = invoice.total_payments

        if total != 0 and total == invoice.amount:
            return Final(ALREADY_FULLY_PAID)
        if total != 0 and payment.amount > (invoice.amount - invoice.amount_paid):
            return Final(EXCEEDS_PARTIAL_REMAINING)
        return Proceed()

    if payment.amount > invoice.amount:
        return Final(EXCEEDS_INVOICE_AMOUNT)

    return Proceed()
