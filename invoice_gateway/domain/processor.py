"""Payment processing entry point - validate, apply, report, persist"""

from dataclasses import dataclass
from typing import Optional, Protocol
from invoice_gateway.domain.models import Invoice, Payment
from invoice_gateway.domain.validation import Final, Proceed, Terminal, validate_payment
from invoice_gateway.domain.payments import apply_payment, determine_status


class InvoiceStore(Protocol):
    """Lookup and persistence collaborator"""

    def get_invoice(self, reference: str) -> Optional[Invoice]: ...

    def save_invoice(self, invoice: Invoice) -> None: ...


@dataclass
class PaymentResult:
    """Outcome of processing one payment"""

    message: str
    applied: bool
    invoice: Optional[Invoice] = None


class PaymentProcessor:
    """Processes payments against invoices held by an InvoiceStore"""

    def __init__(self, repository: InvoiceStore):
        self.repository = repository

    def process(self, payment: Payment) -> PaymentResult:
        """
        Run a payment through validation and, if cleared, apply and save it.

        Raises:
            InvoiceNotFoundError: No invoice matches payment.reference
            InvalidInvoiceStateError: Zero-amount invoice already has payments
            UnsupportedInvoiceTypeError: Invoice type has no payment rule
        """
        invoice = self.repository.get_invoice(payment.reference)
        outcome = validate_payment(invoice, payment)

        if isinstance(outcome, Terminal):
            raise outcome.to_exception()
        if isinstance(outcome, Final):
            return PaymentResult(message=outcome.message, applied=False, invoice=invoice)
        if not isinstance(outcome, Proceed):
            raise TypeError(f"Unexpected validation outcome: {outcome!r}")

        apply_payment(invoice, payment)
        message = determine_status(invoice)
        self.repository.save_invoice(invoice)

        return PaymentResult(message=message, applied=True, invoice=invoice)

    def process_payment(self, payment: Payment) -> str:
        """Process a payment and return the outcome message"""
        return self.process(payment).message
