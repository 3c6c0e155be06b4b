"""Data access layer for invoices"""

from decimal import Decimal
from typing import Optional, Union
from sqlalchemy.orm import Session
from invoice_gateway.infrastructure.database.models import InvoiceRecord, PaymentRecord
from invoice_gateway.domain.models import Invoice, InvoiceType, Payment
from invoice_gateway.domain.exceptions import DuplicateInvoiceError, InvoiceNotFoundError


def _invoice_type(value: str) -> Union[InvoiceType, str]:
    try:
        return InvoiceType(value)
    except ValueError:
        # Left raw so payment application rejects it
        return value


class InvoiceRepository:
    """Repository for invoices and their payment history"""

    def __init__(self, db: Session):
        self.db = db

    def _get_record(self, reference: str) -> Optional[InvoiceRecord]:
        return (
            self.db.query(InvoiceRecord)
            .filter(InvoiceRecord.reference == reference)
            .first()
        )

    def create_invoice(
        self,
        reference: str,
        amount: Decimal,
        invoice_type: InvoiceType = InvoiceType.STANDARD,
    ) -> Invoice:
        """Persist a new invoice with no payments"""
        if self._get_record(reference) is not None:
            raise DuplicateInvoiceError(f"Invoice {reference} already exists")

        record = InvoiceRecord(
            reference=reference,
            amount=amount,
            amount_paid=Decimal("0"),
            tax_amount=Decimal("0"),
            invoice_type=InvoiceType(invoice_type).value,
        )
        self.db.add(record)
        self.db.flush()
        return self._to_domain(record)

    def get_invoice(self, reference: str) -> Optional[Invoice]:
        """Load invoice with payment history, None when unknown"""
        record = self._get_record(reference)
        if record is None:
            return None
        return self._to_domain(record)

    def save_invoice(self, invoice: Invoice) -> None:
        """
        Write invoice totals and any payments not yet stored.

        Payments are append-only: entries beyond the stored count are new.
        Flushes without committing; the caller owns the transaction.

        Raises:
            InvoiceNotFoundError: Invoice was never created
        """
        record = self._get_record(invoice.reference)
        if record is None:
            raise InvoiceNotFoundError(f"Invoice {invoice.reference} does not exist")

        record.amount = invoice.amount
        record.amount_paid = invoice.amount_paid
        record.tax_amount = invoice.tax_amount
        record.invoice_type = getattr(invoice.type, "value", invoice.type)

        payments = invoice.payments or []
        for payment in payments[len(record.payments):]:
            record.payments.append(PaymentRecord(amount=payment.amount))

        self.db.flush()

    @staticmethod
    def _to_domain(record: InvoiceRecord) -> Invoice:
        return Invoice(
            reference=record.reference,
            amount=record.amount,
            amount_paid=record.amount_paid,
            tax_amount=record.tax_amount,
            type=_invoice_type(record.invoice_type),
            payments=[
                Payment(reference=record.reference, amount=p.amount)
                for p in record.payments
            ],
        )
