"""Unit tests for the payment processing flow"""

import copy
import pytest
from decimal import Decimal
from invoice_gateway.domain.models import InvoiceType, Payment
from invoice_gateway.domain.exceptions import (
    InvalidOperationError,
    InvoiceNotFoundError,
    InvalidInvoiceStateError,
    UnsupportedInvoiceTypeError,
)


def pay(amount: str, reference: str = "REF01") -> Payment:
    return Payment(reference=reference, amount=Decimal(amount))


def test_no_invoice_for_reference_raises(processor, repository):
    repository.get_invoice.return_value = None

    with pytest.raises(InvoiceNotFoundError, match="There is no invoice matching this payment"):
        processor.process_payment(pay("10"))

    repository.get_invoice.assert_called_once_with("REF01")
    repository.save_invoice.assert_not_called()


def test_invalid_invoice_state_raises(processor, repository, invoice_factory):
    repository.get_invoice.return_value = invoice_factory("0", payments=["10"])

    with pytest.raises(InvalidOperationError) as exc_info:
        processor.process_payment(pay("10"))

    assert isinstance(exc_info.value, InvalidInvoiceStateError)
    assert str(exc_info.value) == "The invoice is in an invalid state."
    repository.save_invoice.assert_not_called()


def test_no_payment_needed_leaves_invoice_untouched(processor, repository, invoice_factory):
    invoice = invoice_factory("0", payments=None)
    before = copy.deepcopy(invoice)
    repository.get_invoice.return_value = invoice

    assert processor.process_payment(pay("50")) == "no payment needed"
    assert invoice == before
    repository.save_invoice.assert_not_called()


def test_valid_payment_updates_invoice(processor, repository, invoice_factory):
    invoice = invoice_factory("10", payments=[])
    payment = pay("2")
    repository.get_invoice.return_value = invoice

    result = processor.process_payment(payment)

    assert result == "invoice is now partially paid"
    assert invoice.amount_paid == Decimal("2")
    assert invoice.payments == [payment]
    repository.save_invoice.assert_called_once_with(invoice)


def test_already_fully_paid(processor, repository, invoice_factory):
    invoice = invoice_factory("10", amount_paid="10", payments=["10"])
    before = copy.deepcopy(invoice)
    repository.get_invoice.return_value = invoice

    assert processor.process_payment(pay("10", reference="REF02")) == "invoice was already fully paid"
    assert invoice == before
    repository.save_invoice.assert_not_called()


def test_partial_payment_exceeding_remaining(processor, repository, invoice_factory):
    repository.get_invoice.return_value = invoice_factory("10", amount_paid="5", payments=["5"])

    result = processor.process_payment(pay("10"))

    assert result == "the payment is greater than the partial amount remaining"
    repository.save_invoice.assert_not_called()


def test_first_payment_exceeding_invoice_amount(processor, repository, invoice_factory):
    repository.get_invoice.return_value = invoice_factory("10", payments=[])

    assert processor.process_payment(pay("11")) == "the payment is greater than the invoice amount"


def test_final_partial_payment(processor, repository, invoice_factory):
    invoice = invoice_factory("10", amount_paid="5", payments=["5"])
    repository.get_invoice.return_value = invoice

    result = processor.process_payment(pay("5"))

    assert result == "final partial payment received, invoice is now fully paid"
    assert invoice.amount_paid == invoice.amount


def test_single_payment_settles_invoice(processor, repository, invoice_factory):
    repository.get_invoice.return_value = invoice_factory("10", payments=[])

    assert processor.process_payment(pay("10")) == "invoice is now fully paid"


def test_another_partial_payment(processor, repository, invoice_factory):
    repository.get_invoice.return_value = invoice_factory("10", amount_paid="5", payments=["5"])

    assert processor.process_payment(pay("2")) == "another partial payment received, still not fully paid"


def test_commercial_payment_accrues_tax(processor, repository, invoice_factory):
    invoice = invoice_factory("100", payments=[], invoice_type=InvoiceType.COMMERCIAL)
    repository.get_invoice.return_value = invoice

    processor.process_payment(pay("40"))

    assert invoice.tax_amount == Decimal("40") * Decimal("0.14")
    assert invoice.amount_paid == Decimal("40")


def test_replayed_payment_reports_already_paid(processor, repository, invoice_factory):
    invoice = invoice_factory("10", payments=[])
    repository.get_invoice.return_value = invoice

    assert processor.process_payment(pay("10")) == "invoice is now fully paid"
    assert processor.process_payment(pay("10")) == "invoice was already fully paid"
    assert repository.save_invoice.call_count == 1


def test_unsupported_type_aborts_before_save(processor, repository, invoice_factory):
    invoice = invoice_factory("10", payments=[])
    invoice.type = "government"
    repository.get_invoice.return_value = invoice

    with pytest.raises(UnsupportedInvoiceTypeError):
        processor.process_payment(pay("5"))

    repository.save_invoice.assert_not_called()


def test_collaborator_errors_propagate(processor, repository, invoice_factory):
    repository.get_invoice.return_value = invoice_factory("10", payments=[])
    repository.save_invoice.side_effect = ConnectionError("database unavailable")

    with pytest.raises(ConnectionError):
        processor.process_payment(pay("5"))


def test_process_reports_whether_payment_was_applied(processor, repository, invoice_factory):
    invoice = invoice_factory("10", payments=[])
    repository.get_invoice.return_value = invoice

    accepted = processor.process(pay("4"))
    rejected = processor.process(pay("7"))

    assert accepted.applied is True
    assert rejected.applied is False
    assert rejected.message == "the payment is greater than the partial amount remaining"
    assert rejected.invoice is invoice


def test_oversized_payment_after_zero_payment_is_applied(processor, repository, invoice_factory):
    """Known quirk: a zero-value history bypasses both overpayment checks"""
    invoice = invoice_factory("10", payments=["0"])
    repository.get_invoice.return_value = invoice

    result = processor.process_payment(pay("25"))

    assert result == "another partial payment received, still not fully paid"
    assert invoice.amount_paid == Decimal("25")
