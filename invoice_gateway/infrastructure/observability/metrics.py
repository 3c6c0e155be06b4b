"""Prometheus metrics for payment outcomes and HTTP latency"""

from decimal import Decimal
from prometheus_client import Counter, Histogram
from invoice_gateway.domain import payments, validation

payment_counter = Counter(
    "invoice_payment_total",
    "Payments processed, by outcome",
    ["outcome"],  # applied_partial | applied_full | rejected | no_payment_needed | invalid
)

payment_amount_histogram = Histogram(
    "invoice_payment_amount",
    "Amount of applied payments",
    buckets=[10, 50, 100, 500, 1_000, 5_000, 10_000, 50_000],
)

request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)

_OUTCOMES = {
    payments.FULLY_PAID: "applied_full",
    payments.FINAL_PARTIAL_PAYMENT: "applied_full",
    payments.PARTIALLY_PAID: "applied_partial",
    payments.ANOTHER_PARTIAL_PAYMENT: "applied_partial",
    validation.NO_PAYMENT_NEEDED: "no_payment_needed",
    validation.ALREADY_FULLY_PAID: "rejected",
    validation.EXCEEDS_PARTIAL_REMAINING: "rejected",
    validation.EXCEEDS_INVOICE_AMOUNT: "rejected",
}


def record_payment(message: str, amount: Decimal, applied: bool) -> None:
    """Count the payment outcome and, when applied, observe its amount"""
    payment_counter.labels(outcome=_OUTCOMES.get(message, "rejected")).inc()
    if applied:
        payment_amount_histogram.observe(float(amount))


def record_invalid_payment() -> None:
    payment_counter.labels(outcome="invalid").inc()
