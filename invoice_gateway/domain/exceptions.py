"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidOperationError(DomainException):
    """Payment cannot be processed against the invoice at all"""

    pass


class InvoiceNotFoundError(InvalidOperationError):
    """No invoice matches the payment reference"""

    pass


class InvalidInvoiceStateError(InvalidOperationError):
    """Invoice data contradicts itself (e.g. payments on a zero-amount invoice)"""

    pass


class UnsupportedInvoiceTypeError(DomainException):
    """Invoice carries a category with no payment rule"""

    pass


class DuplicateInvoiceError(DomainException):
    """An invoice with the same reference already exists"""

    pass
