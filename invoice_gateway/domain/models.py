"""Domain models - pure Python dataclasses representing invoices and payments"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class InvoiceType(str, Enum):
    """Invoice category, decides the surcharge policy"""

    STANDARD = "standard"
    COMMERCIAL = "commercial"


@dataclass
class Payment:
    """Incoming payment against an invoice reference"""

    reference: str
    amount: Decimal


@dataclass
class Invoice:
    """Billed invoice with its accumulated payment history"""

    amount: Decimal
    amount_paid: Decimal = Decimal("0")
    tax_amount: Decimal = Decimal("0")
    type: InvoiceType = InvoiceType.STANDARD
    payments: Optional[List[Payment]] = field(default_factory=list)  # None = never initialised
    reference: Optional[str] = None

    @property
    def total_payments(self) -> Decimal:
        return sum((p.amount for p in self.payments or []), Decimal("0"))
