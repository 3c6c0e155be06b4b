"""SQLAlchemy ORM models for invoices and their payments"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

# 4 decimal places keeps the 14% surcharge on 2dp payments exact
MONEY = Numeric(18, 4)


class InvoiceRecord(Base):
    """Billed invoice with running totals"""

    __tablename__ = "invoice"

    reference = Column(Text, primary_key=True)
    amount = Column(MONEY, nullable=False)
    amount_paid = Column(MONEY, nullable=False, default=0)
    tax_amount = Column(MONEY, nullable=False, default=0)
    invoice_type = Column(Text, nullable=False, default="standard")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    payments = relationship(
        "PaymentRecord",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="PaymentRecord.id",
    )


class PaymentRecord(Base):
    """Payment applied to an invoice, ordered by insertion id"""

    __tablename__ = "invoice_payment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    invoice_reference = Column(
        Text, ForeignKey("invoice.reference", ondelete="CASCADE"), nullable=False, index=True
    )
    amount = Column(MONEY, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    invoice = relationship("InvoiceRecord", back_populates="payments")
