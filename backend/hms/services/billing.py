"""
BillingService: invoice balances, payments and claims.
"""

from decimal import Decimal
from typing import List

from sqlalchemy import func

from hms.models import (
    InsuranceClaim,
    Invoice,
    InvoiceStatus,
    Payment,
    PaymentStatus,
)
from hms.services.base import RecordService

# Invoices in these states are not expected to be paid further
SETTLED_INVOICE_STATUSES = (
    InvoiceStatus.PAID,
    InvoiceStatus.CANCELLED,
    InvoiceStatus.REFUNDED,
)


class BillingService(RecordService):

    def outstanding_invoices(self) -> List[Invoice]:
        """Unsettled invoices with a balance, earliest due first."""
        return (
            self.db.query(Invoice)
            .filter(
                Invoice.status.notin_(SETTLED_INVOICE_STATUSES),
                Invoice.balance_due > 0,
            )
            .order_by(Invoice.due_date, Invoice.invoice_id)
            .all()
        )

    def total_paid(self, invoice_id: int) -> Decimal:
        """Sum of completed payments recorded against an invoice."""
        total = (
            self.db.query(func.sum(Payment.amount))
            .filter(
                Payment.invoice_id == invoice_id,
                Payment.status == PaymentStatus.COMPLETED,
            )
            .scalar()
        )
        return Decimal(str(total)) if total is not None else Decimal("0")

    def claims_for_invoice(self, invoice_id: int) -> List[InsuranceClaim]:
        return (
            self.db.query(InsuranceClaim)
            .filter(InsuranceClaim.invoice_id == invoice_id)
            .order_by(InsuranceClaim.claim_date, InsuranceClaim.claim_id)
            .all()
        )

    def set_invoice_status(self, invoice: Invoice, status) -> Invoice:
        """Any InvoiceStatus is accepted, including moves back from Paid."""
        return self.update(invoice, status=self.coerce_status(InvoiceStatus, status))
