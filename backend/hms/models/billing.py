"""
Billing and insurance models.

These tables support:
1. Insurance providers and patient policies
2. Billing categories (with tax rate)
3. Invoices with line items
4. Payments against invoices
5. Insurance claims (one per invoice and policy)

Billing records are never orphaned: a patient with invoices, an invoice
with payments or claims, and a policy with claims cannot be deleted.
"""

import enum
from sqlalchemy import (
    Column, String, DateTime, ForeignKey, Integer, Date, Boolean, Text, Numeric,
    CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship, backref

from hms.db.database import Base
from hms.models.types import closed_enum, utcnow


class PolicyHolderRelation(enum.Enum):
    SELF = "Self"
    SPOUSE = "Spouse"
    CHILD = "Child"
    PARENT = "Parent"
    OTHER = "Other"


class InvoiceStatus(enum.Enum):
    """Status of an invoice. Regressions (Paid -> Pending) are allowed."""
    DRAFT = "Draft"
    PENDING = "Pending"
    PARTIALLY_PAID = "Partially Paid"
    PAID = "Paid"
    OVERDUE = "Overdue"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"


class PaymentMethod(enum.Enum):
    CASH = "Cash"
    CREDIT_CARD = "Credit Card"
    DEBIT_CARD = "Debit Card"
    CHECK = "Check"
    BANK_TRANSFER = "Bank Transfer"
    INSURANCE = "Insurance"
    MOBILE_PAYMENT = "Mobile Payment"


class PaymentStatus(enum.Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    FAILED = "Failed"
    REFUNDED = "Refunded"


class ClaimStatus(enum.Enum):
    """Status of an insurance claim."""
    SUBMITTED = "Submitted"
    UNDER_REVIEW = "Under Review"
    APPROVED = "Approved"
    PARTIALLY_APPROVED = "Partially Approved"
    REJECTED = "Rejected"
    PAID = "Paid"
    APPEALED = "Appealed"


class InsuranceProvider(Base):
    __tablename__ = "insurance_providers"

    provider_id = Column(Integer, primary_key=True, autoincrement=True)
    provider_name = Column(String(100), nullable=False)
    provider_code = Column(String(20), nullable=False)
    contact_person = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(100), nullable=True)
    address = Column(Text, nullable=True)
    website = Column(String(200), nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=utcnow)

    __table_args__ = (
        UniqueConstraint("provider_name", name="uq_insurance_providers_provider_name"),
        UniqueConstraint("provider_code", name="uq_insurance_providers_provider_code"),
        CheckConstraint(
            "email IS NULL OR email LIKE '%_@__%.__%'",
            name="chk_provider_email",
        ),
    )


class PatientInsurance(Base):
    """
    Insurance policy held by (or covering) a patient.
    """

    __tablename__ = "patient_insurance"

    patient_insurance_id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(
        Integer,
        ForeignKey("patients.patient_id", name="fk_insurance_patient", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    provider_id = Column(
        Integer,
        ForeignKey(
            "insurance_providers.provider_id",
            name="fk_insurance_provider",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        nullable=False,
    )
    policy_number = Column(String(50), nullable=False)
    group_number = Column(String(50), nullable=True)
    policy_holder_name = Column(String(100), nullable=False)
    relationship_to_patient = Column(
        closed_enum(PolicyHolderRelation, "chk_policy_holder_relation"),
        default=PolicyHolderRelation.SELF,
    )
    coverage_start_date = Column(Date, nullable=False)
    coverage_end_date = Column(Date, nullable=True)
    coverage_percentage = Column(Numeric(5, 2), nullable=False)
    deductible = Column(Numeric(10, 2), default=0)
    copay_amount = Column(Numeric(10, 2), default=0)
    is_primary = Column(Boolean, default=True)
    created_at = Column(DateTime, default=utcnow)

    # Relationships
    patient = relationship(
        "Patient",
        backref=backref("insurance_policies", cascade="all, delete-orphan", passive_deletes=True),
    )
    provider = relationship("InsuranceProvider")

    __table_args__ = (
        UniqueConstraint("provider_id", "policy_number", name="unique_provider_policy"),
        CheckConstraint(
            "coverage_end_date IS NULL OR coverage_end_date >= coverage_start_date",
            name="chk_coverage_dates",
        ),
        CheckConstraint(
            "coverage_percentage BETWEEN 0 AND 100",
            name="chk_coverage_percentage",
        ),
        CheckConstraint("deductible >= 0", name="chk_deductible"),
        CheckConstraint("copay_amount >= 0", name="chk_copay"),
    )


class BillingCategory(Base):
    """Billing category lookup (Consultation, Lab, Pharmacy, Room, ...)."""

    __tablename__ = "billing_categories"

    billing_category_id = Column(Integer, primary_key=True, autoincrement=True)
    category_name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    tax_rate = Column(Numeric(5, 2), default=0)

    __table_args__ = (
        UniqueConstraint("category_name", name="uq_billing_categories_category_name"),
        CheckConstraint("tax_rate BETWEEN 0 AND 100", name="chk_tax_rate"),
    )


class Invoice(Base):
    """
    Patient invoice with stored totals.

    Totals are stored as issued; the schema only bounds them
    (non-negative, amount_paid never above total_amount).
    """

    __tablename__ = "invoices"

    invoice_id = Column(Integer, primary_key=True, autoincrement=True)
    invoice_number = Column(String(20), nullable=False)
    patient_id = Column(
        Integer,
        ForeignKey("patients.patient_id", name="fk_invoice_patient", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    admission_id = Column(
        Integer,
        ForeignKey("admissions.admission_id", name="fk_invoice_admission", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
    )
    appointment_id = Column(
        Integer,
        ForeignKey(
            "appointments.appointment_id",
            name="fk_invoice_appointment",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        nullable=True,
    )
    invoice_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    subtotal = Column(Numeric(12, 2), nullable=False, default=0)
    tax_amount = Column(Numeric(12, 2), nullable=False, default=0)
    discount_amount = Column(Numeric(12, 2), nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    amount_paid = Column(Numeric(12, 2), nullable=False, default=0)
    balance_due = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(closed_enum(InvoiceStatus, "chk_invoice_status"), default=InvoiceStatus.PENDING)
    notes = Column(Text, nullable=True)
    created_by_staff_id = Column(
        Integer,
        ForeignKey("staff.staff_id", name="fk_invoice_staff", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
    )

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    patient = relationship("Patient")
    admission = relationship("Admission")
    appointment = relationship("Appointment")
    created_by = relationship("Staff")
    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("invoice_number", name="uq_invoices_invoice_number"),
        CheckConstraint(
            "subtotal >= 0 AND tax_amount >= 0 AND discount_amount >= 0 "
            "AND total_amount >= 0 AND amount_paid >= 0 AND balance_due >= 0",
            name="chk_invoice_amounts",
        ),
        CheckConstraint("due_date >= invoice_date", name="chk_invoice_due_date"),
        CheckConstraint("amount_paid <= total_amount", name="chk_invoice_paid"),
    )


class InvoiceItem(Base):
    """Line item on an invoice."""

    __tablename__ = "invoice_items"

    item_id = Column(Integer, primary_key=True, autoincrement=True)
    invoice_id = Column(
        Integer,
        ForeignKey("invoices.invoice_id", name="fk_item_invoice", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    billing_category_id = Column(
        Integer,
        ForeignKey(
            "billing_categories.billing_category_id",
            name="fk_item_category",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        nullable=False,
    )
    description = Column(String(255), nullable=False)
    service_date = Column(Date, nullable=True)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(10, 2), nullable=False)
    discount = Column(Numeric(10, 2), default=0)
    line_total = Column(Numeric(12, 2), nullable=False)

    invoice = relationship("Invoice", back_populates="items")
    billing_category = relationship("BillingCategory")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="chk_item_quantity"),
        CheckConstraint("unit_price >= 0", name="chk_item_unit_price"),
        CheckConstraint("discount >= 0", name="chk_item_discount"),
        CheckConstraint("line_total >= 0", name="chk_item_line_total"),
    )


class Payment(Base):
    """
    Payment received against an invoice.
    """

    __tablename__ = "payments"

    payment_id = Column(Integer, primary_key=True, autoincrement=True)
    payment_number = Column(String(20), nullable=False)
    invoice_id = Column(
        Integer,
        ForeignKey("invoices.invoice_id", name="fk_payment_invoice", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    payment_date = Column(DateTime, nullable=False, default=utcnow)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(closed_enum(PaymentMethod, "chk_payment_method"), nullable=False)
    transaction_reference = Column(String(100), nullable=True)
    status = Column(closed_enum(PaymentStatus, "chk_payment_status"), default=PaymentStatus.COMPLETED)
    received_by_staff_id = Column(
        Integer,
        ForeignKey("staff.staff_id", name="fk_payment_staff", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
    )
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    invoice = relationship("Invoice")
    received_by = relationship("Staff")

    __table_args__ = (
        UniqueConstraint("payment_number", name="uq_payments_payment_number"),
        CheckConstraint("amount > 0", name="chk_payment_amount"),
    )


class InsuranceClaim(Base):
    """
    Insurance claim for an invoice under one policy.
    """

    __tablename__ = "insurance_claims"

    claim_id = Column(Integer, primary_key=True, autoincrement=True)
    claim_number = Column(String(30), nullable=False)
    invoice_id = Column(
        Integer,
        ForeignKey("invoices.invoice_id", name="fk_claim_invoice", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
    )
    patient_insurance_id = Column(
        Integer,
        ForeignKey(
            "patient_insurance.patient_insurance_id",
            name="fk_claim_policy",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        nullable=False,
    )
    claim_date = Column(Date, nullable=False)
    claim_amount = Column(Numeric(12, 2), nullable=False)
    approved_amount = Column(Numeric(12, 2), nullable=True)
    status = Column(closed_enum(ClaimStatus, "chk_claim_status"), default=ClaimStatus.SUBMITTED)
    submission_date = Column(DateTime, nullable=True)
    response_date = Column(DateTime, nullable=True)
    rejection_reason = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    invoice = relationship("Invoice")
    policy = relationship("PatientInsurance")

    __table_args__ = (
        UniqueConstraint("claim_number", name="uq_insurance_claims_claim_number"),
        UniqueConstraint("invoice_id", "patient_insurance_id", name="unique_invoice_policy"),
        CheckConstraint("claim_amount > 0", name="chk_claim_amount"),
        CheckConstraint(
            "approved_amount IS NULL OR (approved_amount >= 0 AND approved_amount <= claim_amount)",
            name="chk_approved_amount",
        ),
        CheckConstraint(
            "response_date IS NULL OR submission_date IS NULL OR response_date >= submission_date",
            name="chk_claim_response",
        ),
    )
