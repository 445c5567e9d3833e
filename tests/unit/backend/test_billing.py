"""
Tests for insurance, invoices, payments and claims.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from hms.db.errors import CheckViolation, ForeignKeyViolation, InvalidStatusError, UniqueViolation
from hms.models import (
    BillingCategory,
    ClaimStatus,
    InsuranceClaim,
    InsuranceProvider,
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    PatientInsurance,
    Payment,
    PaymentMethod,
    PaymentStatus,
    PolicyHolderRelation,
)
from hms.services import BillingService, RecordService


@pytest.fixture
def billing(session, hospital):
    """An insured patient with one consultation invoice."""
    service = RecordService(session)
    provider = service.add(InsuranceProvider(
        provider_name="Northwind Health",
        provider_code="NWH",
        email="claims@northwind.example",
    ))
    policy = service.add(PatientInsurance(
        patient_id=hospital.patient.patient_id,
        provider_id=provider.provider_id,
        policy_number="NWH-558201",
        policy_holder_name="Arjun Rao",
        coverage_start_date=date(2026, 1, 1),
        coverage_percentage=Decimal("80.00"),
        deductible=Decimal("250.00"),
        copay_amount=Decimal("20.00"),
    ))
    category = service.add(BillingCategory(category_name="Consultation"))
    invoice = Invoice(
        invoice_number="INV-2026-0001",
        patient_id=hospital.patient.patient_id,
        appointment_id=hospital.appointment.appointment_id,
        invoice_date=date(2026, 10, 20),
        due_date=date(2026, 11, 19),
        subtotal=Decimal("150.00"),
        total_amount=Decimal("150.00"),
        balance_due=Decimal("150.00"),
    )
    invoice.items = [
        InvoiceItem(
            billing_category_id=category.billing_category_id,
            description="Cardiology consultation",
            service_date=date(2026, 10, 20),
            unit_price=Decimal("150.00"),
            line_total=Decimal("150.00"),
        ),
    ]
    invoice = service.add(invoice)
    return dict(provider=provider, policy=policy, category=category, invoice=invoice)


def make_payment(invoice, number, amount, **overrides):
    fields = dict(
        payment_number=number,
        invoice_id=invoice.invoice_id,
        amount=amount,
        payment_method=PaymentMethod.CREDIT_CARD,
    )
    fields.update(overrides)
    return Payment(**fields)


def make_claim(billing, number, amount, **overrides):
    fields = dict(
        claim_number=number,
        invoice_id=billing["invoice"].invoice_id,
        patient_insurance_id=billing["policy"].patient_insurance_id,
        claim_date=date(2026, 10, 21),
        claim_amount=amount,
    )
    fields.update(overrides)
    return InsuranceClaim(**fields)


# =============================================================================
# Insurance
# =============================================================================

class TestInsurance:

    def test_defaults(self, billing):
        policy = billing["policy"]

        assert policy.relationship_to_patient is PolicyHolderRelation.SELF
        assert policy.is_primary is True

    def test_coverage_percentage_bounds(self, session, billing):
        with pytest.raises(CheckViolation) as exc_info:
            RecordService(session).update(billing["policy"], coverage_percentage=Decimal("120.00"))

        assert exc_info.value.constraint == "chk_coverage_percentage"

    def test_coverage_end_before_start_rejected(self, session, billing):
        with pytest.raises(CheckViolation) as exc_info:
            RecordService(session).update(billing["policy"], coverage_end_date=date(2025, 12, 31))

        assert exc_info.value.constraint == "chk_coverage_dates"

    def test_policy_number_unique_per_provider(self, session, hospital, billing):
        with pytest.raises(UniqueViolation) as exc_info:
            RecordService(session).add(PatientInsurance(
                patient_id=hospital.patient.patient_id,
                provider_id=billing["provider"].provider_id,
                policy_number="NWH-558201",
                policy_holder_name="Someone Else",
                coverage_start_date=date(2026, 1, 1),
                coverage_percentage=Decimal("50.00"),
            ))

        assert exc_info.value.constraint == "unique_provider_policy"

    def test_provider_with_policies_is_restricted(self, session, billing):
        with pytest.raises(ForeignKeyViolation):
            RecordService(session).delete(billing["provider"])


# =============================================================================
# Invoices
# =============================================================================

class TestInvoice:

    def test_defaults_to_pending(self, billing):
        assert billing["invoice"].status is InvoiceStatus.PENDING

    def test_paid_cannot_exceed_total(self, session, billing):
        with pytest.raises(CheckViolation) as exc_info:
            RecordService(session).update(billing["invoice"], amount_paid=Decimal("150.01"))

        assert exc_info.value.constraint == "chk_invoice_paid"

    def test_negative_amounts_rejected(self, session, billing):
        with pytest.raises(CheckViolation) as exc_info:
            RecordService(session).update(billing["invoice"], discount_amount=Decimal("-5.00"))

        assert exc_info.value.constraint == "chk_invoice_amounts"

    def test_due_date_before_invoice_date_rejected(self, session, billing):
        with pytest.raises(CheckViolation) as exc_info:
            RecordService(session).update(billing["invoice"], due_date=date(2026, 10, 1))

        assert exc_info.value.constraint == "chk_invoice_due_date"

    def test_item_quantity_must_be_positive(self, session, billing):
        with pytest.raises(CheckViolation) as exc_info:
            RecordService(session).add(InvoiceItem(
                invoice_id=billing["invoice"].invoice_id,
                billing_category_id=billing["category"].billing_category_id,
                description="ECG",
                quantity=0,
                unit_price=Decimal("35.00"),
                line_total=Decimal("0"),
            ))

        assert exc_info.value.constraint == "chk_item_quantity"

    def test_billing_category_in_use_is_restricted(self, session, billing):
        with pytest.raises(ForeignKeyViolation):
            RecordService(session).delete(billing["category"])

    def test_delete_invoice_removes_items(self, session, billing, count_rows):
        RecordService(session).delete(billing["invoice"])

        assert count_rows(InvoiceItem) == 0
        assert count_rows(BillingCategory) == 1

    def test_invoice_with_payment_is_restricted(self, session, billing, count_rows):
        service = RecordService(session)
        service.add(make_payment(billing["invoice"], "PAY-1", Decimal("20.00")))

        with pytest.raises(ForeignKeyViolation):
            service.delete(billing["invoice"])

        assert count_rows(InvoiceItem) == 1

    def test_tax_rate_bounds(self, session):
        with pytest.raises(CheckViolation) as exc_info:
            RecordService(session).add(BillingCategory(category_name="Luxury", tax_rate=Decimal("101.00")))

        assert exc_info.value.constraint == "chk_tax_rate"


# =============================================================================
# Payments and claims
# =============================================================================

class TestPaymentsAndClaims:

    def test_payment_amount_must_be_positive(self, session, billing):
        with pytest.raises(CheckViolation) as exc_info:
            RecordService(session).add(make_payment(billing["invoice"], "PAY-2", Decimal("0.00")))

        assert exc_info.value.constraint == "chk_payment_amount"

    def test_payment_defaults(self, session, billing):
        payment = RecordService(session).add(make_payment(billing["invoice"], "PAY-3", Decimal("20.00")))

        assert payment.status is PaymentStatus.COMPLETED
        assert payment.payment_date is not None

    def test_one_claim_per_invoice_and_policy(self, session, billing):
        service = RecordService(session)
        service.add(make_claim(billing, "CLM-1", Decimal("130.00")))

        with pytest.raises(UniqueViolation) as exc_info:
            service.add(make_claim(billing, "CLM-2", Decimal("130.00")))

        assert exc_info.value.constraint == "unique_invoice_policy"

    def test_approved_amount_cannot_exceed_claim(self, session, billing):
        with pytest.raises(CheckViolation) as exc_info:
            RecordService(session).add(make_claim(
                billing, "CLM-3", Decimal("130.00"), approved_amount=Decimal("140.00"),
            ))

        assert exc_info.value.constraint == "chk_approved_amount"

    def test_response_before_submission_rejected(self, session, billing):
        with pytest.raises(CheckViolation) as exc_info:
            RecordService(session).add(make_claim(
                billing,
                "CLM-4",
                Decimal("130.00"),
                submission_date=datetime(2026, 10, 21, 9, 0),
                response_date=datetime(2026, 10, 20, 9, 0),
            ))

        assert exc_info.value.constraint == "chk_claim_response"

    def test_policy_with_claims_is_restricted(self, session, billing):
        service = RecordService(session)
        service.add(make_claim(billing, "CLM-5", Decimal("130.00")))

        with pytest.raises(ForeignKeyViolation):
            service.delete(billing["policy"])

    def test_claim_defaults_to_submitted(self, session, billing):
        claim = RecordService(session).add(make_claim(billing, "CLM-6", Decimal("130.00")))

        assert claim.status is ClaimStatus.SUBMITTED


# =============================================================================
# BillingService
# =============================================================================

class TestBillingService:

    def test_total_paid_counts_completed_payments_only(self, session, billing):
        service = BillingService(session)
        invoice = billing["invoice"]
        service.add_all([
            make_payment(invoice, "PAY-10", Decimal("20.00")),
            make_payment(invoice, "PAY-11", Decimal("50.50"), payment_method=PaymentMethod.CASH),
            make_payment(invoice, "PAY-12", Decimal("70.00"), status=PaymentStatus.FAILED),
        ])

        assert service.total_paid(invoice.invoice_id) == Decimal("70.50")

    def test_total_paid_without_payments(self, session, billing):
        assert BillingService(session).total_paid(billing["invoice"].invoice_id) == Decimal("0")

    def test_outstanding_invoices(self, session, hospital, billing):
        service = BillingService(session)
        service.add_all([
            Invoice(
                invoice_number="INV-2026-0002",
                patient_id=hospital.patient.patient_id,
                invoice_date=date(2026, 9, 1),
                due_date=date(2026, 10, 1),
                total_amount=Decimal("80.00"),
                balance_due=Decimal("80.00"),
                status=InvoiceStatus.OVERDUE,
            ),
            Invoice(
                invoice_number="INV-2026-0003",
                patient_id=hospital.patient.patient_id,
                invoice_date=date(2026, 8, 1),
                due_date=date(2026, 8, 31),
                total_amount=Decimal("60.00"),
                amount_paid=Decimal("60.00"),
                status=InvoiceStatus.PAID,
            ),
        ])

        outstanding = service.outstanding_invoices()

        assert [i.invoice_number for i in outstanding] == ["INV-2026-0002", "INV-2026-0001"]

    def test_claims_for_invoice(self, session, hospital, billing):
        service = BillingService(session)
        secondary = service.add(PatientInsurance(
            patient_id=hospital.patient.patient_id,
            provider_id=billing["provider"].provider_id,
            policy_number="NWH-558202",
            policy_holder_name="Lata Rao",
            relationship_to_patient=PolicyHolderRelation.SPOUSE,
            coverage_start_date=date(2026, 1, 1),
            coverage_percentage=Decimal("20.00"),
            is_primary=False,
        ))
        service.add_all([
            make_claim(billing, "CLM-20", Decimal("120.00"), claim_date=date(2026, 10, 22)),
            make_claim(billing, "CLM-21", Decimal("30.00"), claim_date=date(2026, 10, 21),
                       patient_insurance_id=secondary.patient_insurance_id),
        ])

        claims = service.claims_for_invoice(billing["invoice"].invoice_id)

        assert [c.claim_number for c in claims] == ["CLM-21", "CLM-20"]

    def test_paid_invoice_can_return_to_pending(self, session, billing):
        service = BillingService(session)
        service.set_invoice_status(billing["invoice"], "Paid")

        service.set_invoice_status(billing["invoice"], "Pending")

        assert billing["invoice"].status is InvoiceStatus.PENDING

    def test_unknown_invoice_status_rejected(self, session, billing):
        with pytest.raises(InvalidStatusError):
            BillingService(session).set_invoice_status(billing["invoice"], "Written Off")
