"""Create billing and insurance tables

Revision ID: a7b8c9d0e1f2
Revises: f6a7b8c9d0e1
Create Date: 2026-10-19 10:00:00.000000

This migration adds:
1. insurance_providers, patient_insurance
2. billing_categories
3. invoices, invoice_items
4. payments, insurance_claims - both restrict deletion of the invoice
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'a7b8c9d0e1f2'
down_revision = 'f6a7b8c9d0e1'  # Previous: create_facility_tables
branch_labels = None
depends_on = None

RELATION = ('Self', 'Spouse', 'Child', 'Parent', 'Other')
INVOICE_STATUS = ('Draft', 'Pending', 'Partially Paid', 'Paid', 'Overdue', 'Cancelled', 'Refunded')
PAYMENT_METHOD = (
    'Cash', 'Credit Card', 'Debit Card', 'Check', 'Bank Transfer', 'Insurance', 'Mobile Payment',
)
PAYMENT_STATUS = ('Pending', 'Completed', 'Failed', 'Refunded')
CLAIM_STATUS = (
    'Submitted', 'Under Review', 'Approved', 'Partially Approved', 'Rejected', 'Paid', 'Appealed',
)


def closed_enum(values, name):
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True)


def upgrade() -> None:
    op.create_table(
        'insurance_providers',
        sa.Column('provider_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('provider_name', sa.String(100), nullable=False),
        sa.Column('provider_code', sa.String(20), nullable=False),
        sa.Column('contact_person', sa.String(100), nullable=True),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('email', sa.String(100), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('website', sa.String(200), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('provider_name', name='uq_insurance_providers_provider_name'),
        sa.UniqueConstraint('provider_code', name='uq_insurance_providers_provider_code'),
        sa.CheckConstraint(
            "email IS NULL OR email LIKE '%_@__%.__%'",
            name='chk_provider_email',
        ),
    )

    op.create_table(
        'patient_insurance',
        sa.Column('patient_insurance_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('provider_id', sa.Integer(), nullable=False),
        sa.Column('policy_number', sa.String(50), nullable=False),
        sa.Column('group_number', sa.String(50), nullable=True),
        sa.Column('policy_holder_name', sa.String(100), nullable=False),
        sa.Column(
            'relationship_to_patient',
            closed_enum(RELATION, 'chk_policy_holder_relation'),
            nullable=True,
        ),
        sa.Column('coverage_start_date', sa.Date(), nullable=False),
        sa.Column('coverage_end_date', sa.Date(), nullable=True),
        sa.Column('coverage_percentage', sa.Numeric(5, 2), nullable=False),
        sa.Column('deductible', sa.Numeric(10, 2), nullable=True),
        sa.Column('copay_amount', sa.Numeric(10, 2), nullable=True),
        sa.Column('is_primary', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['patient_id'], ['patients.patient_id'],
            name='fk_insurance_patient', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['provider_id'], ['insurance_providers.provider_id'],
            name='fk_insurance_provider', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('provider_id', 'policy_number', name='unique_provider_policy'),
        sa.CheckConstraint(
            'coverage_end_date IS NULL OR coverage_end_date >= coverage_start_date',
            name='chk_coverage_dates',
        ),
        sa.CheckConstraint('coverage_percentage BETWEEN 0 AND 100', name='chk_coverage_percentage'),
        sa.CheckConstraint('deductible >= 0', name='chk_deductible'),
        sa.CheckConstraint('copay_amount >= 0', name='chk_copay'),
    )

    op.create_table(
        'billing_categories',
        sa.Column('billing_category_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('category_name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('tax_rate', sa.Numeric(5, 2), nullable=True),
        sa.UniqueConstraint('category_name', name='uq_billing_categories_category_name'),
        sa.CheckConstraint('tax_rate BETWEEN 0 AND 100', name='chk_tax_rate'),
    )

    op.create_table(
        'invoices',
        sa.Column('invoice_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('invoice_number', sa.String(20), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('admission_id', sa.Integer(), nullable=True),
        sa.Column('appointment_id', sa.Integer(), nullable=True),
        sa.Column('invoice_date', sa.Date(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('subtotal', sa.Numeric(12, 2), nullable=False),
        sa.Column('tax_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('discount_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('amount_paid', sa.Numeric(12, 2), nullable=False),
        sa.Column('balance_due', sa.Numeric(12, 2), nullable=False),
        sa.Column('status', closed_enum(INVOICE_STATUS, 'chk_invoice_status'), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by_staff_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['patient_id'], ['patients.patient_id'],
            name='fk_invoice_patient', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['admission_id'], ['admissions.admission_id'],
            name='fk_invoice_admission', ondelete='SET NULL', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['appointment_id'], ['appointments.appointment_id'],
            name='fk_invoice_appointment', ondelete='SET NULL', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['created_by_staff_id'], ['staff.staff_id'],
            name='fk_invoice_staff', ondelete='SET NULL', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('invoice_number', name='uq_invoices_invoice_number'),
        sa.CheckConstraint(
            'subtotal >= 0 AND tax_amount >= 0 AND discount_amount >= 0 '
            'AND total_amount >= 0 AND amount_paid >= 0 AND balance_due >= 0',
            name='chk_invoice_amounts',
        ),
        sa.CheckConstraint('due_date >= invoice_date', name='chk_invoice_due_date'),
        sa.CheckConstraint('amount_paid <= total_amount', name='chk_invoice_paid'),
    )
    op.create_index('ix_invoices_patient_id', 'invoices', ['patient_id'])

    op.create_table(
        'invoice_items',
        sa.Column('item_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('invoice_id', sa.Integer(), nullable=False),
        sa.Column('billing_category_id', sa.Integer(), nullable=False),
        sa.Column('description', sa.String(255), nullable=False),
        sa.Column('service_date', sa.Date(), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('discount', sa.Numeric(10, 2), nullable=True),
        sa.Column('line_total', sa.Numeric(12, 2), nullable=False),
        sa.ForeignKeyConstraint(
            ['invoice_id'], ['invoices.invoice_id'],
            name='fk_item_invoice', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['billing_category_id'], ['billing_categories.billing_category_id'],
            name='fk_item_category', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.CheckConstraint('quantity > 0', name='chk_item_quantity'),
        sa.CheckConstraint('unit_price >= 0', name='chk_item_unit_price'),
        sa.CheckConstraint('discount >= 0', name='chk_item_discount'),
        sa.CheckConstraint('line_total >= 0', name='chk_item_line_total'),
    )

    op.create_table(
        'payments',
        sa.Column('payment_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('payment_number', sa.String(20), nullable=False),
        sa.Column('invoice_id', sa.Integer(), nullable=False),
        sa.Column('payment_date', sa.DateTime(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('payment_method', closed_enum(PAYMENT_METHOD, 'chk_payment_method'), nullable=False),
        sa.Column('transaction_reference', sa.String(100), nullable=True),
        sa.Column('status', closed_enum(PAYMENT_STATUS, 'chk_payment_status'), nullable=True),
        sa.Column('received_by_staff_id', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['invoice_id'], ['invoices.invoice_id'],
            name='fk_payment_invoice', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['received_by_staff_id'], ['staff.staff_id'],
            name='fk_payment_staff', ondelete='SET NULL', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('payment_number', name='uq_payments_payment_number'),
        sa.CheckConstraint('amount > 0', name='chk_payment_amount'),
    )
    op.create_index('ix_payments_invoice_id', 'payments', ['invoice_id'])

    op.create_table(
        'insurance_claims',
        sa.Column('claim_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('claim_number', sa.String(30), nullable=False),
        sa.Column('invoice_id', sa.Integer(), nullable=False),
        sa.Column('patient_insurance_id', sa.Integer(), nullable=False),
        sa.Column('claim_date', sa.Date(), nullable=False),
        sa.Column('claim_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('approved_amount', sa.Numeric(12, 2), nullable=True),
        sa.Column('status', closed_enum(CLAIM_STATUS, 'chk_claim_status'), nullable=True),
        sa.Column('submission_date', sa.DateTime(), nullable=True),
        sa.Column('response_date', sa.DateTime(), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['invoice_id'], ['invoices.invoice_id'],
            name='fk_claim_invoice', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['patient_insurance_id'], ['patient_insurance.patient_insurance_id'],
            name='fk_claim_policy', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('claim_number', name='uq_insurance_claims_claim_number'),
        sa.UniqueConstraint('invoice_id', 'patient_insurance_id', name='unique_invoice_policy'),
        sa.CheckConstraint('claim_amount > 0', name='chk_claim_amount'),
        sa.CheckConstraint(
            'approved_amount IS NULL OR (approved_amount >= 0 AND approved_amount <= claim_amount)',
            name='chk_approved_amount',
        ),
        sa.CheckConstraint(
            'response_date IS NULL OR submission_date IS NULL OR response_date >= submission_date',
            name='chk_claim_response',
        ),
    )


def downgrade() -> None:
    op.drop_table('insurance_claims')
    op.drop_index('ix_payments_invoice_id', table_name='payments')
    op.drop_table('payments')
    op.drop_table('invoice_items')
    op.drop_index('ix_invoices_patient_id', table_name='invoices')
    op.drop_table('invoices')
    op.drop_table('billing_categories')
    op.drop_table('patient_insurance')
    op.drop_table('insurance_providers')
