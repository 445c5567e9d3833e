"""Create pharmacy tables

Revision ID: d4e5f6a7b8c9
Revises: c3d4e5f6a7b8
Create Date: 2026-10-19 09:30:00.000000

This migration adds:
1. medication_categories, medications, medication_batches
2. prescriptions (one per consultation) and prescription_details
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'd4e5f6a7b8c9'
down_revision = 'c3d4e5f6a7b8'  # Previous: create_visit_tables
branch_labels = None
depends_on = None

DOSAGE_FORM = ('Tablet', 'Capsule', 'Syrup', 'Injection', 'Ointment', 'Drops', 'Inhaler', 'Other')
PRESCRIPTION_STATUS = ('Active', 'Partially Dispensed', 'Dispensed', 'Cancelled', 'Expired')


def closed_enum(values, name):
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True)


def upgrade() -> None:
    op.create_table(
        'medication_categories',
        sa.Column('category_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('category_name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.UniqueConstraint('category_name', name='uq_medication_categories_category_name'),
    )

    op.create_table(
        'medications',
        sa.Column('medication_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('medication_code', sa.String(30), nullable=False),
        sa.Column('medication_name', sa.String(150), nullable=False),
        sa.Column('generic_name', sa.String(150), nullable=True),
        sa.Column('category_id', sa.Integer(), nullable=False),
        sa.Column('manufacturer', sa.String(100), nullable=True),
        sa.Column('dosage_form', closed_enum(DOSAGE_FORM, 'chk_dosage_form'), nullable=False),
        sa.Column('strength', sa.String(50), nullable=True),
        sa.Column('unit_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('stock_quantity', sa.Integer(), nullable=False),
        sa.Column('reorder_level', sa.Integer(), nullable=False),
        sa.Column('requires_prescription', sa.Boolean(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['category_id'], ['medication_categories.category_id'],
            name='fk_medication_category', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('medication_code', name='uq_medications_medication_code'),
        sa.CheckConstraint('unit_price >= 0', name='chk_unit_price'),
        sa.CheckConstraint('stock_quantity >= 0', name='chk_stock_quantity'),
        sa.CheckConstraint('reorder_level >= 0', name='chk_reorder_level'),
    )

    op.create_table(
        'medication_batches',
        sa.Column('batch_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('medication_id', sa.Integer(), nullable=False),
        sa.Column('batch_number', sa.String(50), nullable=False),
        sa.Column('manufacture_date', sa.Date(), nullable=True),
        sa.Column('expiry_date', sa.Date(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('cost_price', sa.Numeric(10, 2), nullable=True),
        sa.Column('supplier', sa.String(100), nullable=True),
        sa.Column('received_date', sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(
            ['medication_id'], ['medications.medication_id'],
            name='fk_batch_medication', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('medication_id', 'batch_number', name='unique_medication_batch'),
        sa.CheckConstraint('quantity >= 0', name='chk_batch_quantity'),
        sa.CheckConstraint('cost_price IS NULL OR cost_price >= 0', name='chk_batch_cost'),
        sa.CheckConstraint(
            'manufacture_date IS NULL OR expiry_date > manufacture_date',
            name='chk_batch_dates',
        ),
    )

    op.create_table(
        'prescriptions',
        sa.Column('prescription_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('prescription_number', sa.String(20), nullable=False),
        sa.Column('consultation_id', sa.Integer(), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('doctor_id', sa.Integer(), nullable=False),
        sa.Column('prescription_date', sa.Date(), nullable=False),
        sa.Column('valid_until', sa.Date(), nullable=True),
        sa.Column('status', closed_enum(PRESCRIPTION_STATUS, 'chk_prescription_status'), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['consultation_id'], ['consultations.consultation_id'],
            name='fk_prescription_consultation', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['patient_id'], ['patients.patient_id'],
            name='fk_prescription_patient', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['doctor_id'], ['doctors.doctor_id'],
            name='fk_prescription_doctor', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('prescription_number', name='uq_prescriptions_prescription_number'),
        sa.UniqueConstraint('consultation_id', name='uq_prescriptions_consultation_id'),
        sa.CheckConstraint(
            'valid_until IS NULL OR valid_until >= prescription_date',
            name='chk_prescription_validity',
        ),
    )
    op.create_index('ix_prescriptions_patient_id', 'prescriptions', ['patient_id'])

    op.create_table(
        'prescription_details',
        sa.Column('detail_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('prescription_id', sa.Integer(), nullable=False),
        sa.Column('medication_id', sa.Integer(), nullable=False),
        sa.Column('dosage', sa.String(50), nullable=False),
        sa.Column('frequency', sa.String(50), nullable=False),
        sa.Column('duration_days', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('quantity_dispensed', sa.Integer(), nullable=False),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ['prescription_id'], ['prescriptions.prescription_id'],
            name='fk_detail_prescription', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['medication_id'], ['medications.medication_id'],
            name='fk_detail_medication', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('prescription_id', 'medication_id', name='unique_prescription_medication'),
        sa.CheckConstraint('duration_days > 0', name='chk_duration_days'),
        sa.CheckConstraint('quantity > 0', name='chk_detail_quantity'),
        sa.CheckConstraint(
            'quantity_dispensed >= 0 AND quantity_dispensed <= quantity',
            name='chk_quantity_dispensed',
        ),
    )


def downgrade() -> None:
    op.drop_table('prescription_details')
    op.drop_index('ix_prescriptions_patient_id', table_name='prescriptions')
    op.drop_table('prescriptions')
    op.drop_table('medication_batches')
    op.drop_table('medications')
    op.drop_table('medication_categories')
