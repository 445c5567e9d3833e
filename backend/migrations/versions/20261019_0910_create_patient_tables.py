"""Create patient management tables

Revision ID: b2c3d4e5f6a7
Revises: a1b2c3d4e5f6
Create Date: 2026-10-19 09:10:00.000000

This migration adds:
1. blood_groups - lookup
2. patients
3. patient_allergies, patient_medical_history - owned by the patient
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'b2c3d4e5f6a7'
down_revision = 'a1b2c3d4e5f6'  # Previous: create_organization_tables
branch_labels = None
depends_on = None

GENDER = ('Male', 'Female', 'Other', 'Prefer not to say')
SEVERITY = ('Mild', 'Moderate', 'Severe', 'Life-threatening')
CONDITION_STATUS = ('Active', 'Resolved', 'Chronic', 'Under Treatment')


def closed_enum(values, name):
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True)


def upgrade() -> None:
    op.create_table(
        'blood_groups',
        sa.Column('blood_group_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('blood_type', sa.String(5), nullable=False),
        sa.Column('description', sa.String(50), nullable=True),
        sa.UniqueConstraint('blood_type', name='uq_blood_groups_blood_type'),
    )

    op.create_table(
        'patients',
        sa.Column('patient_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('patient_number', sa.String(20), nullable=False),
        sa.Column('first_name', sa.String(50), nullable=False),
        sa.Column('last_name', sa.String(50), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('gender', closed_enum(GENDER, 'chk_patient_gender'), nullable=False),
        sa.Column('blood_group_id', sa.Integer(), nullable=True),
        sa.Column('email', sa.String(100), nullable=True),
        sa.Column('phone', sa.String(20), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('zip_code', sa.String(20), nullable=True),
        sa.Column('country', sa.String(100), nullable=True),
        sa.Column('emergency_contact_name', sa.String(100), nullable=False),
        sa.Column('emergency_contact_phone', sa.String(20), nullable=False),
        sa.Column('emergency_contact_relation', sa.String(50), nullable=True),
        sa.Column('registration_date', sa.Date(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['blood_group_id'], ['blood_groups.blood_group_id'],
            name='fk_patient_blood_group', ondelete='SET NULL', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('patient_number', name='uq_patients_patient_number'),
        sa.CheckConstraint(
            "email IS NULL OR email LIKE '%_@__%.__%'",
            name='chk_patient_email',
        ),
    )
    # CURRENT_DATE is only accepted inside a CHECK by PostgreSQL
    if op.get_bind().dialect.name == 'postgresql':
        op.create_check_constraint('chk_patient_dob', 'patients', 'date_of_birth < CURRENT_DATE')

    op.create_table(
        'patient_allergies',
        sa.Column('allergy_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('allergen', sa.String(100), nullable=False),
        sa.Column('reaction', sa.Text(), nullable=True),
        sa.Column('severity', closed_enum(SEVERITY, 'chk_allergy_severity'), nullable=False),
        sa.Column('diagnosed_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ['patient_id'], ['patients.patient_id'],
            name='fk_allergy_patient', ondelete='CASCADE', onupdate='CASCADE',
        ),
    )

    op.create_table(
        'patient_medical_history',
        sa.Column('history_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('condition_name', sa.String(200), nullable=False),
        sa.Column('diagnosis_date', sa.Date(), nullable=False),
        sa.Column('status', closed_enum(CONDITION_STATUS, 'chk_history_status'), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('recorded_by_staff_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['patient_id'], ['patients.patient_id'],
            name='fk_history_patient', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['recorded_by_staff_id'], ['staff.staff_id'],
            name='fk_history_staff', ondelete='SET NULL', onupdate='CASCADE',
        ),
    )


def downgrade() -> None:
    op.drop_table('patient_medical_history')
    op.drop_table('patient_allergies')
    op.drop_table('patients')
    op.drop_table('blood_groups')
