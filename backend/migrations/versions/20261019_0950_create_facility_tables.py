"""Create ward, bed and admission tables

Revision ID: f6a7b8c9d0e1
Revises: e5f6a7b8c9d0
Create Date: 2026-10-19 09:50:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'f6a7b8c9d0e1'
down_revision = 'e5f6a7b8c9d0'  # Previous: create_diagnostic_tables
branch_labels = None
depends_on = None

WARD_TYPE = ('General', 'ICU', 'Pediatric', 'Maternity', 'Surgical', 'Emergency', 'Isolation', 'Private')
BED_TYPE = ('Standard', 'ICU', 'Pediatric', 'Bariatric', 'Electric')
BED_STATUS = ('Available', 'Occupied', 'Maintenance', 'Reserved')
ADMISSION_TYPE = ('Emergency', 'Elective', 'Transfer', 'Maternity')
ADMISSION_STATUS = ('Admitted', 'Discharged', 'Transferred', 'Deceased', 'Left Against Medical Advice')


def closed_enum(values, name):
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True)


def upgrade() -> None:
    op.create_table(
        'wards',
        sa.Column('ward_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('ward_name', sa.String(100), nullable=False),
        sa.Column('ward_code', sa.String(20), nullable=False),
        sa.Column('department_id', sa.Integer(), nullable=False),
        sa.Column('ward_type', closed_enum(WARD_TYPE, 'chk_ward_type'), nullable=False),
        sa.Column('floor_number', sa.Integer(), nullable=True),
        sa.Column('total_beds', sa.Integer(), nullable=False),
        sa.Column('available_beds', sa.Integer(), nullable=False),
        sa.Column('daily_rate', sa.Numeric(10, 2), nullable=False),
        sa.Column('nurse_in_charge_staff_id', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['department_id'], ['departments.department_id'],
            name='fk_ward_department', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['nurse_in_charge_staff_id'], ['staff.staff_id'],
            name='fk_ward_nurse', ondelete='SET NULL', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('ward_name', name='uq_wards_ward_name'),
        sa.UniqueConstraint('ward_code', name='uq_wards_ward_code'),
        sa.CheckConstraint('total_beds > 0', name='chk_total_beds'),
        sa.CheckConstraint(
            'available_beds >= 0 AND available_beds <= total_beds',
            name='chk_available_beds',
        ),
        sa.CheckConstraint('daily_rate >= 0', name='chk_daily_rate'),
    )

    op.create_table(
        'beds',
        sa.Column('bed_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('ward_id', sa.Integer(), nullable=False),
        sa.Column('bed_number', sa.String(20), nullable=False),
        sa.Column('bed_type', closed_enum(BED_TYPE, 'chk_bed_type'), nullable=True),
        sa.Column('status', closed_enum(BED_STATUS, 'chk_bed_status'), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ['ward_id'], ['wards.ward_id'],
            name='fk_bed_ward', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('ward_id', 'bed_number', name='unique_ward_bed'),
    )

    op.create_table(
        'admissions',
        sa.Column('admission_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('admission_number', sa.String(20), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('bed_id', sa.Integer(), nullable=False),
        sa.Column('admitting_doctor_id', sa.Integer(), nullable=False),
        sa.Column('department_id', sa.Integer(), nullable=False),
        sa.Column('admission_type', closed_enum(ADMISSION_TYPE, 'chk_admission_type'), nullable=False),
        sa.Column('admission_date', sa.DateTime(), nullable=False),
        sa.Column('expected_discharge_date', sa.Date(), nullable=True),
        sa.Column('discharge_date', sa.DateTime(), nullable=True),
        sa.Column('admission_reason', sa.Text(), nullable=False),
        sa.Column('diagnosis', sa.Text(), nullable=True),
        sa.Column('discharge_summary', sa.Text(), nullable=True),
        sa.Column('status', closed_enum(ADMISSION_STATUS, 'chk_admission_status'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['patient_id'], ['patients.patient_id'],
            name='fk_admission_patient', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['bed_id'], ['beds.bed_id'],
            name='fk_admission_bed', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['admitting_doctor_id'], ['doctors.doctor_id'],
            name='fk_admission_doctor', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['department_id'], ['departments.department_id'],
            name='fk_admission_department', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('admission_number', name='uq_admissions_admission_number'),
        sa.CheckConstraint(
            'discharge_date IS NULL OR discharge_date >= admission_date',
            name='chk_discharge_date',
        ),
    )
    op.create_index('ix_admissions_patient_id', 'admissions', ['patient_id'])


def downgrade() -> None:
    op.drop_index('ix_admissions_patient_id', table_name='admissions')
    op.drop_table('admissions')
    op.drop_table('beds')
    op.drop_table('wards')
