"""Create lab and imaging tables

Revision ID: e5f6a7b8c9d0
Revises: d4e5f6a7b8c9
Create Date: 2026-10-19 09:40:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'e5f6a7b8c9d0'
down_revision = 'd4e5f6a7b8c9'  # Previous: create_pharmacy_tables
branch_labels = None
depends_on = None

PRIORITY = ('Routine', 'Urgent', 'STAT')
LAB_STATUS = ('Ordered', 'Sample Collected', 'In Progress', 'Completed', 'Cancelled')
MODALITY = ('X-Ray', 'CT', 'MRI', 'Ultrasound', 'PET', 'Mammography', 'Fluoroscopy')
IMAGING_STATUS = ('Ordered', 'Scheduled', 'In Progress', 'Completed', 'Cancelled')


def closed_enum(values, name):
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True)


def upgrade() -> None:
    op.create_table(
        'lab_test_types',
        sa.Column('test_type_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('test_code', sa.String(20), nullable=False),
        sa.Column('test_name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sample_type', sa.String(50), nullable=True),
        sa.Column('normal_range', sa.String(100), nullable=True),
        sa.Column('unit', sa.String(30), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('turnaround_hours', sa.Integer(), nullable=False),
        sa.UniqueConstraint('test_code', name='uq_lab_test_types_test_code'),
        sa.UniqueConstraint('test_name', name='uq_lab_test_types_test_name'),
        sa.CheckConstraint('price >= 0', name='chk_lab_price'),
        sa.CheckConstraint('turnaround_hours > 0', name='chk_turnaround'),
    )

    op.create_table(
        'lab_tests',
        sa.Column('lab_test_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('test_number', sa.String(20), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('test_type_id', sa.Integer(), nullable=False),
        sa.Column('ordered_by_doctor_id', sa.Integer(), nullable=False),
        sa.Column('consultation_id', sa.Integer(), nullable=True),
        sa.Column('priority', closed_enum(PRIORITY, 'chk_lab_priority'), nullable=True),
        sa.Column('status', closed_enum(LAB_STATUS, 'chk_lab_status'), nullable=True),
        sa.Column('order_date', sa.DateTime(), nullable=False),
        sa.Column('sample_collected_at', sa.DateTime(), nullable=True),
        sa.Column('collected_by_staff_id', sa.Integer(), nullable=True),
        sa.Column('result_value', sa.String(255), nullable=True),
        sa.Column('result_notes', sa.Text(), nullable=True),
        sa.Column('is_abnormal', sa.Boolean(), nullable=True),
        sa.Column('result_date', sa.DateTime(), nullable=True),
        sa.Column('performed_by_staff_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['patient_id'], ['patients.patient_id'],
            name='fk_lab_patient', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['test_type_id'], ['lab_test_types.test_type_id'],
            name='fk_lab_test_type', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['ordered_by_doctor_id'], ['doctors.doctor_id'],
            name='fk_lab_doctor', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['consultation_id'], ['consultations.consultation_id'],
            name='fk_lab_consultation', ondelete='SET NULL', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['collected_by_staff_id'], ['staff.staff_id'],
            name='fk_lab_collector', ondelete='SET NULL', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['performed_by_staff_id'], ['staff.staff_id'],
            name='fk_lab_performer', ondelete='SET NULL', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('test_number', name='uq_lab_tests_test_number'),
        sa.CheckConstraint(
            'sample_collected_at IS NULL OR sample_collected_at >= order_date',
            name='chk_sample_collection',
        ),
        sa.CheckConstraint(
            'result_date IS NULL OR result_date >= order_date',
            name='chk_lab_result_date',
        ),
    )
    op.create_index('ix_lab_tests_patient_id', 'lab_tests', ['patient_id'])

    op.create_table(
        'imaging_types',
        sa.Column('imaging_type_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('type_name', sa.String(100), nullable=False),
        sa.Column('modality', closed_enum(MODALITY, 'chk_imaging_modality'), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('requires_contrast', sa.Boolean(), nullable=True),
        sa.UniqueConstraint('type_name', name='uq_imaging_types_type_name'),
        sa.CheckConstraint('price >= 0', name='chk_imaging_price'),
        sa.CheckConstraint('duration_minutes > 0', name='chk_imaging_duration'),
    )

    op.create_table(
        'imaging_orders',
        sa.Column('imaging_order_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('order_number', sa.String(20), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('imaging_type_id', sa.Integer(), nullable=False),
        sa.Column('ordered_by_doctor_id', sa.Integer(), nullable=False),
        sa.Column('consultation_id', sa.Integer(), nullable=True),
        sa.Column('body_part', sa.String(100), nullable=True),
        sa.Column('clinical_indication', sa.Text(), nullable=True),
        sa.Column('priority', closed_enum(PRIORITY, 'chk_imaging_priority'), nullable=True),
        sa.Column('status', closed_enum(IMAGING_STATUS, 'chk_imaging_status'), nullable=True),
        sa.Column('order_date', sa.DateTime(), nullable=False),
        sa.Column('scheduled_date', sa.DateTime(), nullable=True),
        sa.Column('completed_date', sa.DateTime(), nullable=True),
        sa.Column('radiologist_staff_id', sa.Integer(), nullable=True),
        sa.Column('findings', sa.Text(), nullable=True),
        sa.Column('impression', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['patient_id'], ['patients.patient_id'],
            name='fk_imaging_patient', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['imaging_type_id'], ['imaging_types.imaging_type_id'],
            name='fk_imaging_type', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['ordered_by_doctor_id'], ['doctors.doctor_id'],
            name='fk_imaging_doctor', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['consultation_id'], ['consultations.consultation_id'],
            name='fk_imaging_consultation', ondelete='SET NULL', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['radiologist_staff_id'], ['staff.staff_id'],
            name='fk_imaging_radiologist', ondelete='SET NULL', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('order_number', name='uq_imaging_orders_order_number'),
        sa.CheckConstraint(
            'scheduled_date IS NULL OR scheduled_date >= order_date',
            name='chk_imaging_schedule',
        ),
        sa.CheckConstraint(
            'completed_date IS NULL OR completed_date >= order_date',
            name='chk_imaging_completion',
        ),
    )
    op.create_index('ix_imaging_orders_patient_id', 'imaging_orders', ['patient_id'])


def downgrade() -> None:
    op.drop_index('ix_imaging_orders_patient_id', table_name='imaging_orders')
    op.drop_table('imaging_orders')
    op.drop_table('imaging_types')
    op.drop_index('ix_lab_tests_patient_id', table_name='lab_tests')
    op.drop_table('lab_tests')
    op.drop_table('lab_test_types')
