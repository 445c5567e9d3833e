"""Create appointment and consultation tables

Revision ID: c3d4e5f6a7b8
Revises: b2c3d4e5f6a7
Create Date: 2026-10-19 09:20:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'c3d4e5f6a7b8'
down_revision = 'b2c3d4e5f6a7'  # Previous: create_patient_tables
branch_labels = None
depends_on = None

APPOINTMENT_STATUS = ('Scheduled', 'Confirmed', 'In Progress', 'Completed', 'Cancelled', 'No Show')


def closed_enum(values, name):
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True)


def upgrade() -> None:
    op.create_table(
        'appointment_types',
        sa.Column('appointment_type_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('type_name', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('default_duration_minutes', sa.Integer(), nullable=False),
        sa.UniqueConstraint('type_name', name='uq_appointment_types_type_name'),
        sa.CheckConstraint('default_duration_minutes > 0', name='chk_duration'),
    )

    op.create_table(
        'appointments',
        sa.Column('appointment_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('appointment_number', sa.String(20), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('doctor_id', sa.Integer(), nullable=False),
        sa.Column('department_id', sa.Integer(), nullable=False),
        sa.Column('appointment_type_id', sa.Integer(), nullable=False),
        sa.Column('appointment_date', sa.Date(), nullable=False),
        sa.Column('appointment_time', sa.Time(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('status', closed_enum(APPOINTMENT_STATUS, 'chk_appointment_status'), nullable=True),
        sa.Column('reason_for_visit', sa.Text(), nullable=True),
        sa.Column('cancellation_reason', sa.Text(), nullable=True),
        sa.Column('scheduled_by_staff_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['patient_id'], ['patients.patient_id'],
            name='fk_appointment_patient', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['doctor_id'], ['doctors.doctor_id'],
            name='fk_appointment_doctor', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['department_id'], ['departments.department_id'],
            name='fk_appointment_department', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['appointment_type_id'], ['appointment_types.appointment_type_id'],
            name='fk_appointment_type', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['scheduled_by_staff_id'], ['staff.staff_id'],
            name='fk_appointment_staff', ondelete='SET NULL', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('appointment_number', name='uq_appointments_appointment_number'),
        sa.CheckConstraint('duration_minutes > 0', name='chk_appointment_duration'),
    )
    op.create_index('ix_appointments_patient_id', 'appointments', ['patient_id'])
    op.create_index('ix_appointments_doctor_id', 'appointments', ['doctor_id'])
    op.create_index('ix_appointments_appointment_date', 'appointments', ['appointment_date'])

    op.create_table(
        'consultations',
        sa.Column('consultation_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('appointment_id', sa.Integer(), nullable=False),
        sa.Column('chief_complaint', sa.Text(), nullable=False),
        sa.Column('symptoms', sa.Text(), nullable=True),
        sa.Column('vital_signs_temperature', sa.Numeric(4, 2), nullable=True),
        sa.Column('vital_signs_blood_pressure', sa.String(20), nullable=True),
        sa.Column('vital_signs_pulse', sa.Integer(), nullable=True),
        sa.Column('vital_signs_respiratory_rate', sa.Integer(), nullable=True),
        sa.Column('vital_signs_weight', sa.Numeric(5, 2), nullable=True),
        sa.Column('vital_signs_height', sa.Numeric(5, 2), nullable=True),
        sa.Column('examination_notes', sa.Text(), nullable=True),
        sa.Column('diagnosis', sa.Text(), nullable=True),
        sa.Column('treatment_plan', sa.Text(), nullable=True),
        sa.Column('follow_up_required', sa.Boolean(), nullable=True),
        sa.Column('follow_up_date', sa.Date(), nullable=True),
        sa.Column('consultation_start_time', sa.DateTime(), nullable=False),
        sa.Column('consultation_end_time', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['appointment_id'], ['appointments.appointment_id'],
            name='fk_consultation_appointment', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('appointment_id', name='uq_consultations_appointment_id'),
        sa.CheckConstraint(
            'consultation_end_time IS NULL OR consultation_end_time > consultation_start_time',
            name='chk_consultation_time',
        ),
        sa.CheckConstraint(
            'vital_signs_temperature IS NULL OR vital_signs_temperature BETWEEN 95 AND 110',
            name='chk_temperature',
        ),
        sa.CheckConstraint(
            'vital_signs_pulse IS NULL OR vital_signs_pulse BETWEEN 40 AND 200',
            name='chk_pulse',
        ),
        sa.CheckConstraint(
            'vital_signs_weight IS NULL OR vital_signs_weight > 0',
            name='chk_weight',
        ),
    )


def downgrade() -> None:
    op.drop_table('consultations')
    op.drop_index('ix_appointments_appointment_date', table_name='appointments')
    op.drop_index('ix_appointments_doctor_id', table_name='appointments')
    op.drop_index('ix_appointments_patient_id', table_name='appointments')
    op.drop_table('appointments')
    op.drop_table('appointment_types')
