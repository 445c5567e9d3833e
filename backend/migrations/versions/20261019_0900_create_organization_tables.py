"""Create organizational structure tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 09:00:00.000000

This migration adds:
1. specializations, staff_roles - lookups
2. staff - with self-referencing supervisor
3. doctors - 1:1 extension of staff
4. departments - optionally headed by a doctor
5. doctor_departments, doctor_schedule
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'a1b2c3d4e5f6'
down_revision = None
branch_labels = None
depends_on = None

GENDER = ('Male', 'Female', 'Other', 'Prefer not to say')
DAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')


def closed_enum(values, name):
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True)


def upgrade() -> None:
    op.create_table(
        'specializations',
        sa.Column('specialization_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('specialization_name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('requires_certification', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('specialization_name', name='uq_specializations_specialization_name'),
    )

    op.create_table(
        'staff_roles',
        sa.Column('role_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('role_name', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('access_level', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('role_name', name='uq_staff_roles_role_name'),
        sa.CheckConstraint('access_level BETWEEN 1 AND 10', name='chk_access_level'),
    )

    op.create_table(
        'staff',
        sa.Column('staff_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('employee_id', sa.String(20), nullable=False),
        sa.Column('first_name', sa.String(50), nullable=False),
        sa.Column('last_name', sa.String(50), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('gender', closed_enum(GENDER, 'chk_staff_gender'), nullable=False),
        sa.Column('email', sa.String(100), nullable=False),
        sa.Column('phone', sa.String(20), nullable=False),
        sa.Column('emergency_contact', sa.String(100), nullable=True),
        sa.Column('emergency_phone', sa.String(20), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('role_id', sa.Integer(), nullable=False),
        sa.Column('hire_date', sa.Date(), nullable=False),
        sa.Column('termination_date', sa.Date(), nullable=True),
        sa.Column('salary', sa.Numeric(12, 2), nullable=True),
        sa.Column('supervisor_id', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['role_id'], ['staff_roles.role_id'],
            name='fk_staff_role', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['supervisor_id'], ['staff.staff_id'],
            name='fk_staff_supervisor', ondelete='SET NULL', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('employee_id', name='uq_staff_employee_id'),
        sa.UniqueConstraint('email', name='uq_staff_email'),
        sa.CheckConstraint("email LIKE '%_@__%.__%'", name='chk_staff_email'),
        sa.CheckConstraint('salary >= 0', name='chk_staff_salary'),
        sa.CheckConstraint(
            'termination_date IS NULL OR termination_date >= hire_date',
            name='chk_termination_date',
        ),
    )

    op.create_table(
        'doctors',
        sa.Column('doctor_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('staff_id', sa.Integer(), nullable=False),
        sa.Column('license_number', sa.String(50), nullable=False),
        sa.Column('specialization_id', sa.Integer(), nullable=False),
        sa.Column('qualification', sa.String(200), nullable=False),
        sa.Column('years_of_experience', sa.Integer(), nullable=False),
        sa.Column('consultation_fee', sa.Numeric(10, 2), nullable=False),
        sa.Column('max_patients_per_day', sa.Integer(), nullable=True),
        sa.Column('is_accepting_patients', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['staff_id'], ['staff.staff_id'],
            name='fk_doctor_staff', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['specialization_id'], ['specializations.specialization_id'],
            name='fk_doctor_specialization', ondelete='RESTRICT', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('staff_id', name='uq_doctors_staff_id'),
        sa.UniqueConstraint('license_number', name='uq_doctors_license_number'),
        sa.CheckConstraint('years_of_experience >= 0', name='chk_experience'),
        sa.CheckConstraint('consultation_fee >= 0', name='chk_consultation_fee'),
        sa.CheckConstraint('max_patients_per_day > 0', name='chk_max_patients'),
    )

    op.create_table(
        'departments',
        sa.Column('department_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('department_name', sa.String(100), nullable=False),
        sa.Column('department_code', sa.String(20), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location', sa.String(100), nullable=True),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('head_doctor_id', sa.Integer(), nullable=True),
        sa.Column('budget', sa.Numeric(15, 2), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ['head_doctor_id'], ['doctors.doctor_id'],
            name='fk_department_head_doctor', ondelete='SET NULL', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('department_name', name='uq_departments_department_name'),
        sa.UniqueConstraint('department_code', name='uq_departments_department_code'),
        sa.CheckConstraint('budget >= 0', name='chk_budget'),
    )

    op.create_table(
        'doctor_departments',
        sa.Column('doctor_department_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('doctor_id', sa.Integer(), nullable=False),
        sa.Column('department_id', sa.Integer(), nullable=False),
        sa.Column('assignment_date', sa.Date(), nullable=False),
        sa.Column('is_primary_department', sa.Boolean(), nullable=True),
        sa.ForeignKeyConstraint(
            ['doctor_id'], ['doctors.doctor_id'],
            name='fk_dd_doctor', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['department_id'], ['departments.department_id'],
            name='fk_dd_department', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.UniqueConstraint('doctor_id', 'department_id', name='unique_doctor_department'),
    )

    op.create_table(
        'doctor_schedule',
        sa.Column('schedule_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('doctor_id', sa.Integer(), nullable=False),
        sa.Column('day_of_week', closed_enum(DAYS, 'chk_schedule_day'), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('is_available', sa.Boolean(), nullable=True),
        sa.ForeignKeyConstraint(
            ['doctor_id'], ['doctors.doctor_id'],
            name='fk_schedule_doctor', ondelete='CASCADE', onupdate='CASCADE',
        ),
        sa.CheckConstraint('end_time > start_time', name='chk_schedule_time'),
        sa.UniqueConstraint('doctor_id', 'day_of_week', 'start_time', name='unique_doctor_day_time'),
    )


def downgrade() -> None:
    op.drop_table('doctor_schedule')
    op.drop_table('doctor_departments')
    op.drop_table('departments')
    op.drop_table('doctors')
    op.drop_table('staff')
    op.drop_table('staff_roles')
    op.drop_table('specializations')
