"""
Organizational structure models.

These tables support:
1. Departments (optionally headed by a doctor)
2. Specializations and staff roles (lookups)
3. Staff with a self-referencing supervisor hierarchy
4. Doctors as a 1:1 extension of staff
5. Doctor/department assignments and weekly schedules
"""

import enum
from sqlalchemy import (
    Column, String, DateTime, ForeignKey, Integer, Date, Time, Boolean, Text, Numeric,
    CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from hms.db.database import Base
from hms.models.types import closed_enum, utcnow


class Gender(enum.Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"
    UNDISCLOSED = "Prefer not to say"


class DayOfWeek(enum.Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


class Department(Base):
    """
    Hospital department.

    head_doctor_id is optional attribution: removing the doctor clears it.
    """

    __tablename__ = "departments"

    department_id = Column(Integer, primary_key=True, autoincrement=True)
    department_name = Column(String(100), nullable=False)
    department_code = Column(String(20), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=True)
    head_doctor_id = Column(
        Integer,
        ForeignKey(
            "doctors.doctor_id",
            name="fk_department_head_doctor",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        nullable=True,
    )
    budget = Column(Numeric(15, 2), nullable=True)
    is_active = Column(Boolean, default=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    head_doctor = relationship("Doctor", foreign_keys=[head_doctor_id])
    doctor_links = relationship(
        "DoctorDepartment",
        back_populates="department",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("department_name", name="uq_departments_department_name"),
        UniqueConstraint("department_code", name="uq_departments_department_code"),
        CheckConstraint("budget >= 0", name="chk_budget"),
    )


class Specialization(Base):
    """Medical specialization lookup (Cardiology, Neurology, ...)."""

    __tablename__ = "specializations"

    specialization_id = Column(Integer, primary_key=True, autoincrement=True)
    specialization_name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    requires_certification = Column(Boolean, default=True)
    created_at = Column(DateTime, default=utcnow)

    __table_args__ = (
        UniqueConstraint("specialization_name", name="uq_specializations_specialization_name"),
    )


class StaffRole(Base):
    """Staff role lookup with a 1-10 access level."""

    __tablename__ = "staff_roles"

    role_id = Column(Integer, primary_key=True, autoincrement=True)
    role_name = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    access_level = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=utcnow)

    __table_args__ = (
        UniqueConstraint("role_name", name="uq_staff_roles_role_name"),
        CheckConstraint("access_level BETWEEN 1 AND 10", name="chk_access_level"),
    )


class Staff(Base):
    """
    Any hospital employee (doctors, nurses, admin, ...).

    supervisor_id is an adjacency reference within this table; the
    hierarchy is resolved by lookup, never by embedding.
    """

    __tablename__ = "staff"

    staff_id = Column(Integer, primary_key=True, autoincrement=True)
    employee_id = Column(String(20), nullable=False)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    gender = Column(closed_enum(Gender, "chk_staff_gender"), nullable=False)
    email = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=False)
    emergency_contact = Column(String(100), nullable=True)
    emergency_phone = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)
    role_id = Column(
        Integer,
        ForeignKey("staff_roles.role_id", name="fk_staff_role", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
    )
    hire_date = Column(Date, nullable=False)
    termination_date = Column(Date, nullable=True)
    salary = Column(Numeric(12, 2), nullable=True)
    supervisor_id = Column(
        Integer,
        ForeignKey("staff.staff_id", name="fk_staff_supervisor", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
    )
    is_active = Column(Boolean, default=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    role = relationship("StaffRole")
    supervisor = relationship("Staff", remote_side=[staff_id], back_populates="subordinates")
    subordinates = relationship("Staff", back_populates="supervisor", passive_deletes=True)
    doctor = relationship(
        "Doctor",
        back_populates="staff",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("employee_id", name="uq_staff_employee_id"),
        UniqueConstraint("email", name="uq_staff_email"),
        CheckConstraint("email LIKE '%_@__%.__%'", name="chk_staff_email"),
        CheckConstraint("salary >= 0", name="chk_staff_salary"),
        CheckConstraint(
            "termination_date IS NULL OR termination_date >= hire_date",
            name="chk_termination_date",
        ),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Doctor(Base):
    """
    Doctor-specific details, one row per staff member at most.

    Deleting the staff row deletes the doctor row.
    """

    __tablename__ = "doctors"

    doctor_id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(
        Integer,
        ForeignKey("staff.staff_id", name="fk_doctor_staff", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    license_number = Column(String(50), nullable=False)
    specialization_id = Column(
        Integer,
        ForeignKey(
            "specializations.specialization_id",
            name="fk_doctor_specialization",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        nullable=False,
    )
    qualification = Column(String(200), nullable=False)
    years_of_experience = Column(Integer, nullable=False)
    consultation_fee = Column(Numeric(10, 2), nullable=False)
    max_patients_per_day = Column(Integer, default=20)
    is_accepting_patients = Column(Boolean, default=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    staff = relationship("Staff", back_populates="doctor")
    specialization = relationship("Specialization")
    department_links = relationship(
        "DoctorDepartment",
        back_populates="doctor",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    schedule = relationship(
        "DoctorSchedule",
        back_populates="doctor",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DoctorSchedule.start_time",
    )

    __table_args__ = (
        UniqueConstraint("staff_id", name="uq_doctors_staff_id"),
        UniqueConstraint("license_number", name="uq_doctors_license_number"),
        CheckConstraint("years_of_experience >= 0", name="chk_experience"),
        CheckConstraint("consultation_fee >= 0", name="chk_consultation_fee"),
        CheckConstraint("max_patients_per_day > 0", name="chk_max_patients"),
    )


class DoctorDepartment(Base):
    """Many-to-many: a doctor may work in several departments."""

    __tablename__ = "doctor_departments"

    doctor_department_id = Column(Integer, primary_key=True, autoincrement=True)
    doctor_id = Column(
        Integer,
        ForeignKey("doctors.doctor_id", name="fk_dd_doctor", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    department_id = Column(
        Integer,
        ForeignKey("departments.department_id", name="fk_dd_department", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    assignment_date = Column(Date, nullable=False)
    is_primary_department = Column(Boolean, default=False)

    doctor = relationship("Doctor", back_populates="department_links")
    department = relationship("Department", back_populates="doctor_links")

    __table_args__ = (
        UniqueConstraint("doctor_id", "department_id", name="unique_doctor_department"),
    )


class DoctorSchedule(Base):
    """Weekly availability window for a doctor."""

    __tablename__ = "doctor_schedule"

    schedule_id = Column(Integer, primary_key=True, autoincrement=True)
    doctor_id = Column(
        Integer,
        ForeignKey("doctors.doctor_id", name="fk_schedule_doctor", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    day_of_week = Column(closed_enum(DayOfWeek, "chk_schedule_day"), nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    is_available = Column(Boolean, default=True)

    doctor = relationship("Doctor", back_populates="schedule")

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="chk_schedule_time"),
        UniqueConstraint("doctor_id", "day_of_week", "start_time", name="unique_doctor_day_time"),
    )
