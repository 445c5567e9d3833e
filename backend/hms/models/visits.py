"""
Appointment and visit models.

These tables support:
1. Appointment types (lookup with a default duration)
2. Appointments linking patient, doctor, department and type
3. Consultations: one clinical record per appointment, holding vitals
"""

import enum
from sqlalchemy import (
    Column, String, DateTime, ForeignKey, Integer, Date, Time, Boolean, Text, Numeric,
    CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship, backref

from hms.db.database import Base
from hms.models.types import closed_enum, utcnow


class AppointmentStatus(enum.Enum):
    """Status of an appointment. Transitions are not enforced."""
    SCHEDULED = "Scheduled"
    CONFIRMED = "Confirmed"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    NO_SHOW = "No Show"


class AppointmentType(Base):
    __tablename__ = "appointment_types"

    appointment_type_id = Column(Integer, primary_key=True, autoincrement=True)
    type_name = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    default_duration_minutes = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("type_name", name="uq_appointment_types_type_name"),
        CheckConstraint("default_duration_minutes > 0", name="chk_duration"),
    )


class Appointment(Base):
    """
    Patient appointment with a doctor in a department.

    Owned by the patient (cascade). Doctor, department and type are
    restricted: they cannot be removed while appointments reference them.
    """

    __tablename__ = "appointments"

    appointment_id = Column(Integer, primary_key=True, autoincrement=True)
    appointment_number = Column(String(20), nullable=False)
    patient_id = Column(
        Integer,
        ForeignKey("patients.patient_id", name="fk_appointment_patient", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    doctor_id = Column(
        Integer,
        ForeignKey("doctors.doctor_id", name="fk_appointment_doctor", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    department_id = Column(
        Integer,
        ForeignKey(
            "departments.department_id",
            name="fk_appointment_department",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        nullable=False,
    )
    appointment_type_id = Column(
        Integer,
        ForeignKey(
            "appointment_types.appointment_type_id",
            name="fk_appointment_type",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        nullable=False,
    )
    appointment_date = Column(Date, nullable=False, index=True)
    appointment_time = Column(Time, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    status = Column(
        closed_enum(AppointmentStatus, "chk_appointment_status"),
        default=AppointmentStatus.SCHEDULED,
    )
    reason_for_visit = Column(Text, nullable=True)
    cancellation_reason = Column(Text, nullable=True)
    scheduled_by_staff_id = Column(
        Integer,
        ForeignKey("staff.staff_id", name="fk_appointment_staff", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
    )

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    patient = relationship(
        "Patient",
        backref=backref("appointments", cascade="all, delete-orphan", passive_deletes=True),
    )
    doctor = relationship("Doctor")
    department = relationship("Department")
    appointment_type = relationship("AppointmentType")
    scheduled_by = relationship("Staff")
    consultation = relationship(
        "Consultation",
        back_populates="appointment",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("appointment_number", name="uq_appointments_appointment_number"),
        CheckConstraint("duration_minutes > 0", name="chk_appointment_duration"),
    )


class Consultation(Base):
    """
    Consultation record for an appointment (at most one per appointment).

    Vitals: temperature in Fahrenheit, weight/height free units.
    """

    __tablename__ = "consultations"

    consultation_id = Column(Integer, primary_key=True, autoincrement=True)
    appointment_id = Column(
        Integer,
        ForeignKey(
            "appointments.appointment_id",
            name="fk_consultation_appointment",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        nullable=False,
    )
    chief_complaint = Column(Text, nullable=False)
    symptoms = Column(Text, nullable=True)
    vital_signs_temperature = Column(Numeric(4, 2), nullable=True)
    vital_signs_blood_pressure = Column(String(20), nullable=True)
    vital_signs_pulse = Column(Integer, nullable=True)
    vital_signs_respiratory_rate = Column(Integer, nullable=True)
    vital_signs_weight = Column(Numeric(5, 2), nullable=True)
    vital_signs_height = Column(Numeric(5, 2), nullable=True)
    examination_notes = Column(Text, nullable=True)
    diagnosis = Column(Text, nullable=True)
    treatment_plan = Column(Text, nullable=True)
    follow_up_required = Column(Boolean, default=False)
    follow_up_date = Column(Date, nullable=True)
    consultation_start_time = Column(DateTime, nullable=False)
    consultation_end_time = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    appointment = relationship("Appointment", back_populates="consultation")

    __table_args__ = (
        UniqueConstraint("appointment_id", name="uq_consultations_appointment_id"),
        CheckConstraint(
            "consultation_end_time IS NULL OR consultation_end_time > consultation_start_time",
            name="chk_consultation_time",
        ),
        CheckConstraint(
            "vital_signs_temperature IS NULL OR vital_signs_temperature BETWEEN 95 AND 110",
            name="chk_temperature",
        ),
        CheckConstraint(
            "vital_signs_pulse IS NULL OR vital_signs_pulse BETWEEN 40 AND 200",
            name="chk_pulse",
        ),
        CheckConstraint(
            "vital_signs_weight IS NULL OR vital_signs_weight > 0",
            name="chk_weight",
        ),
    )
