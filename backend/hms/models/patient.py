"""
Patient management models.

A patient is the owning aggregate for allergies, medical history,
appointments, admissions, prescriptions, orders and insurance policies:
deleting the patient removes all of them.
"""

import enum
from datetime import date
from sqlalchemy import (
    Column, String, DateTime, ForeignKey, Integer, Date, Boolean, Text,
    CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship, validates

from hms.db.database import Base
from hms.db.errors import CheckViolation
from hms.models.organization import Gender
from hms.models.types import closed_enum, utcnow


class AllergySeverity(enum.Enum):
    MILD = "Mild"
    MODERATE = "Moderate"
    SEVERE = "Severe"
    LIFE_THREATENING = "Life-threatening"


class ConditionStatus(enum.Enum):
    ACTIVE = "Active"
    RESOLVED = "Resolved"
    CHRONIC = "Chronic"
    UNDER_TREATMENT = "Under Treatment"


class BloodGroup(Base):
    """Blood type lookup (A+, O-, ...)."""

    __tablename__ = "blood_groups"

    blood_group_id = Column(Integer, primary_key=True, autoincrement=True)
    blood_type = Column(String(5), nullable=False)
    description = Column(String(50), nullable=True)

    __table_args__ = (
        UniqueConstraint("blood_type", name="uq_blood_groups_blood_type"),
    )


class Patient(Base):
    """
    Patient registration and demographics.

    date_of_birth must lie in the past. PostgreSQL enforces this with a
    CHECK against CURRENT_DATE; other engines reject such a CHECK, so the
    model validates it on assignment as well.
    """

    __tablename__ = "patients"

    patient_id = Column(Integer, primary_key=True, autoincrement=True)
    patient_number = Column(String(20), nullable=False)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    gender = Column(closed_enum(Gender, "chk_patient_gender"), nullable=False)
    blood_group_id = Column(
        Integer,
        ForeignKey(
            "blood_groups.blood_group_id",
            name="fk_patient_blood_group",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        nullable=True,
    )
    email = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=False)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    zip_code = Column(String(20), nullable=True)
    country = Column(String(100), default="USA")
    emergency_contact_name = Column(String(100), nullable=False)
    emergency_contact_phone = Column(String(20), nullable=False)
    emergency_contact_relation = Column(String(50), nullable=True)
    registration_date = Column(Date, nullable=False)
    is_active = Column(Boolean, default=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    blood_group = relationship("BloodGroup")
    allergies = relationship(
        "PatientAllergy",
        back_populates="patient",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    medical_history = relationship(
        "PatientMedicalHistory",
        back_populates="patient",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PatientMedicalHistory.diagnosis_date",
    )

    __table_args__ = (
        UniqueConstraint("patient_number", name="uq_patients_patient_number"),
        CheckConstraint(
            "email IS NULL OR email LIKE '%_@__%.__%'",
            name="chk_patient_email",
        ),
        CheckConstraint("date_of_birth < CURRENT_DATE", name="chk_patient_dob").ddl_if(
            dialect="postgresql"
        ),
    )

    @validates("date_of_birth")
    def validate_date_of_birth(self, key, value):
        if value is not None and value >= date.today():
            raise CheckViolation(
                f"date_of_birth {value.isoformat()} is not in the past",
                constraint="chk_patient_dob",
                table="patients",
                columns=("date_of_birth",),
            )
        return value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class PatientAllergy(Base):
    """Known allergy for a patient."""

    __tablename__ = "patient_allergies"

    allergy_id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(
        Integer,
        ForeignKey("patients.patient_id", name="fk_allergy_patient", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    allergen = Column(String(100), nullable=False)
    reaction = Column(Text, nullable=True)
    severity = Column(closed_enum(AllergySeverity, "chk_allergy_severity"), nullable=False)
    diagnosed_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)

    patient = relationship("Patient", back_populates="allergies")


class PatientMedicalHistory(Base):
    """Past or ongoing condition, attributed to the recording staff member."""

    __tablename__ = "patient_medical_history"

    history_id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(
        Integer,
        ForeignKey("patients.patient_id", name="fk_history_patient", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    condition_name = Column(String(200), nullable=False)
    diagnosis_date = Column(Date, nullable=False)
    status = Column(closed_enum(ConditionStatus, "chk_history_status"), nullable=False)
    notes = Column(Text, nullable=True)
    recorded_by_staff_id = Column(
        Integer,
        ForeignKey("staff.staff_id", name="fk_history_staff", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
    )
    created_at = Column(DateTime, default=utcnow)

    patient = relationship("Patient", back_populates="medical_history")
    recorded_by = relationship("Staff")
