"""
Ward, bed and admission models.
"""

import enum
from sqlalchemy import (
    Column, String, DateTime, ForeignKey, Integer, Date, Boolean, Text, Numeric,
    CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship, backref

from hms.db.database import Base
from hms.models.types import closed_enum, utcnow


class WardType(enum.Enum):
    GENERAL = "General"
    ICU = "ICU"
    PEDIATRIC = "Pediatric"
    MATERNITY = "Maternity"
    SURGICAL = "Surgical"
    EMERGENCY = "Emergency"
    ISOLATION = "Isolation"
    PRIVATE = "Private"


class BedType(enum.Enum):
    STANDARD = "Standard"
    ICU = "ICU"
    PEDIATRIC = "Pediatric"
    BARIATRIC = "Bariatric"
    ELECTRIC = "Electric"


class BedStatus(enum.Enum):
    AVAILABLE = "Available"
    OCCUPIED = "Occupied"
    MAINTENANCE = "Maintenance"
    RESERVED = "Reserved"


class AdmissionType(enum.Enum):
    EMERGENCY = "Emergency"
    ELECTIVE = "Elective"
    TRANSFER = "Transfer"
    MATERNITY = "Maternity"


class AdmissionStatus(enum.Enum):
    """Status of an admission. Transitions are not enforced."""
    ADMITTED = "Admitted"
    DISCHARGED = "Discharged"
    TRANSFERRED = "Transferred"
    DECEASED = "Deceased"
    LEFT_AMA = "Left Against Medical Advice"


class Ward(Base):
    """
    Ward with a fixed bed capacity.

    available_beds is a stored counter kept within [0, total_beds].
    """

    __tablename__ = "wards"

    ward_id = Column(Integer, primary_key=True, autoincrement=True)
    ward_name = Column(String(100), nullable=False)
    ward_code = Column(String(20), nullable=False)
    department_id = Column(
        Integer,
        ForeignKey("departments.department_id", name="fk_ward_department", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
    )
    ward_type = Column(closed_enum(WardType, "chk_ward_type"), nullable=False)
    floor_number = Column(Integer, nullable=True)
    total_beds = Column(Integer, nullable=False)
    available_beds = Column(Integer, nullable=False)
    daily_rate = Column(Numeric(10, 2), nullable=False)
    nurse_in_charge_staff_id = Column(
        Integer,
        ForeignKey("staff.staff_id", name="fk_ward_nurse", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
    )
    is_active = Column(Boolean, default=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    department = relationship("Department")
    nurse_in_charge = relationship("Staff")
    beds = relationship(
        "Bed",
        back_populates="ward",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Bed.bed_number",
    )

    __table_args__ = (
        UniqueConstraint("ward_name", name="uq_wards_ward_name"),
        UniqueConstraint("ward_code", name="uq_wards_ward_code"),
        CheckConstraint("total_beds > 0", name="chk_total_beds"),
        CheckConstraint(
            "available_beds >= 0 AND available_beds <= total_beds",
            name="chk_available_beds",
        ),
        CheckConstraint("daily_rate >= 0", name="chk_daily_rate"),
    )


class Bed(Base):
    __tablename__ = "beds"

    bed_id = Column(Integer, primary_key=True, autoincrement=True)
    ward_id = Column(
        Integer,
        ForeignKey("wards.ward_id", name="fk_bed_ward", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    bed_number = Column(String(20), nullable=False)
    bed_type = Column(closed_enum(BedType, "chk_bed_type"), default=BedType.STANDARD)
    status = Column(closed_enum(BedStatus, "chk_bed_status"), default=BedStatus.AVAILABLE)
    notes = Column(Text, nullable=True)

    ward = relationship("Ward", back_populates="beds")

    __table_args__ = (
        UniqueConstraint("ward_id", "bed_number", name="unique_ward_bed"),
    )


class Admission(Base):
    """
    A patient's occupancy of a bed, from admission to discharge.

    The bed cannot be removed while an admission references it.
    """

    __tablename__ = "admissions"

    admission_id = Column(Integer, primary_key=True, autoincrement=True)
    admission_number = Column(String(20), nullable=False)
    patient_id = Column(
        Integer,
        ForeignKey("patients.patient_id", name="fk_admission_patient", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    bed_id = Column(
        Integer,
        ForeignKey("beds.bed_id", name="fk_admission_bed", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
    )
    admitting_doctor_id = Column(
        Integer,
        ForeignKey("doctors.doctor_id", name="fk_admission_doctor", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
    )
    department_id = Column(
        Integer,
        ForeignKey(
            "departments.department_id",
            name="fk_admission_department",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        nullable=False,
    )
    admission_type = Column(closed_enum(AdmissionType, "chk_admission_type"), nullable=False)
    admission_date = Column(DateTime, nullable=False)
    expected_discharge_date = Column(Date, nullable=True)
    discharge_date = Column(DateTime, nullable=True)
    admission_reason = Column(Text, nullable=False)
    diagnosis = Column(Text, nullable=True)
    discharge_summary = Column(Text, nullable=True)
    status = Column(
        closed_enum(AdmissionStatus, "chk_admission_status"),
        default=AdmissionStatus.ADMITTED,
    )

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    patient = relationship(
        "Patient",
        backref=backref("admissions", cascade="all, delete-orphan", passive_deletes=True),
    )
    bed = relationship("Bed")
    admitting_doctor = relationship("Doctor")
    department = relationship("Department")

    __table_args__ = (
        UniqueConstraint("admission_number", name="uq_admissions_admission_number"),
        CheckConstraint(
            "discharge_date IS NULL OR discharge_date >= admission_date",
            name="chk_discharge_date",
        ),
    )
