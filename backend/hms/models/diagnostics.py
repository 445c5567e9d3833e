"""
Lab and imaging models.

Lab tests follow order -> collect -> result; imaging orders follow
order -> schedule -> complete. Both lifecycles are recorded as status
values only; sequencing is left to the application.
"""

import enum
from sqlalchemy import (
    Column, String, DateTime, ForeignKey, Integer, Boolean, Text, Numeric,
    CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from hms.db.database import Base
from hms.models.types import closed_enum, utcnow


class OrderPriority(enum.Enum):
    ROUTINE = "Routine"
    URGENT = "Urgent"
    STAT = "STAT"


class LabTestStatus(enum.Enum):
    ORDERED = "Ordered"
    SAMPLE_COLLECTED = "Sample Collected"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class ImagingModality(enum.Enum):
    XRAY = "X-Ray"
    CT = "CT"
    MRI = "MRI"
    ULTRASOUND = "Ultrasound"
    PET = "PET"
    MAMMOGRAPHY = "Mammography"
    FLUOROSCOPY = "Fluoroscopy"


class ImagingStatus(enum.Enum):
    ORDERED = "Ordered"
    SCHEDULED = "Scheduled"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class LabTestType(Base):
    """Catalogue of orderable lab tests."""

    __tablename__ = "lab_test_types"

    test_type_id = Column(Integer, primary_key=True, autoincrement=True)
    test_code = Column(String(20), nullable=False)
    test_name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    sample_type = Column(String(50), nullable=True)  # Blood, Urine, Swab, ...
    normal_range = Column(String(100), nullable=True)
    unit = Column(String(30), nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    turnaround_hours = Column(Integer, nullable=False, default=24)

    __table_args__ = (
        UniqueConstraint("test_code", name="uq_lab_test_types_test_code"),
        UniqueConstraint("test_name", name="uq_lab_test_types_test_name"),
        CheckConstraint("price >= 0", name="chk_lab_price"),
        CheckConstraint("turnaround_hours > 0", name="chk_turnaround"),
    )


class LabTest(Base):
    """A lab test ordered for a patient."""

    __tablename__ = "lab_tests"

    lab_test_id = Column(Integer, primary_key=True, autoincrement=True)
    test_number = Column(String(20), nullable=False)
    patient_id = Column(
        Integer,
        ForeignKey("patients.patient_id", name="fk_lab_patient", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    test_type_id = Column(
        Integer,
        ForeignKey("lab_test_types.test_type_id", name="fk_lab_test_type", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
    )
    ordered_by_doctor_id = Column(
        Integer,
        ForeignKey("doctors.doctor_id", name="fk_lab_doctor", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
    )
    consultation_id = Column(
        Integer,
        ForeignKey(
            "consultations.consultation_id",
            name="fk_lab_consultation",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        nullable=True,
    )
    priority = Column(closed_enum(OrderPriority, "chk_lab_priority"), default=OrderPriority.ROUTINE)
    status = Column(closed_enum(LabTestStatus, "chk_lab_status"), default=LabTestStatus.ORDERED)
    order_date = Column(DateTime, nullable=False, default=utcnow)
    sample_collected_at = Column(DateTime, nullable=True)
    collected_by_staff_id = Column(
        Integer,
        ForeignKey("staff.staff_id", name="fk_lab_collector", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
    )
    result_value = Column(String(255), nullable=True)
    result_notes = Column(Text, nullable=True)
    is_abnormal = Column(Boolean, nullable=True)
    result_date = Column(DateTime, nullable=True)
    performed_by_staff_id = Column(
        Integer,
        ForeignKey("staff.staff_id", name="fk_lab_performer", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
    )

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    patient = relationship("Patient")
    test_type = relationship("LabTestType")
    ordered_by = relationship("Doctor")
    consultation = relationship("Consultation")
    collected_by = relationship("Staff", foreign_keys=[collected_by_staff_id])
    performed_by = relationship("Staff", foreign_keys=[performed_by_staff_id])

    __table_args__ = (
        UniqueConstraint("test_number", name="uq_lab_tests_test_number"),
        CheckConstraint(
            "sample_collected_at IS NULL OR sample_collected_at >= order_date",
            name="chk_sample_collection",
        ),
        CheckConstraint(
            "result_date IS NULL OR result_date >= order_date",
            name="chk_lab_result_date",
        ),
    )


class ImagingType(Base):
    """Catalogue of imaging studies (Chest X-Ray, Brain MRI, ...)."""

    __tablename__ = "imaging_types"

    imaging_type_id = Column(Integer, primary_key=True, autoincrement=True)
    type_name = Column(String(100), nullable=False)
    modality = Column(closed_enum(ImagingModality, "chk_imaging_modality"), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=30)
    requires_contrast = Column(Boolean, default=False)

    __table_args__ = (
        UniqueConstraint("type_name", name="uq_imaging_types_type_name"),
        CheckConstraint("price >= 0", name="chk_imaging_price"),
        CheckConstraint("duration_minutes > 0", name="chk_imaging_duration"),
    )


class ImagingOrder(Base):
    """An imaging study ordered for a patient."""

    __tablename__ = "imaging_orders"

    imaging_order_id = Column(Integer, primary_key=True, autoincrement=True)
    order_number = Column(String(20), nullable=False)
    patient_id = Column(
        Integer,
        ForeignKey("patients.patient_id", name="fk_imaging_patient", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    imaging_type_id = Column(
        Integer,
        ForeignKey("imaging_types.imaging_type_id", name="fk_imaging_type", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
    )
    ordered_by_doctor_id = Column(
        Integer,
        ForeignKey("doctors.doctor_id", name="fk_imaging_doctor", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
    )
    consultation_id = Column(
        Integer,
        ForeignKey(
            "consultations.consultation_id",
            name="fk_imaging_consultation",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        nullable=True,
    )
    body_part = Column(String(100), nullable=True)
    clinical_indication = Column(Text, nullable=True)
    priority = Column(closed_enum(OrderPriority, "chk_imaging_priority"), default=OrderPriority.ROUTINE)
    status = Column(closed_enum(ImagingStatus, "chk_imaging_status"), default=ImagingStatus.ORDERED)
    order_date = Column(DateTime, nullable=False, default=utcnow)
    scheduled_date = Column(DateTime, nullable=True)
    completed_date = Column(DateTime, nullable=True)
    radiologist_staff_id = Column(
        Integer,
        ForeignKey("staff.staff_id", name="fk_imaging_radiologist", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
    )
    findings = Column(Text, nullable=True)
    impression = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    patient = relationship("Patient")
    imaging_type = relationship("ImagingType")
    ordered_by = relationship("Doctor")
    consultation = relationship("Consultation")
    radiologist = relationship("Staff")

    __table_args__ = (
        UniqueConstraint("order_number", name="uq_imaging_orders_order_number"),
        CheckConstraint(
            "scheduled_date IS NULL OR scheduled_date >= order_date",
            name="chk_imaging_schedule",
        ),
        CheckConstraint(
            "completed_date IS NULL OR completed_date >= order_date",
            name="chk_imaging_completion",
        ),
    )
