"""
Pharmacy models.

These tables support:
1. Medication categories and the medication catalogue (stock, reorder level)
2. Medication batches for expiry tracking
3. Prescriptions (one per consultation) and their line items
"""

import enum
from sqlalchemy import (
    Column, String, DateTime, ForeignKey, Integer, Date, Boolean, Text, Numeric,
    CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship, backref

from hms.db.database import Base
from hms.models.types import closed_enum, utcnow


class DosageForm(enum.Enum):
    TABLET = "Tablet"
    CAPSULE = "Capsule"
    SYRUP = "Syrup"
    INJECTION = "Injection"
    OINTMENT = "Ointment"
    DROPS = "Drops"
    INHALER = "Inhaler"
    OTHER = "Other"


class PrescriptionStatus(enum.Enum):
    ACTIVE = "Active"
    PARTIALLY_DISPENSED = "Partially Dispensed"
    DISPENSED = "Dispensed"
    CANCELLED = "Cancelled"
    EXPIRED = "Expired"


class MedicationCategory(Base):
    __tablename__ = "medication_categories"

    category_id = Column(Integer, primary_key=True, autoincrement=True)
    category_name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("category_name", name="uq_medication_categories_category_name"),
    )


class Medication(Base):
    """
    Medication catalogue entry.

    stock_quantity at or below reorder_level means the item needs reordering.
    """

    __tablename__ = "medications"

    medication_id = Column(Integer, primary_key=True, autoincrement=True)
    medication_code = Column(String(30), nullable=False)
    medication_name = Column(String(150), nullable=False)
    generic_name = Column(String(150), nullable=True)
    category_id = Column(
        Integer,
        ForeignKey(
            "medication_categories.category_id",
            name="fk_medication_category",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        nullable=False,
    )
    manufacturer = Column(String(100), nullable=True)
    dosage_form = Column(closed_enum(DosageForm, "chk_dosage_form"), nullable=False)
    strength = Column(String(50), nullable=True)
    unit_price = Column(Numeric(10, 2), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)
    reorder_level = Column(Integer, nullable=False, default=10)
    requires_prescription = Column(Boolean, default=True)
    is_active = Column(Boolean, default=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    category = relationship("MedicationCategory")
    batches = relationship(
        "MedicationBatch",
        back_populates="medication",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="MedicationBatch.expiry_date",
    )

    __table_args__ = (
        UniqueConstraint("medication_code", name="uq_medications_medication_code"),
        CheckConstraint("unit_price >= 0", name="chk_unit_price"),
        CheckConstraint("stock_quantity >= 0", name="chk_stock_quantity"),
        CheckConstraint("reorder_level >= 0", name="chk_reorder_level"),
    )


class MedicationBatch(Base):
    """A received lot of a medication, tracked for expiry."""

    __tablename__ = "medication_batches"

    batch_id = Column(Integer, primary_key=True, autoincrement=True)
    medication_id = Column(
        Integer,
        ForeignKey(
            "medications.medication_id",
            name="fk_batch_medication",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        nullable=False,
    )
    batch_number = Column(String(50), nullable=False)
    manufacture_date = Column(Date, nullable=True)
    expiry_date = Column(Date, nullable=False)
    quantity = Column(Integer, nullable=False)
    cost_price = Column(Numeric(10, 2), nullable=True)
    supplier = Column(String(100), nullable=True)
    received_date = Column(Date, nullable=False)

    medication = relationship("Medication", back_populates="batches")

    __table_args__ = (
        UniqueConstraint("medication_id", "batch_number", name="unique_medication_batch"),
        CheckConstraint("quantity >= 0", name="chk_batch_quantity"),
        CheckConstraint("cost_price IS NULL OR cost_price >= 0", name="chk_batch_cost"),
        CheckConstraint(
            "manufacture_date IS NULL OR expiry_date > manufacture_date",
            name="chk_batch_dates",
        ),
    )


class Prescription(Base):
    """
    Prescription issued during a consultation (one per consultation).
    """

    __tablename__ = "prescriptions"

    prescription_id = Column(Integer, primary_key=True, autoincrement=True)
    prescription_number = Column(String(20), nullable=False)
    consultation_id = Column(
        Integer,
        ForeignKey(
            "consultations.consultation_id",
            name="fk_prescription_consultation",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        nullable=False,
    )
    patient_id = Column(
        Integer,
        ForeignKey("patients.patient_id", name="fk_prescription_patient", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    doctor_id = Column(
        Integer,
        ForeignKey("doctors.doctor_id", name="fk_prescription_doctor", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
    )
    prescription_date = Column(Date, nullable=False)
    valid_until = Column(Date, nullable=True)
    status = Column(
        closed_enum(PrescriptionStatus, "chk_prescription_status"),
        default=PrescriptionStatus.ACTIVE,
    )
    notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    consultation = relationship(
        "Consultation",
        backref=backref("prescription", uselist=False, cascade="all, delete-orphan", passive_deletes=True),
    )
    patient = relationship("Patient")
    doctor = relationship("Doctor")
    details = relationship(
        "PrescriptionDetail",
        back_populates="prescription",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("prescription_number", name="uq_prescriptions_prescription_number"),
        UniqueConstraint("consultation_id", name="uq_prescriptions_consultation_id"),
        CheckConstraint(
            "valid_until IS NULL OR valid_until >= prescription_date",
            name="chk_prescription_validity",
        ),
    )


class PrescriptionDetail(Base):
    """One medication line on a prescription, with dosage."""

    __tablename__ = "prescription_details"

    detail_id = Column(Integer, primary_key=True, autoincrement=True)
    prescription_id = Column(
        Integer,
        ForeignKey(
            "prescriptions.prescription_id",
            name="fk_detail_prescription",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        nullable=False,
    )
    medication_id = Column(
        Integer,
        ForeignKey(
            "medications.medication_id",
            name="fk_detail_medication",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        nullable=False,
    )
    dosage = Column(String(50), nullable=False)
    frequency = Column(String(50), nullable=False)
    duration_days = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)
    quantity_dispensed = Column(Integer, nullable=False, default=0)
    instructions = Column(Text, nullable=True)

    prescription = relationship("Prescription", back_populates="details")
    medication = relationship("Medication")

    __table_args__ = (
        UniqueConstraint("prescription_id", "medication_id", name="unique_prescription_medication"),
        CheckConstraint("duration_days > 0", name="chk_duration_days"),
        CheckConstraint("quantity > 0", name="chk_detail_quantity"),
        CheckConstraint(
            "quantity_dispensed >= 0 AND quantity_dispensed <= quantity",
            name="chk_quantity_dispensed",
        ),
    )
