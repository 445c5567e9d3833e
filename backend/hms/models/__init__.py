"""
SQLAlchemy models for the hospital management database.

These are the authoritative table definitions; the Alembic revisions in
backend/migrations create the same tables in dependency order.
"""

from .organization import (
    Gender,
    DayOfWeek,
    Department,
    Specialization,
    StaffRole,
    Staff,
    Doctor,
    DoctorDepartment,
    DoctorSchedule,
)
from .patient import (
    AllergySeverity,
    ConditionStatus,
    BloodGroup,
    Patient,
    PatientAllergy,
    PatientMedicalHistory,
)
from .visits import AppointmentStatus, AppointmentType, Appointment, Consultation
from .pharmacy import (
    DosageForm,
    PrescriptionStatus,
    MedicationCategory,
    Medication,
    MedicationBatch,
    Prescription,
    PrescriptionDetail,
)
from .diagnostics import (
    OrderPriority,
    LabTestStatus,
    ImagingModality,
    ImagingStatus,
    LabTestType,
    LabTest,
    ImagingType,
    ImagingOrder,
)
from .facilities import (
    WardType,
    BedType,
    BedStatus,
    AdmissionType,
    AdmissionStatus,
    Ward,
    Bed,
    Admission,
)
from .billing import (
    PolicyHolderRelation,
    InvoiceStatus,
    PaymentMethod,
    PaymentStatus,
    ClaimStatus,
    InsuranceProvider,
    PatientInsurance,
    BillingCategory,
    Invoice,
    InvoiceItem,
    Payment,
    InsuranceClaim,
)

__all__ = [
    # Organization
    "Gender",
    "DayOfWeek",
    "Department",
    "Specialization",
    "StaffRole",
    "Staff",
    "Doctor",
    "DoctorDepartment",
    "DoctorSchedule",
    # Patients
    "AllergySeverity",
    "ConditionStatus",
    "BloodGroup",
    "Patient",
    "PatientAllergy",
    "PatientMedicalHistory",
    # Visits
    "AppointmentStatus",
    "AppointmentType",
    "Appointment",
    "Consultation",
    # Pharmacy
    "DosageForm",
    "PrescriptionStatus",
    "MedicationCategory",
    "Medication",
    "MedicationBatch",
    "Prescription",
    "PrescriptionDetail",
    # Diagnostics
    "OrderPriority",
    "LabTestStatus",
    "ImagingModality",
    "ImagingStatus",
    "LabTestType",
    "LabTest",
    "ImagingType",
    "ImagingOrder",
    # Facilities
    "WardType",
    "BedType",
    "BedStatus",
    "AdmissionType",
    "AdmissionStatus",
    "Ward",
    "Bed",
    "Admission",
    # Billing
    "PolicyHolderRelation",
    "InvoiceStatus",
    "PaymentMethod",
    "PaymentStatus",
    "ClaimStatus",
    "InsuranceProvider",
    "PatientInsurance",
    "BillingCategory",
    "Invoice",
    "InvoiceItem",
    "Payment",
    "InsuranceClaim",
]
