"""
Reference (lookup) rows every hospital database starts with.

seed_reference_data() is idempotent: rows whose natural key already
exists are skipped, so it can be re-run against a live database.
"""

import logging
from decimal import Decimal

from hms.models import (
    AppointmentType,
    BillingCategory,
    BloodGroup,
    MedicationCategory,
    Specialization,
    StaffRole,
)

logger = logging.getLogger("hms.reference_data")


BLOOD_GROUPS = [
    {"blood_type": "A+", "description": "A Positive"},
    {"blood_type": "A-", "description": "A Negative"},
    {"blood_type": "B+", "description": "B Positive"},
    {"blood_type": "B-", "description": "B Negative"},
    {"blood_type": "AB+", "description": "AB Positive"},
    {"blood_type": "AB-", "description": "AB Negative"},
    {"blood_type": "O+", "description": "O Positive"},
    {"blood_type": "O-", "description": "O Negative"},
]

STAFF_ROLES = [
    {"role_name": "Administrator", "description": "System and hospital administration", "access_level": 10},
    {"role_name": "Doctor", "description": "Licensed physician", "access_level": 8},
    {"role_name": "Nurse", "description": "Registered nurse", "access_level": 6},
    {"role_name": "Pharmacist", "description": "Dispenses medications", "access_level": 6},
    {"role_name": "Lab Technician", "description": "Collects and processes samples", "access_level": 5},
    {"role_name": "Radiologist", "description": "Performs and reads imaging", "access_level": 7},
    {"role_name": "Receptionist", "description": "Front desk and scheduling", "access_level": 3},
    {"role_name": "Billing Clerk", "description": "Invoices, payments and claims", "access_level": 4},
]

SPECIALIZATIONS = [
    {"specialization_name": "Cardiology", "description": "Heart and blood vessels"},
    {"specialization_name": "Neurology", "description": "Brain and nervous system"},
    {"specialization_name": "Orthopedics", "description": "Bones, joints and muscles"},
    {"specialization_name": "Pediatrics", "description": "Care of children"},
    {"specialization_name": "General Medicine", "description": "Primary care", "requires_certification": False},
    {"specialization_name": "Radiology", "description": "Medical imaging"},
]

APPOINTMENT_TYPES = [
    {"type_name": "Consultation", "description": "New patient consultation", "default_duration_minutes": 30},
    {"type_name": "Follow-up", "description": "Review of an earlier visit", "default_duration_minutes": 15},
    {"type_name": "Procedure", "description": "Minor outpatient procedure", "default_duration_minutes": 60},
    {"type_name": "Emergency", "description": "Unscheduled urgent visit", "default_duration_minutes": 45},
]

BILLING_CATEGORIES = [
    {"category_name": "Consultation", "tax_rate": Decimal("0.00")},
    {"category_name": "Laboratory", "tax_rate": Decimal("0.00")},
    {"category_name": "Imaging", "tax_rate": Decimal("0.00")},
    {"category_name": "Pharmacy", "tax_rate": Decimal("5.00")},
    {"category_name": "Room Charges", "tax_rate": Decimal("0.00")},
    {"category_name": "Procedure", "tax_rate": Decimal("0.00")},
]

MEDICATION_CATEGORIES = [
    {"category_name": "Analgesics", "description": "Pain relief"},
    {"category_name": "Antibiotics", "description": "Bacterial infections"},
    {"category_name": "Antihypertensives", "description": "Blood pressure control"},
    {"category_name": "Anticoagulants", "description": "Prevent blood clots"},
    {"category_name": "Antidiabetics", "description": "Blood glucose control"},
]

# (model, natural key column, rows)
REFERENCE_TABLES = [
    (BloodGroup, "blood_type", BLOOD_GROUPS),
    (StaffRole, "role_name", STAFF_ROLES),
    (Specialization, "specialization_name", SPECIALIZATIONS),
    (AppointmentType, "type_name", APPOINTMENT_TYPES),
    (BillingCategory, "category_name", BILLING_CATEGORIES),
    (MedicationCategory, "category_name", MEDICATION_CATEGORIES),
]


def seed_reference_data(db) -> dict:
    """
    Insert missing lookup rows and commit.

    Returns {table_name: number_of_rows_created}.
    """
    created = {}
    for model, key, rows in REFERENCE_TABLES:
        column = getattr(model, key)
        existing = {value for (value,) in db.query(column).all()}
        count = 0
        for row in rows:
            if row[key] in existing:
                logger.debug(f"Skipping existing {model.__tablename__} {row[key]!r}")
                continue
            db.add(model(**row))
            count += 1
        created[model.__tablename__] = count
        logger.info(f"Seeded {count} {model.__tablename__} rows")
    db.commit()
    return created
