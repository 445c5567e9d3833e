"""
Pytest configuration for all tests.
Sets up Python path to find the backend hms package and provides an
in-memory SQLite database with foreign key enforcement.
"""

import sys
import os
from datetime import date, time
from decimal import Decimal
from types import SimpleNamespace

import pytest

# Add backend directory to Python path
backend_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'backend'))
if backend_path not in sys.path:
    sys.path.insert(0, backend_path)

from sqlalchemy import func
from sqlalchemy.orm import sessionmaker

from hms.db.database import build_engine, init_db
from hms.models import (
    Appointment,
    AppointmentType,
    Department,
    Doctor,
    Gender,
    Patient,
    Specialization,
    Staff,
    StaffRole,
)


@pytest.fixture
def engine():
    """Fresh in-memory database with every table created."""
    engine = build_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    db = sessionmaker(bind=engine, autoflush=False)()
    yield db
    db.rollback()
    db.close()


@pytest.fixture
def count_rows(session):
    """Count rows of a model straight from the database."""
    def _count(model, **filters):
        query = session.query(func.count()).select_from(model)
        if filters:
            query = query.filter_by(**filters)
        return query.scalar()
    return _count


@pytest.fixture
def hospital(session):
    """
    A small cardiology practice: one doctor in the Cardiology department,
    one patient and one scheduled appointment.
    """
    doctor_role = StaffRole(role_name="Doctor", description="Licensed physician", access_level=8)
    nurse_role = StaffRole(role_name="Nurse", description="Registered nurse", access_level=6)
    cardiology = Specialization(specialization_name="Cardiology")

    doctor_staff = Staff(
        employee_id="EMP-1001",
        first_name="Meera",
        last_name="Iyer",
        date_of_birth=date(1980, 4, 2),
        gender=Gender.FEMALE,
        email="meera.iyer@hospital.org",
        phone="555-0100",
        role=doctor_role,
        hire_date=date(2012, 7, 1),
        salary=Decimal("185000.00"),
    )
    nurse = Staff(
        employee_id="EMP-2001",
        first_name="Tom",
        last_name="Hale",
        date_of_birth=date(1990, 9, 12),
        gender=Gender.MALE,
        email="tom.hale@hospital.org",
        phone="555-0110",
        role=nurse_role,
        hire_date=date(2018, 3, 15),
        supervisor=doctor_staff,
    )
    doctor = Doctor(
        staff=doctor_staff,
        license_number="LIC-CA-55012",
        specialization=cardiology,
        qualification="MD, DM Cardiology",
        years_of_experience=14,
        consultation_fee=Decimal("150.00"),
    )
    department = Department(
        department_name="Cardiology",
        department_code="CARD",
        location="Block B, Floor 2",
        budget=Decimal("2500000.00"),
    )
    patient = Patient(
        patient_number="PAT-000001",
        first_name="Arjun",
        last_name="Rao",
        date_of_birth=date(1962, 11, 3),
        gender=Gender.MALE,
        email="arjun.rao@example.com",
        phone="555-0200",
        emergency_contact_name="Lata Rao",
        emergency_contact_phone="555-0201",
        emergency_contact_relation="Spouse",
        registration_date=date(2026, 1, 5),
    )
    consultation_type = AppointmentType(type_name="Consultation", default_duration_minutes=30)
    appointment = Appointment(
        appointment_number="APT-000001",
        patient=patient,
        doctor=doctor,
        department=department,
        appointment_type=consultation_type,
        appointment_date=date(2026, 10, 20),
        appointment_time=time(9, 30),
        duration_minutes=30,
        reason_for_visit="Chest pain on exertion",
    )

    session.add_all([
        doctor_role, nurse_role, cardiology, doctor_staff, nurse, doctor,
        department, patient, consultation_type, appointment,
    ])
    session.commit()

    return SimpleNamespace(
        doctor_role=doctor_role,
        nurse_role=nurse_role,
        specialization=cardiology,
        doctor_staff=doctor_staff,
        nurse=nurse,
        doctor=doctor,
        department=department,
        patient=patient,
        appointment_type=consultation_type,
        appointment=appointment,
    )
