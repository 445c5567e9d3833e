"""
Tests for the organizational structure tables.

- Staff roles and specializations are RESTRICT parents
- Doctors extend staff 1:1 and are RESTRICT parents of appointments
- Department head and staff supervisor are SET NULL
- Schedule windows must end after they start
"""

from datetime import date, time
from decimal import Decimal

import pytest
from sqlalchemy import text

from hms.db.errors import CheckViolation, ForeignKeyViolation, UniqueViolation
from hms.models import (
    Appointment,
    DayOfWeek,
    Department,
    Doctor,
    DoctorDepartment,
    DoctorSchedule,
    Gender,
    Specialization,
    Staff,
    StaffRole,
)
from hms.services import OrganizationService, RecordService


def make_staff(role, employee_id, email, **overrides):
    fields = dict(
        employee_id=employee_id,
        first_name="Sam",
        last_name="Okafor",
        date_of_birth=date(1985, 1, 20),
        gender=Gender.OTHER,
        email=email,
        phone="555-0300",
        role=role,
        hire_date=date(2020, 2, 1),
    )
    fields.update(overrides)
    return Staff(**fields)


# =============================================================================
# Staff and roles
# =============================================================================

class TestStaff:

    def test_delete_role_in_use_is_restricted(self, session, hospital, count_rows):
        """A staff role referenced by staff cannot be deleted."""
        service = RecordService(session)

        with pytest.raises(ForeignKeyViolation):
            service.delete(hospital.nurse_role)

        assert count_rows(StaffRole, role_name="Nurse") == 1

    def test_delete_unused_role(self, session, hospital, count_rows):
        service = RecordService(session)
        unused = service.add(StaffRole(role_name="Volunteer", access_level=1))

        service.delete(unused)

        assert count_rows(StaffRole, role_name="Volunteer") == 0

    def test_access_level_bounds(self, session):
        service = RecordService(session)

        with pytest.raises(CheckViolation) as exc_info:
            service.add(StaffRole(role_name="Root", access_level=11))

        assert exc_info.value.constraint == "chk_access_level"

    def test_duplicate_email_rejected(self, session, hospital):
        service = RecordService(session)

        with pytest.raises(UniqueViolation) as exc_info:
            service.add(make_staff(hospital.nurse_role, "EMP-2002", "tom.hale@hospital.org"))

        assert exc_info.value.constraint == "uq_staff_email"
        assert exc_info.value.table == "staff"

    def test_malformed_email_rejected(self, session, hospital):
        service = RecordService(session)

        with pytest.raises(CheckViolation) as exc_info:
            service.add(make_staff(hospital.nurse_role, "EMP-2003", "not-an-email"))

        assert exc_info.value.constraint == "chk_staff_email"

    def test_termination_before_hire_rejected(self, session, hospital):
        service = RecordService(session)
        staff = make_staff(
            hospital.nurse_role,
            "EMP-2004",
            "leaver@hospital.org",
            hire_date=date(2024, 5, 1),
            termination_date=date(2024, 4, 30),
        )

        with pytest.raises(CheckViolation) as exc_info:
            service.add(staff)

        assert exc_info.value.constraint == "chk_termination_date"

    def test_deleting_supervisor_clears_reports(self, session, hospital):
        """supervisor_id is SET NULL when the supervisor is removed."""
        service = RecordService(session)
        manager = service.add(make_staff(hospital.nurse_role, "EMP-3001", "lead@hospital.org"))
        report = service.add(
            make_staff(hospital.nurse_role, "EMP-3002", "report@hospital.org", supervisor_id=manager.staff_id)
        )
        report_id = report.staff_id

        service.delete(manager)

        assert session.get(Staff, report_id).supervisor_id is None

    def test_gender_is_stored_as_display_string(self, session, hospital):
        stored = session.execute(
            text("SELECT gender FROM staff WHERE employee_id = :employee_id"),
            {"employee_id": "EMP-1001"},
        ).scalar_one()

        assert stored == "Female"

    def test_role_key_change_cascades_to_staff(self, session, hospital):
        """ON UPDATE CASCADE carries a new role key into staff.role_id."""
        service = RecordService(session)
        nurse_id = hospital.nurse.staff_id

        service.update(hospital.nurse_role, role_id=900)

        assert session.get(Staff, nurse_id).role_id == 900


# =============================================================================
# Doctors
# =============================================================================

class TestDoctor:

    def test_delete_doctor_with_appointments_is_restricted(self, session, hospital, count_rows):
        service = RecordService(session)

        with pytest.raises(ForeignKeyViolation):
            service.delete(hospital.doctor)

        assert count_rows(Doctor) == 1
        assert count_rows(Appointment) == 1

    def test_delete_staff_cascades_to_doctor_unless_restricted(self, session, hospital):
        """Removing the staff row takes the doctor row with it, which the appointment blocks."""
        service = RecordService(session)

        with pytest.raises(ForeignKeyViolation):
            service.delete(hospital.doctor_staff)

    def test_delete_doctor_clears_department_head(self, session, hospital):
        service = RecordService(session)
        org = OrganizationService(session)
        other_staff = service.add(make_staff(hospital.doctor_role, "EMP-1002", "k.ng@hospital.org"))
        head = service.add(Doctor(
            staff_id=other_staff.staff_id,
            license_number="LIC-CA-77001",
            specialization_id=hospital.specialization.specialization_id,
            qualification="MD",
            years_of_experience=25,
            consultation_fee=Decimal("200.00"),
        ))
        org.set_department_head(hospital.department, head)
        department_id = hospital.department.department_id

        service.delete(head)

        assert session.get(Department, department_id).head_doctor_id is None

    def test_specialization_in_use_is_restricted(self, session, hospital):
        with pytest.raises(ForeignKeyViolation):
            RecordService(session).delete(hospital.specialization)

        assert session.query(Specialization).count() == 1

    def test_one_doctor_per_staff_member(self, session, hospital):
        service = RecordService(session)

        with pytest.raises(UniqueViolation) as exc_info:
            service.add(Doctor(
                staff_id=hospital.doctor_staff.staff_id,
                license_number="LIC-CA-99999",
                specialization_id=hospital.specialization.specialization_id,
                qualification="MD",
                years_of_experience=1,
                consultation_fee=Decimal("50.00"),
            ))

        assert exc_info.value.constraint == "uq_doctors_staff_id"

    def test_negative_fee_rejected(self, session, hospital):
        service = RecordService(session)

        with pytest.raises(CheckViolation) as exc_info:
            service.update(hospital.doctor, consultation_fee=Decimal("-1.00"))

        assert exc_info.value.constraint == "chk_consultation_fee"


# =============================================================================
# Departments and schedules
# =============================================================================

class TestDepartmentAndSchedule:

    def test_duplicate_department_code_rejected(self, session, hospital):
        with pytest.raises(UniqueViolation) as exc_info:
            RecordService(session).add(Department(department_name="Cardiac Surgery", department_code="CARD"))

        assert exc_info.value.constraint == "uq_departments_department_code"

    def test_doctor_assigned_once_per_department(self, session, hospital):
        org = OrganizationService(session)
        org.assign_doctor(hospital.doctor, hospital.department, is_primary=True)

        with pytest.raises(UniqueViolation) as exc_info:
            org.assign_doctor(hospital.doctor, hospital.department)

        assert exc_info.value.constraint == "unique_doctor_department"

    def test_deleting_department_with_appointments_is_restricted(self, session, hospital):
        with pytest.raises(ForeignKeyViolation):
            RecordService(session).delete(hospital.department)

    def test_deleting_department_removes_assignments(self, session, hospital, count_rows):
        service = RecordService(session)
        org = OrganizationService(session)
        radiology = service.add(Department(department_name="Radiology", department_code="RAD"))
        org.assign_doctor(hospital.doctor, radiology)

        service.delete(radiology)

        assert count_rows(DoctorDepartment) == 0

    def test_schedule_end_must_follow_start(self, session, hospital):
        service = RecordService(session)
        slot = DoctorSchedule(
            doctor_id=hospital.doctor.doctor_id,
            day_of_week=DayOfWeek.MONDAY,
            start_time=time(14, 0),
            end_time=time(14, 0),
        )

        with pytest.raises(CheckViolation) as exc_info:
            service.add(slot)

        assert exc_info.value.constraint == "chk_schedule_time"

    def test_schedule_removed_with_doctor(self, session, hospital, count_rows):
        service = RecordService(session)
        service.add(DoctorSchedule(
            doctor_id=hospital.doctor.doctor_id,
            day_of_week=DayOfWeek.TUESDAY,
            start_time=time(9, 0),
            end_time=time(13, 0),
        ))
        service.delete(hospital.appointment)

        service.delete(hospital.doctor)

        assert count_rows(DoctorSchedule) == 0
