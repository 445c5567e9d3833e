"""
Unit tests for RecordService and OrganizationService, plus reference data seeding.
"""

import logging
from datetime import date, time

import pytest
from sqlalchemy.exc import StatementError

from hms.db.errors import CheckViolation, ConstraintViolation, InvalidStatusError
from hms.models import (
    Appointment,
    AppointmentStatus,
    BloodGroup,
    DayOfWeek,
    Department,
    DoctorSchedule,
    Gender,
    Staff,
    StaffRole,
)
from hms.reference_data import BLOOD_GROUPS, STAFF_ROLES, seed_reference_data
from hms.services import OrganizationService, RecordService


def make_staff(role, employee_id, **overrides):
    fields = dict(
        employee_id=employee_id,
        first_name=employee_id,
        last_name="Staff",
        date_of_birth=date(1988, 8, 8),
        gender=Gender.UNDISCLOSED,
        email=f"{employee_id.lower()}@hospital.org",
        phone="555-0500",
        role=role,
        hire_date=date(2021, 1, 4),
    )
    fields.update(overrides)
    return Staff(**fields)


# =============================================================================
# RecordService
# =============================================================================

class TestRecordService:

    def test_add_and_get(self, session):
        service = RecordService(session)

        role = service.add(StaffRole(role_name="Porter", access_level=2))

        assert role.role_id is not None
        assert service.get(StaffRole, role.role_id) is role
        assert service.get(StaffRole, 9999) is None

    def test_find_all_filters_and_orders_by_key(self, session, hospital):
        service = RecordService(session)

        roles = service.find_all(StaffRole)
        nurses = service.find_all(StaffRole, role_name="Nurse")

        assert [r.role_name for r in roles] == ["Doctor", "Nurse"]
        assert [r.role_name for r in nurses] == ["Nurse"]

    def test_update_unknown_column_raises(self, session, hospital):
        with pytest.raises(AttributeError):
            RecordService(session).update(hospital.department, floor="2")

    def test_violation_rolls_back_session(self, session, hospital):
        """After a rejected write the session is usable again."""
        service = RecordService(session)

        with pytest.raises(CheckViolation):
            service.update(hospital.department, budget=-1)

        service.update(hospital.department, location="Block C")
        assert session.get(Department, hospital.department.department_id).location == "Block C"

    def test_unknown_status_on_update_is_check_violation(self, session, hospital):
        service = RecordService(session)

        with pytest.raises(CheckViolation) as exc_info:
            service.update(hospital.appointment, status="Rescheduled")

        assert exc_info.value.constraint == "chk_appointment_status"
        assert exc_info.value.table == "appointments"
        # Session was rolled back and accepts the next write
        service.add(Department(department_name="Neurology", department_code="NEURO"))
        assert session.get(Appointment, hospital.appointment.appointment_id).status is AppointmentStatus.SCHEDULED

    def test_unknown_day_on_insert_is_check_violation(self, session, hospital, count_rows):
        service = RecordService(session)

        with pytest.raises(CheckViolation) as exc_info:
            service.add(DoctorSchedule(
                doctor_id=hospital.doctor.doctor_id,
                day_of_week="Funday",
                start_time=time(9, 0),
                end_time=time(12, 0),
            ))

        assert exc_info.value.constraint == "chk_schedule_day"
        assert exc_info.value.columns == ("day_of_week",)
        service.add(DoctorSchedule(
            doctor_id=hospital.doctor.doctor_id,
            day_of_week=DayOfWeek.FRIDAY,
            start_time=time(9, 0),
            end_time=time(12, 0),
        ))
        assert count_rows(DoctorSchedule) == 1

    def test_other_database_errors_roll_back_and_propagate(self, session, hospital):
        service = RecordService(session)

        with pytest.raises(StatementError) as exc_info:
            service.update(hospital.nurse, hire_date="2021-01-04")

        assert not isinstance(exc_info.value, ConstraintViolation)
        service.update(hospital.department, location="Block D")
        assert session.get(Staff, hospital.nurse.staff_id).hire_date == date(2018, 3, 15)

    def test_violation_is_logged(self, session, hospital, caplog):
        service = RecordService(session)

        with caplog.at_level(logging.WARNING, logger="service.RecordService"):
            with pytest.raises(CheckViolation):
                service.update(hospital.department, budget=-1)

        assert "chk_budget" in caplog.text

    def test_writes_are_logged(self, session, caplog):
        service = OrganizationService(session)

        with caplog.at_level(logging.INFO, logger="service.OrganizationService"):
            service.add(StaffRole(role_name="Chaplain", access_level=1))

        assert "Inserted staff_roles" in caplog.text


# =============================================================================
# OrganizationService
# =============================================================================

class TestOrganizationService:

    def test_direct_reports(self, session, hospital):
        org = OrganizationService(session)
        org.add(make_staff(hospital.nurse_role, "EMP-A", supervisor=hospital.doctor_staff, last_name="Adams"))

        reports = org.direct_reports(hospital.doctor_staff.staff_id)

        assert [s.last_name for s in reports] == ["Adams", "Hale"]

    def test_supervisor_chain(self, session, hospital):
        org = OrganizationService(session)
        chief = org.add(make_staff(hospital.doctor_role, "EMP-CHIEF"))
        org.update(hospital.doctor_staff, supervisor_id=chief.staff_id)

        chain = org.supervisor_chain(hospital.nurse.staff_id)

        assert [s.employee_id for s in chain] == ["EMP-1001", "EMP-CHIEF"]

    def test_supervisor_chain_stops_on_cycle(self, session, hospital, caplog):
        org = OrganizationService(session)
        org.update(hospital.doctor_staff, supervisor_id=hospital.nurse.staff_id)

        with caplog.at_level(logging.WARNING, logger="service.OrganizationService"):
            chain = org.supervisor_chain(hospital.nurse.staff_id)

        assert [s.employee_id for s in chain] == ["EMP-1001"]
        assert "cycle" in caplog.text

    def test_top_of_hierarchy_has_empty_chain(self, session, hospital):
        assert OrganizationService(session).supervisor_chain(hospital.doctor_staff.staff_id) == []

    def test_doctors_in_department(self, session, hospital):
        org = OrganizationService(session)
        org.assign_doctor(hospital.doctor, hospital.department, assignment_date=date(2026, 1, 1), is_primary=True)

        doctors = org.doctors_in_department(hospital.department.department_id)

        assert [d.license_number for d in doctors] == ["LIC-CA-55012"]

    def test_set_and_clear_department_head(self, session, hospital):
        org = OrganizationService(session)

        org.set_department_head(hospital.department, hospital.doctor)
        assert hospital.department.head_doctor.doctor_id == hospital.doctor.doctor_id

        org.set_department_head(hospital.department, None)
        assert hospital.department.head_doctor_id is None

    def test_doctor_schedule_for_day(self, session, hospital):
        org = OrganizationService(session)
        doctor_id = hospital.doctor.doctor_id
        org.add_all([
            DoctorSchedule(doctor_id=doctor_id, day_of_week=DayOfWeek.MONDAY,
                           start_time=time(14, 0), end_time=time(17, 0)),
            DoctorSchedule(doctor_id=doctor_id, day_of_week=DayOfWeek.MONDAY,
                           start_time=time(9, 0), end_time=time(12, 0)),
            DoctorSchedule(doctor_id=doctor_id, day_of_week=DayOfWeek.MONDAY,
                           start_time=time(18, 0), end_time=time(20, 0), is_available=False),
            DoctorSchedule(doctor_id=doctor_id, day_of_week=DayOfWeek.FRIDAY,
                           start_time=time(9, 0), end_time=time(12, 0)),
        ])

        monday = org.doctor_schedule_for(doctor_id, "Monday")

        assert [(s.start_time, s.end_time) for s in monday] == [
            (time(9, 0), time(12, 0)),
            (time(14, 0), time(17, 0)),
        ]

    def test_doctor_schedule_rejects_unknown_day(self, session, hospital):
        with pytest.raises(InvalidStatusError):
            OrganizationService(session).doctor_schedule_for(hospital.doctor.doctor_id, "Funday")


# =============================================================================
# Reference data
# =============================================================================

class TestReferenceData:

    def test_seed_creates_lookups(self, session, count_rows):
        created = seed_reference_data(session)

        assert created["blood_groups"] == len(BLOOD_GROUPS)
        assert count_rows(BloodGroup) == 8
        assert count_rows(StaffRole) == len(STAFF_ROLES)

    def test_seed_is_idempotent(self, session, count_rows):
        seed_reference_data(session)

        created = seed_reference_data(session)

        assert set(created.values()) == {0}
        assert count_rows(BloodGroup) == 8

    def test_seed_keeps_existing_rows(self, session, hospital, count_rows):
        """The fixture already has Doctor and Nurse roles."""
        created = seed_reference_data(session)

        assert created["staff_roles"] == len(STAFF_ROLES) - 2
        assert count_rows(StaffRole, role_name="Nurse") == 1
