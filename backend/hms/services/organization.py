"""
OrganizationService: departments, staff hierarchy and doctor assignments.
"""

from datetime import date
from typing import List, Optional

from hms.models import (
    DayOfWeek,
    Department,
    Doctor,
    DoctorDepartment,
    DoctorSchedule,
    Staff,
)
from hms.services.base import RecordService


class OrganizationService(RecordService):
    """Reads and writes over the organizational structure tables."""

    # -------------------------------------------------------------------------
    # Staff hierarchy (adjacency over staff.supervisor_id)
    # -------------------------------------------------------------------------

    def direct_reports(self, staff_id: int) -> List[Staff]:
        """Staff whose supervisor is ``staff_id``."""
        return (
            self.db.query(Staff)
            .filter(Staff.supervisor_id == staff_id)
            .order_by(Staff.last_name, Staff.first_name)
            .all()
        )

    def supervisor_chain(self, staff_id: int) -> List[Staff]:
        """
        Supervisors of ``staff_id`` from the immediate one upwards.

        The schema does not forbid cycles, so a supervisor already seen
        ends the walk.
        """
        chain: List[Staff] = []
        seen = {staff_id}
        current = self.db.get(Staff, staff_id)
        while current is not None and current.supervisor_id is not None:
            if current.supervisor_id in seen:
                self.logger.warning(f"Supervisor cycle detected at staff {current.supervisor_id}")
                break
            seen.add(current.supervisor_id)
            current = self.db.get(Staff, current.supervisor_id)
            if current is not None:
                chain.append(current)
        return chain

    # -------------------------------------------------------------------------
    # Departments and doctors
    # -------------------------------------------------------------------------

    def assign_doctor(
        self,
        doctor: Doctor,
        department: Department,
        assignment_date: Optional[date] = None,
        is_primary: bool = False,
    ) -> DoctorDepartment:
        """Link a doctor to a department (unique per pair)."""
        link = DoctorDepartment(
            doctor_id=doctor.doctor_id,
            department_id=department.department_id,
            assignment_date=assignment_date or date.today(),
            is_primary_department=is_primary,
        )
        return self.add(link)

    def set_department_head(self, department: Department, doctor: Optional[Doctor]) -> Department:
        return self.update(
            department,
            head_doctor_id=doctor.doctor_id if doctor is not None else None,
        )

    def doctors_in_department(self, department_id: int) -> List[Doctor]:
        """Doctors assigned to a department, primary assignments first."""
        return (
            self.db.query(Doctor)
            .join(DoctorDepartment, DoctorDepartment.doctor_id == Doctor.doctor_id)
            .filter(DoctorDepartment.department_id == department_id)
            .order_by(DoctorDepartment.is_primary_department.desc(), Doctor.doctor_id)
            .all()
        )

    def doctor_schedule_for(self, doctor_id: int, day) -> List[DoctorSchedule]:
        """Available schedule windows for a doctor on a weekday."""
        day = self.coerce_status(DayOfWeek, day)
        return (
            self.db.query(DoctorSchedule)
            .filter(
                DoctorSchedule.doctor_id == doctor_id,
                DoctorSchedule.day_of_week == day,
                DoctorSchedule.is_available.is_(True),
            )
            .order_by(DoctorSchedule.start_time)
            .all()
        )
