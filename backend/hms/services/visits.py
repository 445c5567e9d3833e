"""
VisitService: appointments and consultations.

Status changes accept any member of AppointmentStatus; the order in which
statuses are visited is the caller's concern.
"""

from datetime import date
from typing import List, Optional

from hms.models import Appointment, AppointmentStatus, Consultation
from hms.services.base import RecordService


class VisitService(RecordService):

    def appointments_for_doctor(
        self,
        doctor_id: int,
        on_date: date,
        include_cancelled: bool = False,
    ) -> List[Appointment]:
        """A doctor's appointments on one day, by time."""
        query = self.db.query(Appointment).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.appointment_date == on_date,
        )
        if not include_cancelled:
            query = query.filter(
                Appointment.status.notin_([AppointmentStatus.CANCELLED, AppointmentStatus.NO_SHOW])
            )
        return query.order_by(Appointment.appointment_time).all()

    def set_appointment_status(
        self,
        appointment: Appointment,
        status,
        cancellation_reason: Optional[str] = None,
    ) -> Appointment:
        status = self.coerce_status(AppointmentStatus, status)
        changes = {"status": status}
        if cancellation_reason is not None:
            changes["cancellation_reason"] = cancellation_reason
        return self.update(appointment, **changes)

    def record_consultation(self, appointment: Appointment, **fields) -> Consultation:
        """Create the consultation record for an appointment."""
        consultation = Consultation(appointment_id=appointment.appointment_id, **fields)
        return self.add(consultation)
