"""
FacilityService: bed availability and current admissions.
"""

from typing import List, Optional

from hms.models import Admission, AdmissionStatus, Bed, BedStatus
from hms.services.base import RecordService


class FacilityService(RecordService):

    def available_beds(self, ward_id: int) -> List[Bed]:
        return (
            self.db.query(Bed)
            .filter(Bed.ward_id == ward_id, Bed.status == BedStatus.AVAILABLE)
            .order_by(Bed.bed_number)
            .all()
        )

    def current_admissions(self, ward_id: Optional[int] = None) -> List[Admission]:
        """Patients still admitted, optionally restricted to one ward."""
        query = self.db.query(Admission).filter(Admission.status == AdmissionStatus.ADMITTED)
        if ward_id is not None:
            query = query.join(Bed, Bed.bed_id == Admission.bed_id).filter(Bed.ward_id == ward_id)
        return query.order_by(Admission.admission_date).all()
