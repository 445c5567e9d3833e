"""
PatientService: registration lookups, allergies and medical history.
"""

from typing import List, Optional

from hms.models import (
    ConditionStatus,
    Patient,
    PatientAllergy,
    PatientMedicalHistory,
)
from hms.services.base import RecordService

# Conditions still relevant to care
OPEN_CONDITION_STATUSES = (
    ConditionStatus.ACTIVE,
    ConditionStatus.CHRONIC,
    ConditionStatus.UNDER_TREATMENT,
)


class PatientService(RecordService):

    def find_by_number(self, patient_number: str) -> Optional[Patient]:
        return (
            self.db.query(Patient)
            .filter(Patient.patient_number == patient_number)
            .first()
        )

    def allergies_for(self, patient_id: int) -> List[PatientAllergy]:
        return (
            self.db.query(PatientAllergy)
            .filter(PatientAllergy.patient_id == patient_id)
            .order_by(PatientAllergy.allergen)
            .all()
        )

    def active_conditions(self, patient_id: int) -> List[PatientMedicalHistory]:
        """History entries that are not resolved, oldest diagnosis first."""
        return (
            self.db.query(PatientMedicalHistory)
            .filter(
                PatientMedicalHistory.patient_id == patient_id,
                PatientMedicalHistory.status.in_(OPEN_CONDITION_STATUSES),
            )
            .order_by(PatientMedicalHistory.diagnosis_date)
            .all()
        )
