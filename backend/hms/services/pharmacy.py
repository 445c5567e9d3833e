"""
PharmacyService: stock levels, batch expiry and prescription lines.
"""

from datetime import date, timedelta
from typing import List, Optional

from hms.models import Medication, MedicationBatch, PrescriptionDetail
from hms.services.base import RecordService


class PharmacyService(RecordService):

    def low_stock_medications(self) -> List[Medication]:
        """Active medications at or below their reorder level."""
        return (
            self.db.query(Medication)
            .filter(
                Medication.is_active.is_(True),
                Medication.stock_quantity <= Medication.reorder_level,
            )
            .order_by(Medication.stock_quantity, Medication.medication_name)
            .all()
        )

    def expiring_batches(self, within_days: int = 30, today: Optional[date] = None) -> List[MedicationBatch]:
        """Batches with stock left that expire within ``within_days`` (already expired included)."""
        today = today or date.today()
        cutoff = today + timedelta(days=within_days)
        return (
            self.db.query(MedicationBatch)
            .filter(
                MedicationBatch.quantity > 0,
                MedicationBatch.expiry_date <= cutoff,
            )
            .order_by(MedicationBatch.expiry_date)
            .all()
        )

    def prescription_items(self, prescription_id: int) -> List[PrescriptionDetail]:
        return (
            self.db.query(PrescriptionDetail)
            .filter(PrescriptionDetail.prescription_id == prescription_id)
            .order_by(PrescriptionDetail.detail_id)
            .all()
        )
