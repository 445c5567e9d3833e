"""
DiagnosticsService: lab and imaging worklists.
"""

from datetime import date, datetime, time, timedelta
from typing import List

from hms.models import (
    ImagingOrder,
    ImagingStatus,
    LabTest,
    LabTestStatus,
)
from hms.services.base import RecordService

PENDING_LAB_STATUSES = (
    LabTestStatus.ORDERED,
    LabTestStatus.SAMPLE_COLLECTED,
    LabTestStatus.IN_PROGRESS,
)


class DiagnosticsService(RecordService):

    def pending_lab_tests(self) -> List[LabTest]:
        """Lab tests without a result yet, oldest order first."""
        return (
            self.db.query(LabTest)
            .filter(LabTest.status.in_(PENDING_LAB_STATUSES))
            .order_by(LabTest.order_date)
            .all()
        )

    def imaging_worklist(self, on_date: date) -> List[ImagingOrder]:
        """Imaging orders scheduled on ``on_date``."""
        start = datetime.combine(on_date, time.min)
        end = start + timedelta(days=1)
        return (
            self.db.query(ImagingOrder)
            .filter(
                ImagingOrder.status == ImagingStatus.SCHEDULED,
                ImagingOrder.scheduled_date >= start,
                ImagingOrder.scheduled_date < end,
            )
            .order_by(ImagingOrder.scheduled_date)
            .all()
        )

    def set_lab_status(self, lab_test: LabTest, status) -> LabTest:
        return self.update(lab_test, status=self.coerce_status(LabTestStatus, status))

    def set_imaging_status(self, order: ImagingOrder, status) -> ImagingOrder:
        return self.update(order, status=self.coerce_status(ImagingStatus, status))
