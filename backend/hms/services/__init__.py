"""
Data-access services over the hospital schema.
"""

from .base import RecordService
from .organization import OrganizationService
from .patients import PatientService
from .visits import VisitService
from .pharmacy import PharmacyService
from .diagnostics import DiagnosticsService
from .facilities import FacilityService
from .billing import BillingService

__all__ = [
    "RecordService",
    "OrganizationService",
    "PatientService",
    "VisitService",
    "PharmacyService",
    "DiagnosticsService",
    "FacilityService",
    "BillingService",
]
