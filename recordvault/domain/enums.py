"""Domain enumerations for the recordvault application.

Enums represent fixed sets of domain values (e.g. record status).
"""

from enum import Enum


class DocumentCategory(str, Enum):
    """Kind of digitized document within a medical record."""

    RECORD_PAGE = "record_page"
    EXAM = "exam"
    PRESCRIPTION = "prescription"
    REPORT = "report"
    CONSENT_FORM = "consent_form"
    OTHER = "other"

    @classmethod
    def values(cls) -> list[str]:
        return [c.value for c in cls]


class RecordStatus(str, Enum):
    """Medical record lifecycle status."""

    ACTIVE = "active"
    ARCHIVED = "archived"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [status.value for status in cls]


class ChecklistCategory(str, Enum):
    """Regulatory group a checklist item belongs to."""

    TECHNICAL = "technical"  # Decreto 10.278/2020 technical requirements
    SECURITY = "security"
    METADATA = "metadata"  # Decreto 10.278/2020 Anexo II
    LEGAL = "legal"  # Lei 13.787/2018
