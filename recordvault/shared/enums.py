"""Shared enumerations for the recordvault application.

Cross-cutting enums used by application and infrastructure (audit).
Domain-specific enums (e.g. DocumentCategory) live in
recordvault.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class AuditAction(_ValuesMixin, str, Enum):
    """Audit action types recorded by audited entry points."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    LOGIN = "login"
    LOGOUT = "logout"
    DOWNLOAD = "download"
    UPLOAD = "upload"


class AuditEntityType(_ValuesMixin, str, Enum):
    """Kinds of entity an audit entry can refer to."""

    USER = "user"
    PATIENT = "patient"
    MEDICAL_RECORD = "medical_record"
    DOCUMENT = "document"
    CHECKLIST = "checklist"
