"""Domain exceptions for the recordvault application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class RecordVaultException(Exception):
    """Base exception for all recordvault application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the HTTP exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(RecordVaultException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(RecordVaultException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'document', 'medical_record').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateDocumentException(RecordVaultException):
    """Raised when uploaded content already exists (same digest, any record)."""

    def __init__(self, digest: str, existing_document_id: str | None = None) -> None:
        """Initialize with the colliding digest.

        Args:
            digest: SHA-256 hex digest of the rejected content.
            existing_document_id: Id of the document already holding the digest,
                when known (None when only the unique index reported it).
        """
        details: dict[str, Any] = {"digest": digest}
        if existing_document_id:
            details["existing_document_id"] = existing_document_id
        super().__init__(
            "A document with identical content already exists",
            "DUPLICATE_DOCUMENT",
            details,
        )


class MissingBlobException(RecordVaultException):
    """Raised when a document row exists but its stored file does not."""

    def __init__(self, document_id: str, storage_ref: str) -> None:
        super().__init__(
            f"Stored file for document {document_id} is missing",
            "MISSING_BLOB",
            {"document_id": document_id, "storage_ref": storage_ref},
        )


class StorageIOException(RecordVaultException):
    """Raised when the blob store cannot be read or written.

    Infrastructure storage errors extend this so the application layer can
    catch IO failures without importing infrastructure.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "STORAGE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)


class AuditWriteFailure(RecordVaultException):
    """Wraps any failure while persisting an audit entry. Logged, never raised to callers."""

    def __init__(self, action: str, entity_type: str, cause: BaseException) -> None:
        super().__init__(
            f"Failed to write audit entry {action}/{entity_type}: {cause}",
            "AUDIT_WRITE_FAILURE",
            {"action": action, "entity_type": entity_type},
        )
        self.__cause__ = cause
