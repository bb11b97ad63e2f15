"""Tests for domain exceptions and their JSON error bodies."""

from recordvault.domain.exceptions import (
    AuditWriteFailure,
    DuplicateDocumentException,
    MissingBlobException,
    RecordVaultException,
    ResourceNotFoundException,
    StorageIOException,
    ValidationException,
)
from recordvault.infrastructure.exceptions import StorageNotFoundError


class TestToDict:
    def test_validation(self) -> None:
        exc = ValidationException("bad", field="mime_type")
        assert exc.to_dict() == {
            "error": "VALIDATION_ERROR",
            "message": "bad",
            "details": {"field": "mime_type"},
        }

    def test_not_found(self) -> None:
        exc = ResourceNotFoundException("document", "d1")
        assert exc.error_code == "RESOURCE_NOT_FOUND"
        assert exc.details == {"resource_type": "document", "resource_id": "d1"}

    def test_duplicate_with_existing_id(self) -> None:
        exc = DuplicateDocumentException("ab" * 32, "doc-1")
        assert exc.error_code == "DUPLICATE_DOCUMENT"
        assert exc.details == {"digest": "ab" * 32, "existing_document_id": "doc-1"}

    def test_duplicate_without_existing_id(self) -> None:
        assert DuplicateDocumentException("ab" * 32).details == {"digest": "ab" * 32}

    def test_missing_blob(self) -> None:
        exc = MissingBlobException("d1", "records/r1/x.pdf")
        assert exc.error_code == "MISSING_BLOB"
        assert exc.details["storage_ref"] == "records/r1/x.pdf"

    def test_default_error_code_is_class_name(self) -> None:
        assert RecordVaultException("x").error_code == "RecordVaultException"


class TestHierarchy:
    def test_storage_errors_are_storage_io(self) -> None:
        assert isinstance(StorageNotFoundError("records/a"), StorageIOException)

    def test_audit_failure_keeps_cause(self) -> None:
        cause = RuntimeError("db down")
        failure = AuditWriteFailure("upload", "document", cause)
        assert failure.__cause__ is cause
        assert failure.error_code == "AUDIT_WRITE_FAILURE"
        assert "db down" in failure.message
