"""initial_schema

Revision ID: a1c0e5f2d9b4
Revises:
Create Date: 2026-10-19

Medical records, content-addressed documents, one compliance checklist per
record, and the append-only audit log.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "a1c0e5f2d9b4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_CHECKLIST_ITEMS = (
    "has_min_resolution",
    "has_correct_format",
    "is_faithful_copy",
    "is_legible",
    "has_integrity_hash",
    "has_access_control",
    "has_backup",
    "has_audit_log",
    "has_responsible_name",
    "has_digitization_date",
    "has_original_id",
    "has_file_hash",
    "has_retention_period",
    "has_historical_review",
    "has_patient_access_right",
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create medical_record, document, compliance_checklist and audit_log."""
    op.create_table(
        "medical_record",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("patient_id", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("last_activity_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("retention_expiry_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "has_historical_value",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column("status", sa.String(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_medical_record_patient_id", "medical_record", ["patient_id"])
    op.create_index(
        "ix_medical_record_retention_expiry_date",
        "medical_record",
        ["retention_expiry_date"],
    )
    op.create_index(
        "ix_medical_record_patient_status", "medical_record", ["patient_id", "status"]
    )
    op.create_index("ix_medical_record_created_at", "medical_record", ["created_at"])

    op.create_table(
        "document",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("medical_record_id", sa.String(), nullable=False),
        sa.Column("original_filename", sa.String(length=255), nullable=False),
        sa.Column("stored_filename", sa.String(), nullable=False),
        sa.Column("mime_type", sa.String(), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("storage_ref", sa.String(), nullable=False),
        sa.Column("digest", sa.String(length=64), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("document_date", sa.Date(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("digitization_responsible", sa.String(), nullable=True),
        sa.Column("original_identifier", sa.String(), nullable=True),
        sa.Column("resolution_dpi", sa.Integer(), nullable=True),
        sa.Column("uploaded_by", sa.String(), nullable=True),
        sa.Column("ocr_text", sa.Text(), nullable=True),
        sa.Column(
            "ocr_processed",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["medical_record_id"], ["medical_record.id"], ondelete="CASCADE"
        ),
    )
    op.create_index("ux_document_digest", "document", ["digest"], unique=True)
    op.create_index("ix_document_medical_record_id", "document", ["medical_record_id"])
    op.create_index(
        "ix_document_record_created", "document", ["medical_record_id", "created_at"]
    )
    op.create_index("ix_document_uploaded_by", "document", ["uploaded_by"])
    op.create_index("ix_document_created_at", "document", ["created_at"])

    op.create_table(
        "compliance_checklist",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("medical_record_id", sa.String(), nullable=False),
        *[
            sa.Column(
                name, sa.Boolean(), server_default=sa.text("false"), nullable=False
            )
            for name in _CHECKLIST_ITEMS
        ],
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("completed_by", sa.String(), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["medical_record_id"], ["medical_record.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint("medical_record_id"),
    )
    op.create_index(
        "ix_compliance_checklist_created_at", "compliance_checklist", ["created_at"]
    )

    op.create_table(
        "audit_log",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("entity_type", sa.String(), nullable=False),
        sa.Column("entity_id", sa.String(), nullable=True),
        sa.Column(
            "details",
            sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), "postgresql"),
            nullable=True,
        ),
        sa.Column("ip_address", sa.String(), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("request_id", sa.String(), nullable=True),
        sa.Column(
            "timestamp",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_audit_log_user_id", "audit_log", ["user_id"])
    op.create_index("ix_audit_log_timestamp", "audit_log", ["timestamp"])
    op.create_index("ix_audit_log_entity", "audit_log", ["entity_type", "entity_id"])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_index("ix_audit_log_entity", table_name="audit_log")
    op.drop_index("ix_audit_log_timestamp", table_name="audit_log")
    op.drop_index("ix_audit_log_user_id", table_name="audit_log")
    op.drop_table("audit_log")
    op.drop_index("ix_compliance_checklist_created_at", table_name="compliance_checklist")
    op.drop_table("compliance_checklist")
    op.drop_index("ix_document_created_at", table_name="document")
    op.drop_index("ix_document_uploaded_by", table_name="document")
    op.drop_index("ix_document_record_created", table_name="document")
    op.drop_index("ix_document_medical_record_id", table_name="document")
    op.drop_index("ux_document_digest", table_name="document")
    op.drop_table("document")
    op.drop_index("ix_medical_record_created_at", table_name="medical_record")
    op.drop_index("ix_medical_record_patient_status", table_name="medical_record")
    op.drop_index(
        "ix_medical_record_retention_expiry_date", table_name="medical_record"
    )
    op.drop_index("ix_medical_record_patient_id", table_name="medical_record")
    op.drop_table("medical_record")
