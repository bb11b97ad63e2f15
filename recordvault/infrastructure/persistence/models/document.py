"""Document ORM model. Content-addressed file metadata."""

from datetime import date

from sqlalchemy import (
    BigInteger,
    Boolean,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from recordvault.domain.enums import DocumentCategory
from recordvault.infrastructure.persistence.database import Base
from recordvault.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
)


class Document(CuidMixin, TimestampMixin, Base):
    """Stored document. Table: document. digest is unique across all records."""

    __tablename__ = "document"

    medical_record_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("medical_record.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    original_filename: Mapped[str] = mapped_column(String(255), nullable=False)
    stored_filename: Mapped[str] = mapped_column(String, nullable=False)
    mime_type: Mapped[str] = mapped_column(String, nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    storage_ref: Mapped[str] = mapped_column(String, nullable=False)
    digest: Mapped[str] = mapped_column(String(64), nullable=False)
    category: Mapped[str] = mapped_column(
        String, nullable=False, default=DocumentCategory.OTHER.value
    )
    document_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    digitization_responsible: Mapped[str | None] = mapped_column(String, nullable=True)
    original_identifier: Mapped[str | None] = mapped_column(String, nullable=True)
    resolution_dpi: Mapped[int | None] = mapped_column(Integer, nullable=True)
    uploaded_by: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    ocr_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    ocr_processed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )

    __table_args__ = (
        Index("ux_document_digest", "digest", unique=True),
        Index("ix_document_record_created", "medical_record_id", "created_at"),
    )
