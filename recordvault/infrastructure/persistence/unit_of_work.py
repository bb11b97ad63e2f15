"""SQLAlchemy unit of work: one session, one transaction, all repositories."""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from recordvault.infrastructure.persistence.repositories.audit_log_repo import (
    AuditLogRepository,
)
from recordvault.infrastructure.persistence.repositories.checklist_repo import (
    ChecklistRepository,
)
from recordvault.infrastructure.persistence.repositories.document_repo import (
    DocumentRepository,
)
from recordvault.infrastructure.persistence.repositories.medical_record_repo import (
    MedicalRecordRepository,
)

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork:
    """Implements IUnitOfWork.

    Entering opens a session; leaving commits when the block succeeded and
    rolls back when it raised. The session is always closed.
    """

    documents: DocumentRepository
    records: MedicalRecordRepository
    checklists: ChecklistRepository
    audit_log: AuditLogRepository

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of work is not active")
        return self._session

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self.documents = DocumentRepository(self._session)
        self.records = MedicalRecordRepository(self._session)
        self.checklists = ChecklistRepository(self._session)
        self.audit_log = AuditLogRepository(self._session)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            await self.session.close()
            self._session = None

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        try:
            await self.session.rollback()
        except Exception:
            logger.exception("Rollback failed")
            raise


def make_uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SqlAlchemyUnitOfWork]:
    """Return a UnitOfWorkFactory bound to the given session factory."""

    def factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory)

    return factory
