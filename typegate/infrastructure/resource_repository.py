"""Resource Repository: SQLAlchemy implementation of RecordRepository.

Invariants:
    - save() stores exactly one record per call and commits it
    - Failures surface as DatabaseError via DatabaseSessionManager (no retry)
    - Returned record is the stored data plus its generated id
    - Without an explicit manager, the app-wide one is looked up on first save
"""

import logging

from typegate.core.type_schema import Record
from typegate.infrastructure import database as db_module
from typegate.infrastructure.database import DatabaseSessionManager
from typegate.models.resource import Resource

logger = logging.getLogger(__name__)


class SqlResourceRepository:
    """Persists records into the resources table."""

    def __init__(self, manager: DatabaseSessionManager | None = None):
        self._manager = manager

    @property
    def manager(self) -> DatabaseSessionManager:
        return self._manager or db_module.get_db_manager()

    async def save(self, type_name: str, record: Record) -> Record:
        async with self.manager.session() as db:
            resource = Resource(type_name=type_name, data=dict(record))
            db.add(resource)
            await db.commit()
            await db.refresh(resource)
        logger.debug(
            f"Inserted resource {resource.id}",
            extra={"type_name": type_name},
        )
        return {"id": str(resource.id), **resource.data}
