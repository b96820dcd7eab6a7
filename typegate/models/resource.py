"""Resource ORM: one persisted record of any registered resource type.

Invariants:
    - data holds the projected record only (never unvalidated input)
    - type_name is the catalog name the record was validated against
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from typegate.db.base import Base


class Resource(Base):
    """Stored record, keyed by UUID."""
    __tablename__ = "resources"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    type_name: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True,
    )
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
