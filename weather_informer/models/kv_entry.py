from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from weather_informer.models.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class KeyValueEntry(Base):
    """
    Generic key-value record.

    Holds small serialized blobs (JSON text) addressed by a string key,
    e.g. the recent searches list. Values are opaque to the database;
    callers own parsing and validation.
    """

    __tablename__ = "kv_entries"

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    key: Mapped[str] = mapped_column(
        String(128),
        primary_key=True,
        comment="Storage key",
    )

    value: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Serialized value (usually JSON)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        comment="Last write time (UTC)",
    )
