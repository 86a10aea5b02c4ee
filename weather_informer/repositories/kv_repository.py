from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from weather_informer.models.kv_entry import KeyValueEntry


class KeyValueRepository:
    """
    Repository for the key-value store.

    Encapsulates the SQLAlchemy queries on `KeyValueEntry` so services
    only deal with keys and string values.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the repository with an active database session.

        Args:
            db: Asynchronous SQLAlchemy session.
        """
        self.db = db

    async def get(self, key: str) -> Optional[str]:
        """
        Return the stored value for `key`, or None if absent.
        """
        stmt = select(KeyValueEntry).where(KeyValueEntry.key == key)
        res = await self.db.execute(stmt)
        entry = res.scalar_one_or_none()
        return entry.value if entry else None

    async def set(self, key: str, value: str) -> KeyValueEntry:
        """
        Insert or replace the value stored under `key` and commit.

        Args:
            key: Storage key.
            value: Serialized value.

        Returns:
            The stored `KeyValueEntry`.
        """
        stmt = select(KeyValueEntry).where(KeyValueEntry.key == key)
        res = await self.db.execute(stmt)
        entry = res.scalar_one_or_none()

        if entry:
            entry.value = value
        else:
            entry = KeyValueEntry(key=key, value=value)
            self.db.add(entry)

        await self.db.commit()
        return entry
