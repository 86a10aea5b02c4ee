from sqlalchemy.ext.asyncio import AsyncEngine

from weather_informer.core.db import engine as default_engine
from weather_informer.models import Base


async def init_db(engine: AsyncEngine = default_engine) -> None:
    """
    Initialize the database schema.

    Creates the tables defined by the ORM models if they do not exist yet.
    The only table is the small key-value store behind recent searches,
    so `create_all` at startup is enough and no migration tool is used.
    """
    async with engine.begin() as conn:
        # Run the synchronous SQLAlchemy `create_all` operation
        # inside an asynchronous context.
        await conn.run_sync(Base.metadata.create_all)
