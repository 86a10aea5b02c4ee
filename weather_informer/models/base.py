from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Models inheriting from it are registered in `Base.metadata` and
    created by `init_db` at startup.
    """
    pass
