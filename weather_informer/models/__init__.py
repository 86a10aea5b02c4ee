from weather_informer.models.base import Base
from weather_informer.models.kv_entry import KeyValueEntry

__all__ = ["Base", "KeyValueEntry"]
