from .schedule_provider import IScheduleProvider
from .stop_search_provider import IStopSearchProvider

__all__ = [
    "IScheduleProvider",
    "IStopSearchProvider",
]
