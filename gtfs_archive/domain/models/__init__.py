from .agency import Agency
from .base import GtfsRecord
from .calendar import CalendarDate, CalendarEntry, ExceptionType
from .feed_info import FeedInfo
from .frequency import Frequency
from .geo import GeoPoint
from .route import Route
from .shape import ShapePoint
from .stop import LocationType, Stop
from .stop_time import StopTime
from .transfer import Transfer
from .trip import Trip

__all__ = [
    "Agency",
    "CalendarDate",
    "CalendarEntry",
    "ExceptionType",
    "FeedInfo",
    "Frequency",
    "GeoPoint",
    "GtfsRecord",
    "LocationType",
    "Route",
    "ShapePoint",
    "Stop",
    "StopTime",
    "Transfer",
    "Trip",
]
