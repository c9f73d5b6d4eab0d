from models.event import (
    BusTripType,
    Category,
    ScheduleEvent,
    TransportMode,
    YesNo,
    new_event_id,
    sort_events,
)

__all__ = [
    "BusTripType",
    "Category",
    "ScheduleEvent",
    "TransportMode",
    "YesNo",
    "new_event_id",
    "sort_events",
]
