"""Datenmodell für einen einzelnen Programmpunkt (Pydantic v2)."""

import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Category(str, Enum):
    JAPANESE_CLASS = "JapaneseClass"
    ORIENTATION = "Orientation"
    ESCORT = "Escort"
    CAMPUS_TOUR = "CampusTour"
    CULTURAL = "Cultural"
    COMPANY_VISIT = "CompanyVisit"
    BUDDY_LUNCH = "BuddyLunch"
    CEREMONY = "Ceremony"
    OTHER = "Other"


class TransportMode(str, Enum):
    NONE = "None"
    BUS = "Bus"
    WALK = "Walk"
    ON_CAMPUS = "OnCampus"


class BusTripType(str, Enum):
    ONE_WAY = "OneWay"
    ROUND_TRIP = "RoundTrip"


class YesNo(str, Enum):
    YES = "Yes"
    NO = "No"


AUTO_KIND = "Auto"


def new_event_id() -> str:
    """Neue, nie wiederverwendete Event-ID."""
    return f"item_{uuid.uuid4().hex}"


class ScheduleEvent(BaseModel):
    """Ein Programmpunkt an einem Kalendertag.

    generated=True + generated_kind="Auto" kennzeichnet automatisch erzeugte
    Einträge; sie werden bei jeder Neugenerierung komplett ersetzt.
    Manuelle Einträge (generated=False) bleiben immer erhalten.
    """

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    id: str
    program_id: str
    date: str                     # "YYYY-MM-DD"
    start_time: str               # "HH:MM"
    end_time: str                 # "HH:MM"
    category: Category = Category.OTHER
    title: str = ""
    location: str = ""
    room_needed: YesNo = YesNo.NO
    students_count: int = 0
    buddy_count: int = 0
    kvh_required: YesNo = YesNo.NO   # Begleitung durch Mitarbeitende
    kvh_count: int = 0
    transport_mode: TransportMode = TransportMode.NONE
    bus_company: str = ""
    bus_count: int = 1
    bus_trip_type: BusTripType = BusTripType.ONE_WAY
    bus_pickup: str = ""
    bus_dropoff: str = ""
    arrangements_needed: YesNo = YesNo.NO
    notes: str = ""
    # Nur für Sprachunterricht (1-basiert)
    class_index: Optional[int] = None
    period_index: Optional[int] = None
    generated: bool = False
    generated_kind: Optional[str] = None

    @property
    def is_auto(self) -> bool:
        """True für Einträge der automatischen Generierung."""
        return self.generated and self.generated_kind == AUTO_KIND

    @property
    def uses_bus(self) -> bool:
        return self.transport_mode == TransportMode.BUS

    def sort_key(self) -> tuple[str, str, str, str, str]:
        """Kanonische Anzeige-/Export-Reihenfolge: Datum, Beginn, Ende, Kategorie, Titel."""
        return (self.date, self.start_time, self.end_time, self.category, self.title)

    def duplicate_key(self) -> tuple[str, ...]:
        """Schlüssel für die Erkennung exakter Duplikate."""
        return (
            self.date, self.start_time, self.end_time,
            self.category, self.title, self.location, self.notes,
        )


def sort_events(events: list[ScheduleEvent]) -> list[ScheduleEvent]:
    """Gibt eine neue, kanonisch sortierte Liste zurück (stabil)."""
    return sorted(events, key=lambda e: e.sort_key())
