"""Gemeinsame Hilfsfunktionen für CSV-, ICS-, HTML- und Excel-Export."""

import re
import unicodedata

from config.schema import ProgramConfig
from export.vocabulary import ExportLang, enum_value
from models.event import Category, ScheduleEvent, sort_events

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "header":   "4472C4",
    "lesson":   "DDEBF7",
    "cultural": "FFF2CC",
    "ceremony": "E2EFDA",
    "manual":   "F2F2F2",
}


# ─── Auswahl und Reihenfolge ──────────────────────────────────────────────────

def program_events_sorted(events: list[ScheduleEvent], program_id: str) -> list[ScheduleEvent]:
    """Einträge eines Programms in kanonischer Export-Reihenfolge."""
    return sort_events([e for e in events if e.program_id == program_id])


def group_by_date(events: list[ScheduleEvent]) -> dict[str, list[ScheduleEvent]]:
    """Datum → Einträge; die Reihenfolge innerhalb eines Tages bleibt erhalten."""
    out: dict[str, list[ScheduleEvent]] = {}
    for e in events:
        out.setdefault(e.date, []).append(e)
    return out


# ─── Dateinamen ───────────────────────────────────────────────────────────────

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|]')


def safe_filename(name: str) -> str:
    """Ersetzt in Dateinamen unzulässige Zeichen durch "_"."""
    return _UNSAFE_CHARS.sub("_", name or "")


def default_export_filename(config: ProgramConfig, fmt: str, lang=ExportLang.JA) -> str:
    """Standard-Dateiname je Format, z.B. "Sommer_2024_schedule_JA_JST.ics"."""
    base = safe_filename(config.name)
    suffix = ExportLang(lang).value.upper()
    names = {
        "csv": f"{base}_schedule.csv",
        "ics": f"{base}_schedule_{suffix}_JST.ics",
        "html": f"{base}_calendar_{suffix}.html",
        "xlsx": f"{base}_schedule.xlsx",
    }
    return names[fmt]


# ─── Ortsangaben ──────────────────────────────────────────────────────────────

_MEETING_POINT = {"Escort", "CampusTour", "Cultural", "CompanyVisit"}
_CLASSROOM = {"Orientation", "JapaneseClass", "Ceremony"}

_LOCATION_PREFIX = {
    ExportLang.JA: {"meet": "集合", "room": "教室", "place": "場所"},
    ExportLang.EN: {"meet": "Meet", "room": "Room", "place": "Place"},
}


def location_label(category, location: str, lang=ExportLang.JA) -> str:
    """Ort mit Präfix je nach Art: Treffpunkt, Raum oder allgemeiner Ort."""
    loc = (location or "").strip()
    if not loc:
        return ""
    cat = enum_value(category)
    if cat in _MEETING_POINT:
        kind = "meet"
    elif cat in _CLASSROOM:
        kind = "room"
    else:
        kind = "place"
    return f"{_LOCATION_PREFIX[ExportLang(lang)][kind]}: {loc}"


# ─── Sprachunterricht ─────────────────────────────────────────────────────────

_CLASS_NO = re.compile(r"クラス\s*([0-9０-９]+)")
_TEACHER_ROOM = re.compile(r"講師控室\s*:\s*(.+)$")


def is_lesson_event(event: ScheduleEvent) -> bool:
    return event.category == Category.JAPANESE_CLASS or "日本語講座" in event.title


def class_number(event: ScheduleEvent) -> int | None:
    """Klassennummer: class_index, sonst "クラスN" im Titel (auch Vollbreiten-Ziffern)."""
    if event.class_index is not None:
        return event.class_index
    m = _CLASS_NO.search(event.title)
    if not m:
        return None
    n = int(unicodedata.normalize("NFKC", m.group(1)))
    return n if n > 0 else None


def distinct_teacher_rooms(events: list[ScheduleEvent], default_room: str = "") -> list[str]:
    """Verschiedene Lehrerräume aus den Notizen, danach der Programm-Default."""
    seen: list[str] = []
    for e in events:
        m = _TEACHER_ROOM.search(e.notes or "")
        value = m.group(1).strip() if m else ""
        if value and value not in seen:
            seen.append(value)
    default_room = (default_room or "").strip()
    if default_room and default_room not in seen:
        seen.append(default_room)
    return seen
