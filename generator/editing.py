"""Bearbeitungs-Operationen für manuelle Programmpunkte und Tagesabweichungen.

Alle Funktionen sind rein: sie liefern neue Listen bzw. Configs zurück und
verändern ihre Eingaben nicht.
"""

import logging
from typing import Any, Callable, Optional

from config.schema import EventMaster, LessonDayOverride, ProgramConfig, clamp
from generator.auto_events import generate
from generator.reconcile import normalize, remove_generated_auto
from models.civil_time import add_time, normalize_time
from models.event import (
    BusTripType,
    Category,
    ScheduleEvent,
    TransportMode,
    YesNo,
    new_event_id,
)
from models.schedule_data import ScheduleData

logger = logging.getLogger(__name__)

FALLBACK_TITLE = "イベント"

# Grenzen für manuelle Eingaben
MAX_KVH_COUNT = 50
MAX_BUS_COUNT = 20
LESSON_MINUTES_RANGE = (30, 120)
BREAK_MINUTES_RANGE = (0, 60)
PERIODS_RANGE = (1, 3)
CLASS_COUNT_RANGE = (1, 20)


def _yes_no(flag: bool) -> YesNo:
    return YesNo.YES if flag else YesNo.NO


# ─── Manuelle Programmpunkte ──────────────────────────────────────────────────

def new_event_base(config: ProgramConfig, date: str, new_id: Callable[[], str] = new_event_id) -> ScheduleEvent:
    """Leerer manueller Eintrag: 09:00–10:00, Teilnehmerzahl des Programms."""
    return ScheduleEvent(
        id=new_id(),
        program_id=config.id,
        date=date,
        start_time="09:00",
        end_time="10:00",
        students_count=config.students_count,
    )


def make_manual_event(
    config: ProgramConfig,
    date: str,
    *,
    title: str = "",
    category: Category = Category.OTHER,
    start_time: str = "09:00",
    duration_minutes: int = 60,
    location: str = "",
    room_needed: bool = False,
    students_count: Optional[int] = None,
    buddy_count: int = 0,
    kvh_required: bool = False,
    kvh_count: int = 1,
    transport_mode: TransportMode = TransportMode.NONE,
    bus_company: str = "",
    bus_count: int = 1,
    bus_trip_type: BusTripType = BusTripType.ONE_WAY,
    bus_pickup: str = "",
    bus_dropoff: str = "",
    arrangements_needed: bool = False,
    notes: str = "",
    new_id: Callable[[], str] = new_event_id,
) -> ScheduleEvent:
    """Baut einen manuellen Programmpunkt aus Formularwerten.

    - Begleitpersonen: 1–50 wenn benötigt, sonst 0
    - Busfelder nur bei Transport "Bus" (Anzahl 1–20), sonst geleert
    - Titel leer → "イベント"
    """
    start = normalize_time(start_time)
    uses_bus = TransportMode(transport_mode) == TransportMode.BUS
    base = new_event_base(config, date, new_id)
    return base.model_copy(update={
        "start_time": start,
        "end_time": add_time(start, max(0, duration_minutes)),
        "category": Category(category).value,
        "title": title.strip() or FALLBACK_TITLE,
        "location": location.strip(),
        "room_needed": _yes_no(room_needed).value,
        "students_count": base.students_count if students_count is None else max(0, students_count),
        "buddy_count": max(0, buddy_count),
        "kvh_required": _yes_no(kvh_required).value,
        "kvh_count": clamp(kvh_count, 1, MAX_KVH_COUNT) if kvh_required else 0,
        "transport_mode": TransportMode(transport_mode).value,
        "bus_company": bus_company.strip() if uses_bus else "",
        "bus_count": clamp(bus_count, 1, MAX_BUS_COUNT) if uses_bus else 0,
        "bus_trip_type": BusTripType(bus_trip_type).value if uses_bus else BusTripType.ONE_WAY.value,
        "bus_pickup": bus_pickup.strip() if uses_bus else "",
        "bus_dropoff": bus_dropoff.strip() if uses_bus else "",
        "arrangements_needed": _yes_no(arrangements_needed).value,
        "notes": notes.strip(),
    })


def event_from_master(
    config: ProgramConfig,
    date: str,
    master: EventMaster,
    new_id: Callable[[], str] = new_event_id,
    **overrides,
) -> ScheduleEvent:
    """Manueller Eintrag aus einer Vorlage; Formularwerte in overrides haben Vorrang."""
    values: dict[str, Any] = dict(
        title=master.title,
        category=Category(master.category),
        start_time=master.default_start_time,
        duration_minutes=master.default_duration_minutes,
        kvh_required=master.default_kvh_required,
        kvh_count=master.default_kvh_count,
        transport_mode=TransportMode(master.default_transport_mode),
        arrangements_needed=master.default_arrangements_needed,
        notes=master.default_notes,
    )
    values.update(overrides)
    return make_manual_event(config, date, new_id=new_id, **values)


def add_event(events: list[ScheduleEvent], event: ScheduleEvent) -> list[ScheduleEvent]:
    return [*events, event]


def update_event(
    events: list[ScheduleEvent],
    event_id: str,
    patch: dict[str, Any],
    program_id: str,
) -> list[ScheduleEvent]:
    """Ändert Felder eines Eintrags (ID und Programm bleiben fest) und bereinigt danach."""
    patch = {k: v for k, v in patch.items() if k not in ("id", "program_id")}
    out = []
    for e in events:
        if e.id == event_id:
            # über model_validate, damit Enum-Werte und Typen geprüft werden
            e = ScheduleEvent.model_validate({**e.model_dump(), **patch})
        out.append(e)
    return normalize(out, program_id)


def delete_event(events: list[ScheduleEvent], event_id: str, program_id: str) -> list[ScheduleEvent]:
    return normalize([e for e in events if e.id != event_id], program_id)


# ─── Tagesabweichungen ────────────────────────────────────────────────────────

def _clamp_optional(value: Optional[int], bounds: tuple[int, int]) -> Optional[int]:
    return None if value is None else clamp(value, *bounds)


def clean_override(override: LessonDayOverride) -> LessonDayOverride:
    """Klemmt alle Zahlen auf die Eingabegrenzen, Startzeit kanonisch, Räume getrimmt."""
    return override.model_copy(update={
        "start_time": normalize_time(override.start_time) if override.start_time else None,
        "lesson_minutes": _clamp_optional(override.lesson_minutes, LESSON_MINUTES_RANGE),
        "break_minutes": _clamp_optional(override.break_minutes, BREAK_MINUTES_RANGE),
        "periods": _clamp_optional(override.periods, PERIODS_RANGE),
        "class_count": _clamp_optional(override.class_count, CLASS_COUNT_RANGE),
        "classrooms": [s.strip() for s in override.classrooms],
        "teacher_rooms": [s.strip() for s in override.teacher_rooms],
    })


def set_override(config: ProgramConfig, date: str, override: LessonDayOverride) -> ProgramConfig:
    overrides = {**config.lesson_overrides, date: clean_override(override)}
    return config.model_copy(update={"lesson_overrides": overrides}).touch()


def delete_override(config: ProgramConfig, date: str) -> ProgramConfig:
    overrides = {k: v for k, v in config.lesson_overrides.items() if k != date}
    return config.model_copy(update={"lesson_overrides": overrides}).touch()


def enable_first_day_lessons(
    config: ProgramConfig,
    events: list[ScheduleEvent],
    start_time: Optional[str] = None,
    new_id: Callable[[], str] = new_event_id,
) -> tuple[ProgramConfig, list[ScheduleEvent]]:
    """Unterricht am Anreisetag einschalten und sofort neu generieren.

    Die Abweichung übernimmt die Programm-Defaults; nur die Startzeit kann
    abweichen. Ergebnis: (neue Config, neue Eintragsliste).
    """
    dates = config.dates
    if not dates:
        return config, events
    lessons = config.lessons
    # Werte 1:1 aus den Defaults, ohne die Grenzen der manuellen Eingabe
    override = LessonDayOverride(
        enabled=True,
        start_time=normalize_time(start_time or lessons.start_time),
        lesson_minutes=lessons.lesson_minutes,
        break_minutes=lessons.break_minutes,
        periods=lessons.periods,
        class_count=lessons.class_count,
        classrooms=list(lessons.class_rooms),
        teacher_rooms=[lessons.default_teacher_room] * lessons.class_count,
    )
    overrides = {**config.lesson_overrides, dates[0]: override}
    updated = config.model_copy(update={"lesson_overrides": overrides}).touch()
    # kein normalize(): nur die Auto-Einträge werden ausgetauscht
    regenerated = remove_generated_auto(events, config.id) + generate(updated, new_id)
    logger.info(f"Programm {config.id}: Unterricht am Anreisetag {dates[0]} aktiviert")
    return updated, regenerated


# ─── Programme ────────────────────────────────────────────────────────────────

def delete_program(data: ScheduleData, program_id: str) -> ScheduleData:
    """Entfernt das Programm und alle seine Programmpunkte."""
    programs = [p for p in data.programs if p.id != program_id]
    events = [e for e in data.events if e.program_id != program_id]
    selected = data.selected_program_id
    if selected == program_id:
        selected = programs[0].id if programs else None
    return data.model_copy(update={
        "programs": programs,
        "events": events,
        "selected_program_id": selected,
    })
