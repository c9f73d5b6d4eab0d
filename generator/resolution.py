"""Auflösung der effektiven Unterrichtswerte für einen Tag.

Jedes Feld hat eine feste Rückfallkette:

  Uhrzeit     Tagesabweichung (falls parsbar) → Programm-Default
  Dauer       Tagesabweichung → Programm-Default, geklemmt auf 0..1440 min
  Anzahl      Tagesabweichung → Programm-Default, geklemmt auf [lo, hi]
  pro Klasse  Eintrag der Tagesabweichung → Eintrag im Programm → Default-Bezeichnung

Leere oder fehlende Einträge fallen einzeln zurück, nicht die ganze Liste.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from config.schema import (
    LessonDayOverride,
    ProgramConfig,
    clamp,
    default_class_name,
    default_class_room,
)
from models.civil_time import MINUTES_PER_DAY, is_weekday, normalize_time, parse_time

MAX_PERIODS = 3
MAX_SECTIONS = 20


@dataclass(frozen=True)
class ResolvedLessonDay:
    """Effektive Unterrichtswerte eines Tages nach Auflösung aller Rückfälle."""

    start_time: str
    lesson_minutes: int
    break_minutes: int
    periods: int
    class_count: int
    class_names: tuple[str, ...]
    classrooms: tuple[str, ...]
    teacher_rooms: tuple[str, ...]


# ─── Rückfallketten pro Feld-Kategorie ────────────────────────────────────────

def resolve_time(override_value: Optional[str], default_value: str) -> str:
    """Uhrzeit: Abweichung nur, wenn sie parsbar ist; sonst der Default (kanonisch)."""
    if override_value is not None and parse_time(override_value) is not None:
        return normalize_time(override_value)
    return normalize_time(default_value)


def resolve_duration(override_value: Optional[int], default_value: int) -> int:
    value = default_value if override_value is None else override_value
    return clamp(value, 0, MINUTES_PER_DAY)


def resolve_count(override_value: Optional[int], default_value: int, lo: int, hi: int) -> int:
    value = default_value if override_value is None else override_value
    return clamp(value, lo, hi)


def resolve_section_labels(
    override_values: Sequence[str],
    program_values: Sequence[str],
    count: int,
    fallback: Callable[[int], str],
) -> tuple[str, ...]:
    """Eine Bezeichnung pro Klasse (1..count), Eintrag für Eintrag aufgelöst."""
    out = []
    for i in range(1, count + 1):
        candidates = (
            override_values[i - 1] if i - 1 < len(override_values) else "",
            program_values[i - 1] if i - 1 < len(program_values) else "",
        )
        chosen = next((c.strip() for c in candidates if c and c.strip()), "")
        out.append(chosen or fallback(i))
    return tuple(out)


# ─── Tagesentscheidung ────────────────────────────────────────────────────────

def lessons_apply(config: ProgramConfig, day: str, first_day: str) -> bool:
    """Findet an diesem Tag Sprachunterricht statt?

    Eine Tagesabweichung entscheidet allein über ihr enabled-Flag. Ohne
    Abweichung: Default aktiv UND Werktag UND nicht der Anreisetag.
    """
    override = config.lesson_overrides.get(day)
    if override is not None:
        return override.enabled
    return config.lessons.enabled and is_weekday(day) and day != first_day


def resolve_lesson_day(config: ProgramConfig, day: str) -> ResolvedLessonDay:
    """Effektive Werte für den Unterricht an einem Tag (mit oder ohne Abweichung)."""
    ov = config.lesson_overrides.get(day) or LessonDayOverride()
    defaults = config.lessons

    class_count = resolve_count(ov.class_count, defaults.class_count, 1, MAX_SECTIONS)
    return ResolvedLessonDay(
        start_time=resolve_time(ov.start_time, defaults.start_time),
        lesson_minutes=resolve_duration(ov.lesson_minutes, defaults.lesson_minutes),
        break_minutes=resolve_duration(ov.break_minutes, defaults.break_minutes),
        periods=resolve_count(ov.periods, defaults.periods, 1, MAX_PERIODS),
        class_count=class_count,
        class_names=resolve_section_labels(
            [], defaults.class_names, class_count, default_class_name),
        classrooms=resolve_section_labels(
            ov.classrooms, defaults.class_rooms, class_count, default_class_room),
        teacher_rooms=resolve_section_labels(
            ov.teacher_rooms, [], class_count, lambda _: defaults.default_teacher_room),
    )
