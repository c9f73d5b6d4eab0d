"""Automatische Generierung des Basis-Programms aus einer ProgramConfig.

Reihenfolge der erzeugten Einträge:
  1. Anreisetag: Begleitung → Orientierung (1 h) → Campus-Tour mit Buddies
  2. Pro Tag im Zeitraum: Sprachunterricht (Stunde-für-Stunde, darin Klasse-für-Klasse)
  3. Letzter Tag: Abschlussfeier

Alle Einträge sind generated=True / generated_kind="Auto" und bekommen neue IDs.
Es wird kein gespeicherter Zustand gelesen oder verändert.
"""

import logging
from typing import Callable

from config.schema import ProgramConfig
from generator.resolution import lessons_apply, resolve_lesson_day
from models.civil_time import add_time, normalize_time
from models.event import (
    AUTO_KIND,
    Category,
    ScheduleEvent,
    TransportMode,
    YesNo,
    new_event_id,
)

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]

LESSON_TITLE = "日本語講座"
TEACHER_ROOM_PREFIX = "講師控室: "


def _auto_event(config: ProgramConfig, day: str, new_id: IdFactory, **fields) -> ScheduleEvent:
    """Gemeinsame Felder aller automatisch erzeugten Einträge."""
    base = dict(
        id=new_id(),
        program_id=config.id,
        date=day,
        students_count=config.students_count,
        buddy_count=0,
        kvh_required=YesNo.NO,
        kvh_count=0,
        room_needed=YesNo.YES,
        generated=True,
        generated_kind=AUTO_KIND,
    )
    base.update(fields)
    return ScheduleEvent(**base)


# ─── Anreisetag ───────────────────────────────────────────────────────────────

def arrival_events(config: ProgramConfig, day: str, new_id: IdFactory = new_event_id) -> list[ScheduleEvent]:
    """Feste Abfolge am ersten Tag, unabhängig von Wochentag und Unterricht."""
    return [
        _auto_event(
            config, day, new_id,
            start_time="09:00", end_time="10:00",
            category=Category.ESCORT,
            title="ホテル/寮→大学 引率",
            location="（集合場所を入力）",
            transport_mode=TransportMode.NONE,
            arrangements_needed=YesNo.NO,
        ),
        _auto_event(
            config, day, new_id,
            start_time="10:30", end_time="11:30",
            category=Category.ORIENTATION,
            title="オリエンテーション（1時間）",
            location="（教室を入力）",
            transport_mode=TransportMode.ON_CAMPUS,
            arrangements_needed=YesNo.YES,
        ),
        _auto_event(
            config, day, new_id,
            start_time="11:30", end_time="12:20",
            category=Category.CAMPUS_TOUR,
            title="バディによるキャンパスツアー",
            location="（集合場所を入力）",
            buddy_count=config.default_buddy_count,
            transport_mode=TransportMode.ON_CAMPUS,
            arrangements_needed=YesNo.NO,
        ),
    ]


# ─── Sprachunterricht ─────────────────────────────────────────────────────────

def lesson_events(config: ProgramConfig, day: str, new_id: IdFactory = new_event_id) -> list[ScheduleEvent]:
    """Unterricht eines Tages: ein Eintrag pro (Stunde, Klasse), Stunde für Stunde.

    Die nächste Stunde beginnt am Ende der vorigen plus Pause.
    """
    r = resolve_lesson_day(config, day)
    out: list[ScheduleEvent] = []
    cur_start = r.start_time
    for period in range(1, r.periods + 1):
        cur_end = add_time(cur_start, r.lesson_minutes)
        for section in range(1, r.class_count + 1):
            teacher_room = r.teacher_rooms[section - 1]
            out.append(_auto_event(
                config, day, new_id,
                start_time=cur_start, end_time=cur_end,
                category=Category.JAPANESE_CLASS,
                title=f"{LESSON_TITLE}（{period}コマ目） {r.class_names[section - 1]}",
                location=r.classrooms[section - 1],
                transport_mode=TransportMode.ON_CAMPUS,
                arrangements_needed=YesNo.YES,
                notes=f"{TEACHER_ROOM_PREFIX}{teacher_room}" if teacher_room else "",
                class_index=section,
                period_index=period,
            ))
        cur_start = add_time(cur_end, r.break_minutes)
    return out


# ─── Abschlusstag ─────────────────────────────────────────────────────────────

def ceremony_event(config: ProgramConfig, day: str, new_id: IdFactory = new_event_id) -> ScheduleEvent:
    start = normalize_time(config.ceremony.start_time)
    return _auto_event(
        config, day, new_id,
        start_time=start,
        end_time=add_time(start, config.ceremony.duration_minutes),
        category=Category.CEREMONY,
        title="修了式",
        location=config.ceremony.location or "",
        transport_mode=TransportMode.ON_CAMPUS,
        arrangements_needed=YesNo.YES,
    )


def generate(config: ProgramConfig, new_id: IdFactory = new_event_id) -> list[ScheduleEvent]:
    """Erzeugt alle automatischen Programmpunkte für den gesamten Zeitraum.

    Leerer oder umgekehrter Zeitraum → leere Liste.
    """
    dates = config.dates
    if not dates:
        logger.info(f"Programm {config.id}: kein gültiger Zeitraum – nichts zu generieren")
        return []
    first_day, last_day = dates[0], dates[-1]

    out = arrival_events(config, first_day, new_id)
    lesson_days = 0
    for day in dates:
        if not lessons_apply(config, day, first_day):
            continue
        out.extend(lesson_events(config, day, new_id))
        lesson_days += 1
    out.append(ceremony_event(config, last_day, new_id))

    logger.info(
        f"Programm {config.id}: {len(out)} Auto-Einträge "
        f"({len(dates)} Tage, {lesson_days} Unterrichtstage)"
    )
    return out
