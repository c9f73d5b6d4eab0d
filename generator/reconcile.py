"""Abgleich von Auto-Einträgen mit gespeicherten Einträgen und Duplikat-Bereinigung.

Bereinigung (nur innerhalb einer Programm-ID), zwei Stufen in fester Reihenfolge:
  1. Exakte Duplikate: gleiches (Datum, Beginn, Ende, Kategorie, Titel, Ort, Notizen)
     → das erste Vorkommen bleibt.
  2. Höchstens ein Kulturprogramm pro Tag: frühester parsbarer Beginn gewinnt,
     bei Gleichstand die lexikographisch kleinere ID.

Beide Stufen sind idempotent.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Callable

from config.schema import ProgramConfig
from generator.auto_events import generate
from models.civil_time import parse_time
from models.event import Category, ScheduleEvent, new_event_id

logger = logging.getLogger(__name__)

REASON_EXACT = "exact_duplicate"
REASON_CULTURAL = "cultural_same_day"

# Sortierwert für nicht parsbare Uhrzeiten (hinter jeder gültigen Uhrzeit)
_UNPARSABLE_START = 99999


@dataclass
class DroppedEvent:
    """Ein verworfener Eintrag und der Eintrag, der stattdessen bleibt."""

    event_id: str
    date: str
    title: str
    reason: str
    kept_id: str


@dataclass
class DedupReport:
    """Ergebnis einer Duplikat-Prüfung für ein Programm."""

    program_id: str
    dropped: list[DroppedEvent] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.dropped

    @property
    def dropped_ids(self) -> set[str]:
        return {d.event_id for d in self.dropped}

    def to_dict(self) -> dict:
        return {
            "program_id": self.program_id,
            "dropped": [
                {
                    "event_id": d.event_id,
                    "date": d.date,
                    "title": d.title,
                    "reason": d.reason,
                    "kept_id": d.kept_id,
                }
                for d in self.dropped
            ],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def remove_generated_auto(events: list[ScheduleEvent], program_id: str) -> list[ScheduleEvent]:
    """Entfernt alle Auto-Einträge dieses Programms; alles andere bleibt in Reihenfolge."""
    return [e for e in events if not (e.program_id == program_id and e.is_auto)]


# ─── Stufe 1: exakte Duplikate ────────────────────────────────────────────────

def _exact_duplicates(events: list[ScheduleEvent], program_id: str) -> list[tuple[ScheduleEvent, ScheduleEvent]]:
    """(verworfen, behalten)-Paare: jedes spätere Vorkommen gegen das erste."""
    first_by_key: dict[tuple, ScheduleEvent] = {}
    pairs = []
    for e in events:
        if e.program_id != program_id:
            continue
        kept = first_by_key.setdefault(e.duplicate_key(), e)
        if kept is not e:
            pairs.append((e, kept))
    return pairs


def dedupe_exact(events: list[ScheduleEvent], program_id: str) -> list[ScheduleEvent]:
    drop = {id(loser) for loser, _ in _exact_duplicates(events, program_id)}
    return [e for e in events if id(e) not in drop]


# ─── Stufe 2: ein Kulturprogramm pro Tag ──────────────────────────────────────

def _cultural_rank(e: ScheduleEvent) -> tuple[int, str]:
    start = parse_time(e.start_time)
    return (_UNPARSABLE_START if start is None else start, e.id)


def _cultural_conflicts(events: list[ScheduleEvent], program_id: str) -> list[tuple[ScheduleEvent, ScheduleEvent]]:
    """(verworfen, behalten)-Paare für Tage mit mehr als einem Kulturprogramm."""
    by_date: dict[str, list[ScheduleEvent]] = {}
    for e in events:
        if e.program_id == program_id and e.category == Category.CULTURAL:
            by_date.setdefault(e.date, []).append(e)

    pairs = []
    for day_events in by_date.values():
        if len(day_events) < 2:
            continue
        ranked = sorted(day_events, key=_cultural_rank)
        keep = ranked[0]
        pairs.extend((loser, keep) for loser in ranked[1:])
    return pairs


def _filter_cultural(events: list[ScheduleEvent], program_id: str) -> list[ScheduleEvent]:
    drop = {id(loser) for loser, _ in _cultural_conflicts(events, program_id)}
    return [e for e in events if id(e) not in drop]


# ─── Gesamtbereinigung ────────────────────────────────────────────────────────

def normalize(events: list[ScheduleEvent], program_id: str) -> list[ScheduleEvent]:
    """Beide Bereinigungsstufen für ein Programm. Andere Programme bleiben unberührt."""
    before = len(events)
    out = _filter_cultural(dedupe_exact(events, program_id), program_id)
    if len(out) != before:
        logger.info(f"Programm {program_id}: {before - len(out)} doppelte Einträge entfernt")
    return out


def find_duplicates(events: list[ScheduleEvent], program_id: str) -> DedupReport:
    """Dieselbe Entscheidung wie normalize(), aber als Bericht statt gefilterter Liste."""
    report = DedupReport(program_id=program_id)
    stages = (
        (REASON_EXACT, _exact_duplicates(events, program_id)),
        (REASON_CULTURAL, _cultural_conflicts(dedupe_exact(events, program_id), program_id)),
    )
    for reason, pairs in stages:
        for loser, keep in pairs:
            report.dropped.append(DroppedEvent(loser.id, loser.date, loser.title, reason, keep.id))
    return report


def regenerate(
    stored: list[ScheduleEvent],
    config: ProgramConfig,
    new_id: Callable[[], str] = new_event_id,
) -> list[ScheduleEvent]:
    """Ersetzt die Auto-Einträge des Programms durch eine frische Generierung.

    Manuelle Einträge und Einträge anderer Programme bleiben unverändert und
    in ihrer Reihenfolge erhalten; danach läuft normalize() für das Programm.
    """
    kept = remove_generated_auto(stored, config.id)
    fresh = generate(config, new_id)
    logger.debug(
        f"Programm {config.id}: {len(stored) - len(kept)} Auto-Einträge ersetzt durch {len(fresh)}"
    )
    return normalize(kept + fresh, config.id)
