"""ScheduleData: alle Programme und Programmpunkte in einer JSON-Datei (Pydantic v2)."""

import logging
import time
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from config.schema import ProgramConfig
from models.event import ScheduleEvent, sort_events

logger = logging.getLogger(__name__)


class ScheduleDataError(Exception):
    """Datendatei existiert, ist aber nicht lesbar (kein JSON oder falsches Format)."""


class ScheduleData(BaseModel):
    """Gesamtzustand: Programme, Programmpunkte und das aktuell gewählte Programm.

    Alle Änderungsmethoden liefern eine neue Instanz; das Original bleibt
    unverändert.
    """

    programs: list[ProgramConfig] = Field(default_factory=list)
    events: list[ScheduleEvent] = Field(default_factory=list)
    selected_program_id: Optional[str] = None
    # Zeitpunkt des letzten Speicherns (Epoch-Millisekunden)
    last_updated: int = 0

    # ─── Zugriff ───

    def get_program(self, program_id: str) -> Optional[ProgramConfig]:
        return next((p for p in self.programs if p.id == program_id), None)

    def find_program(self, key: str) -> Optional[ProgramConfig]:
        """Sucht zuerst nach ID, dann nach Anzeigename."""
        return self.get_program(key) or next((p for p in self.programs if p.name == key), None)

    def program_events(self, program_id: str) -> list[ScheduleEvent]:
        """Programmpunkte eines Programms in kanonischer Reihenfolge."""
        return sort_events([e for e in self.events if e.program_id == program_id])

    def is_older_than(self, other: "ScheduleData") -> bool:
        """True, wenn dieser Stand vor dem anderen gespeichert wurde."""
        return self.last_updated < other.last_updated

    # ─── Änderungen ───

    def replace_program(self, config: ProgramConfig) -> "ScheduleData":
        """Ersetzt das Programm mit gleicher ID oder hängt es an."""
        if self.get_program(config.id) is None:
            programs = [*self.programs, config]
        else:
            programs = [config if p.id == config.id else p for p in self.programs]
        return self.model_copy(update={"programs": programs})

    def with_events(self, events: list[ScheduleEvent]) -> "ScheduleData":
        return self.model_copy(update={"events": list(events)})

    def select(self, program_id: Optional[str]) -> "ScheduleData":
        return self.model_copy(update={"selected_program_id": program_id})

    # ─── Persistenz ───

    def save_json(self, path: Path) -> None:
        """Speichert den kompletten Zustand als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        updated = self.model_copy(update={"last_updated": int(time.time() * 1000)})
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))
        logger.debug(f"Datendatei gespeichert: {path} ({len(self.events)} Einträge)")

    @classmethod
    def load_json(cls, path: Path) -> "ScheduleData":
        """Lädt den Zustand aus einer JSON-Datei.

        Programme werden dabei über die LessonDefaults-Validierung normalisiert
        (Klassenlisten aufgefüllt, alte Einzelraum-Angabe migriert).
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Datendatei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise ScheduleDataError(f"Datendatei {path} ist ungültig:\n{e}") from e

    @classmethod
    def load_or_empty(cls, path: Path) -> "ScheduleData":
        """Wie load_json, aber ein leerer Zustand, wenn die Datei noch fehlt."""
        path = Path(path)
        if not path.exists():
            return cls()
        return cls.load_json(path)
