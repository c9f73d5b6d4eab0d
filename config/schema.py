import logging
import time
import uuid
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from models.civil_time import expand_range

logger = logging.getLogger(__name__)


class ProgramType(str, Enum):
    RSJP = "RSJP"       # regulär wiederkehrendes Programm
    CUSTOM = "Custom"   # Einzelprogramm


# ─── KLASSEN-BEZEICHNUNGEN (Default-Werte pro Klasse) ───

DEFAULT_CLASS_NAMES = ["嵐山", "宇治", "祇園", "西陣", "東山"]
DEFAULT_CLASS_ROOMS = ["YY301", "YY302", "YY303", "YY304", "YY305"]
DEFAULT_TEACHER_ROOM = "YY305"

# Obergrenze für die Klassenanzahl in den Programm-Defaults
MAX_DEFAULT_CLASS_COUNT = 50


def default_class_name(index1: int) -> str:
    """Klassenname für Klasse index1 (1-basiert): erst die Namensliste, dann "クラスN"."""
    if 1 <= index1 <= len(DEFAULT_CLASS_NAMES):
        return DEFAULT_CLASS_NAMES[index1 - 1]
    return f"クラス{index1}"


def default_class_room(index1: int) -> str:
    """Klassenraum für Klasse index1: YY301..YY305, danach YY(300+N)."""
    if 1 <= index1 <= len(DEFAULT_CLASS_ROOMS):
        return DEFAULT_CLASS_ROOMS[index1 - 1]
    return f"YY{300 + index1}"


def _pad_labels(values, count: int, fallback) -> list[str]:
    """Bringt eine Liste auf genau count Einträge; leere Einträge → Default der Position."""
    arr = values if isinstance(values, list) else []
    out: list[str] = []
    for i in range(1, count + 1):
        raw = arr[i - 1] if i - 1 < len(arr) else None
        v = str(raw).strip() if raw is not None else ""
        out.append(v or fallback(i))
    return out


def normalize_class_names(values, class_count: int) -> list[str]:
    return _pad_labels(values, class_count, default_class_name)


def normalize_class_rooms(values, class_count: int) -> list[str]:
    return _pad_labels(values, class_count, default_class_room)


def clamp(n: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, n))


def _lenient_int(v):
    """Zahl oder None. Ungültige Werte gelten als nicht gesetzt."""
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        return int(v) if v == v else None
    if isinstance(v, str):
        try:
            return int(v.strip())
        except ValueError:
            return None
    return None


# ─── SPRACHUNTERRICHT ───

class LessonDefaults(BaseModel):
    """Programmweite Defaults für den täglichen Sprachunterricht.

    Die Listen class_names / class_rooms haben nach der Validierung immer
    genau class_count Einträge (auffüllen mit Defaults bzw. abschneiden).
    """
    # Unterricht an Werktagen automatisch einplanen
    enabled: bool = True
    # Beginn der ersten Stunde "HH:MM"
    start_time: str = "09:00"
    # Dauer einer Unterrichtsstunde in Minuten
    lesson_minutes: int = Field(50, description="Dauer einer Stunde (Minuten)")
    # Pause zwischen zwei Stunden in Minuten
    break_minutes: int = Field(10, description="Pause zwischen Stunden (Minuten)")
    # Stunden pro Tag (1–3, wird geklemmt)
    periods: int = 3
    # Parallele Klassen (1–50, wird geklemmt)
    class_count: int = 1
    # Alt: ein Raum für alle Klassen (nur noch für Migration)
    default_classroom: str = ""
    # Lehrer-Aufenthaltsraum
    default_teacher_room: str = DEFAULT_TEACHER_ROOM
    class_names: list[str] = Field(default_factory=list)
    class_rooms: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _migrate_single_classroom(cls, data):
        """Alte Daten: nur default_classroom gesetzt → für jede Klasse übernehmen."""
        if isinstance(data, dict) and not data.get("class_rooms") and data.get("default_classroom"):
            count = clamp(_lenient_int(data.get("class_count")) or 1, 1, MAX_DEFAULT_CLASS_COUNT)
            data = {**data, "class_rooms": [str(data["default_classroom"])] * count}
        return data

    @model_validator(mode="after")
    def _normalize_sections(self):
        self.periods = clamp(self.periods, 1, 3)
        self.class_count = clamp(self.class_count, 1, MAX_DEFAULT_CLASS_COUNT)
        self.default_teacher_room = self.default_teacher_room.strip() or DEFAULT_TEACHER_ROOM
        self.class_names = normalize_class_names(self.class_names, self.class_count)
        self.class_rooms = normalize_class_rooms(self.class_rooms, self.class_count)
        return self


class LessonDayOverride(BaseModel):
    """Abweichung vom Unterrichts-Default für genau einen Kalendertag.

    Nicht gesetzte Felder (None) und leere Listeneinträge fallen einzeln auf
    die Programm-Defaults zurück.
    """
    enabled: bool = True
    start_time: Optional[str] = None
    lesson_minutes: Optional[int] = None
    break_minutes: Optional[int] = None
    periods: Optional[int] = None
    class_count: Optional[int] = None
    # Ein Eintrag pro Klasse in Klassenreihenfolge
    classrooms: list[str] = Field(default_factory=list)
    teacher_rooms: list[str] = Field(default_factory=list)

    @field_validator("lesson_minutes", "break_minutes", "periods", "class_count", mode="before")
    @classmethod
    def _lenient_numbers(cls, v):
        return _lenient_int(v)

    @field_validator("start_time", mode="before")
    @classmethod
    def _lenient_time(cls, v):
        return v if isinstance(v, str) else None

    @field_validator("classrooms", "teacher_rooms", mode="before")
    @classmethod
    def _lenient_rooms(cls, v):
        if not isinstance(v, list):
            return []
        return [s.strip() if isinstance(s, str) else "" for s in v]


# ─── ABSCHLUSSFEIER ───

class CeremonyDefaults(BaseModel):
    """Abschlussfeier am letzten Programmtag."""
    start_time: str = "13:10"
    duration_minutes: int = 60
    location: str = ""


# ─── GESAMT-CONFIG ───

class ProgramConfig(BaseModel):
    """Konfiguration eines Austauschprogramms (ein Reiseplan)."""
    # Eindeutige, nie wiederverwendete Programm-ID
    id: str = Field(default_factory=lambda: f"prog_{uuid.uuid4().hex}")
    # Anzeigename
    name: str = "新規プログラム"
    program_type: ProgramType = ProgramType.RSJP
    # Erster und letzter Programmtag (inklusive), "YYYY-MM-DD"
    start_date: str
    end_date: str
    # Teilnehmende (Basiswert für jeden Programmpunkt)
    students_count: int = 20
    # Buddies für die Campus-Tour am ersten Tag
    default_buddy_count: int = 5
    lessons: LessonDefaults = Field(default_factory=LessonDefaults)
    # Datum → Abweichung für diesen Tag
    lesson_overrides: dict[str, LessonDayOverride] = Field(default_factory=dict)
    ceremony: CeremonyDefaults = Field(default_factory=CeremonyDefaults)
    # Letzte Änderung (Epoch-Millisekunden)
    last_updated: int = 0

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _date_as_text(cls, v):
        # YAML lädt unquotierte Daten als date-Objekte
        return v.isoformat() if isinstance(v, date) else v

    @field_validator("students_count", "default_buddy_count", mode="before")
    @classmethod
    def _non_negative(cls, v):
        n = _lenient_int(v)
        return max(0, n) if n is not None else 0

    @field_validator("lesson_overrides", mode="before")
    @classmethod
    def _drop_malformed_overrides(cls, v):
        """Fehlerhafte Einträge werden verworfen statt die ganze Config abzulehnen."""
        if not isinstance(v, dict):
            return {}
        out = {}
        for day, raw in v.items():
            if isinstance(raw, LessonDayOverride):
                out[str(day)] = raw
                continue
            try:
                out[str(day)] = LessonDayOverride.model_validate(raw)
            except ValidationError as e:
                logger.warning(f"Ungültige Tagesabweichung für {day} ignoriert: {e.error_count()} Fehler")
        return out

    @property
    def dates(self) -> list[str]:
        """Alle Programmtage (leer bei ungültigem oder umgekehrtem Zeitraum)."""
        return expand_range(self.start_date, self.end_date)

    def touch(self) -> "ProgramConfig":
        """Kopie mit aktuellem Änderungszeitstempel."""
        return self.model_copy(update={"last_updated": int(time.time() * 1000)})


# ─── VORLAGEN FÜR MANUELLE PROGRAMMPUNKTE ───

class EventMaster(BaseModel):
    """Vorlage für einen manuell hinzugefügten Programmpunkt."""
    id: str
    title: str
    # Nur Cultural, CompanyVisit, BuddyLunch oder Other
    category: str
    default_start_time: str = "13:10"
    default_duration_minutes: int = 95
    default_kvh_required: bool = True
    default_kvh_count: int = 1
    default_transport_mode: str = "Bus"
    default_arrangements_needed: bool = True
    default_notes: str = ""
