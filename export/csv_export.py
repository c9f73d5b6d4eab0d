"""CSV-Export eines Programms (eine Zeile pro Programmpunkt, UTF-8 mit BOM)."""

import csv
import io
import logging
from pathlib import Path

from config.schema import ProgramConfig
from export.helpers import program_events_sorted
from export.vocabulary import enum_value
from models.civil_time import weekday_label
from models.event import ScheduleEvent

logger = logging.getLogger(__name__)

# Tabellenkalkulationen erkennen UTF-8 nur mit BOM
BOM = "\ufeff"

CSV_HEADERS: list[str] = [
    "ProgramName",
    "ProgramType",
    "Date",
    "DayOfWeek",
    "StartTime",
    "EndTime",
    "Category",
    "Title",
    "Location",
    "RoomNeeded",
    "StudentsCount",
    "BuddyCount",
    "KVHRequired",
    "KVHCount",
    "TransportMode",
    "BusCompany",
    "BusCount",
    "BusTripType",
    "BusPickup",
    "BusDropoff",
    "ArrangementsNeeded",
    "Notes",
]


class CsvExporter:
    """Exportiert die Programmpunkte eines Programms als CSV."""

    def __init__(self, config: ProgramConfig, events: list[ScheduleEvent]):
        self.config = config
        self.events = program_events_sorted(events, config.id)

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def rows(self) -> list[list[str]]:
        """Kopfzeile + eine Zeile pro Eintrag, alle Werte als Text."""
        return [CSV_HEADERS] + [self._row(e) for e in self.events]

    def render(self) -> str:
        """CSV-Text inklusive BOM. Felder mit Komma, Anführungszeichen oder
        Zeilenumbruch werden in Anführungszeichen gesetzt."""
        buf = io.StringIO()
        writer = csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
        writer.writerows(self.rows())
        return BOM + buf.getvalue()

    def export(self, output_path: Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" damit Zeilenumbrüche in Feldern unverändert bleiben
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            f.write(self.render())
        logger.info(f"CSV exportiert: {output_path} ({len(self.events)} Einträge)")

    # ─── Zeilen ───────────────────────────────────────────────────────────────

    def _row(self, e: ScheduleEvent) -> list[str]:
        bus = e.uses_bus
        return [
            self.config.name,
            enum_value(self.config.program_type),
            e.date,
            weekday_label(e.date, "ja"),
            e.start_time,
            e.end_time,
            enum_value(e.category),
            e.title,
            e.location,
            enum_value(e.room_needed),
            str(e.students_count),
            str(e.buddy_count),
            enum_value(e.kvh_required),
            str(e.kvh_count),
            enum_value(e.transport_mode),
            e.bus_company if bus else "",
            str(e.bus_count) if bus else "",
            enum_value(e.bus_trip_type) if bus else "",
            e.bus_pickup if bus else "",
            e.bus_dropoff if bus else "",
            enum_value(e.arrangements_needed),
            e.notes,
        ]
