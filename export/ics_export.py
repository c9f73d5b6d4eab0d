"""iCalendar-Export (RFC 5545) mit fester Zeitzone Asia/Tokyo (+09:00, keine Sommerzeit).

Start und Ende werden nicht umgerechnet: Datum + Uhrzeit des Eintrags werden
wörtlich mit TZID=Asia/Tokyo ausgegeben. DTSTAMP stammt aus last_updated des
Programms, damit ein unveränderter Stand byte-gleich exportiert wird.
"""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

from icalendar import Calendar as ICalCalendar, Event as ICalEvent
from icalendar import Timezone as ICalTimezone, TimezoneStandard

from config.schema import ProgramConfig
from export.helpers import program_events_sorted
from export.vocabulary import (
    ExportLang,
    category_label,
    phrase,
    transport_label,
    translate_text,
    yes_no_label,
)
from models.civil_time import parse_date, parse_time
from models.event import ScheduleEvent, TransportMode, YesNo

logger = logging.getLogger(__name__)

PRODID = "-//RSJP Scheduler//JP//EN"
UID_SUFFIX = "@rsjp-scheduler"
TZID = "Asia/Tokyo"
TZ_OFFSET = timedelta(hours=9)


def _local_datetime(iso_date: str, hhmm: str) -> datetime | None:
    """Naives datetime aus Datum + Uhrzeit; None wenn eines davon ungültig ist."""
    d = parse_date(iso_date)
    minutes = parse_time(hhmm)
    if d is None or minutes is None:
        return None
    return datetime(d.year, d.month, d.day, minutes // 60, minutes % 60)


class IcsExporter:
    """Exportiert die Programmpunkte eines Programms als .ics-Kalender."""

    def __init__(self, config: ProgramConfig, events: list[ScheduleEvent], lang=ExportLang.JA):
        self.config = config
        self.lang = ExportLang(lang)
        self.events = program_events_sorted(events, config.id)

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def build_calendar(self) -> ICalCalendar:
        cal = ICalCalendar()
        cal.add("prodid", PRODID)
        cal.add("version", "2.0")
        cal.add("calscale", "GREGORIAN")
        cal.add("method", "PUBLISH")
        cal.add_component(self._timezone())

        dtstamp = datetime.fromtimestamp(self.config.last_updated / 1000, tz=timezone.utc)
        for e in self.events:
            vevent = self._vevent(e, dtstamp)
            if vevent is not None:
                cal.add_component(vevent)
        return cal

    def render(self) -> str:
        """Kalendertext mit CRLF-Zeilenenden, Escaping und Zeilenfaltung."""
        return self.build_calendar().to_ical().decode("utf-8")

    def export(self, output_path: Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "wb") as f:
            f.write(self.build_calendar().to_ical())
        logger.info(f"ICS exportiert: {output_path} ({len(self.events)} Einträge, {self.lang.value})")

    # ─── Komponenten ──────────────────────────────────────────────────────────

    def _timezone(self) -> ICalTimezone:
        """VTIMEZONE mit genau einem STANDARD-Block (+0900 → +0900, JST)."""
        tz = ICalTimezone()
        tz.add("tzid", TZID)
        tz.add("x-lic-location", TZID)
        std = TimezoneStandard()
        std.add("tzoffsetfrom", TZ_OFFSET)
        std.add("tzoffsetto", TZ_OFFSET)
        std.add("tzname", "JST")
        std.add("dtstart", datetime(1970, 1, 1, 0, 0, 0))
        tz.add_component(std)
        return tz

    def _vevent(self, e: ScheduleEvent, dtstamp: datetime) -> ICalEvent | None:
        start = _local_datetime(e.date, e.start_time)
        end = _local_datetime(e.date, e.end_time)
        if start is None or end is None:
            logger.warning(f"Eintrag {e.id} übersprungen: ungültiges Datum/Uhrzeit {e.date} {e.start_time}-{e.end_time}")
            return None
        # Ende nach Mitternacht (z.B. 23:30-00:30) liegt am Folgetag
        if end < start:
            end += timedelta(days=1)

        vevent = ICalEvent()
        vevent.add("uid", f"{e.id}{UID_SUFFIX}")
        vevent.add("dtstamp", dtstamp)
        vevent.add("dtstart", start, parameters={"TZID": TZID})
        vevent.add("dtend", end, parameters={"TZID": TZID})
        vevent.add("summary", self._summary(e))
        location = translate_text(e.location, self.lang)
        if location:
            vevent.add("location", location)
        vevent.add("description", "\n".join(self.description_lines(e)))
        return vevent

    def _summary(self, e: ScheduleEvent) -> str:
        if self.lang == ExportLang.EN:
            return f"{self.config.name} | {translate_text(e.title, self.lang)}"
        return f"{self.config.name}｜{e.title}"

    def description_lines(self, e: ScheduleEvent) -> list[str]:
        """Eine Zeile pro Angabe; Transport und Notizen nur, wenn vorhanden."""
        lang = self.lang
        kvh = f"KVH: {yes_no_label(e.kvh_required, lang)}"
        if e.kvh_required == YesNo.YES:
            kvh += f" ({e.kvh_count})"
        lines = [
            f"{phrase('category', lang)}: {category_label(e.category, lang)}",
            f"{phrase('room_setup', lang)}: {yes_no_label(e.room_needed, lang)}",
            f"{phrase('students', lang)}: {e.students_count}",
            f"{phrase('buddies', lang)}: {e.buddy_count}",
            kvh,
        ]
        if e.transport_mode != TransportMode.NONE:
            lines.append(f"{phrase('transport', lang)}: {transport_label(e.transport_mode, lang)}")
        if e.notes:
            lines.append(f"{phrase('notes', lang)}: {translate_text(e.notes, lang)}")
        return lines
