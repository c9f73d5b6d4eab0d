"""Druckbarer Monatskalender als eigenständiges HTML-Dokument.

Pro Monat im Programmzeitraum ein <section class="month"> mit einer
7-spaltigen Tabelle. Sprachunterricht eines Tages wird zu einem Block
zusammengefasst (frühester Beginn – spätestes Ende, eine Zeile pro Klasse,
dann die Lehrerräume); alle anderen Einträge werden einzeln gelistet.
"""

import calendar
import html
import logging
from pathlib import Path

from config.schema import ProgramConfig, default_class_name
from export.helpers import (
    class_number,
    distinct_teacher_rooms,
    group_by_date,
    is_lesson_event,
    location_label,
    program_events_sorted,
)
from export.vocabulary import (
    WEEKDAY_HEADERS,
    ExportLang,
    category_label,
    phrase,
    program_type_label,
    translate_text,
)
from models.civil_time import month_span
from models.event import ScheduleEvent

logger = logging.getLogger(__name__)

# Maximal angezeigte Nicht-Unterrichts-Einträge pro Tag
MAX_ITEMS_PER_DAY = 10
# Maximal angezeigte Klassenzeilen im Unterrichtsblock
MAX_CLASS_LINES = 20

WEEK_START_SUNDAY = "sunday"
WEEK_START_MONDAY = "monday"

CSS = """
  body { font-family: system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif; padding: 16px; }
  h1 { font-size: 18px; margin: 0 0 8px; }
  h2 { font-size: 16px; margin: 0 0 6px; }
  .topmeta { font-size: 12px; opacity: .75; margin-bottom: 14px; }
  .meta { font-size: 12px; opacity: .75; margin: 0 0 10px; }
  table { width: 100%; border-collapse: collapse; table-layout: fixed; }
  th, td { border: 1px solid #ddd; vertical-align: top; padding: 6px; }
  th { background: #f7f7f7; font-size: 12px; }
  td { height: 120px; }
  td.empty { background: #fafafa; }
  td.outrange { background: #fcfcfc; opacity: .55; }
  .d { font-weight: 800; font-size: 12px; margin-bottom: 6px; }
  .list { font-size: 11px; line-height: 1.25; }
  .it { margin-bottom: 4px; }
  .t { font-weight: 800; }
  .tm { font-weight: 800; margin-left: 2px; }
  .more { font-size: 11px; opacity: .7; }
  .jp { margin-bottom: 6px; padding-bottom: 4px; border-bottom: 1px dotted #ddd; }
  .jphead { margin-bottom: 4px; }
  .sub { margin-left: 10px; margin-bottom: 3px; }
  .muted { opacity: .7; }
  .month { margin-bottom: 18px; }
  @media print {
    body { padding: 0; }
    td { height: 110px; }
    .month { page-break-after: always; }
  }
"""


def _esc(text) -> str:
    return html.escape(str(text or ""), quote=True)


class CalendarHtmlExporter:
    """Exportiert ein Programm als mehrmonatigen HTML-Kalender."""

    def __init__(
        self,
        config: ProgramConfig,
        events: list[ScheduleEvent],
        lang=ExportLang.JA,
        week_start: str = WEEK_START_SUNDAY,
    ):
        if week_start not in (WEEK_START_SUNDAY, WEEK_START_MONDAY):
            raise ValueError(f"Unbekannter Wochenbeginn: {week_start!r}")
        self.config = config
        self.lang = ExportLang(lang)
        self.week_start = week_start
        self.by_date = group_by_date(program_events_sorted(events, config.id))
        # calendar-Modul: 0 = Montag, 6 = Sonntag
        self._cal = calendar.Calendar(firstweekday=6 if week_start == WEEK_START_SUNDAY else 0)

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def render(self) -> str:
        c = self.config
        name = _esc(c.name)
        type_label = _esc(program_type_label(c.program_type))
        cal_word = phrase("calendar", self.lang)
        if self.lang == ExportLang.EN:
            heading = f"{name} ({type_label}) {cal_word}"
        else:
            heading = f"{name}（{type_label}） {cal_word}"
        sections = "\n".join(
            self.render_month(year, month)
            for year, month in month_span(c.start_date, c.end_date)
        )
        return f"""<!doctype html>
<html lang="{self.lang.value}">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1" />
<title>{name} {cal_word}</title>
<style>{CSS}</style>
</head>
<body>
  <h1>{heading}</h1>
  <div class="topmeta">{self._period_meta()}</div>
  {sections}
</body>
</html>
"""

    def export(self, output_path: Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(self.render())
        logger.info(f"HTML-Kalender exportiert: {output_path}")

    # ─── Monat ────────────────────────────────────────────────────────────────

    def weekday_headers(self) -> list[str]:
        headers = WEEKDAY_HEADERS[self.lang]
        if self.week_start == WEEK_START_MONDAY:
            return headers[1:] + headers[:1]
        return list(headers)

    def render_month(self, year: int, month: int) -> str:
        head = "".join(f"<th>{h}</th>" for h in self.weekday_headers())
        rows = []
        for week in self._cal.monthdayscalendar(year, month):
            cells = "".join(self._cell(year, month, day) for day in week)
            rows.append(f"<tr>{cells}</tr>")
        body = "".join(rows)
        return f"""
  <section class="month">
    <h2>{_esc(self.config.name)} {year}-{month:02d}</h2>
    <div class="meta">{self._period_meta()}</div>
    <table>
      <thead><tr>{head}</tr></thead>
      <tbody>{body}</tbody>
    </table>
  </section>"""

    def _period_meta(self) -> str:
        c = self.config
        return (
            f"{phrase('period', self.lang)}: {_esc(c.start_date)} → {_esc(c.end_date)}"
            f" / {phrase('students', self.lang)}: {c.students_count}"
        )

    def _cell(self, year: int, month: int, day: int) -> str:
        if day == 0:
            return '<td class="empty"></td>'
        iso = f"{year:04d}-{month:02d}-{day:02d}"
        in_range = self.config.start_date <= iso <= self.config.end_date
        body = self.render_day(self.by_date.get(iso, []))
        css = "inrange" if in_range else "outrange"
        return f'<td class="{css}"><div class="d">{day}</div><div class="list">{body}</div></td>'

    # ─── Tag ──────────────────────────────────────────────────────────────────

    def render_day(self, events: list[ScheduleEvent]) -> str:
        lessons = [e for e in events if is_lesson_event(e)]
        others = [e for e in events if not is_lesson_event(e)]
        parts = []
        if lessons:
            parts.append(self._lesson_block(lessons))
        parts.extend(self._item(e) for e in others[:MAX_ITEMS_PER_DAY])
        hidden = len(others) - MAX_ITEMS_PER_DAY
        if hidden > 0:
            more = f"+{hidden} more" if self.lang == ExportLang.EN else f"…他 {hidden} 件"
            parts.append(f'<div class="more">{more}</div>')
        return "".join(parts)

    def _lesson_block(self, lessons: list[ScheduleEvent]) -> str:
        starts = [e.start_time for e in lessons if e.start_time]
        ends = [e.end_time for e in lessons if e.end_time]
        span = f"{min(starts, default='')}-{max(ends, default='')}"

        # Klasse → erster gesehener Raum
        rooms: dict[int, str] = {}
        for e in lessons:
            n = class_number(e)
            if n is not None and n not in rooms:
                rooms[n] = e.location.strip()

        lines = [
            f'<div class="it jphead"><span class="t">{phrase("lesson_block", self.lang)}</span>'
            f' <span class="tm">{_esc(span)}</span></div>'
        ]
        for n in sorted(rooms)[:MAX_CLASS_LINES]:
            room = f"（{_esc(rooms[n])}）" if rooms[n] else ""
            lines.append(f'<div class="sub">{_esc(self._class_name(n))}{room}</div>')
        teacher = self._teacher_label(lessons)
        if teacher:
            lines.append(f'<div class="sub">{teacher}</div>')
        return f'<div class="jp">{"".join(lines)}</div>'

    def _class_name(self, n: int) -> str:
        names = self.config.lessons.class_names
        name = names[n - 1].strip() if n - 1 < len(names) else ""
        return name or default_class_name(n)

    def _teacher_label(self, lessons: list[ScheduleEvent]) -> str:
        """Z.B. "講師（YY305）", bei mehreren Räumen "講師（YY305 他2）"."""
        rooms = distinct_teacher_rooms(lessons, self.config.lessons.default_teacher_room)
        if not rooms:
            return ""
        first = _esc(rooms[0])
        extra = len(rooms) - 1
        if self.lang == ExportLang.EN:
            return f"Teacher ({first} +{extra})" if extra else f"Teacher ({first})"
        return f"講師（{first} 他{extra}）" if extra else f"講師（{first}）"

    def _item(self, e: ScheduleEvent) -> str:
        lang = self.lang
        head = (
            f'<div><span class="t">{_esc(category_label(e.category, lang))}</span>'
            f' <span class="tm">{_esc(e.start_time)}-{_esc(e.end_time)}</span></div>'
        )
        title = f"<div>{_esc(translate_text(e.title, lang))}</div>"
        loc = location_label(e.category, translate_text(e.location, lang), lang)
        loc_line = f'<div class="sub">{_esc(loc)}</div>' if loc else ""
        notes = translate_text(e.notes, lang).strip()
        note_line = f'<div class="sub muted">{_esc(notes)}</div>' if notes else ""
        return f'<div class="it">{head}{title}{loc_line}{note_line}</div>'
