"""Excel-Export eines Programms (openpyxl): dieselben Spalten wie der CSV-Export."""

import logging
from pathlib import Path

from config.schema import ProgramConfig
from export.csv_export import CSV_HEADERS, CsvExporter
from export.helpers import COLORS, safe_filename
from models.event import ScheduleEvent

logger = logging.getLogger(__name__)

# Spalten mit Zahlenwerten (werden als int geschrieben)
_NUMERIC_COLUMNS = {"StudentsCount", "BuddyCount", "KVHCount", "BusCount"}

# Kategorie → Zeilenfarbe aus COLORS
_ROW_COLORS = {
    "JapaneseClass": "lesson",
    "Cultural": "cultural",
    "Ceremony": "ceremony",
    "CompanyVisit": "manual",
    "BuddyLunch": "manual",
    "Other": "manual",
}

# Breite je Spalte (Excel-Einheiten), nicht genannte Spalten: COL_DEFAULT_W
_COLUMN_WIDTHS = {
    "ProgramName": 22,
    "Date": 12,
    "DayOfWeek": 6,
    "StartTime": 8,
    "EndTime": 8,
    "Category": 14,
    "Title": 36,
    "Location": 20,
    "Notes": 30,
}


class ExcelExporter:
    """Exportiert die Programmpunkte eines Programms in ein Tabellenblatt."""

    COL_DEFAULT_W = 12
    ROW_HEADER_H = 22

    def __init__(self, config: ProgramConfig, events: list[ScheduleEvent]):
        self.config = config
        self._csv = CsvExporter(config, events)

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> None:
        from openpyxl import Workbook
        wb = Workbook()
        ws = wb.active
        ws.title = self.sheet_title()

        self._write_header_row(ws)
        for row_idx, values in enumerate(self._csv.rows()[1:], 2):
            self._write_row(ws, row_idx, values)
        self._setup_sheet(ws)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        logger.info(f"Excel exportiert: {output_path} ({len(self._csv.events)} Einträge)")

    def sheet_title(self) -> str:
        """Blattname: max. 31 Zeichen, ohne die in Excel verbotenen Zeichen (auch "[" und "]")."""
        from openpyxl.workbook.child import INVALID_TITLE_REGEX
        title = INVALID_TITLE_REGEX.sub("_", safe_filename(self.config.name)).strip()
        return title[:31] or "Schedule"

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _setup_sheet(self, ws) -> None:
        """Spaltenbreiten, fixierte Kopfzeile und Autofilter."""
        from openpyxl.utils import get_column_letter
        for col, header in enumerate(CSV_HEADERS, 1):
            width = _COLUMN_WIDTHS.get(header, self.COL_DEFAULT_W)
            ws.column_dimensions[get_column_letter(col)].width = width
        ws.freeze_panes = "A2"
        ws.auto_filter.ref = ws.dimensions

    def _write_header_row(self, ws) -> None:
        from openpyxl.styles import Alignment, Font
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(CSV_HEADERS, 1):
            cell = ws.cell(row=1, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = border
        ws.row_dimensions[1].height = self.ROW_HEADER_H

    def _write_row(self, ws, row_idx: int, values: list[str]) -> None:
        from openpyxl.styles import Alignment
        border = self._thin_border()
        color = _ROW_COLORS.get(values[CSV_HEADERS.index("Category")])
        fill = self._fill(COLORS[color]) if color else None
        for col, (header, value) in enumerate(zip(CSV_HEADERS, values), 1):
            if header in _NUMERIC_COLUMNS and value.isdigit():
                value = int(value)
            cell = ws.cell(row=row_idx, column=col, value=value)
            cell.border = border
            cell.alignment = Alignment(vertical="top", wrap_text=header in ("Title", "Notes"))
            if fill:
                cell.fill = fill
