"""Export-Modul: CSV, iCalendar, HTML-Monatskalender und Excel (openpyxl)."""

from export.csv_export import CsvExporter
from export.excel_export import ExcelExporter
from export.html_export import CalendarHtmlExporter
from export.ics_export import IcsExporter
from export.vocabulary import ExportLang

__all__ = ["CsvExporter", "ExcelExporter", "CalendarHtmlExporter", "IcsExporter", "ExportLang"]
