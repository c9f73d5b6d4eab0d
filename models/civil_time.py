"""Kalender-Hilfsfunktionen: Datumsbereiche und Uhrzeiten als reine Kalenderwerte.

Alle Datumsangaben sind ISO-Strings ("YYYY-MM-DD"), alle Uhrzeiten "HH:MM".
Es gibt keine Zeitzonen-Umrechnung und keine Sommerzeit: ein Datum ist ein
bloßer Kalenderwert. Ungültige Eingaben führen nie zu einer Exception,
sondern zu einem dokumentierten Fallback (leere Liste, None, unveränderter Text).
"""

import re
from datetime import date, timedelta
from typing import Optional

MINUTES_PER_DAY = 24 * 60

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$", re.ASCII)

_WEEKDAY_LABELS = {
    "ja": ["月", "火", "水", "木", "金", "土", "日"],
    "en": ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"],
}


# ─── Datum ────────────────────────────────────────────────────────────────────

def parse_date(iso: str) -> Optional[date]:
    """Wandelt "YYYY-MM-DD" in ein date-Objekt um; None bei ungültiger Eingabe."""
    if not isinstance(iso, str) or not _ISO_DATE_RE.match(iso):
        return None
    try:
        return date.fromisoformat(iso)
    except ValueError:
        return None


def expand_range(start: str, end: str) -> list[str]:
    """Alle Kalendertage von start bis end (inklusive), aufsteigend.

    Leere Liste, wenn eines der Daten ungültig ist oder start > end.
    """
    d_start = parse_date(start)
    d_end = parse_date(end)
    if d_start is None or d_end is None or d_start > d_end:
        return []
    days = (d_end - d_start).days
    return [(d_start + timedelta(days=i)).isoformat() for i in range(days + 1)]


def is_weekday(iso: str) -> bool:
    """True für Montag bis Freitag. Ungültige Daten zählen nicht als Werktag."""
    d = parse_date(iso)
    return d is not None and d.weekday() < 5


def weekday_label(iso: str, lang: str = "ja") -> str:
    """Kurzer Wochentagsname ("月" bzw. "Mon"); leerer String bei ungültigem Datum."""
    d = parse_date(iso)
    if d is None:
        return ""
    labels = _WEEKDAY_LABELS.get(lang, _WEEKDAY_LABELS["ja"])
    return labels[d.weekday()]


def month_span(start: str, end: str) -> list[tuple[int, int]]:
    """(Jahr, Monat)-Paare vom Monat des ersten bis zum Monat des letzten Tages."""
    d_start = parse_date(start)
    d_end = parse_date(end)
    if d_start is None or d_end is None or d_start > d_end:
        return []
    months = []
    y, m = d_start.year, d_start.month
    while (y, m) <= (d_end.year, d_end.month):
        months.append((y, m))
        m += 1
        if m > 12:
            m = 1
            y += 1
    return months


# ─── Uhrzeit ──────────────────────────────────────────────────────────────────

def parse_time(text: str) -> Optional[int]:
    """Parst "H:MM" oder "HH:MM" zu Minuten seit Mitternacht.

    Stunden 0–23, Minuten 0–59, nur ASCII-Ziffern. Leerzeichen am Rand werden
    ignoriert (" 9:00 " → 540). Alles andere → None.
    """
    if not isinstance(text, str):
        return None
    m = _TIME_RE.match(text.strip())
    if not m:
        return None
    hh, mm = int(m.group(1)), int(m.group(2))
    if hh > 23 or mm > 59:
        return None
    return hh * 60 + mm


def format_time(minutes: int) -> str:
    """Minuten → "HH:MM", immer zweistellig, modulo 24 h (auch für negative Werte)."""
    m = minutes % MINUTES_PER_DAY
    return f"{m // 60:02d}:{m % 60:02d}"


def add_time(text: str, delta_minutes: int) -> str:
    """Addiert Minuten zu einer Uhrzeit. Unparsbare Eingabe wird unverändert zurückgegeben."""
    base = parse_time(text)
    if base is None:
        return text
    return format_time(base + delta_minutes)


def normalize_time(text: str) -> str:
    """Kanonische Form "HH:MM" ("9:00" → "09:00"); unparsbare Eingabe bleibt unverändert."""
    mins = parse_time(text)
    return text if mins is None else format_time(mins)
