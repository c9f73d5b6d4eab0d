"""Tests für die Kalender- und Uhrzeit-Hilfsfunktionen."""

from models.civil_time import (
    add_time,
    expand_range,
    format_time,
    is_weekday,
    month_span,
    normalize_time,
    parse_date,
    parse_time,
    weekday_label,
)


# ─── DATUM ────────────────────────────────────────────────────────────────────

class TestDates:
    def test_parse_date_valid(self):
        d = parse_date("2024-06-03")
        assert (d.year, d.month, d.day) == (2024, 6, 3)

    def test_parse_date_invalid(self):
        """Ungültige Eingaben liefern None statt Exception."""
        assert parse_date("2024-02-30") is None
        assert parse_date("2024-6-3") is None
        assert parse_date("") is None
        assert parse_date(None) is None
        assert parse_date("２０２４-06-03") is None

    def test_expand_range_inclusive(self):
        assert expand_range("2024-06-03", "2024-06-07") == [
            "2024-06-03", "2024-06-04", "2024-06-05", "2024-06-06", "2024-06-07",
        ]

    def test_expand_range_single_day(self):
        assert expand_range("2024-06-03", "2024-06-03") == ["2024-06-03"]

    def test_expand_range_reversed_is_empty(self):
        assert expand_range("2024-06-07", "2024-06-03") == []

    def test_expand_range_invalid_is_empty(self):
        assert expand_range("kaputt", "2024-06-03") == []

    def test_expand_range_month_and_leap_year(self):
        days = expand_range("2024-02-28", "2024-03-01")
        assert days == ["2024-02-28", "2024-02-29", "2024-03-01"]

    def test_is_weekday(self):
        assert is_weekday("2024-06-03")        # Montag
        assert is_weekday("2024-06-07")        # Freitag
        assert not is_weekday("2024-06-08")    # Samstag
        assert not is_weekday("2024-06-09")    # Sonntag
        assert not is_weekday("ungültig")

    def test_weekday_label(self):
        assert weekday_label("2024-06-03") == "月"
        assert weekday_label("2024-06-09", "en") == "Sun"
        assert weekday_label("ungültig") == ""

    def test_month_span_over_year_end(self):
        assert month_span("2024-12-20", "2025-01-10") == [(2024, 12), (2025, 1)]

    def test_month_span_reversed(self):
        assert month_span("2024-07-01", "2024-06-01") == []


# ─── UHRZEIT ──────────────────────────────────────────────────────────────────

class TestTimes:
    def test_parse_time(self):
        assert parse_time("09:00") == 540
        assert parse_time("9:05") == 545
        assert parse_time("23:59") == 1439

    def test_parse_time_strips_whitespace(self):
        assert parse_time(" 9:00 ") == 540

    def test_parse_time_invalid(self):
        for text in ("24:00", "12:60", "9", "abc", "", None):
            assert parse_time(text) is None, text

    def test_parse_time_fullwidth_digits_invalid(self):
        """Nur ASCII-Ziffern gelten als Uhrzeit."""
        assert parse_time("９:00") is None
        assert parse_time("09:００") is None
        assert normalize_time("９:00") == "９:00"

    def test_format_time_wraps(self):
        assert format_time(0) == "00:00"
        assert format_time(1440 + 30) == "00:30"
        assert format_time(-30) == "23:30"

    def test_add_time(self):
        assert add_time("09:00", 50) == "09:50"
        assert add_time("23:30", 60) == "00:30"

    def test_add_time_unparsable_unchanged(self):
        assert add_time("abends", 30) == "abends"

    def test_normalize_time(self):
        assert normalize_time("9:00") == "09:00"
        assert normalize_time("13:10") == "13:10"
        assert normalize_time("xx") == "xx"
