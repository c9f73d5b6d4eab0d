"""Tests für Neugenerierung und Duplikat-Bereinigung."""

import itertools
import json

from config.schema import ProgramConfig
from generator import find_duplicates, generate, normalize, regenerate, remove_generated_auto
from generator.reconcile import REASON_CULTURAL, REASON_EXACT
from models.event import AUTO_KIND, Category, ScheduleEvent


def _ids(prefix: str = "e"):
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


def _make_config(**overrides) -> ProgramConfig:
    values = dict(id="prog_test", name="Sommer 2024",
                  start_date="2024-06-03", end_date="2024-06-07")
    values.update(overrides)
    return ProgramConfig(**values)


def _manual(event_id: str, day: str = "2024-06-05", start: str = "13:10",
            category: Category = Category.CULTURAL, title: str = "茶道体験",
            program_id: str = "prog_test", **fields) -> ScheduleEvent:
    return ScheduleEvent(id=event_id, program_id=program_id, date=day,
                         start_time=start, end_time="16:00", category=category,
                         title=title, **fields)


# ─── NEUGENERIERUNG ───────────────────────────────────────────────────────────

class TestRegenerate:
    def test_manual_events_survive(self):
        cfg = _make_config()
        manual = _manual("m1")
        events = regenerate([manual], cfg, _ids("a"))
        assert events[0] is manual
        assert len(events) == 17

    def test_auto_events_replaced(self):
        """Zweimaliges Generieren verdoppelt nichts und vergibt neue IDs."""
        cfg = _make_config()
        first = regenerate([], cfg, _ids("a"))
        second = regenerate(first, cfg, _ids("b"))
        assert len(second) == len(first) == 16
        assert all(e.id.startswith("b") for e in second)

    def test_generation_is_deterministic(self):
        """Gleiche Config mit Teil-Abweichungen → bis auf die IDs identische Einträge."""
        cfg = _make_config(
            lessons={"class_count": 2},
            lesson_overrides={"2024-06-04": {"classrooms": ["", "O2"], "start_time": "10:00"}},
        )

        def dump(events):
            return [e.model_dump(exclude={"id"}) for e in events]

        assert dump(generate(cfg, _ids("a"))) == dump(generate(cfg, _ids("b")))
        first = regenerate([], cfg, _ids("a"))
        assert dump(regenerate(first, cfg, _ids("b"))) == dump(first)

    def test_config_change_is_applied(self):
        cfg = _make_config()
        events = regenerate([], cfg, _ids("a"))
        changed = cfg.model_copy(update={"end_date": "2024-06-04"})
        events = regenerate(events, changed, _ids("b"))
        assert max(e.date for e in events) == "2024-06-04"

    def test_other_programs_untouched(self):
        cfg = _make_config()
        foreign = _manual("x1", program_id="prog_other", generated=True, generated_kind=AUTO_KIND)
        foreign_dup = _manual("x2", program_id="prog_other")
        events = regenerate([foreign, foreign_dup], cfg, _ids())
        assert events[:2] == [foreign, foreign_dup]

    def test_remove_generated_auto_keeps_manual_generated_flag(self):
        """Nur generated=True UND kind=Auto gilt als Auto-Eintrag."""
        half = _manual("h1", generated=True, generated_kind="Import")
        auto = _manual("a1", generated=True, generated_kind=AUTO_KIND)
        assert remove_generated_auto([half, auto], "prog_test") == [half]


# ─── BEREINIGUNG ──────────────────────────────────────────────────────────────

class TestNormalize:
    def test_exact_duplicate_keeps_first(self):
        a = _manual("m2", category=Category.OTHER)
        b = _manual("m1", category=Category.OTHER)
        assert normalize([a, b], "prog_test") == [a]

    def test_different_notes_are_not_duplicates(self):
        a = _manual("m1", category=Category.OTHER)
        b = _manual("m2", category=Category.OTHER, notes="anders")
        assert len(normalize([a, b], "prog_test")) == 2

    def test_one_cultural_per_day_earliest_wins(self):
        late = _manual("m1", start="14:00", title="書道体験")
        early = _manual("m2", start="10:00")
        assert normalize([late, early], "prog_test") == [early]

    def test_cultural_tie_broken_by_id(self):
        b = _manual("m_b", title="書道体験")
        a = _manual("m_a")
        assert normalize([b, a], "prog_test") == [a]

    def test_unparsable_start_loses(self):
        broken = _manual("m0", start="??", title="書道体験")
        ok = _manual("m9", start="15:00")
        assert normalize([broken, ok], "prog_test") == [ok]

    def test_cultural_on_different_days_kept(self):
        a = _manual("m1")
        b = _manual("m2", day="2024-06-06")
        assert len(normalize([a, b], "prog_test")) == 2

    def test_only_given_program(self):
        a = _manual("m1", program_id="prog_other")
        b = _manual("m2", program_id="prog_other")
        assert len(normalize([a, b], "prog_test")) == 2

    def test_idempotent(self):
        events = [_manual("m1"), _manual("m2"), _manual("m3", start="09:00", title="書道体験")]
        once = normalize(events, "prog_test")
        assert normalize(once, "prog_test") == once


# ─── DUPLIKAT-BERICHT ─────────────────────────────────────────────────────────

class TestFindDuplicates:
    def test_report_matches_normalize(self):
        events = [
            _manual("m1", category=Category.OTHER),
            _manual("m2", category=Category.OTHER),
            _manual("m3", start="10:00"),
            _manual("m4", start="11:00", title="書道体験"),
        ]
        report = find_duplicates(events, "prog_test")
        kept = [e.id for e in normalize(events, "prog_test")]
        assert report.dropped_ids == {"m2", "m4"}
        assert kept == ["m1", "m3"]

        reasons = {d.event_id: (d.reason, d.kept_id) for d in report.dropped}
        assert reasons["m2"] == (REASON_EXACT, "m1")
        assert reasons["m4"] == (REASON_CULTURAL, "m3")

    def test_exact_cultural_duplicate_reported_once(self):
        events = [_manual("m1"), _manual("m2")]
        report = find_duplicates(events, "prog_test")
        assert [d.reason for d in report.dropped] == [REASON_EXACT]

    def test_empty_report(self):
        report = find_duplicates([_manual("m1")], "prog_test")
        assert report.is_empty()
        assert json.loads(report.to_json()) == {"program_id": "prog_test", "dropped": []}
