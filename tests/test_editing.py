"""Tests für manuelle Programmpunkte, Tagesabweichungen und Programm-Löschung."""

import itertools

from config.defaults import get_event_master
from config.schema import LessonDayOverride, ProgramConfig
from generator import generate
from generator.editing import (
    FALLBACK_TITLE,
    add_event,
    clean_override,
    delete_event,
    delete_override,
    delete_program,
    enable_first_day_lessons,
    event_from_master,
    make_manual_event,
    set_override,
    update_event,
)
from models.event import BusTripType, Category, TransportMode
from models.schedule_data import ScheduleData


def _ids(prefix: str = "e"):
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


def _make_config(**overrides) -> ProgramConfig:
    values = dict(id="prog_test", name="Sommer 2024", students_count=18,
                  start_date="2024-06-03", end_date="2024-06-07")
    values.update(overrides)
    return ProgramConfig(**values)


# ─── MANUELLE PROGRAMMPUNKTE ──────────────────────────────────────────────────

class TestManualEvents:
    def test_defaults(self):
        e = make_manual_event(_make_config(), "2024-06-05", new_id=_ids())
        assert e.id == "e1"
        assert e.title == FALLBACK_TITLE
        assert (e.start_time, e.end_time) == ("09:00", "10:00")
        assert e.students_count == 18
        assert e.generated is False
        assert not e.is_auto

    def test_end_time_from_duration(self):
        e = make_manual_event(_make_config(), "2024-06-05", start_time="9:30",
                              duration_minutes=95, new_id=_ids())
        assert (e.start_time, e.end_time) == ("09:30", "11:05")

    def test_kvh_count_only_when_required(self):
        cfg = _make_config()
        with_kvh = make_manual_event(cfg, "2024-06-05", kvh_required=True, kvh_count=99, new_id=_ids())
        without = make_manual_event(cfg, "2024-06-05", kvh_required=False, kvh_count=3, new_id=_ids())
        assert (with_kvh.kvh_required, with_kvh.kvh_count) == ("Yes", 50)
        assert (without.kvh_required, without.kvh_count) == ("No", 0)

    def test_bus_fields_cleared_without_bus(self):
        e = make_manual_event(
            _make_config(), "2024-06-05",
            transport_mode=TransportMode.WALK, bus_company="Kyoto Bus", bus_count=3,
            bus_trip_type=BusTripType.ROUND_TRIP, new_id=_ids(),
        )
        assert e.bus_company == ""
        assert e.bus_count == 0
        assert e.bus_trip_type == "OneWay"

    def test_bus_fields_kept_with_bus(self):
        e = make_manual_event(
            _make_config(), "2024-06-05",
            transport_mode="Bus", bus_company=" Kyoto Bus ", bus_count=30,
            bus_trip_type="RoundTrip", bus_pickup="Hotel", new_id=_ids(),
        )
        assert e.uses_bus
        assert e.bus_company == "Kyoto Bus"
        assert e.bus_count == 20
        assert e.bus_trip_type == "RoundTrip"
        assert e.bus_pickup == "Hotel"

    def test_from_master(self):
        tea = get_event_master("tea")
        e = event_from_master(_make_config(), "2024-06-05", tea, _ids())
        assert e.title == "茶道体験"
        assert e.category == Category.CULTURAL
        assert (e.start_time, e.end_time) == ("13:10", "16:00")
        assert e.kvh_count == 1
        assert e.transport_mode == "Bus"
        assert e.bus_count == 1

    def test_from_master_with_overrides(self):
        lunch = get_event_master("buddy_lunch")
        e = event_from_master(_make_config(), "2024-06-05", lunch, _ids(),
                              start_time="12:00", buddy_count=6)
        assert (e.start_time, e.end_time) == ("12:00", "12:50")
        assert e.buddy_count == 6
        assert e.kvh_count == 0

    def test_add_event_does_not_dedupe(self):
        cfg = _make_config()
        a = make_manual_event(cfg, "2024-06-05", title="X", new_id=_ids("a"))
        b = make_manual_event(cfg, "2024-06-05", title="X", new_id=_ids("b"))
        assert add_event([a], b) == [a, b]

    def test_update_event_validates_and_normalizes(self):
        cfg = _make_config()
        a = make_manual_event(cfg, "2024-06-05", title="X", new_id=_ids("a"))
        b = make_manual_event(cfg, "2024-06-05", title="Y", new_id=_ids("b"))
        events = update_event([a, b], "b1", {"title": "X", "id": "neu"}, cfg.id)
        assert [e.id for e in events] == ["a1"]

    def test_update_event_enum_value(self):
        cfg = _make_config()
        a = make_manual_event(cfg, "2024-06-05", new_id=_ids())
        events = update_event([a], "e1", {"category": Category.COMPANY_VISIT}, cfg.id)
        assert events[0].category == "CompanyVisit"

    def test_delete_event(self):
        cfg = _make_config()
        a = make_manual_event(cfg, "2024-06-05", new_id=_ids("a"))
        b = make_manual_event(cfg, "2024-06-06", new_id=_ids("b"))
        assert delete_event([a, b], "a1", cfg.id) == [b]


# ─── TAGESABWEICHUNGEN ────────────────────────────────────────────────────────

class TestOverrideEditing:
    def test_clean_override_clamps(self):
        ov = clean_override(LessonDayOverride(
            start_time="8:00", lesson_minutes=10, break_minutes=90, periods=5,
            class_count=30, classrooms=[" A "], teacher_rooms=["T "],
        ))
        assert ov.start_time == "08:00"
        assert ov.lesson_minutes == 30
        assert ov.break_minutes == 60
        assert ov.periods == 3
        assert ov.class_count == 20
        assert ov.classrooms == ["A"]
        assert ov.teacher_rooms == ["T"]

    def test_clean_override_keeps_unset(self):
        ov = clean_override(LessonDayOverride(enabled=False))
        assert ov.enabled is False
        assert ov.periods is None and ov.start_time is None

    def test_set_and_delete_override(self):
        cfg = _make_config()
        updated = set_override(cfg, "2024-06-05", LessonDayOverride(enabled=False))
        assert cfg.lesson_overrides == {}
        assert updated.lesson_overrides["2024-06-05"].enabled is False
        assert updated.last_updated > 0

        removed = delete_override(updated, "2024-06-05")
        assert removed.lesson_overrides == {}

    def test_enable_first_day_lessons(self):
        cfg = _make_config()
        manual = make_manual_event(cfg, "2024-06-03", title="Begrüßung", new_id=_ids("m"))
        events = [manual] + generate(cfg, _ids("a"))

        updated, events = enable_first_day_lessons(cfg, events, "13:00", _ids("b"))
        override = updated.lesson_overrides["2024-06-03"]
        assert override.start_time == "13:00"
        assert override.periods == 3
        assert override.classrooms == ["YY301"]
        assert override.teacher_rooms == ["YY305"]

        assert events[0] is manual
        first_day_lessons = [e for e in events
                             if e.date == "2024-06-03" and e.category == Category.JAPANESE_CLASS]
        assert [e.start_time for e in first_day_lessons] == ["13:00", "14:00", "15:00"]
        assert all(e.id.startswith("b") for e in events[1:])

    def test_enable_first_day_lessons_default_start(self):
        updated, _ = enable_first_day_lessons(_make_config(), [], None, _ids())
        assert updated.lesson_overrides["2024-06-03"].start_time == "09:00"

    def test_enable_first_day_lessons_keeps_short_lessons(self):
        """Anreisetag übernimmt Defaults außerhalb der Formulargrenzen unverändert."""
        cfg = _make_config(lessons={"lesson_minutes": 20, "break_minutes": 90, "periods": 1})
        updated, events = enable_first_day_lessons(cfg, [], "9:00", _ids())
        override = updated.lesson_overrides["2024-06-03"]
        assert (override.lesson_minutes, override.break_minutes) == (20, 90)
        assert override.start_time == "09:00"

        lessons = [e for e in events if e.category == Category.JAPANESE_CLASS]
        first_day = [(e.start_time, e.end_time) for e in lessons if e.date == "2024-06-03"]
        second_day = [(e.start_time, e.end_time) for e in lessons if e.date == "2024-06-04"]
        assert first_day == second_day == [("09:00", "09:20")]

    def test_enable_first_day_lessons_without_range(self):
        cfg = _make_config(start_date="2024-06-07", end_date="2024-06-03")
        assert enable_first_day_lessons(cfg, [], None, _ids()) == (cfg, [])


# ─── PROGRAMME ────────────────────────────────────────────────────────────────

class TestDeleteProgram:
    def test_removes_program_and_events(self):
        a = _make_config(id="prog_a")
        b = _make_config(id="prog_b")
        events = generate(a, _ids("a")) + generate(b, _ids("b"))
        data = ScheduleData(programs=[a, b], events=events, selected_program_id="prog_a")

        data = delete_program(data, "prog_a")
        assert [p.id for p in data.programs] == ["prog_b"]
        assert {e.program_id for e in data.events} == {"prog_b"}
        assert data.selected_program_id == "prog_b"

    def test_last_program_clears_selection(self):
        a = _make_config(id="prog_a")
        data = delete_program(ScheduleData(programs=[a], selected_program_id="prog_a"), "prog_a")
        assert data.programs == []
        assert data.selected_program_id is None
