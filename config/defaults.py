from datetime import date

from config.schema import (
    CeremonyDefaults,
    EventMaster,
    LessonDefaults,
    ProgramConfig,
    ProgramType,
)


def default_lessons() -> LessonDefaults:
    """Standard-Sprachunterricht: 3 Stunden à 50 min ab 09:00, 10 min Pause, 1 Klasse.

    09:00 - 09:50  1. Stunde
    10:00 - 10:50  2. Stunde
    11:00 - 11:50  3. Stunde
    """
    return LessonDefaults(
        enabled=True,
        start_time="09:00",
        lesson_minutes=50,
        break_minutes=10,
        periods=3,
        class_count=1,
        default_classroom="",
        default_teacher_room="YY305",
    )


def default_ceremony() -> CeremonyDefaults:
    """Abschlussfeier am letzten Tag: 13:10, 60 Minuten."""
    return CeremonyDefaults(start_time="13:10", duration_minutes=60, location="")


def default_program_config(today: date | None = None) -> ProgramConfig:
    """Neues Programm: eintägig (heute), 20 Teilnehmende, 5 Buddies."""
    iso = (today or date.today()).isoformat()
    return ProgramConfig(
        name="新規プログラム",
        program_type=ProgramType.RSJP,
        start_date=iso,
        end_date=iso,
        students_count=20,
        default_buddy_count=5,
        lessons=default_lessons(),
        lesson_overrides={},
        ceremony=default_ceremony(),
    ).touch()


# ─── PROGRAMMPUNKT-VORLAGEN ───
# Kulturprogramm: 13:10 Start, Begleitung 1 Person, Bus.
# Abweichungen sind explizit angegeben.

def _cultural(id: str, title: str, **overrides) -> EventMaster:
    return EventMaster(id=id, title=title, category="Cultural", **overrides)


EVENT_MASTERS: list[EventMaster] = [
    _cultural("tea", "茶道体験", default_duration_minutes=170),
    _cultural("calligraphy", "書道体験"),
    _cultural("maiko", "舞妓体験（鑑賞）"),
    _cultural("yuzen", "友禅染体験"),
    _cultural("kitanotenmangu", "寺社参拝（例：北野天満宮）", default_arrangements_needed=False),
    _cultural("wagashi", "和菓子作り体験"),
    _cultural("ikebana", "華道体験"),
    _cultural("zen", "禅体験（坐禅）", default_arrangements_needed=False),
    _cultural("taiko", "和太鼓体験"),
    _cultural("cook", "日本料理体験"),
    _cultural("goldleaf", "金箔体験"),
    _cultural("craft", "伝統工芸見学", default_arrangements_needed=False),
    _cultural("lecture", "京都文化講義（学内）", default_transport_mode="OnCampus"),
    _cultural("walk", "市内散策（ガイド付き）", default_transport_mode="Walk",
              default_arrangements_needed=False),
    _cultural("museum", "博物館・資料館見学", default_arrangements_needed=False),
    EventMaster(id="company_visit", title="企業訪問", category="CompanyVisit"),
    EventMaster(
        id="buddy_lunch", title="バディランチ", category="BuddyLunch",
        default_start_time="12:20", default_duration_minutes=50,
        default_kvh_required=False, default_kvh_count=0,
        default_transport_mode="OnCampus", default_arrangements_needed=False,
    ),
]


def get_event_master(master_id: str) -> EventMaster | None:
    """Sucht eine Vorlage anhand ihrer ID."""
    return next((m for m in EVENT_MASTERS if m.id == master_id), None)
