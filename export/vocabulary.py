"""Feste Beschriftungen für die Exporte (Japanisch = primär, Englisch = sekundär).

Kein Übersetzungsdienst: nur feste Tabellen. Fehlt eine Zuordnung, bleibt
der Text unverändert.
"""

import re
from enum import Enum

from config.schema import ProgramType
from models.event import Category, TransportMode, YesNo

# Bei Änderungen an den Tabellen erhöhen (Exporte werden von Nutzern gedifft)
VOCABULARY_VERSION = 1


class ExportLang(str, Enum):
    JA = "ja"
    EN = "en"


CATEGORY_LABELS: dict[ExportLang, dict[str, str]] = {
    ExportLang.JA: {
        Category.JAPANESE_CLASS.value: "日本語講座",
        Category.ORIENTATION.value:    "オリエン",
        Category.ESCORT.value:         "引率",
        Category.CAMPUS_TOUR.value:    "キャンパスツアー",
        Category.CULTURAL.value:       "文化体験",
        Category.COMPANY_VISIT.value:  "企業訪問",
        Category.BUDDY_LUNCH.value:    "バディランチ",
        Category.CEREMONY.value:       "修了式",
        Category.OTHER.value:          "その他",
    },
    ExportLang.EN: {
        Category.JAPANESE_CLASS.value: "Japanese Class",
        Category.ORIENTATION.value:    "Orientation",
        Category.ESCORT.value:         "Escort",
        Category.CAMPUS_TOUR.value:    "Campus Tour",
        Category.CULTURAL.value:       "Cultural Experience",
        Category.COMPANY_VISIT.value:  "Company Visit",
        Category.BUDDY_LUNCH.value:    "Buddy Lunch",
        Category.CEREMONY.value:       "Completion Ceremony",
        Category.OTHER.value:          "Other",
    },
}

YES_NO_LABELS: dict[ExportLang, dict[str, str]] = {
    ExportLang.JA: {YesNo.YES.value: "あり", YesNo.NO.value: "なし"},
    ExportLang.EN: {YesNo.YES.value: "Yes", YesNo.NO.value: "No"},
}

TRANSPORT_LABELS: dict[ExportLang, dict[str, str]] = {
    ExportLang.JA: {
        TransportMode.NONE.value: "なし",
        TransportMode.BUS.value: "バス",
        TransportMode.WALK.value: "徒歩",
        TransportMode.ON_CAMPUS.value: "学内",
    },
    ExportLang.EN: {
        TransportMode.NONE.value: "None",
        TransportMode.BUS.value: "Bus",
        TransportMode.WALK.value: "Walk",
        TransportMode.ON_CAMPUS.value: "On campus",
    },
}

PROGRAM_TYPE_LABELS: dict[str, str] = {
    ProgramType.RSJP.value: "RSJP（レギュラー）",
    ProgramType.CUSTOM.value: "カスタム",
}

WEEKDAY_HEADERS: dict[ExportLang, list[str]] = {
    # Sonntag zuerst (Index = Python weekday() + 1 mod 7)
    ExportLang.JA: ["日", "月", "火", "水", "木", "金", "土"],
    ExportLang.EN: ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"],
}

# Feste Phrasen der Exporte
PHRASES: dict[ExportLang, dict[str, str]] = {
    ExportLang.JA: {
        "category": "カテゴリ",
        "room_setup": "教室手配",
        "students": "留学生",
        "buddies": "バディ",
        "transport": "移動",
        "notes": "備考",
        "period": "期間",
        "calendar": "カレンダー",
        "lesson_block": "日本語講座",
    },
    ExportLang.EN: {
        "category": "Category",
        "room_setup": "Room setup",
        "students": "Students",
        "buddies": "Buddies",
        "transport": "Transport",
        "notes": "Notes",
        "period": "Period",
        "calendar": "Calendar",
        "lesson_block": "Japanese Class",
    },
}

# Ersetzungen für Titel/Ort/Notizen im englischen Export, in dieser Reihenfolge
# ("バディランチ" vor "バディ")
TEXT_REPLACEMENTS_EN: list[tuple[re.Pattern, str]] = [
    (re.compile(r"日本語講座"), "Japanese Class"),
    (re.compile(r"文化体験"), "Cultural Experience"),
    (re.compile(r"企業訪問"), "Company Visit"),
    (re.compile(r"キャンパスツアー"), "Campus Tour"),
    (re.compile(r"オリエン(テーション)?"), "Orientation"),
    (re.compile(r"引率"), "Escort"),
    (re.compile(r"修了式"), "Completion Ceremony"),
    (re.compile(r"バディランチ"), "Buddy Lunch"),
    (re.compile(r"バディ"), "Buddy"),
    (re.compile(r"留学生"), "Students"),
    (re.compile(r"備考"), "Notes"),
]


def _lang(lang) -> ExportLang:
    return ExportLang(lang)


def enum_value(value) -> str:
    """Rohwert eines Enum-Felds als Text ("Yes", "Bus", "RSJP" ...)."""
    return value.value if isinstance(value, Enum) else str(value)


def category_label(category, lang=ExportLang.JA) -> str:
    key = enum_value(category)
    return CATEGORY_LABELS[_lang(lang)].get(key, key)


def yes_no_label(value, lang=ExportLang.JA) -> str:
    key = enum_value(value)
    return YES_NO_LABELS[_lang(lang)].get(key, key)


def transport_label(value, lang=ExportLang.JA) -> str:
    key = enum_value(value)
    return TRANSPORT_LABELS[_lang(lang)].get(key, key)


def program_type_label(program_type) -> str:
    key = enum_value(program_type)
    return PROGRAM_TYPE_LABELS.get(key, key)


def phrase(key: str, lang=ExportLang.JA) -> str:
    return PHRASES[_lang(lang)][key]


def translate_text(text: str, lang=ExportLang.JA) -> str:
    """Feste Ersetzungstabelle für Freitext; im Japanischen unverändert."""
    out = text or ""
    if _lang(lang) != ExportLang.EN:
        return out
    for pattern, replacement in TEXT_REPLACEMENTS_EN:
        out = pattern.sub(replacement, out)
    return out
