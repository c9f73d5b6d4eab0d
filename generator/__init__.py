"""Generierung und Abgleich der Programmpunkte."""

from .auto_events import generate
from .reconcile import DedupReport, find_duplicates, normalize, regenerate, remove_generated_auto
from .resolution import ResolvedLessonDay, resolve_lesson_day

__all__ = [
    "generate",
    "regenerate",
    "normalize",
    "remove_generated_auto",
    "find_duplicates",
    "DedupReport",
    "ResolvedLessonDay",
    "resolve_lesson_day",
]
