"""Programm-Konfigurationen: Laden, Speichern und Auflisten der YAML-Dateien.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.prompt import Confirm
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

from config.schema import ProgramConfig
from export.helpers import safe_filename

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120

PROGRAMS_DIR = Path("programs")
DEFAULT_DATA_JSON = Path("output") / "schedule_data.json"


# ─── YAML-KOMMENTAR-AUFBAU ───

def _yaml_header() -> str:
    return f"""\
# ============================================
# RSJP-Reiseplan: Programmkonfiguration
# Version: 1.0
# Gespeichert: {date.today().isoformat()}
# ============================================
"""


_SECTION_COMMENTS = {
    "lessons": (
        "Sprachunterricht",
        "Gilt für jeden Werktag außer dem Anreisetag.\n"
        "periods 1–3, class_count 1–50; Listen werden auf class_count aufgefüllt.",
    ),
    "lesson_overrides": (
        "Tagesabweichungen",
        "Schlüssel = Datum (YYYY-MM-DD). enabled: false schaltet den Unterricht ab,\n"
        "leere Felder übernehmen die Werte aus 'lessons'.",
    ),
    "ceremony": (
        "Abschlussfeier",
        "Am letzten Programmtag.",
    ),
}


class ConfigManager:
    def __init__(self, programs_dir: Optional[Path] = None):
        self.programs_dir = Path(programs_dir) if programs_dir else PROGRAMS_DIR

    def path_for(self, name: str) -> Path:
        """YAML-Pfad für einen Programmnamen (unzulässige Zeichen → "_")."""
        return self.programs_dir / f"{safe_filename(name)}.yaml"

    def resolve(self, key: str) -> Path:
        """Programm-Angabe auf der Kommandozeile: Dateipfad oder Programmname."""
        candidate = Path(key)
        if candidate.suffix in (".yaml", ".yml") and candidate.exists():
            return candidate
        return self.path_for(key)

    # ─── Laden ───

    def load(self, path: Path) -> ProgramConfig:
        """Lade Programm aus YAML. Validiert automatisch via Pydantic."""
        target = Path(path)
        if not target.exists():
            raise FileNotFoundError(
                f"Programmdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py new NAME --start ... --end ...' aus."
            )
        with open(target, "r", encoding="utf-8") as f:
            try:
                raw = yaml.load(f)
            except YAMLError as e:
                raise ValueError(f"Programmdatei ist kein gültiges YAML: {target}\n{e}") from e
        try:
            return ProgramConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Programmdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    def load_program(self, key: str) -> ProgramConfig:
        return self.load(self.resolve(key))

    # ─── Speichern ───

    def save(self, config: ProgramConfig, path: Optional[Path] = None, quiet: bool = False) -> Path:
        """Speichere Programm als YAML mit deutschen Abschnitts-Kommentaren."""
        target = Path(path) if path else self.path_for(config.name)
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_yaml_header() + "\n")
            yaml.dump(data, f)

        if not quiet:
            console.print(f"[green]✓[/green] Programm gespeichert: {target}")
        return target

    def _build_commented_yaml(self, config: ProgramConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        cm.yaml_add_eol_comment("Epoch-Millisekunden, wird bei jeder Änderung gesetzt", "last_updated")
        return cm

    # ─── Programmliste ───

    def list_programs(self) -> list[dict]:
        """Listet alle gespeicherten Programme auf (ungültige Dateien mit Fehlertext)."""
        if not self.programs_dir.exists():
            return []
        programs = []
        for p in sorted(self.programs_dir.glob("*.yaml")):
            try:
                cfg = self.load(p)
            except ValueError as e:
                programs.append({"path": str(p), "name": p.stem, "error": str(e).splitlines()[0]})
                continue
            programs.append({
                "path": str(p),
                "name": cfg.name,
                "id": cfg.id,
                "start_date": cfg.start_date,
                "end_date": cfg.end_date,
                "error": "",
            })
        return programs

    def delete(self, key: str, confirm: bool = True) -> bool:
        """Löscht eine Programmdatei; gibt False zurück, wenn abgebrochen."""
        path = self.resolve(key)
        if not path.exists():
            raise FileNotFoundError(f"Programmdatei nicht gefunden: {path}")
        if confirm and not Confirm.ask(f"Programm '{path.stem}' wirklich löschen?", default=False):
            console.print("[yellow]Abgebrochen.[/yellow]")
            return False
        path.unlink()
        return True
