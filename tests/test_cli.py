"""Tests für die Kommandozeile (main.py) mit isolierten Verzeichnissen."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from config.manager import ConfigManager
from main import cli
from models.schedule_data import ScheduleData


def _invoke(tmp_path: Path, *args: str, input: str | None = None):
    runner = CliRunner()
    return runner.invoke(
        cli,
        ["--programs-dir", str(tmp_path / "programs"), "--data", str(tmp_path / "out" / "data.json"), *args],
        input=input,
    )


def _data(tmp_path: Path) -> ScheduleData:
    return ScheduleData.load_json(tmp_path / "out" / "data.json")


def _program_id(tmp_path: Path) -> str:
    return ConfigManager(tmp_path / "programs").load_program("Sommer").id


@pytest.fixture
def generated(tmp_path: Path) -> Path:
    """Programm "Sommer" (Mo–Fr) angelegt und generiert."""
    result = _invoke(tmp_path, "new", "Sommer", "--start", "2024-06-03", "--end", "2024-06-07")
    assert result.exit_code == 0, result.output
    result = _invoke(tmp_path, "generate", "Sommer")
    assert result.exit_code == 0, result.output
    return tmp_path


# ─── GRUNDBEFEHLE ─────────────────────────────────────────────────────────────

class TestCliBasics:
    def test_help(self):
        """main.py --help gibt Usage aus."""
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Usage" in result.output

    @pytest.mark.parametrize("command", [
        "new", "list", "show", "generate", "dedupe", "override", "masters",
        "add", "remove", "delete", "export", "import-data",
    ])
    def test_command_registered(self, command):
        result = CliRunner().invoke(cli, [command, "--help"])
        assert result.exit_code == 0

    def test_masters(self, tmp_path: Path):
        result = _invoke(tmp_path, "masters")
        assert result.exit_code == 0
        assert "tea" in result.output

    def test_list_empty(self, tmp_path: Path):
        result = _invoke(tmp_path, "list")
        assert result.exit_code == 0
        assert "Keine Programme" in result.output


# ─── NEW / GENERATE / SHOW ────────────────────────────────────────────────────

class TestCliProgram:
    def test_new_creates_yaml(self, tmp_path: Path):
        result = _invoke(tmp_path, "new", "Sommer", "--start", "2024-06-03", "--end", "2024-06-07",
                         "--students", "12", "--classes", "2")
        assert result.exit_code == 0, result.output
        cfg = ConfigManager(tmp_path / "programs").load_program("Sommer")
        assert cfg.students_count == 12
        assert cfg.lessons.class_names == ["嵐山", "宇治"]

    def test_new_refuses_overwrite(self, generated: Path):
        result = _invoke(generated, "new", "Sommer", "--start", "2024-06-03", "--end", "2024-06-07")
        assert result.exit_code == 1
        assert "existiert bereits" in result.output

    def test_new_invalid_date(self, tmp_path: Path):
        result = _invoke(tmp_path, "new", "X", "--start", "2024-13-01", "--end", "2024-06-07")
        assert result.exit_code == 1

    def test_generate(self, generated: Path):
        data = _data(generated)
        events = data.program_events(_program_id(generated))
        assert len(events) == 16
        assert data.selected_program_id == _program_id(generated)

    def test_generate_twice_is_stable(self, generated: Path):
        result = _invoke(generated, "generate", "Sommer")
        assert result.exit_code == 0
        assert len(_data(generated).events) == 16

    def test_show(self, generated: Path):
        result = _invoke(generated, "show", "Sommer")
        assert result.exit_code == 0, result.output
        assert "Sommer" in result.output
        assert "Abschlussfeier" in result.output
        assert "Programmpunkte (16)" in result.output

    def test_show_unknown_program(self, tmp_path: Path):
        result = _invoke(tmp_path, "show", "Gibt-es-nicht")
        assert result.exit_code == 1
        assert "nicht gefunden" in result.output

    def test_list(self, generated: Path):
        result = _invoke(generated, "list")
        assert result.exit_code == 0
        assert "Sommer" in result.output

    def test_delete(self, generated: Path):
        result = _invoke(generated, "delete", "Sommer", "--yes")
        assert result.exit_code == 0, result.output
        assert not (generated / "programs" / "Sommer.yaml").exists()
        data = _data(generated)
        assert data.events == [] and data.programs == []


# ─── MANUELLE EINTRÄGE / DUPLIKATE ────────────────────────────────────────────

class TestCliEditing:
    def test_add_from_master(self, generated: Path):
        result = _invoke(generated, "add", "Sommer", "2024-06-05", "--master", "tea")
        assert result.exit_code == 0, result.output
        added = [e for e in _data(generated).events if not e.is_auto]
        assert len(added) == 1
        assert added[0].title == "茶道体験"
        assert (added[0].start_time, added[0].end_time) == ("13:10", "16:00")

    def test_add_free_event(self, generated: Path):
        result = _invoke(generated, "add", "Sommer", "2024-06-06", "--title", "Stadtführung",
                         "--category", "Other", "--start", "14:00", "--duration", "90",
                         "--transport", "Bus", "--bus-count", "2", "--round-trip")
        assert result.exit_code == 0, result.output
        e = next(e for e in _data(generated).events if not e.is_auto)
        assert (e.start_time, e.end_time) == ("14:00", "15:30")
        assert (e.bus_count, e.bus_trip_type) == (2, "RoundTrip")

    def test_add_unknown_master(self, generated: Path):
        result = _invoke(generated, "add", "Sommer", "2024-06-05", "--master", "gibt-es-nicht")
        assert result.exit_code == 1

    def test_manual_event_survives_generate(self, generated: Path):
        _invoke(generated, "add", "Sommer", "2024-06-05", "--master", "tea")
        _invoke(generated, "generate", "Sommer")
        assert len(_data(generated).events) == 17

    def test_dedupe(self, generated: Path):
        _invoke(generated, "add", "Sommer", "2024-06-05", "--master", "tea")
        _invoke(generated, "add", "Sommer", "2024-06-05", "--master", "calligraphy")
        assert len(_data(generated).events) == 18

        result = _invoke(generated, "dedupe", "Sommer", "--dry-run")
        assert result.exit_code == 0, result.output
        assert len(_data(generated).events) == 18

        result = _invoke(generated, "dedupe", "Sommer")
        assert result.exit_code == 0, result.output
        assert len(_data(generated).events) == 17

    def test_dedupe_nothing_to_do(self, generated: Path):
        result = _invoke(generated, "dedupe", "Sommer")
        assert result.exit_code == 0
        assert "Keine Duplikate" in result.output

    def test_remove(self, generated: Path):
        event_id = _data(generated).events[0].id
        result = _invoke(generated, "remove", "Sommer", event_id)
        assert result.exit_code == 0, result.output
        assert event_id not in {e.id for e in _data(generated).events}

    def test_remove_unknown(self, generated: Path):
        result = _invoke(generated, "remove", "Sommer", "item_gibt_es_nicht")
        assert result.exit_code == 1


# ─── TAGESABWEICHUNGEN ────────────────────────────────────────────────────────

class TestCliOverride:
    def test_override_disable_day(self, generated: Path):
        result = _invoke(generated, "override", "set", "Sommer", "2024-06-05", "--disable")
        assert result.exit_code == 0, result.output
        cfg = ConfigManager(generated / "programs").load_program("Sommer")
        assert cfg.lesson_overrides["2024-06-05"].enabled is False
        assert not [e for e in _data(generated).events if e.date == "2024-06-05"]

    def test_override_rooms(self, generated: Path):
        result = _invoke(generated, "override", "set", "Sommer", "2024-06-05",
                         "--classes", "2", "--room", "A1", "--room", "A2", "--periods", "1")
        assert result.exit_code == 0, result.output
        day = [e for e in _data(generated).events if e.date == "2024-06-05"]
        assert [e.location for e in day] == ["A1", "A2"]

    def test_override_delete(self, generated: Path):
        _invoke(generated, "override", "set", "Sommer", "2024-06-05", "--disable")
        result = _invoke(generated, "override", "delete", "Sommer", "2024-06-05")
        assert result.exit_code == 0, result.output
        assert len(_data(generated).events) == 16

    def test_override_first_day(self, generated: Path):
        result = _invoke(generated, "override", "first-day", "Sommer", "--start", "13:00")
        assert result.exit_code == 0, result.output
        first_day = [e for e in _data(generated).events if e.date == "2024-06-03"]
        assert len(first_day) == 3 + 3


# ─── EXPORT / IMPORT ──────────────────────────────────────────────────────────

class TestCliExport:
    @pytest.mark.parametrize("fmt,filename", [
        ("csv", "Sommer_schedule.csv"),
        ("ics", "Sommer_schedule_JA_JST.ics"),
        ("html", "Sommer_calendar_JA.html"),
        ("xlsx", "Sommer_schedule.xlsx"),
    ])
    def test_export_default_names(self, generated: Path, fmt: str, filename: str):
        result = _invoke(generated, "export", "Sommer", "--format", fmt)
        assert result.exit_code == 0, result.output
        assert (generated / "out" / filename).exists()

    def test_export_explicit_output(self, generated: Path):
        out = generated / "kalender.html"
        result = _invoke(generated, "export", "Sommer", "--format", "html", "--lang", "en",
                         "--week-start", "monday", "--output", str(out))
        assert result.exit_code == 0, result.output
        assert "<th>Mon</th>" in out.read_text(encoding="utf-8")

    def test_import_older_asks(self, generated: Path):
        backup = generated / "backup.json"
        backup.write_text(ScheduleData(last_updated=1).model_dump_json(), encoding="utf-8")

        result = _invoke(generated, "import-data", str(backup), input="n\n")
        assert result.exit_code == 0, result.output
        assert "Abgebrochen" in result.output
        assert len(_data(generated).events) == 16

        result = _invoke(generated, "import-data", str(backup), "--force")
        assert result.exit_code == 0, result.output
        assert _data(generated).events == []

    def test_import_invalid_file(self, generated: Path):
        broken = generated / "broken.json"
        broken.write_text("[]", encoding="utf-8")
        result = _invoke(generated, "import-data", str(broken))
        assert result.exit_code == 1
