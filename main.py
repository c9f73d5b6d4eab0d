"""RSJP-Reiseplaner: Haupt-CLI.

Verwendung:
  python main.py new <name> --start 2024-06-03 --end 2024-06-07   Programm anlegen
  python main.py list                                          Programme auflisten
  python main.py show <programm>                               Konfiguration + Programmpunkte
  python main.py generate <programm>                           Auto-Einträge neu erzeugen
  python main.py dedupe <programm> [--dry-run]                 Duplikate entfernen / anzeigen
  python main.py override set <programm> <datum> [...]         Tagesabweichung setzen
  python main.py override delete <programm> <datum>            Tagesabweichung löschen
  python main.py override first-day <programm>                 Unterricht am Anreisetag
  python main.py masters                                       Vorlagen auflisten
  python main.py add <programm> <datum> --master tea           Programmpunkt hinzufügen
  python main.py remove <programm> <event-id>                  Programmpunkt löschen
  python main.py delete <programm>                             Programm löschen
  python main.py export <programm> --format ics --lang en      Exportieren
  python main.py import-data <datei.json>                      Datendatei übernehmen
"""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

from config.manager import DEFAULT_DATA_JSON, PROGRAMS_DIR, ConfigManager

console = Console()


# ─── Kontext / Laden ──────────────────────────────────────────────────────────

def _manager(ctx: click.Context) -> ConfigManager:
    return ConfigManager(ctx.obj["programs_dir"])


def _load_program_or_abort(ctx: click.Context, key: str):
    """Lädt eine Programmdatei oder bricht mit Fehlermeldung ab."""
    mgr = _manager(ctx)
    try:
        return mgr, mgr.load_program(key)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)


def _load_data_or_abort(ctx: click.Context):
    """Lädt die Datendatei (leer, wenn sie noch nicht existiert)."""
    from models.schedule_data import ScheduleData, ScheduleDataError
    try:
        return ScheduleData.load_or_empty(ctx.obj["data_path"])
    except ScheduleDataError as e:
        console.print(f"[red bold]Datendatei nicht lesbar:[/red bold]\n{escape(str(e))}")
        sys.exit(1)


def _save_data(ctx: click.Context, data) -> None:
    data.save_json(ctx.obj["data_path"])


def _parse_date_or_abort(value: str) -> str:
    from models.civil_time import parse_date
    if parse_date(value) is None:
        console.print(f"[red]Ungültiges Datum: {value} (erwartet YYYY-MM-DD)[/red]")
        sys.exit(1)
    return value


# ─── NEW / LIST / DELETE ──────────────────────────────────────────────────────

@click.command("new")
@click.argument("name")
@click.option("--start", "start_date", required=True, help="Erster Programmtag (YYYY-MM-DD).")
@click.option("--end", "end_date", required=True, help="Letzter Programmtag (YYYY-MM-DD).")
@click.option("--type", "program_type", type=click.Choice(["RSJP", "Custom"]), default="RSJP",
              help="Programmart.")
@click.option("--students", default=20, show_default=True, help="Teilnehmende.")
@click.option("--buddies", default=5, show_default=True, help="Buddies für die Campus-Tour.")
@click.option("--classes", default=1, show_default=True, help="Parallele Klassen im Unterricht.")
@click.option("--force", is_flag=True, default=False, help="Vorhandene Datei überschreiben.")
@click.pass_context
def cmd_new(ctx, name: str, start_date: str, end_date: str, program_type: str,
            students: int, buddies: int, classes: int, force: bool):
    """Legt ein neues Programm als YAML-Datei an."""
    from config.defaults import default_program_config
    from config.schema import ProgramConfig

    _parse_date_or_abort(start_date)
    _parse_date_or_abort(end_date)
    mgr = _manager(ctx)
    path = mgr.path_for(name)
    if path.exists() and not force:
        console.print(
            f"[yellow]Programm existiert bereits: {path}[/yellow]\n"
            "Verwenden Sie [bold]--force[/bold] zum Überschreiben."
        )
        sys.exit(1)

    base = default_program_config().model_dump()
    base.update(
        name=name,
        program_type=program_type,
        start_date=start_date,
        end_date=end_date,
        students_count=students,
        default_buddy_count=buddies,
    )
    base["lessons"].update(class_count=classes, class_names=[], class_rooms=[])
    config = ProgramConfig.model_validate(base)
    mgr.save(config, path)
    if not config.dates:
        console.print("[yellow]Hinweis: Start liegt nach dem Ende – es wird nichts generiert.[/yellow]")
    console.print(f"Weiter mit [bold]python main.py generate \"{name}\"[/bold]")


@click.command("list")
@click.pass_context
def cmd_list(ctx):
    """Listet alle Programmdateien auf."""
    programs = _manager(ctx).list_programs()
    if not programs:
        console.print("[dim]Keine Programme vorhanden.[/dim]")
        return
    table = Table(title="Programme", box=box.ROUNDED)
    table.add_column("Name", style="bold")
    table.add_column("Zeitraum")
    table.add_column("Datei")
    for p in programs:
        if p["error"]:
            table.add_row(p["name"], f"[red]{escape(p['error'])}[/red]", p["path"])
        else:
            table.add_row(p["name"], f"{p['start_date']} → {p['end_date']}", p["path"])
    console.print(table)


@click.command("delete")
@click.argument("program")
@click.option("--yes", "-y", is_flag=True, default=False, help="Ohne Rückfrage löschen.")
@click.pass_context
def cmd_delete(ctx, program: str, yes: bool):
    """Löscht ein Programm samt aller Programmpunkte."""
    from generator.editing import delete_program

    mgr, config = _load_program_or_abort(ctx, program)
    if not mgr.delete(program, confirm=not yes):
        return
    data = _load_data_or_abort(ctx)
    removed = len(data.program_events(config.id))
    data = delete_program(data, config.id)
    _save_data(ctx, data)
    console.print(f"[green]✓[/green] Programm '{config.name}' gelöscht ({removed} Einträge entfernt).")


# ─── SHOW ─────────────────────────────────────────────────────────────────────

@click.command("show")
@click.argument("program")
@click.pass_context
def cmd_show(ctx, program: str):
    """Zeigt Konfiguration, Tagesabweichungen und Programmpunkte an."""
    from export.vocabulary import category_label, program_type_label
    from models.civil_time import weekday_label

    _, config = _load_program_or_abort(ctx, program)
    data = _load_data_or_abort(ctx)

    console.print(Panel(
        f"[bold]{config.name}[/bold]  |  {program_type_label(config.program_type)}  |  "
        f"{config.start_date} → {config.end_date}  |  "
        f"Teilnehmende: {config.students_count}  |  Buddies: {config.default_buddy_count}",
        title="Programm",
        border_style="cyan",
    ))

    ls = config.lessons
    table = Table(title="Sprachunterricht", box=box.ROUNDED)
    table.add_column("Klasse")
    table.add_column("Name")
    table.add_column("Raum")
    for i, (cls_name, room) in enumerate(zip(ls.class_names, ls.class_rooms), 1):
        table.add_row(str(i), cls_name, room)
    console.print(table)
    console.print(
        f"[bold]Unterricht:[/bold] {'aktiv' if ls.enabled else 'aus'} | "
        f"Beginn {ls.start_time} | {ls.periods} × {ls.lesson_minutes} min, "
        f"Pause {ls.break_minutes} min | Lehrerraum {ls.default_teacher_room}"
    )
    console.print(
        f"[bold]Abschlussfeier:[/bold] {config.ceremony.start_time}, "
        f"{config.ceremony.duration_minutes} min, {config.ceremony.location or '–'}"
    )

    if config.lesson_overrides:
        ov_table = Table(title="Tagesabweichungen", box=box.ROUNDED)
        ov_table.add_column("Datum")
        ov_table.add_column("Aktiv")
        ov_table.add_column("Beginn")
        ov_table.add_column("Stunden")
        ov_table.add_column("Klassen")
        ov_table.add_column("Räume")
        for day in sorted(config.lesson_overrides):
            ov = config.lesson_overrides[day]
            ov_table.add_row(
                day,
                "ja" if ov.enabled else "[red]nein[/red]",
                ov.start_time or "–",
                str(ov.periods) if ov.periods is not None else "–",
                str(ov.class_count) if ov.class_count is not None else "–",
                ", ".join(r for r in ov.classrooms if r) or "–",
            )
        console.print(ov_table)

    events = data.program_events(config.id)
    if not events:
        console.print("[dim]Noch keine Programmpunkte. "
                      "Führen Sie [bold]python main.py generate[/bold] aus.[/dim]")
        return

    ev_table = Table(title=f"Programmpunkte ({len(events)})", box=box.SIMPLE)
    ev_table.add_column("Datum")
    ev_table.add_column("Zeit")
    ev_table.add_column("Kategorie")
    ev_table.add_column("Titel")
    ev_table.add_column("Ort")
    ev_table.add_column("ID", style="dim")
    for e in events:
        marker = "" if e.is_auto else " [cyan](manuell)[/cyan]"
        ev_table.add_row(
            f"{e.date} ({weekday_label(e.date)})",
            f"{e.start_time}–{e.end_time}",
            category_label(e.category),
            escape(e.title) + marker,
            e.location,
            e.id,
        )
    console.print(ev_table)


# ─── GENERATE / DEDUPE ────────────────────────────────────────────────────────

@click.command("generate")
@click.argument("program")
@click.pass_context
def cmd_generate(ctx, program: str):
    """Erzeugt die Auto-Einträge neu (manuelle Einträge bleiben erhalten)."""
    from generator.reconcile import regenerate

    _, config = _load_program_or_abort(ctx, program)
    data = _load_data_or_abort(ctx)
    before = data.program_events(config.id)
    events = regenerate(data.events, config)
    data = data.replace_program(config).with_events(events).select(config.id)
    _save_data(ctx, data)

    after = data.program_events(config.id)
    auto = sum(1 for e in after if e.is_auto)
    console.print(
        f"[green]✓[/green] {config.name}: {auto} Auto-Einträge, "
        f"{len(after) - auto} manuelle Einträge (vorher {len(before)} gesamt)"
    )


def _print_dedup_report(report) -> None:
    from generator.reconcile import REASON_CULTURAL
    table = Table(title="Entfernte Einträge", box=box.ROUNDED)
    table.add_column("Datum")
    table.add_column("Titel")
    table.add_column("Grund")
    table.add_column("Behalten (ID)", style="dim")
    for d in report.dropped:
        reason = "Kulturprogramm am selben Tag" if d.reason == REASON_CULTURAL else "exaktes Duplikat"
        table.add_row(d.date, d.title, reason, d.kept_id)
    console.print(table)


@click.command("dedupe")
@click.argument("program")
@click.option("--dry-run", is_flag=True, default=False, help="Nur anzeigen, nichts speichern.")
@click.pass_context
def cmd_dedupe(ctx, program: str, dry_run: bool):
    """Entfernt doppelte Einträge und zeigt an, welche verworfen wurden."""
    from generator.reconcile import find_duplicates, normalize

    _, config = _load_program_or_abort(ctx, program)
    data = _load_data_or_abort(ctx)
    report = find_duplicates(data.events, config.id)
    if report.is_empty():
        console.print("[green]✓[/green] Keine Duplikate gefunden.")
        return
    _print_dedup_report(report)
    if dry_run:
        console.print("[yellow]--dry-run: nichts gespeichert.[/yellow]")
        return
    _save_data(ctx, data.with_events(normalize(data.events, config.id)))
    console.print(f"[green]✓[/green] {len(report.dropped)} Einträge entfernt.")


# ─── OVERRIDE ─────────────────────────────────────────────────────────────────

@click.group("override")
def cmd_override():
    """Tagesabweichungen für den Sprachunterricht verwalten."""


def _store_config_and_regenerate(ctx, mgr, key: str, config, regenerate_now: bool) -> None:
    from generator.reconcile import regenerate
    mgr.save(config, mgr.resolve(key), quiet=True)
    data = _load_data_or_abort(ctx).replace_program(config)
    if regenerate_now:
        data = data.with_events(regenerate(data.events, config))
    _save_data(ctx, data)


@cmd_override.command("set")
@click.argument("program")
@click.argument("day")
@click.option("--disable", is_flag=True, default=False, help="An diesem Tag kein Unterricht.")
@click.option("--start", "start_time", default=None, help="Beginn der ersten Stunde (HH:MM).")
@click.option("--lesson-minutes", type=int, default=None, help="Dauer einer Stunde (30–120).")
@click.option("--break-minutes", type=int, default=None, help="Pause (0–60).")
@click.option("--periods", type=int, default=None, help="Stunden (1–3).")
@click.option("--classes", type=int, default=None, help="Parallele Klassen (1–20).")
@click.option("--room", "rooms", multiple=True, help="Raum pro Klasse (mehrfach, in Klassenreihenfolge).")
@click.option("--teacher-room", "teacher_rooms", multiple=True, help="Lehrerraum pro Klasse (mehrfach).")
@click.option("--no-regenerate", is_flag=True, default=False, help="Auto-Einträge nicht neu erzeugen.")
@click.pass_context
def override_set(ctx, program: str, day: str, disable: bool, start_time, lesson_minutes,
                 break_minutes, periods, classes, rooms, teacher_rooms, no_regenerate: bool):
    """Setzt die Abweichung für einen Tag (ersetzt eine vorhandene)."""
    from config.schema import LessonDayOverride
    from generator.editing import set_override

    _parse_date_or_abort(day)
    mgr, config = _load_program_or_abort(ctx, program)
    if day not in config.dates:
        console.print(f"[yellow]Hinweis: {day} liegt außerhalb des Programmzeitraums.[/yellow]")
    override = LessonDayOverride(
        enabled=not disable,
        start_time=start_time,
        lesson_minutes=lesson_minutes,
        break_minutes=break_minutes,
        periods=periods,
        class_count=classes,
        classrooms=list(rooms),
        teacher_rooms=list(teacher_rooms),
    )
    config = set_override(config, day, override)
    _store_config_and_regenerate(ctx, mgr, program, config, not no_regenerate)
    console.print(f"[green]✓[/green] Abweichung für {day} gespeichert.")


@cmd_override.command("delete")
@click.argument("program")
@click.argument("day")
@click.option("--no-regenerate", is_flag=True, default=False, help="Auto-Einträge nicht neu erzeugen.")
@click.pass_context
def override_delete(ctx, program: str, day: str, no_regenerate: bool):
    """Löscht die Abweichung für einen Tag."""
    from generator.editing import delete_override

    mgr, config = _load_program_or_abort(ctx, program)
    if day not in config.lesson_overrides:
        console.print(f"[yellow]Keine Abweichung für {day} vorhanden.[/yellow]")
        return
    config = delete_override(config, day)
    _store_config_and_regenerate(ctx, mgr, program, config, not no_regenerate)
    console.print(f"[green]✓[/green] Abweichung für {day} gelöscht.")


@cmd_override.command("first-day")
@click.argument("program")
@click.option("--start", "start_time", default=None, help="Beginn (Default: Unterrichtsbeginn).")
@click.pass_context
def override_first_day(ctx, program: str, start_time):
    """Schaltet den Unterricht am Anreisetag ein und generiert neu."""
    from generator.editing import enable_first_day_lessons

    mgr, config = _load_program_or_abort(ctx, program)
    if not config.dates:
        console.print("[red]Programm hat keinen gültigen Zeitraum.[/red]")
        sys.exit(1)
    data = _load_data_or_abort(ctx)
    config, events = enable_first_day_lessons(config, data.events, start_time)
    mgr.save(config, mgr.resolve(program), quiet=True)
    _save_data(ctx, data.replace_program(config).with_events(events))
    console.print(f"[green]✓[/green] Unterricht am {config.dates[0]} aktiviert.")


# ─── MASTERS / ADD / REMOVE ───────────────────────────────────────────────────

@click.command("masters")
def cmd_masters():
    """Listet die Vorlagen für manuelle Programmpunkte auf."""
    from config.defaults import EVENT_MASTERS
    from export.vocabulary import category_label

    table = Table(title="Vorlagen", box=box.ROUNDED)
    table.add_column("ID", style="bold")
    table.add_column("Titel")
    table.add_column("Kategorie")
    table.add_column("Beginn")
    table.add_column("Dauer")
    table.add_column("Begleitung")
    table.add_column("Transport")
    for m in EVENT_MASTERS:
        table.add_row(
            m.id, m.title, category_label(m.category), m.default_start_time,
            f"{m.default_duration_minutes} min",
            str(m.default_kvh_count) if m.default_kvh_required else "–",
            m.default_transport_mode,
        )
    console.print(table)


@click.command("add")
@click.argument("program")
@click.argument("day")
@click.option("--master", "master_id", default=None, help="Vorlagen-ID (siehe 'masters').")
@click.option("--title", default="", help="Freier Titel (ohne Vorlage).")
@click.option("--category", type=click.Choice(["Cultural", "CompanyVisit", "BuddyLunch", "Other"]),
              default=None, help="Kategorie.")
@click.option("--start", "start_time", default=None, help="Beginn (HH:MM).")
@click.option("--duration", type=int, default=None, help="Dauer in Minuten.")
@click.option("--location", default="", help="Ort / Treffpunkt.")
@click.option("--notes", default=None, help="Notizen.")
@click.option("--transport", type=click.Choice(["None", "Bus", "Walk", "OnCampus"]),
              default=None, help="Transportmittel.")
@click.option("--bus-company", default="", help="Busunternehmen.")
@click.option("--bus-count", type=int, default=1, help="Anzahl Busse (1–20).")
@click.option("--round-trip", is_flag=True, default=False, help="Bus hin und zurück.")
@click.option("--kvh/--no-kvh", default=None, help="Begleitung durch Mitarbeitende.")
@click.option("--kvh-count", type=int, default=None, help="Anzahl Begleitpersonen (1–50).")
@click.option("--buddies", type=int, default=0, help="Anzahl Buddies.")
@click.option("--room-needed", is_flag=True, default=False, help="Raum muss gebucht werden.")
@click.pass_context
def cmd_add(ctx, program: str, day: str, master_id, title: str, category, start_time, duration,
            location: str, notes, transport, bus_company: str, bus_count: int, round_trip: bool,
            kvh, kvh_count, buddies: int, room_needed: bool):
    """Fügt einen manuellen Programmpunkt hinzu (aus Vorlage oder frei)."""
    from config.defaults import get_event_master
    from generator.editing import add_event, event_from_master, make_manual_event
    from generator.reconcile import find_duplicates
    from models.event import BusTripType

    _parse_date_or_abort(day)
    _, config = _load_program_or_abort(ctx, program)
    if day not in config.dates:
        console.print(f"[yellow]Hinweis: {day} liegt außerhalb des Programmzeitraums.[/yellow]")

    form = dict(
        location=location,
        bus_company=bus_company,
        bus_count=bus_count,
        bus_trip_type=BusTripType.ROUND_TRIP if round_trip else BusTripType.ONE_WAY,
        buddy_count=buddies,
        room_needed=room_needed,
    )
    optional = dict(
        category=category, start_time=start_time, duration_minutes=duration, notes=notes,
        transport_mode=transport, kvh_required=kvh, kvh_count=kvh_count,
    )
    form.update({k: v for k, v in optional.items() if v is not None})

    if master_id:
        master = get_event_master(master_id)
        if master is None:
            console.print(f"[red]Unbekannte Vorlage: {master_id}[/red] (siehe 'python main.py masters')")
            sys.exit(1)
        event = event_from_master(config, day, master, **form)
    else:
        event = make_manual_event(config, day, title=title, **form)

    data = _load_data_or_abort(ctx)
    events = add_event(data.events, event)
    _save_data(ctx, data.replace_program(config).with_events(events))
    console.print(f"[green]✓[/green] Hinzugefügt: {event.date} {event.start_time}–{event.end_time} "
                  f"{event.title} [dim]({event.id})[/dim]")

    # Hinweis, wenn der neue Eintrag bei der nächsten Bereinigung wegfallen würde
    report = find_duplicates(events, config.id)
    if event.id in report.dropped_ids:
        console.print("[yellow]Achtung: Eintrag kollidiert mit einem vorhandenen "
                      "und wird bei 'dedupe' oder 'generate' entfernt.[/yellow]")


@click.command("remove")
@click.argument("program")
@click.argument("event_id")
@click.pass_context
def cmd_remove(ctx, program: str, event_id: str):
    """Löscht einen einzelnen Programmpunkt."""
    from generator.editing import delete_event

    _, config = _load_program_or_abort(ctx, program)
    data = _load_data_or_abort(ctx)
    if not any(e.id == event_id and e.program_id == config.id for e in data.events):
        console.print(f"[red]Eintrag nicht gefunden: {event_id}[/red]")
        sys.exit(1)
    _save_data(ctx, data.with_events(delete_event(data.events, event_id, config.id)))
    console.print(f"[green]✓[/green] Eintrag {event_id} gelöscht.")


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.command("export")
@click.argument("program")
@click.option("--format", "fmt", type=click.Choice(["csv", "ics", "html", "xlsx"]),
              default="csv", show_default=True, help="Ausgabeformat.")
@click.option("--lang", type=click.Choice(["ja", "en"]), default="ja", show_default=True,
              help="Sprache der Beschriftungen (ICS/HTML).")
@click.option("--week-start", type=click.Choice(["sunday", "monday"]), default="sunday",
              show_default=True, help="Erster Wochentag im HTML-Kalender.")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None,
              help="Zieldatei (Default: output/<Programm>_...).")
@click.pass_context
def cmd_export(ctx, program: str, fmt: str, lang: str, week_start: str, output):
    """Exportiert die Programmpunkte als CSV, ICS, HTML-Kalender oder Excel."""
    from export import CalendarHtmlExporter, CsvExporter, ExcelExporter, IcsExporter
    from export.helpers import default_export_filename

    _, config = _load_program_or_abort(ctx, program)
    data = _load_data_or_abort(ctx)
    events = data.program_events(config.id)
    if not events:
        console.print("[yellow]Keine Programmpunkte – zuerst 'generate' ausführen.[/yellow]")

    out_path = output or ctx.obj["data_path"].parent / default_export_filename(config, fmt, lang)
    if fmt == "csv":
        CsvExporter(config, events).export(out_path)
    elif fmt == "ics":
        IcsExporter(config, events, lang).export(out_path)
    elif fmt == "html":
        CalendarHtmlExporter(config, events, lang, week_start).export(out_path)
    else:
        ExcelExporter(config, events).export(out_path)
    console.print(f"[green]✓[/green] {fmt.upper()} exportiert: {out_path}")


# ─── IMPORT ───────────────────────────────────────────────────────────────────

@click.command("import-data")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--force", is_flag=True, default=False, help="Auch ältere Stände ohne Rückfrage übernehmen.")
@click.pass_context
def cmd_import_data(ctx, datei: Path, force: bool):
    """Übernimmt eine gesicherte Datendatei (ersetzt den aktuellen Stand)."""
    from models.schedule_data import ScheduleData, ScheduleDataError

    try:
        incoming = ScheduleData.load_json(datei)
    except ScheduleDataError as e:
        console.print(f"[red bold]Import fehlgeschlagen:[/red bold]\n{escape(str(e))}")
        sys.exit(1)

    current = _load_data_or_abort(ctx)
    if incoming.is_older_than(current) and not force:
        console.print("[yellow]Die Importdatei ist älter als der aktuelle Stand.[/yellow]")
        if not click.confirm("Trotzdem übernehmen?", default=False):
            console.print("[yellow]Abgebrochen.[/yellow]")
            return
    _save_data(ctx, incoming)
    console.print(
        f"[green]✓[/green] Importiert: {len(incoming.programs)} Programme, "
        f"{len(incoming.events)} Einträge"
    )


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--programs-dir", type=click.Path(path_type=Path), default=PROGRAMS_DIR,
              show_default=True, help="Verzeichnis der Programmdateien (YAML).")
@click.option("--data", "data_path", type=click.Path(path_type=Path), default=DEFAULT_DATA_JSON,
              show_default=True, help="Datendatei mit allen Programmpunkten (JSON).")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Ausführliche Log-Ausgabe.")
@click.pass_context
def cli(ctx, programs_dir: Path, data_path: Path, verbose: bool):
    """Reiseplaner für Austauschprogramme (RSJP).

    Starten Sie mit: python main.py new <name> --start YYYY-MM-DD --end YYYY-MM-DD
    """
    ctx.ensure_object(dict)
    ctx.obj["programs_dir"] = Path(programs_dir)
    ctx.obj["data_path"] = Path(data_path)
    if verbose:
        from rich.logging import RichHandler
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def main():
    """Einstiegspunkt."""
    cli(obj={})


# Befehle registrieren
cli.add_command(cmd_new)
cli.add_command(cmd_list)
cli.add_command(cmd_delete)
cli.add_command(cmd_show)
cli.add_command(cmd_generate)
cli.add_command(cmd_dedupe)
cli.add_command(cmd_override)
cli.add_command(cmd_masters)
cli.add_command(cmd_add)
cli.add_command(cmd_remove)
cli.add_command(cmd_export)
cli.add_command(cmd_import_data)


if __name__ == "__main__":
    main()
