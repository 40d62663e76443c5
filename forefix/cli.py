"""Entry point for the forefix command line tool."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from . import history
from .auth import Auth
from .catalog import Category, find_symptom, parse_category, symptoms_for
from .config import Config
from .diagnostics import DiagnosticReport, Risk
from .formatting import format_history, format_report, format_symptoms, marker_label
from .history import HistoryEntry
from .logging_config import get_logger, level_from_name, setup_logging
from .selection import SEVERITY_LEVELS, DiagnosisSession
from .storage import Repository, SessionUser, open_repository
from .system_state import HostSnapshot, gather_snapshot, suggest_laptop_symptoms
from .theme import DARK, current_theme, toggle_theme

logger = get_logger(__name__)

RISK_STYLES = {Risk.HIGH: "bold red", Risk.MEDIUM: "bold yellow", Risk.LOW: "bold green"}
PANEL_STYLES = {DARK: "bold cyan", "light": "bold blue"}


class ForefixError(Exception):
    """Invalid command line input."""


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = Config.load(Path(args.config) if args.config else None)
    level = logging.DEBUG if args.verbose else level_from_name(config.log_level)
    setup_logging(level, Path(config.log_file) if config.log_file else None)

    data_dir = Path(args.data_dir) if args.data_dir else config.resolved_data_dir()
    repository = open_repository(data_dir)
    logger.debug("Using data directory %s", data_dir)

    try:
        return args.handler(args, config, repository)
    except ForefixError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="forefix",
        description="Self-diagnose mobile, laptop and web application problems from observed symptoms.",
    )
    parser.add_argument("--config", help="Path to a JSON config file")
    parser.add_argument("--data-dir", help="Directory holding accounts, session, theme and history")
    parser.add_argument("--verbose", action="store_true", help="Log debug output to stderr")
    commands = parser.add_subparsers(dest="command", required=True)

    signup = commands.add_parser("signup", help="Create a local account")
    signup.add_argument("name")
    signup.add_argument("email")
    signup.add_argument("password")
    signup.set_defaults(handler=_cmd_signup)

    login = commands.add_parser("login", help="Sign in")
    login.add_argument("email")
    login.add_argument("password")
    login.set_defaults(handler=_cmd_login)

    commands.add_parser("logout", help="Sign out").set_defaults(handler=_cmd_logout)
    commands.add_parser("whoami", help="Show the signed-in user").set_defaults(handler=_cmd_whoami)

    symptoms = commands.add_parser("symptoms", help="List the symptoms of a category")
    symptoms.add_argument("--category", help="mobile, laptop or webapp")
    symptoms.set_defaults(handler=_cmd_symptoms)

    diagnose = commands.add_parser("diagnose", help="Analyze a set of symptoms")
    diagnose.add_argument("--category", help="mobile, laptop or webapp")
    diagnose.add_argument("symptoms", nargs="*", metavar="SYMPTOM[=LEVEL]", help="Symptom id, mobile accepts low/medium/high")
    _add_output_flags(diagnose)
    diagnose.add_argument("--no-delay", action="store_true", help="Skip the analysis delay")
    diagnose.set_defaults(handler=_cmd_diagnose)

    hist = commands.add_parser("history", help="Show previous reports, most recent first")
    _add_output_flags(hist)
    hist.add_argument("--clear", action="store_true", help="Delete all stored reports")
    hist.set_defaults(handler=_cmd_history)

    theme = commands.add_parser("theme", help="Show or toggle the display theme")
    theme.add_argument("--toggle", action="store_true", help="Switch between light and dark")
    theme.set_defaults(handler=_cmd_theme)

    detect = commands.add_parser("detect", help="Suggest laptop symptoms from this machine's state")
    detect.add_argument("--apply", action="store_true", help="Diagnose the suggested symptoms right away")
    _add_output_flags(detect)
    detect.add_argument("--no-delay", action="store_true", help="Skip the analysis delay")
    detect.set_defaults(handler=_cmd_detect)

    commands.add_parser("dashboard", help="Interactive symptom dashboard").set_defaults(handler=_cmd_dashboard)
    return parser


def _add_output_flags(parser: argparse.ArgumentParser) -> None:
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="Print JSON")
    output.add_argument("--ui", action="store_true", help="Render with Rich")


def _cmd_signup(args: argparse.Namespace, config: Config, repository: Repository) -> int:
    if not Auth(repository).signup(args.name, args.email, args.password):
        print("An account with this email already exists.", file=sys.stderr)
        return 1
    print(f"Account created for {args.email}. Run `forefix login` to sign in.")
    return 0


def _cmd_login(args: argparse.Namespace, config: Config, repository: Repository) -> int:
    auth = Auth(repository)
    if not auth.login(args.email, args.password):
        print("Invalid email or password.", file=sys.stderr)
        return 1
    user = auth.current_user()
    print(f"Welcome back, {user.name}.")
    return 0


def _cmd_logout(args: argparse.Namespace, config: Config, repository: Repository) -> int:
    Auth(repository).logout()
    print("Signed out. Run `forefix login EMAIL PASSWORD` to continue.")
    return 0


def _cmd_whoami(args: argparse.Namespace, config: Config, repository: Repository) -> int:
    user = _require_user(repository)
    if user is None:
        return 1
    print(f"{user.name} <{user.email}> | role: {user.role} | joined: {user.joined_at}")
    return 0


def _cmd_symptoms(args: argparse.Namespace, config: Config, repository: Repository) -> int:
    category = _category(args.category or config.default_category)
    print(format_symptoms(symptoms_for(category)))
    return 0


def _cmd_diagnose(args: argparse.Namespace, config: Config, repository: Repository) -> int:
    if _require_user(repository) is None:
        return 1
    category = _category(args.category or config.default_category)
    return _run_diagnosis(args, config, repository, category, args.symptoms)


def _cmd_history(args: argparse.Namespace, config: Config, repository: Repository) -> int:
    if _require_user(repository) is None:
        return 1
    if args.clear:
        history.clear(repository)
        print("History cleared.")
        return 0

    entries = history.load(repository)
    if args.json:
        print(json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False, indent=2))
    elif args.ui:
        _render_history_rich(Console(), entries, current_theme(repository, config.preferred_theme))
    else:
        print(format_history(entries))
    return 0


def _cmd_theme(args: argparse.Namespace, config: Config, repository: Repository) -> int:
    if args.toggle:
        print(f"Theme set to {toggle_theme(repository, config.preferred_theme)}.")
    else:
        print(current_theme(repository, config.preferred_theme))
    return 0


def _cmd_detect(args: argparse.Namespace, config: Config, repository: Repository) -> int:
    snapshot = gather_snapshot()
    suggestions = suggest_laptop_symptoms(snapshot)
    if not args.apply:
        if args.json:
            print(json.dumps({"category": Category.LAPTOP.value, "suggestions": suggestions}, indent=2))
        elif args.ui:
            _render_suggestions_rich(Console(), snapshot, suggestions, current_theme(repository, config.preferred_theme))
        elif suggestions:
            print("Suggested laptop symptoms: " + ", ".join(suggestions))
        else:
            print("No laptop symptoms detected on this machine.")
        return 0

    if _require_user(repository) is None:
        return 1
    if not suggestions:
        print("No laptop symptoms detected on this machine.")
        return 0
    return _run_diagnosis(args, config, repository, Category.LAPTOP, suggestions)


def _cmd_dashboard(args: argparse.Namespace, config: Config, repository: Repository) -> int:
    if _require_user(repository) is None:
        return 1
    console = Console()
    session = DiagnosisSession(repository, _category(config.default_category), delay=config.analysis_delay)

    while True:
        theme = current_theme(repository, config.preferred_theme)
        _render_grid_rich(console, session, theme)
        command = Prompt.ask("Symptom # to toggle, tab <category>, analyze, reset, history, theme, quit").strip().lower()

        if command in ("quit", "q", "exit"):
            return 0
        if command.isdigit():
            symptoms = symptoms_for(session.category)
            index = int(command) - 1
            if 0 <= index < len(symptoms):
                session.toggle(symptoms[index].id)
            else:
                console.print(f"No symptom #{command}.", style="red")
        elif command.startswith("tab "):
            try:
                session.switch_category(parse_category(command[4:]))
            except ValueError:
                console.print(f"Unknown category {command[4:]!r}.", style="red")
        elif command == "analyze":
            with console.status("Analyzing symptoms..."):
                report = session.analyze()
            if report is None:
                console.print("Please select at least one symptom.", style="red")
            else:
                _render_report_rich(console, report, theme)
        elif command == "reset":
            session.reset()
        elif command == "history":
            _render_history_rich(console, history.load(repository), theme)
        elif command == "theme":
            toggle_theme(repository, config.preferred_theme)
        else:
            console.print(f"Unknown command {command!r}.", style="red")


def _run_diagnosis(
    args: argparse.Namespace,
    config: Config,
    repository: Repository,
    category: Category,
    tokens: Sequence[str],
) -> int:
    delay = 0.0 if args.no_delay else config.analysis_delay
    session = DiagnosisSession(repository, category, delay=delay)
    for token in tokens:
        _select(session, token)

    if args.ui:
        console = Console()
        with console.status("Analyzing symptoms..."):
            report = session.analyze()
    else:
        report = session.analyze()

    if report is None:
        print("Please select at least one symptom.", file=sys.stderr)
        return 1

    if args.json:
        print(_to_json(category, session.selection.as_dict(), report))
    elif args.ui:
        _render_report_rich(console, report, current_theme(repository, config.preferred_theme))
    else:
        print(format_report(report))
    return 0


def _select(session: DiagnosisSession, token: str) -> None:
    symptom_id, _, level = token.partition("=")
    symptom_id = symptom_id.strip()
    level = level.strip().lower()
    category = session.category

    if category is Category.MOBILE:
        target = level or SEVERITY_LEVELS[0]
        if target not in SEVERITY_LEVELS:
            raise ForefixError(f"unknown severity {level!r}, expected one of {', '.join(SEVERITY_LEVELS)}")
    elif level:
        raise ForefixError(f"{category.value} symptoms take no severity level")
    else:
        target = True

    if find_symptom(category, symptom_id) is None:
        logger.warning("%r is not a %s symptom and will be ignored", symptom_id, category.value)

    # Each toggle advances the marker cycle, so step until the requested marker is reached.
    while session.selection.marker(symptom_id) != target:
        session.toggle(symptom_id)


def _category(value: str) -> Category:
    try:
        return parse_category(value)
    except ValueError:
        choices = ", ".join(category.value for category in Category)
        raise ForefixError(f"unknown category {value!r}, expected one of {choices}") from None


def _require_user(repository: Repository) -> Optional[SessionUser]:
    user = Auth(repository).current_user()
    if user is None:
        print("Please log in first: forefix login EMAIL PASSWORD", file=sys.stderr)
    return user


def _to_json(category: Category, selection: Dict[str, Any], report: DiagnosticReport) -> str:
    payload: Dict[str, Any] = {
        "category": category.value,
        "selection": selection,
        "report": report.to_dict(),
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _render_report_rich(console: Console, report: DiagnosticReport, theme: str) -> None:
    console.print(Panel(report.title, style=PANEL_STYLES.get(theme, "bold blue")))

    summary = Table(show_header=False, box=box.ROUNDED)
    summary.add_row("Reason", report.reason or "-")
    summary.add_row("Risk", f"[{RISK_STYLES[report.risk]}]{report.risk.value}[/]")
    summary.add_row("Health score", f"{report.score}/100")
    console.print(summary)

    actions = Table(title="Recommended actions", box=box.SIMPLE_HEAD)
    actions.add_column("#", justify="right")
    actions.add_column("Action")
    for index, action in enumerate(report.actions, start=1):
        actions.add_row(str(index), action)
    console.print(actions)


def _render_history_rich(console: Console, entries: List[HistoryEntry], theme: str) -> None:
    if not entries:
        console.print(Panel("No history found.", style=PANEL_STYLES.get(theme, "bold blue")))
        return

    table = Table(title="Diagnostic history", box=box.SIMPLE_HEAD)
    table.add_column("Date")
    table.add_column("Category")
    table.add_column("Title", style="bold")
    table.add_column("Risk")
    table.add_column("Score", justify="right")
    for entry in entries:
        table.add_row(
            f"{entry.timestamp:%Y-%m-%d %H:%M:%S}",
            entry.category.value,
            entry.report.title,
            f"[{RISK_STYLES[entry.report.risk]}]{entry.report.risk.value}[/]",
            str(entry.report.score),
        )
    console.print(table)


def _render_suggestions_rich(console: Console, snapshot: HostSnapshot, suggestions: List[str], theme: str) -> None:
    load_1m, load_5m, load_15m = snapshot.load_avg
    summary = Table(show_header=False, box=box.ROUNDED)
    summary.add_row("CPU", f"{snapshot.cpu_percent:.0f}% | load (1/5/15): {load_1m:.2f}/{load_5m:.2f}/{load_15m:.2f}")
    summary.add_row("Interfaces up", ", ".join(snapshot.interfaces_up) or "none")
    console.print(summary)

    if not suggestions:
        console.print(Panel("No laptop symptoms detected on this machine.", style="bold green"))
        return

    table = Table(title="Suggested laptop symptoms", box=box.SIMPLE_HEAD)
    table.add_column("")
    table.add_column("ID", style=PANEL_STYLES.get(theme, "bold blue"))
    table.add_column("Symptom")
    for symptom_id in suggestions:
        symptom = find_symptom(Category.LAPTOP, symptom_id)
        table.add_row(symptom.icon if symptom else "", symptom_id, symptom.label if symptom else symptom_id)
    console.print(table)


def _render_grid_rich(console: Console, session: DiagnosisSession, theme: str) -> None:
    tabs = "  ".join(
        f"[reverse]{category.value}[/]" if category is session.category else category.value for category in Category
    )
    console.print(Panel(tabs, title="ForeFix", style=PANEL_STYLES.get(theme, "bold blue")))

    grid = Table(box=box.SIMPLE_HEAD)
    grid.add_column("#", justify="right")
    grid.add_column("")
    grid.add_column("Symptom")
    grid.add_column("Status")
    for index, symptom in enumerate(symptoms_for(session.category), start=1):
        marker = session.selection.marker(symptom.id)
        grid.add_row(str(index), symptom.icon, symptom.label, marker_label(marker))
    console.print(grid)


if __name__ == "__main__":
    raise SystemExit(main())
