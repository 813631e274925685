"""Command-line interface for the lab session scheduler."""

from __future__ import annotations

import argparse
import contextlib
import json
import sys
from dataclasses import replace

from lab_scheduler.domain.availability import parse_availability_tokens
from lab_scheduler.domain.db import get_session, init_database, reset_database
from lab_scheduler.domain.repositories import AssistantRepository, ConstraintRepository
from lab_scheduler.engine.orchestrator import Orchestrator
from lab_scheduler.io.config import load_config
from lab_scheduler.io.export_csv import export_assistants_csv, export_sessions_csv
from lab_scheduler.io.import_csv import import_assistants_csv
from lab_scheduler.services.views import summarize_schedule


def _db_url(args: argparse.Namespace, cfg) -> str:
    return args.db or cfg.db_url


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database and the default constraint row."""
    cfg = load_config(args.config)
    db_url = _db_url(args, cfg)
    init_database(db_url)
    session = get_session(db_url)
    try:
        ConstraintRepository.get(session, cfg.default_constraints)
    finally:
        session.close()
    print(f"[OK] Database initialized: {db_url}")


def _cmd_import_csv(args: argparse.Namespace) -> None:
    """Import assistants from CSV."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        count = import_assistants_csv(session, args.assistants)
        print(f"[OK] Imported {count} assistants")
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Import failed: {e}")
        raise
    finally:
        session.close()


def _cmd_add_assistant(args: argparse.Namespace) -> None:
    """Add one assistant."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        assistant = AssistantRepository.create(
            session,
            name=args.name,
            email=args.email,
            max_sessions_per_week=args.max_sessions,
            availability=parse_availability_tokens(args.available or []),
        )
        print(f"[OK] Created assistant {assistant.id}: {assistant.name}")
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Could not add assistant: {e}")
        raise
    finally:
        session.close()


def _cmd_remove_assistant(args: argparse.Namespace) -> None:
    """Remove one assistant by id."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        if AssistantRepository.delete(session, args.id):
            print(f"[OK] Removed assistant {args.id}")
        else:
            print(f"[WARN] No assistant with id {args.id}")
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Could not remove assistant: {e}")
        raise
    finally:
        session.close()


def _cmd_list_assistants(args: argparse.Namespace) -> None:
    """Print the roster."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        for a in AssistantRepository.snapshot(session):
            slots = ", ".join(f"{day}:{slot}" for day, day_slots in a.availability.items() for slot in sorted(day_slots))
            cap = a.max_sessions_per_week if a.max_sessions_per_week is not None else "default"
            print(f"{a.id:>4}  {a.name}  <{a.email or '-'}>  max={cap}  [{slots or 'no availability'}]")
        if args.out:
            export_assistants_csv(session, args.out)
    except Exception as e:
        print(f"[ERROR] Listing assistants failed: {e}")
        raise
    finally:
        session.close()


def _cmd_constraints(args: argparse.Namespace) -> None:
    """Show the active constraints, updating them first if any value is given."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        current = ConstraintRepository.get(session, cfg.default_constraints)
        changes = {
            key: value
            for key, value in (
                ("sessions_per_day", args.sessions_per_day),
                ("people_per_session", args.people_per_session),
                ("sessions_per_assistant", args.sessions_per_assistant),
            )
            if value is not None
        }
        if changes:
            current = ConstraintRepository.update(session, replace(current, **changes))
            print("[OK] Constraints updated")
        print(json.dumps(current.to_dict(), indent=2))
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Constraints command failed: {e}")
        raise
    finally:
        session.close()


def _cmd_generate(args: argparse.Namespace) -> None:
    """Generate the week's sessions."""
    cfg = load_config(args.config)
    # With --json, stdout carries only the JSON document; status lines go to stderr.
    status = sys.stderr if args.json else sys.stdout

    with contextlib.redirect_stdout(status):
        session = get_session(_db_url(args, cfg))
        try:
            orchestrator = Orchestrator()
            assistants, constraints = orchestrator.load_snapshot(session, cfg)
            sessions = orchestrator.build_schedule(assistants, constraints)
            if args.out:
                export_sessions_csv(sessions, args.out, assistants, cfg)
        except Exception as e:
            session.rollback()
            print(f"[ERROR] Generation failed: {e}")
            raise
        finally:
            session.close()

    if args.json:
        print(json.dumps([s.to_dict() for s in sessions], indent=2))
    else:
        print(summarize_schedule(sessions, assistants, constraints.people_per_session))


def _cmd_reset_db(args: argparse.Namespace) -> None:
    """Drop and recreate all tables, then restore the default constraint row."""
    if not args.yes:
        raise SystemExit("[ERROR] reset-db deletes all assistants; pass --yes to confirm")
    cfg = load_config(args.config)
    db_url = _db_url(args, cfg)
    reset_database(db_url)
    session = get_session(db_url)
    try:
        ConstraintRepository.get(session, cfg.default_constraints)
    finally:
        session.close()
    print(f"[OK] Database reset: {db_url}")


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="lab-scheduler",
        description="Weekly lab assistant session scheduler",
    )

    # Global options
    parser.add_argument("--db", help="Database URL (default: from config, else sqlite:///lab_scheduler.db)")
    parser.add_argument("--config", help="Path to config YAML or JSON")

    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init-db", help="Initialize database")
    init.set_defaults(func=_cmd_init_db)

    reset = sub.add_parser("reset-db", help="Drop and recreate all tables (deletes all data)")
    reset.add_argument("--yes", action="store_true", help="Confirm the reset")
    reset.set_defaults(func=_cmd_reset_db)

    imp = sub.add_parser("import-csv", help="Import assistants from CSV")
    imp.add_argument("--assistants", required=True, help="Path to assistants CSV")
    imp.set_defaults(func=_cmd_import_csv)

    add = sub.add_parser("add-assistant", help="Add an assistant")
    add.add_argument("--name", required=True)
    add.add_argument("--email")
    add.add_argument("--max-sessions", type=int, help="Personal weekly cap (default: global)")
    add.add_argument("--available", nargs="*", metavar="DAY:SLOT", help="e.g. Mon:morning Tue:*")
    add.set_defaults(func=_cmd_add_assistant)

    rm = sub.add_parser("remove-assistant", help="Remove an assistant")
    rm.add_argument("id", type=int)
    rm.set_defaults(func=_cmd_remove_assistant)

    ls = sub.add_parser("list-assistants", help="List assistants")
    ls.add_argument("--out", help="Optional: export roster to CSV")
    ls.set_defaults(func=_cmd_list_assistants)

    con = sub.add_parser("constraints", help="Show or update scheduling constraints")
    con.add_argument("--sessions-per-day", type=int)
    con.add_argument("--people-per-session", type=int)
    con.add_argument("--sessions-per-assistant", type=int)
    con.set_defaults(func=_cmd_constraints)

    gen = sub.add_parser("generate", help="Generate the weekly schedule")
    gen.add_argument("--out", help="Optional: export sessions to CSV")
    gen.add_argument("--json", action="store_true", help="Print sessions as JSON instead of a summary")
    gen.set_defaults(func=_cmd_generate)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
