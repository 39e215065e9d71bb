"""unitalks CLI entry point."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from unitalks.config import load_settings
from unitalks.errors import UniTalksError
from unitalks.logger_config import setup_logging
from unitalks.storage import FileKeyValueStore, ScriptLibrary


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unitalks",
        description="UniTalks: interview script library",
    )
    parser.add_argument(
        "--store", metavar="DIR", default=None,
        help="Script store directory (default: $UNITALKS_STORE_DIR or .unitalks)",
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    new_parser = sub.add_parser("new", help="Create and save a blank script for a guest")
    new_parser.add_argument("--guest", required=True, metavar="NAME", help="Guest name")
    new_parser.add_argument("--role", default="", help="Guest role")
    new_parser.add_argument("--title", default="", help="Script title")
    new_parser.add_argument("--notes", default="", help="Free-form notes")

    sub.add_parser("list", help="List saved scripts, newest first")

    show_parser = sub.add_parser("show", help="Print a saved script as JSON")
    show_parser.add_argument("--id", required=True, dest="script_id", help="Script id")

    export_parser = sub.add_parser("export", help="Export a saved script to a .json file")
    export_parser.add_argument("--id", required=True, dest="script_id", help="Script id")
    export_parser.add_argument(
        "--output-dir", default=None, metavar="DIR",
        help="Destination directory (default: $UNITALKS_EXPORT_DIR or .)",
    )

    import_parser = sub.add_parser("import", help="Import a script .json file into the store")
    import_parser.add_argument("--file", required=True, metavar="script.json", help="File to import")

    delete_parser = sub.add_parser("delete", help="Delete a saved script")
    delete_parser.add_argument("--id", required=True, dest="script_id", help="Script id")

    validate_parser = sub.add_parser(
        "validate-script",
        help="Validate a script JSON file against the canonical contract",
    )
    validate_parser.add_argument(
        "--script", required=True, metavar="script.json",
        help="Path to a script JSON file",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    setup_logging(settings.log_level)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "validate-script":
        import jsonschema
        try:
            validate_script_file(Path(args.script))
        except jsonschema.ValidationError as exc:
            print(f"ERROR: invalid Script: {exc.message}")
            sys.exit(1)
        except (OSError, ValueError) as exc:
            print(f"ERROR: {exc}")
            sys.exit(1)
        print("OK: Script is valid")
        sys.exit(0)

    store_dir = Path(args.store) if args.store else settings.store_dir
    library = ScriptLibrary(FileKeyValueStore(store_dir), strict=settings.strict_store)

    try:
        if args.command == "new":
            _cmd_new(library, args)
        elif args.command == "list":
            _cmd_list(library)
        elif args.command == "show":
            _cmd_show(library, args.script_id)
        elif args.command == "export":
            output_dir = Path(args.output_dir) if args.output_dir else settings.export_dir
            _cmd_export(library, args.script_id, output_dir)
        elif args.command == "import":
            _cmd_import(library, Path(args.file))
        elif args.command == "delete":
            _cmd_delete(library, args.script_id)
    except UniTalksError as exc:
        print(f"ERROR: {exc}")
        sys.exit(1)
    sys.exit(0)


def validate_script_file(script_path: Path) -> None:
    """Load a script JSON file and validate it against Script.v1.json.

    Raises ``jsonschema.ValidationError`` if the file does not conform,
    ``ValueError`` if it is not JSON.
    """
    from unitalks.contract_validate import validate_script

    data = json.loads(script_path.read_text(encoding="utf-8"))
    validate_script(data)


# ── Commands ──────────────────────────────────────────────────────────────────


def _cmd_new(library: ScriptLibrary, args: argparse.Namespace) -> None:
    from unitalks.models import Guest
    from unitalks.session import EditingSession

    session = EditingSession(
        guest=Guest(name=args.guest, role=args.role),
        title=args.title,
        notes=args.notes,
    )
    session.add_section()
    payload = session.snapshot()
    library.persist_script(payload)
    print(f"OK: created {payload.id}")


def _cmd_list(library: ScriptLibrary) -> None:
    from unitalks.textutil import format_date, format_runtime

    entries = library.list_scripts()
    if not entries:
        print("No saved scripts")
        return
    for entry in entries:
        print(
            f"{entry.id}\t{entry.title}\t"
            f"{entry.meta.section_count} sections\t"
            f"{entry.meta.total_questions} questions\t"
            f"{format_runtime(entry.meta.total_time)}\t"
            f"{format_date(entry.saved_at)}"
        )


def _cmd_show(library: ScriptLibrary, script_id: str) -> None:
    from unitalks.schemas.script_v1 import dump_payload

    print(dump_payload(_require_script(library, script_id)))


def _cmd_export(library: ScriptLibrary, script_id: str, output_dir: Path) -> None:
    from unitalks.script_io import export_payload

    out_path = export_payload(_require_script(library, script_id), output_dir)
    print(f"OK: exported {out_path}")


def _cmd_import(library: ScriptLibrary, path: Path) -> None:
    from unitalks.script_io import read_json_file_sync

    data = read_json_file_sync(path)
    payload = library.import_payload(data)
    print(f"OK: imported {payload.id}")


def _cmd_delete(library: ScriptLibrary, script_id: str) -> None:
    known = library.get_script_by_id(script_id) is not None or any(
        entry.id == script_id for entry in library.get_manifest()
    )
    if not known:
        raise UniTalksError(f"script '{script_id}' not found")
    library.delete_script(script_id)
    print(f"OK: deleted {script_id}")


def _require_script(library: ScriptLibrary, script_id: str):
    payload = library.get_script_by_id(script_id)
    if payload is None:
        raise UniTalksError(f"script '{script_id}' not found")
    return payload


if __name__ == "__main__":
    main()
