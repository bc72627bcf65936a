"""
CareerDesk CLI — Command-line interface for the career-services dashboards.

Commands:
    careerdesk run       Start the Reflex dev server
    careerdesk check     Validate careerdesk.yaml and list the screen tables
    careerdesk preview   Run a table view over a JSON/YAML file and print the rows
    careerdesk logs      Show recent table and record source log entries
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger("careerdesk.cli")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="careerdesk",
        description="CareerDesk — Career services admin and job-seeker dashboards",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # careerdesk run
    run_parser = subparsers.add_parser("run", help="Start the Reflex dev server")
    run_parser.add_argument("--host", default="0.0.0.0", help="Backend host to bind (default: 0.0.0.0)")
    run_parser.add_argument("--port", type=int, default=3000, help="Frontend port (default: 3000)")
    run_parser.add_argument("--backend-port", type=int, default=8000, help="Backend port (default: 8000)")
    run_parser.add_argument("--env", choices=["dev", "prod"], default="dev", help="Environment (default: dev)")

    # careerdesk check
    check_parser = subparsers.add_parser("check", help="Validate careerdesk.yaml")
    check_parser.add_argument(
        "--config", default=None, help="Path to careerdesk.yaml (default: auto-discover)"
    )

    # careerdesk preview
    preview_parser = subparsers.add_parser(
        "preview", help="Search, filter, sort and page records from a file"
    )
    preview_parser.add_argument("file", help="JSON or YAML file holding a list of records")
    preview_parser.add_argument("--table", help="Use a screen table's columns and filters (e.g., admin_jobs)")
    preview_parser.add_argument("--keys", help="Comma-separated columns to show (default: all keys)")
    preview_parser.add_argument("--key-field", default="id", help="Field holding the row key (default: id)")
    preview_parser.add_argument("--search", default="", help="Search term")
    preview_parser.add_argument(
        "--filter", action="append", default=[], metavar="KEY=VALUE", help="Equality filter (repeatable)"
    )
    preview_parser.add_argument("--sort", metavar="KEY[:desc]", help="Sort column, ascending unless ':desc'")
    preview_parser.add_argument("--page", type=int, default=1, help="Page to show (default: 1)")
    preview_parser.add_argument("--page-size", type=int, default=10, help="Rows per page (default: 10)")

    # careerdesk logs
    logs_parser = subparsers.add_parser("logs", help="Show recent structured log entries")
    logs_parser.add_argument("--config", default=None, help="Path to careerdesk.yaml (default: auto-discover)")
    logs_parser.add_argument(
        "--type", dest="object_type", default="tables", help="Object type: tables or record_sources"
    )
    logs_parser.add_argument("--category", default="interaction", help="Log category (default: interaction)")
    logs_parser.add_argument("--table", help="Only entries for this table id")
    logs_parser.add_argument("--days", type=int, default=7, help="How many days back to read (default: 7)")
    logs_parser.add_argument("--limit", type=int, default=50, help="Max entries to show (default: 50)")

    args = parser.parse_args(argv)

    if args.command == "run":
        return cmd_run(args)
    elif args.command == "check":
        return cmd_check(args)
    elif args.command == "preview":
        return cmd_preview(args)
    elif args.command == "logs":
        return cmd_logs(args)
    else:
        parser.print_help()
        return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Start the Reflex dev server."""
    import subprocess

    print("Starting CareerDesk (Reflex) server...")
    try:
        cmd = [
            "reflex", "run",
            "--backend-host", args.host,
            "--frontend-port", str(args.port),
            "--backend-port", str(args.backend_port),
            "--env", args.env,
        ]
        result = subprocess.run(cmd, check=True)
        return result.returncode
    except FileNotFoundError:
        print("[ERROR] 'reflex' command not found. Install: pip install reflex")
        return 1
    except subprocess.CalledProcessError as e:
        print(f"[ERROR] reflex exited with status {e.returncode}")
        return e.returncode
    except KeyboardInterrupt:
        print("\nServer stopped.")
        return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Validate careerdesk.yaml and list the tables it wires up."""
    from careerdesk.admin.tables import register_tables
    from careerdesk.engine.config import load_config
    from careerdesk.engine.errors import CareerDeskConfigError
    from careerdesk.engine.registry import TableRegistry

    try:
        config = load_config(args.config)
    except CareerDeskConfigError as e:
        print(f"[FAIL] {e.message}")
        return 1

    print(f"[OK] {config.name} v{config.version} ({config.environment})")
    print(f"  Backend: {config.backend.url}")
    if not config.backend.api_key:
        print(f"  [WARN] {config.backend.api_key_env} is not set")

    registry = TableRegistry()
    register_tables(registry, config)
    print(f"  Tables ({registry.count}):")
    for table_id in registry.table_ids():
        registration = registry.get(table_id)
        backend_table = registration.metadata.get("backend_table", "")
        print(f"    {table_id:<28} {registration.route:<40} {backend_table}")
    return 0


def _load_records(path: Path) -> List[Dict[str, Any]]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    if not isinstance(data, list):
        raise ValueError(f"{path.name} must contain a list of records")
    return data


def _parse_filter(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise ValueError(f"Filter must look like KEY=VALUE, got '{raw}'")
    return key, value


def _parse_sort(raw: str) -> tuple[str, str]:
    key, _, direction = raw.partition(":")
    direction = direction or "asc"
    if not key or direction not in ("asc", "desc"):
        raise ValueError(f"Sort must look like KEY, KEY:asc or KEY:desc, got '{raw}'")
    return key, direction


def _preview_definition(args: argparse.Namespace, records: List[Dict[str, Any]]):
    from careerdesk.admin.tables import SCREEN_TABLES
    from careerdesk.engine.registry import TableHandlers
    from careerdesk.ui.components import Column, DataTable, PaginationConfig, key_field

    pagination = PaginationConfig(enabled=True, page_size=args.page_size, current_page=args.page)

    if args.table:
        if args.table not in SCREEN_TABLES:
            raise ValueError(f"Unknown table '{args.table}'. Known: {', '.join(sorted(SCREEN_TABLES))}")
        definition = SCREEN_TABLES[args.table][0](TableHandlers())
        definition.pagination = pagination
        return definition

    if args.keys:
        keys = [k.strip() for k in args.keys.split(",") if k.strip()]
    else:
        keys = list(records[0].keys()) if records else [args.key_field]
    return DataTable(
        columns=[Column(k, k.replace("_", " ").title()) for k in keys],
        row_key=key_field(args.key_field),
        searchable=True,
        search_keys=keys,
        filterable=True,
        sortable=True,
        pagination=pagination,
    )


def _print_rows(view) -> None:
    headers = ["#"] + [h.label for h in view.headers]
    lines = [[str(row.number)] + [cell.text for cell in row.cells] for row in view.rows]
    widths = [len(h) for h in headers]
    for line in lines:
        widths = [max(w, len(v)) for w, v in zip(widths, line)]
    print("  ".join(h.ljust(w) for h, w in zip(headers, widths)))
    print("  ".join("-" * w for w in widths))
    for line in lines:
        print("  ".join(v.ljust(w) for v, w in zip(line, widths)))


def cmd_preview(args: argparse.Namespace) -> int:
    """Run the table view over a file of records and print the visible rows."""
    from careerdesk.engine.errors import CareerDeskError
    from careerdesk.ui.table_view import BodyState, SortDirection, SortState, TableController

    path = Path(args.file)
    if not path.exists():
        print(f"[ERROR] {path} not found")
        return 1

    try:
        records = _load_records(path)
        definition = _preview_definition(args, records)
        filters = [_parse_filter(f) for f in args.filter]
        sort = _parse_sort(args.sort) if args.sort else None
    except (ValueError, yaml.YAMLError, CareerDeskError) as e:
        print(f"[ERROR] {e}")
        return 1

    controller = TableController(
        definition, records, event_logger=lambda entry: False, table_id=f"preview:{path.name}"
    )
    if args.search:
        controller.set_search(args.search)
    for key, value in filters:
        controller.set_filter_choice(key, value)
    if sort is not None:
        controller.state.sort = SortState(sort[0], SortDirection(sort[1]))
    controller.go_to_page(args.page)

    view = controller.build_view()
    if view.body_state == BodyState.EMPTY:
        print(view.empty.message)
        return 0

    _print_rows(view)
    print()
    print(
        f"Page {controller.current_page} of {max(controller.total_pages, 1)} "
        f"({controller.total_count} matching, {len(records)} total)"
    )
    return 0


def _describe_entry(entry: Dict[str, Any]) -> str:
    if entry.get("event") == "table_interaction":
        details = {
            k: v for k, v in entry.items()
            if k not in ("timestamp", "level", "event", "table_id", "interaction")
        }
        return f"{entry.get('interaction', '')} {json.dumps(details, default=str)}"
    if entry.get("event") == "record_delete_confirmed":
        return f"delete {entry.get('record_key', '')}"
    if entry.get("event") == "record_source_call":
        status = entry.get("status_code", entry.get("error", ""))
        return f"{entry.get('operation', '')} {status} {entry.get('duration_ms', '')}ms"
    return json.dumps(entry, default=str)


def cmd_logs(args: argparse.Namespace) -> int:
    """Print recent entries from the JSONL log files, newest first."""
    from datetime import date, timedelta

    from careerdesk.engine.config import load_config
    from careerdesk.engine.errors import CareerDeskConfigError
    from careerdesk.engine.logging import OBJECT_TYPE_CATEGORIES, FileLogger

    try:
        config = load_config(args.config)
    except CareerDeskConfigError as e:
        print(f"[FAIL] {e.message}")
        return 1

    categories = OBJECT_TYPE_CATEGORIES.get(args.object_type)
    if categories is None or args.category not in categories:
        known = ", ".join(f"{t}/{c}" for t, cats in OBJECT_TYPE_CATEGORIES.items() for c in cats)
        print(f"[ERROR] Unknown log target {args.object_type}/{args.category}. Known: {known}")
        return 1

    end_date = date.today()
    entries = FileLogger(log_dir=config.logging.directory).query(
        args.object_type,
        args.category,
        start_date=end_date - timedelta(days=max(args.days, 1) - 1),
        end_date=end_date,
        filters={"table_id": args.table} if args.table else None,
        limit=args.limit,
    )
    if not entries:
        print("No log entries found")
        return 0

    for entry in entries:
        print(
            f"{entry.get('timestamp', '')}  {entry.get('level', ''):<7}  "
            f"{entry.get('table_id', ''):<28}  {_describe_entry(entry)}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
