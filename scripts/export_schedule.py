"""Export a saved portal timetable or calendar page as JSON or CSV.

Standalone CLI script. Reads a page saved from the browser, extracts the
classes and writes the export file (or prints it for the clipboard).

Run with: python scripts/export_schedule.py timetable saved/timetable.html
Compact:  python scripts/export_schedule.py timetable saved/timetable.html --format compact
Stdout:   python scripts/export_schedule.py timetable saved/timetable.html --output-type clipboard
Calendar: python scripts/export_schedule.py calendar saved/calendar.html
Scripted: python scripts/export_schedule.py calendar saved/calendar.html --render

Defaults come from TIMETABLE_EXPORT_* environment variables (or .env);
command line flags override them.

Exit codes:
  0 = success (file written, or export on stdout)
  1 = error (message on stderr)
  2 = page structure not found (nothing exported)
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Add project root to path for src imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.timetable_export.browser import render_saved_page  # noqa: E402
from src.timetable_export.config import get_config  # noqa: E402
from src.timetable_export.document import load_document  # noqa: E402
from src.timetable_export.errors import ExportError, PermanentError  # noqa: E402
from src.timetable_export.exporter import (  # noqa: E402
    deliver,
    export_calendar,
    export_timetable,
    is_calendar_page,
    is_timetable_page,
)
from src.timetable_export.logging import get_logger, setup_logging  # noqa: E402

log = get_logger("export_schedule")


def _log(msg: str) -> None:
    """Write diagnostic messages to stderr so stdout stays clean for clipboard output."""
    print(msg, file=sys.stderr)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments using argparse."""
    parser = argparse.ArgumentParser(
        description="Export a saved timetable or calendar page as JSON or CSV.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "page",
        choices=["timetable", "calendar"],
        help="Page type: 'timetable' (quarter grid -> JSON) or 'calendar' (month -> CSV).",
    )
    parser.add_argument("input", type=Path, help="Saved HTML page.")
    parser.add_argument(
        "--render",
        action="store_true",
        help="Render the saved page in headless Chromium before extracting.",
    )
    parser.add_argument(
        "--output-type",
        choices=["download", "clipboard"],
        default=None,
        help="'download' writes a file, 'clipboard' prints to stdout.",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory for downloaded exports (default: settings output_dir).",
    )

    timetable_group = parser.add_argument_group("timetable options")
    timetable_group.add_argument("--format", choices=["pretty", "compact"], default=None)
    timetable_group.add_argument("--default-color", type=str, default=None)
    timetable_group.add_argument(
        "--include-empty-cells",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Emit a placeholder entry for empty grid cells.",
    )
    timetable_group.add_argument(
        "--include-meta",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Include teacher, classroom and memo fields.",
    )
    timetable_group.add_argument(
        "--static-name",
        action="store_true",
        help="Name the export timetable.json instead of timetable_<year>_<Q>Q.json.",
    )
    return parser.parse_args(argv)


def _read_markup(args: argparse.Namespace, timeout_ms: int) -> str | bytes:
    if args.render:
        return asyncio.run(render_saved_page(args.input, timeout_ms))
    if not args.input.is_file():
        raise PermanentError(f"Saved page not found: {args.input}")
    # Raw bytes: BeautifulSoup picks the encoding from <meta charset> (Shift_JIS pages)
    return args.input.read_bytes()


def _run(args: argparse.Namespace) -> int:
    config = get_config()
    options = config.to_options(
        format=args.format,
        default_color=args.default_color,
        include_empty_cells=args.include_empty_cells,
        include_meta=args.include_meta,
        output_type=args.output_type,
    )
    output_dir = args.output_dir or config.output_dir

    _log(f"export_schedule: starting ({args.page}, {args.input})")
    document = load_document(_read_markup(args, config.render_timeout_ms))

    if args.page == "timetable":
        if not is_timetable_page(document):
            _log("  No timetable grid on this page (table.schedule-table missing)")
        result = export_timetable(
            document, options, naming="static" if args.static_name else "quarter"
        )
    else:
        if not is_calendar_page(document):
            _log("  No calendar found on this page; try --render")
        result = export_calendar(document)

    if not result.structure_found:
        log.warning("nothing_exported", page=args.page, input=str(args.input))
        return 2

    if result.entry_count == 0:
        _log("  No classes found on this page")

    path = deliver(result, options.output_type, output_dir)
    if path is not None:
        _log(f"  {result.entry_count} entries -> {path}")
    _log("export_schedule: done")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config = get_config()
    setup_logging(json_output=config.log_json, log_level=config.log_level)
    try:
        return _run(args)
    except ExportError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
