# src/markup_auditor/cli.py
import argparse
import copy
import logging
import sys
from pathlib import Path
from typing import List, Optional

from markup_auditor.controllers.audit_controller import AuditController
from markup_auditor.controllers.report_controller import ReportController
from markup_auditor.dom.registry import RuleRegistry
from markup_auditor.errors import AuditError
from markup_auditor.managers.config_manager import config_manager
from markup_auditor.server.app import serve
from markup_auditor.utils.configure_logging import configure_from_settings
from markup_auditor.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

SUBCOMMANDS = ['run', 'batch', 'codes', 'serve']


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--log-level", type=str, default=argparse.SUPPRESS, help="Override the configured log level.")
    common.add_argument("--set", action="append", dest="overrides", default=argparse.SUPPRESS, metavar="KEY=VALUE",
                        help="Override a setting for this run, e.g. rules.max_nesting_depth=10 (repeatable).")

    parser = argparse.ArgumentParser(prog="markup-audit", description="Audit HTML markup and score it.",
                                     parents=[common])
    parser.set_defaults(log_level=None, overrides=None)
    subparsers = parser.add_subparsers(dest="subcommand", help="Subcommands")

    # 1. Subcommand: RUN
    run_parser = subparsers.add_parser("run", help="Audit a single document", parents=[common])
    source = run_parser.add_mutually_exclusive_group()
    source.add_argument("--file", type=str, help="Local HTML file to audit.")
    source.add_argument("--url", type=str, help="URL of the page to audit.")
    source.add_argument("--html", type=str, help="Markup passed directly on the command line.")
    run_parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format.")
    _add_common_options(run_parser)

    # 2. Subcommand: BATCH
    batch_parser = subparsers.add_parser("batch", help="Audit several files", parents=[common])
    batch_parser.add_argument("paths", nargs="+", help="HTML files or directories (scanned for *.html).")
    batch_parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar.")
    _add_common_options(batch_parser)

    # 3. Subcommand: CODES
    subparsers.add_parser("codes", help="List every issue code the rules can report", parents=[common])

    # 4. Subcommand: SERVE
    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API", parents=[common])
    serve_parser.add_argument("--host", type=str, default=None, help="Defaults to server.host.")
    serve_parser.add_argument("--port", type=int, default=None, help="Defaults to server.port.")
    return parser


def _add_common_options(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("--ignore", action="append", default=[], metavar="CODE",
                     help="Drop issues with this code before scoring (repeatable).")
    sub.add_argument("--locator", choices=["token", "source"], default=None,
                     help="Line lookup strategy.")
    sub.add_argument("--export", type=str, default=None,
                     help="Save results to .json, .csv or .xlsx (relative paths go to Documents).")


def _collect_paths(raw_paths: List[str]) -> List[Path]:
    paths: List[Path] = []
    for raw in raw_paths:
        path = Path(raw).expanduser()
        if path.is_dir():
            paths.extend(sorted(p for p in path.rglob("*") if p.suffix.lower() in ('.html', '.htm')))
        else:
            paths.append(path)
    return paths


def _apply_overrides(overrides: Optional[List[str]]) -> None:
    """Applies KEY=VALUE pairs to the in-memory configuration."""
    for item in overrides or []:
        key_path, sep, value = item.partition("=")
        key_path = key_path.strip()
        if not sep or not key_path:
            raise ValueError(f"Invalid --set value '{item}', expected KEY=VALUE.")
        if not config_manager.set_nested(key_path, value.strip()):
            raise ValueError(f"Cannot set '{key_path}'.")


def _make_controller(args) -> AuditController:
    settings = copy.deepcopy(config_manager.get_all())
    if args.locator:
        settings.setdefault("locator", {})["strategy"] = args.locator
    return AuditController(settings=settings, ignored_codes=args.ignore)


def _handle_run(args, reporter: ReportController) -> int:
    controller = _make_controller(args)
    if args.file:
        report = controller.audit_file(args.file)
    elif args.url:
        report = controller.audit_url(args.url)
    elif args.html is not None:
        report = controller.audit_markup(args.html)
    else:
        report = controller.audit_stream(sys.stdin)

    print(reporter.render_json(report) if args.format == "json" else reporter.render_text(report))

    if args.export:
        output = reporter.export([report], PathUtils.resolve_output_path(args.export))
        print(f"✅ Report saved to {output}")
    return 0


def _handle_batch(args, reporter: ReportController) -> int:
    controller = _make_controller(args)
    paths = _collect_paths(args.paths)
    if not paths:
        print("❌ No HTML files found.", file=sys.stderr)
        return 1

    results = controller.audit_many(paths, show_progress=not args.no_progress)
    reports = [r.report for r in results if r.report is not None]
    failed = [r for r in results if r.error]

    if reports:
        print(reporter.summary_dataframe(reports).to_string(index=False))
    for result in failed:
        print(f"❌ {result.source}: {result.error}", file=sys.stderr)

    if args.export and reports:
        output = reporter.export(reports, PathUtils.resolve_output_path(args.export))
        print(f"✅ Results saved to {output}")
    return 1 if failed else 0


def _handle_codes() -> int:
    RuleRegistry.discover()
    for category in RuleRegistry.get_categories():
        print(f"{category.name}:")
        for code in category.codes:
            print(f"  {code}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()

    # Bare options default to the 'run' subcommand
    if not any(a in SUBCOMMANDS for a in argv) and not any(a in ('-h', '--help') for a in argv):
        argv.insert(0, 'run')
    args = parser.parse_args(argv)

    try:
        _apply_overrides(args.overrides)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    configure_from_settings(config_manager.get_all(), level_override=args.log_level)
    reporter = ReportController()

    try:
        if args.subcommand == "run":
            return _handle_run(args, reporter)
        if args.subcommand == "batch":
            return _handle_batch(args, reporter)
        if args.subcommand == "codes":
            return _handle_codes()
        if args.subcommand == "serve":
            serve(args.host or config_manager.get_nested("server.host", "127.0.0.1"),
                  args.port or config_manager.get_nested("server.port", 5000))
            return 0
        parser.print_help()
        return 0
    except AuditError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())
