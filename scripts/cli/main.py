"""CLI main: argument parsing and command dispatch."""

import argparse
import json
import sys
from pathlib import Path
from uuid import UUID

from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from store_kernel.db.engine import (
    create_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
    session_scope,
)
from store_kernel.domain.entries import LEAF_FIELDS, FinancialEntry, LeafAmounts, to_amount
from store_kernel.exceptions import ConfigError, EntryNotFoundError, StoreFinanceError
from store_kernel.selectors.entry_selector import EntrySelector
from store_kernel.services.entry_service import EntryService
from store_reporting.config import ReportingConfig
from store_reporting.service import ReportingService
from store_reporting.statements import trend_series

from scripts.cli import config as cli_config
from scripts.cli.util import enable_quiet_logging, restore_logging
from scripts.cli.views import show_listing, show_trend, show_values


def _option(leaf: str) -> str:
    return "--" + leaf.replace("_", "-")


def _parse_id(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise EntryNotFoundError(value) from None


def _leaves_from_args(args) -> dict:
    return {
        name: to_amount(getattr(args, name), name)
        for name in LEAF_FIELDS
        if getattr(args, name) is not None
    }


def _load_config(path) -> ReportingConfig:
    path = path or cli_config.config_path()
    if path is None:
        return ReportingConfig.with_defaults()
    if not path.exists():
        raise ConfigError("config", f"file not found: {path}")
    return ReportingConfig.from_yaml(path)


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_init_db(args, config) -> int:
    create_tables()
    print("  Tables created.")
    return 0


def cmd_add(args, config) -> int:
    entry = FinancialEntry(
        store=args.store,
        year=args.year,
        month=args.month,
        amounts=LeafAmounts(**_leaves_from_args(args)),
    )
    with session_scope() as session:
        entry_id = EntryService(session).save(entry)
    print(f"  Saved entry {entry_id}")
    return 0


def cmd_update(args, config) -> int:
    entry_id = _parse_id(args.id)
    with session_scope() as session:
        current = EntrySelector(session).get(entry_id)
        changed = current.with_dimensions(
            store=args.store, year=args.year, month=args.month,
        ).with_amounts(**_leaves_from_args(args))
        stored = EntryService(session).update(changed)
    print(f"  Updated entry {stored.id} (net {stored.net_result})")
    return 0


def cmd_delete(args, config) -> int:
    entry_id = _parse_id(args.id)
    with session_scope() as session:
        EntryService(session).delete(entry_id)
    print(f"  Deleted entry {entry_id}")
    return 0


def cmd_list(args, config) -> int:
    session = get_session()
    try:
        report = ReportingService(session, config=config).listing(
            args.store, args.year, args.month,
        )
    finally:
        session.close()
    if args.json:
        _print_json(ReportingService.to_dict(report))
    else:
        show_listing(report)
    return 0


def cmd_trend(args, config) -> int:
    session = get_session()
    try:
        report = ReportingService(session, config=config).trend(
            args.store, args.year, args.month,
        )
    finally:
        session.close()
    points = trend_series(report)
    if args.json:
        _print_json({
            "points": ReportingService.to_dict(points),
            "totals": ReportingService.to_dict(report.totals),
        })
    else:
        show_trend(points, report.totals)
    return 0


def cmd_years(args, config) -> int:
    session = get_session()
    try:
        years = ReportingService(session, config=config).available_years()
    finally:
        session.close()
    if args.json:
        _print_json(list(years))
    else:
        show_values(years, "No entries recorded yet.")
    return 0


def cmd_stores(args, config) -> int:
    session = get_session()
    try:
        stores = ReportingService(session, config=config).stores()
    finally:
        session.close()
    if args.json:
        _print_json(stores)
    else:
        show_values(stores, "No stores known yet.")
    return 0


def cmd_export(args, config) -> int:
    session = get_session()
    try:
        service = ReportingService(session, config=config)
        build = service.trend if args.trend else service.listing
        report = build(args.store, args.year, args.month)
        path = service.export(report, args.path)
    finally:
        session.close()
    print(f"  Exported {len(report.rows)} row(s) to {path}")
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _add_filters(p: argparse.ArgumentParser) -> None:
    p.add_argument("--store", default="", help="Store name (default: all stores consolidated)")
    p.add_argument("--year", default="", help="Year, e.g. 2024 (default: all)")
    p.add_argument("--month", default="", help="Month 01-12 (default: all)")


def _add_leaves(p: argparse.ArgumentParser) -> None:
    for name in LEAF_FIELDS:
        p.add_argument(_option(name), dest=name, default=None, metavar="AMOUNT")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="store-finance",
        description="Monthly store entries and consolidated financial reports",
        epilog="Run init-db once on a new database before the other commands.",
    )
    parser.add_argument("--db", default=None, help="Database URL (default: $STORE_FINANCE_DB_URL)")
    parser.add_argument("--config", type=Path, default=None, help="Reporting config YAML")
    parser.add_argument("--verbose", action="store_true", help="Show JSON log lines on stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init-db", help="Create the database tables")
    p.set_defaults(handler=cmd_init_db)

    p = sub.add_parser("add", help="Record one store's month")
    p.add_argument("store")
    p.add_argument("year", type=int)
    p.add_argument("month", help="Two-digit month, 01-12")
    _add_leaves(p)
    p.set_defaults(handler=cmd_add)

    p = sub.add_parser("update", help="Change an entry's store, period or amounts")
    p.add_argument("id")
    p.add_argument("--store", default=None)
    p.add_argument("--year", type=int, default=None)
    p.add_argument("--month", default=None)
    _add_leaves(p)
    p.set_defaults(handler=cmd_update)

    p = sub.add_parser("delete", help="Delete an entry by id")
    p.add_argument("id")
    p.set_defaults(handler=cmd_delete)

    for name, handler, help_text in (
        ("list", cmd_list, "Consultation listing, newest first"),
        ("trend", cmd_trend, "Revenue x expense series, oldest first"),
    ):
        p = sub.add_parser(name, help=help_text)
        _add_filters(p)
        p.add_argument("--json", action="store_true")
        p.set_defaults(handler=handler)

    p = sub.add_parser("years", help="Years with entries, newest first")
    p.add_argument("--json", action="store_true")
    p.set_defaults(handler=cmd_years)

    p = sub.add_parser("stores", help="Known stores")
    p.add_argument("--json", action="store_true")
    p.set_defaults(handler=cmd_stores)

    p = sub.add_parser("export", help="Write the listing as a spreadsheet (.xls SpreadsheetML, or .xlsx)")
    p.add_argument("path")
    _add_filters(p)
    p.add_argument("--trend", action="store_true", help="Export the trend view, oldest first")
    p.set_defaults(handler=cmd_export)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    muted = []
    try:
        init_engine_from_url(args.db or cli_config.db_url(), echo=False)
        if not args.verbose:
            muted = enable_quiet_logging()
        config = _load_config(args.config)
        return args.handler(args, config)
    except StoreFinanceError as exc:
        print(f"  ERROR: {exc.code}: {exc}", file=sys.stderr)
        return 1
    except ArgumentError as exc:
        print(f"  ERROR: INVALID_DATABASE_URL: {exc}", file=sys.stderr)
        return 1
    except SQLAlchemyError as exc:
        # Usually a database without tables: run init-db first.
        print(f"  ERROR: DATABASE_ERROR: {str(exc).splitlines()[0]}", file=sys.stderr)
        return 1
    finally:
        restore_logging(muted)
        reset_engine()


if __name__ == "__main__":
    sys.exit(main())
