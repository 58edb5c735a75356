from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path

from .core.config import get_settings
from .core.logging import configure_logging
from .engine import DashboardEngine
from .errors import JobCostError
from .exporter import export_report, summary_rows
from .portfolio import dashboard_cards
from .seed import demo_store
from .storage import RecordStore
from .views import format_material_expenses, format_portfolio, format_project, format_summary_table, format_worker_hours


def store_from_args(args: argparse.Namespace) -> RecordStore:
    path = args.data or get_settings().dataset_path
    if path:
        return RecordStore.from_file(Path(path))
    return demo_store()


def engine_from_args(args: argparse.Namespace) -> DashboardEngine:
    return DashboardEngine(store_from_args(args))


def cmd_summary(args: argparse.Namespace) -> None:
    engine = engine_from_args(args)
    print(format_summary_table(engine.compute_all_summaries()))


def cmd_project(args: argparse.Namespace) -> None:
    engine = engine_from_args(args)
    row = engine.compute_project_summary(args.id)
    print(format_project(row, engine.project_payments(args.id)))


def cmd_stats(args: argparse.Namespace) -> None:
    engine = engine_from_args(args)
    stats = engine.compute_portfolio_stats()
    if args.cards:
        print(json.dumps([card.__dict__ for card in dashboard_cards(stats)], indent=2))
    else:
        print(format_portfolio(stats))


def cmd_worker_hours(args: argparse.Namespace) -> None:
    engine = engine_from_args(args)
    print(format_worker_hours(engine.worker_hours()))


def cmd_material_expenses(args: argparse.Namespace) -> None:
    engine = engine_from_args(args)
    print(format_material_expenses(engine.material_expenses()))


def cmd_export(args: argparse.Namespace) -> None:
    engine = engine_from_args(args)
    path = Path(args.path)
    export_report(summary_rows(engine.compute_all_summaries()), path, title=args.title)
    print(f"Exported project summaries to {path}")


def cmd_init_dataset(args: argparse.Namespace) -> None:
    path = Path(args.path)
    if path.exists() and not args.force:
        raise JobCostError(f"{path} already exists; pass --force to overwrite")
    demo_store().write(path)
    print(f"Wrote demo dataset to {path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Construction job cost dashboard")
    parser.add_argument("--data", help="JSON dataset to load instead of the demo data")
    sub = parser.add_subparsers(dest="command", required=True)

    summary = sub.add_parser("summary", help="Cost and profit summary for every project")
    summary.set_defaults(func=cmd_summary)

    project = sub.add_parser("project", help="Cost breakdown and payments for one project")
    project.add_argument("id")
    project.set_defaults(func=cmd_project)

    stats = sub.add_parser("stats", help="Portfolio totals")
    stats.add_argument("--cards", action="store_true", help="Print the dashboard cards as JSON")
    stats.set_defaults(func=cmd_stats)

    worker_hours = sub.add_parser("worker-hours", help="Hours and earnings per time entry")
    worker_hours.set_defaults(func=cmd_worker_hours)

    material_expenses = sub.add_parser("material-expenses", help="Cost per material usage")
    material_expenses.set_defaults(func=cmd_material_expenses)

    export = sub.add_parser("export", help="Export project summaries to csv, json or pdf")
    export.add_argument("path")
    export.add_argument("--title", default="Project Summary")
    export.set_defaults(func=cmd_export)

    init_dataset = sub.add_parser("init-dataset", help="Write the demo data as a JSON dataset")
    init_dataset.add_argument("path")
    init_dataset.add_argument("--force", action="store_true")
    init_dataset.set_defaults(func=cmd_init_dataset)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(get_settings().log_level)
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except JobCostError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
