from __future__ import annotations

import argparse
import json

from backoffice.api.utils import get_reporting_engine, parse_date_range
from backoffice.core.config import get_settings
from backoffice.core.logging import configure_logging
from backoffice.persistence.pg import init_db


def _build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Back-office reporting CLI")
    top = parser.add_subparsers(dest="command", required=True)

    report = top.add_parser("report", help="Profit report for an inclusive date range")
    report.add_argument("--start", required=True, help="First day, YYYY-MM-DD")
    report.add_argument("--end", required=True, help="Last day, YYYY-MM-DD")

    dashboard = top.add_parser("dashboard", help="Dashboard summary with period-over-period deltas")
    dashboard.add_argument("--period", type=int, default=settings.default_period_days, help="Window length in days")

    managers = top.add_parser("managers", help="Per-manager profit leaderboard")
    managers.add_argument("--start", required=True, help="First day, YYYY-MM-DD")
    managers.add_argument("--end", required=True, help="Last day, YYYY-MM-DD")

    stock = top.add_parser("low-stock", help="Products below a stock threshold across all catalog shards")
    stock.add_argument("--threshold", type=int, default=settings.low_stock_threshold)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging()
    init_db()
    engine = get_reporting_engine()

    try:
        if args.command == "report":
            result = engine.report(*parse_date_range(args.start, args.end))
        elif args.command == "dashboard":
            result = engine.dashboard_summary(args.period)
        elif args.command == "managers":
            result = engine.manager_leaderboard(*parse_date_range(args.start, args.end))
        elif args.command == "low-stock":
            result = engine.low_stock(args.threshold)
        else:
            parser.error("unsupported command")
            return 2
    except ValueError as exc:
        parser.error(str(exc))
        return 2

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
