from __future__ import annotations

import argparse
import json
import os
import sys

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def load_env_file(env_path: str) -> None:
    if not os.path.exists(env_path):
        return
    with open(env_path, "r", encoding="utf-8") as env_file:
        for line in env_file:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            os.environ.setdefault(key, value)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print the sales dashboard view for one fiscal period as JSON.")
    parser.add_argument(
        "--env-file",
        default=os.path.join(PROJECT_ROOT, ".env"),
        help="Path to .env file.",
    )
    parser.add_argument("--fiscal-period", type=int, default=None, help="Fiscal period number (1 = base year).")
    parser.add_argument("--all-periods", action="store_true", help="Do not restrict by fiscal period.")
    parser.add_argument("--phase", action="append", dest="phases", help="Deal phase to include (repeatable).")
    parser.add_argument("--all-phases", action="store_true", help="Do not restrict by deal phase.")
    parser.add_argument("--sales-rep", action="append", dest="sales_reps", help="Sales rep to include (repeatable).")
    parser.add_argument("--channel", action="append", dest="channels", help="Channel to include (repeatable).")
    parser.add_argument(
        "--sort-key",
        default=None,
        choices=["sales_rep", "deal_count", "total_sales", "total_profit", "avg_sale"],
    )
    parser.add_argument("--sort-direction", default=None, choices=["ascending", "descending"])
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    load_env_file(os.path.abspath(args.env_file))

    from sales_dashboard.api.dependencies import get_sales_dashboard_service
    from sales_dashboard.core.config import get_default_phases, get_settings
    from sales_dashboard.core.logging import configure_logging
    from sales_dashboard.schemas.sales_dashboard import DealSelection, SortState

    settings = get_settings()
    configure_logging(settings.log_level)
    fiscal_period = None if args.all_periods else (args.fiscal_period or settings.default_fiscal_period)
    selection = DealSelection(
        fiscal_period=fiscal_period,
        phases=[] if args.all_phases else (args.phases if args.phases is not None else get_default_phases()),
        sales_reps=args.sales_reps or [],
        channels=args.channels or [],
    )
    sort = SortState(
        key=args.sort_key or settings.default_sort_key,
        direction=args.sort_direction or settings.default_sort_direction,
    )

    service = get_sales_dashboard_service()
    _, view = service.get_dashboard(selection, sort)
    print(json.dumps(view.model_dump(by_alias=True, mode="json"), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
