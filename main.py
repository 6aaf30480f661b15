"""
Material Issuance Dashboard — command-line pipeline run.

Loads an issuance export (or simulated data), aggregates it and prints the
KPI cards and chart series as a smoke test.

Usage:
    python main.py [path/to/issuances.csv]
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from issuance_dashboard.config import CHART_REGISTRY
from issuance_dashboard.dashboard import DashboardSession
from issuance_dashboard.loaders import (
    DatasetParseError,
    EmptyDatasetError,
    load_issuance_records,
)
from issuance_dashboard.simulator import generate_issuance_records

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Run the pipeline and print smoke-test outputs. Returns an exit code."""
    parser = argparse.ArgumentParser(description="Material issuance pipeline run")
    parser.add_argument("path", nargs="?", help="CSV/XLSX issuance export (default: simulated data)")
    args = parser.parse_args(argv)

    print("=" * 70)
    print("  MATERIAL ISSUANCE DASHBOARD — Pipeline Smoke Test")
    print("=" * 70)

    # ------------------------------------------------------------------
    # 1. Load records
    # ------------------------------------------------------------------
    print("\n[ 1 ] LOADING RECORDS")
    print("-" * 40)
    if args.path:
        try:
            records = load_issuance_records(args.path)
        except DatasetParseError as exc:
            logger.error("%s", exc)
            return 2
        source = args.path
    else:
        records = generate_issuance_records()
        source = "simulated data"
    print(f"{len(records)} records from {source}")

    # ------------------------------------------------------------------
    # 2. Aggregate
    # ------------------------------------------------------------------
    print("\n[ 2 ] AGGREGATING")
    print("-" * 40)
    session = DashboardSession()
    try:
        session.load(records, source_name=source)
    except EmptyDatasetError as exc:
        logger.error("%s", exc)
        return 3

    for name, table in session.result.tables.items():
        print(f"  {name:12s} | {len(table)} groups")

    # ------------------------------------------------------------------
    # 3. Dashboard outputs
    # ------------------------------------------------------------------
    print("\n[ 3 ] KPI CARDS")
    print("-" * 40)
    for card in session.cards.values():
        print(f"  {card['title']:24s} | {card['short']:>14s} | {card['full']}")

    print("\n[ 4 ] CHART SERIES")
    print("-" * 40)
    for chart_id in CHART_REGISTRY:
        frame = session.series[chart_id].to_frame()
        print(f"\n{session.series[chart_id].title}: {len(frame)} points")
        if not frame.empty:
            print(frame.head(10).to_string(index=False))

    print("\n" + "=" * 70)
    print("  Pipeline complete.")
    print("=" * 70)
    return 0


if __name__ == "__main__":
    sys.exit(main())
