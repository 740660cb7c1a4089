#!/usr/bin/env python3
"""
Seed a collection store with the demo catalog, partners, employees, BOM
and opening ledger entries.

Only empty collections are written, so running it twice is harmless.

Usage:
    python3 scripts/seed_data.py                                  # bundled settings
    python3 scripts/seed_data.py --database-url sqlite:///erp.db
    python3 scripts/seed_data.py --seed my_seed.yaml --reset
"""

import argparse
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Seed an ERP collection store from YAML")
    p.add_argument("--settings", type=Path, default=None, help="settings.yaml (default: bundled)")
    p.add_argument("--seed", type=Path, default=None, help="seed.yaml (default: bundled)")
    p.add_argument(
        "--database-url",
        default=None,
        help="Use the sql backend at this URL instead of the configured store",
    )
    p.add_argument("--reset", action="store_true", help="Drop and recreate the SQL table first")
    return p.parse_args()


def main() -> int:
    args = _parse_args()

    from dataclasses import replace

    from erp_config import build_store, get_active_settings, load_seed, seed_store
    from erp_kernel.db.engine import build_engine, drop_tables
    from erp_kernel.logging_config import configure_logging
    from erp_kernel.store.base import Collections

    configure_logging()

    settings = get_active_settings(args.settings)
    store_settings = settings.store
    if args.database_url:
        store_settings = replace(store_settings, backend="sql", database_url=args.database_url)

    if store_settings.backend == "memory":
        print("  NOTE: memory backend selected; seeded data lasts for this process only.")

    if args.reset and store_settings.backend == "sql":
        print("  Dropping collection table...")
        drop_tables(build_engine(store_settings.database_url))

    store = build_store(store_settings)
    seeded = seed_store(store, load_seed(args.seed))

    print()
    for name in Collections.ALL:
        marker = "seeded" if name in seeded else "kept"
        print(f"  {name:<20} {len(store.get(name)):>5} records  ({marker})")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
