#!/usr/bin/env python3
"""
Lists the themes of the source or destination store.

Useful to pick the value of ``destination.theme_name`` before running the
migration.

Usage:
  python scripts/list_themes.py --store destination [--config config/migration_config.json]
"""

import argparse
import os
import sys

from dotenv import load_dotenv

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from src.migrators.themes import fetch_themes
from src.utils.config import load_config


def main():
    parser = argparse.ArgumentParser(description="List the themes of a configured Shopify store.")
    parser.add_argument("--store", choices=["source", "destination"], default="source", help="Which store to query.")
    parser.add_argument(
        "--config",
        default=os.path.join(PROJECT_ROOT, "config", "migration_config.json"),
        help="Path to the migration config file.",
    )
    args = parser.parse_args()

    load_dotenv()
    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"Error loading {args.config}: {e}", file=sys.stderr)
        sys.exit(1)

    if args.store == "source":
        domain, token = config.source_store_url, config.source_store_token
    else:
        domain, token = config.destination_store_url, config.destination_store_token
    if not domain or not token:
        print(f"The {args.store} store URL or token is not configured.", file=sys.stderr)
        sys.exit(1)

    result = fetch_themes(domain, token, timeout=config.request_timeout)
    if not result.ok:
        print(f"Failed to list themes: {result.message}", file=sys.stderr)
        sys.exit(1)

    for theme in result.value:
        print(f"{theme.id}\t{theme.role}\t{theme.name}")


if __name__ == "__main__":
    main()
