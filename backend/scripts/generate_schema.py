#!/usr/bin/env python3
"""
Write (or print) the schema definition for a DB_MODE without starting the server.

Usage:
    python scripts/generate_schema.py --mode remote --output prisma/schema.prisma
    python scripts/generate_schema.py --mode local --stdout
"""
import argparse
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.config import settings
from app.db import generate_schema, resolve_database_config, write_schema


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate the schema definition file")
    parser.add_argument("--mode", default=settings.DB_MODE, help="local or remote (default: DB_MODE)")
    parser.add_argument("--output", default=settings.SCHEMA_PATH, help="target file")
    parser.add_argument("--stdout", action="store_true", help="print instead of writing")
    args = parser.parse_args(argv)

    config = resolve_database_config(args.mode, settings.DATABASE_URL_REMOTE)
    if args.stdout:
        sys.stdout.write(generate_schema(config))
        return 0

    path = write_schema(config, args.output, lock_timeout=settings.SCHEMA_LOCK_TIMEOUT_SECONDS)
    print(f"Wrote {config.mode} schema to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
