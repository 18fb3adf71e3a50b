#!/usr/bin/env python3
"""Copy HabitFlow data from the JSON blob store into a relational database."""

from __future__ import annotations

import argparse
import os
import sys

from habitflow.core.config import get_blob_path, get_database_url
from habitflow.core.errors import HabitFlowError
from habitflow.core.logging_setup import configure_logging
from habitflow.storage import BlobHabitStorage, SqlHabitStorage
from habitflow.storage.transfer import copy_storage


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Migrate blob-backed HabitFlow data to SQL")
    parser.add_argument(
        "--blob-path",
        default=get_blob_path(),
        help="Path to the JSON blob file",
    )
    parser.add_argument(
        "--database-url",
        default=get_database_url(),
        help="Target HABITFLOW_DATABASE_URL (SQLite or PostgreSQL)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Delete existing habits and logs in the target before import",
    )

    args = parser.parse_args(argv)
    configure_logging()
    blob_path = os.path.abspath(args.blob_path)

    if not os.path.exists(blob_path):
        print(f"Blob file not found: {blob_path}", file=sys.stderr)
        return 1

    try:
        with BlobHabitStorage(blob_path) as source, SqlHabitStorage(args.database_url) as target:
            if target.list_habits() and not args.force:
                print(
                    "Target database already has habits. Use --force to replace them.",
                    file=sys.stderr,
                )
                return 1
            if args.force:
                target.delete_all_habits()
            counts = copy_storage(source, target)
    except HabitFlowError as exc:
        print(f"Migration failed: {exc}", file=sys.stderr)
        return 1

    print(
        "Migration completed successfully: "
        f"{counts['habits']} habits, {counts['logs']} logs, {counts['categories']} categories."
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
