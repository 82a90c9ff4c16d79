#!/usr/bin/env python3
"""
import_jobs.py - CLI for bulk-importing jobs from a CSV file.

Loads a CSV of job postings into a company's job list without requiring the
FastAPI server to be running. All data is written to DATA_ROOT (configured in
.env, defaults to ~/Documents/careerpage).

Usage:
    python import_jobs.py <company-slug> <csv-path> [--publish]

Example:
    python import_jobs.py acme ./jobs.csv --publish
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path

# Ensure the src/ directory is on the path so careerpage imports resolve
# when running this script directly from the repo root.
_SRC = os.path.join(os.path.dirname(__file__), "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import jobs for a company from a CSV file")
    parser.add_argument("company_slug", help="Slug of the company receiving the jobs")
    parser.add_argument("csv_path", help="Path to the CSV file")
    parser.add_argument(
        "--publish", action="store_true", help="Publish imported jobs immediately"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    start = time.time()

    # Deferred so sys.path manipulation above takes effect first.
    from careerpage.config import settings
    from careerpage.database import Base, SessionLocal, engine
    from careerpage.errors import CareerPageError
    from careerpage.logging_config import configure_logging
    from careerpage.services.companies import CompanyService
    from careerpage.services.csv_import import JobCsvImporter

    configure_logging(settings.log_level)

    csv_path = Path(args.csv_path)
    if not csv_path.is_file():
        print(f"CSV file not found: {csv_path}", file=sys.stderr)
        return 1

    print(f"Data root : {settings.data_root}")
    print(f"Database  : {settings.database_url}")
    print()

    Path(settings.data_root).mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        csv_text = csv_path.read_text(encoding="utf-8-sig")
        try:
            company = CompanyService(db).get_by_slug(args.company_slug)
            result = JobCsvImporter(db).import_csv(company.id, csv_text, publish=args.publish)
        except CareerPageError as exc:
            print(f"Import failed: {exc.message}", file=sys.stderr)
            for key, value in (exc.details or {}).items():
                print(f"    {key}: {value}", file=sys.stderr)
            return 1

        elapsed = round(time.time() - start, 1)
        print("Import complete!")
        print(f"    Company  : {company.name}")
        print(f"    Imported : {result['imported']} of {result['total']}")
        print(f"    State    : {'published' if args.publish else 'draft'}")
        print(f"    Time     : {elapsed}s")
        for error in result["errors"] or []:
            print(f"    Error    : {error}", file=sys.stderr)
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
