#!/usr/bin/env python3
"""
College Seed Script

Loads college names into the autocomplete directory. Existing colleges are
not duplicated; their usage count is bumped instead.

Accepts a CSV file with a name column (college_name, name, institution_name,
college...) or a plain text file with one college per line.

Usage: python scripts/seed_colleges.py colleges.csv
"""
import csv
import sys
sys.path.insert(0, '.')

from jobportal.db.mongodb import init_mongo_indexes, test_mongo_connection
from jobportal.services.mongo_service import get_college_service

NAME_COLUMNS = ("college_name", "name", "institution_name", "college", "institution")


def read_names(path: str) -> list:
    with open(path, newline="", encoding="utf-8") as f:
        if not path.lower().endswith(".csv"):
            return [line.strip() for line in f if line.strip()]

        reader = csv.DictReader(f)
        columns = {c.lower().strip(): c for c in reader.fieldnames or []}
        column = next((columns[c] for c in NAME_COLUMNS if c in columns), None)
        if column is None:
            raise SystemExit(f"No college name column found in {path}. Expected one of: {', '.join(NAME_COLUMNS)}")
        return [row[column].strip() for row in reader if (row.get(column) or "").strip()]


def main():
    if len(sys.argv) != 2:
        raise SystemExit("Usage: python scripts/seed_colleges.py <colleges.csv|colleges.txt>")

    if not test_mongo_connection():
        raise SystemExit("MongoDB is not reachable, check MONGODB_URI")
    init_mongo_indexes()

    names = read_names(sys.argv[1])
    print(f"Seeding {len(names)} colleges...")

    results = get_college_service().bulk_add(names)
    print(f"  Added:   {results['added']}")
    print(f"  Updated: {results['updated']}")
    print(f"  Errors:  {len(results['errors'])}")
    for error in results["errors"][:10]:
        print(f"    {error['college']}: {error['error']}")

    stats = get_college_service().stats()
    print(f"\nDirectory now holds {stats['total']} colleges")


if __name__ == "__main__":
    main()
