"""
Data Seeder Script - fills the database with synthetic academic records.

Generates institutes, student accounts, courses and results directly through
the ORM using a pool of worker threads. Optionally creates an admin account
so the seeded data can be managed through the API.

Usage:
    python seed_data.py                                   # Full-size data set
    python seed_data.py --institutes 20 --students 500 --courses 30 --results 2000
    python seed_data.py --admin-email admin@example.com --admin-password secret123
"""

import argparse
import os
import sys

from app.database import check_connection, create_tables
from app.logging_config import setup_logging
from app.services.seeding import SeedPlan, seed


def parse_args(argv=None):
    defaults = SeedPlan()
    parser = argparse.ArgumentParser(description="Seed the academic records database")
    parser.add_argument("--institutes", type=int, default=defaults.institutes)
    parser.add_argument("--students", type=int, default=defaults.students)
    parser.add_argument("--courses", type=int, default=defaults.courses)
    parser.add_argument("--results", type=int, default=defaults.results)
    parser.add_argument("--first-year", type=int, default=defaults.first_year)
    parser.add_argument("--last-year", type=int, default=defaults.last_year)
    parser.add_argument("--workers", type=int, default=os.cpu_count() or 4,
                        help="Worker threads for parallel inserts")
    parser.add_argument("--admin-email", default=os.getenv("SEED_ADMIN_EMAIL"))
    parser.add_argument("--admin-password", default=os.getenv("SEED_ADMIN_PASSWORD"))
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging()

    if not check_connection():
        print("Error: could not connect to the database")
        sys.exit(1)
    create_tables()

    plan = SeedPlan(
        institutes=args.institutes,
        students=args.students,
        courses=args.courses,
        results=args.results,
        first_year=args.first_year,
        last_year=args.last_year,
    )
    counts = seed(plan, workers=args.workers,
                  admin_email=args.admin_email, admin_password=args.admin_password)

    print("=" * 60)
    print("SEEDING SUMMARY")
    print("=" * 60)
    for table, count in counts.items():
        print(f"  {table.capitalize():<12} {count:>10,}")
    print(f"  {'Total':<12} {sum(counts.values()):>10,}")
    print("=" * 60)


if __name__ == "__main__":
    main()
