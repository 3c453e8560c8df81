#!/usr/bin/env python3
"""Seed the local profile database with sample learners and tutors.

Loads rows from a YAML file into the SQL profile store so the tutormatch
command can be tried without the hosted backend.

Usage:
    # Seed the default database from the bundled sample file
    python scripts/seed_sample_profiles.py

    # Custom database path and sample file
    python scripts/seed_sample_profiles.py --database /tmp/tutormatch.db --profiles data/sample_profiles.yaml

    # Then list tutors for a sample learner
    DATABASE_URL=sqlite:////tmp/tutormatch.db tutormatch --learner-id stu-harare-1
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import yaml
from dotenv import load_dotenv

from tutormatch.domain.models import Learner, Tutor
from tutormatch.logging.config import configure_logging
from tutormatch.persistence import (
    LearnerRepository,
    PersistenceError,
    TutorRepository,
    close_database,
    get_session,
    init_database,
)


def print_header(title: str):
    """Print a formatted section header."""
    width = 80
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width + "\n")


def load_rows(profiles_file: Path):
    with open(profiles_file, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return data.get("learners") or [], data.get("tutors") or []


def main():
    """Main entry point for the seeding script."""
    parser = argparse.ArgumentParser(
        description="Seed the local profile database with sample data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--profiles",
        type=Path,
        default=Path("data/sample_profiles.yaml"),
        help="Path to profiles YAML file (default: data/sample_profiles.yaml)",
    )
    parser.add_argument(
        "--database",
        type=Path,
        default=Path("data/tutormatch.db"),
        help="Path to SQLite database (default: data/tutormatch.db)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: WARNING)",
    )

    args = parser.parse_args()

    load_dotenv()
    configure_logging(level=args.log_level, format_type="key-value", environment="seed")

    print_header("Tutor Match - Seed Sample Profiles")
    print(f"Profiles file: {args.profiles}")
    print(f"Database: {args.database}")

    if not args.profiles.exists():
        print(f"\n❌ Error: Profiles file not found: {args.profiles}")
        return 1

    try:
        learner_rows, tutor_rows = load_rows(args.profiles)
    except (OSError, yaml.YAMLError) as e:
        print(f"\n❌ Error: Failed to read {args.profiles}: {e}")
        return 1

    try:
        init_database(f"sqlite:///{args.database.absolute()}")

        skipped = 0
        with get_session() as session:
            learners = LearnerRepository(session)
            tutors = TutorRepository(session)

            for row in learner_rows:
                try:
                    learners.upsert(Learner.from_record(row))
                except ValueError as e:
                    skipped += 1
                    print(f"  ⚠️  Skipping learner {row.get('id')!r}: {e}")

            for row in tutor_rows:
                try:
                    tutors.upsert(Tutor.from_record(row))
                except ValueError as e:
                    skipped += 1
                    print(f"  ⚠️  Skipping tutor {row.get('id')!r}: {e}")

            approved = len(tutors.list_approved())
            pending = len(tutors.list_pending())

        print(f"\n✓ Learners: {len(learner_rows)}")
        print(f"✓ Tutors: {approved} approved, {pending} pending")
        if skipped:
            print(f"⚠️  Skipped rows: {skipped}")

        print(f"\nTry: DATABASE_URL=sqlite:///{args.database.absolute()} tutormatch --learner-id stu-harare-1")
        return 0

    except PersistenceError as e:
        print(f"\n❌ Database error: {e}")
        return 1
    finally:
        close_database()


if __name__ == "__main__":
    sys.exit(main())
