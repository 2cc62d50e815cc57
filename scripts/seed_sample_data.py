#!/usr/bin/env python3
"""Seed the database with the sample OCR project.

Skips seeding when any project already exists. Pass --clear to delete all
projects, page groups and their images first.

Usage:
    python scripts/seed_sample_data.py [--clear]
"""

import sys
import os

# Add parent directory to path to import folio modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from folio import create_app


def seed_sample_data(clear=False):
    """Seed the sample project and its page group."""
    app = create_app()

    with app.app_context():
        service = app.extensions['project_service']
        service.initialize()

        if clear:
            print("Clearing existing data...")
            service.clear_all_data()

        counts = service.count_rows()
        print(f"Found {counts['projectCount']} projects and {counts['pageGroupCount']} page groups")

        seeded = service.initialize_from_sample_data()

        counts = service.count_rows()
        print("\n" + "="*50)
        if seeded:
            print("Sample data seeding completed!")
        else:
            print("Database already contains projects, nothing seeded.")
        print(f"Projects in database: {counts['projectCount']}")
        print(f"Page groups in database: {counts['pageGroupCount']}")
        print("="*50)


if __name__ == '__main__':
    seed_sample_data(clear='--clear' in sys.argv[1:])
