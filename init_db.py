#!/usr/bin/env python
"""Create the folio tables and report what is in them.

Creates projects, page_groups and project_page_groups from the SQLAlchemy
models when they are missing. Existing tables and rows are left alone. For
schema changes on an existing database use `flask db upgrade` instead.

Usage:
    python init_db.py
"""

import os
import sys

from folio import create_app

TABLES = [
    ("projects", "Translation projects and their languages"),
    ("page_groups", "Root text, translations and page image"),
    ("project_page_groups", "Which page groups belong to which project"),
]


def init_database():
    config_name = os.getenv('FLASK_ENV', 'development')
    app = create_app(config_name)

    print(f"\nInitializing folio database ({config_name})")
    print(f"Database URI: {app.config['SQLALCHEMY_DATABASE_URI']}\n")

    with app.app_context():
        service = app.extensions['project_service']
        try:
            service.initialize()
            counts = service.count_rows()
        except Exception as e:
            print(f"❌ Could not initialize the database: {type(e).__name__}: {e}\n")
            return False

    for table_name, description in TABLES:
        print(f"  ✓ {table_name:<22} {description}")

    print(f"\n✅ Ready: {counts['projectCount']} projects, {counts['pageGroupCount']} page groups")
    print("Start the server with: python wsgi.py")
    print("Seed the sample project with: python scripts/seed_sample_data.py\n")
    return True


if __name__ == '__main__':
    sys.exit(0 if init_database() else 1)
