"""Alembic environment for the folio schema.

The database URL and metadata come from the Flask app, so `flask db ...` and
plain `alembic -c migrations/alembic.ini ...` migrate the same database.
"""

import logging
import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from folio import create_app, db
from folio.models import Project, PageGroup, ProjectPageGroup  # noqa: F401  (register tables)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)
logger = logging.getLogger('alembic.env')

app = create_app(os.getenv('FLASK_ENV', 'development'))
target_metadata = db.metadata
database_url = app.config['SQLALCHEMY_DATABASE_URI']

# SQLite cannot ALTER most constraints in place
render_as_batch = database_url.startswith('sqlite')


def run_migrations_offline():
    """Emit SQL to stdout instead of touching the database."""
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        render_as_batch=render_as_batch,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    """Apply migrations over a fresh connection."""

    def skip_empty_autogenerate(context, revision, directives):
        if getattr(config.cmd_opts, 'autogenerate', False) and directives[0].upgrade_ops.is_empty():
            directives[:] = []
            logger.info('No changes in schema detected.')

    engine = create_engine(database_url, poolclass=pool.NullPool)

    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=render_as_batch,
            process_revision_directives=skip_empty_autogenerate,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
