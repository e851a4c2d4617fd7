# alembic/env.py
import os
import sys
from logging.config import fileConfig

from alembic import context

# --- Make 'app.' imports work when running Alembic from the project root ---
cwd = os.getcwd()
if cwd not in sys.path:
    sys.path.insert(0, cwd)

# app.core.config loads .env, so DATABASE_URL is shared with the application
from app.db.session import engine  # noqa: E402
from app.db.base import Base  # noqa: E402
import app.models  # noqa: E402,F401  (populates Base.metadata)

# Alembic Config object
config = context.config

# Configure Python logging from alembic.ini (if present)
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Ensure alembic has the same URL even in offline mode
config.set_main_option("sqlalchemy.url", str(engine.url))

target_metadata = Base.metadata


def _is_sqlite() -> bool:
    return engine.url.get_backend_name() == "sqlite"


def include_object(object, name, type_, reflected, compare_to):
    """
    Filter which objects Alembic should consider for autogenerate.

    - Skip Alembic's own version table.
    - Do NOT propose DROP for DB objects that exist in the database but have
      no ORM counterpart.
    """
    if type_ == "table" and name == "alembic_version":
        return False

    if reflected and compare_to is None and type_ in {
        "table", "index", "unique_constraint", "foreign_key"
    }:
        return False

    return True


def process_revision_directives(context, revision, directives):
    """Drop empty autogenerate revisions (keeps the history clean)."""
    if getattr(context.config.cmd_opts, "autogenerate", False):
        script = directives[0]
        if script.upgrade_ops.is_empty():
            directives[:] = []


def run_migrations_offline():
    context.configure(
        url=str(engine.url),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        include_object=include_object,
        render_as_batch=_is_sqlite(),  # SQLite-friendly ALTER TABLE
        process_revision_directives=process_revision_directives,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            include_object=include_object,
            render_as_batch=_is_sqlite(),
            process_revision_directives=process_revision_directives,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
