"""Migration environment for the users and sessions tables; DATABASE_URL comes from gatehouse settings."""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

from gatehouse.core.config import get_settings
from gatehouse.models import Base, SessionRecord, User  # noqa: F401  (registers both tables)

config = context.config
# alembic.ini ships logger sections; tolerate a trimmed ini without them.
if config.config_file_name is not None:
    try:
        fileConfig(config.config_file_name)
    except KeyError:
        pass

target_metadata = Base.metadata


def database_url() -> str:
    # Raises ValidationError when DATABASE_URL or SESSION_SECRET is missing, before any SQL runs.
    return get_settings().DATABASE_URL


def migrate_offline() -> None:
    """Emit the migration SQL without connecting (alembic upgrade --sql)."""
    context.configure(
        url=database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def migrate_online() -> None:
    """Apply migrations over a single unpooled connection."""
    engine = create_engine(database_url(), poolclass=NullPool)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, target_metadata=target_metadata)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    migrate_offline()
else:
    migrate_online()
