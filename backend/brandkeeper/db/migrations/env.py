from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from brandkeeper.db.base import Base
from brandkeeper.settings import get_settings

# registers every table on Base.metadata for autogenerate
from brandkeeper.core.audit import models as audit_models  # noqa: F401
from brandkeeper.core.auth import models as auth_models  # noqa: F401
from brandkeeper.core.brand import models as brand_models  # noqa: F401
from brandkeeper.core.companies import models as companies_models  # noqa: F401
from brandkeeper.core.countries import models as countries_models  # noqa: F401
from brandkeeper.core.files import models as files_models  # noqa: F401
from brandkeeper.core.signatures import models as signatures_models  # noqa: F401
from brandkeeper.core.social_media import models as social_media_models  # noqa: F401
from brandkeeper.core.users import models as users_models  # noqa: F401

config = context.config
if config.config_file_name:
    fileConfig(config.config_file_name)
target_metadata = Base.metadata


def run_migrations_offline(url: str) -> None:
    context.configure(url=url, target_metadata=target_metadata, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online(url: str) -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = url
    connectable = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()


database_url = get_settings().DATABASE_SYNC_URL
if context.is_offline_mode():
    run_migrations_offline(database_url)
else:
    run_migrations_online(database_url)
