from __future__ import annotations

from logging.config import fileConfig
from typing import Any

from alembic import context as _context  # type: ignore[attr-defined]

# Expose name 'context' with flexible typing for attribute access used by Alembic
context: Any = _context

# This is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def get_app():
    from study import create_app

    class MigrationConfig:
        AUTO_CREATE_TABLES = False
        AUTO_ALEMBIC_UPGRADE = False

    return create_app(MigrationConfig)


app = get_app()


def _target_metadata():
    from study import db
    from study.members import models  # noqa: F401

    return db.metadata


def run_migrations_offline() -> None:
    with app.app_context():
        context.configure(
            url=app.config["SQLALCHEMY_DATABASE_URI"],
            target_metadata=_target_metadata(),
            literal_binds=True,
            dialect_opts={"paramstyle": "named"},
        )
        with context.begin_transaction():
            context.run_migrations()


def run_migrations_online() -> None:
    from study import db as _db

    with app.app_context():
        with _db.engine.connect() as connection:
            context.configure(connection=connection, target_metadata=_target_metadata())
            with context.begin_transaction():
                context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
