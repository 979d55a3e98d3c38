import logging
import os
import sqlite3

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

from .querydsl import QueryFactory

"""Application factory and global extensions.

Blueprints and models are imported inside create_app to avoid import
cycles with the extensions declared here.
"""


# Global extensions (initialised in create_app)
db = SQLAlchemy()

# Query factory bound to the scoped session of the current app context
query_factory = QueryFactory(db.session)


# SQLite PRAGMAs for every connection created by SQLAlchemy: WAL for read
# concurrency, referential integrity on, and a short wait on write locks.
@event.listens_for(Engine, "connect")
def _sqlite_pragmas_on_connect(dbapi_connection, connection_record):  # pragma: no cover - infra
    if isinstance(dbapi_connection, sqlite3.Connection):
        cur = dbapi_connection.cursor()
        try:
            cur.execute("PRAGMA journal_mode=WAL")
        except sqlite3.OperationalError:
            # in-memory databases refuse WAL
            pass
        cur.execute("PRAGMA foreign_keys=ON")
        cur.execute("PRAGMA busy_timeout=1000")
        cur.close()


def _configure_logging(app: Flask) -> None:
    level = app.config.get("LOG_LEVEL", "INFO")
    logger = logging.getLogger("study")
    logger.setLevel(level)
    if not logging.getLogger().handlers and not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)


def create_app(config_object=None):
    app = Flask(__name__, instance_relative_config=True)

    # Base config
    app.config.from_object("config.Config")

    # Optional override
    if config_object:
        app.config.from_object(config_object)

    os.makedirs(app.instance_path, exist_ok=True)

    _configure_logging(app)

    db.init_app(app)
    app.extensions["query_factory"] = query_factory

    from .members.commands import seed_members_command  # noqa: WPS433
    from .members.views import members_bp, teams_bp  # noqa: WPS433

    app.register_blueprint(members_bp, url_prefix="/members")
    app.register_blueprint(teams_bp, url_prefix="/teams")
    app.cli.add_command(seed_members_command)

    # Alembic upgrade (optional) before the create_all fallback
    if not app.config.get("TESTING") and app.config.get("AUTO_ALEMBIC_UPGRADE"):
        with app.app_context():
            from alembic import command as alembic_command
            from alembic.config import Config as AlembicConfig

            alembic_command.upgrade(AlembicConfig("alembic.ini"), "head")

    if app.config.get("TESTING") or app.config.get("AUTO_CREATE_TABLES"):
        with app.app_context():
            from .members import models as _member_models  # noqa: F401

            db.create_all()

    @app.route("/health")
    def health():
        return {"status": "ok"}

    app.logger.debug("Application created with database %s", app.config["SQLALCHEMY_DATABASE_URI"])
    return app
