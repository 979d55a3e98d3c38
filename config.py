import os


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-me")
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(os.getcwd(), "instance", "study.db"),
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Log every generated SQL statement
    SQLALCHEMY_ECHO = _env_flag("SQL_ECHO")
    # Local development: create tbl_team / tbl_member on startup
    AUTO_CREATE_TABLES = _env_flag("AUTO_CREATE_TABLES", "true")
    # --- Migrations ---
    AUTO_ALEMBIC_UPGRADE = _env_flag("AUTO_ALEMBIC_UPGRADE")
    # --- Logging ---
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
