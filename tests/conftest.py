import os
import sys
import tempfile

import pytest

# Ensure project root (parent of tests) is on sys.path before importing study
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from study import create_app, db  # noqa: E402


@pytest.fixture()
def app():
    # Isolated configuration backed by a temporary SQLite file
    tmpdir = tempfile.TemporaryDirectory()
    instance = tmpdir.name

    class TestConfig:
        TESTING = True
        SECRET_KEY = "test"
        SQLALCHEMY_DATABASE_URI = "sqlite:///" + os.path.join(instance, "study.db")
        SQLALCHEMY_TRACK_MODIFICATIONS = False
        SQLALCHEMY_ECHO = False
        AUTO_ALEMBIC_UPGRADE = False
        LOG_LEVEL = "DEBUG"

    flask_app = create_app(TestConfig)
    with flask_app.app_context():
        from study.members import models  # noqa: F401

        db.create_all()
    yield flask_app
    # Release connections so the temporary directory can be removed
    with flask_app.app_context():
        db.session.remove()
        db.engine.dispose()
    tmpdir.cleanup()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


@pytest.fixture()
def ctx(app):
    """Application context kept open for the whole test."""
    with app.app_context():
        yield app


@pytest.fixture()
def dataset(ctx):
    """teamA/teamB with member1..member4 (ages 10..40), committed."""
    from study.members.commands import seed_members

    teams, members = seed_members()
    return {"teams": {t.name: t for t in teams}, "members": members}


@pytest.fixture()
def paging_dataset(ctx):
    """Twelve members, ages 5..60 step 5, alternating between two teams."""
    from study.members.models import Member, Team
    from study.utils_db import transactional

    with transactional() as session:
        team_a = Team(name="teamA")
        team_b = Team(name="teamB")
        session.add_all([team_a, team_b])
        members = [
            Member(user_name=f"user{i:02d}", age=i * 5, team=team_a if i % 2 else team_b)
            for i in range(1, 13)
        ]
        session.add_all(members)
    return members
