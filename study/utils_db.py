import logging
from contextlib import contextmanager

from flask import abort

from . import db

logger = logging.getLogger(__name__)


def get_or_404(model, ident):
    """Session.get lookup that aborts with 404 when the row is missing."""
    obj = db.session.get(model, ident)
    if obj is None:
        abort(404)
    return obj


@contextmanager
def transactional():
    """Unit of work over ``db.session``.

    Commits when the block exits normally; on any exception the session is
    rolled back and the exception re-raised.

    Usage:
        with transactional():
            member_repository.save(Member(user_name="member1", age=10))
    """
    try:
        yield db.session
        db.session.commit()
    except Exception as exc:
        logger.error("Transaction rolled back: %s", exc)
        db.session.rollback()
        raise
