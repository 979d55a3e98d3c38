"""Fluent query factory over SQLAlchemy's ``select()``.

``QueryFactory`` is bound to a session (normally the scoped ``db.session``)
and hands out ``FluentQuery`` objects. A ``FluentQuery`` is an immutable
wrapper around a ``Select``: every builder method returns a new instance,
and the ``fetch*`` methods run the statement on the bound session.

Conditions passed as ``None`` are skipped, so optional filters can be
written as small helpers that return either a SQL expression or ``None``:

    def age_eq(age):
        return Member.age == age if age is not None else None

    query_factory.select_from(Member).where(name_eq(name), age_eq(age)).fetch()
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import and_, func, select
from sqlalchemy.orm import QueryableAttribute, contains_eager

logger = logging.getLogger(__name__)


def _present(clauses) -> list:
    return [c for c in clauses if c is not None]


class FluentQuery:
    def __init__(self, session, statement, unique: bool = False) -> None:
        self._session = session
        self._statement = statement
        # set once a collection is eagerly loaded from a join
        self._unique = unique

    @property
    def statement(self):
        """The underlying SQLAlchemy ``Select``."""
        return self._statement

    def _derive(self, statement) -> "FluentQuery":
        return FluentQuery(self._session, statement, self._unique)

    # ------------------------------------------------------------ builders
    def from_(self, *froms) -> "FluentQuery":
        return self._derive(self._statement.select_from(*froms))

    def where(self, *conditions) -> "FluentQuery":
        present = _present(conditions)
        if not present:
            return self
        return self._derive(self._statement.where(*present))

    def _join(self, target, on, isouter: bool):
        conditions = _present(on)
        if not conditions:
            return self._statement.join(target, isouter=isouter)
        if isinstance(target, QueryableAttribute):
            # relationship path: extra criteria are appended to its ON clause
            return self._statement.join(target.and_(*conditions), isouter=isouter)
        return self._statement.join(target, and_(*conditions), isouter=isouter)

    def join(self, target, *on) -> "FluentQuery":
        return self._derive(self._join(target, on, isouter=False))

    def left_join(self, target, *on) -> "FluentQuery":
        return self._derive(self._join(target, on, isouter=True))

    def fetch_join(self, relationship) -> "FluentQuery":
        """Inner join a relationship and populate it from the same rows.

        A one-to-many relationship repeats the parent once per child row, so
        results of such a query are de-duplicated before being returned.
        """
        statement = self._statement.join(relationship).options(contains_eager(relationship))
        unique = self._unique or relationship.property.uselist
        return FluentQuery(self._session, statement, unique)

    def order_by(self, *clauses) -> "FluentQuery":
        return self._derive(self._statement.order_by(*_present(clauses)))

    def group_by(self, *clauses) -> "FluentQuery":
        return self._derive(self._statement.group_by(*_present(clauses)))

    def having(self, *conditions) -> "FluentQuery":
        present = _present(conditions)
        if not present:
            return self
        return self._derive(self._statement.having(*present))

    def offset(self, offset: int) -> "FluentQuery":
        return self._derive(self._statement.offset(offset))

    def limit(self, limit: int) -> "FluentQuery":
        return self._derive(self._statement.limit(limit))

    def distinct(self) -> "FluentQuery":
        return self._derive(self._statement.distinct())

    # ------------------------------------------------------------ nesting
    def subquery(self, name: str | None = None):
        return self._statement.subquery(name)

    def scalar_subquery(self):
        return self._statement.scalar_subquery()

    # ------------------------------------------------------------ terminals
    def _is_single_column(self) -> bool:
        return len(self._statement.column_descriptions) == 1

    def _execute(self, statement):
        result = self._session.execute(statement)
        return result.unique() if self._unique else result

    def fetch(self) -> list:
        logger.debug("fetch: %s", self._statement)
        result = self._execute(self._statement)
        if self._is_single_column():
            return list(result.scalars().all())
        return list(result.all())

    def fetch_one(self) -> Any:
        """Return the single matching result, or ``None`` if nothing matches.

        Raises ``sqlalchemy.exc.MultipleResultsFound`` when more than one row
        matches.
        """
        result = self._execute(self._statement)
        if self._is_single_column():
            return result.scalar_one_or_none()
        return result.one_or_none()

    def fetch_first(self) -> Any:
        # LIMIT 1 would cut an eagerly joined collection short
        result = self._execute(self._statement if self._unique else self._statement.limit(1))
        if self._is_single_column():
            return result.scalars().first()
        return result.first()

    def fetch_count(self) -> int:
        counted = select(func.count()).select_from(self._statement.order_by(None).subquery())
        return int(self._session.execute(counted).scalar_one())


class QueryFactory:
    """Creates ``FluentQuery`` objects bound to one session."""

    def __init__(self, session) -> None:
        self.session = session

    def select(self, *columns) -> FluentQuery:
        return FluentQuery(self.session, select(*columns))

    def select_from(self, entity) -> FluentQuery:
        return FluentQuery(self.session, select(entity))
