"""Repositories for Member and Team.

``CrudRepository`` covers the generic persistence operations; the
subclasses add the queries that need explicit conditions. Writes only add
and flush, committing is left to the enclosing unit of work
(``utils_db.transactional``).
"""

from __future__ import annotations

import logging
from typing import Generic, Iterable, TypeVar

from sqlalchemy import func

from .. import query_factory
from ..querydsl import QueryFactory
from .models import Member, Team

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CrudRepository(Generic[T]):
    model: type

    def __init__(self, factory: QueryFactory | None = None) -> None:
        self.query_factory = factory or query_factory

    @property
    def session(self):
        return self.query_factory.session

    def save(self, entity: T) -> T:
        self.session.add(entity)
        self.session.flush()  # assigns the generated id
        logger.debug("Saved %r", entity)
        return entity

    def save_all(self, entities: Iterable[T]) -> list[T]:
        saved = list(entities)
        self.session.add_all(saved)
        self.session.flush()
        logger.debug("Saved %d %s rows", len(saved), self.model.__name__)
        return saved

    def find_by_id(self, ident) -> T | None:
        return self.session.get(self.model, ident)

    def find_all(self) -> list[T]:
        return self.query_factory.select_from(self.model).order_by(self.model.id.asc()).fetch()

    def count(self) -> int:
        return self.query_factory.select(func.count(self.model.id)).fetch_one()

    def exists_by_id(self, ident) -> bool:
        return self.query_factory.select(self.model.id).where(self.model.id == ident).fetch_first() is not None


class MemberRepository(CrudRepository[Member]):
    model = Member

    def find_by_name(self, name: str) -> list[Member]:
        return (
            self.query_factory.select_from(Member)
            .where(Member.user_name == name)
            .order_by(Member.id.asc())
            .fetch()
        )

    def find_user(self, name_param: str | None, age_param: int | None) -> list[Member]:
        """Members matching the given name and/or age; absent filters are skipped."""
        return (
            self.query_factory.select_from(Member)
            .where(self._name_eq(name_param), self._age_eq(age_param))
            .order_by(Member.id.asc())
            .fetch()
        )

    # Each helper returns None when its parameter is absent, which drops the
    # condition from the WHERE clause instead of turning it into true/false.
    @staticmethod
    def _name_eq(name_param: str | None):
        if name_param is not None and name_param.strip():
            return Member.user_name == name_param
        return None

    @staticmethod
    def _age_eq(age_param: int | None):
        return Member.age == age_param if age_param is not None else None


class TeamRepository(CrudRepository[Team]):
    model = Team

    def find_by_name(self, name: str) -> list[Team]:
        return self.query_factory.select_from(Team).where(Team.name == name).order_by(Team.id.asc()).fetch()
