"""Read-only query patterns over Member and Team.

Sorting, paging, aggregation, grouping, joins and subqueries, each built
with the shared query factory. Nothing here writes to the session.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from sqlalchemy import func
from sqlalchemy.orm import aliased

from .. import query_factory
from .models import Member, Team

logger = logging.getLogger(__name__)


class Page(NamedTuple):
    items: list
    total: int
    offset: int
    limit: int


class AgeStatistics(NamedTuple):
    count: int
    total: int | None
    average: float | None
    maximum: int | None
    minimum: int | None


# ===================== Sorting / paging =====================
def members_by_age_desc() -> list[Member]:
    """Age descending, then name ascending with unnamed members last."""
    return (
        query_factory.select_from(Member)
        .order_by(Member.age.desc(), Member.user_name.asc().nulls_last())
        .fetch()
    )


def paginate_members(offset: int, limit: int, order_by=None) -> Page:
    if offset < 0:
        raise ValueError("offset must not be negative")
    if limit <= 0:
        raise ValueError("limit must be positive")
    base = query_factory.select_from(Member)
    items = (
        base.order_by(order_by if order_by is not None else Member.id.asc())
        .offset(offset)
        .limit(limit)
        .fetch()
    )
    total = base.fetch_count()
    logger.debug("Page offset=%s limit=%s -> %s of %s", offset, limit, len(items), total)
    return Page(items=items, total=total, offset=offset, limit=limit)


# ===================== Aggregation =====================
def age_statistics() -> AgeStatistics:
    row = query_factory.select(
        func.count(Member.id),
        func.sum(Member.age),
        func.avg(Member.age),
        func.max(Member.age),
        func.min(Member.age),
    ).fetch_one()
    count, total, average, maximum, minimum = row
    return AgeStatistics(
        count=int(count),
        total=total,
        average=float(average) if average is not None else None,
        maximum=maximum,
        minimum=minimum,
    )


def average_age_by_team(min_average: float | None = None) -> list[tuple[str, float]]:
    average_age = func.avg(Member.age)
    rows = (
        query_factory.select(Team.name, average_age)
        .from_(Member)
        .join(Member.team)
        .group_by(Team.name)
        .having(average_age >= min_average if min_average is not None else None)
        .order_by(Team.name.asc())
        .fetch()
    )
    return [(name, float(avg)) for name, avg in rows]


# ===================== Joins =====================
def members_of_team(team_name: str) -> list[Member]:
    return (
        query_factory.select_from(Member)
        .join(Member.team)
        .where(Team.name == team_name)
        .order_by(Member.id.asc())
        .fetch()
    )


def members_with_team(team_name: str) -> list[tuple[Member, Team | None]]:
    """Every member, paired with its team only when the team has ``team_name``.

    The filter lives in the ON clause of a left outer join, so members of
    other teams (or of no team) are still returned with ``None``.
    """
    rows = (
        query_factory.select(Member, Team)
        .from_(Member)
        .left_join(Member.team, Team.name == team_name)
        .order_by(Member.id.asc())
        .fetch()
    )
    return [(member, team) for member, team in rows]


def find_member_with_team(user_name: str) -> Member | None:
    """Load a member and its team in one statement (fetch join)."""
    return (
        query_factory.select_from(Member)
        .fetch_join(Member.team)
        .where(Member.user_name == user_name)
        .fetch_one()
    )


# ===================== Subqueries =====================
def oldest_members() -> list[Member]:
    sub = aliased(Member)
    max_age = query_factory.select(func.max(sub.age)).scalar_subquery()
    return (
        query_factory.select_from(Member)
        .where(Member.age == max_age)
        .order_by(Member.id.asc())
        .fetch()
    )


def members_at_least_average_age() -> list[Member]:
    sub = aliased(Member)
    avg_age = query_factory.select(func.avg(sub.age)).scalar_subquery()
    return (
        query_factory.select_from(Member)
        .where(Member.age >= avg_age)
        .order_by(Member.id.asc())
        .fetch()
    )


def members_with_age_in(min_age: int) -> list[Member]:
    """Members whose age appears in the set of ages greater than ``min_age``."""
    sub = aliased(Member)
    ages = query_factory.select(sub.age).where(sub.age > min_age).statement
    return (
        query_factory.select_from(Member)
        .where(Member.age.in_(ages))
        .order_by(Member.id.asc())
        .fetch()
    )
