import pytest
from sqlalchemy import inspect

from study import db
from study.members import queries
from study.members.models import Member
from study.members.repository import MemberRepository
from study.utils_db import transactional


def names(members):
    return [m.user_name for m in members]


def test_members_by_age_desc_puts_unnamed_last(dataset):
    with transactional():
        MemberRepository().save_all(
            [
                Member(user_name=None, age=100),
                Member(user_name="member5", age=100),
                Member(user_name="member6", age=100),
            ]
        )
    result = queries.members_by_age_desc()
    assert names(result) == ["member5", "member6", None, "member4", "member3", "member2", "member1"]


def test_members_by_age_desc_is_non_increasing(paging_dataset):
    ages = [m.age for m in queries.members_by_age_desc()]
    assert len(ages) == 12
    assert all(a >= b for a, b in zip(ages, ages[1:]))


def test_paginate_members_returns_requested_slice(paging_dataset):
    page = queries.paginate_members(offset=3, limit=3)
    assert names(page.items) == ["user04", "user05", "user06"]
    assert page.total == 12
    assert (page.offset, page.limit) == (3, 3)


def test_paginate_members_with_custom_order(paging_dataset):
    page = queries.paginate_members(0, 2, order_by=Member.age.desc())
    assert names(page.items) == ["user12", "user11"]


def test_paginate_members_past_the_end(paging_dataset):
    page = queries.paginate_members(offset=12, limit=5)
    assert page.items == []
    assert page.total == 12


@pytest.mark.parametrize("offset,limit", [(-1, 3), (0, 0), (0, -2)])
def test_paginate_members_rejects_bad_arguments(ctx, offset, limit):
    with pytest.raises(ValueError):
        queries.paginate_members(offset, limit)


def test_age_statistics(dataset):
    stats = queries.age_statistics()
    assert stats.count == 4
    assert stats.total == 100
    assert stats.average == pytest.approx(25.0)
    assert stats.maximum == 40
    assert stats.minimum == 10


def test_age_statistics_on_paging_dataset(paging_dataset):
    stats = queries.age_statistics()
    assert stats.count == 12
    assert stats.maximum == 60
    assert stats.minimum == 5


def test_age_statistics_empty_table(ctx):
    stats = queries.age_statistics()
    assert stats.count == 0
    assert stats.total is None
    assert stats.average is None
    assert stats.maximum is None
    assert stats.minimum is None


def test_average_age_by_team(dataset):
    assert queries.average_age_by_team() == [("teamA", 15.0), ("teamB", 35.0)]


def test_average_age_by_team_with_having(dataset):
    assert queries.average_age_by_team(min_average=20) == [("teamB", 35.0)]


def test_members_of_team_inner_join(dataset):
    found = queries.members_of_team("teamA")
    assert names(found) == ["member1", "member2"]
    assert all(m.team.name == "teamA" for m in found)
    assert queries.members_of_team("teamC") == []


def test_members_with_team_left_join_keeps_every_member(dataset):
    rows = queries.members_with_team("teamA")
    assert [(m.user_name, t.name if t else None) for m, t in rows] == [
        ("member1", "teamA"),
        ("member2", "teamA"),
        ("member3", None),
        ("member4", None),
    ]


def test_members_with_team_includes_members_without_team(dataset):
    with transactional():
        MemberRepository().save(Member(user_name="loner", age=5))
    rows = queries.members_with_team("teamB")
    assert len(rows) == 5
    assert rows[-1][0].user_name == "loner"
    assert rows[-1][1] is None


def test_find_member_with_team_loads_team_eagerly(dataset):
    db.session.expunge_all()
    member = queries.find_member_with_team("member1")
    assert "team" not in inspect(member).unloaded
    assert member.team.name == "teamA"


def test_find_member_with_team_skips_members_without_team(dataset):
    with transactional():
        MemberRepository().save(Member(user_name="loner", age=5))
    assert queries.find_member_with_team("loner") is None


def test_oldest_members(dataset):
    assert names(queries.oldest_members()) == ["member4"]


def test_members_at_least_average_age(dataset):
    assert names(queries.members_at_least_average_age()) == ["member3", "member4"]


def test_members_with_age_in_subquery(dataset):
    assert names(queries.members_with_age_in(10)) == ["member2", "member3", "member4"]
    assert queries.members_with_age_in(40) == []
