"""``flask seed-members``: insert the demo teams and members."""

import click
from flask.cli import with_appcontext

from ..utils_db import transactional
from .models import Member, Team
from .repository import MemberRepository, TeamRepository

SEED_MEMBERS = (
    ("member1", 10, "teamA"),
    ("member2", 20, "teamA"),
    ("member3", 30, "teamB"),
    ("member4", 40, "teamB"),
)


def seed_members() -> tuple[list[Team], list[Member]]:
    team_repository = TeamRepository()
    member_repository = MemberRepository()
    with transactional():
        teams = {name: Team(name=name) for name in ("teamA", "teamB")}
        team_repository.save_all(teams.values())
        members = member_repository.save_all(
            Member(user_name=user_name, age=age, team=teams[team_name])
            for user_name, age, team_name in SEED_MEMBERS
        )
    return list(teams.values()), members


@click.command("seed-members")
@with_appcontext
def seed_members_command():
    teams, members = seed_members()
    click.echo(f"Inserted {len(teams)} teams and {len(members)} members.")
