from flask import Blueprint, jsonify, request

from ..utils_db import get_or_404
from . import queries
from .forms import MemberSearchForm, PageForm
from .models import Member, Team
from .repository import MemberRepository, TeamRepository

members_bp = Blueprint("members", __name__)
teams_bp = Blueprint("teams", __name__)


def _member_with_team(member: Member) -> dict:
    data = member.to_dict()
    data["team"] = member.team.to_dict() if member.team is not None else None
    return data


def _form_errors(form):
    return jsonify({"errors": form.errors}), 400


# ----------------- MEMBERS -----------------
@members_bp.route("/")
def search():
    form = MemberSearchForm(formdata=request.args)
    if not form.validate():
        return _form_errors(form)
    members = MemberRepository().find_user(form.name.data, form.age.data)
    return jsonify([m.to_dict() for m in members])


@members_bp.route("/by-name/<name>")
def by_name(name: str):
    return jsonify([m.to_dict() for m in MemberRepository().find_by_name(name)])


@members_bp.route("/<int:member_id>")
def detail(member_id: int):
    return jsonify(_member_with_team(get_or_404(Member, member_id)))


@members_bp.route("/stats")
def stats():
    return jsonify(queries.age_statistics()._asdict())


@members_bp.route("/page")
def page():
    form = PageForm(formdata=request.args)
    if not form.validate():
        return _form_errors(form)
    offset = form.offset.data if form.offset.data is not None else 0
    limit = form.limit.data if form.limit.data is not None else 10
    result = queries.paginate_members(offset, limit)
    return jsonify(
        {
            "items": [m.to_dict() for m in result.items],
            "total": result.total,
            "offset": result.offset,
            "limit": result.limit,
        }
    )


# ----------------- TEAMS -----------------
@teams_bp.route("/")
def list_teams():
    teams = TeamRepository().find_all()
    return jsonify([dict(t.to_dict(), member_count=len(t.members)) for t in teams])


@teams_bp.route("/<int:team_id>/members")
def team_members(team_id: int):
    team = get_or_404(Team, team_id)
    return jsonify([m.to_dict() for m in team.members])
