"""Member and Team entities.

Member owns the foreign key to Team. ``Team.members`` is a view-only
relationship: it is derived from ``tbl_member.team_id`` when loaded and is
never written through.
"""

from .. import db


class IdentityEqualityMixin:
    """Equality and hashing by primary key only.

    Transient instances (no id yet) are only equal to themselves.
    """

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self):
        if self.id is None:
            return id(self)
        return hash((type(self).__name__, self.id))


class Team(IdentityEqualityMixin, db.Model):
    __tablename__ = "tbl_team"
    id = db.Column("team_id", db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(255))
    members = db.relationship(
        "Member",
        primaryjoin="Team.id == Member.team_id",
        viewonly=True,
        lazy="select",
        order_by="Member.id",
    )

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}

    def __repr__(self):
        return f"Team(id={self.id!r}, name={self.name!r})"


class Member(IdentityEqualityMixin, db.Model):
    __tablename__ = "tbl_member"
    id = db.Column("member_id", db.Integer, primary_key=True, autoincrement=True)
    user_name = db.Column(db.String(255))
    age = db.Column(db.Integer, nullable=False, default=0, server_default="0")
    team_id = db.Column(db.Integer, db.ForeignKey("tbl_team.team_id"), nullable=True)
    team = db.relationship("Team", lazy="select")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_name": self.user_name,
            "age": self.age,
            "team_id": self.team_id,
        }

    def __repr__(self):  # team left out to avoid triggering the lazy load
        return f"Member(id={self.id!r}, user_name={self.user_name!r}, age={self.age!r})"
