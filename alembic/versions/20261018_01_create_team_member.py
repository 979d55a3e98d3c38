"""Create tbl_team and tbl_member.

Revision ID: 20261018_01
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

from typing import Any

import sqlalchemy as sa

from alembic import op as _op  # type: ignore[attr-defined]

op: Any = _op

# revision identifiers, used by Alembic.
revision = "20261018_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "tbl_team",
        sa.Column("team_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255)),
    )
    op.create_table(
        "tbl_member",
        sa.Column("member_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_name", sa.String(255)),
        sa.Column("age", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("team_id", sa.Integer(), sa.ForeignKey("tbl_team.team_id"), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("tbl_member")
    op.drop_table("tbl_team")
