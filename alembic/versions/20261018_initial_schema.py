"""Initial schema

Revision ID: 001_initial
Revises:
Create Date: 2026-10-18

Creates:
- User accounts
- Facebook groups
- Owner to team member links
- Team member group access
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""

    op.create_table(
        "user_accounts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column(
            "subscription_tier",
            sa.Enum("FREE", "PRO", "AGENCY", name="subscriptiontier"),
            nullable=True,
        ),
        sa.Column("stripe_customer_id", sa.String(255), nullable=True),
        sa.Column("status", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_accounts_email", "user_accounts", ["email"], unique=True)
    op.create_index("ix_user_accounts_stripe_customer_id", "user_accounts", ["stripe_customer_id"])

    op.create_table(
        "facebook_groups",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("fb_id", sa.String(64), nullable=True),
        sa.Column("fb_name", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["user_accounts.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_facebook_groups_user_id", "facebook_groups", ["user_id"])
    op.create_index("ix_facebook_groups_fb_id", "facebook_groups", ["fb_id"])

    op.create_table(
        "owner_to_team_members",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("team_member_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["owner_id"], ["user_accounts.id"]),
        sa.ForeignKeyConstraint(["team_member_id"], ["user_accounts.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("owner_id", "team_member_id", name="uq_owner_team_member"),
    )
    op.create_index("ix_owner_to_team_members_owner_id", "owner_to_team_members", ["owner_id"])
    op.create_index("ix_owner_to_team_members_team_member_id", "owner_to_team_members", ["team_member_id"])

    op.create_table(
        "team_member_group_access",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner_to_team_member_id", sa.Integer(), nullable=False),
        sa.Column("facebook_group_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["owner_to_team_member_id"], ["owner_to_team_members.id"]),
        sa.ForeignKeyConstraint(["facebook_group_id"], ["facebook_groups.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "owner_to_team_member_id", "facebook_group_id", name="uq_team_member_group_access"
        ),
    )
    op.create_index(
        "ix_team_member_group_access_owner_to_team_member_id",
        "team_member_group_access",
        ["owner_to_team_member_id"],
    )
    op.create_index(
        "ix_team_member_group_access_facebook_group_id",
        "team_member_group_access",
        ["facebook_group_id"],
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("team_member_group_access")
    op.drop_table("owner_to_team_members")
    op.drop_table("facebook_groups")
    op.drop_table("user_accounts")
    sa.Enum(name="subscriptiontier").drop(op.get_bind(), checkfirst=True)
