"""Create forum tables

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates users, questions, answers, votes and tags, and seeds the
       users and tags the in-memory backend starts with.
Rollback: downgrade() drops every table (all data lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def upgrade() -> None:
    users = op.create_table(
        "users",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("avatar", sa.String(512), nullable=True),
        sa.Column("reputation", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "role",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'user'"),
            comment="guest, user or admin",
        ),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
        sa.CheckConstraint("reputation >= 0", name="ck_users_reputation_non_negative"),
    )

    op.create_table(
        "questions",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("title", sa.String(150), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column(
            "tags",
            sa.JSON(),
            nullable=False,
            comment="Lowercase, deduplicated, at most 5",
        ),
        sa.Column("author_id", sa.String(64), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("votes", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "accepted_answer_id",
            sa.String(64),
            nullable=True,
            comment="Id of the single accepted answer, if any",
        ),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    # One index per sort mode
    op.create_index("idx_questions_created_at", "questions", [sa.text("created_at DESC")])
    op.create_index("idx_questions_updated_at", "questions", [sa.text("updated_at DESC")])
    op.create_index("idx_questions_votes", "questions", [sa.text("votes DESC")])

    op.create_table(
        "answers",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "question_id",
            sa.String(64),
            sa.ForeignKey("questions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("author_id", sa.String(64), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("votes", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_accepted", sa.Boolean(), nullable=False, server_default=sa.false()),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_answers_question_id", "answers", ["question_id"])

    op.create_table(
        "votes",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("user_id", sa.String(64), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("target_id", sa.String(64), nullable=False),
        sa.Column("target_type", sa.String(20), nullable=False, comment="question or answer"),
        sa.Column("direction", sa.String(10), nullable=False, comment="up or down"),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "target_type", "target_id", name="uq_votes_user_target"),
    )

    tags = op.create_table(
        "tags",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("questions_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.bulk_insert(
        users,
        [
            {"id": "1", "username": "reactdev", "email": "reactdev@example.com",
             "reputation": 1250, "role": "user"},
            {"id": "2", "username": "securitypro", "email": "security@example.com",
             "reputation": 3500, "role": "user"},
            {"id": "3", "username": "csswizard", "email": "css@example.com",
             "reputation": 890, "role": "user"},
            {"id": "4", "username": "typescriptpro", "email": "ts@example.com",
             "reputation": 2500, "role": "user"},
            {"id": "5", "username": "moderator", "email": "admin@example.com",
             "reputation": 10000, "role": "admin"},
        ],
    )
    op.bulk_insert(
        tags,
        [
            {"id": "1", "name": "react", "questions_count": 1250},
            {"id": "2", "name": "typescript", "questions_count": 980},
            {"id": "3", "name": "javascript", "questions_count": 2100},
            {"id": "4", "name": "css", "questions_count": 750},
            {"id": "5", "name": "jwt", "questions_count": 320},
        ],
    )


def downgrade() -> None:
    op.drop_table("tags")
    op.drop_table("votes")
    op.drop_index("ix_answers_question_id", table_name="answers")
    op.drop_table("answers")
    op.drop_index("idx_questions_votes", table_name="questions")
    op.drop_index("idx_questions_updated_at", table_name="questions")
    op.drop_index("idx_questions_created_at", table_name="questions")
    op.drop_table("questions")
    op.drop_table("users")
