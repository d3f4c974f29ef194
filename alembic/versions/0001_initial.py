"""Initial schema for Profileforge

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18
"""
from __future__ import annotations

from alembic import op  # type: ignore
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # characters table
    op.create_table(
        "characters",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("gender", sa.String(length=16), nullable=False),
        sa.Column("occupation", sa.String(length=255), nullable=True),
        sa.Column("background", sa.Text(), nullable=True),
        sa.Column("hair_color", sa.String(length=50), nullable=True),
        sa.Column("eye_color", sa.String(length=50), nullable=True),
        sa.Column("height_cm", sa.Integer(), nullable=True),
        sa.Column("build", sa.String(length=50), nullable=True),
        sa.Column("seed", sa.String(length=255), nullable=True),
        sa.Column("mode", sa.String(length=16), nullable=False, server_default="seeded"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_characters_gender", "characters", ["gender"], unique=False)
    op.create_index("ix_characters_age", "characters", ["age"], unique=False)
    op.create_index("ix_characters_seed", "characters", ["seed"], unique=False)
    op.create_index("ix_characters_mode", "characters", ["mode"], unique=False)

    # personality_traits table
    op.create_table(
        "personality_traits",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("character_id", sa.Integer(), sa.ForeignKey("characters.id", ondelete="CASCADE"), nullable=False),
        sa.Column("trait", sa.String(length=100), nullable=False),
    )
    op.create_index("ix_personality_traits_character_id", "personality_traits", ["character_id"], unique=False)

    # hobbies table
    op.create_table(
        "hobbies",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("character_id", sa.Integer(), sa.ForeignKey("characters.id", ondelete="CASCADE"), nullable=False),
        sa.Column("hobby", sa.String(length=100), nullable=False),
    )
    op.create_index("ix_hobbies_character_id", "hobbies", ["character_id"], unique=False)

    # available_traits reference table
    op.create_table(
        "available_traits",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("value", sa.String(length=100), nullable=False),
        sa.UniqueConstraint("category", "value", name="uq_available_traits_category_value"),
    )
    op.create_index("ix_available_traits_category", "available_traits", ["category"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_available_traits_category", table_name="available_traits")
    op.drop_table("available_traits")

    op.drop_index("ix_hobbies_character_id", table_name="hobbies")
    op.drop_table("hobbies")

    op.drop_index("ix_personality_traits_character_id", table_name="personality_traits")
    op.drop_table("personality_traits")

    op.drop_index("ix_characters_mode", table_name="characters")
    op.drop_index("ix_characters_seed", table_name="characters")
    op.drop_index("ix_characters_age", table_name="characters")
    op.drop_index("ix_characters_gender", table_name="characters")
    op.drop_table("characters")
