"""Initial schema for HSR Tools

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

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
    # Lookup tables
    op.create_table(
        "elements",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("icon_url", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_elements_name", "elements", ["name"])

    op.create_table(
        "paths",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("icon_url", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_paths_name", "paths", ["name"])

    op.create_table(
        "relic_sets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("type", sa.String(20), nullable=True, comment="relic or planar"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_relic_sets_name", "relic_sets", ["name"])

    # Characters
    op.create_table(
        "characters",
        sa.Column("id", sa.String(50), nullable=False),
        sa.Column("char_id", sa.String(10), nullable=False, comment="Short in-game character code"),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("element_id", sa.Integer(), nullable=False),
        sa.Column("path_id", sa.Integer(), nullable=False),
        sa.Column("rarity", sa.Integer(), nullable=False, server_default="4"),
        sa.Column("base_speed", sa.Integer(), nullable=False, server_default="100"),
        sa.Column("release_order", sa.Integer(), nullable=False, server_default="0"),
        sa.ForeignKeyConstraint(["element_id"], ["elements.id"]),
        sa.ForeignKeyConstraint(["path_id"], ["paths.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("char_id"),
    )
    op.create_index("ix_characters_element_id", "characters", ["element_id"])
    op.create_index("ix_characters_path_id", "characters", ["path_id"])
    op.create_index("ix_characters_release_order", "characters", ["release_order"])

    op.create_table(
        "character_skills",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("character_id", sa.String(50), nullable=False),
        sa.Column("basic_multiplier", sa.Numeric(4, 2), nullable=False, server_default="1.0"),
        sa.Column("skill_multiplier", sa.Numeric(4, 2), nullable=False, server_default="1.0"),
        sa.Column("ult_multiplier", sa.Numeric(4, 2), nullable=False, server_default="2.0"),
        sa.Column("basic_energy", sa.Integer(), nullable=False, server_default="20"),
        sa.Column("skill_energy", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("ult_cost", sa.Integer(), nullable=False, server_default="120"),
        sa.Column("ult_type", sa.String(20), nullable=False, server_default="normal"),
        sa.Column("passive", sa.Text(), nullable=True),
        sa.Column("base_atk", sa.Integer(), nullable=False, server_default="500"),
        sa.Column("base_crit_rate", sa.Numeric(4, 2), nullable=False, server_default="0.05"),
        sa.Column("base_crit_dmg", sa.Numeric(4, 2), nullable=False, server_default="0.50"),
        sa.ForeignKeyConstraint(["character_id"], ["characters.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("character_id"),
    )

    # Builds
    op.create_table(
        "character_builds",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("character_id", sa.String(50), nullable=False),
        sa.Column("body_main", sa.String(50), nullable=True),
        sa.Column("feet_main", sa.String(50), nullable=True),
        sa.Column("orb_main", sa.String(50), nullable=True),
        sa.Column("rope_main", sa.String(50), nullable=True),
        sa.ForeignKeyConstraint(["character_id"], ["characters.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("character_id"),
    )

    op.create_table(
        "character_build_substats",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("build_id", sa.Integer(), nullable=False),
        sa.Column("stat_name", sa.String(50), nullable=False),
        sa.Column("weight", sa.Numeric(3, 2), nullable=False, server_default="0.5"),
        sa.ForeignKeyConstraint(["build_id"], ["character_builds.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("build_id", "stat_name", name="uq_build_substat"),
    )
    op.create_index("ix_character_build_substats_build_id", "character_build_substats", ["build_id"])

    op.create_table(
        "character_build_sets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("build_id", sa.Integer(), nullable=False),
        sa.Column("relic_set_id", sa.Integer(), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False, server_default="1"),
        sa.ForeignKeyConstraint(["build_id"], ["character_builds.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["relic_set_id"], ["relic_sets.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("build_id", "relic_set_id", name="uq_build_relic_set"),
    )
    op.create_index("ix_character_build_sets_build_id", "character_build_sets", ["build_id"])
    op.create_index("ix_character_build_sets_relic_set_id", "character_build_sets", ["relic_set_id"])

    # Users
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("uid", sa.String(20), nullable=True, comment="In-game account UID"),
        sa.Column("nickname", sa.String(100), nullable=True),
        sa.Column("email_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("uid"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "user_characters",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("character_id", sa.String(50), nullable=False),
        sa.Column("eidolon", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("level", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["character_id"], ["characters.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "character_id", name="idx_user_character_unique"),
    )
    op.create_index("ix_user_characters_user_id", "user_characters", ["user_id"])
    op.create_index("ix_user_characters_character_id", "user_characters", ["character_id"])

    # Game data served read-only by the API
    op.create_table(
        "banners",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("type", sa.String(50), nullable=True, comment="character, weapon or standard"),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_banners_start_date", "banners", ["start_date"])
    op.create_index("ix_banners_end_date", "banners", ["end_date"])

    op.create_table(
        "banner_characters",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("banner_id", sa.Integer(), nullable=False),
        sa.Column("character_id", sa.String(50), nullable=False),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.ForeignKeyConstraint(["banner_id"], ["banners.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["character_id"], ["characters.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_banner_characters_banner_id", "banner_characters", ["banner_id"])
    op.create_index("ix_banner_characters_character_id", "banner_characters", ["character_id"])

    op.create_table(
        "codes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("code", sa.String(50), nullable=False),
        sa.Column("rewards", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )
    op.create_index("ix_codes_is_active", "codes", ["is_active"])
    op.create_index("ix_codes_expires_at", "codes", ["expires_at"])

    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("type", sa.String(50), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_events_start_date", "events", ["start_date"])
    op.create_index("ix_events_end_date", "events", ["end_date"])


def downgrade() -> None:
    op.drop_table("events")
    op.drop_table("codes")
    op.drop_table("banner_characters")
    op.drop_table("banners")
    op.drop_table("user_characters")
    op.drop_table("users")
    op.drop_table("character_build_sets")
    op.drop_table("character_build_substats")
    op.drop_table("character_builds")
    op.drop_table("character_skills")
    op.drop_table("characters")
    op.drop_table("relic_sets")
    op.drop_table("paths")
    op.drop_table("elements")
