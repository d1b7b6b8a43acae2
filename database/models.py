"""
HSR Tools - Database models.

This module defines SQLAlchemy ORM models for the application.
Lookup tables (elements, paths, relic sets) and build child rows use
integer keys; characters are keyed by their stable external id; users
use UUIDs.
"""

import uuid
from datetime import datetime, UTC
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


# =============================================================================
# Lookup tables
# =============================================================================


class Element(Base):
    """Combat element (Fire, Ice, ...). Seeded from a fixed list."""

    __tablename__ = "elements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    icon_url: Mapped[str | None] = mapped_column(String(255), nullable=True)

    characters: Mapped[list["Character"]] = relationship(
        "Character",
        back_populates="element",
    )

    def __repr__(self) -> str:
        return f"<Element(id={self.id}, name={self.name})>"


class Path(Base):
    """Character path (Destruction, The Hunt, ...). Seeded from a fixed list."""

    __tablename__ = "paths"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    icon_url: Mapped[str | None] = mapped_column(String(255), nullable=True)

    characters: Mapped[list["Character"]] = relationship(
        "Character",
        back_populates="path",
    )

    def __repr__(self) -> str:
        return f"<Path(id={self.id}, name={self.name})>"


class RelicSet(Base):
    """
    Relic or planar ornament set.

    Created lazily by the build seeder the first time a build names it,
    so ``type`` stays NULL until classified by hand.
    """

    __tablename__ = "relic_sets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    type: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
        comment="relic or planar",
    )

    def __repr__(self) -> str:
        return f"<RelicSet(id={self.id}, name={self.name})>"


# =============================================================================
# Characters
# =============================================================================


class Character(Base):
    """
    Playable character.

    The primary key is the external id from the game data so re-seeding
    overwrites the same row.
    """

    __tablename__ = "characters"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    char_id: Mapped[str] = mapped_column(
        String(10),
        unique=True,
        nullable=False,
        comment="Short in-game character code",
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    element_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("elements.id"),
        nullable=False,
        index=True,
    )
    path_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("paths.id"),
        nullable=False,
        index=True,
    )
    rarity: Mapped[int] = mapped_column(Integer, nullable=False, default=4)
    base_speed: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    release_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)

    # Relationships
    element: Mapped["Element"] = relationship("Element", back_populates="characters")
    path: Mapped["Path"] = relationship("Path", back_populates="characters")
    skills: Mapped["CharacterSkill | None"] = relationship(
        "CharacterSkill",
        back_populates="character",
        uselist=False,
        cascade="all, delete-orphan",
    )
    build: Mapped["CharacterBuild | None"] = relationship(
        "CharacterBuild",
        back_populates="character",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Character(id={self.id}, name={self.name})>"


class CharacterSkill(Base):
    """Skill multipliers and base stats for a character (one per character)."""

    __tablename__ = "character_skills"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    character_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("characters.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    basic_multiplier: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False, default=Decimal("1.0"))
    skill_multiplier: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False, default=Decimal("1.0"))
    ult_multiplier: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False, default=Decimal("2.0"))
    basic_energy: Mapped[int] = mapped_column(Integer, nullable=False, default=20)
    skill_energy: Mapped[int] = mapped_column(Integer, nullable=False, default=30)
    ult_cost: Mapped[int] = mapped_column(Integer, nullable=False, default=120)
    ult_type: Mapped[str] = mapped_column(String(20), nullable=False, default="normal")
    passive: Mapped[str | None] = mapped_column(Text, nullable=True)
    base_atk: Mapped[int] = mapped_column(Integer, nullable=False, default=500)
    base_crit_rate: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False, default=Decimal("0.05"))
    base_crit_dmg: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False, default=Decimal("0.50"))

    character: Mapped["Character"] = relationship("Character", back_populates="skills")

    def __repr__(self) -> str:
        return f"<CharacterSkill(character_id={self.character_id})>"


class CharacterBuild(Base):
    """Recommended main stats for a character (one per character)."""

    __tablename__ = "character_builds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    character_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("characters.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    body_main: Mapped[str | None] = mapped_column(String(50), nullable=True)
    feet_main: Mapped[str | None] = mapped_column(String(50), nullable=True)
    orb_main: Mapped[str | None] = mapped_column(String(50), nullable=True)
    rope_main: Mapped[str | None] = mapped_column(String(50), nullable=True)

    character: Mapped["Character"] = relationship("Character", back_populates="build")
    sets: Mapped[list["CharacterBuildSet"]] = relationship(
        "CharacterBuildSet",
        back_populates="build",
        cascade="all, delete-orphan",
        order_by="CharacterBuildSet.priority",
    )
    substats: Mapped[list["CharacterBuildSubstat"]] = relationship(
        "CharacterBuildSubstat",
        back_populates="build",
        cascade="all, delete-orphan",
        order_by=lambda: CharacterBuildSubstat.weight.desc(),
    )

    def __repr__(self) -> str:
        return f"<CharacterBuild(id={self.id}, character_id={self.character_id})>"


class CharacterBuildSubstat(Base):
    """Substat priority weight within a build."""

    __tablename__ = "character_build_substats"
    __table_args__ = (
        UniqueConstraint("build_id", "stat_name", name="uq_build_substat"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    build_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("character_builds.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    stat_name: Mapped[str] = mapped_column(String(50), nullable=False)
    weight: Mapped[Decimal] = mapped_column(Numeric(3, 2), nullable=False, default=Decimal("0.5"))

    build: Mapped["CharacterBuild"] = relationship("CharacterBuild", back_populates="substats")

    def __repr__(self) -> str:
        return f"<CharacterBuildSubstat(build_id={self.build_id}, stat={self.stat_name})>"


class CharacterBuildSet(Base):
    """Recommended relic set within a build; priority 1 is the first choice."""

    __tablename__ = "character_build_sets"
    __table_args__ = (
        UniqueConstraint("build_id", "relic_set_id", name="uq_build_relic_set"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    build_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("character_builds.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    relic_set_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("relic_sets.id"),
        nullable=False,
        index=True,
    )
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    build: Mapped["CharacterBuild"] = relationship("CharacterBuild", back_populates="sets")
    relic_set: Mapped["RelicSet"] = relationship("RelicSet", lazy="joined")

    def __repr__(self) -> str:
        return f"<CharacterBuildSet(build_id={self.build_id}, priority={self.priority})>"


# =============================================================================
# Users
# =============================================================================


class User(Base):
    """Registered user of the companion app."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    uid: Mapped[str | None] = mapped_column(
        String(20),
        unique=True,
        nullable=True,
        comment="In-game account UID",
    )
    nickname: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )

    characters: Mapped[list["UserCharacter"]] = relationship(
        "UserCharacter",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"


class UserCharacter(Base):
    """A character owned by a user, with eidolon and level."""

    __tablename__ = "user_characters"
    __table_args__ = (
        UniqueConstraint("user_id", "character_id", name="idx_user_character_unique"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    character_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("characters.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    eidolon: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    level: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
    )

    user: Mapped["User"] = relationship("User", back_populates="characters")
    character: Mapped["Character"] = relationship("Character")

    def __repr__(self) -> str:
        return f"<UserCharacter(user_id={self.user_id}, character_id={self.character_id})>"


# =============================================================================
# Game data (read-only via API)
# =============================================================================


class Banner(Base):
    """Character or light cone warp banner."""

    __tablename__ = "banners"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
        comment="character, weapon or standard",
    )
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    characters: Mapped[list["BannerCharacter"]] = relationship(
        "BannerCharacter",
        back_populates="banner",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Banner(id={self.id}, name={self.name})>"


class BannerCharacter(Base):
    """Character featured on a banner."""

    __tablename__ = "banner_characters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    banner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("banners.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    character_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("characters.id"),
        nullable=False,
        index=True,
    )
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    banner: Mapped["Banner"] = relationship("Banner", back_populates="characters")
    character: Mapped["Character"] = relationship("Character", lazy="joined")


class Code(Base):
    """Redemption code."""

    __tablename__ = "codes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    rewards: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Code(code={self.code}, active={self.is_active})>"


class Event(Base):
    """In-game event."""

    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, name={self.name})>"
