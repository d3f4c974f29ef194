"""ORM models for Profileforge.

Defines CharacterRecord, PersonalityTraitRow, HobbyRow, AvailableTrait.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base


class CharacterRecord(Base):
    __tablename__ = "characters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    gender: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    occupation: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    background: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # appearance
    hair_color: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    eye_color: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    height_cm: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    build: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    seed: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    # how the row was produced; only "seeded" rows answer seed lookups
    mode: Mapped[str] = mapped_column(String(16), nullable=False, default="seeded", index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())

    # relationships (ordered by insertion so sampled order survives a round trip)
    personality_traits: Mapped[list["PersonalityTraitRow"]] = relationship(
        back_populates="character", cascade="all, delete-orphan", order_by="PersonalityTraitRow.id"
    )
    hobbies: Mapped[list["HobbyRow"]] = relationship(
        back_populates="character", cascade="all, delete-orphan", order_by="HobbyRow.id"
    )


class PersonalityTraitRow(Base):
    __tablename__ = "personality_traits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    character_id: Mapped[int] = mapped_column(ForeignKey("characters.id", ondelete="CASCADE"), nullable=False, index=True)
    trait: Mapped[str] = mapped_column(String(100), nullable=False)

    character: Mapped[CharacterRecord] = relationship(back_populates="personality_traits")


class HobbyRow(Base):
    __tablename__ = "hobbies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    character_id: Mapped[int] = mapped_column(ForeignKey("characters.id", ondelete="CASCADE"), nullable=False, index=True)
    hobby: Mapped[str] = mapped_column(String(100), nullable=False)

    character: Mapped[CharacterRecord] = relationship(back_populates="hobbies")


class AvailableTrait(Base):
    __tablename__ = "available_traits"
    __table_args__ = (UniqueConstraint("category", "value", name="uq_available_traits_category_value"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    value: Mapped[str] = mapped_column(String(100), nullable=False)
