"""Character store backed by the relational schema.

Provides helpers to persist generated characters, look them up by id or
seed, and manage the ``available_traits`` reference table.
"""
from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from .models import AvailableTrait, CharacterRecord, HobbyRow, PersonalityTraitRow
from .pools import TraitPools
from .types import GENERATION_MODES, Appearance, Character, StoredCharacter


def _to_stored(row: CharacterRecord) -> StoredCharacter:
    character = Character(
        name=row.name,
        age=row.age,
        gender=row.gender,
        occupation=row.occupation,
        background=row.background,
        appearance=Appearance(
            hair_color=row.hair_color,
            eye_color=row.eye_color,
            height_cm=row.height_cm if row.height_cm is not None else 0,
            build=row.build,
        ),
        personality_traits=tuple(t.trait for t in row.personality_traits),
        hobbies=tuple(h.hobby for h in row.hobbies),
        seed=row.seed,
    )
    return StoredCharacter(id=row.id, character=character, created_at=row.created_at)


class CharacterStore:
    """Simple helper to manage CharacterRecord rows."""

    def create(self, session: Session, character: Character, mode: str = "seeded") -> StoredCharacter:
        """Persist ``character``. ``mode`` records how it was produced (see GENERATION_MODES)."""
        if mode not in GENERATION_MODES:
            raise ValueError(f"Unknown generation mode {mode!r}")
        appearance = character.appearance
        row = CharacterRecord(
            name=character.name,
            age=character.age,
            gender=character.gender,
            occupation=character.occupation,
            background=character.background,
            hair_color=appearance.hair_color,
            eye_color=appearance.eye_color,
            height_cm=appearance.height_cm,
            build=appearance.build,
            seed=character.seed,
            mode=mode,
        )
        row.personality_traits = [PersonalityTraitRow(trait=t) for t in character.personality_traits]
        row.hobbies = [HobbyRow(hobby=h) for h in character.hobbies]
        session.add(row)
        session.flush()
        session.refresh(row, attribute_names=["created_at"])
        return StoredCharacter(id=row.id, character=character, created_at=row.created_at)

    def find_by_id(self, session: Session, character_id: int) -> Optional[StoredCharacter]:
        row = session.get(CharacterRecord, character_id)
        return _to_stored(row) if row is not None else None

    def find_by_seed(self, session: Session, seed: str) -> Optional[StoredCharacter]:
        """Oldest row generated from ``seed`` alone. Rows made with overrides never match."""
        stmt = (
            select(CharacterRecord)
            .where(CharacterRecord.seed == str(seed))
            .where(CharacterRecord.mode == "seeded")
            .order_by(CharacterRecord.id)
            .limit(1)
        )
        row = session.scalars(stmt).first()
        return _to_stored(row) if row is not None else None

    def count(self, session: Session) -> int:
        return int(session.scalar(select(func.count()).select_from(CharacterRecord)) or 0)

    def delete_all(self, session: Session) -> None:
        # ORM-level delete so child rows cascade on backends without FK enforcement
        for row in session.scalars(select(CharacterRecord)).all():
            session.delete(row)

    def available_traits(self, session: Session) -> Dict[str, List[str]]:
        stmt = select(AvailableTrait.category, AvailableTrait.value).order_by(
            AvailableTrait.category, AvailableTrait.value
        )
        grouped: Dict[str, List[str]] = defaultdict(list)
        for category, value in session.execute(stmt):
            grouped[category].append(value)
        return dict(grouped)

    def replace_reference_traits(self, session: Session, pools: TraitPools) -> Dict[str, int]:
        """Clear ``available_traits`` and re-seed it from ``pools``.

        Returns the number of values inserted per category.
        """
        session.execute(delete(AvailableTrait))
        breakdown: Dict[str, int] = {}
        for category, values in pools.reference_categories().items():
            unique = list(dict.fromkeys(values))
            session.add_all(AvailableTrait(category=category, value=v) for v in unique)
            breakdown[category] = len(unique)
        session.flush()
        return breakdown
