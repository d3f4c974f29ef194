from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Tuple, Union


GENDERS: Tuple[str, ...] = ("male", "female", "non-binary", "other")
APPEARANCE_FIELDS: Tuple[str, ...] = ("hair_color", "eye_color", "height_cm", "build")
GENERATION_MODES: Tuple[str, ...] = ("random", "seeded", "custom")


# --- GenerationOptions -------------------------------------------------------


@dataclass(frozen=True)
class GenerationOptions:
    """
    Caller-supplied overrides for one generation call.

    Values are kept as received (query parameters arrive as strings); the
    generator decides how each one is interpreted. ``None`` and ``""`` both
    mean "not set".
    """

    name: Optional[str] = None
    gender: Optional[str] = None
    age: Union[int, str, None] = None
    occupation: Optional[str] = None
    hair_color: Optional[str] = None
    eye_color: Optional[str] = None
    height_cm: Union[int, str, None] = None
    build: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) not in (None, "")}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "GenerationOptions":
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


# --- Character ---------------------------------------------------------------


@dataclass(frozen=True)
class Appearance:
    hair_color: Optional[str]
    eye_color: Optional[str]
    height_cm: int
    build: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hair_color": self.hair_color,
            "eye_color": self.eye_color,
            "height_cm": int(self.height_cm),
            "build": self.build,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Appearance":
        height = data.get("height_cm")
        return cls(
            hair_color=data.get("hair_color"),
            eye_color=data.get("eye_color"),
            height_cm=int(height) if height is not None else 0,
            build=data.get("build"),
        )


@dataclass(frozen=True)
class Character:
    """A generated character profile. Immutable once produced."""

    name: str
    age: int
    gender: str
    occupation: Optional[str]
    background: Optional[str]
    appearance: Appearance
    personality_traits: Tuple[str, ...] = ()
    hobbies: Tuple[str, ...] = ()
    seed: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "age": int(self.age),
            "gender": self.gender,
            "occupation": self.occupation,
            "background": self.background,
            "appearance": self.appearance.to_dict(),
            "personality_traits": list(self.personality_traits),
            "hobbies": list(self.hobbies),
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Character":
        seed = data.get("seed")
        return cls(
            name=str(data.get("name", "")),
            age=int(data.get("age", 0)),
            gender=str(data.get("gender", "other")),
            occupation=data.get("occupation"),
            background=data.get("background"),
            appearance=Appearance.from_dict(data.get("appearance") or {}),
            personality_traits=tuple(data.get("personality_traits") or ()),
            hobbies=tuple(data.get("hobbies") or ()),
            seed=None if seed is None else str(seed),
        )


@dataclass(frozen=True)
class StoredCharacter:
    """A Character together with what persistence assigned to it."""

    id: int
    character: Character
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        data = self.character.to_dict()
        data["id"] = self.id
        if self.created_at is not None:
            data["created_at"] = self.created_at.isoformat()
        return data


# --- GenerationLogEntry ------------------------------------------------------


@dataclass
class GenerationLogEntry:
    """One line of the JSONL generation log."""

    mode: str  # "random" | "seeded" | "custom"
    seed: Optional[str]
    character: Dict[str, Any]
    options: Dict[str, Any] = field(default_factory=dict)
    character_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "seed": self.seed,
            "character_id": self.character_id,
            "options": dict(self.options),
            "character": dict(self.character),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GenerationLogEntry":
        seed = data.get("seed")
        cid = data.get("character_id")
        return cls(
            mode=str(data.get("mode", "random")),
            seed=None if seed is None else str(seed),
            character=dict(data.get("character") or {}),
            options=dict(data.get("options") or {}),
            character_id=None if cid is None else int(cid),
        )

