"""
Reference pools consumed by the character generator.

Pools are ordered: the generator indexes into them, so reordering or
editing a built-in pool changes what every existing seed produces.

`default_pools()` returns the built-in data, built once per process.
`load_pools(path)` reads a JSON file whose keys replace individual pools;
keys it does not mention keep their built-in values.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

MALE_NAMES: Tuple[str, ...] = (
    "James", "Michael", "Robert", "David", "William", "Daniel", "Thomas",
    "Matthew", "Anthony", "Mark", "Steven", "Andrew", "Joshua", "Kevin",
    "Brian", "Samuel", "Lucas", "Mateo", "Hiroshi", "Omar", "Ravi", "Felix",
)

FEMALE_NAMES: Tuple[str, ...] = (
    "Mary", "Patricia", "Jennifer", "Linda", "Elizabeth", "Barbara", "Susan",
    "Jessica", "Sarah", "Karen", "Emily", "Olivia", "Sophia", "Amara",
    "Yuki", "Priya", "Leila", "Ingrid", "Camila", "Zoe", "Nadia", "Grace",
)

SURNAMES: Tuple[str, ...] = (
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller",
    "Davis", "Rodriguez", "Martinez", "Hernandez", "Lopez", "Wilson",
    "Anderson", "Taylor", "Thomas", "Moore", "Jackson", "Lee", "Nakamura",
    "Patel", "Okafor", "Kowalski", "Novak", "Lindqvist", "Rossi",
)

OCCUPATIONS: Tuple[str, ...] = (
    "Software Engineer", "Teacher", "Nurse", "Chef", "Architect", "Pilot",
    "Librarian", "Electrician", "Photographer", "Journalist", "Veterinarian",
    "Graphic Designer", "Accountant", "Firefighter", "Marine Biologist",
    "Carpenter", "Pharmacist", "Musician", "Data Analyst", "Police Officer",
    "Translator", "Farmer", "Mechanic", "Social Worker", "Barista",
)

HAIR_COLORS: Tuple[str, ...] = (
    "black", "brown", "blonde", "red", "auburn", "gray", "white", "chestnut",
)

EYE_COLORS: Tuple[str, ...] = (
    "brown", "blue", "green", "hazel", "gray", "amber",
)

BUILDS: Tuple[str, ...] = (
    "slim", "athletic", "average", "muscular", "stocky", "lanky", "curvy",
)

PERSONALITY_TRAITS: Tuple[str, ...] = (
    "ambitious", "analytical", "cautious", "charismatic", "compassionate",
    "creative", "curious", "determined", "easygoing", "empathetic",
    "energetic", "honest", "humorous", "independent", "introverted",
    "loyal", "meticulous", "optimistic", "patient", "pragmatic",
    "reserved", "resourceful", "stubborn", "witty",
)

HOBBIES: Tuple[str, ...] = (
    "reading", "hiking", "painting", "cooking", "gardening", "photography",
    "chess", "cycling", "playing guitar", "yoga", "birdwatching", "gaming",
    "knitting", "rock climbing", "baking", "writing poetry", "swimming",
    "woodworking", "running", "astronomy", "dancing", "fishing",
)

BACKGROUNDS: Tuple[str, ...] = (
    "Grew up in a small coastal town, {name} learned early on to be self-reliant and resourceful.",
    "Raised in a bustling metropolitan area, {name} was always surrounded by diverse cultures and perspectives.",
    "Coming from a family of artists, creativity has always been a central part of {name}'s life.",
    "With a military background, {name} developed strong discipline and a structured approach to life.",
    "{name} spent childhood years in university libraries, fostering a deep love for learning and knowledge.",
    "Growing up on a farm, {name} learned the value of hard work and connection to nature.",
    "As a first-generation immigrant, {name} brings a unique perspective shaped by multiple cultures.",
    "{name} was raised by a single parent who instilled values of perseverance and independence.",
    "Moving frequently as a child, {name} became adaptable and skilled at making new friends.",
    "{name} grew up in a tight-knit community where everyone looked out for one another.",
)

# available_traits category name -> TraitPools attribute
REFERENCE_CATEGORIES: Dict[str, str] = {
    "personality_trait": "personality_traits",
    "occupation": "occupations",
    "hobby": "hobbies",
    "hair_color": "hair_colors",
    "eye_color": "eye_colors",
    "build": "builds",
}


@dataclass(frozen=True)
class TraitPools:
    """Read-only pools injected into a CharacterGenerator."""

    male_names: Tuple[str, ...] = MALE_NAMES
    female_names: Tuple[str, ...] = FEMALE_NAMES
    surnames: Tuple[str, ...] = SURNAMES
    occupations: Tuple[str, ...] = OCCUPATIONS
    hair_colors: Tuple[str, ...] = HAIR_COLORS
    eye_colors: Tuple[str, ...] = EYE_COLORS
    builds: Tuple[str, ...] = BUILDS
    personality_traits: Tuple[str, ...] = PERSONALITY_TRAITS
    hobbies: Tuple[str, ...] = HOBBIES
    backgrounds: Tuple[str, ...] = BACKGROUNDS

    @property
    def any_first_names(self) -> Tuple[str, ...]:
        return self.male_names + self.female_names

    def reference_categories(self) -> Dict[str, Tuple[str, ...]]:
        return {category: getattr(self, attr) for category, attr in REFERENCE_CATEGORIES.items()}

    def with_overrides(self, data: Dict[str, Any]) -> "TraitPools":
        known = {f.name for f in fields(self)}
        updates = {}
        for key, values in data.items():
            if key not in known:
                logger.warning("Ignoring unknown pool %r", key)
                continue
            if not isinstance(values, (list, tuple)):
                raise ValueError(f"Pool {key!r} must be a list, got {type(values).__name__}")
            updates[key] = tuple(str(v) for v in values)
        return replace(self, **updates)


@lru_cache(maxsize=1)
def default_pools() -> TraitPools:
    return TraitPools()


def load_pools(path: Optional[Path] = None) -> TraitPools:
    """Return the built-in pools, optionally overridden by a JSON file."""
    if path is None:
        return default_pools()
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Pools file {p} must contain a JSON object")
    pools = default_pools().with_overrides(data)
    logger.info("Loaded trait pools from %s (%d overrides)", p, len(data))
    return pools
