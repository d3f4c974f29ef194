"""Character assembly on top of a seeded stream.

`CharacterGenerator` applies overrides and fills every remaining field from
its own stream, always in the same draw order:

    gender, name (first, surname), age, occupation, background,
    hair_color, eye_color, height_cm, build, personality traits,
    hobby count, hobbies

Overridden fields take no draws. Reordering these steps changes the output
of every existing seed.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from .pools import TraitPools
from .rng import RandomStream, Seed, make_stream
from .sampling import Sampler
from .types import GENDERS, Appearance, Character, GenerationOptions

logger = logging.getLogger(__name__)

AGE_RANGE = (18, 65)
HEIGHT_RANGE_CM = (150, 200)
TRAIT_COUNT = 3
HOBBY_COUNT_RANGE = (2, 4)
SUB_SEED_SEPARATOR = "_"


class InvalidOverrideError(ValueError):
    """A numeric override could not be parsed as an integer."""

    def __init__(self, field_name: str, value: Any) -> None:
        super().__init__(f"Invalid value for {field_name}: {value!r} is not an integer")
        self.field_name = field_name
        self.value = value


def _is_set(value: Any) -> bool:
    return value is not None and value != ""


def _parse_int(field_name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidOverrideError(field_name, value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise InvalidOverrideError(field_name, value) from None


def derive_seed(base_seed: Optional[Seed], index: int) -> Optional[str]:
    """Per-character seed for bulk generation: ``"<seed>_<index>"``."""
    if base_seed is None:
        return None
    return f"{base_seed}{SUB_SEED_SEPARATOR}{index}"


class CharacterGenerator:
    """One generator per unit of work; its stream state is not shareable."""

    def __init__(
        self,
        pools: TraitPools,
        seed: Optional[Seed] = None,
        stream: Optional[RandomStream] = None,
    ) -> None:
        self.pools = pools
        self.seed = None if seed is None else str(seed)
        self._sampler = Sampler(stream if stream is not None else make_stream(seed))

    def generate(self, options: Optional[GenerationOptions] = None) -> Character:
        opts = options or GenerationOptions()
        pools = self.pools
        pick = self._sampler

        gender = opts.gender if opts.gender in GENDERS else pick.choice(GENDERS)

        if _is_set(opts.name):
            name = str(opts.name)
        else:
            if gender == "male":
                first_names = pools.male_names
            elif gender == "female":
                first_names = pools.female_names
            else:
                first_names = pools.any_first_names
            first = pick.choice(first_names)
            last = pick.choice(pools.surnames)
            name = " ".join(part for part in (first, last) if part is not None)

        if _is_set(opts.age):
            age = _parse_int("age", opts.age)
        else:
            age = pick.int_range(*AGE_RANGE)

        occupation = opts.occupation if _is_set(opts.occupation) else pick.choice(pools.occupations)
        background = self._background(name)

        hair_color = opts.hair_color if _is_set(opts.hair_color) else pick.choice(pools.hair_colors)
        eye_color = opts.eye_color if _is_set(opts.eye_color) else pick.choice(pools.eye_colors)
        if _is_set(opts.height_cm):
            height_cm = _parse_int("height_cm", opts.height_cm)
        else:
            height_cm = pick.int_range(*HEIGHT_RANGE_CM)
        build = opts.build if _is_set(opts.build) else pick.choice(pools.builds)

        traits = pick.distinct_sample(pools.personality_traits, TRAIT_COUNT)
        hobbies = pick.distinct_sample(pools.hobbies, pick.int_range(*HOBBY_COUNT_RANGE))

        character = Character(
            name=name,
            age=age,
            gender=gender,
            occupation=occupation,
            background=background,
            appearance=Appearance(
                hair_color=hair_color,
                eye_color=eye_color,
                height_cm=height_cm,
                build=build,
            ),
            personality_traits=tuple(traits),
            hobbies=tuple(hobbies),
            seed=self.seed,
        )
        logger.debug("Generated %r (seed=%r)", character.name, self.seed)
        return character

    def _background(self, name: str) -> Optional[str]:
        template = self._sampler.choice(self.pools.backgrounds)
        if template is None:
            return None
        return template.replace("{name}", name)


def generate_character(
    pools: TraitPools,
    seed: Optional[Seed] = None,
    options: Optional[GenerationOptions] = None,
) -> Character:
    return CharacterGenerator(pools, seed).generate(options)


def generate_multiple(
    pools: TraitPools,
    count: int,
    seed: Optional[Seed] = None,
    options: Optional[GenerationOptions] = None,
) -> List[Character]:
    """Generate ``count`` characters, each from a fresh generator.

    With a base seed, character ``i`` uses ``derive_seed(seed, i)`` so the
    whole ordered batch is reproducible. Without one, every character is
    independently random.
    """
    return [
        CharacterGenerator(pools, derive_seed(seed, i)).generate(options)
        for i in range(max(count, 0))
    ]
