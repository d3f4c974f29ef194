"""Profileforge package.

This package contains the core modules for the Profileforge character
profile service.
"""

from .generator import CharacterGenerator, InvalidOverrideError, generate_character, generate_multiple  # re-export core API
from .pools import TraitPools, default_pools
from .types import Character, GenerationOptions, StoredCharacter

__all__ = [
    "config",
    "db",
    "models",
    "rng",
    "sampling",
    "pools",
    "generator",
    "filtering",
    "store",
    "api",
    # re-exports
    "CharacterGenerator",
    "InvalidOverrideError",
    "generate_character",
    "generate_multiple",
    "TraitPools",
    "default_pools",
    "Character",
    "GenerationOptions",
    "StoredCharacter",
]
