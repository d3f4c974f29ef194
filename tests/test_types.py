from datetime import datetime

from profileforge.types import Appearance, Character, GenerationOptions, StoredCharacter


def test_generation_options_from_query_like_dict():
    opts = GenerationOptions.from_dict({"gender": "male", "age": "25", "fields": "name", "count": "3"})
    assert opts.gender == "male"
    assert opts.age == "25"
    assert opts.to_dict() == {"gender": "male", "age": "25"}
    assert GenerationOptions.from_dict(None) == GenerationOptions()


def test_character_dict_shape():
    c = Character(
        name="R Q",
        age=40,
        gender="other",
        occupation="Chef",
        background="R Q cooks.",
        appearance=Appearance(hair_color="red", eye_color="blue", height_cm=181, build="stocky"),
        personality_traits=("a", "b", "c"),
        hobbies=("x", "y"),
        seed=None,
    )
    d = c.to_dict()
    assert d["appearance"] == {"hair_color": "red", "eye_color": "blue", "height_cm": 181, "build": "stocky"}
    assert d["personality_traits"] == ["a", "b", "c"]
    assert d["seed"] is None
    assert Character.from_dict(d) == c


def test_stored_character_adds_id_and_timestamp():
    c = Character(
        name="N",
        age=20,
        gender="male",
        occupation=None,
        background=None,
        appearance=Appearance(hair_color=None, eye_color=None, height_cm=160, build=None),
    )
    stored = StoredCharacter(id=3, character=c, created_at=datetime(2026, 10, 18, 12, 0, 0))
    d = stored.to_dict()
    assert d["id"] == 3
    assert d["created_at"] == "2026-10-18T12:00:00"
    assert d["name"] == "N"
