from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from profileforge.api import create_app
from profileforge.config import Settings
from profileforge.generator import CharacterGenerator, generate_multiple
from profileforge.pools import default_pools
from profileforge.store import CharacterStore
from profileforge.types import GENDERS, GenerationOptions


@pytest.fixture
def client(sqlite_bind, tmp_path):
    settings = Settings(
        database_url="sqlite://",
        api_version="v1",
        max_characters_per_request=5,
        generation_log_path=tmp_path / "generated.jsonl",
    )
    app = create_app(settings=settings, pools=default_pools())
    with TestClient(app) as c:
        yield c


def test_root_and_health(client):
    r = client.get("/")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["api_version"] == "v1"
    assert body["documentation"]["endpoints"]["random"]["url"] == "/api/v1/character/random"

    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["database"] == "connected"


def test_random_character_is_persisted(client, sqlite_bind):
    r = client.get("/api/v1/character/random")
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["gender"] in GENDERS
    assert data["seed"] is None
    assert isinstance(data["id"], int)

    with sqlite_bind() as s:
        stored = CharacterStore().find_by_id(s, data["id"])
    assert stored.character.name == data["name"]


def test_seeded_character_is_generated_then_cached(client):
    expected = CharacterGenerator(default_pools(), "myseed123").generate().to_dict()

    first = client.get("/api/v1/character/myseed123").json()
    assert first["cached"] is False
    for key, value in expected.items():
        assert first["data"][key] == value

    second = client.get("/api/v1/character/myseed123").json()
    assert second["cached"] is True
    assert second["data"]["id"] == first["data"]["id"]
    assert second["data"]["personality_traits"] == expected["personality_traits"]
    assert second["data"]["hobbies"] == expected["hobbies"]


def test_custom_overrides_with_seed(client):
    r = client.get("/api/v1/character", params={"gender": "female", "age": "40", "occupation": "Pilot", "seed": "s1"})
    assert r.status_code == 200
    data = r.json()["data"]
    expected = CharacterGenerator(default_pools(), "s1").generate(
        GenerationOptions(gender="female", age="40", occupation="Pilot")
    )
    assert data["gender"] == "female"
    assert data["age"] == 40
    assert data["occupation"] == "Pilot"
    assert data["name"] == expected.name
    assert data["appearance"] == expected.appearance.to_dict()


def test_seed_lookup_ignores_characters_made_with_overrides(client):
    client.get("/api/v1/character", params={"seed": "s1", "gender": "female", "age": "40", "occupation": "Pilot"})
    client.get("/api/v1/character", params={"seed": "s1", "count": 2, "occupation": "Pilot"})

    body = client.get("/api/v1/character/s1").json()
    assert body["cached"] is False
    expected = CharacterGenerator(default_pools(), "s1").generate().to_dict()
    for key, value in expected.items():
        assert body["data"][key] == value

    sub = client.get("/api/v1/character/s1_0").json()
    assert sub["cached"] is False
    assert sub["data"]["occupation"] == CharacterGenerator(default_pools(), "s1_0").generate().occupation

    assert client.get("/api/v1/character/s1").json()["cached"] is True


def test_custom_field_filter(client):
    r = client.get("/api/v1/character", params={"name": "Jane Doe", "hair_color": "black", "fields": "name,hair_color"})
    assert r.status_code == 200
    assert r.json()["data"] == {"name": "Jane Doe", "appearance": {"hair_color": "black"}}


def test_custom_bulk_with_seed_is_reproducible(client):
    r = client.get("/api/v1/character", params={"count": 3, "seed": "abc", "fields": "name,seed"})
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 3
    expected = generate_multiple(default_pools(), 3, seed="abc")
    assert body["data"] == [{"name": c.name, "seed": c.seed} for c in expected]

    again = client.get("/api/v1/character", params={"count": 3, "seed": "abc", "fields": "name,seed"}).json()
    assert again["data"] == body["data"]


def test_single_custom_character_uses_seed_as_is(client):
    body = client.get("/api/v1/character", params={"seed": "abc", "fields": "name,seed"}).json()
    assert body["data"] == {"name": CharacterGenerator(default_pools(), "abc").generate().name, "seed": "abc"}

    docs = client.get("/").json()["documentation"]["endpoints"]["custom"]["parameters"]
    assert "<seed>_<i>" in docs["seed"]


def test_custom_count_over_limit(client):
    r = client.get("/api/v1/character", params={"count": 6})
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"] == "Count cannot exceed 5"


def test_custom_count_must_be_positive(client):
    r = client.get("/api/v1/character", params={"count": 0})
    assert r.status_code == 422
    assert r.json()["success"] is False


def test_custom_invalid_age_is_bad_request(client):
    r = client.get("/api/v1/character", params={"age": "abc"})
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["field"] == "age"


def test_traits_schema_and_stats(client, sqlite_bind):
    with sqlite_bind() as s:
        CharacterStore().replace_reference_traits(s, default_pools())
        s.commit()

    traits = client.get("/api/v1/traits").json()["data"]
    assert traits["genders"] == list(GENDERS)
    assert traits["hobbies"] == sorted(default_pools().hobbies)
    assert traits["appearance"]["builds"] == sorted(default_pools().builds)

    schema = client.get("/api/v1/schema").json()["data"]
    assert schema["properties"]["gender"]["enum"] == list(GENDERS)

    client.get("/api/v1/character/random")
    client.get("/api/v1/character/random")
    stats = client.get("/api/v1/stats").json()["data"]
    assert stats["total_characters_generated"] == 2
    assert stats["api_version"] == "v1"
    assert stats["database"] == "sqlite"


def test_unknown_route_is_404_envelope(client):
    r = client.get("/api/v1/nope")
    assert r.status_code == 404
    body = r.json()
    assert body["success"] is False
    assert body["error"] == "Endpoint not found"


def test_generation_log_written(client, tmp_path):
    client.get("/api/v1/character/logged")
    client.get("/api/v1/character", params={"count": 2, "seed": "b"})
    lines = (tmp_path / "generated.jsonl").read_text(encoding="utf-8").splitlines()
    entries = [json.loads(line) for line in lines]
    assert [e["mode"] for e in entries] == ["seeded", "custom", "custom"]
    assert entries[0]["seed"] == "logged"
    assert entries[2]["seed"] == "b_1"
