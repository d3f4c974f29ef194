"""Field projection for API responses."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from .types import APPEARANCE_FIELDS, Character, StoredCharacter


def parse_fields(raw: Optional[str]) -> Optional[List[str]]:
    """Split a comma-separated ``fields`` parameter; None when nothing usable."""
    if raw is None:
        return None
    parsed = [part.strip() for part in raw.split(",")]
    parsed = [part for part in parsed if part]
    return parsed or None


def _as_dict(record: Any) -> Dict[str, Any]:
    if isinstance(record, (Character, StoredCharacter)):
        return record.to_dict()
    return dict(record)


def _filter_one(record: Any, fields: Sequence[str]) -> Dict[str, Any]:
    data = _as_dict(record)
    appearance = data.get("appearance") or {}
    out: Dict[str, Any] = {}
    for name in fields:
        if name in data:
            value = data[name]
            if name == "appearance" and isinstance(value, dict):
                # merge with any subfields already projected
                out["appearance"] = {**out.get("appearance", {}), **value}
            else:
                out[name] = value
        elif name in APPEARANCE_FIELDS and name in appearance:
            out.setdefault("appearance", {})[name] = appearance[name]
    return out


def filter_fields(records: Any, fields: Optional[Sequence[str]]) -> Any:
    """Project a character, or a list of them, down to ``fields``.

    Direct fields are copied as-is; appearance subfields (``hair_color``,
    ``eye_color``, ``height_cm``, ``build``) land under a nested
    ``appearance`` object. Unknown names are ignored. With no fields the
    record is returned whole, in dict form.
    """
    if isinstance(records, (list, tuple)):
        return [filter_fields(r, fields) for r in records]
    if not fields:
        return _as_dict(records)
    return _filter_one(records, fields)
