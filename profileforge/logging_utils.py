from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from profileforge.types import Character, GenerationLogEntry

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for CLI and server entry points."""
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


class JsonlGenerationLogger:
    """
    Minimal JSONL logger for generated characters.

    Writes one JSON object per line. This is deliberately simple so it
    can be swapped out later.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def write_entry(self, entry: GenerationLogEntry) -> None:
        line = json.dumps(entry.to_dict(), separators=(",", ":"))
        with self._path.open("a", encoding="utf-8") as f:
            f.write(line)
            f.write("\n")


def log_generation(
    gen_logger: Optional[JsonlGenerationLogger],
    mode: str,
    character: Character,
    options: Optional[Dict[str, Any]] = None,
    character_id: Optional[int] = None,
) -> None:
    if gen_logger is None:
        return
    entry = GenerationLogEntry(
        mode=mode,
        seed=character.seed,
        character=character.to_dict(),
        options=dict(options or {}),
        character_id=character_id,
    )
    # The generation log must not fail a request.
    try:
        gen_logger.write_entry(entry)
    except OSError as exc:
        logger.warning("Could not write generation log %s: %s", gen_logger.path, exc)


def read_generation_log_entries(path: Path) -> List[GenerationLogEntry]:
    """Read a JSONL file of generation entries.

    Fail-soft: if the file doesn't exist, return an empty list. Any
    malformed lines are skipped.
    """
    p = Path(path)
    if not p.exists():
        return []
    entries: List[GenerationLogEntry] = []
    with p.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                data = json.loads(line)
                entries.append(GenerationLogEntry.from_dict(data))
            except (ValueError, TypeError, AttributeError):
                # skip malformed lines
                continue
    return entries
