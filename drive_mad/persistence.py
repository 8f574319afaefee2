from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Protocol

from drive_mad import config

logger = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    def read_high_score(self) -> int:
        ...

    def write_high_score(self, score: int) -> None:
        ...


def _coerce_score(value) -> int:
    # bool is an int subclass; a stored true/false is not a score.
    if isinstance(value, bool):
        raise ValueError("boolean high score")
    if isinstance(value, str):
        value = value.strip()
    score = int(float(value))
    if score < 0:
        raise ValueError("negative high score")
    return score


class MemoryHighScoreStore:
    def __init__(self, initial=0) -> None:
        self.writes: list[int] = []
        try:
            self._value = _coerce_score(initial)
        except (TypeError, ValueError, OverflowError):
            self._value = 0

    def read_high_score(self) -> int:
        return self._value

    def write_high_score(self, score: int) -> None:
        self._value = int(score)
        self.writes.append(self._value)


class JsonHighScoreStore:
    """
    Keeps the best score in a small JSON file: {"high_score": 123}.
    Anything unreadable reads back as 0; failed writes leave the old file alone.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else Path(config.high_score_path())

    def read_high_score(self) -> int:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return 0
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable high score file %s: %s", self.path, e)
            return 0

        raw = data.get("high_score", 0) if isinstance(data, dict) else data
        try:
            return _coerce_score(raw)
        except (TypeError, ValueError, OverflowError):
            logger.warning("Ignoring malformed high score %r in %s", raw, self.path)
            return 0

    def write_high_score(self, score: int) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps({"high_score": int(score)}), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            logger.warning("Could not save high score to %s: %s", self.path, e)
            try:
                if tmp.exists():
                    tmp.unlink()
            except OSError:
                pass
