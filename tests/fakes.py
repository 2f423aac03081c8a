from pathlib import Path
from typing import Dict, List, Optional

from bgm_replacer.src.errors import MediaReadError


class FakeInspector:
    """In-memory stand-in for ffprobe/mutagen."""

    def __init__(self, durations: Dict[str, float], tags: Optional[Dict[str, Optional[Dict[str, str]]]] = None) -> None:
        self.durations = durations
        self._tags = tags or {}
        self.tag_calls: List[str] = []

    def duration(self, path: Path) -> float:
        return self.durations[str(path)]

    def tags(self, path: Path) -> Optional[Dict[str, str]]:
        self.tag_calls.append(str(path))
        value = self._tags.get(str(path))
        if isinstance(value, Exception):
            raise value
        return value


class ScriptedRng:
    """Returns the given picks in order instead of random choices."""

    def __init__(self, picks: List[Path]) -> None:
        self.picks = list(picks)

    def choice(self, seq):
        pick = self.picks.pop(0)
        assert pick in seq, f"{pick} not in {seq}"
        return pick


def unreadable(path: str) -> MediaReadError:
    return MediaReadError(f"Could not open {path}")
