"""Memoized "artist - title" lookup for playlist captions."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from .media_inspector import MediaInspector


def compose_display_name(path: Path, tags: Optional[Dict[str, str]]) -> str:
    parts = [tags[key] for key in ("artist", "title") if tags and tags.get(key)]
    if not parts:
        return Path(path).name
    return " - ".join(parts)


class DisplayNameCache:
    """Path -> display name mapping, filled once per path.

    A file that opens without artist/title tags falls back to its base name.
    A file the inspector cannot open raises MediaReadError and is not cached.
    """

    def __init__(self, inspector: MediaInspector) -> None:
        self.inspector = inspector
        self._names: Dict[str, str] = {}

    def resolve(self, path: Path) -> str:
        key = str(path)
        cached = self._names.get(key)
        if cached is not None:
            return cached
        name = compose_display_name(Path(path), self.inspector.tags(Path(path)))
        self._names[key] = name
        return name

    def __contains__(self, path: object) -> bool:
        return str(path) in self._names

    def __len__(self) -> int:
        return len(self._names)
