"""Duration and tag probing for audio/video files."""
from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import mutagen
from mutagen import MutagenError

from .errors import ExternalToolError, MediaReadError

# ID3 frames, Vorbis comments, ASF attributes, MP4 atoms
TAG_KEYS: Dict[str, Tuple[str, ...]] = {
    "artist": ("TPE1", "artist", "Author", "\xa9ART"),
    "title": ("TIT2", "title", "Title", "\xa9nam"),
}


def _first_text(value: Any) -> str:
    if value is None:
        return ""
    # ID3 frames keep their values in .text
    value = getattr(value, "text", value)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else ""
    return str(value).strip()


class MediaInspector:
    """Reports a file's duration through ffprobe and its tags through mutagen."""

    def __init__(self, ffprobe_binary: str = "ffprobe") -> None:
        self.ffprobe_binary = ffprobe_binary

    def duration(self, path: Path) -> float:
        cmd = [
            self.ffprobe_binary,
            "-v",
            "error",
            "-show_entries",
            "format=duration",
            "-of",
            "default=nk=1:nw=1",
            str(path),
        ]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as exc:
            raise ExternalToolError(f"Could not launch {self.ffprobe_binary}: {exc}") from exc
        if result.returncode != 0:
            raise MediaReadError(f"ffprobe failed for {path}: {result.stderr.strip()}")
        try:
            return float(result.stdout.strip())
        except ValueError as exc:
            raise MediaReadError(f"Could not read duration for {path}") from exc

    def tags(self, path: Path) -> Optional[Dict[str, str]]:
        """Return artist/title tags, or None when the file carries no tag block.

        Tags are read from the container's native keys (ID3 frames in MP3,
        WAV and AIFF, Vorbis comments, MP4 atoms, ASF attributes).
        Raises MediaReadError when the file cannot be opened at all.
        """
        try:
            audio = mutagen.File(str(path))
        except (MutagenError, OSError) as exc:
            raise MediaReadError(f"Could not open {path}: {exc}") from exc
        if audio is None or not audio.tags:
            return None

        found: Dict[str, str] = {}
        for name, keys in TAG_KEYS.items():
            for key in keys:
                value = _first_text(audio.tags.get(key))
                if value:
                    found[name] = value
                    break
        return found
