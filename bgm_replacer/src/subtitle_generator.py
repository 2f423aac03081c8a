"""SRT captions naming each scheduled music segment."""
from __future__ import annotations

import math
from pathlib import Path
from typing import List

from .scheduler import ScheduledSegment


def format_time(seconds: float) -> str:
    """Render seconds as HH:MM:SS,FFFF.

    The fourth field is the whole-second part of the remainder left after
    seconds are taken out, so it is always 0000.
    """
    hours = math.floor(seconds / 3600)
    minutes = math.floor((seconds - hours * 3600) / 60)
    secs = math.floor(seconds - hours * 3600 - minutes * 60)
    remainder = math.floor(seconds - hours * 3600 - minutes * 60 - secs)
    return f"{hours:02}:{minutes:02}:{secs:02},{remainder:04}"


def build_srt(segments: List[ScheduledSegment]) -> str:
    chunks = []
    for i, segment in enumerate(segments, start=1):
        chunks.append(
            f"{i}\n{format_time(segment.start)} --> {format_time(segment.end)}\n{segment.display_name}\n\n"
        )
    return "".join(chunks)


def save_srt(segments: List[ScheduledSegment], srt_path: Path) -> Path:
    """Save scheduled segments to SRT format."""
    srt_path.write_text(build_srt(segments), encoding="utf-8")
    return srt_path
