"""Swap a video's audio track for the scheduled playlist using ffmpeg."""
from __future__ import annotations

import logging
import subprocess
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from .errors import ExternalToolError

logger = logging.getLogger("bgm_replacer.replacer")


@dataclass
class ReplaceResult:
    output_path: Path
    returncode: int
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def concat_line(path: Path) -> str:
    # concat demuxer quoting: close the quote, emit an escaped quote, reopen
    escaped = str(path).replace("'", "'\\''")
    return f"file '{escaped}'"


def write_concat_list(files: Iterable[Path], list_path: Path) -> Path:
    with open(list_path, "w", encoding="utf-8") as f:
        for path in files:
            f.write(concat_line(path) + "\n")
    return list_path


def build_ffmpeg_command(
    ffmpeg_binary: str,
    video_path: Path,
    list_path: Path,
    srt_path: Path,
    output_path: Path,
) -> List[str]:
    return [
        ffmpeg_binary,
        "-an",
        "-i",
        str(video_path),
        "-f",
        "concat",
        "-safe",
        "0",
        "-i",
        str(list_path),
        "-i",
        str(srt_path),
        "-c",
        "copy",
        "-y",
        str(output_path),
    ]


def replace_audio(
    video_path: Path,
    files: List[Path],
    srt_text: str,
    output_path: Path,
    ffmpeg_binary: str = "ffmpeg",
) -> ReplaceResult:
    """Remux video + concatenated playlist + subtitles without re-encoding.

    The track list and subtitle file live in a temporary directory that is
    removed once ffmpeg exits. A non-zero ffmpeg exit is reported in the
    result and echoed to stderr, not raised.
    """
    with tempfile.TemporaryDirectory(prefix="bgm_replacer_") as tmp:
        tmp_dir = Path(tmp)
        list_path = write_concat_list(files, tmp_dir / "playlist.txt")
        srt_path = tmp_dir / "playlist.srt"
        srt_path.write_text(srt_text, encoding="utf-8")

        cmd = build_ffmpeg_command(ffmpeg_binary, video_path, list_path, srt_path, output_path)
        logger.info("Running ffmpeg with %d audio file(s) -> %s", len(files), output_path)
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as exc:
            raise ExternalToolError(f"Could not launch {ffmpeg_binary}: {exc}") from exc

    if result.stderr:
        print(result.stderr, end="", file=sys.stderr)
    if result.returncode != 0:
        logger.warning("ffmpeg exited with status %d", result.returncode)
    return ReplaceResult(output_path=output_path, returncode=result.returncode, stderr=result.stderr)
