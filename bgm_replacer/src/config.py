"""Runtime settings for BGM Replacer."""
from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError, ExternalToolError


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    """Tool locations and run options resolved from the environment."""

    ffmpeg_binary: str = "ffmpeg"
    ffprobe_binary: str = "ffprobe"
    log_file: Optional[Path] = None
    seed: Optional[int] = None

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        load_dotenv(env_file or Path.cwd() / ".env")
        log_file = os.getenv("BGM_LOG_FILE", "").strip()
        return cls(
            ffmpeg_binary=os.getenv("FFMPEG_BINARY", "ffmpeg").strip() or "ffmpeg",
            ffprobe_binary=os.getenv("FFPROBE_BINARY", "ffprobe").strip() or "ffprobe",
            log_file=Path(log_file).expanduser() if log_file else None,
            seed=_optional_int("BGM_SEED"),
        )

    def require_tools(self, *, need_ffmpeg: bool = True) -> None:
        binaries = [self.ffprobe_binary]
        if need_ffmpeg:
            binaries.append(self.ffmpeg_binary)
        missing = [b for b in binaries if shutil.which(b) is None]
        if missing:
            raise ExternalToolError(f"Required tool(s) not found on PATH: {', '.join(missing)}")
