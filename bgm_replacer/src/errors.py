"""Error types raised by the playlist pipeline."""
from __future__ import annotations


class BgmReplacerError(Exception):
    """Base class for every failure the CLI reports as a known error."""


class ConfigurationError(BgmReplacerError, ValueError):
    """Raised for malformed scripts, missing sources or empty rule pools."""


class MediaReadError(BgmReplacerError, OSError):
    """Raised when a media file cannot be opened or probed."""


class ExternalToolError(BgmReplacerError):
    """Raised when ffprobe/ffmpeg is missing or cannot be launched."""
