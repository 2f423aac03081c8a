"""BGM Replacer package."""

__all__ = [
    "config",
    "errors",
    "logger_setup",
    "media_inspector",
    "rules",
    "display_names",
    "scheduler",
    "subtitle_generator",
    "replacer",
    "main",
]
