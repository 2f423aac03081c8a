"""Rule script parsing and candidate discovery."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .errors import ConfigurationError

logger = logging.getLogger("bgm_replacer.rules")


@dataclass
class RuleEntry:
    source: Path
    quota_minutes: int
    candidates: List[Path] = field(default_factory=list)

    @property
    def quota_seconds(self) -> float:
        return self.quota_minutes * 60.0


def _script_lines(script_path: Path) -> List[str]:
    lines = []
    for line in script_path.read_text(encoding="utf-8").splitlines():
        raw = line.strip()
        if not raw or raw.startswith("#"):
            continue
        lines.append(raw)
    return lines


def parse_script(script_path: Path) -> List[RuleEntry]:
    """Read (source, quota minutes) pairs; relative sources resolve next to the script."""
    script_path = Path(os.path.abspath(Path(script_path).expanduser()))
    if not script_path.is_file():
        raise ConfigurationError(f"Script file not found: {script_path}")

    lines = _script_lines(script_path)
    if len(lines) % 2:
        raise ConfigurationError(f"Script {script_path} has a source without a quota: {lines[-1]!r}")

    base_dir = script_path.parent
    entries: List[RuleEntry] = []
    for source_line, quota_line in zip(lines[0::2], lines[1::2]):
        try:
            quota = int(quota_line)
        except ValueError as exc:
            raise ConfigurationError(f"Quota for {source_line!r} is not an integer: {quota_line!r}") from exc
        source = Path(source_line).expanduser()
        if not source.is_absolute():
            source = base_dir / source
        entries.append(RuleEntry(source=Path(os.path.abspath(source)), quota_minutes=quota))
    return entries


def collect_candidates(entry: RuleEntry) -> List[Path]:
    source = entry.source
    if source.is_file():
        return [source]
    if source.is_dir():
        # listed names are kept; symlinks are not followed
        return sorted((source / p.name for p in source.iterdir() if p.is_file()), key=lambda p: p.name)
    raise ConfigurationError(f"Rule source not found: {source}")


def load_rules(script_path: Path) -> List[RuleEntry]:
    entries = parse_script(script_path)
    for entry in entries:
        entry.candidates = collect_candidates(entry)
        logger.info(
            "Rule %s: %d candidate(s), quota %d min",
            entry.source,
            len(entry.candidates),
            entry.quota_minutes,
        )
    return entries
