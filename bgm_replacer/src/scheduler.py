"""Random playlist scheduling across rotating source rules."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from .display_names import DisplayNameCache
from .errors import ConfigurationError
from .media_inspector import MediaInspector
from .rules import RuleEntry

logger = logging.getLogger("bgm_replacer.scheduler")


@dataclass
class ScheduledSegment:
    path: Path
    display_name: str
    start: float
    end: float
    rule_index: int

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass
class Playlist:
    files: List[Path] = field(default_factory=list)
    segments: List[ScheduledSegment] = field(default_factory=list)

    @property
    def total_duration(self) -> float:
        return self.segments[-1].end if self.segments else 0.0


class PlaylistScheduler:
    """Fill a target duration with random tracks, rotating rules by quota.

    A rule keeps supplying tracks until the time it contributed since the last
    rotation exceeds its quota; the scheduler then moves to the next rule,
    wrapping to the first after the last. Scheduling stops once the timeline
    reaches the target, so the last track may overrun it.
    """

    def __init__(
        self,
        inspector: MediaInspector,
        rng: Optional[random.Random] = None,
        names: Optional[DisplayNameCache] = None,
    ) -> None:
        self.inspector = inspector
        self.rng = rng or random.Random()
        self.names = names

    def schedule(self, rules: Sequence[RuleEntry], target_duration: float) -> Playlist:
        if not rules:
            raise ConfigurationError("No rules to schedule from.")

        names = self.names if self.names is not None else DisplayNameCache(self.inspector)
        playlist = Playlist()
        global_elapsed = 0.0
        rule_elapsed = 0.0
        rule_index = 0

        while global_elapsed < target_duration:
            rule = rules[rule_index]
            if not rule.candidates:
                raise ConfigurationError(f"Rule {rule.source} has no audio files to choose from.")
            track = self.rng.choice(rule.candidates)
            duration = self.inspector.duration(track)

            segment = ScheduledSegment(
                path=track,
                display_name=names.resolve(track),
                start=global_elapsed,
                end=global_elapsed + duration,
                rule_index=rule_index,
            )
            playlist.files.append(track)
            playlist.segments.append(segment)
            logger.debug("Scheduled %s [%.2f, %.2f)", track, segment.start, segment.end)

            global_elapsed += duration
            rule_elapsed += duration
            if rule_elapsed > rule.quota_seconds:
                rule_elapsed = 0.0
                rule_index = (rule_index + 1) % len(rules)
                logger.info("Quota reached for %s at %.2fs; rotating to rule %d", rule.source, global_elapsed, rule_index)

        return playlist
