"""CLI entry point for replacing a video's background music."""
from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path
from typing import List, Optional

from .config import Settings
from .errors import BgmReplacerError
from .logger_setup import build_logger
from .media_inspector import MediaInspector
from .replacer import concat_line, replace_audio
from .rules import load_rules
from .scheduler import PlaylistScheduler
from .subtitle_generator import build_srt


class _UsageParser(argparse.ArgumentParser):
    """Print usage and exit quietly on bad arguments."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stdout)
        raise SystemExit(0)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = _UsageParser(
        prog="replace-bgm",
        description="Replace a video's audio with a quota-rotated random music playlist.",
    )
    parser.add_argument("script", help="Rule script: alternating source path / quota minutes lines")
    parser.add_argument("video", help="Input video file")
    parser.add_argument("output", help="Output video file")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for track selection (default: BGM_SEED or random)",
    )
    parser.add_argument(
        "--srt",
        type=str,
        default=None,
        help="Also write the generated subtitles to this path.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Schedule and print the playlist without running ffmpeg.",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional log file (default: BGM_LOG_FILE)",
    )
    return parser.parse_args(argv)


def run(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = Settings.from_env()
    except BgmReplacerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    log_file = Path(args.log_file).expanduser() if args.log_file else settings.log_file
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
    logger = build_logger(log_file)
    seed = args.seed if args.seed is not None else settings.seed

    try:
        settings.require_tools(need_ffmpeg=not args.dry_run)
        video_path = Path(args.video).expanduser().resolve()
        output_path = Path(args.output).expanduser().resolve()
        if not video_path.is_file():
            raise FileNotFoundError(f"Video file not found: {video_path}")

        rules = load_rules(Path(args.script))
        inspector = MediaInspector(settings.ffprobe_binary)
        target = inspector.duration(video_path)
        logger.info("Scheduling %.2fs of music from %d rule(s)", target, len(rules))

        scheduler = PlaylistScheduler(inspector, rng=random.Random(seed))
        playlist = scheduler.schedule(rules, target)
        logger.info(
            "Playlist has %d track(s), %.2fs total",
            len(playlist.files),
            playlist.total_duration,
        )
        for path in playlist.files:
            print(concat_line(path))

        srt_text = build_srt(playlist.segments)
        if args.srt:
            srt_path = Path(args.srt).expanduser().resolve()
            srt_path.write_text(srt_text, encoding="utf-8")
            logger.info("Subtitles written: %s", srt_path)

        if args.dry_run:
            logger.info("Dry run: skipping ffmpeg.")
            return 0

        result = replace_audio(
            video_path=video_path,
            files=playlist.files,
            srt_text=srt_text,
            output_path=output_path,
            ffmpeg_binary=settings.ffmpeg_binary,
        )
        if result.ok:
            logger.info("Video exported: %s", output_path)
        return 0
    except (BgmReplacerError, FileNotFoundError) as exc:
        logger.error("Known error: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error")
        print(f"Unexpected failure: {exc}", file=sys.stderr)
        return 1


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
