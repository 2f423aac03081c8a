import subprocess
import tempfile
import unittest
import wave
from pathlib import Path
from unittest import mock

from mutagen import MutagenError
from mutagen.id3 import TIT2, TPE1
from mutagen.wave import WAVE

from bgm_replacer.src.display_names import DisplayNameCache
from bgm_replacer.src.errors import ExternalToolError, MediaReadError
from bgm_replacer.src.media_inspector import MediaInspector


def _completed(stdout: str = "", stderr: str = "", returncode: int = 0) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class _Audio:
    def __init__(self, tags):
        self.tags = tags


class DurationProbeTests(unittest.TestCase):
    def test_parses_ffprobe_output(self) -> None:
        with mock.patch("subprocess.run", return_value=_completed("183.421000\n")) as run:
            self.assertAlmostEqual(MediaInspector("ffprobe").duration(Path("/m/a.mp3")), 183.421)
        cmd = run.call_args[0][0]
        self.assertEqual(cmd[0], "ffprobe")
        self.assertIn("format=duration", cmd)
        self.assertEqual(cmd[-1], "/m/a.mp3")

    def test_failed_probe_is_a_read_error(self) -> None:
        with mock.patch("subprocess.run", return_value=_completed(stderr="No such file", returncode=1)):
            with self.assertRaises(MediaReadError):
                MediaInspector().duration(Path("/m/missing.mp3"))

    def test_garbage_output_is_a_read_error(self) -> None:
        with mock.patch("subprocess.run", return_value=_completed("N/A\n")):
            with self.assertRaises(MediaReadError):
                MediaInspector().duration(Path("/m/a.mp3"))

    def test_missing_binary_is_a_tool_error(self) -> None:
        with mock.patch("subprocess.run", side_effect=FileNotFoundError("ffprobe")):
            with self.assertRaises(ExternalToolError):
                MediaInspector().duration(Path("/m/a.mp3"))


class TagProbeTests(unittest.TestCase):
    def test_first_artist_and_title_values(self) -> None:
        audio = _Audio({"artist": ["Nujabes", "Shing02"], "title": ["Luv(sic)"], "album": ["x"]})
        with mock.patch("mutagen.File", return_value=audio):
            tags = MediaInspector().tags(Path("/m/a.mp3"))
        self.assertEqual(tags, {"artist": "Nujabes", "title": "Luv(sic)"})

    def test_no_tag_block_returns_none(self) -> None:
        with mock.patch("mutagen.File", return_value=_Audio(None)):
            self.assertIsNone(MediaInspector().tags(Path("/m/a.wav")))
        with mock.patch("mutagen.File", return_value=None):
            self.assertIsNone(MediaInspector().tags(Path("/m/a.xyz")))

    def test_unopenable_file_is_a_read_error(self) -> None:
        with mock.patch("mutagen.File", side_effect=MutagenError("cannot open")):
            with self.assertRaises(MediaReadError):
                MediaInspector().tags(Path("/m/a.mp3"))


if __name__ == "__main__":
    unittest.main()


def _write_wav(path: Path) -> Path:
    with wave.open(str(path), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(8000)
        w.writeframes(b"\x00\x00" * 800)
    return path


class WaveTagTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory(prefix="tags_test_")
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_id3_frames_in_wav_give_display_name(self) -> None:
        song = _write_wav(self.root / "song.wav")
        audio = WAVE(str(song))
        audio.add_tags()
        audio.tags.add(TPE1(encoding=3, text=["Nujabes"]))
        audio.tags.add(TIT2(encoding=3, text=["Aruarian Dance"]))
        audio.save()

        inspector = MediaInspector()
        self.assertEqual(inspector.tags(song), {"artist": "Nujabes", "title": "Aruarian Dance"})
        self.assertEqual(DisplayNameCache(inspector).resolve(song), "Nujabes - Aruarian Dance")

    def test_untagged_wav_falls_back_to_file_name(self) -> None:
        song = _write_wav(self.root / "plain.wav")
        self.assertEqual(DisplayNameCache(MediaInspector()).resolve(song), "plain.wav")
