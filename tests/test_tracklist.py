import json
import tempfile
import unittest
from pathlib import Path

from mixcloud_uploader.models import Track
from mixcloud_uploader.tracklist import format_tracklist, parse_tracklist

SAMPLE = {
    "tracklist": [
        {"title": "Intro", "artist": "", "label": "", "url": "", "time_str": "0:00:00", "time": 0},
        {
            "title": "Sunstroke (Facade's J to the Y Remix)",
            "artist": "Chicane",
            "label": "",
            "url": "https://soundcloud.com/adamthomasmusic/free-download-chicane-sunstroke",
            "time_str": "0:01:04",
            "time": 64,
        },
        {"title": "Isolator", "artist": "Will Atkinson", "label": "Subculture", "url": "", "time_str": "2:01:31", "time": 7291},
    ],
    "episode": "007",
}


class TracklistParserTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)

    def _write(self, content: str) -> str:
        path = Path(self._tmpdir.name) / "tracklist.json"
        path.write_text(content, encoding="utf-8")
        return str(path)

    def test_parse_preserves_order_and_fields(self) -> None:
        path = self._write(json.dumps(SAMPLE))

        tracks = parse_tracklist(path)

        self.assertEqual(
            tracks,
            [
                Track(artist="", song="Intro", start_time=0),
                Track(artist="Chicane", song="Sunstroke (Facade's J to the Y Remix)", start_time=64),
                Track(artist="Will Atkinson", song="Isolator", start_time=7291),
            ],
        )

    def test_parse_is_idempotent(self) -> None:
        path = self._write(json.dumps(SAMPLE))
        self.assertEqual(parse_tracklist(path), parse_tracklist(path))

    def test_numeric_string_times_are_accepted(self) -> None:
        path = self._write(json.dumps({"tracklist": [{"title": "A", "artist": "B", "time": "64"}]}))
        self.assertEqual(parse_tracklist(path), [Track(artist="B", song="A", start_time=64)])

    def test_null_artist_becomes_empty_string(self) -> None:
        path = self._write(json.dumps({"tracklist": [{"title": "A", "artist": None, "time": 5}]}))
        self.assertEqual(parse_tracklist(path), [Track(artist="", song="A", start_time=5)])

    def test_null_time_becomes_zero(self) -> None:
        path = self._write(json.dumps({"tracklist": [{"title": "a", "time": None}]}))
        self.assertEqual(parse_tracklist(path), [Track(artist="", song="a", start_time=0)])

    def test_empty_tracklist_yields_empty_list(self) -> None:
        path = self._write(json.dumps({"tracklist": [], "episode": ""}))
        self.assertEqual(parse_tracklist(path), [])

    def test_missing_file_returns_none(self) -> None:
        missing = str(Path(self._tmpdir.name) / "missing.json")
        with self.assertLogs("mixcloud_uploader.tracklist", level="ERROR") as logs:
            self.assertIsNone(parse_tracklist(missing))
        self.assertTrue(any("does not exist" in line for line in logs.output))

    def test_malformed_json_returns_none(self) -> None:
        path = self._write("{\"tracklist\": [")
        with self.assertLogs("mixcloud_uploader.tracklist", level="ERROR") as logs:
            self.assertIsNone(parse_tracklist(path))
        self.assertTrue(any("can not be parsed" in line for line in logs.output))

    def test_wrong_shape_returns_none(self) -> None:
        path = self._write(json.dumps({"tracks": []}))
        with self.assertLogs("mixcloud_uploader.tracklist", level="ERROR"):
            self.assertIsNone(parse_tracklist(path))

    def test_negative_time_is_rejected(self) -> None:
        path = self._write(json.dumps({"tracklist": [{"title": "A", "artist": "B", "time": -1}]}))
        with self.assertLogs("mixcloud_uploader.tracklist", level="ERROR"):
            self.assertIsNone(parse_tracklist(path))


class FormatTracklistTests(unittest.TestCase):
    def test_lines_are_one_based_artist_dash_song(self) -> None:
        tracks = [Track("Chicane", "Sunstroke", 64), Track("Will Atkinson", "Isolator", 7291)]
        self.assertEqual(format_tracklist(tracks), ["1. Chicane-Sunstroke", "2. Will Atkinson-Isolator"])

    def test_empty_tracklist_formats_to_nothing(self) -> None:
        self.assertEqual(format_tracklist([]), [])


if __name__ == "__main__":
    unittest.main()
