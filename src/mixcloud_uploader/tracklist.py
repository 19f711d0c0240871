from __future__ import annotations

import logging

from pydantic import ValidationError

from mixcloud_uploader.models import Track, TracklistFile

logger = logging.getLogger(__name__)


def parse_tracklist(path: str) -> list[Track] | None:
    """Read a tracklist JSON file into an ordered list of tracks.

    Expected shape::

        {
          "tracklist": [
            {"title": "Intro", "artist": "", "label": "", "url": "",
             "time_str": "0:00:00", "time": 0},
            {"title": "Sunstroke", "artist": "Chicane", "time_str": "0:01:04", "time": 64}
          ],
          "episode": "007"
        }

    Problems with the file are logged and yield None; the upload then goes
    ahead without a tracklist.
    """
    try:
        with open(path, "rb") as fh:
            raw = fh.read()
    except OSError:
        logger.error("The file %s does not exist!", path)
        return None

    try:
        document = TracklistFile.model_validate_json(raw)
    except ValidationError as exc:
        logger.error("The file %s can not be parsed: %s!", path, exc)
        return None

    return [Track(artist=entry.artist, song=entry.title, start_time=entry.time) for entry in document.tracklist]


def format_tracklist(tracklist: list[Track]) -> list[str]:
    return [f"{index}. {track.artist}-{track.song}" for index, track in enumerate(tracklist, start=1)]
