from __future__ import annotations

import logging
import mimetypes
import os
from typing import Sequence

from urllib3.filepost import encode_multipart_formdata

from mixcloud_uploader.errors import UploadFileError
from mixcloud_uploader.models import PremiumOptions, Track

logger = logging.getLogger(__name__)

FormField = tuple[str, str | tuple[str, bytes, str]]


def basic_fields(
    name: str,
    description: str,
    tags: Sequence[str],
    tracklist: Sequence[Track] | None,
) -> list[FormField]:
    fields: list[FormField] = [("name", name), ("description", description)]

    # The upload endpoint expects flat, positionally indexed field names.
    for i, tag in enumerate(tags):
        fields.append((f"tags-{i}-tag", tag))

    for i, track in enumerate(tracklist or ()):
        fields.append((f"sections-{i}-artist", track.artist))
        fields.append((f"sections-{i}-song", track.song))
        fields.append((f"sections-{i}-start_time", str(track.start_time)))
    return fields


def premium_fields(premium: PremiumOptions | None, is_pro: bool) -> list[FormField]:
    """Pro-only fields; silently empty for regular accounts."""
    if not is_pro or premium is None:
        return []

    fields: list[FormField] = []
    if premium.publish_date:
        fields.append(("publish_date", premium.publish_date))
    if premium.disable_comments:
        fields.append(("disable_comments", "1"))
    if premium.hide_stats:
        fields.append(("hide_stats", "1"))
    if premium.unlisted:
        fields.append(("unlisted", "1"))
    return fields


def file_field(key: str, path: str) -> FormField:
    try:
        with open(path, "rb") as fh:
            data = fh.read()
    except OSError as exc:
        raise UploadFileError(f"Error opening file {path}") from exc

    content_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
    logger.debug("Attaching %s (%d bytes) as %r", path, len(data), key)
    return key, (os.path.basename(path), data, content_type)


def build_multipart_body(
    name: str,
    description: str,
    tags: Sequence[str],
    tracklist: Sequence[Track] | None,
    audio_path: str,
    cover_path: str | None = None,
    premium: PremiumOptions | None = None,
    is_pro: bool = False,
) -> tuple[bytes, str]:
    """Assemble the multipart/form-data upload body.

    Returns the encoded body and the matching ``Content-Type`` header value.
    Field order follows the arguments: metadata, tags, tracklist sections,
    pro attributes, then the ``mp3`` and optional ``picture`` payloads.
    """
    fields = basic_fields(name, description, tags, tracklist)
    fields.extend(premium_fields(premium, is_pro))
    fields.append(file_field("mp3", audio_path))
    if cover_path:
        fields.append(file_field("picture", cover_path))

    return encode_multipart_formdata(fields)

