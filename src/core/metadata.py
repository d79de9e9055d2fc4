# core/metadata.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import requests
from mutagen import File as MutagenFile
from mutagen import MutagenError
from mutagen.flac import FLAC
from mutagen.id3 import ID3, ID3NoHeaderError
from mutagen.mp4 import MP4

from .config import DEFAULT_AUDD_URL
from .errors import MetadataIdentificationFailure
from .models import TrackMeta

logger = logging.getLogger(__name__)

UNKNOWN_ARTIST = "Unknown Artist"


def fallback_meta(path: str) -> TrackMeta:
    """Title from the file name, placeholder artist and cover."""
    return TrackMeta(title=Path(path).stem, artist=UNKNOWN_ARTIST, source="fallback")


# ----------------------------
# Local tags
# ----------------------------

def _cover_mp3(path: str) -> Optional[bytes]:
    try:
        tags = ID3(path)
    except ID3NoHeaderError:
        return None
    frames = tags.getall("APIC")
    return bytes(frames[0].data) if frames else None


def _cover_flac(path: str) -> Optional[bytes]:
    pictures = FLAC(path).pictures
    return bytes(pictures[0].data) if pictures else None


def _cover_mp4(path: str) -> Optional[bytes]:
    covers = MP4(path).get("covr") or []
    return bytes(covers[0]) if covers else None


_COVER_READERS = {
    ".mp3": _cover_mp3,
    ".flac": _cover_flac,
    ".m4a": _cover_mp4,
    ".mp4": _cover_mp4,
}


def read_cover(path: str) -> Optional[bytes]:
    reader = _COVER_READERS.get(os.path.splitext(path)[1].lower())
    if reader is None:
        return None
    try:
        return reader(path)
    except (MutagenError, OSError) as e:
        logger.debug("No embedded cover in %s: %s", path, e)
        return None


def read_tags(path: str) -> TrackMeta:
    """
    Title/artist/cover from the file's own tags. Missing fields fall back to
    the file name and "Unknown Artist".
    """
    fallback = fallback_meta(path)
    try:
        audio = MutagenFile(path, easy=True)
    except (MutagenError, OSError) as e:
        logger.warning("Error parsing metadata of %s: %s", path, e)
        return fallback
    if audio is None:
        logger.info("Unsupported audio format for tags: %s", path)
        return fallback

    title = (audio.get("title") or [None])[0] or fallback.title
    artist = (audio.get("artist") or [None])[0] or fallback.artist
    return TrackMeta(
        title=title,
        artist=artist,
        cover_data=read_cover(path),
        source="tags",
    )


# ----------------------------
# Remote identification (AudD)
# ----------------------------

def _pick_cover_url(result: dict) -> str:
    spotify_images = ((result.get("spotify") or {}).get("album") or {}).get("images") or []
    if spotify_images and spotify_images[0].get("url"):
        return spotify_images[0]["url"]

    artwork = ((result.get("apple_music") or {}).get("artwork") or {}).get("url")
    if artwork:
        return artwork.replace("{w}x{h}", "500x500")

    return result.get("album_art") or ""


class AuddClient:
    def __init__(self, api_token: str, base_url: str = DEFAULT_AUDD_URL, timeout_s: float = 15.0):
        self.api_token = api_token
        self.base_url = base_url
        self.timeout_s = timeout_s
        self.session = requests.Session()

    def identify(self, path: str) -> Optional[TrackMeta]:
        """
        Returns the recognised track, or None when AudD has no match.
        Raises MetadataIdentificationFailure on transport / API errors.
        """
        data = {"api_token": self.api_token, "return": "apple_music,spotify"}
        try:
            with open(path, "rb") as fh:
                r = self.session.post(
                    self.base_url,
                    data=data,
                    files={"file": (os.path.basename(path), fh)},
                    timeout=self.timeout_s,
                )
            r.raise_for_status()
            payload = r.json()
        except (requests.RequestException, OSError, ValueError) as e:
            raise MetadataIdentificationFailure(f"AudD request failed: {e}") from e

        if payload.get("status") == "error":
            err = payload.get("error") or {}
            raise MetadataIdentificationFailure(f"AudD error: {err.get('error_message') or err}")

        result = payload.get("result")
        if not result:
            return None

        return TrackMeta(
            title=result.get("title") or "",
            artist=result.get("artist") or "",
            cover_url=_pick_cover_url(result),
            source="audd",
        )


def fetch_cover(url: str, timeout_s: float = 15.0) -> Optional[bytes]:
    """Download cover art; None on any transport error."""
    if not url:
        return None
    try:
        r = requests.get(url, timeout=timeout_s)
        r.raise_for_status()
    except requests.RequestException as e:
        logger.info("Cover download failed for %s: %s", url, e)
        return None
    return r.content or None


def identify_track(path: str, client: AuddClient | None = None) -> TrackMeta:
    """
    Best metadata for ``path``; never raises.

    Remote identification wins when it finds a match. Otherwise (no client,
    no match, or a failure) the local tags are used, which themselves fall
    back to the file name.
    """
    local = read_tags(path)
    if client is None:
        return local

    try:
        remote = client.identify(path)
    except MetadataIdentificationFailure as e:
        logger.warning("Error identifying audio: %s", e)
        return local

    if remote is None:
        logger.info("No identification match for %s", path)
        return local

    if remote.cover_data is None and local.cover_data is not None and not remote.cover_url:
        return TrackMeta(remote.title, remote.artist, cover_data=local.cover_data, source=remote.source)
    return remote
