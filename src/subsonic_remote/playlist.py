"""Playlist metadata and accessors (``getPlaylists`` / ``getPlaylist``)."""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from .client import SubsonicClient
from .exceptions import SubsonicParseError
from .models import Song, parse_songs
from .parsing import fetch_id, fetch_str, fetch_unsigned, require_object

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Playlist:
    """Playlist metadata.

    A playlist does not carry its songs; membership can change between
    calls, so they are fetched on demand with :meth:`songs`.

    Attributes:
        id: Playlist identifier
        name: Playlist name
        song_count: Number of songs in the playlist
        duration: Total duration in seconds
        cover: Cover art ID
    """

    id: int
    name: str
    song_count: int
    duration: int
    cover: str

    @classmethod
    def from_json(cls, raw: Any) -> "Playlist":
        """Parse a playlist object.

        Unrecognised fields (``owner``, ``public``, ``created``...) are ignored.

        Raises:
            SubsonicParseError: If ``raw`` is not an object or a required
                field is missing or malformed
        """
        data = require_object(raw)
        return cls(
            id=fetch_id(data, allow_int=False),
            name=fetch_str(data, "name"),
            song_count=fetch_unsigned(data, "songCount"),
            duration=fetch_unsigned(data, "duration"),
            cover=fetch_str(data, "coverArt"),
        )

    def songs(self, client: SubsonicClient) -> List[Song]:
        """Fetch the current songs of this playlist from the server."""
        return get_playlist_content(client, self.id)


def _entries(playlist: Any) -> list:
    if not isinstance(playlist, dict) or "entry" not in playlist:
        raise SubsonicParseError("no entries found", field="entry")
    if not isinstance(playlist["entry"], list):
        raise SubsonicParseError("not an array", field="entry")
    return playlist["entry"]


def get_playlists(client: SubsonicClient, username: Optional[str] = None) -> List[Playlist]:
    """List playlist summaries.

    Args:
        client: Connected Subsonic client
        username: Whose playlists to list; defaults to the authenticated user.
            Listing another user's playlists requires admin rights.

    Returns:
        List of Playlist objects, in server order

    Raises:
        SubsonicAuthorizationError: If username specified without admin rights
        SubsonicParseError: If the response is malformed
    """
    params = {"username": username} if username else None

    logger.debug(f"Fetching playlists (username={username})")
    data = client.get("getPlaylists", params)

    if "playlists" not in data:
        raise SubsonicParseError("no playlists found", field="playlists")
    container = require_object(data["playlists"])

    # Servers omit the array entirely when there are no playlists
    raw_playlists = container.get("playlist", [])
    if not isinstance(raw_playlists, list):
        raise SubsonicParseError("not an array", field="playlist")

    playlists = [Playlist.from_json(raw) for raw in raw_playlists]
    logger.info(f"Retrieved {len(playlists)} playlists")
    return playlists


def get_playlist(client: SubsonicClient, playlist_id: int) -> Tuple[Playlist, List[Song]]:
    """Fetch one playlist's metadata together with its songs.

    Raises:
        SubsonicNotFoundError: If playlist_id does not exist
        SubsonicParseError: If the response is malformed
    """
    logger.debug(f"Fetching playlist: {playlist_id}")
    data = client.get("getPlaylist", {"id": playlist_id})

    if "playlist" not in data:
        raise SubsonicParseError("no playlist found", field="playlist")
    playlist = Playlist.from_json(data["playlist"])
    songs = parse_songs(_entries(data["playlist"]))

    logger.info(f"Retrieved playlist {playlist.id} with {len(songs)} songs")
    return playlist, songs


def get_playlist_content(client: SubsonicClient, playlist_id: int) -> List[Song]:
    """Fetch the songs of a playlist, in playlist order.

    Reads ``subsonic-response.playlist.entry``. Decoding stops at the first
    malformed song.

    Raises:
        SubsonicParseError: If the entry list is absent, not an array, or
            contains a malformed song
    """
    logger.debug(f"Fetching playlist content: {playlist_id}")
    data = client.get("getPlaylist", {"id": playlist_id})

    songs = parse_songs(_entries(data.get("playlist")))
    logger.info(f"Retrieved {len(songs)} songs from playlist {playlist_id}")
    return songs
