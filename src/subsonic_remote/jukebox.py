"""Remote control of the server-side jukebox (``jukeboxControl``)."""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence

from .client import SubsonicClient
from .exceptions import ControllerBusyError, SubsonicParseError
from .models import Song, parse_songs
from .parsing import (
    fetch_bool,
    fetch_float,
    fetch_int,
    fetch_list,
    fetch_unsigned,
    require_object,
)
from .query import Query

logger = logging.getLogger(__name__)

ENDPOINT = "jukeboxControl"


@dataclass(frozen=True)
class JukeboxStatus:
    """Snapshot of the jukebox transport state.

    Attributes:
        index: Position of the current song in the queue, negative when empty
        playing: Whether the jukebox is playing
        volume: Playback gain in [0.0, 1.0] (wire name ``gain``)
        position: Playback offset in seconds within the current song
    """

    index: int
    playing: bool
    volume: float
    position: int

    @classmethod
    def from_json(cls, raw: Any) -> "JukeboxStatus":
        data = require_object(raw)
        volume = fetch_float(data, "gain")
        if not 0.0 <= volume <= 1.0:
            raise SubsonicParseError("field 'gain' is outside [0, 1]", field="gain")

        return cls(
            index=fetch_int(data, "currentIndex"),
            playing=fetch_bool(data, "playing"),
            volume=volume,
            position=fetch_unsigned(data, "position"),
        )


@dataclass(frozen=True)
class JukeboxPlaylist:
    """The jukebox queue together with the status it was read with.

    On the wire the status fields and ``entry`` are siblings in one object;
    parsing splits them into ``status`` and ``songs``.
    """

    status: JukeboxStatus
    songs: List[Song]

    @classmethod
    def from_json(cls, raw: Any) -> "JukeboxPlaylist":
        data = require_object(raw)
        status = JukeboxStatus.from_json(data)
        songs = parse_songs(fetch_list(data, "entry"))
        return cls(status=status, songs=songs)


class Jukebox:
    """Controller for the server's jukebox.

    A jukebox holds its client exclusively: only one controller may be
    bound to a client at a time, and the controller stops working once it
    is closed or the client is closed.

    Example:
        >>> with client.jukebox() as jukebox:
        ...     jukebox.clear()
        ...     jukebox.add_all_ids([1887, 1888])
        ...     status = jukebox.play()
    """

    def __init__(self, client: SubsonicClient):
        """Bind a controller to ``client``.

        Raises:
            ControllerBusyError: If another controller already holds the client
        """
        client.claim(self)
        self._client = client

    def close(self):
        """Release the client so another controller may bind to it."""
        self._client.release(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _get(self, query: Query) -> dict:
        if not self._client.is_bound_to(self):
            raise ControllerBusyError("jukebox controller has been released")
        return self._client.get(ENDPOINT, query.build())

    def _send_action(
        self,
        action: str,
        index: Optional[int] = None,
        ids: Iterable[int] = (),
    ) -> JukeboxStatus:
        query = Query.with_("action", action).arg("index", index).arg_list("id", ids)
        return self._status(query)

    def _status(self, query: Query) -> JukeboxStatus:
        data = self._get(query)

        if "jukeboxStatus" not in data:
            raise SubsonicParseError("no jukebox status found", field="jukeboxStatus")
        status = JukeboxStatus.from_json(data["jukeboxStatus"])
        logger.debug(f"Jukebox status: {status}")
        return status

    def playlist(self) -> JukeboxPlaylist:
        """Fetch the jukebox queue and its status (action ``get``)."""
        data = self._get(Query.with_("action", "get"))

        if "jukeboxPlaylist" not in data:
            raise SubsonicParseError("no jukebox playlist found", field="jukeboxPlaylist")
        playlist = JukeboxPlaylist.from_json(data["jukeboxPlaylist"])
        logger.info(f"Retrieved jukebox playlist with {len(playlist.songs)} songs")
        return playlist

    def status(self) -> JukeboxStatus:
        return self._send_action("status")

    def play(self) -> JukeboxStatus:
        return self._send_action("start")

    def stop(self) -> JukeboxStatus:
        return self._send_action("stop")

    def skip_to(self, n: int) -> JukeboxStatus:
        """Move playback to queue position ``n`` (zero-indexed).

        An index past the end of the queue plays the last song; the server
        clamps it, so no range check is done here.
        """
        return self._send_action("skip", index=n)

    def add(self, song: Song) -> JukeboxStatus:
        return self._send_action("add", ids=[song.id])

    def add_id(self, song_id: int) -> JukeboxStatus:
        return self._send_action("add", ids=[song_id])

    def add_all(self, songs: Sequence[Song]) -> JukeboxStatus:
        """Append ``songs`` to the queue in the given order."""
        return self._send_action("add", ids=[song.id for song in songs])

    def add_all_ids(self, song_ids: Sequence[int]) -> JukeboxStatus:
        """Append songs by id, in the given order, duplicates included."""
        return self._send_action("add", ids=list(song_ids))

    def clear(self) -> JukeboxStatus:
        return self._send_action("clear")

    def remove(self, song: Song) -> JukeboxStatus:
        """Remove a queue entry, sending ``song.id`` as the ``index`` parameter.

        The server removes by queue position, not by song identity, so this
        only does what the name suggests when the id equals the position.
        Prefer :meth:`remove_id` with an explicit position.
        """
        return self._send_action("remove", index=song.id)

    def remove_id(self, index: int) -> JukeboxStatus:
        """Remove the entry at queue position ``index``.

        Sent as ``index``; the server has no remove-by-id action.
        """
        return self._send_action("remove", index=index)

    def shuffle(self) -> JukeboxStatus:
        return self._send_action("shuffle")

    def set_volume(self, volume: float) -> JukeboxStatus:
        """Set the playback gain. The server is authoritative on the range."""
        return self._status(Query.with_("action", "setGain").arg("gain", volume))
