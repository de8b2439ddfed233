"""Subsonic API client for jukebox control and playlist access."""

__version__ = "1.0.0"

from .auth import create_auth_params, generate_token, verify_token
from .client import SubsonicClient
from .exceptions import (
    ClientVersionTooOldError,
    ControllerBusyError,
    ServerVersionTooOldError,
    SubsonicAuthenticationError,
    SubsonicAuthorizationError,
    SubsonicError,
    SubsonicNotFoundError,
    SubsonicParameterError,
    SubsonicParseError,
    SubsonicTrialError,
    SubsonicVersionError,
    TokenAuthenticationNotSupportedError,
)
from .jukebox import Jukebox, JukeboxPlaylist, JukeboxStatus
from .models import Song, SubsonicAuthToken, SubsonicConfig
from .playlist import Playlist, get_playlist, get_playlist_content, get_playlists
from .query import Query

__all__ = [
    # Client
    "SubsonicClient",
    "Query",
    # Jukebox
    "Jukebox",
    "JukeboxStatus",
    "JukeboxPlaylist",
    # Playlists
    "Playlist",
    "get_playlists",
    "get_playlist",
    "get_playlist_content",
    # Models
    "SubsonicConfig",
    "SubsonicAuthToken",
    "Song",
    # Authentication
    "generate_token",
    "verify_token",
    "create_auth_params",
    # Exceptions
    "SubsonicError",
    "SubsonicParseError",
    "ControllerBusyError",
    "SubsonicAuthenticationError",
    "TokenAuthenticationNotSupportedError",
    "ClientVersionTooOldError",
    "ServerVersionTooOldError",
    "SubsonicAuthorizationError",
    "SubsonicNotFoundError",
    "SubsonicParameterError",
    "SubsonicTrialError",
    "SubsonicVersionError",
]
