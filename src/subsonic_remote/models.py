"""Data models for Subsonic API integration."""

import os
import warnings
from dataclasses import dataclass
from typing import Any, List, Optional

from .parsing import fetch_id, fetch_str, require_object


@dataclass
class SubsonicConfig:
    """Configuration for connecting to a Subsonic-compatible server.

    Attributes:
        url: Base server URL (e.g., "https://music.example.com")
        username: Subsonic username
        password: Subsonic password (hashed before transmission)
        api_key: Optional API key for OpenSubsonic servers (alternative to password)
        client_name: Client identifier for API requests
        api_version: Subsonic API version
    """

    url: str
    username: str
    password: Optional[str] = None
    api_key: Optional[str] = None
    client_name: str = "subsonic-remote"
    api_version: str = "1.16.1"

    def __post_init__(self):
        """Validate configuration on initialization."""
        if not self.url or not self.url.startswith(("http://", "https://")):
            raise ValueError("url must be a valid HTTP/HTTPS URL")
        if not self.username:
            raise ValueError("username is required")

        # Either password or API key must be provided
        if not self.password and not self.api_key:
            raise ValueError("Either password or api_key must be provided")

        if not self.url.startswith("https://"):
            warnings.warn(
                "Using HTTP instead of HTTPS for Subsonic connection. "
                "Credentials will be transmitted insecurely.",
                UserWarning,
                stacklevel=2,
            )

    @classmethod
    def from_environment(cls) -> "SubsonicConfig":
        """Load configuration from environment variables (NO .env files).

        Reads SUBSONIC_URL, SUBSONIC_USER and one of SUBSONIC_PASSWORD or
        SUBSONIC_API_KEY. SUBSONIC_CLIENT_NAME and SUBSONIC_API_VERSION are
        optional overrides.

        Returns:
            SubsonicConfig: Loaded configuration object

        Raises:
            EnvironmentError: If required environment variables are missing
        """
        required = {
            "SUBSONIC_URL": os.getenv("SUBSONIC_URL"),
            "SUBSONIC_USER": os.getenv("SUBSONIC_USER"),
        }
        password = os.getenv("SUBSONIC_PASSWORD")
        api_key = os.getenv("SUBSONIC_API_KEY")

        missing = [var for var, value in required.items() if not value]
        if not password and not api_key:
            missing.append("SUBSONIC_PASSWORD or SUBSONIC_API_KEY")

        if missing:
            raise EnvironmentError(
                f"Required environment variables missing: {', '.join(missing)}\n"
                f"Example: export SUBSONIC_URL='https://your-server.com'"
            )

        return cls(
            url=required["SUBSONIC_URL"],
            username=required["SUBSONIC_USER"],
            password=password,
            api_key=api_key,
            client_name=os.getenv("SUBSONIC_CLIENT_NAME", "subsonic-remote"),
            api_version=os.getenv("SUBSONIC_API_VERSION", "1.16.1"),
        )


@dataclass
class SubsonicAuthToken:
    """Authentication token for Subsonic API using MD5 salt+hash method.

    Attributes:
        token: MD5(password + salt)
        salt: Random salt string
        username: Username for this token
    """

    token: str
    salt: str
    username: str

    def to_auth_params(self) -> dict:
        """Convert to authentication query parameters.

        Returns:
            Dict with u (username), t (token), s (salt)
        """
        return {"u": self.username, "t": self.token, "s": self.salt}


@dataclass(frozen=True)
class Song:
    """A song (``child`` element) as returned in playlist and jukebox entries.

    Only ``id`` and ``title`` are required. Every other attribute is copied
    from the payload when present and left as ``None`` otherwise.

    Attributes:
        id: Song identifier, parsed from the wire string
        title: Song title
        album: Album name
        artist: Artist name
        track: Track number
        year: Release year
        genre: Genre
        cover_art: Cover art ID
        size: File size in bytes
        content_type: MIME type
        suffix: File extension
        duration: Duration in seconds
        bit_rate: Bitrate in kbps
        path: File path on server
        disc_number: Disc number
        album_id: Album ID for ID3 navigation
        artist_id: Artist ID for ID3 navigation
        parent: Parent directory/album ID
        created: Creation timestamp (ISO format)
        type: Content type - "music", "podcast", "audiobook"
        is_video: Whether the entry is a video
    """

    id: int
    title: str
    album: Optional[str] = None
    artist: Optional[str] = None
    track: Optional[int] = None
    year: Optional[int] = None
    genre: Optional[str] = None
    cover_art: Optional[str] = None
    size: Optional[int] = None
    content_type: Optional[str] = None
    suffix: Optional[str] = None
    duration: Optional[int] = None
    bit_rate: Optional[int] = None
    path: Optional[str] = None
    disc_number: Optional[int] = None
    album_id: Optional[str] = None
    artist_id: Optional[str] = None
    parent: Optional[str] = None
    created: Optional[str] = None
    type: Optional[str] = None
    is_video: bool = False

    @classmethod
    def from_json(cls, raw: Any) -> "Song":
        """Parse a song object.

        Raises:
            SubsonicParseError: If ``raw`` is not an object, ``id`` is missing
                or non-numeric, or ``title`` is missing
        """
        data = require_object(raw)
        return cls(
            id=fetch_id(data),
            title=fetch_str(data, "title"),
            album=data.get("album"),
            artist=data.get("artist"),
            track=data.get("track"),
            year=data.get("year"),
            genre=data.get("genre"),
            cover_art=data.get("coverArt"),
            size=data.get("size"),
            content_type=data.get("contentType"),
            suffix=data.get("suffix"),
            duration=data.get("duration"),
            bit_rate=data.get("bitRate"),
            path=data.get("path"),
            disc_number=data.get("discNumber"),
            album_id=data.get("albumId"),
            artist_id=data.get("artistId"),
            parent=data.get("parent"),
            created=data.get("created"),
            type=data.get("type"),
            is_video=data.get("isVideo", False),
        )


def parse_songs(entries: list) -> List[Song]:
    """Decode a list of song objects, stopping at the first bad element."""
    return [Song.from_json(entry) for entry in entries]
