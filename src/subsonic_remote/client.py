"""HTTP client for the Subsonic REST API."""

import logging
import threading
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import urljoin

import httpx

from .auth import create_auth_params
from .exceptions import ControllerBusyError, SubsonicParseError, error_for_code
from .models import SubsonicConfig

logger = logging.getLogger(__name__)

Params = Union[Dict[str, Any], List[Tuple[str, Any]], None]


class SubsonicClient:
    """Synchronous HTTP client for Subsonic API v1.16.1.

    The client is the transport shared by the jukebox and playlist
    accessors. It handles:
    - Token-based authentication (MD5 salt+hash) or OpenSubsonic API keys
    - Mapping of server error codes to typed exceptions
    - Connection pooling and timeout configuration
    - Exclusive binding of at most one controller at a time

    Attributes:
        config: SubsonicConfig with server connection details
        client: httpx.Client for HTTP requests

    Example:
        >>> config = SubsonicConfig(
        ...     url="https://music.example.com",
        ...     username="john",
        ...     password="secret"
        ... )
        >>> with SubsonicClient(config) as client:
        ...     with client.jukebox() as jukebox:
        ...         jukebox.play()
    """

    def __init__(self, config: SubsonicConfig):
        """Initialize Subsonic API client.

        Args:
            config: SubsonicConfig with server URL and credentials
        """
        self.config = config
        self._base_url = config.url.rstrip("/")

        # OpenSubsonic detection attributes
        self.opensubsonic = False
        self.opensubsonic_version = None

        # One request in flight at a time; one controller bound at a time
        self._request_lock = threading.Lock()
        self._claim_lock = threading.Lock()
        self._controller: Optional[object] = None
        self._closed = False

        self.client = httpx.Client(
            base_url=self._base_url,
            timeout=httpx.Timeout(
                connect=30.0,
                read=60.0,
                write=30.0,
                pool=5.0,
            ),
            limits=httpx.Limits(
                max_connections=10,
                max_keepalive_connections=5,
                keepalive_expiry=5.0,
            ),
            follow_redirects=True,
        )

        logger.info(f"Initialized Subsonic client for {self._base_url}")

    def _build_url(self, endpoint: str) -> str:
        """Build full URL for API endpoint.

        Args:
            endpoint: API endpoint name (e.g., "ping", "jukeboxControl")

        Returns:
            Full URL with /rest/ prefix
        """
        return urljoin(self._base_url, f"/rest/{endpoint}")

    def _build_params(self, params: Params = None) -> List[Tuple[str, str]]:
        """Prefix endpoint parameters with authentication and API version.

        Args:
            params: Endpoint parameters as a dict or a list of pairs.
                Pairs may repeat a key; ``None`` values are dropped.

        Returns:
            Ordered list of query pairs for the request
        """
        pairs = list(create_auth_params(self.config).items())

        if isinstance(params, dict):
            params = list(params.items())

        for key, value in params or []:
            if value is not None:
                pairs.append((key, str(value)))

        return pairs

    def _handle_response(self, response: httpx.Response) -> dict:
        """Parse and validate Subsonic API response.

        Args:
            response: HTTP response from Subsonic server

        Returns:
            The contents of the ``subsonic-response`` envelope

        Raises:
            SubsonicError: Typed subclass matching the server error code
            SubsonicParseError: If the body is not JSON, has no
                ``subsonic-response`` object, or carries a malformed error
            httpx.HTTPStatusError: For HTTP-level errors
        """
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError as e:
            raise SubsonicParseError("response is not JSON") from e

        subsonic_response = data.get("subsonic-response") if isinstance(data, dict) else None
        if not isinstance(subsonic_response, dict):
            raise SubsonicParseError("no subsonic-response envelope", field="subsonic-response")

        if subsonic_response.get("status") == "failed":
            error = subsonic_response.get("error", {})
            if not isinstance(error, dict):
                raise SubsonicParseError("malformed error", field="error")
            code = error.get("code", 0)
            if not isinstance(code, int) or isinstance(code, bool):
                raise SubsonicParseError("malformed error code", field="code")
            message = error.get("message", "Unknown error")

            logger.error(f"Subsonic API error {code}: {message}")
            raise error_for_code(code, message)

        return subsonic_response

    @property
    def closed(self) -> bool:
        return self._closed

    def get(self, endpoint: str, params: Params = None) -> dict:
        """Perform an authenticated GET against a named endpoint.

        Args:
            endpoint: Remote endpoint name (e.g., "getPlaylist")
            params: Endpoint parameters, a dict or a list of (key, value) pairs

        Returns:
            The ``subsonic-response`` payload as a dict

        Raises:
            SubsonicError: If the server reported an error
            httpx.HTTPError: For network/HTTP errors
        """
        url = self._build_url(endpoint)
        query = self._build_params(params)

        with self._request_lock:
            logger.debug(f"GET {endpoint} {params!r}")
            response = self.client.get(url, params=query)
            return self._handle_response(response)

    def ping(self) -> bool:
        """Test server connectivity and authentication.

        Also records whether the server advertises OpenSubsonic support.

        Returns:
            True if ping successful

        Raises:
            SubsonicAuthenticationError: If credentials are invalid
            httpx.HTTPError: For network/HTTP errors
        """
        logger.debug(f"Pinging Subsonic server at {self._base_url}")
        data = self.get("ping")

        if "openSubsonic" in data and data["openSubsonic"]:
            self.opensubsonic = True
            self.opensubsonic_version = data.get("serverVersion")
            logger.info(f"OpenSubsonic server detected: version {self.opensubsonic_version}")
        else:
            self.opensubsonic = False
            self.opensubsonic_version = None

        logger.info("Subsonic ping successful")
        return True

    def claim(self, controller: object) -> None:
        """Bind ``controller`` to this client exclusively.

        Raises:
            ControllerBusyError: If the client is closed or another
                controller is already bound
        """
        with self._claim_lock:
            if self._closed:
                raise ControllerBusyError("client is closed")
            if self._controller is not None and self._controller is not controller:
                raise ControllerBusyError("client is already bound to another controller")
            self._controller = controller

    def release(self, controller: object) -> None:
        """Unbind ``controller``. Releasing an unbound controller is a no-op."""
        with self._claim_lock:
            if self._controller is controller:
                self._controller = None

    def is_bound_to(self, controller: object) -> bool:
        return not self._closed and self._controller is controller

    def jukebox(self):
        """Return a Jukebox controller bound to this client."""
        from .jukebox import Jukebox

        return Jukebox(self)

    def close(self):
        """Close HTTP client and release resources.

        Any controller still bound to this client becomes unusable.
        """
        with self._claim_lock:
            self._closed = True
            self._controller = None
        self.client.close()
        logger.info("Closed Subsonic client")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - automatically close client."""
        self.close()
