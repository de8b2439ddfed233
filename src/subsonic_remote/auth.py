"""Subsonic API authentication.

Token-based authentication for Subsonic-compatible APIs uses the MD5
salt+hash method:

    1. Generate a random salt (16 hex characters)
    2. Concatenate password + salt
    3. Send MD5(password + salt) as ``t`` and the salt as ``s``

OpenSubsonic servers also accept an API key (``k``) in place of the token.

Example:
    >>> from subsonic_remote.models import SubsonicConfig
    >>> from subsonic_remote.auth import generate_token
    >>>
    >>> config = SubsonicConfig(
    ...     url="https://music.example.com",
    ...     username="admin",
    ...     password="sesame"
    ... )
    >>> auth_token = generate_token(config)
    >>> print(auth_token.to_auth_params())
    {'u': 'admin', 't': '26719a...', 's': 'c19b2d...'}
"""

import hashlib
import secrets
from typing import Dict, Optional

from .models import SubsonicAuthToken, SubsonicConfig


def generate_token(
    config: SubsonicConfig, salt: Optional[str] = None
) -> Optional[SubsonicAuthToken]:
    """Generate Subsonic authentication token using MD5 salt+hash method.

    Args:
        config: Subsonic configuration containing username and password or API key
        salt: Optional pre-generated salt. If None, a new 16 hex char salt
              is generated. Primarily for testing purposes.

    Returns:
        SubsonicAuthToken with token, salt and username,
        or None if using API key authentication (OpenSubsonic)
    """
    if config.api_key:
        return None

    # secrets.token_hex(8) produces 16 hex characters
    if salt is None:
        salt = secrets.token_hex(8)

    token = hashlib.md5(f"{config.password}{salt}".encode("utf-8")).hexdigest()

    return SubsonicAuthToken(
        token=token,
        salt=salt,
        username=config.username,
    )


def verify_token(config: SubsonicConfig, token: str, salt: str) -> bool:
    """Verify that a token matches the expected MD5(password + salt).

    Example:
        >>> auth = generate_token(config, salt="c19b2d")
        >>> verify_token(config, auth.token, auth.salt)
        True
    """
    expected_token = hashlib.md5(f"{config.password}{salt}".encode("utf-8")).hexdigest()
    return token == expected_token


def create_auth_params(config: SubsonicConfig, response_format: str = "json") -> Dict[str, str]:
    """Create the query parameters every Subsonic request must carry.

    A fresh salt is generated on each call when using password auth.

    Args:
        config: Subsonic configuration
        response_format: Response format - "json" or "xml" (default: "json")

    Returns:
        Dictionary with v, c, f and either u/t/s (token) or u/k (API key)
    """
    params = {
        "v": config.api_version,
        "c": config.client_name,
        "f": response_format,
    }

    if config.api_key:
        params.update({"u": config.username, "k": config.api_key})
    else:
        params.update(generate_token(config).to_auth_params())

    return params
