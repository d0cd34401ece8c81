"""src/reqline/http/auth.py

Authentication helpers for Reqline.
"""

import base64
import urllib.parse
from typing import Tuple


def split_user_info(user_info: str) -> Tuple[str, str]:
    """
    Split a raw ``user[:password]`` string into its decoded parts.

    Args:
        user_info: User-info exactly as it appears in a URI.

    Returns:
        ``(username, password)``; the password is ``""`` when absent.
    """
    username, _, password = user_info.partition(":")
    return urllib.parse.unquote(username), urllib.parse.unquote(password)


def build_basic_auth_header(username: str, password: str) -> str:
    """
    Build Basic Auth header from username and password.

    Args:
        username: Username for authentication.
        password: Password for authentication.

    Returns:
        Basic Auth header value.
    """
    token = f"{username}:{password}".encode("utf-8")
    b64 = base64.b64encode(token).decode("ascii")
    return f"Basic {b64}"
