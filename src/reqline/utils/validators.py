"""src/reqline/utils/validators.py

Validation utilities for Reqline.
"""

SUPPORTED_SCHEMES = ("http", "https")


def is_supported_scheme(scheme: str) -> bool:
    """Whether the transport can speak ``scheme``."""
    return scheme.lower() in SUPPORTED_SCHEMES


def validate_header_line(line: str) -> str:
    """
    Reject header lines that would break the request framing.

    Raises:
        ValueError: On CR, LF or NUL characters.
    """
    # Validate against HTTP header injection attacks
    if "\r" in line or "\n" in line:
        raise ValueError(f"Invalid character in header line: {line!r}")
    if "\x00" in line:
        raise ValueError(f"Null byte in header line: {line!r}")
    return line
