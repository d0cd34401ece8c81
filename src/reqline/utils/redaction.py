"""src/reqline/utils/redaction.py

Helpers for logging option sets without leaking credentials.
"""

from typing import Any, Dict, List, Mapping

from reqline.transport.options import Option

SENSITIVE_HEADERS = {"authorization", "proxy-authorization", "cookie"}

REDACTED = "[redacted]"


def redact_header_lines(lines: List[str]) -> List[str]:
    """Replace the value of sensitive ``Name: value`` lines."""
    redacted = []
    for line in lines:
        name = line.split(":", 1)[0]
        if name.strip().lower() in SENSITIVE_HEADERS:
            redacted.append(f"{name}: {REDACTED}")
        else:
            redacted.append(line)
    return redacted


def redact_options(options: Mapping[Any, Any]) -> Dict[str, Any]:
    """
    Printable copy of a transport option set.

    Keys are rendered by name, credentials and sensitive header values are
    masked, and request payloads are reduced to their length.
    """
    printable: Dict[str, Any] = {}
    for key, value in options.items():
        name = key.name if isinstance(key, Option) else str(key)
        if key is Option.USERPWD:
            value = REDACTED
        elif key is Option.HTTPHEADER:
            value = redact_header_lines(list(value))
        elif key is Option.POSTFIELDS:
            value = f"<{len(value)} bytes>"
        printable[name] = value
    return printable
