"""src/reqline/utils/timing.py

Timeout configuration for the socket transport.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Timeout:
    """
    Connect and read limits in seconds; ``None`` means no limit.

    Attributes:
        connect: Limit for establishing the connection (and TLS handshake).
        read: Limit for every receive once connected.
        total: Fallback for whichever of the two is unset.
    """

    connect: Optional[float] = None
    read: Optional[float] = None
    total: Optional[float] = None

    @classmethod
    def from_options(
        cls, total: Optional[Any], connect: Optional[Any] = None
    ) -> "Timeout":
        """
        Build a Timeout from the ``TIMEOUT`` and ``CONNECTTIMEOUT`` options.

        ``0`` and ``None`` both mean "no limit", as they do for the option
        keys they come from.
        """
        total_s = float(total) if total else None
        connect_s = float(connect) if connect else total_s
        return cls(connect=connect_s, read=total_s, total=total_s)

    @property
    def connect_timeout(self) -> Optional[float]:
        """Timeout used while connecting."""
        return self.connect if self.connect is not None else self.total

    @property
    def read_timeout(self) -> Optional[float]:
        """Timeout used for every recv once connected."""
        return self.read if self.read is not None else self.total
