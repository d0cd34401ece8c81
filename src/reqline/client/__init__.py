"""src/reqline/client/__init__.py"""

from .client import Client
from .resolver import Method, resolve

__all__ = ["Client", "Method", "resolve"]
