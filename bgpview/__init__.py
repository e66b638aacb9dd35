from __future__ import annotations

__version__ = "0.1.0"

from bgpview.client import DEFAULT_BASE_URL, Client
from bgpview.errors import BGPViewError, DecodeError, RemoteError, TransportError, URLConstructionError

__all__ = [
    "__version__",
    "DEFAULT_BASE_URL",
    "Client",
    "BGPViewError",
    "DecodeError",
    "RemoteError",
    "TransportError",
    "URLConstructionError",
]
