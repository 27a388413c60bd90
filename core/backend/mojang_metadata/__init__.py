"""
Mojang Metadata

Async client for Minecraft profile data: UUID lookup, skin textures,
name history and the blocked server list.

Version: 1.0.0
"""

__version__ = "1.0.0"
__description__ = "Async Mojang profile metadata client"

from .api_clients import MojangAPI, Endpoints
from .config import DEFAULT_TIMEOUT_MS, NO_TIMESTAMP
from .exceptions import MojangAPIError, LookupFailed
from .futures import then, shutdown_default_executor
from .models import BlockedServerList, IdentityLookupResult, NameHistory, SkinInfo

__all__ = [
    "MojangAPI",
    "Endpoints",
    "DEFAULT_TIMEOUT_MS",
    "NO_TIMESTAMP",
    "MojangAPIError",
    "LookupFailed",
    "then",
    "shutdown_default_executor",
    "BlockedServerList",
    "IdentityLookupResult",
    "NameHistory",
    "SkinInfo",
]
