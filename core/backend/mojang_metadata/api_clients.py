"""
API Client for Mojang Metadata

Handles communication with the unauthenticated Mojang API and session server.
Every call runs on a background executor and returns a concurrent.futures.Future.
"""

import logging
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union
from urllib.parse import quote

import requests

from .config import (
    DEFAULT_MAX_WORKERS,
    DEFAULT_PROGRAM_NAME,
    DEFAULT_TIMEOUT_MS,
    ENDPOINTS,
    NO_TIMESTAMP,
    USER_AGENT_SUFFIXES,
)
from .exceptions import LookupFailed
from .futures import get_default_executor, then
from .models import (
    BlockedServerList,
    IdentityLookupResult,
    NameHistory,
    SkinInfo,
    UniqueIdLike,
    parse_unique_id,
    strip_hyphens,
)

logger = logging.getLogger(__name__)

JsonDocument = Union[Dict, List]


def _require_str(document: Dict, key: str) -> str:
    """Read a field that must be a non-empty string"""
    value = document[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    if not value:
        raise ValueError(f"'{key}' is empty")
    return value


def _timestamp(value) -> int:
    """changedToAt in ms since the epoch; absent or null means NO_TIMESTAMP"""
    if value is None:
        return NO_TIMESTAMP
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"'changedToAt' must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class Endpoints:
    """Base URLs of the four Mojang endpoints"""

    lookup: str = ENDPOINTS["lookup"]
    profile: str = ENDPOINTS["profile"]
    history: str = ENDPOINTS["history"]
    blocked_servers: str = ENDPOINTS["blocked_servers"]

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "Endpoints":
        """Build from a config mapping; missing keys keep the public defaults"""
        data = data or {}
        return cls(**{
            key: str(data[key]).rstrip('/')
            for key in ("lookup", "profile", "history", "blocked_servers")
            if data.get(key)
        })


class MojangAPI:
    """
    Async client for non-authenticated Mojang profile data

    Each lookup comes in two tiers: a ``*_json`` call returning the decoded
    document untouched, and a typed call layered on it. Both return a Future;
    failures of any kind surface as LookupFailed from ``future.result()``.
    """

    def __init__(self, program_name: str = DEFAULT_PROGRAM_NAME,
                 executor: Optional[Executor] = None,
                 endpoints: Optional[Endpoints] = None,
                 default_timeout_ms: int = DEFAULT_TIMEOUT_MS,
                 max_workers: int = DEFAULT_MAX_WORKERS):
        """
        Args:
            program_name: Caller identifier, sent as the User-Agent prefix
            executor: Executor to run requests on (default: shared library pool).
                      Its lifecycle stays with the caller.
            endpoints: Override base URLs (mirrors, proxies, tests)
            default_timeout_ms: Connect timeout when a call does not pass one
            max_workers: Size of the shared library pool. Only applies when
                         that pool is created, i.e. on first use or after
                         shutdown_default_executor().
        """
        if not program_name:
            raise ValueError("program_name must not be empty")
        if default_timeout_ms <= 0:
            raise ValueError("default_timeout_ms must be positive")

        self.program_name = program_name
        self.endpoints = endpoints or Endpoints()
        self.default_timeout_ms = default_timeout_ms
        self._executor = executor
        self._max_workers = max_workers

    @classmethod
    def from_config(cls, config: Dict, executor: Optional[Executor] = None) -> "MojangAPI":
        """
        Create a client from a config dict (see config_loader.load_config)

        Args:
            config: Configuration dict
            executor: Optional executor; when omitted the shared pool is used,
                      sized from config['max_workers'] when it gets created

        Returns:
            MojangAPI instance
        """
        return cls(
            program_name=config.get('program_name') or DEFAULT_PROGRAM_NAME,
            executor=executor,
            endpoints=Endpoints.from_dict(config.get('endpoints')),
            default_timeout_ms=config.get('timeout_ms') or DEFAULT_TIMEOUT_MS,
            max_workers=config.get('max_workers') or DEFAULT_MAX_WORKERS,
        )

    @property
    def executor(self) -> Executor:
        # Resolved per call; the shared pool is replaced after shutdown_default_executor()
        return self._executor or get_default_executor(self._max_workers)

    # Request plumbing

    def _headers(self, operation: str, accept_json: bool = True) -> Dict[str, str]:
        headers = {"User-Agent": f"{self.program_name}{USER_AGENT_SUFFIXES[operation]}"}
        if accept_json:
            headers["Accept"] = "application/json"
        return headers

    def _resolve_timeout(self, timeout_ms: Optional[int]) -> int:
        if timeout_ms is None:
            return self.default_timeout_ms
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        return timeout_ms

    def _fetch(self, operation: str, url: str, timeout_ms: int,
               accept_json: bool = True) -> requests.Response:
        """
        Perform one GET request

        Only connection establishment is bounded by the timeout; the body read
        is not.

        Raises:
            LookupFailed: On connection error, timeout or non-2xx status
        """
        logger.debug(f"{operation}: GET {url} (connect timeout {timeout_ms} ms)")

        try:
            response = requests.get(
                url,
                headers=self._headers(operation, accept_json),
                timeout=(timeout_ms / 1000, None),
            )
            response.raise_for_status()
            return response
        except requests.RequestException as e:
            logger.error(f"{operation} request failed for {url}: {e}")
            raise LookupFailed(operation, url, e) from e

    def _fetch_json(self, operation: str, url: str, timeout_ms: int,
                    expected: type) -> JsonDocument:
        response = self._fetch(operation, url, timeout_ms)

        try:
            document = response.json()
        except ValueError as e:
            logger.error(f"{operation} returned a non-JSON body from {url}: {e}")
            raise LookupFailed(operation, url, e) from e

        if not isinstance(document, expected):
            error = TypeError(
                f"expected JSON {'object' if expected is dict else 'array'}, "
                f"got {type(document).__name__}"
            )
            logger.error(f"{operation} returned unexpected document from {url}: {error}")
            raise LookupFailed(operation, url, error) from error

        return document

    def _submit(self, fn: Callable, *args) -> Future:
        return self.executor.submit(fn, *args)

    def _decode(self, operation: str, future: Future, decoder: Callable) -> Future:
        """Chain a decoder onto a raw future, translating shape errors to LookupFailed"""

        def _apply(document):
            try:
                return decoder(document)
            except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
                logger.error(f"{operation} response is missing expected data: {e!r}")
                raise LookupFailed(operation, cause=e) from e

        return then(future, _apply)

    # URLs

    def unique_id_url(self, name: str) -> str:
        return f"{self.endpoints.lookup}/{quote(name, safe='')}"

    def skin_info_url(self, unique_id: UniqueIdLike) -> str:
        return f"{self.endpoints.profile}/{strip_hyphens(unique_id)}?unsigned=false"

    def name_history_url(self, unique_id: UniqueIdLike) -> str:
        return f"{self.endpoints.history}/{strip_hyphens(unique_id)}/names"

    def blocked_servers_url(self) -> str:
        return self.endpoints.blocked_servers

    # Raw tier

    def get_unique_id_json(self, name: str, timeout_ms: Optional[int] = None) -> "Future[Dict]":
        """
        Fetch the profile lookup document for a player name

        Args:
            name: Player name
            timeout_ms: Connect timeout in milliseconds (default: 5000)

        Returns:
            Future of the JSON object, e.g. {"id": "...", "name": "..."}
        """
        if not name:
            raise ValueError("name must not be empty")
        url = self.unique_id_url(name)
        return self._submit(self._fetch_json, "unique_id", url,
                            self._resolve_timeout(timeout_ms), dict)

    def get_skin_info_json(self, unique_id: UniqueIdLike,
                           timeout_ms: Optional[int] = None) -> "Future[Dict]":
        """Fetch the session-server profile (with signed textures) for a UUID"""
        url = self.skin_info_url(unique_id)
        return self._submit(self._fetch_json, "skin_info", url,
                            self._resolve_timeout(timeout_ms), dict)

    def get_name_history_json(self, unique_id: UniqueIdLike,
                              timeout_ms: Optional[int] = None) -> "Future[List]":
        """Fetch the name-change array for a UUID"""
        url = self.name_history_url(unique_id)
        return self._submit(self._fetch_json, "name_history", url,
                            self._resolve_timeout(timeout_ms), list)

    def get_blocked_servers_text(self, timeout_ms: Optional[int] = None) -> "Future[str]":
        """Fetch the newline-delimited blocked server hashes as text"""
        url = self.blocked_servers_url()
        timeout_ms = self._resolve_timeout(timeout_ms)

        def _fetch_text() -> str:
            response = self._fetch("blocked_servers", url, timeout_ms, accept_json=False)
            encoding = response.encoding or "utf-8"
            try:
                return response.content.decode(encoding)
            except (UnicodeDecodeError, LookupError) as e:
                logger.error(f"blocked_servers body could not be decoded: {e}")
                raise LookupFailed("blocked_servers", url, e) from e

        return self._submit(_fetch_text)

    # Typed tier

    def get_unique_id(self, name: str, timeout_ms: Optional[int] = None) -> "Future[IdentityLookupResult]":
        """
        Resolve a player name to its UUID

        Args:
            name: Player name (non-empty)
            timeout_ms: Connect timeout in milliseconds (default: 5000)

        Returns:
            Future of IdentityLookupResult. An unknown name fails with LookupFailed.
        """
        return self._decode(
            "unique_id",
            self.get_unique_id_json(name, timeout_ms),
            lambda document: IdentityLookupResult(parse_unique_id(_require_str(document, "id"))),
        )

    def get_skin_info(self, unique_id: UniqueIdLike,
                      timeout_ms: Optional[int] = None) -> "Future[SkinInfo]":
        """
        Retrieve the texture property of a profile

        The first entry of ``properties`` is used; a profile without
        properties fails.
        """

        def _decode_skin(document: Dict) -> SkinInfo:
            textures = document["properties"][0]
            return SkinInfo(
                id=_require_str(document, "id"),
                name=_require_str(document, "name"),
                value=_require_str(textures, "value"),
                signature=_require_str(textures, "signature"),
            )

        return self._decode("skin_info", self.get_skin_info_json(unique_id, timeout_ms), _decode_skin)

    def get_name_history(self, unique_id: UniqueIdLike,
                         timeout_ms: Optional[int] = None) -> "Future[NameHistory]":
        """
        Retrieve the names a UUID has used

        Entries without ``changedToAt`` get NO_TIMESTAMP (-1). When a name
        appears more than once, its last entry wins.
        """
        owner_id = parse_unique_id(unique_id)

        def _decode_history(document: List) -> NameHistory:
            history = {}
            for entry in document:
                history[_require_str(entry, "name")] = _timestamp(entry.get("changedToAt"))
            return NameHistory(owner_id, history)

        return self._decode("name_history", self.get_name_history_json(owner_id, timeout_ms), _decode_history)

    def get_blocked_servers(self, timeout_ms: Optional[int] = None) -> "Future[BlockedServerList]":
        """Retrieve the hashed addresses of servers blocked by Mojang"""
        return self._decode(
            "blocked_servers",
            self.get_blocked_servers_text(timeout_ms),
            lambda text: BlockedServerList(tuple(line for line in text.splitlines() if line)),
        )
