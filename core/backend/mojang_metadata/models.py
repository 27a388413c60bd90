"""
Result Types

Immutable records decoded from Mojang API responses.
"""

import uuid
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple, Union

from .config import NO_TIMESTAMP

UniqueIdLike = Union[uuid.UUID, str]


def parse_unique_id(value: UniqueIdLike) -> uuid.UUID:
    """
    Convert a UUID in dashed or undashed form into a UUID object

    Args:
        value: UUID object or string (e.g. '069a79f444e94726a5befca90e38aaf5')

    Returns:
        uuid.UUID (str() gives the canonical 8-4-4-4-12 form)
    """
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


def strip_hyphens(value: UniqueIdLike) -> str:
    """Undashed 32-hex form used in Mojang API paths"""
    return parse_unique_id(value).hex


@dataclass(frozen=True)
class IdentityLookupResult:
    unique_id: uuid.UUID

    def __str__(self) -> str:
        return str(self.unique_id)


@dataclass(frozen=True)
class SkinInfo:
    """Texture property of a profile, as returned by the session server"""

    id: str
    name: str
    value: str
    signature: str


@dataclass(frozen=True)
class NameHistory:
    """
    Display names an account has used.

    ``names`` maps each name to the time it was adopted, in milliseconds since
    the epoch. The account's first name carries ``NO_TIMESTAMP`` (-1).
    """

    owner_id: uuid.UUID
    names: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "names", MappingProxyType(dict(self.names)))

    def __len__(self) -> int:
        return len(self.names)

    def original_name(self) -> Optional[str]:
        for name, timestamp in self.names.items():
            if timestamp == NO_TIMESTAMP:
                return name
        return None

    def current_name(self) -> Optional[str]:
        """Name with the latest change timestamp, or None if the history is empty"""
        if not self.names:
            return None
        return max(self.names, key=lambda name: self.names[name])


@dataclass(frozen=True)
class BlockedServerList:
    entries: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "entries", tuple(self.entries))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __contains__(self, item) -> bool:
        return item in self.entries
