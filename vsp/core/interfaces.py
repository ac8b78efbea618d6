"""
Core interfaces and abstract base classes for the portal core.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .enums import EntityKind


SeedEntries = Union[Mapping[str, int], Iterable[Tuple[str, int]]]


class SequenceAllocator(ABC):
    """Hands out monotonically increasing sequence numbers per key."""

    @abstractmethod
    def next_sequence(self, key: str) -> int:
        """Issue the next sequence for a key (the first issue is 1)."""
        pass

    @abstractmethod
    def reserve(self, key: str, count: int) -> int:
        """Reserve a contiguous block of sequences and return the first one."""
        pass

    @abstractmethod
    def current(self, key: str) -> int:
        """Get the last issued sequence for a key, 0 if none was issued."""
        pass

    @abstractmethod
    def seed(self, entries: SeedEntries) -> None:
        """Set the last issued sequence for one or more keys."""
        pass

    @abstractmethod
    def reset(self, key: Optional[str] = None) -> None:
        """Forget one key, or every key when none is given."""
        pass

    @abstractmethod
    def snapshot(self) -> Dict[str, int]:
        """Get a copy of every tracked key and its last issued sequence."""
        pass


class IdentifierGenerator(ABC):
    """Generates and classifies identifiers for one entity kind."""

    @property
    @abstractmethod
    def kind(self) -> EntityKind:
        """Get the entity kind this generator serves."""
        pass

    @abstractmethod
    def generate(self, id_format) -> str:
        """Generate an identifier for a format variant."""
        pass

    @abstractmethod
    def generate_batch(self, id_format, count: int) -> List[str]:
        """Generate identifiers with contiguous sequences."""
        pass

    @abstractmethod
    def parse(self, identifier: str) -> "ParsedIdentifier":
        """Decode an identifier, never raising for malformed input."""
        pass

    @abstractmethod
    def validate(self, identifier: str) -> bool:
        """Check whether an identifier has one of the known shapes."""
        pass

    @abstractmethod
    def badge_number(self, identifier: str) -> str:
        """Derive the short display code printed on ID cards."""
        pass
