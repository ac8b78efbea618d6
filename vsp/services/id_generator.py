"""
Shared generation and parsing machinery for identifier generators.
"""

import logging
import re
from abc import abstractmethod
from datetime import datetime
from typing import Callable, List, Optional, Pattern, Tuple

from ..core.enums import EntityKind
from ..core.exceptions import InvalidFormatParameters, ValidationError
from ..core.identifiers import IdentifierFormat, ParsedIdentifier
from ..core.interfaces import IdentifierGenerator, SequenceAllocator
from .sequence_allocator import InMemorySequenceAllocator


logger = logging.getLogger(__name__)

DEFAULT_EMAIL_DOMAIN = "vincollins.edu.ng"
DEFAULT_BADGE_PREFIX = "VC"
INVALID_BADGE = "INVALID"

# (pattern, decoder) pairs tried in order; the first full match wins.
PatternTable = List[Tuple[Pattern, Callable[[re.Match], ParsedIdentifier]]]


def current_year() -> int:
    return datetime.now().year


class PatternIdentifierGenerator(IdentifierGenerator):
    """Generator that allocates sequences and parses with an ordered pattern table."""

    def __init__(self, allocator: Optional[SequenceAllocator] = None,
                 email_domain: str = DEFAULT_EMAIL_DOMAIN,
                 badge_prefix: str = DEFAULT_BADGE_PREFIX,
                 clock: Callable[[], int] = current_year):
        self._allocator = allocator or InMemorySequenceAllocator()
        self._email_domain = email_domain
        self._badge_prefix = badge_prefix
        self._clock = clock
        self._patterns: PatternTable = self._build_patterns()

    @property
    def allocator(self) -> SequenceAllocator:
        return self._allocator

    @abstractmethod
    def _build_patterns(self) -> PatternTable:
        """Get the ordered pattern table for this kind."""
        pass

    def _check_kind(self, id_format: IdentifierFormat) -> None:
        if not isinstance(id_format, IdentifierFormat) or id_format.kind is not self.kind:
            raise InvalidFormatParameters(
                f"{type(id_format).__name__} is not a {self.kind.value} identifier format",
                parameter="format",
            )

    def _year_for(self, id_format: IdentifierFormat) -> int:
        year = getattr(id_format, "year", None)
        return year if year is not None else self._clock()

    def generate(self, id_format: IdentifierFormat) -> str:
        """Generate one identifier, advancing the format's counter by one."""
        self._check_kind(id_format)
        if not id_format.uses_sequence:
            identifier = id_format.render()
        else:
            year = self._year_for(id_format)
            key = id_format.sequence_key(year)
            sequence = self._allocator.next_sequence(key)
            identifier = id_format.render(year, sequence)
        logger.debug("Generated %s identifier %s", self.kind.value, identifier)
        return identifier

    def generate_batch(self, id_format: IdentifierFormat, count: int) -> List[str]:
        """Generate ``count`` identifiers whose sequences are contiguous."""
        self._check_kind(id_format)
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ValidationError(f"Count must be a positive integer, got {count!r}",
                                  error_code="invalid_count")
        if not id_format.uses_sequence:
            raise InvalidFormatParameters(
                f"{id_format.format.value} identifiers cannot be generated in batches",
                id_format.format.value, "format",
            )
        year = self._year_for(id_format)
        key = id_format.sequence_key(year)
        first = self._allocator.reserve(key, count)
        identifiers = [id_format.render(year, sequence) for sequence in range(first, first + count)]
        logger.info("Generated %d %s identifiers for %s (%s to %s)",
                    count, self.kind.value, key, identifiers[0], identifiers[-1])
        return identifiers

    def parse(self, identifier: str) -> ParsedIdentifier:
        """Decode an identifier; malformed input gives ``is_valid=False``."""
        if not isinstance(identifier, str):
            return ParsedIdentifier.invalid()
        for pattern, decode in self._patterns:
            match = pattern.fullmatch(identifier)
            if match:
                return decode(match)
        return ParsedIdentifier.invalid()

    def validate(self, identifier: str) -> bool:
        if not isinstance(identifier, str):
            return False
        return any(pattern.fullmatch(identifier) for pattern, _ in self._patterns)

    def username(self, first_name: str, last_name: str, identifier: str) -> str:
        """Build the portal e-mail login, e.g. ``ada.obi.0001@vincollins.edu.ng``."""
        first = re.sub(r"[^a-z]", "", (first_name or "").lower())
        last = re.sub(r"[^a-z]", "", (last_name or "").lower())
        suffix = (identifier or "").split("-")[-1] or "0000"
        return f"{first}.{last}.{suffix}@{self._email_domain}"
