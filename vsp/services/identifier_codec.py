"""
Identifier codec: one entry point for student and staff identifiers.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..core.enums import EntityKind, INSTITUTION_PREFIX, STAFF_TAG
from ..core.exceptions import InvalidFormatParameters
from ..core.identifiers import IdentifierFormat, ParsedIdentifier, build_format, coerce_kind
from ..core.interfaces import IdentifierGenerator, SequenceAllocator
from ..core.school import class_code_to_name, name_to_class_code, class_code_to_section
from .id_generator import DEFAULT_EMAIL_DOMAIN, DEFAULT_BADGE_PREFIX, current_year
from .sequence_allocator import InMemorySequenceAllocator
from .staff_ids import StaffIdGenerator
from .student_ids import StudentIdGenerator


logger = logging.getLogger(__name__)

_STAFF_MARKER = f"{INSTITUTION_PREFIX}-{STAFF_TAG}-"


class IdentifierCodec:
    """Generates and classifies identifiers for every entity kind.

    Both generators share one allocator, so seeding or resetting it affects
    student and staff numbering alike.
    """

    def __init__(self, allocator: Optional[SequenceAllocator] = None,
                 email_domain: str = DEFAULT_EMAIL_DOMAIN,
                 badge_prefix: str = DEFAULT_BADGE_PREFIX,
                 clock=current_year):
        self._allocator = allocator or InMemorySequenceAllocator()
        options = dict(email_domain=email_domain, badge_prefix=badge_prefix, clock=clock)
        self._generators: Dict[EntityKind, IdentifierGenerator] = {
            EntityKind.STUDENT: StudentIdGenerator(self._allocator, **options),
            EntityKind.STAFF: StaffIdGenerator(self._allocator, **options),
        }

    @property
    def allocator(self) -> SequenceAllocator:
        return self._allocator

    def generator_for(self, kind) -> IdentifierGenerator:
        return self._generators[coerce_kind(kind)]

    def _resolve(self, kind, id_format, params: Optional[Mapping[str, Any]]) -> IdentifierFormat:
        if isinstance(id_format, IdentifierFormat):
            if kind is not None and coerce_kind(kind) is not id_format.kind:
                raise InvalidFormatParameters(
                    f"{type(id_format).__name__} is not a {coerce_kind(kind).value} identifier format",
                    id_format.format.value, "format",
                )
            return id_format
        return build_format(kind, id_format, params)

    def generate(self, kind, id_format, params: Optional[Mapping[str, Any]] = None) -> str:
        """Generate an identifier.

        ``id_format`` is either a format variant (``StandardStudentFormat(...)``)
        or a format name such as ``"year-only"`` with its fields in ``params``.
        Raises InvalidFormatParameters when a required field is missing.
        """
        resolved = self._resolve(kind, id_format, params)
        return self.generator_for(resolved.kind).generate(resolved)

    def generate_batch(self, kind, id_format, params: Optional[Mapping[str, Any]] = None,
                       count: int = 1) -> List[str]:
        """Generate ``count`` identifiers with contiguous sequences."""
        resolved = self._resolve(kind, id_format, params)
        return self.generator_for(resolved.kind).generate_batch(resolved, count)

    def kind_of(self, identifier: str) -> EntityKind:
        """Guess the entity kind from the staff tag."""
        if isinstance(identifier, str) and identifier.startswith(_STAFF_MARKER):
            return EntityKind.STAFF
        return EntityKind.STUDENT

    def parse(self, identifier: str) -> ParsedIdentifier:
        return self.generator_for(self.kind_of(identifier)).parse(identifier)

    def validate(self, identifier: str) -> bool:
        return self.generator_for(self.kind_of(identifier)).validate(identifier)

    def badge_number(self, identifier: str) -> str:
        return self.generator_for(self.kind_of(identifier)).badge_number(identifier)

    def username(self, first_name: str, last_name: str, identifier: str) -> str:
        return self.generator_for(self.kind_of(identifier)).username(first_name, last_name, identifier)

    # Class table helpers, re-exposed for callers holding only the codec.
    class_code_to_name = staticmethod(class_code_to_name)
    name_to_class_code = staticmethod(name_to_class_code)
    class_code_to_section = staticmethod(class_code_to_section)
