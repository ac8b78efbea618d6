"""
Staff identifier generation and parsing.

Formats:
    standard    VSP-STF-YYYY-XXXX       e.g. VSP-STF-2024-0001
    department  VSP-STF-DEPT-YYYY-XXXX  e.g. VSP-STF-TCH-2024-0001
    simplified  VSP-STF-XXXXX           e.g. VSP-STF-00123
    legacy      VSP-STF-L-YYYY-XXXX     e.g. VSP-STF-L-2020-0123
"""

import re

from ..core.enums import EntityKind, StaffIdFormat, INSTITUTION_PREFIX
from ..core.identifiers import ParsedIdentifier
from .id_generator import PatternIdentifierGenerator, PatternTable, INVALID_BADGE


STANDARD_PATTERN = re.compile(r"VSP-STF-([0-9]{4})-([0-9]{4})")
DEPARTMENT_PATTERN = re.compile(r"VSP-STF-([A-Z]{2,3})-([0-9]{4})-([0-9]{4})")
SIMPLIFIED_PATTERN = re.compile(r"VSP-STF-([0-9]{5})")
LEGACY_PATTERN = re.compile(r"VSP-STF-L-([0-9]{4})-([0-9]{4})")


def _decode(id_format, match, department=False, legacy=False) -> ParsedIdentifier:
    groups = list(match.groups())
    dept = groups.pop(0) if department else None
    year = int(groups.pop(0)) if len(groups) > 1 else None
    return ParsedIdentifier(
        is_valid=True, kind=EntityKind.STAFF, format=id_format,
        prefix=INSTITUTION_PREFIX, department=dept, year=year,
        sequence=int(groups[0]), is_legacy=legacy,
    )


class StaffIdGenerator(PatternIdentifierGenerator):
    """Generates, parses and decorates staff identifiers."""

    @property
    def kind(self) -> EntityKind:
        return EntityKind.STAFF

    def _build_patterns(self) -> PatternTable:
        return [
            (STANDARD_PATTERN, lambda m: _decode(StaffIdFormat.STANDARD, m)),
            (DEPARTMENT_PATTERN, lambda m: _decode(StaffIdFormat.DEPARTMENT, m, department=True)),
            (SIMPLIFIED_PATTERN, lambda m: _decode(StaffIdFormat.SIMPLIFIED, m)),
            (LEGACY_PATTERN, lambda m: _decode(StaffIdFormat.LEGACY, m, legacy=True)),
        ]

    def badge_number(self, identifier: str) -> str:
        """ID card number: ``VC-XXXXX``."""
        parsed = self.parse(identifier)
        if not parsed.is_valid:
            return INVALID_BADGE
        return f"{self._badge_prefix}-{parsed.sequence:05d}"
