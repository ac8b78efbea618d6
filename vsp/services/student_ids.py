"""
Student identifier generation and parsing.

Formats:
    standard   VSP-YY-CLASS-XXXX   e.g. VSP-24-JSS1-0045
    year-only  VSP-YY-XXXXX        e.g. VSP-24-00123
    section    VSP-SEC-YY-XXXX     e.g. VSP-PRY-24-0123
    legacy     VSP-L-<original>    e.g. VSP-L-20201234
"""

import re

from ..core.enums import EntityKind, StudentIdFormat, INSTITUTION_PREFIX
from ..core.identifiers import ParsedIdentifier
from .id_generator import PatternIdentifierGenerator, PatternTable, INVALID_BADGE


STANDARD_PATTERN = re.compile(r"VSP-([0-9]{2})-([A-Z0-9]{3,4})-([0-9]{4})")
YEAR_ONLY_PATTERN = re.compile(r"VSP-([0-9]{2})-([0-9]{5})")
# STF is the staff tag, never a section code.
SECTION_PATTERN = re.compile(r"VSP-(?!STF-)([A-Z]{3})-([0-9]{2})-([0-9]{4})")
LEGACY_PATTERN = re.compile(r"VSP-L-(.+)")


def _decode_standard(match) -> ParsedIdentifier:
    year, class_code, sequence = match.groups()
    return ParsedIdentifier(
        is_valid=True, kind=EntityKind.STUDENT, format=StudentIdFormat.STANDARD,
        prefix=INSTITUTION_PREFIX, year=int(f"20{year}"), class_code=class_code,
        sequence=int(sequence), is_legacy=False,
    )


def _decode_year_only(match) -> ParsedIdentifier:
    year, sequence = match.groups()
    return ParsedIdentifier(
        is_valid=True, kind=EntityKind.STUDENT, format=StudentIdFormat.YEAR_ONLY,
        prefix=INSTITUTION_PREFIX, year=int(f"20{year}"), sequence=int(sequence),
        is_legacy=False,
    )


def _decode_section(match) -> ParsedIdentifier:
    section, year, sequence = match.groups()
    return ParsedIdentifier(
        is_valid=True, kind=EntityKind.STUDENT, format=StudentIdFormat.SECTION,
        prefix=INSTITUTION_PREFIX, section=section, year=int(f"20{year}"),
        sequence=int(sequence), is_legacy=False,
    )


def _decode_legacy(match) -> ParsedIdentifier:
    return ParsedIdentifier(
        is_valid=True, kind=EntityKind.STUDENT, format=StudentIdFormat.LEGACY,
        prefix=INSTITUTION_PREFIX, original_id=match.group(1), is_legacy=True,
    )


class StudentIdGenerator(PatternIdentifierGenerator):
    """Generates, parses and decorates student identifiers."""

    @property
    def kind(self) -> EntityKind:
        return EntityKind.STUDENT

    def _build_patterns(self) -> PatternTable:
        return [
            (STANDARD_PATTERN, _decode_standard),
            (YEAR_ONLY_PATTERN, _decode_year_only),
            (SECTION_PATTERN, _decode_section),
            (LEGACY_PATTERN, _decode_legacy),
        ]

    def badge_number(self, identifier: str) -> str:
        """ID card number: ``VC-YYYY-XXXXX``, or ``VC-L-<last 6>`` for legacy students."""
        parsed = self.parse(identifier)
        if not parsed.is_valid:
            return INVALID_BADGE
        if parsed.is_legacy:
            return f"{self._badge_prefix}-L-{parsed.original_id[-6:]}"
        return f"{self._badge_prefix}-{parsed.year}-{parsed.sequence:05d}"
