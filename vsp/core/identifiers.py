"""
Identifier format variants and the parsed identifier value object.

Each format is its own frozen dataclass so the fields a format needs are
checked when the variant is built, not when an identifier is rendered.
"""

import re
from dataclasses import dataclass, asdict
from typing import Any, ClassVar, Dict, Mapping, Optional, Union

from .enums import (
    EntityKind, StudentIdFormat, StaffIdFormat, SchoolSection,
    INSTITUTION_PREFIX, STAFF_TAG, LEGACY_TAG,
)
from .exceptions import InvalidFormatParameters, SequenceExhaustedError


CLASS_CODE_RE = re.compile(r"^[A-Z0-9]{3,4}$")
DEPARTMENT_RE = re.compile(r"^[A-Z]{2,3}$")
_PREFIX_RE = re.compile(r"^VSP-?", re.IGNORECASE)


def _coerce_year(value: Any, low: int, high: int, format_name: str, required: bool = False) -> Optional[int]:
    if value is None or value == "":
        if required:
            raise InvalidFormatParameters(f"Year is required for {format_name} format",
                                          format_name, "year")
        return None
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise InvalidFormatParameters(f"Year must be a whole number, got {value!r}",
                                      format_name, "year")
    if isinstance(value, float) and value != year:
        raise InvalidFormatParameters(f"Year must be a whole number, got {value!r}",
                                      format_name, "year")
    if not low <= year <= high:
        raise InvalidFormatParameters(f"Year {year} is outside {low}-{high} for {format_name} format",
                                      format_name, "year")
    return year


def _require_text(value: Any, parameter: str, format_name: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidFormatParameters(
            f"{parameter.replace('_', ' ').capitalize()} is required for {format_name} format",
            format_name, parameter,
        )
    return str(value).strip()


class IdentifierFormat:
    """Behaviour shared by every format variant."""

    kind: ClassVar[EntityKind]
    format: ClassVar[Union[StudentIdFormat, StaffIdFormat]]
    # Digits reserved for the sequence; None for formats that do not allocate.
    width: ClassVar[Optional[int]] = None
    min_year: ClassVar[int] = 2000
    max_year: ClassVar[int] = 2099

    @property
    def uses_sequence(self) -> bool:
        return self.width is not None

    def pad(self, sequence: int) -> str:
        if sequence >= 10 ** self.width:
            raise SequenceExhaustedError(
                f"Sequence {sequence} does not fit {self.width} digits for {self.format.value} format",
                error_code="sequence_exhausted",
                details={"format": self.format.value, "sequence": sequence},
            )
        return str(sequence).zfill(self.width)

    def sequence_key(self, year: int) -> str:
        raise NotImplementedError

    def render(self, year: int, sequence: Optional[int] = None) -> str:
        raise NotImplementedError


# Student formats

@dataclass(frozen=True)
class StandardStudentFormat(IdentifierFormat):
    """VSP-YY-CLASS-XXXX"""
    class_code: str
    year: Optional[int] = None

    kind: ClassVar[EntityKind] = EntityKind.STUDENT
    format: ClassVar[StudentIdFormat] = StudentIdFormat.STANDARD
    width: ClassVar[Optional[int]] = 4

    def __post_init__(self):
        code = _require_text(self.class_code, "class_code", self.format.value).upper()
        if not CLASS_CODE_RE.match(code):
            raise InvalidFormatParameters(
                f"Class code must be 3-4 letters or digits, got {self.class_code!r}",
                self.format.value, "class_code",
            )
        object.__setattr__(self, "class_code", code)
        object.__setattr__(self, "year", _coerce_year(self.year, self.min_year, self.max_year,
                                                      self.format.value))

    def sequence_key(self, year: int) -> str:
        return f"student-standard-{year % 100:02d}-{self.class_code}"

    def render(self, year: int, sequence: Optional[int] = None) -> str:
        return f"{INSTITUTION_PREFIX}-{year % 100:02d}-{self.class_code}-{self.pad(sequence)}"


@dataclass(frozen=True)
class YearOnlyStudentFormat(IdentifierFormat):
    """VSP-YY-XXXXX"""
    year: Optional[int] = None

    kind: ClassVar[EntityKind] = EntityKind.STUDENT
    format: ClassVar[StudentIdFormat] = StudentIdFormat.YEAR_ONLY
    width: ClassVar[Optional[int]] = 5

    def __post_init__(self):
        object.__setattr__(self, "year", _coerce_year(self.year, self.min_year, self.max_year,
                                                      self.format.value))

    def sequence_key(self, year: int) -> str:
        return f"student-year-only-{year % 100:02d}"

    def render(self, year: int, sequence: Optional[int] = None) -> str:
        return f"{INSTITUTION_PREFIX}-{year % 100:02d}-{self.pad(sequence)}"


@dataclass(frozen=True)
class SectionStudentFormat(IdentifierFormat):
    """VSP-SEC-YY-XXXX"""
    section: SchoolSection
    year: Optional[int] = None

    kind: ClassVar[EntityKind] = EntityKind.STUDENT
    format: ClassVar[StudentIdFormat] = StudentIdFormat.SECTION
    width: ClassVar[Optional[int]] = 4

    def __post_init__(self):
        raw = self.section
        if not isinstance(raw, SchoolSection):
            raw = _require_text(raw, "section", self.format.value)
        try:
            section = SchoolSection.lookup(raw)
        except ValueError:
            raise InvalidFormatParameters(f"Unknown section {self.section!r}",
                                          self.format.value, "section")
        object.__setattr__(self, "section", section)
        object.__setattr__(self, "year", _coerce_year(self.year, self.min_year, self.max_year,
                                                      self.format.value))

    def sequence_key(self, year: int) -> str:
        return f"student-section-{self.section.value}-{year % 100:02d}"

    def render(self, year: int, sequence: Optional[int] = None) -> str:
        return f"{INSTITUTION_PREFIX}-{self.section.value}-{year % 100:02d}-{self.pad(sequence)}"


@dataclass(frozen=True)
class LegacyStudentFormat(IdentifierFormat):
    """VSP-L-<original>, wrapping an identifier from the previous system."""
    original_id: str

    kind: ClassVar[EntityKind] = EntityKind.STUDENT
    format: ClassVar[StudentIdFormat] = StudentIdFormat.LEGACY

    def __post_init__(self):
        original = _require_text(self.original_id, "original_id", self.format.value)
        cleaned = _PREFIX_RE.sub("", original, count=1)
        if not cleaned:
            raise InvalidFormatParameters(
                f"Original ID {self.original_id!r} is empty once the institution prefix is removed",
                self.format.value, "original_id",
            )
        if re.search(r"\s", cleaned):
            raise InvalidFormatParameters(
                f"Original ID {self.original_id!r} must not contain whitespace",
                self.format.value, "original_id",
            )
        object.__setattr__(self, "original_id", cleaned)

    def render(self, year: Optional[int] = None, sequence: Optional[int] = None) -> str:
        return f"{INSTITUTION_PREFIX}-{LEGACY_TAG}-{self.original_id}"


# Staff formats

@dataclass(frozen=True)
class StandardStaffFormat(IdentifierFormat):
    """VSP-STF-YYYY-XXXX"""
    year: Optional[int] = None

    kind: ClassVar[EntityKind] = EntityKind.STAFF
    format: ClassVar[StaffIdFormat] = StaffIdFormat.STANDARD
    width: ClassVar[Optional[int]] = 4
    min_year: ClassVar[int] = 1000
    max_year: ClassVar[int] = 9999

    def __post_init__(self):
        object.__setattr__(self, "year", _coerce_year(self.year, self.min_year, self.max_year,
                                                      self.format.value))

    def sequence_key(self, year: int) -> str:
        return f"staff-standard-{year}"

    def render(self, year: int, sequence: Optional[int] = None) -> str:
        return f"{INSTITUTION_PREFIX}-{STAFF_TAG}-{year}-{self.pad(sequence)}"


@dataclass(frozen=True)
class DepartmentStaffFormat(IdentifierFormat):
    """VSP-STF-DEPT-YYYY-XXXX"""
    department: str
    year: Optional[int] = None

    kind: ClassVar[EntityKind] = EntityKind.STAFF
    format: ClassVar[StaffIdFormat] = StaffIdFormat.DEPARTMENT
    width: ClassVar[Optional[int]] = 4
    min_year: ClassVar[int] = 1000
    max_year: ClassVar[int] = 9999

    def __post_init__(self):
        department = _require_text(self.department, "department", self.format.value).upper()[:3]
        if not DEPARTMENT_RE.match(department):
            raise InvalidFormatParameters(
                f"Department code must be 2-3 letters, got {self.department!r}",
                self.format.value, "department",
            )
        object.__setattr__(self, "department", department)
        object.__setattr__(self, "year", _coerce_year(self.year, self.min_year, self.max_year,
                                                      self.format.value))

    def sequence_key(self, year: int) -> str:
        return f"staff-department-{self.department}-{year}"

    def render(self, year: int, sequence: Optional[int] = None) -> str:
        return f"{INSTITUTION_PREFIX}-{STAFF_TAG}-{self.department}-{year}-{self.pad(sequence)}"


@dataclass(frozen=True)
class SimplifiedStaffFormat(IdentifierFormat):
    """VSP-STF-XXXXX"""

    kind: ClassVar[EntityKind] = EntityKind.STAFF
    format: ClassVar[StaffIdFormat] = StaffIdFormat.SIMPLIFIED
    width: ClassVar[Optional[int]] = 5

    def sequence_key(self, year: int) -> str:
        return "staff-simplified"

    def render(self, year: int, sequence: Optional[int] = None) -> str:
        return f"{INSTITUTION_PREFIX}-{STAFF_TAG}-{self.pad(sequence)}"


@dataclass(frozen=True)
class LegacyStaffFormat(IdentifierFormat):
    """VSP-STF-L-YYYY-XXXX, keeping the year and number staff already had."""
    year: int
    original_number: int

    kind: ClassVar[EntityKind] = EntityKind.STAFF
    format: ClassVar[StaffIdFormat] = StaffIdFormat.LEGACY
    min_year: ClassVar[int] = 1000
    max_year: ClassVar[int] = 9999

    def __post_init__(self):
        object.__setattr__(self, "year", _coerce_year(self.year, self.min_year, self.max_year,
                                                      self.format.value, required=True))
        if self.original_number is None or self.original_number == "":
            raise InvalidFormatParameters("Original number is required for legacy format",
                                          self.format.value, "original_number")
        try:
            number = int(self.original_number)
        except (TypeError, ValueError):
            raise InvalidFormatParameters(
                f"Original number must be a whole number, got {self.original_number!r}",
                self.format.value, "original_number",
            )
        if not 0 <= number <= 9999:
            raise InvalidFormatParameters(f"Original number {number} does not fit 4 digits",
                                          self.format.value, "original_number")
        object.__setattr__(self, "original_number", number)

    def render(self, year: Optional[int] = None, sequence: Optional[int] = None) -> str:
        return f"{INSTITUTION_PREFIX}-{STAFF_TAG}-{LEGACY_TAG}-{self.year}-{self.original_number:04d}"


StudentFormat = Union[StandardStudentFormat, YearOnlyStudentFormat,
                      SectionStudentFormat, LegacyStudentFormat]
StaffFormat = Union[StandardStaffFormat, DepartmentStaffFormat,
                    SimplifiedStaffFormat, LegacyStaffFormat]


@dataclass(frozen=True)
class ParsedIdentifier:
    """Structured fields decoded from an identifier string."""
    is_valid: bool
    kind: Optional[EntityKind] = None
    format: Optional[Union[StudentIdFormat, StaffIdFormat]] = None
    prefix: Optional[str] = None
    year: Optional[int] = None
    class_code: Optional[str] = None
    section: Optional[str] = None
    department: Optional[str] = None
    sequence: Optional[int] = None
    original_id: Optional[str] = None
    is_legacy: Optional[bool] = None

    @classmethod
    def invalid(cls) -> "ParsedIdentifier":
        return cls(is_valid=False)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value if self.kind else None
        data["format"] = self.format.value if self.format else None
        return data


def coerce_kind(kind) -> EntityKind:
    if isinstance(kind, EntityKind):
        return kind
    try:
        return EntityKind(str(kind).lower())
    except ValueError:
        raise InvalidFormatParameters(f"Unknown entity kind {kind!r}", parameter="kind")


def build_format(kind, id_format, params: Optional[Mapping[str, Any]] = None) -> IdentifierFormat:
    """Build the format variant for a kind/format name pair from loose parameters.

    ``params`` may hold ``class_code``, ``section``, ``department``, ``year``,
    ``original_id`` and ``original_number``; only the ones the format needs
    are read.
    """
    kind = coerce_kind(kind)
    params = dict(params or {})
    enum_type = StudentIdFormat if kind is EntityKind.STUDENT else StaffIdFormat
    if isinstance(id_format, (StudentIdFormat, StaffIdFormat)):
        id_format = id_format.value
    try:
        fmt = enum_type(str(id_format).lower())
    except ValueError:
        raise InvalidFormatParameters(
            f"Unknown {kind.value} identifier format {id_format!r}",
            str(id_format), "format",
        )

    year = params.get("year")
    if fmt is StudentIdFormat.STANDARD:
        return StandardStudentFormat(class_code=params.get("class_code"), year=year)
    if fmt is StudentIdFormat.YEAR_ONLY:
        return YearOnlyStudentFormat(year=year)
    if fmt is StudentIdFormat.SECTION:
        return SectionStudentFormat(section=params.get("section"), year=year)
    if fmt is StudentIdFormat.LEGACY:
        return LegacyStudentFormat(original_id=params.get("original_id"))
    if fmt is StaffIdFormat.STANDARD:
        return StandardStaffFormat(year=year)
    if fmt is StaffIdFormat.DEPARTMENT:
        return DepartmentStaffFormat(department=params.get("department"), year=year)
    if fmt is StaffIdFormat.SIMPLIFIED:
        return SimplifiedStaffFormat()
    return LegacyStaffFormat(year=year, original_number=params.get("original_number"))
