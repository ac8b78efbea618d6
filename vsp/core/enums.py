"""
Enumerations and constants for the portal core.
"""

from enum import Enum


INSTITUTION_PREFIX = "VSP"
STAFF_TAG = "STF"
LEGACY_TAG = "L"


class EntityKind(Enum):
    """Kinds of people that receive identifiers."""
    STUDENT = "student"
    STAFF = "staff"


class StudentIdFormat(Enum):
    """Student identifier layouts."""
    STANDARD = "standard"      # VSP-YY-CLASS-XXXX
    YEAR_ONLY = "year-only"    # VSP-YY-XXXXX
    SECTION = "section"        # VSP-SEC-YY-XXXX
    LEGACY = "legacy"          # VSP-L-<original>


class StaffIdFormat(Enum):
    """Staff identifier layouts."""
    STANDARD = "standard"      # VSP-STF-YYYY-XXXX
    DEPARTMENT = "department"  # VSP-STF-DEPT-YYYY-XXXX
    SIMPLIFIED = "simplified"  # VSP-STF-XXXXX
    LEGACY = "legacy"          # VSP-STF-L-YYYY-XXXX


class SchoolSection(Enum):
    """Sections of the school, valued by their identifier code."""
    CRECHE = "CRE"
    NURSERY = "NUR"
    PRIMARY = "PRY"
    COLLEGE = "COL"

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def lookup(cls, value) -> "SchoolSection":
        """Resolve a section from an enum member, name ('primary') or code ('PRY')."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for section in cls:
            if text.upper() == section.value or text.lower() == section.label:
                return section
        raise ValueError(f"Unknown school section: {value!r}")


class LetterGrade(Enum):
    """Letter grades of the grading scale."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
