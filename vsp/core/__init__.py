"""
Core module containing identifier formats, grading types and base classes.
"""

from .enums import *
from .exceptions import *
from .interfaces import *
from .identifiers import *
from .grading import *
from .school import *

__all__ = [
    # Enums and constants
    "INSTITUTION_PREFIX",
    "STAFF_TAG",
    "LEGACY_TAG",
    "EntityKind",
    "StudentIdFormat",
    "StaffIdFormat",
    "SchoolSection",
    "LetterGrade",

    # Exceptions
    "VSPException",
    "ValidationError",
    "InvalidFormatParameters",
    "SequenceExhaustedError",
    "ConfigurationError",

    # Interfaces
    "SequenceAllocator",
    "IdentifierGenerator",

    # Identifiers
    "IdentifierFormat",
    "StandardStudentFormat",
    "YearOnlyStudentFormat",
    "SectionStudentFormat",
    "LegacyStudentFormat",
    "StandardStaffFormat",
    "DepartmentStaffFormat",
    "SimplifiedStaffFormat",
    "LegacyStaffFormat",
    "ParsedIdentifier",
    "build_format",
    "coerce_kind",

    # Grading
    "CA_MAX_SCORE",
    "EXAM_MAX_SCORE",
    "GradeBand",
    "DEFAULT_GRADING_SCALE",
    "GradeResult",
    "SubjectResult",
    "TermResult",
    "SubjectGrade",
    "TermSummary",

    # School tables
    "CLASS_CODES",
    "SECTION_CODES",
    "class_code_to_name",
    "name_to_class_code",
    "class_code_to_section",
]
