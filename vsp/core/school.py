"""
Class and section code tables used by identifiers and forms.
"""

from typing import Dict, Optional

from .enums import SchoolSection


CLASS_CODES: Dict[str, str] = {
    # Creche
    "Creche 1": "CRE1",
    "Creche 2": "CRE2",
    # Nursery
    "Nursery 1": "NUR1",
    "Nursery 2": "NUR2",
    "Nursery 3": "NUR3",
    # Primary
    "Primary 1": "PRY1",
    "Primary 2": "PRY2",
    "Primary 3": "PRY3",
    "Primary 4": "PRY4",
    "Primary 5": "PRY5",
    "Primary 6": "PRY6",
    # College (junior)
    "JSS 1": "JSS1",
    "JSS 2": "JSS2",
    "JSS 3": "JSS3",
    # College (senior)
    "SSS 1": "SSS1",
    "SSS 2": "SSS2",
    "SSS 3": "SSS3",
}

SECTION_CODES: Dict[str, str] = {section.label: section.value for section in SchoolSection}

_CLASS_PREFIX_SECTIONS = (
    ("CRE", SchoolSection.CRECHE),
    ("NUR", SchoolSection.NURSERY),
    ("PRY", SchoolSection.PRIMARY),
    ("JSS", SchoolSection.COLLEGE),
    ("SSS", SchoolSection.COLLEGE),
)


def class_code_to_name(class_code: str) -> Optional[str]:
    """Get the class name for a class code, e.g. ``JSS1`` -> ``JSS 1``."""
    for name, code in CLASS_CODES.items():
        if code == class_code:
            return name
    return None


def name_to_class_code(class_name: str) -> Optional[str]:
    """Get the class code for a class name, e.g. ``Primary 5`` -> ``PRY5``."""
    return CLASS_CODES.get(class_name)


def class_code_to_section(class_code: str) -> Optional[str]:
    """Get the section name ('creche', 'nursery', 'primary', 'college') a class belongs to."""
    for prefix, section in _CLASS_PREFIX_SECTIONS:
        if class_code.startswith(prefix):
            return section.label
    return None
