import pytest

from vsp.core.enums import EntityKind, StudentIdFormat, SchoolSection
from vsp.core.exceptions import InvalidFormatParameters, SequenceExhaustedError, ValidationError
from vsp.core.identifiers import (
    StandardStudentFormat, YearOnlyStudentFormat, SectionStudentFormat,
    LegacyStudentFormat, StandardStaffFormat,
)


def test_standard_ids_count_up_per_class_and_year(students):
    assert students.generate(StandardStudentFormat("JSS1", 2024)) == "VSP-24-JSS1-0001"
    assert students.generate(StandardStudentFormat("JSS1", 2024)) == "VSP-24-JSS1-0002"
    assert students.generate(StandardStudentFormat("JSS2", 2024)) == "VSP-24-JSS2-0001"
    assert students.generate(StandardStudentFormat("JSS1", 2025)) == "VSP-25-JSS1-0001"


def test_class_code_is_upper_cased(students):
    assert students.generate(StandardStudentFormat("pry5", 2023)) == "VSP-23-PRY5-0001"


def test_year_defaults_to_the_clock(students):
    assert students.generate(YearOnlyStudentFormat()) == "VSP-24-00001"
    assert students.generate(StandardStudentFormat("SSS3")) == "VSP-24-SSS3-0001"


@pytest.mark.parametrize("class_code", [None, "", "   "])
def test_standard_format_requires_a_class_code(class_code):
    with pytest.raises(InvalidFormatParameters) as excinfo:
        StandardStudentFormat(class_code, 2024)
    assert excinfo.value.parameter == "class_code"
    assert excinfo.value.error_code == "invalid_format_parameters"


@pytest.mark.parametrize("class_code", ["JS", "JSS12", "JS-1"])
def test_class_codes_that_would_not_parse_back_are_rejected(class_code):
    with pytest.raises(InvalidFormatParameters):
        StandardStudentFormat(class_code, 2024)


@pytest.mark.parametrize("year", [1999, 2100, 24, "twenty", 2024.5])
def test_student_years_must_fit_two_digits_after_20(year):
    with pytest.raises(InvalidFormatParameters) as excinfo:
        YearOnlyStudentFormat(year)
    assert excinfo.value.parameter == "year"


def test_section_accepts_names_codes_and_members(students):
    assert students.generate(SectionStudentFormat("primary", 2024)) == "VSP-PRY-24-0001"
    assert students.generate(SectionStudentFormat("PRY", 2024)) == "VSP-PRY-24-0002"
    assert students.generate(SectionStudentFormat(SchoolSection.COLLEGE, 2024)) == "VSP-COL-24-0001"


def test_unknown_section_is_rejected():
    with pytest.raises(InvalidFormatParameters) as excinfo:
        SectionStudentFormat("university", 2024)
    assert excinfo.value.parameter == "section"


@pytest.mark.parametrize("original, expected", [
    ("20201234", "VSP-L-20201234"),
    ("VSP-20201234", "VSP-L-20201234"),
    ("vsp20201234", "VSP-L-20201234"),
    ("OLD/2019/77", "VSP-L-OLD/2019/77"),
])
def test_legacy_ids_wrap_the_original(students, allocator, original, expected):
    assert students.generate(LegacyStudentFormat(original)) == expected
    assert allocator.snapshot() == {}


@pytest.mark.parametrize("original", [None, "", "VSP-", "OLD 2019"])
def test_legacy_ids_need_a_usable_original(original):
    with pytest.raises(InvalidFormatParameters):
        LegacyStudentFormat(original)


def test_parse_standard():
    from vsp.services.student_ids import StudentIdGenerator
    parsed = StudentIdGenerator().parse("VSP-24-JSS1-0045")
    assert parsed.is_valid
    assert parsed.kind is EntityKind.STUDENT
    assert parsed.format is StudentIdFormat.STANDARD
    assert parsed.prefix == "VSP"
    assert parsed.year == 2024
    assert parsed.class_code == "JSS1"
    assert parsed.sequence == 45
    assert parsed.is_legacy is False


def test_parse_year_only_section_and_legacy(students):
    year_only = students.parse("VSP-24-00123")
    assert (year_only.format, year_only.year, year_only.sequence) == (StudentIdFormat.YEAR_ONLY, 2024, 123)

    section = students.parse("VSP-PRY-24-0123")
    assert (section.format, section.section, section.year, section.sequence) == (
        StudentIdFormat.SECTION, "PRY", 2024, 123)

    legacy = students.parse("VSP-L-20201234")
    assert legacy.format is StudentIdFormat.LEGACY
    assert legacy.original_id == "20201234"
    assert legacy.is_legacy is True
    assert legacy.sequence is None


@pytest.mark.parametrize("identifier", [
    "",
    "not-an-id",
    "VSP-24-JSS1-001",
    "VSP-2024-JSS1-0001",
    "vsp-24-JSS1-0001",
    "VSP-24-JSS1-0001 ",
    "VSP-24-JSS1-0001\n",
    "VSP-24-0001",
    "VSP-24-000001",
    "VSP-L-",
    "VSP-STF-24-0001",
    "VSP-STF-2024-0001",
    None,
    12345,
])
def test_unknown_shapes_are_invalid_not_errors(students, identifier):
    parsed = students.parse(identifier)
    assert parsed.is_valid is False
    assert parsed.format is None
    assert parsed.sequence is None
    assert students.validate(identifier) is False


def test_five_digit_tail_is_year_only_not_a_class_code(students):
    assert students.parse("VSP-24-00001").format is StudentIdFormat.YEAR_ONLY


@pytest.mark.parametrize("id_format", [
    StandardStudentFormat("JSS1", 2024),
    StandardStudentFormat("CRE", 2031),
    YearOnlyStudentFormat(2009),
    SectionStudentFormat("nursery", 2024),
])
def test_generated_ids_parse_back_to_the_same_fields(students, id_format):
    parsed = students.parse(students.generate(id_format))
    assert parsed.is_valid
    assert parsed.format is id_format.format
    assert parsed.year == id_format.year
    assert parsed.sequence == 1
    if isinstance(id_format, StandardStudentFormat):
        assert parsed.class_code == id_format.class_code
    if isinstance(id_format, SectionStudentFormat):
        assert parsed.section == id_format.section.value


def test_batch_sequences_are_contiguous(students):
    students.generate(StandardStudentFormat("SSS2", 2023))
    batch = students.generate_batch(StandardStudentFormat("SSS2", 2023), 5)
    assert [students.parse(i).sequence for i in batch] == [2, 3, 4, 5, 6]
    assert students.generate(StandardStudentFormat("SSS2", 2023)) == "VSP-23-SSS2-0007"


def test_batch_rejects_legacy_and_bad_counts(students):
    with pytest.raises(InvalidFormatParameters):
        students.generate_batch(LegacyStudentFormat("123"), 2)
    with pytest.raises(ValidationError):
        students.generate_batch(YearOnlyStudentFormat(2024), 0)


def test_staff_formats_are_refused(students):
    with pytest.raises(InvalidFormatParameters):
        students.generate(StandardStaffFormat(2024))


def test_sequence_overflow_is_reported(students, allocator):
    allocator.seed({"student-standard-24-JSS1": 9999})
    with pytest.raises(SequenceExhaustedError):
        students.generate(StandardStudentFormat("JSS1", 2024))
    allocator.seed({"student-year-only-24": 99998})
    assert students.generate(YearOnlyStudentFormat(2024)) == "VSP-24-99999"


def test_badge_numbers(students):
    assert students.badge_number("VSP-24-JSS1-0045") == "VC-2024-00045"
    assert students.badge_number("VSP-PRY-23-0007") == "VC-2023-00007"
    assert students.badge_number("VSP-L-20201234") == "VC-L-201234"
    assert students.badge_number("VSP-L-77") == "VC-L-77"
    assert students.badge_number("not-an-id") == "INVALID"


def test_username_strips_non_letters(students):
    assert students.username("Ada-Mae", "O'Brien", "VSP-24-JSS1-0001") == \
        "adamae.obrien.0001@vincollins.edu.ng"
    assert students.username("Tolu", "Ade", "VSP-L-20201234") == "tolu.ade.20201234@vincollins.edu.ng"
    assert students.username("Tolu", "Ade", "") == "tolu.ade.0000@vincollins.edu.ng"
