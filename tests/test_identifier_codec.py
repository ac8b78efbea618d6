import pytest

from vsp.core.enums import EntityKind, StudentIdFormat, StaffIdFormat
from vsp.core.exceptions import InvalidFormatParameters
from vsp.core.identifiers import StandardStudentFormat, StandardStaffFormat, build_format
from vsp.services import IdentifierCodec


def test_first_and_second_standard_student_ids(codec):
    params = {"class_code": "JSS1", "year": 2024}
    assert codec.generate(EntityKind.STUDENT, "standard", params) == "VSP-24-JSS1-0001"
    assert codec.generate(EntityKind.STUDENT, "standard", params) == "VSP-24-JSS1-0002"


def test_kind_and_format_can_be_plain_strings(codec):
    assert codec.generate("student", "year-only", {"year": 2024}) == "VSP-24-00001"
    assert codec.generate("STAFF", StaffIdFormat.SIMPLIFIED) == "VSP-STF-00001"


@pytest.mark.parametrize("kind, id_format, params, parameter", [
    ("student", "standard", {"year": 2024}, "class_code"),
    ("student", "section", {}, "section"),
    ("student", "legacy", {}, "original_id"),
    ("staff", "department", {"year": 2024}, "department"),
    ("staff", "legacy", {"original_number": 5}, "year"),
    ("student", "weekly", {}, "format"),
    ("staff", "year-only", {}, "format"),
    ("parent", "standard", {}, "kind"),
])
def test_missing_or_unknown_parameters_fail_fast(codec, allocator, kind, id_format, params, parameter):
    with pytest.raises(InvalidFormatParameters) as excinfo:
        codec.generate(kind, id_format, params)
    assert excinfo.value.parameter == parameter
    assert allocator.snapshot() == {}


def test_variant_must_match_the_requested_kind(codec):
    with pytest.raises(InvalidFormatParameters):
        codec.generate(EntityKind.STAFF, StandardStudentFormat("JSS1", 2024))
    assert codec.generate(None, StandardStaffFormat(2024)) == "VSP-STF-2024-0001"


def test_parse_picks_the_kind_from_the_staff_tag(codec):
    assert codec.parse("VSP-STF-2024-0001").kind is EntityKind.STAFF
    assert codec.parse("VSP-24-JSS1-0001").kind is EntityKind.STUDENT
    assert codec.parse("VSP-STF-24-0001").is_valid is False


@pytest.mark.parametrize("kind, id_format, params", [
    ("student", "standard", {"class_code": "SSS2", "year": 2022}),
    ("student", "year-only", {"year": 2030}),
    ("student", "section", {"section": "creche", "year": 2024}),
    ("staff", "standard", {"year": 2021}),
    ("staff", "department", {"department": "SPT", "year": 2024}),
    ("staff", "simplified", {}),
])
def test_round_trip_recovers_every_field(codec, kind, id_format, params):
    parsed = codec.parse(codec.generate(kind, id_format, params))
    assert parsed.is_valid
    assert parsed.kind.value == kind
    assert parsed.format.value == id_format
    assert parsed.sequence == 1
    assert parsed.year == params.get("year")
    assert parsed.class_code == params.get("class_code")
    assert parsed.department == params.get("department")
    if "section" in params:
        assert parsed.section == "CRE"


def test_legacy_round_trip_keeps_the_original(codec):
    identifier = codec.generate("student", "legacy", {"original_id": "VSP-2019/0042"})
    assert identifier == "VSP-L-2019/0042"
    assert codec.parse(identifier).original_id == "2019/0042"

    identifier = codec.generate("staff", "legacy", {"year": 2019, "original_number": 42})
    parsed = codec.parse(identifier)
    assert (parsed.year, parsed.sequence, parsed.is_legacy) == (2019, 42, True)


@pytest.mark.parametrize("identifier", [
    "VSP-24-JSS1-0001", "VSP-24-00001", "VSP-NUR-24-0001", "VSP-L-x",
    "VSP-STF-2024-0001", "VSP-STF-ADM-2024-0001", "VSP-STF-00001", "VSP-STF-L-2020-0001",
    "VSP-STF-L-x", "VSP-24-JSS1", "garbage", "",
])
def test_validate_agrees_with_parse(codec, identifier):
    assert codec.validate(identifier) == codec.parse(identifier).is_valid


def test_validate_ignores_counter_state(codec, allocator):
    allocator.reset()
    assert codec.validate("VSP-24-JSS1-9999")


def test_batch_through_the_codec(codec):
    batch = codec.generate_batch("student", "section", {"section": "PRY", "year": 2024}, count=4)
    assert batch == ["VSP-PRY-24-0001", "VSP-PRY-24-0002", "VSP-PRY-24-0003", "VSP-PRY-24-0004"]
    sequences = [codec.parse(i).sequence for i in batch]
    assert sequences == sorted(set(sequences))


def test_batch_has_no_upper_bound_in_the_codec(codec):
    batch = codec.generate_batch("student", "year-only", {"year": 2024}, count=250)
    assert len(batch) == 250
    assert batch[-1] == "VSP-24-00250"


def test_student_and_staff_share_the_allocator(codec, allocator):
    codec.generate("student", "standard", {"class_code": "JSS1", "year": 2024})
    codec.generate("staff", "standard", {"year": 2024})
    assert allocator.snapshot() == {"student-standard-24-JSS1": 1, "staff-standard-2024": 1}


def test_badge_and_username_dispatch_on_kind(codec):
    assert codec.badge_number("VSP-24-JSS1-0045") == "VC-2024-00045"
    assert codec.badge_number("VSP-STF-2024-0045") == "VC-00045"
    assert codec.badge_number("not-an-id") == "INVALID"
    assert codec.username("Ada", "Obi", "VSP-STF-00012") == "ada.obi.00012@vincollins.edu.ng"


def test_email_domain_and_badge_prefix_are_configurable():
    codec = IdentifierCodec(email_domain="example.org", badge_prefix="EX", clock=lambda: 2024)
    assert codec.username("Ada", "Obi", "VSP-24-JSS1-0001") == "ada.obi.0001@example.org"
    assert codec.badge_number("VSP-24-JSS1-0001") == "EX-2024-00001"


def test_class_helpers(codec):
    assert codec.class_code_to_name("JSS1") == "JSS 1"
    assert codec.class_code_to_name("XYZ9") is None
    assert codec.name_to_class_code("Primary 5") == "PRY5"
    assert codec.name_to_class_code("Primary 9") is None
    assert codec.class_code_to_section("SSS2") == "college"
    assert codec.class_code_to_section("CRE1") == "creche"
    assert codec.class_code_to_section("ABC") is None


def test_parsed_identifier_to_dict(codec):
    data = codec.parse("VSP-STF-TCH-2024-0001").to_dict()
    assert data["kind"] == "staff"
    assert data["format"] == "department"
    assert data["department"] == "TCH"
    assert codec.parse("nope").to_dict()["is_valid"] is False


def test_build_format_ignores_unrelated_params():
    id_format = build_format("student", StudentIdFormat.YEAR_ONLY, {"class_code": "JSS1", "year": 2024})
    assert id_format.year == 2024
