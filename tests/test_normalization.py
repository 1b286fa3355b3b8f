"""Unit tests for the member field normalization step."""

import pytest

from choir_registry.application.use_cases.members.normalization import (
    normalize_join_year,
    normalize_member_fields,
    normalize_string_set,
)
from choir_registry.domain.errors import ValidationError


def test_single_position_becomes_one_element_set():
    values = normalize_member_fields({"position": "Usher"}, partial=False)
    assert set(values["position"]) == {"Usher"}


def test_position_list_passes_through():
    values = normalize_member_fields({"position": ["Usher", "Choir Lead"]}, partial=False)
    assert set(values["position"]) == {"Usher", "Choir Lead"}


def test_missing_position_becomes_empty_set_on_create():
    values = normalize_member_fields({"fullName": "Ada"}, partial=False)
    assert values["position"] == []
    assert values["instruments"] == []


def test_missing_position_is_left_out_of_partial_update():
    values = normalize_member_fields({"fullName": "Ada"}, partial=True)
    assert "position" not in values
    assert "instruments" not in values
    assert values == {"full_name": "Ada"}


def test_blank_position_clears_the_set_on_update():
    values = normalize_member_fields({"position": ""}, partial=True)
    assert values["position"] == []


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, []),
        ("  Usher ", ["Usher"]),
        (["Usher", "Usher", " ", "Alto Lead"], ["Usher", "Alto Lead"]),
        (("Usher",), ["Usher"]),
    ],
)
def test_normalize_string_set(raw, expected):
    assert normalize_string_set(raw) == expected


def test_normalize_string_set_rejects_numbers():
    with pytest.raises(ValidationError):
        normalize_string_set(5, field_name="position")
    with pytest.raises(ValidationError):
        normalize_string_set(["Usher", 3], field_name="position")


def test_unknown_and_protected_fields_are_dropped():
    values = normalize_member_fields(
        {
            "fullName": "Ada Obi",
            "photo": "../../etc/passwd",
            "_id": "abc",
            "id": "abc",
            "createdAt": "2020-01-01",
            "favouriteColour": "blue",
        },
        partial=True,
    )
    assert values == {"full_name": "Ada Obi"}


def test_scalar_fields_are_trimmed_and_blank_becomes_none():
    values = normalize_member_fields(
        {"fullName": "  Ada Obi ", "zone": "   ", "phoneNo": ["0801", "0802"]},
        partial=True,
    )
    assert values == {"full_name": "Ada Obi", "zone": None, "phone_no": "0802"}


def test_snake_case_keys_are_accepted():
    values = normalize_member_fields({"full_name": "Ada", "join_year": 2019}, partial=True)
    assert values == {"full_name": "Ada", "join_year": 2019}


@pytest.mark.parametrize(("raw", "expected"), [("2015", 2015), (2001, 2001), ("", None), (None, None)])
def test_normalize_join_year(raw, expected):
    assert normalize_join_year(raw) == expected


@pytest.mark.parametrize("raw", ["twenty", "2015.5", True, 1200, "3000"])
def test_normalize_join_year_rejects_invalid_values(raw):
    with pytest.raises(ValidationError):
        normalize_join_year(raw)


def test_other_instrument_replaces_placeholder():
    values = normalize_member_fields(
        {"instruments": ["Piano", "Other"], "otherInstrument": "Saxophone"},
        partial=False,
    )
    assert values["instruments"] == ["Piano", "Saxophone"]


def test_other_placeholder_kept_without_free_text():
    values = normalize_member_fields(
        {"instruments": ["Piano", "Other"], "otherInstrument": "  "},
        partial=False,
    )
    assert values["instruments"] == ["Piano", "Other"]


def test_over_long_text_is_rejected():
    with pytest.raises(ValidationError, match="phoneNo"):
        normalize_member_fields({"phoneNo": "0" * 51}, partial=True)


def test_text_at_column_limit_is_accepted():
    values = normalize_member_fields({"gender": "x" * 50}, partial=True)
    assert values == {"gender": "x" * 50}
