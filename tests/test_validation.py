# tests/test_validation.py
"""Tests for profile submission validation."""

import pytest

from threadline.schemas.user import validate_profile


def _profile(**overrides: str) -> dict[str, str]:
    data = {
        "profile_photo": "https://img.example.com/me.png",
        "name": "Alice",
        "username": "alice",
        "bio": "Reads a lot of threads",
    }
    data.update(overrides)
    return data


def _fields(errors) -> set[str]:
    return {error.field for error in errors}


def test_valid_profile_has_no_errors() -> None:
    assert validate_profile(_profile()) == []


@pytest.mark.parametrize("field", ["name", "username", "bio"])
def test_single_character_rejected(field: str) -> None:
    assert _fields(validate_profile(_profile(**{field: "a"}))) == {field}


@pytest.mark.parametrize("field", ["name", "username"])
def test_forty_character_limit(field: str) -> None:
    assert validate_profile(_profile(**{field: "x" * 40})) == []
    assert _fields(validate_profile(_profile(**{field: "x" * 41}))) == {field}


def test_bio_limit() -> None:
    assert validate_profile(_profile(bio="x" * 1000)) == []
    assert _fields(validate_profile(_profile(bio="x" * 1001))) == {"bio"}


def test_profile_photo_must_be_url() -> None:
    errors = validate_profile(_profile(profile_photo="not a url"))
    assert _fields(errors) == {"profile_photo"}
    assert errors[0].message


def test_every_violation_reported() -> None:
    errors = validate_profile({"profile_photo": "nope", "name": "A", "username": "b"})
    assert _fields(errors) == {"profile_photo", "name", "username", "bio"}
