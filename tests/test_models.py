"""Tests for domain model parsing."""

import pytest

from practice_scheduler.domain.errors import UsageError
from practice_scheduler.domain.models import EditableField, Role


def test_role_parse() -> None:
    assert Role.parse("admin") is Role.ADMINISTRATOR
    assert Role.parse("Administrator") is Role.ADMINISTRATOR
    assert Role.parse("therapist") is Role.STANDARD
    assert Role.parse(None) is Role.STANDARD


def test_editable_field_parse_accepts_both_spellings() -> None:
    assert EditableField.parse("caseType") is EditableField.CASE_TYPE
    assert EditableField.parse("case_type") is EditableField.CASE_TYPE
    assert EditableField.parse("EMAIL") is EditableField.EMAIL


def test_editable_field_parse_rejects_unknown() -> None:
    with pytest.raises(UsageError, match="Valid fields are: name, email"):
        EditableField.parse("notes")


def test_editable_field_label() -> None:
    assert EditableField.CASE_TYPE.label == "caseType"
    assert EditableField.CITY.label == "city"
