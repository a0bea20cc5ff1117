"""Tests for form coercion."""

import datetime

import pytest
from pydantic import ValidationError

from hair_diary.api.models import EntryForm
from hair_diary.domain.entries import Formula
from hair_diary.numbers import float_or_zero, int_or_zero, optional_float


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("12", 12), ("3.7", 3), (" 8 min", 8), ("", 0), ("abc", 0), (None, 0), (4.9, 4)],
)
def test_int_or_zero(raw: object, expected: int) -> None:
    assert int_or_zero(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("12.5", 12.5), (".5", 0.5), ("30g", 30.0), ("", 0.0), ("x", 0.0), (7, 7.0)],
)
def test_float_or_zero(raw: object, expected: float) -> None:
    assert float_or_zero(raw) == expected


def test_optional_float_blank_means_absent() -> None:
    assert optional_float("") is None
    assert optional_float(None) is None
    assert optional_float("n/a") is None
    assert optional_float("0") == 0.0


def test_form_builds_draft() -> None:
    form = EntryForm.model_validate(
        {
            "date": "2025-01-31",
            "name": "Rose gold",
            "formulas": [{"shade": "9.26", "parts": "1", "color": "25.5"}],
            "developer": "50",
            "processingTime": "20",
        }
    )

    draft = form.to_draft()

    assert draft.date == "2025-01-31"
    assert draft.formulas == (Formula("9.26", 1, 25.5),)
    assert draft.developer == 50.0
    assert draft.processing_time == 20
    assert draft.notes == ""


def test_form_defaults_date_to_today() -> None:
    form = EntryForm(name="Toner", formulas=[{"shade": "10.1"}])

    assert form.date == datetime.date.today()


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "x", "formulas": []},
        {"name": "", "formulas": [{"shade": "5"}]},
        {"name": "x", "formulas": [{"shade": ""}]},
        {"name": "x", "formulas": [{"shade": "5"}], "processingTime": "-5"},
        {"name": "x", "formulas": [{"shade": "5"}], "date": "31/01/2025"},
    ],
)
def test_form_rejects_invalid_input(payload: dict) -> None:
    with pytest.raises(ValidationError):
        EntryForm.model_validate(payload)
