"""Tests for model output cleanup and parsing."""

import json

import pytest

from resume_checker.domain.normalizer import clean_model_text, normalize_response
from resume_checker.errors import MalformedResponse


@pytest.mark.parametrize(
    "value",
    [
        {"atsScore": 50, "nested": {"list": [1, 2, {"k": None}]}},
        {"suggestions": ["Wrap code samples in ```python blocks"]},
        "ends with ```",
        [1, "two", 3.5, True],
        "just a string",
        42,
        None,
    ],
)
def test_fenced_value_with_bom_round_trips(value):
    raw = "\ufeff```json\n" + json.dumps(value) + "\n```"

    assert normalize_response(raw) == value


def test_plain_fence_without_language_tag():
    assert normalize_response('```\n{"a": 1}\n```') == {"a": 1}


def test_uppercase_language_tag():
    assert normalize_response('```JSON\n{"a": 1}\n```') == {"a": 1}


def test_surrounding_whitespace_is_stripped():
    assert clean_model_text('  \n {"a": 1} \n\t') == '{"a": 1}'


def test_bom_after_leading_whitespace_is_stripped():
    assert normalize_response('\n\ufeff{"a": 1}') == {"a": 1}


def test_invalid_json_raises_with_raw_text():
    raw = "Sure! Here is your evaluation: score 80"

    with pytest.raises(MalformedResponse) as exc_info:
        normalize_response(raw)

    assert exc_info.value.raw_text == raw


def test_wrong_shape_passes_through_when_not_strict():
    assert normalize_response('{"unexpected": true}') == {"unexpected": True}


def test_strict_mode_accepts_evaluation_shape(sample_evaluation):
    result = normalize_response(json.dumps(sample_evaluation), strict=True)

    assert result["atsScore"] == 78
    assert result["skills"]["missing"] == ["Kubernetes"]
    assert result["analysis"]["skillsSection"] == "Good coverage of core skills."


def test_strict_mode_rejects_wrong_shape():
    with pytest.raises(MalformedResponse):
        normalize_response('{"unexpected": true}', strict=True)


def test_strict_mode_rejects_out_of_range_score(sample_evaluation):
    sample_evaluation["atsScore"] = 140

    with pytest.raises(MalformedResponse):
        normalize_response(json.dumps(sample_evaluation), strict=True)


def test_backticks_inside_unfenced_json_are_kept():
    raw = '{"tip": "Use ```json fences for snippets"}'

    assert normalize_response(raw) == {"tip": "Use ```json fences for snippets"}
