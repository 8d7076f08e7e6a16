"""Tests for judge reply parsing."""

import pytest

from ui_component_eval.models import NO_REASONING, EvalResult
from ui_component_eval.verdict import parse_verdict


def test_yes_with_reasoning():
    verdict = parse_verdict("ANSWER: YES\nREASONING: because it works")
    assert verdict.passed is True
    assert verdict.reasoning == "because it works"
    assert verdict.answer == "YES"


def test_missing_answer_and_reasoning_fails_closed():
    verdict = parse_verdict("The component looks fine to me.")
    assert verdict.passed is False
    assert verdict.reasoning == NO_REASONING
    assert verdict.reasoning == "No reasoning provided"


@pytest.mark.parametrize(
    ("reply", "expected"),
    [
        ("answer: no", False),
        ("ANSWER: NO", False),
        ("Answer: Yes", True),
        ("ANSWER:yes", True),
        ("ANSWER:\n  YES", True),
    ],
)
def test_answer_is_case_insensitive(reply, expected):
    assert parse_verdict(reply).passed is expected


def test_reasoning_spans_to_end_of_text():
    reply = "ANSWER: NO\nREASONING: first line\nsecond line\n\n  "
    verdict = parse_verdict(reply)
    assert verdict.passed is False
    assert verdict.reasoning == "first line\nsecond line"


def test_reasoning_without_answer_still_fails():
    verdict = parse_verdict("REASONING: uses react-window")
    assert verdict.passed is False
    assert verdict.reasoning == "uses react-window"


def test_answer_without_reasoning_uses_sentinel():
    verdict = parse_verdict("ANSWER: YES")
    assert verdict.passed is True
    assert verdict.reasoning == NO_REASONING


def test_blank_reasoning_uses_sentinel():
    verdict = parse_verdict("ANSWER: YES\nREASONING:   \n")
    assert verdict.reasoning == NO_REASONING


def test_unrecognized_answer_token_fails():
    assert parse_verdict("ANSWER: MAYBE\nREASONING: unsure").passed is False


def test_first_answer_wins():
    verdict = parse_verdict("ANSWER: NO\nREASONING: missing delay\nANSWER: YES")
    assert verdict.passed is False


def test_empty_reply():
    verdict = parse_verdict("")
    assert verdict.passed is False
    assert verdict.reasoning == NO_REASONING


@pytest.mark.parametrize("reply, label", [("ANSWER: YES", "YES"), ("ANSWER: NO", "NO"), ("", "NO")])
def test_result_answer_matches_verdict(reply, label):
    verdict = parse_verdict(reply)
    result = EvalResult.from_verdict("code", "q", reply, verdict)
    assert verdict.answer == label
    assert result.answer == label
