from __future__ import annotations

import pytest

from ventureai.llm.decoding import (
    NO_STRUCTURED_DATA,
    Decoded,
    JsonKind,
    decode_structured,
    find_balanced_span,
)

pytestmark = [pytest.mark.unit]


def test_decodes_object_wrapped_in_prose_and_fences() -> None:
    raw = 'Sure! Here it is:\n```json\n{"summary": "ok", "nextSteps": ["a"]}\n```\nAnything else?'

    assert decode_structured(raw) == Decoded({"summary": "ok", "nextSteps": ["a"]})


def test_brackets_inside_strings_do_not_end_the_span() -> None:
    raw = 'prefix {"text": "a } tricky ] value", "quote": "say \\"hi\\" {"} suffix }'

    result = decode_structured(raw, JsonKind.OBJECT)

    assert result == Decoded({"text": "a } tricky ] value", "quote": 'say "hi" {'})


def test_kind_restricts_search() -> None:
    raw = 'Note {"ignored": true} then ["Question 1?", "Question 2?"]'

    assert decode_structured(raw, JsonKind.ARRAY) == Decoded(["Question 1?", "Question 2?"])
    assert decode_structured(raw, JsonKind.OBJECT) == Decoded({"ignored": True})


def test_first_balanced_span_wins() -> None:
    assert decode_structured('[1, 2] and {"a": 1}') == Decoded([1, 2])


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        "no json here",
        '{"unterminated": [1, 2}',
        "{'single': 'quotes'}",
        '{"a": 1,}',
        None,
        42,
        {"already": "parsed"},
    ],
)
def test_undecodable_input_yields_sentinel(raw) -> None:
    assert decode_structured(raw) is NO_STRUCTURED_DATA


def test_sentinel_is_falsy_singleton() -> None:
    assert not NO_STRUCTURED_DATA
    assert repr(NO_STRUCTURED_DATA) == "NO_STRUCTURED_DATA"
    assert type(NO_STRUCTURED_DATA)() is NO_STRUCTURED_DATA


def test_find_balanced_span_handles_nesting() -> None:
    assert find_balanced_span('x {"a": {"b": [1, {"c": 2}]}} y') == '{"a": {"b": [1, {"c": 2}]}}'
    assert find_balanced_span("x [1, 2") is None
    assert find_balanced_span("no brackets") is None


def test_deeply_nested_input_does_not_raise() -> None:
    raw = "[" * 5000 + "]" * 5000

    result = decode_structured(raw)

    assert result is NO_STRUCTURED_DATA or isinstance(result, Decoded)
