import pytest

from backend.utils.parsing import ModelOutputError, extract_json, leading_number

PAYLOAD = '{"name": "Oatmeal", "calories": 150, "ingredients": ["oats", "milk"]}'


@pytest.mark.parametrize("text", [
    PAYLOAD,
    f"```json\n{PAYLOAD}\n```",
    f"```\n{PAYLOAD}\n```",
    f"Here is the analysis:\n```json\n{PAYLOAD}\n```\nEnjoy!",
])
def test_fenced_and_bare_json_parse_the_same(text):
    assert extract_json(text) == {"name": "Oatmeal", "calories": 150, "ingredients": ["oats", "milk"]}


def test_top_level_array():
    assert extract_json('```json\n[1, 2, 3]\n```') == [1, 2, 3]


@pytest.mark.parametrize("text", ["", "   ", "I could not identify any food in this image.", "```json\n{oops}\n```"])
def test_unparseable_output_raises(text):
    with pytest.raises(ModelOutputError):
        extract_json(text)


def test_non_string_raises():
    with pytest.raises(ModelOutputError):
        extract_json(None)


@pytest.mark.parametrize("value,expected", [
    ("8g", 8.0),
    ("3.2 mg", 3.2),
    ("1,5g", 1.5),
    (12, 12.0),
    (2.5, 2.5),
    ("about 4g", None),
    (True, None),
    (None, None),
])
def test_leading_number(value, expected):
    assert leading_number(value) == expected
