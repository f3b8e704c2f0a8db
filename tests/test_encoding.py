import dataclasses
import json
import math

import pytest

from openresp.encoding import dumps, to_jsonable
from openresp.enums import MessageRole, Truncation


@dataclasses.dataclass
class _Point:
    x: int
    y: float


class _WithToDict:
    def to_dict(self):
        return {"type": "text"}


def test_integral_floats_render_as_integers():
    text = dumps({"top_p": 1.0, "presence_penalty": 0.0})
    assert '"top_p":1' in text
    assert '"presence_penalty":0' in text
    assert "1.0" not in text


def test_non_integral_float_preserved():
    assert json.loads(dumps({"temperature": 0.7})) == {"temperature": 0.7}


def test_output_is_compact():
    text = dumps({"a": [1, 2], "b": None})
    assert " " not in text
    assert json.loads(text) == {"a": [1, 2], "b": None}


def test_none_becomes_null():
    assert '"error":null' in dumps({"error": None})


def test_enum_values_are_encoded():
    assert to_jsonable(Truncation.AUTO) == "auto"
    assert dumps({"role": MessageRole.ASSISTANT}) == '{"role":"assistant"}'


def test_enum_keys_are_encoded():
    assert to_jsonable({MessageRole.USER: 1}) == {"user": 1}


def test_to_dict_is_used():
    assert dumps({"format": _WithToDict()}) == '{"format":{"type":"text"}}'


def test_dataclass_without_to_dict():
    assert to_jsonable(_Point(3, 2.5)) == {"x": 3, "y": 2.5}


def test_tuple_becomes_list():
    assert to_jsonable((1, "a")) == [1, "a"]


def test_html_characters_are_escaped():
    text = dumps({"t": "<b>&"})
    assert "<" not in text and ">" not in text and "&" not in text
    assert json.loads(text) == {"t": "<b>&"}


def test_non_ascii_kept_and_round_trips():
    value = {"text": "héllo ✓"}
    assert json.loads(dumps(value)) == value


def test_bytes_round_trip_through_base64():
    import base64

    raw = b"\x00\x01abc"
    assert base64.b64decode(to_jsonable(raw)) == raw


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_float_rejected(bad):
    with pytest.raises(ValueError):
        dumps({"x": bad})


def test_unsupported_type_rejected():
    with pytest.raises(TypeError):
        to_jsonable(object())


def test_non_string_keys_rejected():
    with pytest.raises(TypeError):
        to_jsonable({1: "a"})