import json

import pytest

from openresp.content import (
    InputFileContent,
    InputImageContent,
    InputTextContent,
    InputVideoContent,
    LogProb,
    OutputTextContent,
    RefusalContent,
    SummaryTextContent,
    TopLogProb,
    UrlCitation,
)
from openresp.encoding import dumps
from openresp.enums import ImageDetail


def test_input_text_to_dict():
    assert InputTextContent("hi").to_dict() == {"type": "input_text", "text": "hi"}


def test_input_image_detail_omitted_when_unset():
    assert "detail" not in InputImageContent("img").to_dict()
    data = InputImageContent("img", ImageDetail.LOW).to_dict()
    assert data["detail"] == "low"
    assert data["type"] == "input_image"


def test_input_file_omits_empty_fields():
    assert InputFileContent().to_dict() == {"type": "input_file"}
    data = InputFileContent(filename="a.txt", file_data="QQ==").to_dict()
    assert data == {"type": "input_file", "filename": "a.txt", "file_data": "QQ=="}


def test_input_video_to_dict():
    assert InputVideoContent("v").to_dict() == {"type": "input_video", "video_url": "v"}


def test_logprob_omits_empty_lists():
    assert set(LogProb("a", -0.5).to_dict()) == {"token", "logprob"}
    assert set(TopLogProb("a", -0.5).to_dict()) == {"token", "logprob"}


def test_logprob_nested_top_logprobs():
    lp = LogProb("a", -0.5, bytes=[97], top_logprobs=[TopLogProb("b", -1.5, bytes=[98])])
    data = lp.to_dict()
    assert data["bytes"] == [97]
    assert data["top_logprobs"] == [{"token": "b", "logprob": -1.5, "bytes": [98]}]


def test_url_citation_key_order():
    data = UrlCitation("u", 1, 4, "t").to_dict()
    assert list(data) == ["type", "url", "start_index", "end_index", "title"]
    assert data["type"] == "url_citation"


def test_output_text_requires_empty_arrays():
    text = dumps(OutputTextContent("Hello, world!"))
    assert '"annotations":[]' in text
    assert '"logprobs":[]' in text
    assert '"type":"output_text"' in text


def test_output_text_round_trip():
    original = OutputTextContent(
        "Hello",
        annotations=[UrlCitation("u", 0, 5, "t")],
        logprobs=[LogProb("He", -0.25, top_logprobs=[TopLogProb("Ha", -2.0)])],
    )
    restored = OutputTextContent.from_dict(json.loads(dumps(original)))
    assert restored == original


def test_output_text_from_dict_null_lists():
    content = OutputTextContent.from_dict(
        {"type": "output_text", "text": "x", "annotations": None, "logprobs": None}
    )
    assert content.annotations == []
    assert content.logprobs == []
    assert content.text == "x"


def test_output_text_unknown_annotation_kept():
    raw = {"type": "other", "value": 1}
    content = OutputTextContent.from_dict({"type": "output_text", "text": "", "annotations": [raw]})
    assert content.annotations == [raw]


def test_output_text_from_dict_rejects_non_object():
    with pytest.raises(TypeError):
        OutputTextContent.from_dict(["not", "an", "object"])


def test_refusal_and_summary():
    assert RefusalContent("no").to_dict() == {"type": "refusal", "refusal": "no"}
    assert SummaryTextContent("s").to_dict() == {"type": "summary_text", "text": "s"}