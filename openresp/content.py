"""Content parts exchanged with the model."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from openresp.encoding import to_jsonable
from openresp.enums import ImageDetail


@dataclass
class InputTextContent:
    """A text input to the model."""

    text: str
    type: str = "input_text"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass
class InputImageContent:
    """An image input to the model."""

    image_url: str
    detail: ImageDetail | None = None
    type: str = "input_image"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type, "image_url": self.image_url}
        if self.detail:
            data["detail"] = ImageDetail(self.detail).value
        return data


@dataclass
class InputFileContent:
    """A file input to the model; ``file_data`` is base64 encoded."""

    filename: str = ""
    file_data: str = ""
    file_url: str = ""
    type: str = "input_file"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        for key in ("filename", "file_data", "file_url"):
            value = getattr(self, key)
            if value:
                data[key] = value
        return data


@dataclass
class InputVideoContent:
    """A video input to the model."""

    video_url: str
    type: str = "input_video"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "video_url": self.video_url}


@dataclass
class TopLogProb:
    """One of the most likely alternative tokens."""

    token: str
    logprob: float
    bytes: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"token": self.token, "logprob": self.logprob}
        if self.bytes:
            data["bytes"] = list(self.bytes)
        return data


@dataclass
class LogProb:
    """Log probability information for a token."""

    token: str
    logprob: float
    bytes: list[int] = field(default_factory=list)
    top_logprobs: list[TopLogProb] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"token": self.token, "logprob": self.logprob}
        if self.bytes:
            data["bytes"] = list(self.bytes)
        if self.top_logprobs:
            data["top_logprobs"] = [top.to_dict() for top in self.top_logprobs]
        return data


@dataclass
class UrlCitation:
    """A URL citation annotation on output text."""

    url: str
    start_index: int
    end_index: int
    title: str
    type: str = "url_citation"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "url": self.url,
            "start_index": self.start_index,
            "end_index": self.end_index,
            "title": self.title,
        }


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"{what} must be an object, got {type(data).__name__}")
    return data


def _top_logprob_from_dict(data: Any) -> TopLogProb:
    data = _require_mapping(data, "top logprob")
    return TopLogProb(
        token=data.get("token", ""),
        logprob=float(data.get("logprob", 0.0)),
        bytes=list(data.get("bytes") or []),
    )


def _logprob_from_dict(data: Any) -> LogProb:
    data = _require_mapping(data, "logprob")
    return LogProb(
        token=data.get("token", ""),
        logprob=float(data.get("logprob", 0.0)),
        bytes=list(data.get("bytes") or []),
        top_logprobs=[_top_logprob_from_dict(top) for top in data.get("top_logprobs") or []],
    )


def _annotation_from_dict(data: Any) -> Any:
    if isinstance(data, Mapping) and data.get("type") == "url_citation":
        return UrlCitation(
            url=data.get("url", ""),
            start_index=int(data.get("start_index", 0)),
            end_index=int(data.get("end_index", 0)),
            title=data.get("title", ""),
        )
    return data


@dataclass
class OutputTextContent:
    """Text output from the model; annotations and logprobs are always present."""

    text: str
    annotations: list[Any] = field(default_factory=list)
    logprobs: list[LogProb] = field(default_factory=list)
    type: str = "output_text"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "text": self.text,
            "annotations": [to_jsonable(item) for item in self.annotations],
            "logprobs": [item.to_dict() for item in self.logprobs],
        }

    @classmethod
    def from_dict(cls, data: Any) -> OutputTextContent:
        data = _require_mapping(data, "output text content")
        return cls(
            text=data.get("text", ""),
            annotations=[_annotation_from_dict(item) for item in data.get("annotations") or []],
            logprobs=[_logprob_from_dict(item) for item in data.get("logprobs") or []],
            type=data.get("type", ""),
        )


@dataclass
class RefusalContent:
    """A refusal from the model."""

    refusal: str
    type: str = "refusal"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "refusal": self.refusal}


@dataclass
class SummaryTextContent:
    """A summary of reasoning."""

    text: str
    type: str = "summary_text"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "text": self.text}