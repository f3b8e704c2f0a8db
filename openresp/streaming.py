"""Streaming events emitted while a response is being generated."""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

from openresp.content import InputTextContent, LogProb, SummaryTextContent
from openresp.encoding import to_jsonable
from openresp.types import ErrorDetail, IncompleteDetails, Response


def _is_empty(value: Any) -> bool:
    if value is None or value == "":
        return True
    if isinstance(value, int) and not isinstance(value, bool):
        return value == 0
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


@dataclass
class StreamChunk:
    """A chunk of streaming data received from a provider."""

    data: bytes = b""
    done: bool = False


@dataclass
class StreamingEvent:
    """Base of every streaming event: a type and a sequence number."""

    type: str = ""
    sequence_number: int = 0

    _omit_empty: ClassVar[frozenset[str]] = frozenset()
    _json_names: ClassVar[Mapping[str, str]] = {}

    def to_dict(self) -> dict[str, Any]:
        """Return the event as JSON-ready data, type and sequence number first."""
        data: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if item.name in self._omit_empty and _is_empty(value):
                continue
            data[self._json_names.get(item.name, item.name)] = to_jsonable(value)
        return data


@dataclass
class ResponseCreatedEvent(StreamingEvent):
    """Emitted when a response is created."""

    type: str = field(default="response.created", init=False)
    response: Response | None = None


@dataclass
class ResponseQueuedEvent(StreamingEvent):
    """Emitted when a response is queued."""

    type: str = field(default="response.queued", init=False)
    response: Response | None = None


@dataclass
class ResponseInProgressEvent(StreamingEvent):
    """Emitted while a response is in progress."""

    type: str = field(default="response.in_progress", init=False)
    response: Response | None = None


@dataclass
class ResponseCompletedEvent(StreamingEvent):
    """Emitted when a response completes successfully."""

    type: str = field(default="response.completed", init=False)
    response: Response | None = None

    _omit_empty: ClassVar[frozenset[str]] = frozenset({"response"})


@dataclass
class ResponseFailedEvent(StreamingEvent):
    """Emitted when a response fails."""

    type: str = field(default="response.failed", init=False)
    response_id: str = ""
    error: ErrorDetail | None = None

    _omit_empty: ClassVar[frozenset[str]] = frozenset({"response_id", "error"})
    _json_names: ClassVar[Mapping[str, str]] = {"response_id": "id"}


@dataclass
class ResponseIncompleteEvent(StreamingEvent):
    """Emitted when a response ends incomplete."""

    type: str = field(default="response.incomplete", init=False)
    response: Response | None = None
    incomplete_details: IncompleteDetails | None = None

    _omit_empty: ClassVar[frozenset[str]] = frozenset({"response", "incomplete_details"})


@dataclass
class ResponseOutputItemAddedEvent(StreamingEvent):
    """Emitted when a new output item is added."""

    type: str = field(default="response.output_item.added", init=False)
    output_index: int = 0
    item: Any = None


@dataclass
class ResponseOutputItemDoneEvent(StreamingEvent):
    """Emitted when an output item is done."""

    type: str = field(default="response.output_item.done", init=False)
    output_index: int = 0
    item: Any = None


@dataclass
class ResponseContentPartAddedEvent(StreamingEvent):
    """Emitted when a content part is added."""

    type: str = field(default="response.content_part.added", init=False)
    item_id: str = ""
    output_index: int = 0
    content_index: int = 0
    part: Any = None


@dataclass
class ResponseContentPartDoneEvent(StreamingEvent):
    """Emitted when a content part is done."""

    type: str = field(default="response.content_part.done", init=False)
    item_id: str = ""
    output_index: int = 0
    content_index: int = 0
    part: Any = None


@dataclass
class ResponseOutputTextDeltaEvent(StreamingEvent):
    """Emitted for each piece of output text."""

    type: str = field(default="response.output_text.delta", init=False)
    item_id: str = ""
    output_index: int = 0
    content_index: int = 0
    delta: str = ""
    logprobs: list[LogProb] = field(default_factory=list)


@dataclass
class ResponseOutputTextDoneEvent(StreamingEvent):
    """Emitted when output text is complete."""

    type: str = field(default="response.output_text.done", init=False)
    item_id: str = ""
    output_index: int = 0
    content_index: int = 0
    text: str = ""
    logprobs: list[LogProb] = field(default_factory=list)


@dataclass
class ResponseRefusalDeltaEvent(StreamingEvent):
    """Emitted for each piece of a refusal."""

    type: str = field(default="response.refusal.delta", init=False)
    item_id: str = ""
    output_index: int = 0
    content_index: int = 0
    delta: str = ""


@dataclass
class ResponseRefusalDoneEvent(StreamingEvent):
    """Emitted when a refusal is complete."""

    type: str = field(default="response.refusal.done", init=False)
    item_id: str = ""
    output_index: int = 0
    content_index: int = 0
    refusal: str = ""


@dataclass
class ResponseReasoningDeltaEvent(StreamingEvent):
    """Emitted for each piece of reasoning."""

    type: str = field(default="response.reasoning.delta", init=False)
    item_id: str = ""
    output_index: int = 0
    content_index: int = 0
    delta: str = ""


@dataclass
class ResponseReasoningDoneEvent(StreamingEvent):
    """Emitted when reasoning is complete."""

    type: str = field(default="response.reasoning.done", init=False)
    item_id: str = ""
    output_index: int = 0
    content_index: int = 0
    content: list[InputTextContent] = field(default_factory=list)

    _omit_empty: ClassVar[frozenset[str]] = frozenset({"content"})


@dataclass
class ResponseReasoningSummaryDeltaEvent(StreamingEvent):
    """Emitted for each piece of a reasoning summary."""

    type: str = field(default="response.reasoning_summary_text.delta", init=False)
    item_id: str = ""
    output_index: int = 0
    content_index: int = 0
    delta: str = ""


@dataclass
class ResponseReasoningSummaryDoneEvent(StreamingEvent):
    """Emitted when a reasoning summary is complete."""

    type: str = field(default="response.reasoning_summary_text.done", init=False)
    item_id: str = ""
    output_index: int = 0
    content_index: int = 0
    content: list[SummaryTextContent] = field(default_factory=list)

    _omit_empty: ClassVar[frozenset[str]] = frozenset({"content"})


@dataclass
class ResponseOutputTextAnnotationAddedEvent(StreamingEvent):
    """Emitted when an annotation is added to output text."""

    type: str = field(default="response.output_text.annotation.added", init=False)
    item_id: str = ""
    output_index: int = 0
    content_index: int = 0
    annotation: Any = None


@dataclass
class ResponseFunctionCallArgumentsDeltaEvent(StreamingEvent):
    """Emitted for each piece of function call arguments."""

    type: str = field(default="response.function_call_arguments.delta", init=False)
    item_id: str = ""
    output_index: int = 0
    delta: str = ""


@dataclass
class ResponseFunctionCallArgumentsDoneEvent(StreamingEvent):
    """Emitted when function call arguments are complete."""

    type: str = field(default="response.function_call_arguments.done", init=False)
    item_id: str = ""
    output_index: int = 0
    arguments: str = ""


@dataclass
class ResponseFileSearchCallInProgressEvent(StreamingEvent):
    """Emitted when a file search starts."""

    type: str = field(default="response.file_search_call.in_progress", init=False)
    item_id: str = ""
    output_index: int = 0


@dataclass
class ResponseFileSearchCallSearchingEvent(StreamingEvent):
    """Emitted while a file search is searching."""

    type: str = field(default="response.file_search_call.searching", init=False)
    item_id: str = ""
    output_index: int = 0
    updated_at: int = 0

    _omit_empty: ClassVar[frozenset[str]] = frozenset({"updated_at"})


@dataclass
class ResponseFileSearchCallCompletedEvent(StreamingEvent):
    """Emitted when a file search completes."""

    type: str = field(default="response.file_search_call.completed", init=False)
    item_id: str = ""
    output_index: int = 0
    result: dict[str, Any] | None = None

    _omit_empty: ClassVar[frozenset[str]] = frozenset({"result"})


@dataclass
class ResponseWebSearchCallInProgressEvent(StreamingEvent):
    """Emitted when a web search starts."""

    type: str = field(default="response.web_search_call.in_progress", init=False)
    item_id: str = ""
    output_index: int = 0


@dataclass
class ResponseWebSearchCallSearchingEvent(StreamingEvent):
    """Emitted while a web search is searching."""

    type: str = field(default="response.web_search_call.searching", init=False)
    item_id: str = ""
    output_index: int = 0
    updated_at: int = 0

    _omit_empty: ClassVar[frozenset[str]] = frozenset({"updated_at"})


@dataclass
class ResponseWebSearchCallCompletedEvent(StreamingEvent):
    """Emitted when a web search completes."""

    type: str = field(default="response.web_search_call.completed", init=False)
    item_id: str = ""
    output_index: int = 0
    result: dict[str, Any] | None = None

    _omit_empty: ClassVar[frozenset[str]] = frozenset({"result"})


@dataclass
class ErrorStreamingEvent(StreamingEvent):
    """Emitted when an error occurs during streaming."""

    type: str = field(default="error", init=False)
    error: ErrorDetail | None = None