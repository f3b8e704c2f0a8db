"""Conversion between chat-completion messages and OpenResponses objects."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from openresp.content import OutputTextContent
from openresp.encoding import to_jsonable
from openresp.enums import MessageRole, MessageStatus, ResponseStatus
from openresp.streaming import (
    ResponseOutputItemDoneEvent,
    ResponseOutputTextDeltaEvent,
    ResponseOutputTextDoneEvent,
    StreamingEvent,
)
from openresp.types import (
    CreateRequest,
    FunctionTool,
    InputTokensDetails,
    MessageItem,
    OutputTokensDetails,
    Response,
    Usage,
)

# Text given to a message item whose content is absent or not text-like.
_MISSING_CONTENT = "<nil>"


class ConversionError(ValueError):
    """Raised when a request cannot be converted."""


@dataclass
class ChatMessage:
    """A chat-completion message."""

    role: str = ""
    content: str = ""


@dataclass
class ChatDelta:
    """An incremental message fragment in a streamed chat completion."""

    role: str = ""
    content: str = ""


@dataclass
class ChatFunction:
    """A function definition offered to a chat model."""

    name: str
    description: str = ""
    parameters: dict[str, Any] | None = None


@dataclass
class ChatTool:
    """A tool offered to a chat model."""

    function: ChatFunction
    type: str = "function"


@dataclass
class ChatCompletionRequest:
    """A chat-completion request."""

    model: str = ""
    messages: list[ChatMessage] = field(default_factory=list)
    stream: bool = False
    temperature: float | None = None
    top_p: float | None = None
    max_tokens: int | None = None
    presence_penalty: float | None = None
    frequency_penalty: float | None = None
    tools: list[ChatTool] = field(default_factory=list)


@dataclass
class ChatChoice:
    """One choice of a chat completion."""

    index: int = 0
    message: ChatMessage = field(default_factory=ChatMessage)
    delta: ChatDelta | None = None
    finish_reason: str = ""


@dataclass
class ChatUsage:
    """Token usage of a chat completion."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass
class ChatCompletionResponse:
    """A chat-completion response."""

    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: list[ChatChoice] = field(default_factory=list)
    usage: ChatUsage = field(default_factory=ChatUsage)


def _text_or_empty(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _extract_content_text(parts: list[Any]) -> str:
    texts = []
    for part in parts:
        if not isinstance(part, Mapping) or part.get("type") != "input_text":
            continue
        if "text" in part:
            texts.append(_text_or_empty(part["text"]))
    return "".join(texts)


def _item_to_message(item: Any) -> ChatMessage | None:
    if not isinstance(item, Mapping):
        return None
    item_type = _text_or_empty(item.get("type"))
    role = _text_or_empty(item.get("role"))

    content = _MISSING_CONTENT
    if "content" in item:
        raw = item["content"]
        if raw is None:
            content = ""
        elif isinstance(raw, str):
            content = raw
        elif isinstance(raw, list):
            content = _extract_content_text(raw)

    if item_type == "message" and role:
        return ChatMessage(role=role, content=content)
    return None


def _collect_messages(items: list[Any]) -> list[ChatMessage]:
    messages = [message for item in items if (message := _item_to_message(item)) is not None]
    if not messages:
        raise ConversionError("no valid messages found in input")
    return messages


def _checked_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{key}: expected string")
    return value


def _checked_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeError(f"{what}: expected object")
    return value


def _choice_from_dict(data: Any) -> ChatChoice:
    data = _checked_mapping(data, "choice")
    index = data.get("index", 0)
    if index is None:
        index = 0
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError("index: expected integer")

    message = ChatMessage()
    raw_message = data.get("message")
    if raw_message is not None:
        raw_message = _checked_mapping(raw_message, "message")
        message = ChatMessage(_checked_str(raw_message, "role"), _checked_str(raw_message, "content"))

    delta = None
    raw_delta = data.get("delta")
    if raw_delta is not None:
        raw_delta = _checked_mapping(raw_delta, "delta")
        delta = ChatDelta(_checked_str(raw_delta, "role"), _checked_str(raw_delta, "content"))

    return ChatChoice(
        index=index,
        message=message,
        delta=delta,
        finish_reason=_checked_str(data, "finish_reason"),
    )


def _parse_stream_choices(chunk: bytes | str) -> list[ChatChoice]:
    payload = json.loads(chunk)
    if payload is None:
        return []
    payload = _checked_mapping(payload, "chunk")
    raw_choices = payload.get("choices")
    if raw_choices is None:
        return []
    if not isinstance(raw_choices, list):
        raise TypeError("choices: expected array")
    return [_choice_from_dict(choice) for choice in raw_choices]


def _accumulated_text(choice: ChatChoice) -> str:
    if choice.message.content:
        return choice.message.content
    if choice.delta is not None and choice.delta.content:
        return choice.delta.content
    return ""


def _as_role(role: str) -> MessageRole | str:
    try:
        return MessageRole(role)
    except ValueError:
        return role


class Converter:
    """Converts between chat-completion and OpenResponses formats."""

    def request_to_chat_completion(self, request: CreateRequest) -> ChatCompletionRequest:
        """Build a chat-completion request from an OpenResponses request."""
        try:
            messages = self.input_to_messages(request.input)
        except ConversionError as exc:
            raise ConversionError(f"convert input: {exc}") from exc

        return ChatCompletionRequest(
            model=request.model,
            messages=messages,
            stream=bool(request.stream),
            temperature=request.temperature,
            top_p=request.top_p,
            max_tokens=request.max_output_tokens,
            presence_penalty=request.presence_penalty,
            frequency_penalty=request.frequency_penalty,
            tools=self._tools_to_chat(request.tools),
        )

    def input_to_messages(self, input_value: Any) -> list[ChatMessage]:
        """Turn request input (text, a list of items or a JSON array) into chat messages."""
        if isinstance(input_value, str):
            return [ChatMessage(role="user", content=input_value)]

        if isinstance(input_value, (list, tuple)):
            items = []
            for item in input_value:
                try:
                    items.append(to_jsonable(item))
                except (TypeError, ValueError):
                    continue
            return _collect_messages(items)

        if isinstance(input_value, (bytes, bytearray)):
            try:
                items = json.loads(bytes(input_value))
            except ValueError as exc:
                raise ConversionError(f"parse input array: {exc}") from exc
            if not isinstance(items, list):
                raise ConversionError("parse input array: expected a JSON array")
            return _collect_messages(items)

        raise ConversionError("invalid input format")

    @staticmethod
    def _tools_to_chat(tools: list[Any]) -> list[ChatTool]:
        return [
            ChatTool(
                function=ChatFunction(
                    name=tool.name,
                    description=tool.description,
                    parameters=tool.parameters,
                )
            )
            for tool in tools or []
            if isinstance(tool, FunctionTool)
        ]

    def chat_completion_to_response(
        self,
        chat_response: ChatCompletionResponse,
        response_id: str,
        tools: list[Any] | None = None,
    ) -> Response:
        """Build a completed response from a chat completion; tools come from the request."""
        output = [
            MessageItem(
                id=f"msg_{response_id}_{choice.index}",
                status=MessageStatus.COMPLETED,
                role=_as_role(choice.message.role),
                content=[OutputTextContent(text=choice.message.content)],
            )
            for choice in chat_response.choices
            if choice.message.role
        ]

        return Response(
            id=response_id,
            model=chat_response.model,
            status=ResponseStatus.COMPLETED,
            created_at=chat_response.created,
            completed_at=chat_response.created,
            output=output,
            tools=list(tools) if tools else [],
            usage=Usage(
                input_tokens=chat_response.usage.prompt_tokens,
                output_tokens=chat_response.usage.completion_tokens,
                total_tokens=chat_response.usage.total_tokens,
                input_tokens_details=InputTokensDetails(cached_tokens=0),
                output_tokens_details=OutputTokensDetails(reasoning_tokens=0),
            ),
        )

    def streaming_chunk_to_events(
        self,
        chunk: bytes | str,
        sequence: Iterator[int],
        item_id: str,
        output_index: int,
    ) -> list[StreamingEvent]:
        """Turn one streamed chat-completion chunk into streaming events.

        Each event takes its sequence number from ``sequence``. A chunk that
        cannot be parsed yields no events.
        """
        try:
            choices = _parse_stream_choices(chunk)
        except (TypeError, ValueError):
            return []

        events: list[StreamingEvent] = []
        for choice in choices:
            if choice.delta is not None and choice.delta.content:
                events.append(
                    ResponseOutputTextDeltaEvent(
                        sequence_number=next(sequence),
                        item_id=item_id,
                        output_index=output_index,
                        content_index=0,
                        delta=choice.delta.content,
                    )
                )

            if choice.finish_reason:
                full_text = _accumulated_text(choice)
                events.append(
                    ResponseOutputTextDoneEvent(
                        sequence_number=next(sequence),
                        item_id=item_id,
                        output_index=output_index,
                        content_index=0,
                        text=full_text,
                    )
                )
                item = MessageItem(
                    id=item_id,
                    status=MessageStatus.COMPLETED,
                    role=MessageRole.ASSISTANT,
                    content=[OutputTextContent(text=full_text)],
                )
                events.append(
                    ResponseOutputItemDoneEvent(
                        sequence_number=next(sequence),
                        output_index=output_index,
                        item=item,
                    )
                )
        return events

    def response_to_chat_completion(self, response: Response | None) -> ChatCompletionResponse | None:
        """Build a chat completion from a response; None when it has no message output."""
        if response is None or not response.output:
            return None

        choices = []
        for index, item in enumerate(response.output):
            if not isinstance(item, MessageItem) or not item.role:
                continue
            content = "".join(part.text for part in item.content if part.type == "output_text")
            finish_reason = "length" if item.status == MessageStatus.INCOMPLETE else "stop"
            choices.append(
                ChatChoice(
                    index=index,
                    message=ChatMessage(role=str(item.role), content=content),
                    finish_reason=finish_reason,
                )
            )

        if not choices:
            return None

        usage = ChatUsage()
        if response.usage is not None:
            usage = ChatUsage(
                prompt_tokens=response.usage.input_tokens,
                completion_tokens=response.usage.output_tokens,
                total_tokens=response.usage.total_tokens,
            )

        return ChatCompletionResponse(
            id=response.id,
            object="chat.completion",
            created=response.created_at,
            model=response.model,
            choices=choices,
            usage=usage,
        )