"""Request, item and response objects of the OpenResponses protocol."""

from __future__ import annotations

import json
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from openresp.content import InputTextContent, OutputTextContent, SummaryTextContent
from openresp.encoding import dumps, to_jsonable
from openresp.enums import (
    FunctionCallStatus,
    Include,
    MessageRole,
    MessageStatus,
    ReasoningEffort,
    ReasoningSummary,
    ResponseStatus,
    ServiceTier,
    ToolChoiceMode,
    Truncation,
)


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"{what} must be an object, got {type(data).__name__}")
    return data


def _str_field(data: Mapping[str, Any], key: str, default: Any = "") -> Any:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise TypeError(f"{key}: expected string, got {type(value).__name__}")
    return value


def _int_field(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key}: expected integer, got {type(value).__name__}")
    return value


def _float_field(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{key}: expected number, got {type(value).__name__}")
    return float(value)


def _bool_field(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise TypeError(f"{key}: expected boolean, got {type(value).__name__}")
    return value


def _list_field(data: Mapping[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"{key}: expected array, got {type(value).__name__}")
    return value


def _mapping_field(data: Mapping[str, Any], key: str) -> Mapping[str, Any] | None:
    value = data.get(key)
    if value is None:
        return None
    return _require_mapping(value, key)


def _coerce(enum_cls: type[Enum], value: str) -> Any:
    """Return the enum member for a known value, or the plain string otherwise."""
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _enum_field(data: Mapping[str, Any], key: str, enum_cls: type[Enum], default: Any = None) -> Any:
    value = _str_field(data, key, None)
    if value is None:
        return default
    return _coerce(enum_cls, value)


def _load_json(text: str | bytes) -> Any:
    return json.loads(text)


@dataclass
class StreamOptions:
    """Options controlling streaming behaviour."""

    include_obfuscation: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.include_obfuscation is None:
            return {}
        return {"include_obfuscation": self.include_obfuscation}


@dataclass
class Reasoning:
    """Reasoning configuration."""

    effort: ReasoningEffort | str | None = None
    summary: ReasoningSummary | str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.effort:
            data["effort"] = to_jsonable(self.effort)
        if self.summary:
            data["summary"] = to_jsonable(self.summary)
        return data


def _reasoning_from_dict(data: Mapping[str, Any]) -> Reasoning:
    return Reasoning(
        effort=_enum_field(data, "effort", ReasoningEffort),
        summary=_enum_field(data, "summary", ReasoningSummary),
    )


@dataclass
class CreateRequest:
    """Request body for creating a response."""

    model: str = ""
    input: Any = None
    previous_response_id: str = ""
    include: list[Include | str] = field(default_factory=list)
    tools: list[Any] = field(default_factory=list)
    tool_choice: Any = None
    metadata: dict[str, str] | None = None
    text: dict[str, Any] | None = None
    temperature: float | None = None
    top_p: float | None = None
    presence_penalty: float | None = None
    frequency_penalty: float | None = None
    parallel_tool_calls: bool | None = None
    stream: bool | None = None
    stream_options: StreamOptions | None = None
    background: bool | None = None
    max_output_tokens: int | None = None
    max_tool_calls: int | None = None
    reasoning: Reasoning | None = None
    safety_identifier: str = ""
    prompt_cache_key: str = ""
    truncation: Truncation | str | None = None
    instructions: str = ""
    store: bool | None = None
    service_tier: ServiceTier | str | None = None
    top_logprobs: int | None = None

    @classmethod
    def from_dict(cls, data: Any) -> CreateRequest:
        """Build a request from decoded JSON; raises TypeError on mistyped fields."""
        data = _require_mapping(data, "request")

        include = []
        for value in _list_field(data, "include"):
            if not isinstance(value, str):
                raise TypeError(f"include: expected string, got {type(value).__name__}")
            include.append(_coerce(Include, value))

        metadata = None
        raw_metadata = _mapping_field(data, "metadata")
        if raw_metadata is not None:
            metadata = {}
            for key, value in raw_metadata.items():
                if not isinstance(value, str):
                    raise TypeError(f"metadata.{key}: expected string, got {type(value).__name__}")
                metadata[key] = value

        raw_text = _mapping_field(data, "text")
        raw_stream_options = _mapping_field(data, "stream_options")
        raw_reasoning = _mapping_field(data, "reasoning")

        return cls(
            model=_str_field(data, "model"),
            input=data.get("input"),
            previous_response_id=_str_field(data, "previous_response_id"),
            include=include,
            tools=list(_list_field(data, "tools")),
            tool_choice=data.get("tool_choice"),
            metadata=metadata,
            text=dict(raw_text) if raw_text is not None else None,
            temperature=_float_field(data, "temperature"),
            top_p=_float_field(data, "top_p"),
            presence_penalty=_float_field(data, "presence_penalty"),
            frequency_penalty=_float_field(data, "frequency_penalty"),
            parallel_tool_calls=_bool_field(data, "parallel_tool_calls"),
            stream=_bool_field(data, "stream"),
            stream_options=(
                StreamOptions(_bool_field(raw_stream_options, "include_obfuscation"))
                if raw_stream_options is not None
                else None
            ),
            background=_bool_field(data, "background"),
            max_output_tokens=_int_field(data, "max_output_tokens"),
            max_tool_calls=_int_field(data, "max_tool_calls"),
            reasoning=_reasoning_from_dict(raw_reasoning) if raw_reasoning is not None else None,
            safety_identifier=_str_field(data, "safety_identifier"),
            prompt_cache_key=_str_field(data, "prompt_cache_key"),
            truncation=_enum_field(data, "truncation", Truncation),
            instructions=_str_field(data, "instructions"),
            store=_bool_field(data, "store"),
            service_tier=_enum_field(data, "service_tier", ServiceTier),
            top_logprobs=_int_field(data, "top_logprobs"),
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> CreateRequest:
        """Parse a request from JSON text; raises ValueError on malformed JSON."""
        return cls.from_dict(_load_json(text))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"model": self.model, "input": to_jsonable(self.input)}
        optional = {
            "previous_response_id": self.previous_response_id or None,
            "include": list(self.include) or None,
            "tools": list(self.tools) or None,
            "tool_choice": self.tool_choice,
            "metadata": self.metadata,
            "text": self.text,
            "temperature": self.temperature,
            "top_p": self.top_p,
            "presence_penalty": self.presence_penalty,
            "frequency_penalty": self.frequency_penalty,
            "parallel_tool_calls": self.parallel_tool_calls,
            "stream": self.stream,
            "stream_options": self.stream_options,
            "background": self.background,
            "max_output_tokens": self.max_output_tokens,
            "max_tool_calls": self.max_tool_calls,
            "reasoning": self.reasoning,
            "safety_identifier": self.safety_identifier or None,
            "prompt_cache_key": self.prompt_cache_key or None,
            "truncation": self.truncation or None,
            "instructions": self.instructions or None,
            "store": self.store,
            "service_tier": self.service_tier or None,
            "top_logprobs": self.top_logprobs,
        }
        data.update({key: to_jsonable(value) for key, value in optional.items() if value is not None})
        return data


@dataclass
class MessageItemParam:
    """An input message from a user, assistant, system or developer."""

    role: MessageRole | str
    content: Any = ""
    id: str = ""
    status: MessageStatus | str | None = None
    type: str = "message"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.id:
            data["id"] = self.id
        data["type"] = self.type
        data["role"] = to_jsonable(self.role)
        if self.role != MessageRole.ASSISTANT or self.content:
            data["content"] = to_jsonable(self.content)
        if self.status:
            data["status"] = to_jsonable(self.status)
        return data


@dataclass
class FunctionCallItemParam:
    """An input item recording a function call."""

    call_id: str
    name: str
    arguments: str
    id: str = ""
    status: FunctionCallStatus | str | None = None
    type: str = "function_call"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.id:
            data["id"] = self.id
        data.update(
            {"type": self.type, "call_id": self.call_id, "name": self.name, "arguments": self.arguments}
        )
        if self.status:
            data["status"] = to_jsonable(self.status)
        return data


@dataclass
class FunctionCallOutputItemParam:
    """An input item carrying the output of a function call."""

    call_id: str
    output: Any
    id: str = ""
    status: FunctionCallStatus | str | None = None
    type: str = "function_call_output"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.id:
            data["id"] = self.id
        data.update({"type": self.type, "call_id": self.call_id, "output": to_jsonable(self.output)})
        if self.status:
            data["status"] = to_jsonable(self.status)
        return data


@dataclass
class ReasoningItemParam:
    """An input item carrying earlier reasoning."""

    id: str = ""
    summary: list[SummaryTextContent] = field(default_factory=list)
    content: Any = None
    encrypted_content: str = ""
    type: str = "reasoning"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.id:
            data["id"] = self.id
        data["type"] = self.type
        if self.summary:
            data["summary"] = [item.to_dict() for item in self.summary]
        if self.content is not None:
            data["content"] = to_jsonable(self.content)
        if self.encrypted_content:
            data["encrypted_content"] = self.encrypted_content
        return data


@dataclass
class ItemReferenceParam:
    """A reference to an existing item."""

    id: str
    type: str = "item_reference"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "id": self.id}


@dataclass
class FunctionTool:
    """A function the model may call."""

    name: str
    description: str = ""
    parameters: dict[str, Any] | None = None
    strict: bool | None = None
    type: str = "function"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type, "name": self.name}
        if self.description:
            data["description"] = self.description
        if self.parameters:
            data["parameters"] = to_jsonable(self.parameters)
        if self.strict is not None:
            data["strict"] = self.strict
        return data


@dataclass
class ToolChoice:
    """A simple tool choice mode."""

    type: ToolChoiceMode | str

    def to_dict(self) -> dict[str, Any]:
        return {"type": to_jsonable(self.type)}


@dataclass
class SpecificFunction:
    """Selects one particular function to call."""

    name: str
    type: str = "function"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "name": self.name}


@dataclass
class AllowedTools:
    """Restricts which tools may be used."""

    tools: list[Any] = field(default_factory=list)
    mode: ToolChoiceMode | str | None = None
    type: str = "allowed_tools"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type, "tools": to_jsonable(self.tools)}
        if self.mode:
            data["mode"] = to_jsonable(self.mode)
        return data


@dataclass
class TextResponseFormat:
    """Plain text output format."""

    type: str = "text"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


@dataclass
class JsonObjectResponseFormat:
    """JSON object output format."""

    type: str = "json_object"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


@dataclass
class JsonSchemaResponseFormat:
    """Output format constrained by a JSON schema."""

    name: str
    schema: dict[str, Any] | None = None
    description: str = ""
    strict: bool | None = None
    type: str = "json_schema"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type, "name": self.name}
        if self.description:
            data["description"] = self.description
        data["schema"] = to_jsonable(self.schema)
        if self.strict is not None:
            data["strict"] = self.strict
        return data


def _text_format_from_dict(data: Any) -> Any:
    if not isinstance(data, Mapping):
        return data
    kind = data.get("type")
    if kind == "text":
        return TextResponseFormat()
    if kind == "json_object":
        return JsonObjectResponseFormat()
    if kind == "json_schema":
        schema = _mapping_field(data, "schema")
        return JsonSchemaResponseFormat(
            name=_str_field(data, "name"),
            schema=dict(schema) if schema is not None else None,
            description=_str_field(data, "description"),
            strict=_bool_field(data, "strict"),
        )
    return dict(data)


@dataclass
class MessageItem:
    """A message in the response output."""

    id: str
    status: MessageStatus | str
    role: MessageRole | str
    content: list[OutputTextContent] = field(default_factory=list)
    type: str = "message"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "status": to_jsonable(self.status),
            "role": to_jsonable(self.role),
            "content": [part.to_dict() for part in self.content],
        }

    @classmethod
    def from_dict(cls, data: Any) -> MessageItem:
        data = _require_mapping(data, "message item")
        return cls(
            id=_str_field(data, "id"),
            status=_enum_field(data, "status", MessageStatus, ""),
            role=_enum_field(data, "role", MessageRole, ""),
            content=[OutputTextContent.from_dict(part) for part in _list_field(data, "content")],
            type=_str_field(data, "type"),
        )


@dataclass
class FunctionCallItem:
    """A function call in the response output."""

    id: str
    status: FunctionCallStatus | str
    call_id: str
    name: str
    arguments: str
    type: str = "function_call"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "status": to_jsonable(self.status),
            "call_id": self.call_id,
            "name": self.name,
            "arguments": self.arguments,
        }


@dataclass
class FunctionCallOutputItem:
    """A function call output in the response."""

    id: str
    call_id: str
    output: Any
    status: FunctionCallStatus | str
    type: str = "function_call_output"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "call_id": self.call_id,
            "output": to_jsonable(self.output),
            "status": to_jsonable(self.status),
        }


@dataclass
class ReasoningItem:
    """A reasoning item in the response output."""

    id: str
    status: str
    content: list[InputTextContent] = field(default_factory=list)
    summary: list[SummaryTextContent] = field(default_factory=list)
    encrypted_content: str = ""
    type: str = "reasoning"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "type": self.type, "status": self.status}
        if self.content:
            data["content"] = [part.to_dict() for part in self.content]
        if self.summary:
            data["summary"] = [part.to_dict() for part in self.summary]
        if self.encrypted_content:
            data["encrypted_content"] = self.encrypted_content
        return data


def _function_call_item_from_dict(data: Mapping[str, Any]) -> FunctionCallItem:
    return FunctionCallItem(
        id=_str_field(data, "id"),
        status=_enum_field(data, "status", FunctionCallStatus, ""),
        call_id=_str_field(data, "call_id"),
        name=_str_field(data, "name"),
        arguments=_str_field(data, "arguments"),
        type=_str_field(data, "type"),
    )


def _function_call_output_item_from_dict(data: Mapping[str, Any]) -> FunctionCallOutputItem:
    return FunctionCallOutputItem(
        id=_str_field(data, "id"),
        call_id=_str_field(data, "call_id"),
        output=data.get("output"),
        status=_enum_field(data, "status", FunctionCallStatus, ""),
        type=_str_field(data, "type"),
    )


def _reasoning_item_from_dict(data: Mapping[str, Any]) -> ReasoningItem:
    content = []
    for part in _list_field(data, "content"):
        part = _require_mapping(part, "reasoning content")
        content.append(InputTextContent(text=_str_field(part, "text"), type=_str_field(part, "type")))
    summary = []
    for part in _list_field(data, "summary"):
        part = _require_mapping(part, "reasoning summary")
        summary.append(SummaryTextContent(text=_str_field(part, "text"), type=_str_field(part, "type")))
    return ReasoningItem(
        id=_str_field(data, "id"),
        status=_str_field(data, "status"),
        content=content,
        summary=summary,
        encrypted_content=_str_field(data, "encrypted_content"),
        type=_str_field(data, "type"),
    )


_ITEM_PARSERS = {
    "message": MessageItem.from_dict,
    "function_call": _function_call_item_from_dict,
    "function_call_output": _function_call_output_item_from_dict,
    "reasoning": _reasoning_item_from_dict,
}


def _item_from_dict(data: Any) -> Any:
    if not isinstance(data, Mapping):
        return data
    parser = _ITEM_PARSERS.get(data.get("type"))
    return parser(data) if parser else dict(data)


@dataclass
class TextField:
    """Text output configuration of a response; the format is always present."""

    format: Any

    def to_dict(self) -> dict[str, Any]:
        return {"format": to_jsonable(self.format)}


@dataclass
class InputTokensDetails:
    """Breakdown of input token usage."""

    cached_tokens: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"cached_tokens": self.cached_tokens}


@dataclass
class OutputTokensDetails:
    """Breakdown of output token usage."""

    reasoning_tokens: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"reasoning_tokens": self.reasoning_tokens}


@dataclass
class Usage:
    """Token usage statistics."""

    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0
    input_tokens_details: InputTokensDetails | None = None
    output_tokens_details: OutputTokensDetails | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "total_tokens": self.total_tokens,
            "input_tokens_details": to_jsonable(self.input_tokens_details),
            "output_tokens_details": to_jsonable(self.output_tokens_details),
        }

    @classmethod
    def from_dict(cls, data: Any) -> Usage:
        data = _require_mapping(data, "usage")
        input_details = _mapping_field(data, "input_tokens_details")
        output_details = _mapping_field(data, "output_tokens_details")
        return cls(
            input_tokens=_int_field(data, "input_tokens", 0),
            output_tokens=_int_field(data, "output_tokens", 0),
            total_tokens=_int_field(data, "total_tokens", 0),
            input_tokens_details=(
                InputTokensDetails(_int_field(input_details, "cached_tokens", 0))
                if input_details is not None
                else None
            ),
            output_tokens_details=(
                OutputTokensDetails(_int_field(output_details, "reasoning_tokens", 0))
                if output_details is not None
                else None
            ),
        )


@dataclass
class ErrorDetail:
    """An error reported by the service."""

    type: str
    message: str
    code: str = ""
    param: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        if self.code:
            data["code"] = self.code
        data["message"] = self.message
        if self.param:
            data["param"] = self.param
        return data

    @classmethod
    def from_dict(cls, data: Any) -> ErrorDetail:
        data = _require_mapping(data, "error")
        return cls(
            type=_str_field(data, "type"),
            message=_str_field(data, "message"),
            code=_str_field(data, "code"),
            param=_str_field(data, "param"),
        )


@dataclass
class IncompleteDetails:
    """Why a response was incomplete."""

    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"reason": self.reason}


def _default_text() -> TextField:
    return TextField(TextResponseFormat())


@dataclass
class Response:
    """A response object; every field is always serialised, nullable ones as null."""

    id: str
    model: str
    object: str = "response"
    status: ResponseStatus | str = ResponseStatus.IN_PROGRESS
    created_at: int = field(default_factory=lambda: int(time.time()))
    completed_at: int | None = None
    previous_response_id: str | None = None
    instructions: str | None = None
    output: list[Any] = field(default_factory=list)
    error: ErrorDetail | None = None
    tools: list[Any] = field(default_factory=list)
    tool_choice: Any = "auto"
    truncation: Truncation | str = Truncation.AUTO
    parallel_tool_calls: bool = True
    text: TextField = field(default_factory=_default_text)
    top_p: float = 1.0
    presence_penalty: float = 0.0
    frequency_penalty: float = 0.0
    top_logprobs: int = 0
    temperature: float = 1.0
    reasoning: Reasoning | None = None
    user: str | None = None
    usage: Usage | None = None
    max_output_tokens: int | None = None
    max_tool_calls: int | None = None
    store: bool = True
    background: bool = False
    service_tier: str = "auto"
    metadata: dict[str, str] | None = field(default_factory=dict)
    incomplete_details: IncompleteDetails | None = None
    safety_identifier: str | None = None
    prompt_cache_key: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "object": self.object,
            "status": to_jsonable(self.status),
            "created_at": self.created_at,
            "completed_at": self.completed_at,
            "model": self.model,
            "previous_response_id": self.previous_response_id,
            "instructions": self.instructions,
            "output": [to_jsonable(item) for item in self.output],
            "error": to_jsonable(self.error),
            "tools": [to_jsonable(tool) for tool in self.tools],
            "tool_choice": to_jsonable(self.tool_choice),
            "truncation": to_jsonable(self.truncation),
            "parallel_tool_calls": self.parallel_tool_calls,
            "text": self.text.to_dict(),
            "top_p": to_jsonable(self.top_p),
            "presence_penalty": to_jsonable(self.presence_penalty),
            "frequency_penalty": to_jsonable(self.frequency_penalty),
            "top_logprobs": self.top_logprobs,
            "temperature": to_jsonable(self.temperature),
            "reasoning": to_jsonable(self.reasoning),
            "user": self.user,
            "usage": to_jsonable(self.usage),
            "max_output_tokens": self.max_output_tokens,
            "max_tool_calls": self.max_tool_calls,
            "store": self.store,
            "background": self.background,
            "service_tier": self.service_tier,
            "metadata": to_jsonable(self.metadata),
            "incomplete_details": to_jsonable(self.incomplete_details),
            "safety_identifier": self.safety_identifier,
            "prompt_cache_key": self.prompt_cache_key,
        }

    def to_json(self) -> str:
        """Serialise the response to compact JSON text."""
        return dumps(self)

    @classmethod
    def from_dict(cls, data: Any) -> Response:
        """Build a response from decoded JSON; missing fields take their defaults."""
        data = _require_mapping(data, "response")
        defaults = cls(id="", model="", created_at=0)

        raw_text = _mapping_field(data, "text")
        text = defaults.text
        if raw_text is not None:
            text = TextField(_text_format_from_dict(raw_text.get("format")))

        raw_metadata = _mapping_field(data, "metadata")
        raw_error = _mapping_field(data, "error")
        raw_reasoning = _mapping_field(data, "reasoning")
        raw_usage = _mapping_field(data, "usage")
        raw_incomplete = _mapping_field(data, "incomplete_details")

        return cls(
            id=_str_field(data, "id"),
            model=_str_field(data, "model"),
            object=_str_field(data, "object", defaults.object),
            status=_enum_field(data, "status", ResponseStatus, defaults.status),
            created_at=_int_field(data, "created_at", 0),
            completed_at=_int_field(data, "completed_at"),
            previous_response_id=_str_field(data, "previous_response_id", None),
            instructions=_str_field(data, "instructions", None),
            output=[_item_from_dict(item) for item in _list_field(data, "output")],
            error=ErrorDetail.from_dict(raw_error) if raw_error is not None else None,
            tools=list(_list_field(data, "tools")),
            tool_choice=data.get("tool_choice", defaults.tool_choice),
            truncation=_enum_field(data, "truncation", Truncation, defaults.truncation),
            parallel_tool_calls=_bool_field(data, "parallel_tool_calls", defaults.parallel_tool_calls),
            text=text,
            top_p=_float_field(data, "top_p", defaults.top_p),
            presence_penalty=_float_field(data, "presence_penalty", defaults.presence_penalty),
            frequency_penalty=_float_field(data, "frequency_penalty", defaults.frequency_penalty),
            top_logprobs=_int_field(data, "top_logprobs", defaults.top_logprobs),
            temperature=_float_field(data, "temperature", defaults.temperature),
            reasoning=_reasoning_from_dict(raw_reasoning) if raw_reasoning is not None else None,
            user=_str_field(data, "user", None),
            usage=Usage.from_dict(raw_usage) if raw_usage is not None else None,
            max_output_tokens=_int_field(data, "max_output_tokens"),
            max_tool_calls=_int_field(data, "max_tool_calls"),
            store=_bool_field(data, "store", defaults.store),
            background=_bool_field(data, "background", defaults.background),
            service_tier=_str_field(data, "service_tier", defaults.service_tier),
            metadata=(
                {str(key): value for key, value in raw_metadata.items()}
                if raw_metadata is not None
                else None
            ),
            incomplete_details=(
                IncompleteDetails(_str_field(raw_incomplete, "reason"))
                if raw_incomplete is not None
                else None
            ),
            safety_identifier=_str_field(data, "safety_identifier", None),
            prompt_cache_key=_str_field(data, "prompt_cache_key", None),
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> Response:
        """Parse a response from JSON text; raises ValueError on malformed JSON."""
        return cls.from_dict(_load_json(text))


def new_response(response_id: str, model: str) -> Response:
    """Create an in-progress response with every required field at its default."""
    return Response(id=response_id, model=model)


def new_error(error_type: str, code: str, message: str, param: str) -> ErrorDetail:
    """Create an error description."""
    return ErrorDetail(type=error_type, message=message, code=code, param=param)