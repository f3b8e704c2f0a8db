import itertools
import json

import pytest

from openresp.content import OutputTextContent
from openresp.converter import (
    ChatChoice,
    ChatCompletionResponse,
    ChatMessage,
    ChatUsage,
    ConversionError,
    Converter,
)
from openresp.enums import MessageRole, MessageStatus, ResponseStatus
from openresp.streaming import (
    ResponseOutputItemDoneEvent,
    ResponseOutputTextDeltaEvent,
    ResponseOutputTextDoneEvent,
)
from openresp.types import CreateRequest, FunctionCallItem, FunctionTool, MessageItem, Response, Usage


def _request(input_json: str, extra: str = "") -> CreateRequest:
    return CreateRequest.from_json('{"model":"gpt-4o","input":' + input_json + extra + "}")


def test_input_to_messages_array_input():
    request = _request('[{"type":"message","role":"user","content":"Say hello in exactly 3 words."}]')
    messages = Converter().input_to_messages(request.input)
    assert messages == [ChatMessage(role="user", content="Say hello in exactly 3 words.")]


def test_input_to_messages_string_input():
    request = CreateRequest(input="Just a simple string input")
    messages = Converter().input_to_messages(request.input)
    assert messages == [ChatMessage(role="user", content="Just a simple string input")]


def test_input_to_messages_multiple_messages():
    request = _request(
        """[
        {"type":"message","role":"system","content":"You are a helpful assistant."},
        {"type":"message","role":"user","content":"Hello!"},
        {"type":"message","role":"assistant","content":"Hi there!"},
        {"type":"message","role":"user","content":"How are you?"}
    ]"""
    )
    messages = Converter().input_to_messages(request.input)
    assert messages == [
        ChatMessage("system", "You are a helpful assistant."),
        ChatMessage("user", "Hello!"),
        ChatMessage("assistant", "Hi there!"),
        ChatMessage("user", "How are you?"),
    ]


def test_request_to_chat_completion():
    request = _request(
        '[{"type":"message","role":"user","content":"Say hello in exactly 3 words."}]',
        ',"temperature":0.7,"max_output_tokens":100',
    )
    chat_request = Converter().request_to_chat_completion(request)
    assert chat_request.model == "gpt-4o"
    assert chat_request.temperature == 0.7
    assert chat_request.max_tokens == 100
    assert chat_request.stream is False
    assert chat_request.messages == [ChatMessage("user", "Say hello in exactly 3 words.")]


def test_request_stream_flag_is_copied():
    request = _request('"hi"', ',"stream":true')
    assert Converter().request_to_chat_completion(request).stream is True


def test_request_with_invalid_input_raises():
    with pytest.raises(ConversionError, match="convert input"):
        Converter().request_to_chat_completion(CreateRequest(model="gpt-4o", input=None))


def test_function_tools_are_converted():
    parameters = {"type": "object", "properties": {"location": {"type": "string"}}}
    request = CreateRequest(
        model="gpt-4o",
        input="weather?",
        tools=[FunctionTool(name="get_weather", description="Get the weather", parameters=parameters)],
    )
    tools = Converter().request_to_chat_completion(request).tools
    assert len(tools) == 1
    assert tools[0].type == "function"
    assert tools[0].function.name == "get_weather"
    assert tools[0].function.description == "Get the weather"
    assert tools[0].function.parameters == parameters


def test_tools_that_are_plain_objects_are_dropped():
    request = _request('"weather?"', ',"tools":[{"type":"function","name":"get_weather"}]')
    assert Converter().request_to_chat_completion(request).tools == []


def test_input_as_json_bytes():
    data = b'[{"type":"message","role":"user","content":"hi"},{"type":"other"}]'
    assert Converter().input_to_messages(data) == [ChatMessage("user", "hi")]


def test_input_bytes_not_an_array():
    with pytest.raises(ConversionError, match="parse input array"):
        Converter().input_to_messages(b'{"type":"message"}')


def test_input_malformed_bytes():
    with pytest.raises(ConversionError, match="parse input array"):
        Converter().input_to_messages(b"[not json")


def test_invalid_input_type():
    with pytest.raises(ConversionError, match="invalid input format"):
        Converter().input_to_messages(42)


def test_no_valid_messages():
    with pytest.raises(ConversionError, match="no valid messages"):
        Converter().input_to_messages([{"type": "function_call", "role": "user"}, {"type": "message"}])


def test_content_array_joins_input_text():
    items = [
        {
            "type": "message",
            "role": "user",
            "content": [
                {"type": "input_text", "text": "Hello, "},
                {"type": "input_image", "image_url": "https://example.com/a.png"},
                {"type": "input_text", "text": "world"},
            ],
        }
    ]
    assert Converter().input_to_messages(items) == [ChatMessage("user", "Hello, world")]


def test_null_and_missing_content():
    items = [
        {"type": "message", "role": "user", "content": None},
        {"type": "message", "role": "user"},
    ]
    messages = Converter().input_to_messages(items)
    assert [message.content for message in messages] == ["", "<nil>"]


def test_unencodable_items_are_skipped():
    items = [object(), {"type": "message", "role": "user", "content": "ok"}]
    assert Converter().input_to_messages(items) == [ChatMessage("user", "ok")]


def test_chat_completion_to_response():
    chat_response = ChatCompletionResponse(
        id="chatcmpl-1",
        created=1700000000,
        model="gpt-4o",
        choices=[
            ChatChoice(index=0, message=ChatMessage("assistant", "Hello")),
            ChatChoice(index=1, message=ChatMessage("", "ignored")),
        ],
        usage=ChatUsage(prompt_tokens=5, completion_tokens=7, total_tokens=12),
    )
    response = Converter().chat_completion_to_response(chat_response, "resp_1", None)
    assert response.id == "resp_1"
    assert response.status == ResponseStatus.COMPLETED
    assert response.created_at == 1700000000
    assert response.completed_at == 1700000000
    assert response.model == "gpt-4o"
    assert response.tools == []
    assert len(response.output) == 1
    item = response.output[0]
    assert item.id == "msg_resp_1_0"
    assert item.role == MessageRole.ASSISTANT
    assert item.status == MessageStatus.COMPLETED
    assert item.content[0].text == "Hello"
    assert response.usage.input_tokens == 5
    assert response.usage.output_tokens == 7
    assert response.usage.total_tokens == 12
    assert response.usage.input_tokens_details.cached_tokens == 0
    text = response.to_json()
    assert '"annotations":[]' in text
    assert '"metadata":{}' in text
    assert '"tool_choice":"auto"' in text


def test_chat_completion_to_response_keeps_tools():
    tools = [FunctionTool(name="lookup")]
    response = Converter().chat_completion_to_response(ChatCompletionResponse(), "resp_2", tools)
    assert response.tools == tools
    assert response.output == []


def test_streaming_chunks_to_events():
    converter = Converter()
    sequence = itertools.count(1)
    first = json.dumps({"choices": [{"index": 0, "delta": {"content": "Hi"}, "finish_reason": None}]})
    events = converter.streaming_chunk_to_events(first.encode(), sequence, "msg_1", 0)
    assert len(events) == 1
    assert isinstance(events[0], ResponseOutputTextDeltaEvent)
    assert events[0].delta == "Hi"
    assert events[0].sequence_number == 1
    assert events[0].item_id == "msg_1"

    last = json.dumps({"choices": [{"index": 0, "delta": {"content": "!"}, "finish_reason": "stop"}]})
    events = converter.streaming_chunk_to_events(last, sequence, "msg_1", 0)
    assert [event.sequence_number for event in events] == [2, 3, 4]
    assert isinstance(events[1], ResponseOutputTextDoneEvent)
    assert events[1].text == "!"
    assert isinstance(events[2], ResponseOutputItemDoneEvent)
    assert events[2].item.id == "msg_1"
    assert events[2].item.role == MessageRole.ASSISTANT
    assert events[2].item.content[0].text == "!"


def test_streaming_finish_prefers_message_content():
    chunk = json.dumps(
        {"choices": [{"message": {"role": "assistant", "content": "full"}, "finish_reason": "stop"}]}
    )
    events = Converter().streaming_chunk_to_events(chunk, itertools.count(10), "m", 2)
    assert len(events) == 2
    assert events[0].text == "full"
    assert events[0].sequence_number == 10
    assert events[1].output_index == 2


def test_streaming_invalid_chunk_yields_nothing():
    sequence = itertools.count(1)
    assert Converter().streaming_chunk_to_events(b"not json", sequence, "m", 0) == []
    assert next(sequence) == 1


def test_response_to_chat_completion():
    response = Response(
        id="resp_9",
        model="gpt-4o",
        created_at=1234567890,
        output=[
            FunctionCallItem(id="fc", status="completed", call_id="c", name="f", arguments="{}"),
            MessageItem(
                id="msg",
                status=MessageStatus.INCOMPLETE,
                role=MessageRole.ASSISTANT,
                content=[OutputTextContent(text="a"), OutputTextContent(text="b", type="refusal")],
            ),
        ],
        usage=Usage(input_tokens=1, output_tokens=2, total_tokens=3),
    )
    chat = Converter().response_to_chat_completion(response)
    assert chat.id == "resp_9"
    assert chat.object == "chat.completion"
    assert chat.created == 1234567890
    assert chat.choices == [
        ChatChoice(index=1, message=ChatMessage("assistant", "a"), finish_reason="length")
    ]
    assert chat.usage == ChatUsage(1, 2, 3)


def test_response_to_chat_completion_without_messages():
    converter = Converter()
    assert converter.response_to_chat_completion(None) is None
    assert converter.response_to_chat_completion(Response(id="r", model="m")) is None
    only_calls = Response(
        id="r",
        model="m",
        output=[FunctionCallItem(id="fc", status="completed", call_id="c", name="f", arguments="{}")],
    )
    assert converter.response_to_chat_completion(only_calls) is None