# openresp

`openresp` models the Open Responses API format in plain Python. It needs
nothing outside the standard library.

The modules are:

- `openresp.enums`: string enums for the protocol values, such as
  `ResponseStatus`, `MessageRole`, `Truncation` and `ServiceTier`.
- `openresp.content`: content parts such as `InputTextContent`,
  `OutputTextContent`, `LogProb` and `UrlCitation`.
- `openresp.types`: `CreateRequest`, the input and output items, and the full
  `Response` object, plus the helpers `new_response` and `new_error`. Fields
  that are required but nullable serialise as `null`. Required empty arrays
  serialise as `[]`.
- `openresp.streaming`: one dataclass for each streaming event, for example
  `ResponseCreatedEvent` or `ResponseOutputTextDeltaEvent`. Each one has a
  `to_dict()` method.
- `openresp.stream_writer`: `StreamWriter`, which writes events as SSE frames
  to a binary stream.
- `openresp.converter`: `Converter`, which converts between Open Responses
  objects and the chat-completion dataclasses defined in the same module
  (`ChatCompletionRequest`, `ChatCompletionResponse` and related classes).
- `openresp.encoding`: `to_jsonable` and `dumps`, which produce compact JSON.
  `dumps` escapes `<`, `>` and `&`, and writes integral floats as integers.

## Installation

```
pip install .
```

## Parsing a request and converting it

```python
from openresp.types import CreateRequest
from openresp.converter import Converter

request = CreateRequest.from_json(
    '{"model": "gpt-4o", "input": [{"type": "message", "role": "user", '
    '"content": "Say hello in exactly 3 words."}], "temperature": 0.7}'
)

chat_request = Converter().request_to_chat_completion(request)
print(chat_request.model, chat_request.messages[0].content)
```

The input can take three forms:

- A plain string, which becomes one user message.
- A list of items.
- Bytes holding a JSON array.

Only items with `"type": "message"` and a role become messages. When an item's
content is a list, the text of its `input_text` parts is joined. If none of the
items is a message, or the input has some other form, the converter raises
`ConversionError`. `FunctionTool` objects in `request.tools` become
`ChatTool`s.

If a field in `CreateRequest.from_dict` has the wrong type, it raises
`TypeError`. Malformed JSON given to `from_json` raises `ValueError`.

## Building responses

```python
from openresp.types import new_response, new_error

response = new_response("resp_123", "gpt-4o")
print(response.to_json())   # status "in_progress", defaults filled in

error = new_error("invalid_request_error", "missing_model", "model is required", "model")
print(error.to_dict())
```

`Response.from_json` and `Response.from_dict` read a response back. Output
items are decoded to `MessageItem`, `FunctionCallItem`,
`FunctionCallOutputItem` or `ReasoningItem`, according to their `type`.

`Converter.chat_completion_to_response` builds a completed `Response` from a
`ChatCompletionResponse`. `Converter.response_to_chat_completion` goes the
other way. It returns `None` when the response has no message output.

## Streaming over SSE

```python
import io
from openresp.stream_writer import StreamWriter
from openresp.streaming import ResponseCreatedEvent
from openresp.types import new_response

buffer = io.BytesIO()
writer = StreamWriter(buffer, flush=None)
writer.write_event(ResponseCreatedEvent(sequence_number=1, response=new_response("resp_1", "gpt-4o")))
writer.write_done()
print(buffer.getvalue().decode())
```

The writer works as follows:

- Each event is written as an `event: <type>` line followed by a
  `data: <json>` line.
- If an event's sequence number is 0, the writer assigns it the next number
  from its own counter.
- If a `flush` callable is given, it is called after every write.
- `write_error` sends an `error` event and then the `data: [DONE]` marker.
- `write_raw` writes bytes unchanged.
- If the stream fails or an event cannot be encoded, `StreamWriteError` is
  raised.

## Converting streamed chat-completion chunks

```python
import itertools
from openresp.converter import Converter

sequence = itertools.count(1)
events = Converter().streaming_chunk_to_events(
    b'{"choices": [{"index": 0, "delta": {"content": "Hi"}, "finish_reason": "stop"}]}',
    sequence,
    "msg_1",
    0,
)
print([event.type for event in events])
```

A delta with content produces a `response.output_text.delta` event. A choice
with a finish reason also produces `response.output_text.done` and
`response.output_item.done`. A chunk that cannot be parsed produces no events.

## What this package does not do

This package does not run an HTTP server, and it does not call any model
provider. You supply the stream to write to and the chat completions to
convert.

## Running the tests

```
pip install ".[test]"
pytest
```