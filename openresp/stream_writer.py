"""Server-sent-events writer for OpenResponses streaming events."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, BinaryIO

from openresp.encoding import dumps
from openresp.streaming import ErrorStreamingEvent, StreamingEvent
from openresp.types import ErrorDetail

_DONE_MARKER = b"data: [DONE]\n\n"


class StreamWriteError(Exception):
    """Raised when an event cannot be encoded or written to the stream."""


class StreamWriter:
    """Writes streaming events to a binary stream in SSE format.

    ``flush`` is called after every write, when given, so that each event is
    delivered immediately.
    """

    def __init__(self, stream: BinaryIO, flush: Callable[[], Any] | None = None) -> None:
        if stream is None:
            raise TypeError("a stream to write to is required")
        self._stream = stream
        self._flush = flush
        self._sequence = 0

    def next_sequence(self) -> int:
        """Advance and return the sequence counter."""
        self._sequence += 1
        return self._sequence

    def write_event(self, event: StreamingEvent) -> None:
        """Write one event; an event without a sequence number is given the next one."""
        if event.sequence_number == 0:
            event.sequence_number = self.next_sequence()

        try:
            payload = dumps(event)
        except (TypeError, ValueError) as exc:
            raise StreamWriteError(f"marshal event: {exc}") from exc

        if event.type:
            self._write(f"event: {event.type}\n".encode("utf-8"), "write event type")
        self._write(f"data: {payload}\n\n".encode("utf-8"), "write event data")
        self._flush_stream()

    def write_done(self) -> None:
        """Write the [DONE] marker that ends the stream."""
        self._write(_DONE_MARKER, "write done marker")
        self._flush_stream()

    def write_error(self, error: ErrorDetail) -> None:
        """Write an error event followed by the [DONE] marker."""
        event = ErrorStreamingEvent(sequence_number=self.next_sequence(), error=error)
        self.write_event(event)
        self.write_done()

    def write_raw(self, data: bytes) -> None:
        """Write data as it is, without any SSE framing."""
        self._write(bytes(data), "write raw data")
        self._flush_stream()

    def _write(self, data: bytes, what: str) -> None:
        try:
            self._stream.write(data)
        except (OSError, ValueError) as exc:
            raise StreamWriteError(f"{what}: {exc}") from exc

    def _flush_stream(self) -> None:
        if self._flush is not None:
            self._flush()