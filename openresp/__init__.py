"""Open Responses data model, SSE stream writer and chat-completion converter."""

__version__ = "0.1.0"

__all__ = ["content", "converter", "encoding", "enums", "stream_writer", "streaming", "types"]