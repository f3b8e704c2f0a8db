"""Enumerations used by the OpenResponses protocol."""

from __future__ import annotations

from enum import StrEnum


class Truncation(StrEnum):
    """How input is truncated when it exceeds the context window."""

    AUTO = "auto"
    DISABLED = "disabled"


class MessageRole(StrEnum):
    """Role of a message author."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    DEVELOPER = "developer"


class MessageStatus(StrEnum):
    """Status of a message item."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"


class ResponseStatus(StrEnum):
    """Status of a response."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    INCOMPLETE = "incomplete"


class FunctionCallStatus(StrEnum):
    """Status of a function call."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"


class ToolChoiceMode(StrEnum):
    """Which tool the model should use."""

    NONE = "none"
    AUTO = "auto"
    REQUIRED = "required"


class ImageDetail(StrEnum):
    """Detail level for image input."""

    LOW = "low"
    HIGH = "high"
    AUTO = "auto"


class ServiceTier(StrEnum):
    """Service tier for a request."""

    AUTO = "auto"
    DEFAULT = "default"
    FLEX = "flex"
    PRIORITY = "priority"


class Include(StrEnum):
    """Extra data to include in the response."""

    REASONING_ENCRYPTED_CONTENT = "reasoning.encrypted_content"
    MESSAGE_OUTPUT_TEXT_LOGPROBS = "message.output_text.logprobs"


class ReasoningEffort(StrEnum):
    """Reasoning effort levels."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    XHIGH = "xhigh"


class ReasoningSummary(StrEnum):
    """Reasoning summary modes."""

    CONCISE = "concise"
    DETAILED = "detailed"
    AUTO = "auto"