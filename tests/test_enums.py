import json

import pytest

from openresp.encoding import dumps
from openresp.enums import (
    FunctionCallStatus,
    ImageDetail,
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


@pytest.mark.parametrize(
    "raw, expected",
    [("auto", Truncation.AUTO), ("disabled", Truncation.DISABLED)],
)
def test_truncation_from_json(raw, expected):
    assert Truncation(json.loads(f'"{raw}"')) is expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("user", MessageRole.USER),
        ("assistant", MessageRole.ASSISTANT),
        ("system", MessageRole.SYSTEM),
        ("developer", MessageRole.DEVELOPER),
    ],
)
def test_message_role_from_json(raw, expected):
    assert MessageRole(json.loads(f'"{raw}"')) is expected


def test_unknown_value_rejected():
    with pytest.raises(ValueError):
        MessageRole("robot")


def test_status_values():
    assert MessageStatus.IN_PROGRESS == "in_progress"
    assert ResponseStatus.FAILED == "failed"
    assert FunctionCallStatus("incomplete") is FunctionCallStatus.INCOMPLETE


def test_other_enum_values():
    assert ToolChoiceMode("required") is ToolChoiceMode.REQUIRED
    assert ImageDetail("high") is ImageDetail.HIGH
    assert ServiceTier("priority") is ServiceTier.PRIORITY
    assert Include("message.output_text.logprobs") is Include.MESSAGE_OUTPUT_TEXT_LOGPROBS
    assert ReasoningEffort("xhigh") is ReasoningEffort.XHIGH
    assert ReasoningSummary("detailed") is ReasoningSummary.DETAILED


@pytest.mark.parametrize("member", list(Truncation) + list(ServiceTier) + list(Include))
def test_json_round_trip(member):
    assert type(member)(json.loads(dumps(member))) is member