"""Tests for tracing data models.

Why these tests exist:
- ActionRecord is the core data structure for history storage
- Optional fields must be handled properly by to_dict/from_dict
"""

import pytest

from simullm.tracing import ActionRecord


@pytest.mark.parametrize(
    ("kwargs", "expected_agent_states", "has_timings", "has_metadata"),
    [
        (
            {"index": 1, "timestamp": 1704067200.0, "action": "START", "global_state": 0},
            {},
            False,
            False,
        ),
        (
            {
                "index": 7,
                "timestamp": 1704067300.0,
                "action": {"type": "INCREMENT", "amount": 2},
                "global_state": {"total": 14},
                "agent_states": {"counter": {"count": 7}},
                "handler_timings": {"counter": 0.4, "observer": 0.1},
                "metadata": {"description": "test run"},
            },
            {"counter": {"count": 7}},
            True,
            True,
        ),
    ],
    ids=["minimal", "full"],
)
def test_action_record_creation(kwargs, expected_agent_states, has_timings, has_metadata) -> None:
    """ActionRecord handles required and optional fields correctly."""
    record = ActionRecord(**kwargs)
    assert record.index == kwargs["index"]
    assert record.timestamp == kwargs["timestamp"]
    assert record.action == kwargs["action"]
    assert record.global_state == kwargs["global_state"]
    assert record.agent_states == expected_agent_states
    assert (record.handler_timings is not None) == has_timings
    assert (record.metadata is not None) == has_metadata


def test_action_record_to_dict_omits_unset_optionals() -> None:
    record = ActionRecord(index=1, timestamp=0.0, action="PING", global_state=None)
    data = record.to_dict()

    assert "handler_timings" not in data
    assert "metadata" not in data
    assert data == {
        "index": 1,
        "timestamp": 0.0,
        "action": "PING",
        "global_state": None,
        "agent_states": {},
    }


def test_action_record_from_dict_restores_fields() -> None:
    """from_dict accepts to_dict output.

    Why: History backends that persist records need a way back to ActionRecord.
    """
    original = ActionRecord(
        index=42,
        timestamp=1704067200.123,
        action={"type": "TRADE", "trader": "bull"},
        global_state={"price": 103.0},
        agent_states={"bull": {"position": 1}, "clock": None},
        handler_timings={"bull": 1.5, "clock": 0.1},
        metadata={"run_id": "abc123"},
    )

    restored = ActionRecord.from_dict(original.to_dict())

    assert restored == original


def test_action_record_from_dict_minimal() -> None:
    """from_dict handles missing optional fields."""
    record = ActionRecord.from_dict(
        {"index": 10, "timestamp": 500.0, "action": "TICK", "global_state": {"x": 1}}
    )
    assert record.index == 10
    assert record.agent_states == {}
    assert record.handler_timings is None
    assert record.metadata is None
