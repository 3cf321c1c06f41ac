from __future__ import annotations

from pathlib import Path

import pytest

from lib_log_dispatch.domain.ring_buffer import RingBuffer
from tests.os_markers import OS_AGNOSTIC
from tests.support import make_entry

pytestmark = [OS_AGNOSTIC]


def test_ring_buffer_evicts_oldest_entries() -> None:
    buffer = RingBuffer(max_entries=2)
    for index in range(3):
        buffer.append(make_entry(index))

    assert [entry.message for entry in buffer.snapshot()] == ["message-1", "message-2"]


def test_ring_buffer_requires_positive_size() -> None:
    with pytest.raises(ValueError):
        RingBuffer(max_entries=0)


def test_ring_buffer_checkpoint_roundtrip(tmp_path: Path) -> None:
    checkpoint = tmp_path / "ring.jsonl"
    buffer = RingBuffer(max_entries=10, checkpoint_path=checkpoint)
    for index in range(3):
        buffer.append(make_entry(index))
    buffer.flush()

    restored = RingBuffer(max_entries=10, checkpoint_path=checkpoint)

    assert [entry.message for entry in restored.snapshot()] == ["message-0", "message-1", "message-2"]
    assert restored.snapshot()[0].payload["index"] == 0


def test_flush_without_changes_does_not_touch_disk(tmp_path: Path) -> None:
    checkpoint = tmp_path / "ring.jsonl"
    buffer = RingBuffer(max_entries=10, checkpoint_path=checkpoint)

    buffer.flush()

    assert not checkpoint.exists()
