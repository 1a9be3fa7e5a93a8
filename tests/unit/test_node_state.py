# SPDX-FileCopyrightText: 2026 Linenode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Tests for the NodeState phase machine."""

import dataclasses

import pytest

from linenode.node import NodePhase, NodeState, NodeStateError


def test_defaults() -> None:
    state = NodeState()
    assert state.phase == NodePhase.UNINITIALIZED
    assert state.node_id is None
    assert state.node_ids == ()
    assert state.counter == 0
    assert state.ready is False


def test_initialize() -> None:
    state = NodeState().initialize("n1", ("n1", "n2"))
    assert state.phase == NodePhase.READY
    assert state.ready is True
    assert state.node_id == "n1"
    assert state.node_ids == ("n1", "n2")
    # The handshake does not consume a counter value.
    assert state.counter == 0


def test_ready_is_terminal() -> None:
    state = NodeState().initialize("n1", ())
    with pytest.raises(NodeStateError, match="ready → ready"):
        state.initialize("n2", ())
    with pytest.raises(NodeStateError, match="ready → uninitialized"):
        state.transition(NodePhase.UNINITIALIZED)


def test_advance_counts_from_one() -> None:
    state = NodeState().initialize("n1", ())
    state = state.advance()
    assert state.counter == 1
    state = state.advance()
    assert state.counter == 2


def test_advance_before_handshake() -> None:
    with pytest.raises(NodeStateError, match="after the handshake"):
        NodeState().advance()


def test_transitions_return_copies() -> None:
    before = NodeState()
    after = before.initialize("n1", ())
    assert before.phase == NodePhase.UNINITIALIZED
    assert after is not before
    advanced = after.advance()
    assert after.counter == 0
    assert advanced.counter == 1


def test_frozen() -> None:
    state = NodeState()
    with pytest.raises(dataclasses.FrozenInstanceError):
        state.node_id = "n9"  # type: ignore[misc]
