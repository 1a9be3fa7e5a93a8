# SPDX-FileCopyrightText: 2026 Linenode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Node state: identity, membership and the post-handshake request counter."""

import enum
from dataclasses import dataclass, replace


class NodePhase(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


# Valid phase transitions. READY is terminal.
_TRANSITIONS: dict[NodePhase, frozenset[NodePhase]] = {
    NodePhase.UNINITIALIZED: frozenset({NodePhase.READY}),
    NodePhase.READY: frozenset(),
}


class NodeStateError(Exception):
    """Raised on invalid node phase transition."""


@dataclass(frozen=True)
class NodeState:
    """Immutable snapshot of a node. Every change returns a new instance.

    ``counter`` is 0 through the handshake and counts messages handled
    after it, so the first post-handshake message sees 1.
    """

    phase: NodePhase = NodePhase.UNINITIALIZED
    node_id: str | None = None
    node_ids: tuple[str, ...] = ()
    counter: int = 0

    @property
    def ready(self) -> bool:
        return self.phase == NodePhase.READY

    def transition(self, target: NodePhase) -> "NodeState":
        """Return a copy in the target phase. Raises NodeStateError if invalid."""
        allowed = _TRANSITIONS[self.phase]
        if target not in allowed:
            msg = f"{self.phase.value} → {target.value}"
            raise NodeStateError(msg)
        return replace(self, phase=target)

    def initialize(self, node_id: str, node_ids: tuple[str, ...]) -> "NodeState":
        """UNINITIALIZED → READY, fixing the node identity for good."""
        return replace(
            self.transition(NodePhase.READY), node_id=node_id, node_ids=node_ids
        )

    def advance(self) -> "NodeState":
        """Count one more post-handshake message."""
        if not self.ready:
            msg = "counter advances only after the handshake"
            raise NodeStateError(msg)
        return replace(self, counter=self.counter + 1)
