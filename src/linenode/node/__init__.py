# SPDX-FileCopyrightText: 2026 Linenode authors
#
# SPDX-License-Identifier: Apache-2.0

from linenode.node.dispatch import (
    MissingIdentityError,
    ProtocolError,
    UnexpectedMessageError,
    dispatch,
    generate_id,
)
from linenode.node.state import NodePhase, NodeState, NodeStateError

__all__ = [
    "MissingIdentityError",
    "NodePhase",
    "NodeState",
    "NodeStateError",
    "ProtocolError",
    "UnexpectedMessageError",
    "dispatch",
    "generate_id",
]
