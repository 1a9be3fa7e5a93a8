# SPDX-FileCopyrightText: 2026 Linenode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Request dispatch as a pure function ``(state, request) -> (state', reply)``.

No I/O and no hidden state. The caller owns the NodeState and threads the
returned copy into the next call. Every failure is fatal to the node.
"""

from typing import assert_never

from linenode.node.state import NodePhase, NodeState
from linenode.protocol import (
    BodyKind,
    Echo,
    EchoOk,
    Generate,
    GenerateOk,
    Init,
    InitOk,
    Message,
    MessageBody,
)


class ProtocolError(Exception):
    """Raised when a request cannot be answered."""


class MissingIdentityError(ProtocolError):
    """Raised when the node has no identity to reply from."""


class UnexpectedMessageError(ProtocolError):
    """Raised for a message kind that is not valid in the current phase."""

    def __init__(self, kind: BodyKind, phase: NodePhase) -> None:
        role = "reply" if kind.is_reply else "request"
        super().__init__(f"unexpected {kind.value!r} {role} while {phase.value}")
        self.kind = kind
        self.phase = phase


def generate_id(node_id: str, counter: int) -> str:
    """Unique as long as node ids are unique and counters never repeat."""
    return f"{node_id}-{counter}"


def dispatch(state: NodeState, request: Message) -> tuple[NodeState, Message]:
    """Answer one request. Returns the successor state and the reply."""
    if not state.ready:
        return _handshake(state, request)
    state = state.advance()
    assert state.node_id is not None
    body = request.body
    reply: MessageBody
    match body:
        case Echo(msg_id=msg_id, echo=echo):
            reply = EchoOk(msg_id=msg_id, in_reply_to=msg_id, echo=echo)
        case Generate(msg_id=msg_id):
            reply = GenerateOk(
                msg_id=msg_id,
                in_reply_to=msg_id,
                id=generate_id(state.node_id, state.counter),
            )
        case Init() | InitOk() | EchoOk() | GenerateOk():
            raise UnexpectedMessageError(request.kind, state.phase)
        case _:
            assert_never(body)
    return state, _reply(request, state.node_id, reply)


def _handshake(state: NodeState, request: Message) -> tuple[NodeState, Message]:
    """UNINITIALIZED: only init is answerable. Counter stays at 0."""
    body = request.body
    if not isinstance(body, Init):
        msg = f"{request.kind.value!r} before init: node has no identity"
        raise MissingIdentityError(msg)
    if not body.node_id:
        raise MissingIdentityError("init carries an empty node_id")
    state = state.initialize(body.node_id, body.node_ids)
    return state, _reply(request, body.node_id, InitOk(in_reply_to=body.msg_id))


def _reply(request: Message, node_id: str, body: MessageBody) -> Message:
    return Message(src=node_id, dest=request.src, body=body)
