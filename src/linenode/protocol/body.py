# SPDX-FileCopyrightText: 2026 Linenode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Message body variants, keyed by their ``type`` discriminant."""

import enum
from dataclasses import dataclass
from typing import ClassVar


class BodyKind(enum.Enum):
    INIT = "init"
    INIT_OK = "init_ok"
    ECHO = "echo"
    ECHO_OK = "echo_ok"
    GENERATE = "generate"
    GENERATE_OK = "generate_ok"

    @property
    def is_reply(self) -> bool:
        """True for the ``*_ok`` kinds a node sends but never accepts."""
        return self.value.endswith("_ok")


@dataclass(frozen=True)
class Init:
    """Handshake request. Assigns the receiving node its identity."""

    kind: ClassVar[BodyKind] = BodyKind.INIT
    msg_id: int
    node_id: str
    node_ids: tuple[str, ...]


@dataclass(frozen=True)
class InitOk:
    kind: ClassVar[BodyKind] = BodyKind.INIT_OK
    in_reply_to: int


@dataclass(frozen=True)
class Echo:
    kind: ClassVar[BodyKind] = BodyKind.ECHO
    msg_id: int
    echo: str


@dataclass(frozen=True)
class EchoOk:
    """Echo reply. ``msg_id`` repeats the request's id."""

    kind: ClassVar[BodyKind] = BodyKind.ECHO_OK
    msg_id: int
    in_reply_to: int
    echo: str


@dataclass(frozen=True)
class Generate:
    kind: ClassVar[BodyKind] = BodyKind.GENERATE
    msg_id: int


@dataclass(frozen=True)
class GenerateOk:
    """Unique-id reply. ``msg_id`` repeats the request's id."""

    kind: ClassVar[BodyKind] = BodyKind.GENERATE_OK
    msg_id: int
    in_reply_to: int
    id: str


MessageBody = Init | InitOk | Echo | EchoOk | Generate | GenerateOk

# One class per discriminant. Field declaration order is wire order.
BODY_TYPES: dict[BodyKind, type[MessageBody]] = {
    cls.kind: cls for cls in (Init, InitOk, Echo, EchoOk, Generate, GenerateOk)
}
