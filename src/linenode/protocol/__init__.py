# SPDX-FileCopyrightText: 2026 Linenode authors
#
# SPDX-License-Identifier: Apache-2.0

from linenode.protocol.body import (
    BODY_TYPES,
    BodyKind,
    Echo,
    EchoOk,
    Generate,
    GenerateOk,
    Init,
    InitOk,
    MessageBody,
)
from linenode.protocol.message import DecodeError, Message, decode, encode

__all__ = [
    "BODY_TYPES",
    "BodyKind",
    "DecodeError",
    "Echo",
    "EchoOk",
    "Generate",
    "GenerateOk",
    "Init",
    "InitOk",
    "Message",
    "MessageBody",
    "decode",
    "encode",
]
