# SPDX-FileCopyrightText: 2026 Linenode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Message envelope and the one-line JSON codec.

Encoding is compact and field exact: ``src``, ``dest``, ``body``, and inside
the body ``type`` followed by the variant's fields in declaration order.
Fields a variant does not declare are never written, not even as null.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass, fields
from typing import Any

from linenode.protocol.body import BODY_TYPES, BodyKind, MessageBody


class DecodeError(ValueError):
    """Raised when a line is not a well-formed message.

    ``line`` holds the offending input when it came through decode().
    """

    def __init__(self, reason: str, line: str | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.line = line


@dataclass(frozen=True)
class Message:
    """One protocol message. ``dest`` names the recipient."""

    src: str
    dest: str
    body: MessageBody

    @property
    def kind(self) -> BodyKind:
        return self.body.kind

    def to_dict(self) -> dict[str, Any]:
        return {"src": self.src, "dest": self.dest, "body": _body_to_dict(self.body)}

    @classmethod
    def from_dict(cls, obj: Any) -> "Message":
        """Build a message from parsed JSON. Raises DecodeError on bad shape."""
        if not isinstance(obj, dict):
            raise DecodeError("message must be a JSON object")
        return cls(
            src=_as_str(_require(obj, "src", "message"), "src", "message"),
            dest=_as_str(_require(obj, "dest", "message"), "dest", "message"),
            body=_body_from_dict(_require(obj, "body", "message")),
        )


def decode(line: str) -> Message:
    """Parse one line into a Message. Raises DecodeError."""
    try:
        obj = json.loads(line)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"invalid JSON: {exc.msg}", line) from exc
    except (ValueError, RecursionError) as exc:
        # Over-long integer literals and nesting deeper than the parser allows.
        raise DecodeError(f"invalid JSON: {exc}", line) from exc
    try:
        return Message.from_dict(obj)
    except DecodeError as exc:
        exc.line = line
        raise


def encode(message: Message) -> str:
    """Serialize a Message to a single line, without the trailing newline."""
    return json.dumps(message.to_dict(), separators=(",", ":"), ensure_ascii=False)


# --- Field shapes ---


def _require(obj: dict[str, Any], name: str, where: str) -> Any:
    try:
        return obj[name]
    except KeyError:
        raise DecodeError(f"{where}: missing field {name!r}") from None


# Ids are unsigned 64-bit on the wire.
_MAX_ID = 2**64 - 1


def _as_id(value: Any, name: str, where: str) -> int:
    # bool is an int subclass but true/false are not message ids.
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DecodeError(f"{where}: {name!r} must be a non-negative integer")
    if value > _MAX_ID:
        raise DecodeError(f"{where}: {name!r} exceeds {_MAX_ID}")
    return value


def _as_str(value: Any, name: str, where: str) -> str:
    if not isinstance(value, str):
        raise DecodeError(f"{where}: {name!r} must be a string")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise DecodeError(f"{where}: {name!r} is not valid UTF-8") from None
    return value


def _as_str_tuple(value: Any, name: str, where: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise DecodeError(f"{where}: {name!r} must be a list of strings")
    return tuple(_as_str(item, name, where) for item in value)


_SHAPES: dict[Any, Callable[[Any, str, str], Any]] = {
    int: _as_id,
    str: _as_str,
    tuple[str, ...]: _as_str_tuple,
}


def _body_from_dict(obj: Any) -> MessageBody:
    if not isinstance(obj, dict):
        raise DecodeError("body must be a JSON object")
    tag = _require(obj, "type", "body")
    if not isinstance(tag, str):
        raise DecodeError("body: 'type' must be a string")
    try:
        kind = BodyKind(tag)
    except ValueError:
        raise DecodeError(f"unknown message type {tag!r}") from None
    cls = BODY_TYPES[kind]
    values = {
        f.name: _SHAPES[f.type](_require(obj, f.name, tag), f.name, tag)
        for f in fields(cls)
    }
    return cls(**values)


def _body_to_dict(body: MessageBody) -> dict[str, Any]:
    out: dict[str, Any] = {"type": body.kind.value}
    for f in fields(body):
        value = getattr(body, f.name)
        out[f.name] = list(value) if isinstance(value, tuple) else value
    return out
