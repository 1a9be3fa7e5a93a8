# SPDX-FileCopyrightText: 2026 Linenode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Append-only JSONL trace of what a node received and sent."""

import json
import os
from pathlib import Path
from types import TracebackType
from typing import Any

from linenode import now_iso


def _full_write(fd: int, data: bytes) -> None:
    """Write all bytes, retrying on short writes."""
    while data:
        n = os.write(fd, data)
        data = data[n:]


class EventLog:
    """Structured per-node trace log.

    Each entry is one JSON object on its own line, written with a single
    O_APPEND write and fsynced before log() returns. Context keys are
    merged into every entry but never override ``ts`` or ``event``.
    """

    def __init__(self, path: Path, context: dict[str, str] | None = None) -> None:
        self._path = path
        self._context = dict(context or {})
        self._fd: int | None = None

    @property
    def path(self) -> Path:
        return self._path

    def bind(self, **context: str) -> None:
        """Add context keys to all later entries (e.g. node_id after init)."""
        self._context.update(context)

    def open(self) -> None:
        """Open for appending. Cuts off a partial tail left by a crash."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._truncate_partial_tail()
        self._fd = os.open(
            self._path,
            os.O_WRONLY | os.O_CREAT | os.O_APPEND,
            0o644,
        )

    def __enter__(self) -> "EventLog":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def log(self, event: str, data: dict[str, Any] | None = None) -> None:
        """Append one event. Durable on return."""
        if self._fd is None:
            msg = "EventLog not open"
            raise RuntimeError(msg)
        _full_write(self._fd, self._serialize(event, data))
        os.fsync(self._fd)

    def close(self) -> None:
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def _serialize(self, event: str, data: dict[str, Any] | None) -> bytes:
        entry: dict[str, Any] = {
            **self._context,
            "ts": now_iso(),
            "event": event,
        }
        if data is not None:
            entry["data"] = data
        line = json.dumps(entry, separators=(",", ":"), ensure_ascii=False)
        return (line + "\n").encode()

    def _truncate_partial_tail(self) -> None:
        if not self._path.exists():
            return
        content = self._path.read_bytes()
        # A well-formed log is empty or ends with b'\n'.
        if not content or content.endswith(b"\n"):
            return
        last_nl = content.rfind(b"\n")
        fd = os.open(self._path, os.O_WRONLY)
        try:
            os.ftruncate(fd, last_nl + 1)
            os.fsync(fd)
        finally:
            os.close(fd)


def read_log(path: Path) -> list[dict[str, Any]]:
    """Parse all complete entries. A missing file reads as empty."""
    if not path.exists():
        return []
    entries: list[dict[str, Any]] = []
    with path.open("rb") as f:
        for raw in f:
            if not raw.endswith(b"\n"):
                break  # Incomplete tail.
            if raw.strip():
                entries.append(json.loads(raw))
    return entries


__all__ = ["EventLog", "read_log"]
