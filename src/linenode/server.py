# SPDX-FileCopyrightText: 2026 Linenode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Node server: composition root over codec, dispatcher and trace log."""

import logging
from collections.abc import Callable, Iterable

from linenode.logging import EventLog, log_method
from linenode.node import NodeState, dispatch
from linenode.protocol import Message, decode, encode

_log = logging.getLogger(__name__)

LineWriter = Callable[[str], object]


class NodeServer:
    """Drives one node over a line transport.

    Owns the current NodeState and threads it through dispatch. The
    transport is injected: lines come in through serve(), replies leave
    through the write callable, one per request and in request order.
    Errors propagate and nothing is written for the line that raised.
    """

    def __init__(self, write: LineWriter, trace: EventLog | None = None) -> None:
        self._write = write
        self._log = trace
        self._state = NodeState()

    @property
    def state(self) -> NodeState:
        return self._state

    @log_method(before=True, after=True)
    def handle(self, message: Message) -> Message:
        """Dispatch one decoded message and keep the successor state."""
        was_ready = self._state.ready
        self._state, reply = dispatch(self._state, message)
        if not was_ready:
            self._on_initialized()
        return reply

    def handle_line(self, line: str) -> str:
        """Decode, dispatch, encode and write one line. Returns the reply."""
        reply = encode(self.handle(decode(line)))
        self._write(reply + "\n")
        return reply

    def serve(self, lines: Iterable[str]) -> int:
        """Handle lines until the input is exhausted. Returns replies written."""
        count = 0
        for line in lines:
            self.handle_line(line)
            count += 1
        _log.debug("input exhausted after %d replies", count)
        return count

    def _on_initialized(self) -> None:
        node_id = self._state.node_id
        assert node_id is not None
        node_ids = self._state.node_ids
        _log.info("node %s initialized, %d participants", node_id, len(node_ids))
        if node_id not in node_ids:
            _log.warning("node %s is not listed in node_ids %s", node_id, node_ids)
        if self._log is not None:
            self._log.bind(node_id=node_id)
            self._log.log(
                "node.initialized",
                {"node_id": node_id, "node_ids": list(node_ids)},
            )
