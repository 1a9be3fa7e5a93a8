# SPDX-FileCopyrightText: 2026 Linenode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Runs the node as a real process over pipes."""

import json
import os
import subprocess
import sys
from pathlib import Path

_SRC = Path(__file__).resolve().parents[2] / "src"


def _run(stdin: str) -> subprocess.CompletedProcess[str]:
    env = {**os.environ, "PYTHONPATH": str(_SRC), "PYTHONIOENCODING": "utf-8"}
    return subprocess.run(
        [sys.executable, "-m", "linenode"],
        input=stdin,
        capture_output=True,
        text=True,
        encoding="utf-8",
        env=env,
        timeout=30,
        check=False,
    )


def _line(src: str, body: dict[str, object]) -> str:
    return json.dumps({"src": src, "dest": "n1", "body": body}) + "\n"


def test_scripted_session() -> None:
    stdin = _line(
        "c0", {"type": "init", "msg_id": 0, "node_id": "n1", "node_ids": ["n1"]}
    )
    for i in range(1, 21):
        if i % 2:
            stdin += _line("c1", {"type": "echo", "msg_id": i, "echo": f"ping ✓ {i}"})
        else:
            stdin += _line("c2", {"type": "generate", "msg_id": i})
    proc = _run(stdin)
    assert proc.returncode == 0, proc.stderr
    replies = [json.loads(line) for line in proc.stdout.splitlines()]
    assert len(replies) == 21
    assert replies[0] == {
        "src": "n1",
        "dest": "c0",
        "body": {"type": "init_ok", "in_reply_to": 0},
    }
    # Replies come back in request order, each correlated to its request.
    for i, reply in enumerate(replies[1:], start=1):
        assert reply["body"]["in_reply_to"] == i
        assert reply["body"]["msg_id"] == i
        if i % 2:
            assert reply["dest"] == "c1"
            assert reply["body"]["echo"] == f"ping ✓ {i}"
        else:
            assert reply["dest"] == "c2"
            assert reply["body"]["id"] == f"n1-{i}"


def test_protocol_violation_exits_with_error() -> None:
    proc = _run(_line("c1", {"type": "echo", "msg_id": 1, "echo": "early"}))
    assert proc.returncode == 1
    assert proc.stdout == ""
    assert "MissingIdentityError" in proc.stderr
