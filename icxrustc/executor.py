"""Running the assembled rustc command and relaying its output."""

from __future__ import annotations

import os
import subprocess
import sys
import threading
import time
from collections import Counter
from typing import IO

from .diagnostics import format_diagnostic, print_summary
from .translator import RustcCommand


class ExecutionError(Exception):
    """Raised when the compiler process cannot be started."""


def _relay_output(stream: IO[str]) -> None:
    for line in stream:
        print(line.rstrip("\r\n"))


def _relay_diagnostics(stream: IO[str], tally: Counter) -> None:
    for raw in stream:
        line = raw.rstrip("\r\n")
        print(format_diagnostic(line), file=sys.stderr)
        if "error[" in line or "error:" in line:
            tally["errors"] += 1
        elif "warning:" in line:
            tally["warnings"] += 1


def run(cmd: RustcCommand) -> int:
    """Run the command, re-format its diagnostics and return its exit code."""
    start = time.monotonic()
    env = {**os.environ, **dict(cmd.env_vars)}
    try:
        process = subprocess.Popen(
            cmd.argv(),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
            text=True,
            errors="replace",
        )
    except OSError as exc:
        raise ExecutionError(f"Failed to spawn {cmd.executable}: {exc}") from exc

    tally: Counter = Counter()
    with process:
        readers = [
            threading.Thread(target=_relay_output, args=(process.stdout,)),
            threading.Thread(target=_relay_diagnostics, args=(process.stderr, tally)),
        ]
        for reader in readers:
            reader.start()
        returncode = process.wait()
        for reader in readers:
            reader.join()

    elapsed_ms = int((time.monotonic() - start) * 1000)
    print_summary(tally["warnings"], tally["errors"], elapsed_ms)

    # A process killed by a signal has no exit code of its own.
    return returncode if returncode >= 0 else 1