#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Invocation of the pylonsd command-line client.

Arguments are rewritten before every run: a test keyring backend is added
for key management and signing commands, and one of the configured nodes is
picked at random for commands that talk to a node. Only one pylonsd process
runs at a time within the interpreter.
"""

from __future__ import annotations

from collections.abc import Sequence
import random
import subprocess
import threading

from attrs import frozen
from provide.foundation.logger import get_logger

from inttest.config import CLIOptions
from inttest.node.errors import CommandError

log = get_logger(__name__)

KEYRING_BACKEND_FLAGS = ("--keyring-backend", "test")
NODE_FLAG = "--node"
NODE_COMMANDS = frozenset({"query", "tx", "status"})

_cli_lock = threading.Lock()


def keyring_backend_setup(args: Sequence[str]) -> list[str]:
    """Append the test keyring backend flag to commands that need a keyring."""
    args = list(args)
    if not args:
        return args
    with_keyring = [*args, *KEYRING_BACKEND_FLAGS]
    if args[0] == "keys":
        return with_keyring
    if args[0] == "tx" and len(args) > 1:
        if args[1] == "sign":
            return with_keyring
        if args[1] == "pylons" and len(args) > 2 and args[2] == "create-account":
            return with_keyring
    return args


def node_flag_setup(args: Sequence[str], custom_node: str, rng: random.Random | None = None) -> list[str]:
    """Append ``--node`` with a random entry of ``custom_node`` for node commands."""
    args = list(args)
    nodes = [node.strip() for node in custom_node.split(",") if node.strip()]
    if not args or not nodes or args[0] not in NODE_COMMANDS:
        return args
    chooser = rng if rng is not None else random
    return [*args, NODE_FLAG, chooser.choice(nodes)]


@frozen
class CommandResult:
    """Outcome of one pylonsd invocation."""

    args: tuple[str, ...]
    stdin_input: str
    output: bytes
    returncode: int | None
    error: CommandError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        return self.output.decode("utf-8", errors="replace")

    @property
    def log_text(self) -> str:
        """Human-readable record of the command and its combined output."""
        return f'"pylonsd {" ".join(self.args)}" ==>\n{self.text}\n'

    def check(self) -> CommandResult:
        """Return self, or raise the stored error if the command failed."""
        if self.error is not None:
            raise self.error
        return self


class PylonsdRunner:
    """Runs pylonsd with harness argument rewriting."""

    def __init__(self, options: CLIOptions | None = None, *, rng: random.Random | None = None) -> None:
        self.options = options if options is not None else CLIOptions.from_env()
        self._rng = rng if rng is not None else random.Random()
        self._log = log.bind(daemon=str(self.options.daemon_path))

    def rewrite_args(self, args: Sequence[str]) -> list[str]:
        args = node_flag_setup(args, self.options.custom_node, self._rng)
        return keyring_backend_setup(args)

    def run(self, args: Sequence[str], stdin_input: str = "") -> CommandResult:
        """Run pylonsd and capture stdout and stderr together.

        Failures are reported on the result rather than raised; call
        :meth:`CommandResult.check` to raise them.
        """
        final_args = tuple(self.rewrite_args(args))
        argv = [str(self.options.daemon_path), *final_args]
        self._log.debug("Running pylonsd", args=final_args)
        with _cli_lock:
            try:
                completed = subprocess.run(
                    argv,
                    input=stdin_input.encode(),
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    check=False,
                )
            except OSError as e:
                self._log.error("Failed to start pylonsd", error=str(e))
                result = CommandResult(args=final_args, stdin_input=stdin_input, output=b"", returncode=None)
                return _with_error(result, f"failed to start pylonsd: {e}")

        result = CommandResult(
            args=final_args,
            stdin_input=stdin_input,
            output=completed.stdout or b"",
            returncode=completed.returncode,
        )
        if completed.returncode != 0:
            self._log.debug("pylonsd exited non-zero", returncode=completed.returncode)
            return _with_error(result, f"pylonsd exited with status {completed.returncode}")
        return result


def _with_error(result: CommandResult, message: str) -> CommandResult:
    error = CommandError(message)
    failed = CommandResult(
        args=result.args,
        stdin_input=result.stdin_input,
        output=result.output,
        returncode=result.returncode,
        error=error,
    )
    error.result = failed
    return failed


def run_pylonsd(args: Sequence[str], stdin_input: str = "", runner: PylonsdRunner | None = None) -> CommandResult:
    """Run pylonsd with options taken from the environment."""
    return (runner or PylonsdRunner()).run(args, stdin_input)

# 🔼⚙️🔚
