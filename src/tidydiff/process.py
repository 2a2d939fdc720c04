# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; arguments are passed as a list and
# ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

from .text import TEXT_ENCODING, TEXT_ERRORS

TIMEOUT_RETURNCODE: Final[int] = 124


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    timeout: float | None = None
    encoding: str = TEXT_ENCODING
    errors: str = TEXT_ERRORS


def _ensure_text(value: str | bytes | None, options: CommandOptions) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return value.decode(options.encoding, errors=options.errors)


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable of ``args`` on ``PATH``.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Argument list with an absolute executable path.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable is not on ``PATH``.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` capturing text output without raising on a non-zero exit.

    Output is decoded with ``options.encoding``; undecodable bytes are handled
    by ``options.errors`` instead of raising.

    Args:
        args: Command and argument sequence to execute.
        options: Execution settings; defaults to :class:`CommandOptions`.

    Returns:
        CompletedProcess: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    normalized = _normalize_args(args)
    resolved = options or CommandOptions()

    try:
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603 - argument list, no shell
            normalized,
            cwd=str(resolved.cwd) if resolved.cwd is not None else None,
            env=dict(resolved.env) if resolved.env is not None else None,
            check=False,
            capture_output=True,
            text=True,
            encoding=resolved.encoding,
            errors=resolved.errors,
            timeout=resolved.timeout,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired as exc:
        stdout = _ensure_text(exc.stdout, resolved) or ""
        stderr = _ensure_text(exc.stderr, resolved)
        timeout_msg = f"Command timed out after {resolved.timeout:.1f}s" if resolved.timeout else "Command timed out"
        completed = subprocess.CompletedProcess(
            args=list(normalized),
            returncode=TIMEOUT_RETURNCODE,
            stdout=stdout,
            stderr=f"{stderr}\n{timeout_msg}" if stderr else timeout_msg,
        )

    return completed


__all__ = [
    "CommandOptions",
    "TIMEOUT_RETURNCODE",
    "run_command",
]
