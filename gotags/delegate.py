"""Delegation of non-Go files to an external etags-compatible program."""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import BinaryIO, Optional, Sequence

from gotags.config import DELEGATE_FAILURE_STATUS, DELEGATE_NO_MEMBERS_FLAG
from shared.settings import DEFAULT_MEMBERS

logger = logging.getLogger(__name__)


class DelegateError(RuntimeError):
    """Raised when the delegate program cannot run or exits non-zero.

    ``status`` is the exit status the whole run should end with.
    """

    def __init__(self, message: str, status: int = DELEGATE_FAILURE_STATUS):
        super().__init__(message)
        self.status = status


@dataclass(frozen=True)
class DelegateResult:
    """Captured streams and status of one delegate invocation."""

    returncode: int
    stdout: bytes
    stderr: bytes


def build_delegate_command(program: str, members: bool = DEFAULT_MEMBERS) -> list[str]:
    """Build the delegate argv: read names from stdin, write tags to stdout."""
    cmd = shlex.split(program)
    if not cmd:
        raise DelegateError("Delegate program is empty")
    if not members:
        cmd.append(DELEGATE_NO_MEMBERS_FLAG)
    cmd += ["-o", "-", "-"]
    return cmd


def run_delegate(
    program: str,
    filenames: Sequence[str],
    members: bool = DEFAULT_MEMBERS,
    timeout_s: Optional[float] = None,
) -> DelegateResult:
    """Run the delegate once over a batch of file names.

    The names are written newline-separated to the child's stdin, and the
    call blocks until the child exits with both output streams drained.

    Raises:
        DelegateError: If the program is empty, cannot be started or times out.
    """
    cmd = build_delegate_command(program, members=members)
    payload = b"".join(f"{name}\n".encode("utf-8", errors="surrogateescape") for name in filenames)
    logger.info("Running delegate for %d file(s): %s", len(filenames), " ".join(cmd))
    try:
        proc = subprocess.run(
            cmd,
            input=payload,
            capture_output=True,
            check=False,
            timeout=timeout_s,
        )
    except OSError as exc:
        raise DelegateError(f"Cannot run delegate {cmd[0]!r}: {exc}") from exc
    except subprocess.TimeoutExpired as exc:
        raise DelegateError(
            f"Delegate {cmd[0]!r} timed out after {timeout_s}s"
        ) from exc
    return DelegateResult(
        returncode=proc.returncode,
        stdout=proc.stdout,
        stderr=proc.stderr,
    )


def delegate_tags(
    program: str,
    filenames: Sequence[str],
    sink: BinaryIO,
    members: bool = DEFAULT_MEMBERS,
    timeout_s: Optional[float] = None,
) -> int:
    """Tag a batch of foreign files with the delegate and splice its output.

    The delegate's stdout is already in tag file syntax and is copied to the
    sink unchanged.  Each stderr line is logged as a warning.

    Returns:
        Number of bytes copied to the sink.

    Raises:
        DelegateError: If the delegate cannot run or exits non-zero.  Nothing
            from the failed call is written.
    """
    result = run_delegate(program, filenames, members=members, timeout_s=timeout_s)
    for line in result.stderr.decode("utf-8", errors="replace").splitlines():
        if line.strip():
            logger.warning("%s: %s", program, line)

    if result.returncode != 0:
        status = result.returncode if result.returncode > 0 else DELEGATE_FAILURE_STATUS
        raise DelegateError(
            f"Delegate {program!r} failed (exit={result.returncode})",
            status=status,
        )

    sink.write(result.stdout)
    logger.info("Delegate produced %d bytes for %d file(s)", len(result.stdout), len(filenames))
    return len(result.stdout)
