"""
Running the vw executable.

Every invocation is synchronous: build the argument list, run it, capture
stdout and stderr, wait for exit. vw writes its progress table and the
final ``average loss = ...`` line to stderr.
"""

from __future__ import annotations

import logging
import os
import re
import shlex
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ...errors import LossParseFailure, ProcessFailure

logger = logging.getLogger(__name__)

AVERAGE_LOSS = re.compile(r"^average loss = (\S+)", re.MULTILINE)


def parse_average_loss(*texts: str) -> Optional[float]:
    """Last ``average loss = x`` value found in the given texts, or None."""
    for text in texts:
        if not text:
            continue
        matches = AVERAGE_LOSS.findall(text)
        if not matches:
            continue
        try:
            return float(matches[-1])
        except ValueError:
            # vw prints "n.a." when it saw no examples
            return None
    return None


@dataclass
class ProcessOutcome:
    args: List[str]
    exit_code: int
    stdout: str = ""
    stderr: str = ""
    loss: Optional[float] = field(default=None)

    @property
    def output(self) -> str:
        return "\n".join(part for part in (self.stderr, self.stdout) if part)

    @property
    def command(self) -> str:
        return shlex.join(self.args)

    def tail(self, lines: int = 20) -> str:
        return "\n".join(self.output.strip().splitlines()[-lines:])


class VwRunner:
    """
    Thin wrapper around the vw command line.

    ``executable`` is either a program name looked up on PATH or a full
    command prefix such as ``[sys.executable, "fake_vw.py"]``.
    """

    def __init__(self, executable: str | Sequence[str] = "vw") -> None:
        if isinstance(executable, (str, os.PathLike)):
            self.executable = [os.fspath(executable)]
        else:
            self.executable = [os.fspath(part) for part in executable]

    def __repr__(self) -> str:
        return f"VwRunner({shlex.join(self.executable)!r})"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def train(self, cache_file: str | os.PathLike, model_file: str | os.PathLike, params: str = "") -> ProcessOutcome:
        args = ["-f", os.fspath(model_file), "--cache_file", os.fspath(cache_file)]
        outcome = self.run(args + shlex.split(params))
        self._check_exit(outcome, "training")
        return outcome

    def test(self, cache_file: str | os.PathLike, model_file: str | os.PathLike, params: str = "") -> ProcessOutcome:
        args = ["-t", "-i", os.fspath(model_file), "--cache_file", os.fspath(cache_file)]
        outcome = self.run(args + shlex.split(params))
        self._check_exit(outcome, "testing")
        if outcome.loss is None:
            raise LossParseFailure(
                f"vw testing exited cleanly but printed no average loss: {outcome.command}",
                outcome,
            )
        return outcome

    def build_cache(self, data_file: str | os.PathLike, cache_file: str | os.PathLike, params: str = "") -> ProcessOutcome:
        args = ["-k", "--cache_file", os.fspath(cache_file), "-d", os.fspath(data_file), "--noop"]
        outcome = self.run(args + shlex.split(params))
        self._check_exit(outcome, "cache generation")
        return outcome

    def run(self, args: Sequence[str]) -> ProcessOutcome:
        cmd = self.executable + list(args)
        logger.debug(f"Executing: {shlex.join(cmd)}")
        try:
            proc = subprocess.run(
                cmd, capture_output=True, text=True, encoding="utf-8", errors="replace", check=False
            )
        except OSError as exc:
            outcome = ProcessOutcome(args=cmd, exit_code=-1, stderr=str(exc))
            raise ProcessFailure(f"Could not start vw ({exc}): {outcome.command}", outcome) from exc

        return ProcessOutcome(
            args=cmd,
            exit_code=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
            loss=parse_average_loss(proc.stderr or "", proc.stdout or ""),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _check_exit(outcome: ProcessOutcome, step: str) -> None:
        if outcome.exit_code != 0:
            raise ProcessFailure(
                f"vw {step} exited with non-zero exit code {outcome.exit_code}: {outcome.command}",
                outcome,
            )
