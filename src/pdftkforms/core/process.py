# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# src/pdftkforms/core/process.py

"""Spawning and supervising pdftk child processes.

Public methods:

spawn_pdftk
run_pdftk

"""

from __future__ import annotations

import logging
import subprocess
import tempfile

from pdftkforms.core.config import PdftkCommand, pdftk_command
from pdftkforms.exceptions import (
    PdftkError,
    PdftkNotFoundError,
    PdftkSpawnError,
    TempFileError,
)

logger = logging.getLogger(__name__)


class PdftkProcess:
    """A running pdftk process whose stderr is captured to an anonymous file.

    Capturing stderr to a file rather than a pipe means the child can never
    block on a full stderr pipe while we are only reading stdout.
    """

    def __init__(self, popen: subprocess.Popen, stderr_file, operation: str):
        self.popen = popen
        self.operation = operation
        self._stderr_file = stderr_file

    @property
    def stdout(self):
        return self.popen.stdout

    @property
    def stdin(self):
        return self.popen.stdin

    def stderr_bytes(self) -> bytes:
        """Everything pdftk has written to stderr so far."""
        self._stderr_file.flush()
        self._stderr_file.seek(0)
        return self._stderr_file.read()

    def raise_for_stderr(self):
        """Raise PdftkError if pdftk has written anything to stderr."""
        stderr = self.stderr_bytes()
        if stderr:
            raise PdftkError.from_stderr(
                stderr, returncode=self.popen.poll(), operation=self.operation
            )

    def wait_and_check(self):
        """Wait for exit; raise on stderr output or a failure status."""
        returncode = self.popen.wait()
        stderr = self.stderr_bytes()
        if stderr or returncode != 0:
            raise PdftkError.from_stderr(stderr, returncode=returncode, operation=self.operation)

    def close(self):
        """Stop the process if it is still running and release its handles."""
        if self.popen.poll() is None:
            logger.debug("Terminating unfinished pdftk %s (pid %s)", self.operation, self.popen.pid)
            self.popen.kill()
        for stream in (self.popen.stdin, self.popen.stdout):
            if stream is not None and not stream.closed:
                stream.close()
        self.popen.wait()
        self._stderr_file.close()


def spawn_pdftk(args, stdin=None, pdftk: PdftkCommand = None) -> PdftkProcess:
    """
    Start pdftk with the given arguments, stdout piped back to us.

    `stdin` may be subprocess.PIPE, an open file object, or None.
    """
    argv = pdftk_command(pdftk) + [str(arg) for arg in args]
    operation = _operation_name(args)

    try:
        stderr_file = tempfile.TemporaryFile()
    except OSError as exc:
        raise TempFileError(f"Could not create stderr capture file: {exc}") from exc

    logger.debug("Spawning: %s", argv)
    try:
        popen = subprocess.Popen(
            argv,
            stdin=stdin,
            stdout=subprocess.PIPE,
            stderr=stderr_file,
        )
    except FileNotFoundError as exc:
        stderr_file.close()
        raise PdftkNotFoundError(
            f"pdftk executable not found: {argv[0]!r}. "
            "Install pdftk or set PDFTKFORMS_PDFTK."
        ) from exc
    except OSError as exc:
        stderr_file.close()
        raise PdftkSpawnError(f"Could not start {argv[0]!r}: {exc}") from exc

    return PdftkProcess(popen, stderr_file, operation)


def run_pdftk(args, pdftk: PdftkCommand = None) -> bytes:
    """Run pdftk to completion and return its stdout."""
    proc = spawn_pdftk(args, pdftk=pdftk)
    try:
        stdout = proc.stdout.read()
        proc.wait_and_check()
    finally:
        proc.close()
    return stdout


def _operation_name(args) -> str:
    """The pdftk operation keyword in an argument list (the second word)."""
    return str(args[1]) if len(args) > 1 else "pdftk"
