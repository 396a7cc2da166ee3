# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# src/pdftkforms/core/stream.py

"""A readable stream over pdftk's stdout"""

from __future__ import annotations

import io
import logging
from contextlib import ExitStack

import pdftkforms.core.constants as c
from pdftkforms.exceptions import PdftkError

logger = logging.getLogger(__name__)


class PdftkOutputStream(io.RawIOBase):
    """
    Raw stream over the stdout of the last process in a pdftk pipeline.

    `wait_for_first_chunk` blocks until pdftk has produced output (or died),
    keeping that chunk so the first read returns it. At end of file every
    process in the pipeline is waited for and checked; stderr output or a
    failure exit raises PdftkError from the read.

    The stream owns `resources`: closing the stream, or reaching end of
    file, closes it, which stops the processes and removes temporary files.
    """

    def __init__(self, process, upstream=(), resources: ExitStack | None = None):
        super().__init__()
        self._process = process
        self._pipeline = list(upstream) + [process]
        self._resources = resources if resources is not None else ExitStack()
        self._pending = b""
        self._finished = False

    def wait_for_first_chunk(self) -> "PdftkOutputStream":
        """Block until the first output chunk is available."""
        chunk = self._process.stdout.read1(c.READ_CHUNK_SIZE)
        for proc in self._pipeline:
            proc.raise_for_stderr()
        if not chunk:
            self._finish()
            raise PdftkError(f"{self._process.operation}: pdftk produced no output")
        logger.debug("First chunk from pdftk %s: %d bytes", self._process.operation, len(chunk))
        self._pending = chunk
        return self

    def readable(self):
        return True

    def readinto(self, buffer):
        if self.closed:
            raise ValueError("I/O operation on closed stream")
        if self._pending:
            size = min(len(buffer), len(self._pending))
            buffer[:size] = self._pending[:size]
            self._pending = self._pending[size:]
            return size
        if self._finished:
            return 0

        data = self._process.stdout.read1(len(buffer))
        if not data:
            self._finish()
            return 0
        size = len(data)
        buffer[:size] = data
        return size

    def _finish(self):
        """Reap the pipeline, then release everything the stream owns."""
        self._finished = True
        try:
            for proc in self._pipeline:
                proc.wait_and_check()
        finally:
            self._resources.close()

    def close(self):
        if not self.closed:
            try:
                self._resources.close()
            finally:
                super().close()
