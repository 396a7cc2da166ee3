# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# src/pdftkforms/commands/fill.py

"""Fill a PDF form with data"""

from __future__ import annotations

import io
import logging
import os
import subprocess
import tempfile
import time
import uuid
from collections.abc import Mapping
from contextlib import ExitStack, suppress
from typing import Any, BinaryIO, Optional

import pdftkforms.core.constants as c
from pdftkforms.core.config import PdftkCommand
from pdftkforms.core.process import PdftkProcess, spawn_pdftk
from pdftkforms.core.stream import PdftkOutputStream
from pdftkforms.exceptions import PdfFormError, PdftkError, TempFileError, XfdfWriteError
from pdftkforms.forms.xfdf import generate_xfdf
from pdftkforms.info.doc_info import DocumentInfo
from pdftkforms.utils.io_helpers import ensure_readable

logger = logging.getLogger(__name__)


def fill(
    pdf,
    field_values: Mapping[str, Any],
    flatten: bool = True,
    info: Optional[DocumentInfo | Mapping] = None,
    verbose: bool = False,
    pdftk: PdftkCommand = None,
) -> BinaryIO:
    """
    Fill the form in `pdf` with `field_values`.

    Arguments:
        pdf: path of the source PDF.
        field_values: field name -> value. Booleans become "Yes"/"Off";
            lists give multiple values.
        flatten: merge the values into the page content (default) instead
            of leaving the fields editable.
        info: optional DocumentInfo (or mapping) to set document metadata.
        verbose: log timing and failures at INFO level under a per-call
            label.
        pdftk: override the pdftk command.

    Returns:
        A readable binary stream of the filled PDF. The first chunk is
        already available when this returns. Reading to the end reaps the
        pdftk processes; a pdftk failure noticed there is raised from
        read(). Close the stream to release the processes and temporary
        files early.

    Raises:
        FileAccessError, PdftkSpawnError, PdftkError, XfdfWriteError,
        TempFileError, InvalidArgumentError.
    """
    label = f"pdftkforms.fill:{uuid.uuid4().hex[:8]}"
    level = logging.INFO if verbose else logging.DEBUG
    started = time.perf_counter()
    logger.log(level, "%s: start %s", label, pdf)
    try:
        return _fill(pdf, field_values, flatten, info, pdftk)
    except PdfFormError as exc:
        logger.log(logging.ERROR if verbose else logging.DEBUG, "%s: %s", label, exc)
        raise
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.log(level, "%s: %.1fms", label, elapsed_ms)


def _fill(pdf, field_values, flatten, info, pdftk) -> BinaryIO:
    source = ensure_readable(pdf)
    info = DocumentInfo.coerce(info)
    xfdf_data = generate_xfdf(source, field_values)

    resources = ExitStack()
    try:
        xfdf_path = _write_temp_xfdf(xfdf_data, resources)

        upstream = []
        fill_source = source
        fill_stdin = None
        if info is not None:
            info_proc = _start_update_info(source, info, pdftk, resources)
            upstream.append(info_proc)
            fill_source = c.STDIO
            fill_stdin = info_proc.stdout

        args = [fill_source, c.FILL_FORM, xfdf_path, c.OUTPUT, c.STDIO]
        if flatten:
            args.append(c.FLATTEN)
        proc = spawn_pdftk(args, stdin=fill_stdin, pdftk=pdftk)
        resources.callback(proc.close)
        if fill_stdin is not None:
            # fill_form owns the pipe now; our copy would keep it open
            fill_stdin.close()

        stream = PdftkOutputStream(proc, upstream, resources)
        stream.wait_for_first_chunk()
    except BaseException:
        resources.close()
        raise

    return io.BufferedReader(stream, buffer_size=c.READ_CHUNK_SIZE)


def _write_temp_xfdf(data: bytes, resources: ExitStack) -> str:
    """Write `data` to a fresh temp file, deleted when `resources` closes."""
    try:
        fd, path = tempfile.mkstemp(prefix="pdftkforms-", suffix=c.XFDF_SUFFIX)
    except OSError as exc:
        raise TempFileError(f"Could not create temporary XFDF file: {exc}") from exc
    resources.callback(_remove_file, path)

    try:
        written = os.write(fd, data)
    except OSError as exc:
        raise TempFileError(f"Could not write temporary XFDF file {path}: {exc}") from exc
    finally:
        os.close(fd)

    if written == 0:
        raise XfdfWriteError(f"XFDF wrote 0 bytes to {path}")
    if written != len(data):
        raise TempFileError(f"Short write to {path}: {written} of {len(data)} bytes")
    logger.debug("Wrote %d bytes of XFDF to %s", written, path)
    return path


def _remove_file(path):
    with suppress(FileNotFoundError):
        os.unlink(path)


def _start_update_info(source, info: DocumentInfo, pdftk, resources) -> PdftkProcess:
    """Start `pdftk <source> update_info_utf8 - output -` and feed it `info`."""
    proc = spawn_pdftk(
        [source, c.UPDATE_INFO_UTF8, c.STDIO, c.OUTPUT, c.STDIO],
        stdin=subprocess.PIPE,
        pdftk=pdftk,
    )
    resources.callback(proc.close)

    block = info.to_info_block()
    logger.debug("update_info block:\n%s", block)
    try:
        proc.stdin.write(block.encode("utf-8"))
        proc.stdin.close()
    except BrokenPipeError as exc:
        proc.wait_and_check()
        raise PdftkError(f"{c.UPDATE_INFO_UTF8}: pdftk closed its input early") from exc
    return proc
