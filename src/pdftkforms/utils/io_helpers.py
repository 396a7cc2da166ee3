# src/pdftkforms/utils/io_helpers.py

"""Filesystem helpers"""

import os
import sys
import tempfile
from contextlib import contextmanager, suppress
from pathlib import Path

from pdftkforms.exceptions import FileAccessError


def ensure_readable(path) -> str:
    """Return `path` as a string, or raise FileAccessError if it cannot be read."""
    path = os.fspath(path)
    if not os.path.exists(path):
        raise FileAccessError(path, "no such file")
    if os.path.isdir(path):
        raise FileAccessError(path, "is a directory")
    if not os.access(path, os.R_OK):
        raise FileAccessError(path, "permission denied")
    return path


@contextmanager
def smart_open_output(filename, mode="wb"):
    """
    Open `filename` for writing, or stdout when it is None or '-'.

    A file is only created (or replaced) when the block exits cleanly.
    """
    if filename is None or str(filename) == "-":
        if "b" in mode:
            yield sys.stdout.buffer
        else:
            yield sys.stdout
        return

    # sibling temp file, moved over the target on success
    target = Path(filename)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
    try:
        with os.fdopen(fd, mode) as f:
            yield f
        os.replace(tmp_name, target)
    except BaseException:
        with suppress(FileNotFoundError):
            os.unlink(tmp_name)
        raise
