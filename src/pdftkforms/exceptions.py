# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# src/pdftkforms/exceptions.py

"""Exceptions raised by pdftkforms"""


class PdfFormError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgumentError(PdfFormError, ValueError):
    """An option or field value could not be used."""


class FileAccessError(PdfFormError):
    """The source PDF cannot be read."""

    def __init__(self, path, reason=None):
        self.path = str(path)
        self.reason = reason
        msg = f"Cannot read input file '{self.path}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class PdftkSpawnError(PdfFormError):
    """The pdftk process could not be started."""


class PdftkNotFoundError(PdftkSpawnError):
    """The pdftk executable does not exist."""


class PdftkError(PdfFormError):
    """pdftk wrote to stderr or exited with a failure status."""

    def __init__(self, message, stderr=b"", returncode=None):
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(message)

    @classmethod
    def from_stderr(cls, stderr: bytes, returncode=None, operation=None):
        text = stderr.decode("utf-8", errors="replace").strip()
        if not text:
            text = f"pdftk exited with status {returncode}"
        if operation:
            text = f"{operation}: {text}"
        return cls(text, stderr=stderr, returncode=returncode)


class TempFileError(PdfFormError):
    """A temporary file could not be created or written."""


class XfdfWriteError(PdfFormError):
    """The XFDF document was written as zero bytes."""
