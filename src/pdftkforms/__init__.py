# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# src/pdftkforms/__init__.py

"""List and fill PDF form fields using pdftk"""

import logging

from pdftkforms.commands.fields import fields
from pdftkforms.commands.fill import fill
from pdftkforms.exceptions import (
    FileAccessError,
    InvalidArgumentError,
    PdfFormError,
    PdftkError,
    PdftkNotFoundError,
    PdftkSpawnError,
    TempFileError,
    XfdfWriteError,
)
from pdftkforms.forms.dump_parser import parse_field_dump
from pdftkforms.forms.xfdf import generate_xfdf
from pdftkforms.info.doc_info import DocumentInfo, format_pdf_date

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "fields",
    "fill",
    "parse_field_dump",
    "generate_xfdf",
    "DocumentInfo",
    "format_pdf_date",
    "PdfFormError",
    "FileAccessError",
    "InvalidArgumentError",
    "PdftkError",
    "PdftkNotFoundError",
    "PdftkSpawnError",
    "TempFileError",
    "XfdfWriteError",
]
