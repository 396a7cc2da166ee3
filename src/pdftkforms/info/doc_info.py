# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# src/pdftkforms/info/doc_info.py

"""Document metadata for pdftk's update_info_utf8.

Public methods:

format_pdf_date
DocumentInfo
write_info

"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Optional, Union

import pdftkforms.core.constants as c
from pdftkforms.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

DateValue = Union[datetime.datetime, datetime.date, str, None]

# attribute name -> pdftk InfoKey, in the order they are written
INFO_KEYS = {
    "creation_date": "CreationDate",
    "mod_date": "ModDate",
    "title": "Title",
    "author": "Author",
    "subject": "Subject",
    "keywords": "Keywords",
    "creator": "Creator",
    "producer": "Producer",
}

DATE_ATTRIBUTES = ("creation_date", "mod_date")


def format_pdf_date(value: DateValue) -> str:
    """
    Render a date for an InfoValue line.

    datetimes are converted to UTC (naive ones are taken to be UTC already)
    and written as D:YYYYMMDDHHMMSSZ00'00'. Strings pass through unchanged;
    None becomes the empty string.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, datetime.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(datetime.timezone.utc)
        return value.strftime(c.PDF_DATE_FORMAT)
    if isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day).strftime(c.PDF_DATE_FORMAT)
    raise InvalidArgumentError(f"Cannot use {type(value).__name__} as a PDF date")


@dataclass
class DocumentInfo:
    """
    Document Info dictionary entries to set.

    An attribute left at None is not written, so pdftk keeps the existing
    entry. An empty string is written as an empty InfoValue. from_dict
    treats a key that is present with a None value as empty, so
    {"CreationDate": None} clears the date.
    """

    creation_date: DateValue = None
    mod_date: DateValue = None
    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    keywords: Optional[str] = None
    creator: Optional[str] = None
    producer: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "DocumentInfo":
        """Build from snake_case attribute names or pdftk key names."""
        by_pdf_key = {v.lower(): k for k, v in INFO_KEYS.items()}
        kwargs = {}
        for key, value in data.items():
            attr = key if key in INFO_KEYS else by_pdf_key.get(str(key).lower())
            if attr is None:
                raise InvalidArgumentError(f"Unknown document info key: {key!r}")
            kwargs[attr] = "" if value is None else value
        return cls(**kwargs)

    @classmethod
    def coerce(cls, info) -> Optional["DocumentInfo"]:
        if info is None or isinstance(info, cls):
            return info
        if isinstance(info, Mapping):
            return cls.from_dict(info)
        raise InvalidArgumentError(
            f"info must be a DocumentInfo or a mapping, not {type(info).__name__}"
        )

    def items(self):
        """Yield (InfoKey, InfoValue string) for each field that is set."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name in DATE_ATTRIBUTES:
                text = format_pdf_date(value)
            else:
                text = str(value)
            # one InfoValue per line
            if "\n" in text or "\r" in text:
                raise InvalidArgumentError(f"{INFO_KEYS[f.name]} must be a single line")
            yield INFO_KEYS[f.name], text

    def to_info_block(self) -> str:
        lines = []
        write_info(lines.append, self)
        return "".join(line + "\n" for line in lines)


def write_info(writer, info: DocumentInfo):
    """Write info entries in the style of pdftk dump_data."""
    for key, value in info.items():
        writer(f"{c.INFO_BEGIN}\n{c.INFO_KEY}: {key}\n{c.INFO_VALUE}: {value}")
