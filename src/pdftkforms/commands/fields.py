# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# src/pdftkforms/commands/fields.py

"""List the fillable fields of a PDF form"""

from __future__ import annotations

import logging

import pdftkforms.core.constants as c
from pdftkforms.core.config import PdftkCommand
from pdftkforms.core.process import run_pdftk
from pdftkforms.forms.dump_parser import parse_field_dump
from pdftkforms.utils.io_helpers import ensure_readable

logger = logging.getLogger(__name__)


def fields(pdf, pdftk: PdftkCommand = None) -> dict[str, dict]:
    """
    Describe every form field in `pdf`.

    Runs `pdftk <pdf> dump_data_fields_utf8` and parses its stanzas.

    Returns:
        dict: field name -> descriptor, e.g.
            {"checkbox2": {"type": "Button", "value": "Off",
                           "options": ["Off", "Yes"], ...}}

    Raises:
        FileAccessError: `pdf` is not a readable file (pdftk is not run).
        PdftkError: pdftk wrote to stderr or failed.
    """
    path = ensure_readable(pdf)
    stdout = run_pdftk([path, c.DUMP_DATA_FIELDS_UTF8], pdftk=pdftk)
    result = parse_field_dump(stdout.decode("utf-8", errors="replace"))
    logger.debug("Found %d fields in %s", len(result), path)
    return result


def format_fields(descriptors: dict[str, dict]) -> str:
    """
    Render descriptors back into the dump_data_fields stanza format.

    The inverse of parse_field_dump for descriptors it produced. Known
    attributes get pdftk's spelling back (FieldNameAlt, FieldMaxLength);
    unknown ones are capitalized.
    """
    stanzas = []
    for name, descriptor in descriptors.items():
        lines = []
        if "type" in descriptor:
            lines.append(f"FieldType: {descriptor['type']}")
        lines.append(f"Field{c.FIELD_NAME_KEY}: {name}")
        for key, value in descriptor.items():
            if key in ("type", c.OPTIONS):
                continue
            attribute = c.FIELD_ATTRIBUTE_NAMES.get(key, key.capitalize())
            lines.append(f"Field{attribute}: {value}")
        for option in descriptor.get(c.OPTIONS, []):
            lines.append(f"Field{c.FIELD_STATE_OPTION_KEY}: {option}")
        stanzas.append("\n".join(lines))
    return "".join(f"{c.FIELD_SEPARATOR}\n{stanza}\n" for stanza in stanzas)
