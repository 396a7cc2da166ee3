# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# src/pdftkforms/forms/dump_parser.py

"""Parse pdftk's dump_data_fields text into field descriptors.

The input is a sequence of stanzas separated by `---` lines:

    ---
    FieldType: Button
    FieldName: checkbox2
    FieldFlags: 0
    FieldValue: Off
    FieldJustification: Left
    FieldStateOption: Off
    FieldStateOption: Yes

Each stanza becomes one descriptor dict, keyed in the result by its
FieldName. FieldStateOption lines accumulate, in order, into an "options"
list; every other FieldXxx line is stored under the lower-cased "xxx" key.
"""

import re

import pdftkforms.core.constants as c

_FIELD_LINE_RE = re.compile(r"^Field([a-z]+): (.*)$", re.IGNORECASE)


def split_stanzas(text):
    """Split dump output into lists of lines, one list per stanza."""
    stanzas = []
    current = []
    for line in text.splitlines():
        if line.strip() == c.FIELD_SEPARATOR:
            stanzas.append(current)
            current = []
        else:
            current.append(line)
    stanzas.append(current)
    return [stanza for stanza in stanzas if stanza]


def iter_field_lines(lines):
    """Yield (key, value) for each `FieldKey: value` line, skipping anything else."""
    for line in lines:
        match = _FIELD_LINE_RE.match(line.rstrip("\r"))
        if match:
            yield match.group(1), match.group(2)


def parse_stanza(lines):
    """
    Build one descriptor from a stanza.

    Returns (names, descriptor). `names` is every FieldName seen; usually one.
    """
    names = []
    descriptor = {}
    for key, value in iter_field_lines(lines):
        if key == c.FIELD_NAME_KEY:
            names.append(value)
        elif key == c.FIELD_STATE_OPTION_KEY:
            descriptor.setdefault(c.OPTIONS, []).append(value)
        else:
            descriptor[key.lower()] = value
    return names, descriptor


def parse_field_dump(text):
    """
    Parse dump_data_fields(_utf8) output.

    Returns:
        dict[str, dict]: field name -> descriptor. Stanzas without a
        FieldName are dropped. A later stanza with a repeated name
        replaces the earlier one.
    """
    result = {}
    for stanza in split_stanzas(text):
        names, descriptor = parse_stanza(stanza)
        for name in names:
            result[name] = descriptor
    return result
