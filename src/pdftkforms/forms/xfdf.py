# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# src/pdftkforms/forms/xfdf.py

"""Build XFDF documents for pdftk's fill_form.

Public methods:

generate_xfdf
xfdf_value_strings

"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from typing import Any

from lxml import etree

import pdftkforms.core.constants as c
from pdftkforms.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

# characters outside the XML 1.0 Char production
_XML_ILLEGAL = re.compile(r"[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _check_xml_text(text: str, what: str) -> str:
    match = _XML_ILLEGAL.search(text)
    if match:
        raise InvalidArgumentError(
            f"{what} contains a character not allowed in XML (U+{ord(match.group()):04X})"
        )
    return text


def xfdf_value_strings(name: str, value: Any) -> list[str]:
    """
    Convert one field value to the string(s) written as <value> elements.

    Booleans map to the usual checkbox states "Yes"/"Off". A list or tuple
    gives one <value> per item, for multi-select list boxes. Strings with
    characters XML cannot carry raise InvalidArgumentError.
    """
    if value is None:
        return [""]
    if isinstance(value, bool):
        return [c.BOOLEAN_ON if value else c.BOOLEAN_OFF]
    if isinstance(value, (str, int, float)):
        return [_check_xml_text(str(value), f"Field '{name}' value")]
    if isinstance(value, (list, tuple)):
        out = []
        for item in value:
            if isinstance(item, (list, tuple, Mapping)):
                raise InvalidArgumentError(f"Field '{name}': nested values are not supported")
            out.extend(xfdf_value_strings(name, item))
        return out
    raise InvalidArgumentError(
        f"Field '{name}': unsupported value type {type(value).__name__}"
    )


def build_xfdf_tree(pdf_path, field_values: Mapping[str, Any]):
    """Return the XFDF root element for `field_values`, referencing `pdf_path`."""
    ns = f"{{{c.XFDF_NAMESPACE}}}"
    root = etree.Element(f"{ns}xfdf", nsmap={None: c.XFDF_NAMESPACE})
    root.set(f"{{{XML_NAMESPACE}}}space", "preserve")
    href = _check_xml_text(os.fspath(pdf_path), "PDF path")
    etree.SubElement(root, f"{ns}f", href=href)
    fields_elem = etree.SubElement(root, f"{ns}fields")

    for name, value in field_values.items():
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError(f"Invalid field name: {name!r}")
        _check_xml_text(name, f"Field name {name!r}")
        field_elem = etree.SubElement(fields_elem, f"{ns}field", name=name)
        for text in xfdf_value_strings(name, value):
            etree.SubElement(field_elem, f"{ns}value").text = text

    return root


def generate_xfdf(pdf_path, field_values: Mapping[str, Any]) -> bytes:
    """Serialize `field_values` as a UTF-8 XFDF document."""
    if not isinstance(field_values, Mapping):
        raise InvalidArgumentError(
            f"Field values must be a mapping, not {type(field_values).__name__}"
        )
    try:
        root = build_xfdf_tree(pdf_path, field_values)
    except ValueError as exc:
        if isinstance(exc, InvalidArgumentError):
            raise
        # lxml refuses strings it cannot encode (e.g. lone surrogates)
        raise InvalidArgumentError(f"Cannot write XFDF: {exc}") from exc
    data = etree.tostring(root, encoding="UTF-8", xml_declaration=True)
    logger.debug("Generated XFDF for %d fields (%d bytes)", len(field_values), len(data))
    return data
