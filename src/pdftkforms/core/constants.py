# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# src/pdftkforms/core/constants.py

"""Constants shared across pdftkforms"""

DEFAULT_PDFTK = "pdftk"
PDFTK_ENV_VAR = "PDFTKFORMS_PDFTK"

# pdftk keywords
DUMP_DATA_FIELDS_UTF8 = "dump_data_fields_utf8"
UPDATE_INFO_UTF8 = "update_info_utf8"
FILL_FORM = "fill_form"
OUTPUT = "output"
FLATTEN = "flatten"
STDIO = "-"

# dump_data_fields stanza format
FIELD_SEPARATOR = "---"
FIELD_NAME_KEY = "Name"
FIELD_STATE_OPTION_KEY = "StateOption"
OPTIONS = "options"
# descriptor key -> attribute spelling in pdftk output
FIELD_ATTRIBUTE_NAMES = {
    "type": "Type",
    "namealt": "NameAlt",
    "flags": "Flags",
    "value": "Value",
    "valuedefault": "ValueDefault",
    "justification": "Justification",
    "maxlength": "MaxLength",
    "stateoptiondisplay": "StateOptionDisplay",
}

# update_info stanza format
INFO_BEGIN = "InfoBegin"
INFO_KEY = "InfoKey"
INFO_VALUE = "InfoValue"

# PDF date strings, always rendered in UTC
PDF_DATE_FORMAT = "D:%Y%m%d%H%M%SZ00'00'"

# XFDF
XFDF_NAMESPACE = "http://ns.adobe.com/xfdf/"
XFDF_SUFFIX = ".xfdf"
BOOLEAN_ON = "Yes"
BOOLEAN_OFF = "Off"

# Size of each read from pdftk's stdout
READ_CHUNK_SIZE = 64 * 1024
