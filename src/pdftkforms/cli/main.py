# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# src/pdftkforms/cli/main.py

"""Command line interface: `pdftkforms fields` and `pdftkforms fill`"""

import argparse
import json
import logging
import shutil
import sys

from pdftkforms import __version__
from pdftkforms.commands.fields import fields, format_fields
from pdftkforms.commands.fill import fill
from pdftkforms.exceptions import FileAccessError, PdfFormError
from pdftkforms.utils.arg_helpers import load_mapping_file
from pdftkforms.utils.io_helpers import smart_open_output

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FILE_ACCESS = 1
EXIT_ERROR = 2

EXAMPLES = """Examples:
  pdftkforms fields form.pdf
  pdftkforms fields form.pdf --json
  pdftkforms fill form.pdf data.json -o filled.pdf
  pdftkforms fill form.pdf data.yaml --no-flatten --info info.json > filled.pdf
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdftkforms",
        description="List and fill PDF form fields using pdftk.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress")
    parser.add_argument("--debug", action="store_true", help="log pdftk commands and data")
    parser.add_argument("--pdftk", default=None, help="pdftk command (default: $PDFTKFORMS_PDFTK or pdftk)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_fields = sub.add_parser("fields", help="list the fields of a form")
    p_fields.add_argument("pdf")
    p_fields.add_argument("--json", action="store_true", help="print JSON instead of stanzas")

    p_fill = sub.add_parser("fill", help="fill a form from a JSON/YAML file")
    p_fill.add_argument("pdf")
    p_fill.add_argument("data", help="field values file ('-' for JSON on stdin)")
    p_fill.add_argument("-o", "--output", default=None, help="output file (default: stdout)")
    p_fill.add_argument(
        "--no-flatten", dest="flatten", action="store_false", help="keep the fields editable"
    )
    p_fill.add_argument("--info", default=None, help="document info file (JSON/YAML)")
    return parser


def setup_logging(verbose=False, debug=False):
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(name)s: %(message)s")


def _run_fields(args):
    descriptors = fields(args.pdf, pdftk=args.pdftk)
    if args.json:
        print(json.dumps(descriptors, indent=2, ensure_ascii=False))
    else:
        sys.stdout.write(format_fields(descriptors))


def _run_fill(args):
    field_values = load_mapping_file(args.data)
    info = load_mapping_file(args.info) if args.info else None
    stream = fill(
        args.pdf,
        field_values,
        flatten=args.flatten,
        info=info,
        verbose=args.verbose,
        pdftk=args.pdftk,
    )
    with stream, smart_open_output(args.output, mode="wb") as out:
        shutil.copyfileobj(stream, out)
    logger.info("Wrote %s", args.output or "<stdout>")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.debug)

    try:
        if args.command == "fields":
            _run_fields(args)
        else:
            _run_fill(args)
    except FileAccessError as exc:
        print(f"pdftkforms: error: {exc}", file=sys.stderr)
        return EXIT_FILE_ACCESS
    except PdfFormError as exc:
        print(f"pdftkforms: error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    return EXIT_OK
