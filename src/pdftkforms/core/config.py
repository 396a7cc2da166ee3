# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# src/pdftkforms/core/config.py

"""Locate the pdftk command"""

from __future__ import annotations

import logging
import os
import shlex
from typing import Sequence, Union

import pdftkforms.core.constants as c
from pdftkforms.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

PdftkCommand = Union[str, Sequence[str], None]


def pdftk_command(override: PdftkCommand = None) -> list[str]:
    """
    Return the argv prefix used to run pdftk.

    Resolution order:
    1. An explicit override (a string is shell-split, a sequence is used as is).
    2. The PDFTKFORMS_PDFTK environment variable (shell-split).
    3. Plain "pdftk" from PATH.
    """
    if override is None:
        override = os.environ.get(c.PDFTK_ENV_VAR) or c.DEFAULT_PDFTK

    if isinstance(override, (str, os.PathLike)):
        argv = shlex.split(os.fspath(override), posix=os.name != "nt")
    else:
        argv = [os.fspath(part) for part in override]

    if not argv:
        raise InvalidArgumentError("Empty pdftk command")

    logger.debug("pdftk command: %s", argv)
    return argv
