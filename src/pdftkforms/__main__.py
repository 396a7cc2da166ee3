# src/pdftkforms/__main__.py

import sys

from pdftkforms.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
