# src/pdftkforms/cli/__init__.py
