# src/pdftkforms/info/__init__.py
