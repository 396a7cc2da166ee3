# src/pdftkforms/commands/__init__.py
