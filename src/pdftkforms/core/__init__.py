# src/pdftkforms/core/__init__.py
