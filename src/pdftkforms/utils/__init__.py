# src/pdftkforms/utils/__init__.py
