# src/pdftkforms/forms/__init__.py
