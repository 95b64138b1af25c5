# vellum/__init__.py
# Vellum: AI-assisted resume builder w/ a structured, editable document model

__version__ = "0.1.0"
