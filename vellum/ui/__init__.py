# vellum/ui/__init__.py
# Terminal rendering helpers
