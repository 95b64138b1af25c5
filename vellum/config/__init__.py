# vellum/config/__init__.py
# Settings persistence & environment overrides
