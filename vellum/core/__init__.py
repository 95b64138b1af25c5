# vellum/core/__init__.py
# Core layer: exceptions & output registry (no I/O, no CLI imports)
