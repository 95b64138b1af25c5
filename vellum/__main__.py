# vellum/__main__.py
# Allow `python -m vellum`

from .cli import app

if __name__ == "__main__":
    app()
