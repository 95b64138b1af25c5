from setuptools import setup, find_packages

setup(
    name="vellum",
    version="0.1.0",
    description="Build & edit resumes w/ a local Ollama model",
    packages=find_packages(exclude=["tests*"]),
    install_requires=[
        "typer",
        "rich",
        "ollama",
        "python-dotenv",
        "beautifulsoup4",
        "fpdf2",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "vellum=vellum.cli:app",
        ],
    },
    python_requires=">=3.11",
)
