# tests/conftest.py
# Pytest configuration w/ isolation fixtures for deterministic test runs

import json
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    # Patch Path.home() to isolated temp directory
    fake_home = tmp_path / "fake_home"
    fake_home.mkdir()

    # Create isolated .vellum directory
    vellum_dir = fake_home / ".vellum"
    vellum_dir.mkdir()

    # Create minimal config.json w/ test defaults
    config_data = {
        "output_dir": "output",
        "document_filename": "resume.json",
        "base_dir": ".vellum",
        "profile_filename": "profile.json",
        "ollama_host": "http://127.0.0.1:11434",
        "model": "llama2",
        "temperature": 0.7,
        "page_format": "A4",
        "dev_mode": False,
    }

    config_file = vellum_dir / "config.json"
    with open(config_file, "w") as f:
        json.dump(config_data, f, indent=2)

    monkeypatch.setattr(Path, "home", lambda: fake_home)

    # ! environment overrides would leak from the developer's shell or .env
    monkeypatch.delenv("OLLAMA_URL", raising=False)
    monkeypatch.delenv("OLLAMA_MODEL", raising=False)

    # ! reset global settings_manager state & patch its config_path to use isolated location
    from vellum.config.settings import settings_manager

    settings_manager._settings = None
    settings_manager.config_path = fake_home / ".vellum" / "config.json"

    # ! reset Ollama availability cache
    from vellum.ai.cache import AICache

    AICache.invalidate_all()

    # ! reset output manager to NullOutputManager for test isolation
    from vellum.core.output import reset_output_manager

    reset_output_manager()

    from vellum.vellum_io.console import reset_console

    reset_console()

    yield fake_home

    reset_output_manager()
    AICache.invalidate_all()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    # Run relative-path operations (output/resume.json) inside tmp_path
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


class FakeOllamaClient:
    # Stand-in for ollama.Client; class attributes are configured per test
    models: list = [{"model": "llama2:latest"}]
    reply: str = "# Jane Doe\n\n## Summary\n\nBuilder of things."
    list_error: Exception | None = None
    chat_error: Exception | None = None
    calls: list = []

    def __init__(self, host=None, **kwargs):
        self.host = host

    def list(self):
        if FakeOllamaClient.list_error is not None:
            raise FakeOllamaClient.list_error
        return {"models": list(FakeOllamaClient.models)}

    def chat(self, model, messages, options=None):
        FakeOllamaClient.calls.append(
            {"host": self.host, "model": model, "messages": messages, "options": options}
        )
        if FakeOllamaClient.chat_error is not None:
            raise FakeOllamaClient.chat_error
        return {"message": {"role": "assistant", "content": FakeOllamaClient.reply}}


@pytest.fixture
def fake_ollama(monkeypatch):
    # Patch the SDK client used by OllamaClient; no network access
    FakeOllamaClient.models = [{"model": "llama2:latest"}]
    FakeOllamaClient.reply = "# Jane Doe\n\n## Summary\n\nBuilder of things."
    FakeOllamaClient.list_error = None
    FakeOllamaClient.chat_error = None
    FakeOllamaClient.calls = []
    monkeypatch.setattr(
        "vellum.ai.clients.ollama_client.ollama.Client", FakeOllamaClient
    )
    return FakeOllamaClient


@pytest.fixture
def sample_markdown():
    return (
        "# Jane Doe\n"
        "\n"
        "## Experience\n"
        "\n"
        "- Built **fast** systems\n"
        "- Led *small* teams\n"
        "\n"
        "Plain closing paragraph."
    )


@pytest.fixture
def sample_profile_data():
    return {
        "name": "Jane Doe",
        "title": "Software Engineer",
        "summary": "Engineer w/ 6 years building web services.",
        "experience": "Acme Corp, 2019-2024: led platform team",
        "skills": "Python, Go, Kubernetes",
        "education": "BSc Computer Science",
    }


@pytest.fixture
def cli(workdir):
    # invoke the Typer app w/ a wide console so paths & ids never wrap
    from typer.testing import CliRunner

    from vellum.cli import app
    from vellum.vellum_io.console import configure_console

    configure_console(width=250)
    runner = CliRunner()

    def invoke(*args, input=None):
        return runner.invoke(app, [str(a) for a in args], input=input)

    return invoke


@pytest.fixture
def doc_path(workdir):
    # default document location relative to the working directory
    return workdir / "output" / "resume.json"
