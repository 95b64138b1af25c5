# vellum/vellum_io/generics.py
# Generic utilities for Vellum IO operations & filesystem helpers

import json
from pathlib import Path
from typing import Any, Union

from ..core.exceptions import FileReadError, FileWriteError, JSONParsingError
from ..core.verbose import vlog_file


def ensure_parent(path: Union[Path, str]) -> None:
    # create parent directories for any file path
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)


# write JSON w/ UTF-8 encoding, creating parent dirs as needed
def write_json_safe(obj: dict[str, Any], path: Path) -> None:
    content = json.dumps(obj, indent=2, ensure_ascii=False)
    write_text_safe(content, path)


# write text w/ UTF-8 encoding, creating parent dirs as needed
def write_text_safe(content: str, path: Path) -> None:
    path = Path(path)
    try:
        ensure_parent(path)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileWriteError(f"Cannot write {path}: {e}", path) from e
    vlog_file("Write", path, len(content))


# write raw bytes (PDF output), creating parent dirs as needed
def write_bytes_safe(content: bytes, path: Path) -> None:
    path = Path(path)
    try:
        ensure_parent(path)
        path.write_bytes(content)
    except OSError as e:
        raise FileWriteError(f"Cannot write {path}: {e}", path) from e
    vlog_file("Write", path, len(content))


# read text w/ UTF-8 encoding
def read_text_safe(path: Path) -> str:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise FileReadError(f"File not found: {path}", path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(f"Cannot read {path}: {e}", path) from e
    vlog_file("Read", path, len(text))
    return text


# read JSON w/ UTF-8 encoding, return dict
def read_json_safe(path: Path) -> dict[str, Any]:
    text = read_text_safe(path)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        # trimmed snippet of the offending JSON, 1-based line numbers
        lines = text.split("\n")
        line_num = e.lineno - 1
        snippet_start = max(0, line_num - 2)
        snippet_end = min(len(lines), line_num + 3)

        numbered_lines = []
        for i, line in enumerate(lines[snippet_start:snippet_end], start=snippet_start + 1):
            marker = ">>> " if i == e.lineno else "    "
            numbered_lines.append(f"{marker}{i:3}: {line}")

        snippet = "\n".join(numbered_lines)
        raise JSONParsingError(f"Invalid JSON in {path}:\n{snippet}\nError: {e.msg}")
    if not isinstance(data, dict):
        raise JSONParsingError(
            f"Expected a JSON object in {path}, got {type(data).__name__}"
        )
    return data

