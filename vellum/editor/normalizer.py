# vellum/editor/normalizer.py
# Markdown -> document tree conversion w/ graceful degradation of malformed blocks

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..core.verbose import vlog_degradation
from .nodes import (
    DocumentNode,
    bullet_list,
    doc,
    heading,
    list_item,
    paragraph,
    text,
)

# heading marker: 1-3 '#' followed by a space
HEADING_RE = re.compile(r"^(#{1,3}) (.*)$")
# heading-like line that is not a supported heading (4+ '#' or no space)
HEADING_LIKE_RE = re.compile(r"^#+(?:\S|\s)")
LIST_ITEM_PREFIX = "- "

# emphasis spans; markers must hug non-space text
INLINE_RE = re.compile(
    r"\*\*\*(?=\S)(?P<both>.+?)(?<=\S)\*\*\*"
    r"|\*\*(?=\S)(?P<bold>.+?)(?<=\S)\*\*"
    r"|\*(?=\S)(?P<italic>.+?)(?<=\S)\*"
)
# leftover marker that opens or closes emphasis w/out a partner
DANGLING_RE = re.compile(r"\*\*|(?<!\S)\*(?=\S)|(?<=\S)\*(?!\S)")


@dataclass
class NormalizationDegradation:
    line: int  # 1-based source line where the block starts
    reason: str
    raw: str


@dataclass
class NormalizeResult:
    root: DocumentNode
    degradations: list[NormalizationDegradation] = field(default_factory=list)


class _UnterminatedEmphasis(Exception):
    pass


# * Convert markdown text to a document tree
def normalize(markdown_text: str) -> DocumentNode:
    return normalize_with_report(markdown_text).root


# * Convert markdown text & report which blocks were degraded to plain paragraphs
def normalize_with_report(markdown_text: str) -> NormalizeResult:
    report: list[NormalizationDegradation] = []
    blocks: list[DocumentNode] = []
    para_lines: list[str] = []
    para_start = 0
    items: list[DocumentNode] = []

    def flush_paragraph() -> None:
        if para_lines:
            raw = "\n".join(para_lines)
            blocks.append(paragraph(*_inline_or_raw(raw, para_start, report)))
            para_lines.clear()

    def flush_list() -> None:
        if items:
            blocks.append(bullet_list(*items))
            items.clear()

    lines = markdown_text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            flush_paragraph()
            flush_list()
            continue

        match = HEADING_RE.match(line)
        if match:
            flush_paragraph()
            flush_list()
            level = len(match.group(1))
            blocks.append(heading(level, *_inline_or_raw(match.group(2), lineno, report)))
            continue

        stripped = line.lstrip()
        if stripped.startswith(LIST_ITEM_PREFIX):
            flush_paragraph()
            content = stripped[len(LIST_ITEM_PREFIX):]
            items.append(list_item(*_inline_or_raw(content, lineno, report)))
            continue

        flush_list()
        if HEADING_LIKE_RE.match(line):
            _degrade(report, lineno, "unsupported heading marker", line)
        if not para_lines:
            para_start = lineno
        para_lines.append(line)

    flush_paragraph()
    flush_list()

    if not blocks:
        blocks.append(paragraph())
    return NormalizeResult(root=doc(*blocks), degradations=report)


# * Parse inline emphasis into text runs
def parse_inline(source: str) -> list[DocumentNode]:
    return _parse_spans(source, bold=False, italic=False)


def _inline_or_raw(
    source: str, lineno: int, report: list[NormalizationDegradation]
) -> list[DocumentNode]:
    try:
        return parse_inline(source)
    except _UnterminatedEmphasis:
        _degrade(report, lineno, "unterminated emphasis marker", source)
        return [text(source)] if source else []


def _parse_spans(source: str, *, bold: bool, italic: bool) -> list[DocumentNode]:
    runs: list[DocumentNode] = []
    pos = 0
    for match in INLINE_RE.finditer(source):
        _plain(source[pos : match.start()], runs, bold=bold, italic=italic)
        if match.group("both") is not None:
            runs.extend(_parse_spans(match.group("both"), bold=True, italic=True))
        elif match.group("bold") is not None:
            runs.extend(_parse_spans(match.group("bold"), bold=True, italic=italic))
        else:
            runs.extend(_parse_spans(match.group("italic"), bold=bold, italic=True))
        pos = match.end()
    _plain(source[pos:], runs, bold=bold, italic=italic)
    return runs


def _plain(segment: str, runs: list[DocumentNode], *, bold: bool, italic: bool) -> None:
    if not segment:
        return
    if DANGLING_RE.search(segment):
        raise _UnterminatedEmphasis(segment)
    runs.append(text(segment, bold=bold, italic=italic))


def _degrade(
    report: list[NormalizationDegradation], line: int, reason: str, raw: str
) -> None:
    report.append(NormalizationDegradation(line=line, reason=reason, raw=raw))
    vlog_degradation(line, reason, raw)
