"""Micro-lexer that separates translatable code from strings and comments.

Only enough of each language is recognized to know where string literals
and comments begin and end; everything else is "code".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from .languages import LexicalProfile, StringDelimiter, is_word_char, lexical_profile


class Region(IntEnum):
    CODE = 0
    STRING = 1
    COMMENT = 2


@dataclass(frozen=True)
class Span:
    kind: Region
    start: int
    end: int


_LINE_BREAKS = {"\n", "\r"}


def _line_end(text: str, pos: int) -> int:
    i = pos
    while i < len(text) and text[i] not in _LINE_BREAKS:
        i += 1
    return i


def _scan_fixed_width(text: str, start: int, delim: StringDelimiter) -> int:
    i = start
    taken = 0
    while taken < (delim.width or 0) and i < len(text) and text[i] not in _LINE_BREAKS:
        if delim.escape is not None and text.startswith(delim.escape, i):
            i += len(delim.escape)
            if i < len(text) and text[i] not in _LINE_BREAKS:
                i += 1
        else:
            i += 1
        taken += 1
    if delim.closer and text.startswith(delim.closer, i):
        i += len(delim.closer)
    return i


def _scan_delimited(text: str, start: int, delim: StringDelimiter) -> int:
    closer = delim.closer
    i = start
    while i < len(text):
        if text[i] in _LINE_BREAKS:
            # unterminated: the line break closes the string but is not part of it
            return i
        if delim.escape is not None and text.startswith(delim.escape, i):
            i += len(delim.escape)
            if i < len(text) and text[i] not in _LINE_BREAKS:
                i += 1
            continue
        if text.startswith(closer, i):
            i += len(closer)
            if delim.escape is None and text.startswith(closer, i):
                i += len(closer)
                continue
            return i
        i += 1
    return i


def skip_string(text: str, pos: int, profile: LexicalProfile) -> int:
    """Offset just past a string literal starting at ``pos``, else ``pos``."""
    for delim in profile.strings:
        if not text.startswith(delim.open, pos):
            continue
        body = pos + len(delim.open)
        if delim.to_line_end:
            return _line_end(text, body)
        if delim.width is not None:
            return _scan_fixed_width(text, body, delim)
        return _scan_delimited(text, body, delim)
    return pos


def comment_marker_at(text: str, pos: int, profile: LexicalProfile) -> str | None:
    for marker in profile.comments:
        if not text.startswith(marker, pos):
            continue
        if is_word_char(marker[0]) and pos > 0 and is_word_char(text[pos - 1]):
            continue
        return marker
    return None


def skip_comment(text: str, pos: int, profile: LexicalProfile) -> int:
    """Offset of the end of a comment starting at ``pos`` (its line end), else ``pos``."""
    marker = comment_marker_at(text, pos, profile)
    if marker is None:
        return pos
    return _line_end(text, pos + len(marker))


def skip_protected(text: str, pos: int, profile: LexicalProfile) -> int:
    end = skip_string(text, pos, profile)
    if end != pos:
        return end
    return skip_comment(text, pos, profile)


def scan_regions(text: str, language: str) -> list[Span]:
    """Split ``text`` into consecutive code/string/comment spans.

    Unknown languages have no strings or comments, so the whole text is one
    code span.
    """
    if not text:
        return []
    profile = lexical_profile(language)
    if profile is None:
        return [Span(Region.CODE, 0, len(text))]

    spans: list[Span] = []
    code_start = 0
    i = 0
    while i < len(text):
        end = skip_string(text, i, profile)
        kind = Region.STRING
        if end == i:
            end = skip_comment(text, i, profile)
            kind = Region.COMMENT
        if end == i:
            i += 1
            continue
        if code_start < i:
            spans.append(Span(Region.CODE, code_start, i))
        spans.append(Span(kind, i, end))
        i = end
        code_start = end
    if code_start < len(text):
        spans.append(Span(Region.CODE, code_start, len(text)))
    return spans


def region_mask(text: str, language: str) -> np.ndarray:
    """Per-character ``Region`` codes for ``text`` as a ``uint8`` array."""
    mask = np.zeros(len(text), dtype=np.uint8)
    for span in scan_regions(text, language):
        if span.kind != Region.CODE:
            mask[span.start : span.end] = int(span.kind)
    return mask
