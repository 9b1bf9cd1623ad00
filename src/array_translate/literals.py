"""Numeric array literals: recognition and rewriting between notations."""

from __future__ import annotations

from dataclasses import dataclass

from .languages import LexicalProfile, is_word_char


@dataclass(frozen=True)
class ArrayLiteralRun:
    elements: tuple[str, ...]
    start: int
    end: int


def match_number(text: str, pos: int, profile: LexicalProfile) -> int | None:
    """End offset of the number literal at ``pos``, or ``None``."""
    m = profile.number.match(text, pos)
    if m is None or m.end() == pos:
        return None
    return m.end()


def starts_number(text: str, pos: int, profile: LexicalProfile) -> bool:
    if pos >= len(text):
        return False
    if pos > 0 and is_word_char(text[pos - 1]):
        # digits inside a name such as x1
        return False
    return text[pos] in profile.number_start or text.startswith(profile.negative, pos)


def parse_array_literal(text: str, pos: int, profile: LexicalProfile) -> ArrayLiteralRun | None:
    """Greedy run of two or more numbers joined by the profile's separator."""
    end = match_number(text, pos, profile)
    if end is None:
        return None
    elements = [text[pos:end]]
    sep = profile.separator
    while text.startswith(sep, end):
        next_end = match_number(text, end + len(sep), profile)
        if next_end is None:
            break
        elements.append(text[end + len(sep) : next_end])
        end = next_end
    if len(elements) < 2:
        return None
    return ArrayLiteralRun(elements=tuple(elements), start=pos, end=end)


def translate_element(element: str, source: LexicalProfile, target: LexicalProfile) -> str:
    if element.startswith(source.negative):
        return target.negative + element[len(source.negative) :]
    return element


def translate_run(run: ArrayLiteralRun, source: LexicalProfile, target: LexicalProfile) -> str:
    return target.separator.join(translate_element(e, source, target) for e in run.elements)


def literal_notation_matches(source: LexicalProfile, target: LexicalProfile) -> bool:
    return source.separator == target.separator and source.negative == target.negative
