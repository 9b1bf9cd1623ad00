"""Language ids and per-language lexical profiles."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, Literal

from .errors import UnknownLanguageError


LanguageId = Literal["apl", "bqn", "uiua", "j", "kap", "tinyapl"]

LANGUAGES: Final[tuple[LanguageId, ...]] = ("apl", "bqn", "uiua", "j", "kap", "tinyapl")


@dataclass(frozen=True)
class StringDelimiter:
    """How one kind of string or character literal is written.

    ``escape=None`` means the doubled-delimiter convention (``''`` inside an
    APL string is one quote). ``width`` fixes the number of characters of a
    character literal; ``close=""`` means the literal has no closing mark.
    ``to_line_end`` literals run to the end of the line.
    """

    open: str
    close: str | None = None
    escape: str | None = None
    width: int | None = None
    to_line_end: bool = False

    @property
    def closer(self) -> str:
        return self.open if self.close is None else self.close


@dataclass(frozen=True)
class LexicalProfile:
    language: LanguageId
    strings: tuple[StringDelimiter, ...]
    comments: tuple[str, ...]
    separator: str
    negative: str
    number: re.Pattern[str]
    number_start: str = "0123456789."
    # characters that extend a primitive into a different word (J's i. or #:)
    inflections: str = ""


def is_word_char(ch: str) -> bool:
    """Characters that may continue a name; word-like tokens never start after one."""
    return ch == "_" or ch.isalnum()


def _real(neg: str, exponent: str) -> str:
    # neg and exponent are inserted as regex source
    return rf"{neg}?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:{exponent}{neg}?[0-9]+)?"


_APL_NUMBER = re.compile(rf"{_real('¯', '[eE]')}(?:[jJ]{_real('¯', '[eE]')})?")

_BQN_NUMBER = re.compile(
    r"¯?(?:∞|π(?:[eE]¯?[0-9]+)?|(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE]¯?[0-9]+)?)"
    r"(?:[iI]¯?(?:∞|π|(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE]¯?[0-9]+)?))?"
)

_UIUA_NUMBER = re.compile(r"¯?[0-9]+(?:\.[0-9]+)?(?:e¯?[0-9]+)?")

_J_NUMBER = re.compile(rf"{_real('_', 'e')}(?:(?:j|r|ad|ar){_real('_', 'e')}|x)?")

_KAP_NUMBER = re.compile(rf"{_real('¯', '[eE]')}(?:(?:J|r){_real('¯', '[eE]')})?")

_TINYAPL_NUMBER = re.compile(rf"{_real('¯', '⏨')}(?:ᴊ{_real('¯', '⏨')})?")


PROFILES: Final[dict[LanguageId, LexicalProfile]] = {
    "apl": LexicalProfile(
        language="apl",
        strings=(StringDelimiter("'"),),
        comments=("⍝",),
        separator=" ",
        negative="¯",
        number=_APL_NUMBER,
    ),
    "bqn": LexicalProfile(
        language="bqn",
        strings=(StringDelimiter('"'), StringDelimiter("'", width=1)),
        comments=("#",),
        separator="‿",
        negative="¯",
        number=_BQN_NUMBER,
        number_start="0123456789.∞π",
    ),
    "uiua": LexicalProfile(
        language="uiua",
        strings=(
            StringDelimiter('"', escape="\\"),
            StringDelimiter("$ ", to_line_end=True),
            StringDelimiter("@", close="", escape="\\", width=1),
        ),
        comments=("#",),
        separator="_",
        negative="¯",
        number=_UIUA_NUMBER,
    ),
    "j": LexicalProfile(
        language="j",
        strings=(StringDelimiter("'"),),
        comments=("NB.",),
        separator=" ",
        negative="_",
        number=_J_NUMBER,
        inflections=".:",
    ),
    "kap": LexicalProfile(
        language="kap",
        strings=(
            StringDelimiter('"', escape="\\"),
            StringDelimiter("@", close="", escape="\\", width=1),
        ),
        comments=("⍝",),
        separator=" ",
        negative="¯",
        number=_KAP_NUMBER,
    ),
    "tinyapl": LexicalProfile(
        language="tinyapl",
        strings=(
            StringDelimiter('"', escape="\\"),
            StringDelimiter("'", escape="\\", width=1),
        ),
        comments=("⍝",),
        separator="‿",
        negative="¯",
        number=_TINYAPL_NUMBER,
    ),
}


def is_language(value: object) -> bool:
    return isinstance(value, str) and value in PROFILES


def lexical_profile(language: str) -> LexicalProfile | None:
    """Profile for ``language``, or ``None`` when the id is not supported."""
    return PROFILES.get(language)  # type: ignore[call-overload]


def require_language(value: str) -> LanguageId:
    """Normalize and validate a user-supplied language id."""
    normalized = value.strip().casefold()
    if normalized not in PROFILES:
        raise UnknownLanguageError(value, LANGUAGES)
    return normalized  # type: ignore[return-value]
