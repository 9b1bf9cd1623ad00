"""Error types for the strict validation path.

Translation itself never raises on malformed source text or unknown
language ids; these are only raised where a caller asks for validation.
"""

from __future__ import annotations

from dataclasses import dataclass


class TranslateError(Exception):
    """Base class for structured array-translate errors."""


@dataclass(frozen=True)
class UnknownLanguageError(TranslateError, ValueError):
    """A language id outside the supported closed set."""

    language: str
    choices: tuple[str, ...] = ()

    def __str__(self) -> str:
        known = ""
        if self.choices:
            known = f"; expected one of {', '.join(self.choices)}"
        return f"Unknown language {self.language!r}{known}"
