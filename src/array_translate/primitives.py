"""Cross-language primitive correspondence table.

Each concept links the tokens that six array languages use for the same
*monadic* operation. ``None`` marks a language with no direct equivalent
(or one whose meaning differs too much to substitute). Dyadic meanings can
diverge even where the monadic forms line up.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, Mapping

from .languages import LANGUAGES


@dataclass(frozen=True)
class PrimitiveConcept:
    name: str
    tokens: Mapping[str, str | None] = field(repr=False, hash=False)
    category: str = "function"
    note: str = ""

    def __post_init__(self) -> None:
        missing = [lang for lang in LANGUAGES if lang not in self.tokens]
        if missing:
            raise ValueError(f"Concept {self.name!r} is missing languages: {', '.join(missing)}")
        object.__setattr__(self, "tokens", MappingProxyType(dict(self.tokens)))

    def token(self, language: str) -> str | None:
        return self.tokens.get(language)


def _concept(name: str, category: str, note: str = "", **tokens: str | None) -> PrimitiveConcept:
    return PrimitiveConcept(name=name, tokens=tokens, category=category, note=note)


PRIMITIVE_CONCEPTS: Final[tuple[PrimitiveConcept, ...]] = (
    # syntax
    _concept(
        "comment", "syntax", "J's comment marker is a word",
        apl="⍝", bqn="#", uiua="#", j="NB.", kap="⍝", tinyapl="⍝",
    ),
    _concept(
        "leftArg", "syntax", "Uiua is stack based; J's x is an ordinary name",
        apl="⍺", bqn="𝕨", uiua=None, j=None, kap="⍺", tinyapl="⍺",
    ),
    _concept(
        "rightArg", "syntax", "Uiua is stack based; J's y is an ordinary name",
        apl="⍵", bqn="𝕩", uiua=None, j=None, kap="⍵", tinyapl="⍵",
    ),
    _concept(
        "leftOperand", "syntax", "two-character operand markers in APL and TinyAPL",
        apl="⍺⍺", bqn="𝔽", uiua=None, j=None, kap=None, tinyapl="⍶⍶",
    ),
    _concept(
        "rightOperand", "syntax", "two-character operand markers in APL and TinyAPL",
        apl="⍵⍵", bqn="𝔾", uiua=None, j=None, kap=None, tinyapl="⍹⍹",
    ),
    _concept(
        "selfRef", "syntax",
        apl="∇", bqn="𝕊", uiua=None, j="$:", kap="∇", tinyapl="∇",
    ),
    # monadic functions
    _concept(
        "iota", "function", "index generator",
        apl="⍳", bqn="↕", uiua="⇡", j="i.", kap="⍳", tinyapl="⍳",
    ),
    _concept(
        "tally", "function", "count of major cells",
        apl="≢", bqn="≠", uiua="⧻", j="#", kap="≢", tinyapl="≢",
    ),
    _concept(
        "shape", "function",
        apl="⍴", bqn="≢", uiua="△", j="$", kap="⍴", tinyapl="⍴",
    ),
    _concept(
        "reverse", "function",
        apl="⌽", bqn="⌽", uiua="⇌", j="|.", kap="⌽", tinyapl="⌽",
    ),
    _concept(
        "transpose", "function",
        apl="⍉", bqn="⍉", uiua="⍉", j="|:", kap="⍉", tinyapl="⍉",
    ),
    _concept(
        "enclose", "function", "box",
        apl="⊂", bqn="<", uiua="□", j="<", kap="⊂", tinyapl="⊂",
    ),
    _concept(
        "first", "function", "disclose; open in J",
        apl="⊃", bqn="⊑", uiua="⊢", j=">", kap="⊃", tinyapl="⊃",
    ),
    _concept(
        "unique", "function",
        apl="∪", bqn="⍷", uiua="◴", j="~.", kap="∪", tinyapl="∪",
    ),
    _concept(
        "where", "function", "indices of nonzero elements",
        apl="⍸", bqn="/", uiua="⊚", j="I.", kap="⍸", tinyapl="⍸",
    ),
    _concept(
        "gradeUp", "function",
        apl="⍋", bqn="⍋", uiua="⍏", j="/:", kap="⍋", tinyapl="⍋",
    ),
    _concept(
        "gradeDown", "function",
        apl="⍒", bqn="⍒", uiua="⍖", j="\\:", kap="⍒", tinyapl="⍒",
    ),
    _concept(
        "identity", "function",
        apl="⊢", bqn="⊢", uiua="∘", j="]", kap="⊢", tinyapl="⊢",
    ),
    _concept(
        "depth", "function",
        apl="≡", bqn="≡", uiua=None, j="L.", kap="≡", tinyapl="≡",
    ),
    _concept(
        "ravel", "function",
        apl=",", bqn="⥊", uiua="♭", j=",", kap=",", tinyapl=",",
    ),
    _concept(
        "enlist", "function", "BQN's ∊ means something else",
        apl="∊", bqn=None, uiua=None, j=";", kap="∊", tinyapl="∊",
    ),
    # arithmetic
    _concept(
        "multiply", "function",
        apl="×", bqn="×", uiua="×", j="*", kap="×", tinyapl="×",
    ),
    # modifiers
    _concept(
        "reduce", "modifier",
        apl="/", bqn="´", uiua="/", j="/", kap="/", tinyapl="/",
    ),
    _concept(
        "scan", "modifier",
        apl="\\", bqn="`", uiua="\\", j="\\", kap="\\", tinyapl="\\",
    ),
    _concept(
        "each", "modifier", "Uiua rows and J rank \"0 are different paradigms",
        apl="¨", bqn="¨", uiua=None, j=None, kap="¨", tinyapl="¨",
    ),
    _concept(
        "table", "modifier", "J's dyadic / clashes with reduce",
        apl="∘.", bqn="⌜", uiua="⊞", j=None, kap="⌻", tinyapl="⊞",
    ),
    _concept(
        "commute", "modifier",
        apl="⍨", bqn="˜", uiua="˜", j="~", kap="⍨", tinyapl="⍨",
    ),
)


_BY_NAME: Final[dict[str, PrimitiveConcept]] = {c.name: c for c in PRIMITIVE_CONCEPTS}


def concept_names() -> tuple[str, ...]:
    return tuple(_BY_NAME)


def concept(name: str) -> PrimitiveConcept | None:
    return _BY_NAME.get(name)


def token_for(name: str, language: str) -> str | None:
    """Token ``language`` uses for concept ``name``; ``None`` if absent or unknown."""
    found = _BY_NAME.get(name)
    if found is None:
        return None
    return found.token(language)
