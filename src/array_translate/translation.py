"""Primitive substitution and the combined translation pipeline."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Final, Iterable, Mapping

from .languages import PROFILES, LexicalProfile, is_word_char
from .lexer import comment_marker_at, skip_comment, skip_string
from .literals import literal_notation_matches, parse_array_literal, starts_number, translate_run
from .primitives import PRIMITIVE_CONCEPTS, PrimitiveConcept

logger = logging.getLogger(__name__)

_USE_MAP_CACHE: Final[bool] = os.environ.get("ARRAY_TRANSLATE_DISABLE_MAP_CACHE", "0") != "1"


@dataclass(frozen=True)
class TranslatablePrimitive:
    source: str
    target: str
    concept: str


@dataclass(frozen=True)
class TranslationMap:
    source: str
    target: str
    forward: Mapping[str, str]
    backward: Mapping[str, str]
    source_tokens: tuple[str, ...]
    pattern: re.Pattern[str] | None

    def __len__(self) -> int:
        return len(self.forward)

    def match(self, text: str, pos: int) -> tuple[str, int] | None:
        """Replacement and end offset for the longest source token at ``pos``."""
        if self.pattern is None:
            return None
        m = self.pattern.match(text, pos)
        if m is None:
            return None
        return self.forward[m.group()], m.end()


def _token_pattern(tokens: Iterable[str], inflections: str = "") -> re.Pattern[str] | None:
    parts = []
    for token in tokens:
        escaped = re.escape(token)
        if is_word_char(token[0]):
            # word-like tokens (J's i. or NB.) never start inside a name
            escaped = rf"(?<!\w){escaped}"
        if inflections and token[-1] not in inflections:
            # # is tally but #: is antibase
            escaped = rf"{escaped}(?![{re.escape(inflections)}])"
        parts.append(escaped)
    if not parts:
        return None
    return re.compile("|".join(parts))


def build_translation_map(
    concepts: Iterable[PrimitiveConcept], source: str, target: str, *, inflections: str = ""
) -> TranslationMap:
    forward: dict[str, str] = {}
    backward: dict[str, str] = {}
    for concept in concepts:
        src = concept.token(source)
        dst = concept.token(target)
        if src is None or dst is None or src == dst:
            continue
        # later concepts overwrite earlier ones on a token collision
        forward[src] = dst
        backward[dst] = src

    # stable sort keeps table order among equal lengths
    source_tokens = tuple(sorted(forward, key=len, reverse=True))
    logger.debug("built %s->%s translation map with %d entries", source, target, len(forward))
    return TranslationMap(
        source=source,
        target=target,
        forward=MappingProxyType(forward),
        backward=MappingProxyType(backward),
        source_tokens=source_tokens,
        pattern=_token_pattern(source_tokens, inflections),
    )


class TranslationCache:
    """Per ordered language pair store of built translation maps."""

    def __init__(self) -> None:
        self._maps: dict[tuple[str, str], TranslationMap] = {}
        self._stats: dict[str, int] = {"hits": 0, "misses": 0}

    def __len__(self) -> int:
        return len(self._maps)

    def __contains__(self, key: object) -> bool:
        return key in self._maps

    def get_or_build(
        self, key: tuple[str, str], build: Callable[[], TranslationMap]
    ) -> TranslationMap:
        cached = self._maps.get(key)
        if cached is not None:
            self._stats["hits"] += 1
            return cached
        self._stats["misses"] += 1
        built = build()
        self._maps[key] = built
        return built

    def clear(self) -> None:
        if self._maps:
            logger.debug("dropping %d cached translation maps", len(self._maps))
        self._maps.clear()

    def stats(self, *, reset: bool = False) -> dict[str, float | int]:
        hits = self._stats["hits"]
        misses = self._stats["misses"]
        total = hits + misses
        out: dict[str, float | int] = {
            "hits": hits,
            "misses": misses,
            "size": len(self._maps),
            "hit_rate": float(hits / total) if total else 0.0,
        }
        if reset:
            self._stats["hits"] = 0
            self._stats["misses"] = 0
        return out


class Translator:
    """Translates source text between the supported array languages.

    Holds one correspondence table, one set of lexical profiles and the
    cache of per-pair maps derived from them. Unknown language ids and
    pairs without correspondences leave text unchanged.
    """

    def __init__(
        self,
        concepts: Iterable[PrimitiveConcept] = PRIMITIVE_CONCEPTS,
        profiles: Mapping[str, LexicalProfile] = PROFILES,
        *,
        cache: TranslationCache | None = None,
        use_cache: bool = _USE_MAP_CACHE,
    ) -> None:
        self._concepts = tuple(concepts)
        self._profiles = profiles
        self.cache = TranslationCache() if cache is None else cache
        self.use_cache = use_cache

    @property
    def concepts(self) -> tuple[PrimitiveConcept, ...]:
        return self._concepts

    def replace_concepts(self, concepts: Iterable[PrimitiveConcept]) -> None:
        self._concepts = tuple(concepts)
        self.cache.clear()

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_stats(self, *, reset: bool = False) -> dict[str, float | int]:
        return self.cache.stats(reset=reset)

    def translation_map(self, source: str, target: str) -> TranslationMap | None:
        if source not in self._profiles or target not in self._profiles:
            return None
        inflections = self._profiles[source].inflections
        if not self.use_cache:
            return build_translation_map(self._concepts, source, target, inflections=inflections)
        return self.cache.get_or_build(
            (source, target),
            lambda: build_translation_map(self._concepts, source, target, inflections=inflections),
        )

    def has_translation(self, source: str, target: str) -> bool:
        if source == target:
            return False
        tmap = self.translation_map(source, target)
        return tmap is not None and len(tmap) > 0

    def translatable_primitives(self, source: str, target: str) -> list[TranslatablePrimitive]:
        if source not in self._profiles or target not in self._profiles:
            return []
        found: list[TranslatablePrimitive] = []
        for concept in self._concepts:
            src = concept.token(source)
            dst = concept.token(target)
            if src is not None and dst is not None and src != dst:
                found.append(TranslatablePrimitive(source=src, target=dst, concept=concept.name))
        return found

    def translate(self, code: str, source: str, target: str) -> str:
        """Translate literals and primitives, leaving strings and comment text alone."""
        return self._run(code, source, target, primitives=True, literals=True)

    def translate_primitives(self, code: str, source: str, target: str) -> str:
        return self._run(code, source, target, primitives=True, literals=False)

    def translate_array_literals(self, code: str, source: str, target: str) -> str:
        return self._run(code, source, target, primitives=False, literals=True)

    def _run(self, code: str, source: str, target: str, *, primitives: bool, literals: bool) -> str:
        if source == target or not code:
            return code
        src_profile = self._profiles.get(source)
        dst_profile = self._profiles.get(target)
        if src_profile is None or dst_profile is None:
            return code

        tmap = self.translation_map(source, target) if primitives else None
        if tmap is not None and len(tmap) == 0:
            tmap = None
        rewrite_literals = literals and not literal_notation_matches(src_profile, dst_profile)
        if tmap is None and not rewrite_literals:
            return code
        return _rewrite(code, src_profile, dst_profile, tmap, rewrite_literals)


def _emit_token(out: list[str], token: str, code: str, next_pos: int, dst: LexicalProfile) -> None:
    """Append a substituted token, spacing it off where the target would merge words."""
    if not dst.inflections:
        out.append(token)
        return
    if out and out[-1] and is_word_char(out[-1][-1]) and is_word_char(token[0]):
        # x i. y, not the name xi.
        out.append(" ")
    out.append(token)
    if next_pos < len(code) and code[next_pos] in dst.inflections:
        out.append(" ")


def _rewrite(
    code: str,
    src: LexicalProfile,
    dst: LexicalProfile,
    tmap: TranslationMap | None,
    rewrite_literals: bool,
) -> str:
    # One left-to-right pass; replaced text is emitted and never rescanned.
    out: list[str] = []
    i = 0
    n = len(code)
    while i < n:
        end = skip_string(code, i, src)
        if end != i:
            out.append(code[i:end])
            i = end
            continue

        marker = comment_marker_at(code, i, src)
        if marker is not None:
            end = skip_comment(code, i, src)
            if tmap is None:
                out.append(marker)
            else:
                _emit_token(out, tmap.forward.get(marker, marker), code, i + len(marker), dst)
            out.append(code[i + len(marker) : end])
            i = end
            continue

        if rewrite_literals and starts_number(code, i, src):
            run = parse_array_literal(code, i, src)
            if run is not None:
                out.append(translate_run(run, src, dst))
                i = run.end
                continue

        if tmap is not None:
            hit = tmap.match(code, i)
            if hit is not None:
                replacement, i = hit
                _emit_token(out, replacement, code, i, dst)
                continue

        out.append(code[i])
        i += 1
    return "".join(out)


_DEFAULT_TRANSLATOR: Final[Translator] = Translator()


def default_translator() -> Translator:
    return _DEFAULT_TRANSLATOR


def translate(code: str, from_lang: str, to_lang: str) -> str:
    return _DEFAULT_TRANSLATOR.translate(code, from_lang, to_lang)


def translate_primitives(code: str, from_lang: str, to_lang: str) -> str:
    return _DEFAULT_TRANSLATOR.translate_primitives(code, from_lang, to_lang)


def translate_array_literals(code: str, from_lang: str, to_lang: str) -> str:
    return _DEFAULT_TRANSLATOR.translate_array_literals(code, from_lang, to_lang)


def has_translation(from_lang: str, to_lang: str) -> bool:
    return _DEFAULT_TRANSLATOR.has_translation(from_lang, to_lang)


def get_translatable_primitives(from_lang: str, to_lang: str) -> list[TranslatablePrimitive]:
    return _DEFAULT_TRANSLATOR.translatable_primitives(from_lang, to_lang)


def clear_translation_cache() -> None:
    _DEFAULT_TRANSLATOR.clear_cache()


def translation_cache_stats(*, reset: bool = False) -> dict[str, float | int]:
    return _DEFAULT_TRANSLATOR.cache_stats(reset=reset)
