"""array-translate public API."""

from .errors import TranslateError, UnknownLanguageError
from .languages import LANGUAGES, PROFILES, LanguageId, LexicalProfile, StringDelimiter, require_language
from .lexer import Region, Span, region_mask, scan_regions
from .literals import ArrayLiteralRun, parse_array_literal
from .primitives import PRIMITIVE_CONCEPTS, PrimitiveConcept
from .translation import (
    TranslatablePrimitive,
    TranslationCache,
    TranslationMap,
    Translator,
    build_translation_map,
    clear_translation_cache,
    default_translator,
    get_translatable_primitives,
    has_translation,
    translate,
    translate_array_literals,
    translate_primitives,
    translation_cache_stats,
)

__all__ = [
    "translate",
    "translate_primitives",
    "translate_array_literals",
    "has_translation",
    "get_translatable_primitives",
    "clear_translation_cache",
    "translation_cache_stats",
    "default_translator",
    "build_translation_map",
    "Translator",
    "TranslationCache",
    "TranslationMap",
    "TranslatablePrimitive",
    "ArrayLiteralRun",
    "parse_array_literal",
    "LANGUAGES",
    "LanguageId",
    "PROFILES",
    "LexicalProfile",
    "StringDelimiter",
    "require_language",
    "PRIMITIVE_CONCEPTS",
    "PrimitiveConcept",
    "Region",
    "Span",
    "region_mask",
    "scan_regions",
    "TranslateError",
    "UnknownLanguageError",
]
