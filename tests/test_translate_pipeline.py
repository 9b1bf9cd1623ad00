from __future__ import annotations

import unittest
from unittest import mock

from array_translate import (
    clear_translation_cache,
    default_translator,
    translate,
    translation_cache_stats,
)
from array_translate.languages import LANGUAGES
from array_translate.lexer import Region, scan_regions
from array_translate.primitives import PrimitiveConcept
from array_translate.translation import TranslationCache, Translator, build_translation_map


def _concept(name: str, **tokens: str | None) -> PrimitiveConcept:
    full: dict[str, str | None] = {lang: None for lang in LANGUAGES}
    full.update(tokens)
    return PrimitiveConcept(name=name, tokens=full)


class TranslatePipelineTests(unittest.TestCase):
    def test_full_programs(self) -> None:
        cases = (
            ("+/⍳10", "apl", "bqn", "+´↕10"),
            ("{⍺×⍵}/1 2 ¯3 ⍝ product", "apl", "bqn", "{𝕨×𝕩}´1‿2‿¯3 # product"),
            ("⍴1 2 ¯3", "apl", "j", "$1 2 _3"),
            ("+/ i. 3 4 NB. sum", "j", "apl", "+/ ⍳ 3 4 ⍝ sum"),
            ("/+⇡5 # sum", "uiua", "apl", "/+⍳5 ⍝ sum"),
            ("⌽1_2_¯3", "uiua", "bqn", "⌽1‿2‿¯3"),
            ("𝕩⊑˜1‿¯2", "bqn", "tinyapl", "⍵⊃⍨1‿¯2"),
            ("¯1 2∘.×⍳3", "apl", "kap", "¯1 2⌻×⍳3"),
            ("∞‿1‿2", "bqn", "apl", "∞ 1 2"),
            ("π‿1‿2", "bqn", "j", "π 1 2"),
        )
        for text, src, dst, expected in cases:
            with self.subTest(pair=f"{src}->{dst}", text=text):
                self.assertEqual(translate(text, src, dst), expected)

    def test_literals_and_tokens_inside_strings_survive(self) -> None:
        text = "'⍳ 1 2 ¯3' ⍳1 2 ¯3 ⍝ ⍳ 1 2 ¯3"
        out = translate(text, "apl", "bqn")
        self.assertEqual(out, "'⍳ 1 2 ¯3' ↕1‿2‿¯3 # ⍳ 1 2 ¯3")

    def test_protected_regions_are_byte_identical(self) -> None:
        text = "x←'⍺⍵ 1 2' ⋄ ⍺⍵ ⍝ ≢⍴ 3 ¯4\n'≢' ≢'open ⍳"
        out = translate(text, "apl", "bqn")
        spans = [span for span in scan_regions(text, "apl") if span.kind != Region.CODE]
        self.assertEqual(
            [span.kind for span in spans],
            [Region.STRING, Region.COMMENT, Region.STRING, Region.STRING],
        )
        pos = 0
        for span in spans:
            chunk = text[span.start : span.end]
            if span.kind == Region.COMMENT:
                # the marker is a primitive token; only the body is protected
                chunk = chunk[len("⍝") :]
            found = out.find(chunk, pos)
            self.assertGreaterEqual(found, pos, chunk)
            pos = found + len(chunk)
        self.assertEqual(out, "x←'⍺⍵ 1 2' ⋄ 𝕨𝕩 # ≢⍴ 3 ¯4\n'≢' ≠'open ⍳")

    def test_same_language_and_unknown_are_identity(self) -> None:
        for code in ("", "⍳1 2 ¯3 ⍝ x", "'a'"):
            for lang in LANGUAGES:
                with self.subTest(language=lang, code=code):
                    self.assertEqual(translate(code, lang, lang), code)
            with self.subTest(code=code, unknown=True):
                self.assertEqual(translate(code, "apl", "k"), code)
                self.assertEqual(translate(code, "k", "apl"), code)

    def test_unknown_input_handling_is_idempotent(self) -> None:
        code = "⍳1 2 ¯3"
        once = translate(code, "apl", "nope")
        self.assertEqual(translate(once, "apl", "nope"), once)


class TranslationCacheTests(unittest.TestCase):
    def setUp(self) -> None:
        clear_translation_cache()
        translation_cache_stats(reset=True)

    def tearDown(self) -> None:
        clear_translation_cache()

    def test_maps_are_cached_per_ordered_pair(self) -> None:
        translator = Translator(use_cache=True)
        translator.translate("⍳3", "apl", "bqn")
        translator.translate("⍳4", "apl", "bqn")
        translator.translate("↕4", "bqn", "apl")
        stats = translator.cache_stats()
        self.assertEqual(stats["misses"], 2)
        self.assertEqual(stats["hits"], 1)
        self.assertEqual(stats["size"], 2)
        self.assertIn(("apl", "bqn"), translator.cache)
        self.assertIn(("bqn", "apl"), translator.cache)

    def test_stats_reset(self) -> None:
        translator = Translator(use_cache=True)
        translator.translate("⍳3", "apl", "bqn")
        translator.cache_stats(reset=True)
        stats = translator.cache_stats()
        self.assertEqual((stats["hits"], stats["misses"], stats["size"]), (0, 0, 1))
        self.assertEqual(stats["hit_rate"], 0.0)

    def test_clear_picks_up_swapped_table(self) -> None:
        old = (_concept("swap", apl="a", bqn="b"),)
        new = (_concept("swap", apl="a", bqn="z"),)
        translator = Translator(concepts=old, use_cache=True)
        self.assertEqual(translator.translate_primitives("a", "apl", "bqn"), "b")
        with mock.patch.object(translator, "_concepts", new):
            self.assertEqual(translator.translate_primitives("a", "apl", "bqn"), "b")
            translator.clear_cache()
            self.assertEqual(translator.translate_primitives("a", "apl", "bqn"), "z")

    def test_replace_concepts_clears_cache(self) -> None:
        translator = Translator(concepts=(_concept("swap", apl="a", bqn="b"),), use_cache=True)
        self.assertEqual(translator.translate_primitives("a", "apl", "bqn"), "b")
        translator.replace_concepts((_concept("swap", apl="a", bqn="q"),))
        self.assertEqual(len(translator.cache), 0)
        self.assertEqual(translator.translate_primitives("a", "apl", "bqn"), "q")

    def test_uncached_translator_rebuilds(self) -> None:
        translator = Translator(use_cache=False)
        translator.translate("⍳3", "apl", "bqn")
        self.assertEqual(len(translator.cache), 0)

    def test_shared_cache_object(self) -> None:
        cache = TranslationCache()
        first = Translator(cache=cache, use_cache=True)
        second = Translator(cache=cache, use_cache=True)
        first.translate("⍳3", "apl", "bqn")
        second.translate("⍳3", "apl", "bqn")
        self.assertEqual(cache.stats()["hits"], 1)

    def test_default_translator_clear(self) -> None:
        translator = default_translator()
        if not translator.use_cache:
            self.skipTest("map cache disabled by environment")
        translate("⍳3", "apl", "bqn")
        self.assertGreaterEqual(translation_cache_stats()["size"], 1)
        clear_translation_cache()
        self.assertEqual(translation_cache_stats()["size"], 0)

    def test_rebuilt_map_equals_cached_map(self) -> None:
        translator = Translator(use_cache=True)
        cached = translator.translation_map("apl", "j")
        assert cached is not None
        rebuilt = build_translation_map(translator.concepts, "apl", "j")
        self.assertEqual(dict(cached.forward), dict(rebuilt.forward))
        self.assertEqual(cached.source_tokens, rebuilt.source_tokens)
        self.assertIsNone(translator.translation_map("apl", "k"))


if __name__ == "__main__":
    unittest.main()
