"""Translate array-language source between dialects from the command line."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Sequence

from .errors import TranslateError
from .languages import LANGUAGES, require_language
from .lexer import Region, region_mask
from .translation import default_translator

_REGION_CHARS = {int(Region.CODE): "c", int(Region.STRING): "s", int(Region.COMMENT): "#"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="array-translate", description=__doc__)
    parser.add_argument("--from", dest="source", required=True, help=f"source language ({', '.join(LANGUAGES)})")
    parser.add_argument("--to", dest="target", required=True, help="target language")
    parser.add_argument("path", nargs="?", help="file to translate (default: stdin)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--primitives-only", action="store_true", help="substitute primitives, keep literal notation")
    mode.add_argument("--literals-only", action="store_true", help="rewrite numeric array literals only")
    mode.add_argument("--list", action="store_true", help="list translatable primitives for the pair")
    mode.add_argument("--regions", action="store_true", help="print the code/string/comment mask of the input")
    parser.add_argument("--json", action="store_true", help="machine-readable output for --list")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.environ.get("ARRAY_TRANSLATE_LOG_LEVEL", "WARNING")
    level = getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _read_source(path: str | None) -> str:
    if path is None or path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _render_regions(text: str, language: str) -> str:
    mask = region_mask(text, language)
    marks = "".join(_REGION_CHARS[int(code)] for code in mask)
    lines = []
    start = 0
    for line in text.split("\n"):
        lines.append(line)
        lines.append(marks[start : start + len(line)])
        start += len(line) + 1
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    translator = default_translator()

    try:
        source = require_language(args.source)
        target = require_language(args.target)
    except TranslateError as exc:
        print(f"array-translate: {exc}", file=sys.stderr)
        return 2

    if args.list:
        rows = translator.translatable_primitives(source, target)
        if args.json:
            print(json.dumps([row.__dict__ for row in rows], ensure_ascii=False, indent=2))
        else:
            for row in rows:
                print(f"{row.concept:<14} {row.source:>4} -> {row.target}")
        return 0

    try:
        text = _read_source(args.path)
    except OSError as exc:
        print(f"array-translate: {exc}", file=sys.stderr)
        return 2

    if args.regions:
        print(_render_regions(text, source))
        return 0
    if args.primitives_only:
        result = translator.translate_primitives(text, source, target)
    elif args.literals_only:
        result = translator.translate_array_literals(text, source, target)
    else:
        result = translator.translate(text, source, target)
    sys.stdout.write(result)
    return 0
