"""Emit a data-integrity report of the primitive correspondence table."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

from array_translate.audit import audit_table, write_json
from array_translate.languages import LANGUAGES
from array_translate.primitives import PRIMITIVE_CONCEPTS
from array_translate.translation import has_translation


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--json-out",
        default="output/table_audit.json",
        help="where to write machine-readable audit summary",
    )
    args = parser.parse_args()

    report = audit_table()
    by_category = Counter(concept.category for concept in PRIMITIVE_CONCEPTS)
    coverage = {lang: sum(1 for c in PRIMITIVE_CONCEPTS if c.token(lang) is not None) for lang in LANGUAGES}
    pairs = [f"{src}->{dst}" for src in LANGUAGES for dst in LANGUAGES if has_translation(src, dst)]

    print("Primitive table audit")
    print("---------------------")
    print(f"concepts: {report['concepts']}")
    print("categories:")
    for key in sorted(by_category):
        print(f"  - {key}: {by_category[key]}")
    print("coverage:")
    for lang in LANGUAGES:
        print(f"  - {lang}: {coverage[lang]}")
    print(f"translatable pairs: {len(pairs)}")
    print(f"status: {'ok' if report['ok'] else 'problems found'}")
    for section in ("duplicate_tokens", "collisions", "profile_problems", "missing_profiles"):
        if report[section]:
            print(f"{section}: {report[section]}")

    write_json(
        Path(args.json_out),
        {
            **report,
            "by_category": dict(sorted(by_category.items())),
            "coverage": coverage,
            "translatable_pairs": pairs,
        },
    )
    return 0 if report["ok"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
