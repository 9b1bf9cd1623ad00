"""Data-integrity checks for the correspondence table and lexical profiles."""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Iterable, Mapping
import json

from .languages import LANGUAGES, PROFILES, LexicalProfile
from .primitives import PRIMITIVE_CONCEPTS, PrimitiveConcept


def duplicate_tokens(
    language: str, concepts: Iterable[PrimitiveConcept] = PRIMITIVE_CONCEPTS
) -> dict[str, tuple[str, ...]]:
    """Tokens that more than one concept claims within ``language``."""
    owners: dict[str, list[str]] = defaultdict(list)
    for concept in concepts:
        token = concept.token(language)
        if token is not None:
            owners[token].append(concept.name)
    return {token: tuple(names) for token, names in owners.items() if len(names) > 1}


def forward_collisions(
    source: str, target: str, concepts: Iterable[PrimitiveConcept] = PRIMITIVE_CONCEPTS
) -> dict[str, tuple[str, ...]]:
    """Source tokens mapped to more than one target token (last concept wins)."""
    targets: dict[str, list[str]] = defaultdict(list)
    for concept in concepts:
        src = concept.token(source)
        dst = concept.token(target)
        if src is None or dst is None or src == dst:
            continue
        if dst not in targets[src]:
            targets[src].append(dst)
    return {src: tuple(dsts) for src, dsts in targets.items() if len(dsts) > 1}


def backward_collisions(
    source: str, target: str, concepts: Iterable[PrimitiveConcept] = PRIMITIVE_CONCEPTS
) -> dict[str, tuple[str, ...]]:
    """Target tokens reached from more than one source token."""
    sources: dict[str, list[str]] = defaultdict(list)
    for concept in concepts:
        src = concept.token(source)
        dst = concept.token(target)
        if src is None or dst is None or src == dst:
            continue
        if src not in sources[dst]:
            sources[dst].append(src)
    return {dst: tuple(srcs) for dst, srcs in sources.items() if len(srcs) > 1}


def profile_problems(profile: LexicalProfile) -> list[str]:
    problems: list[str] = []
    if not profile.separator:
        problems.append("empty array separator")
    if not profile.negative:
        problems.append("empty negative prefix")
    for label, text in (("separator", profile.separator), ("negative prefix", profile.negative)):
        if any(ch.isdigit() for ch in text):
            problems.append(f"{label} {text!r} overlaps digits")
    if profile.separator and profile.separator == profile.negative:
        problems.append("separator equals negative prefix")
    if not profile.comments:
        problems.append("no comment markers")
    return problems


def audit_table(
    concepts: Iterable[PrimitiveConcept] = PRIMITIVE_CONCEPTS,
    profiles: Mapping[str, LexicalProfile] = PROFILES,
) -> dict[str, object]:
    concepts = tuple(concepts)
    duplicates = {lang: duplicate_tokens(lang, concepts) for lang in LANGUAGES}
    collisions = {
        f"{src}->{dst}": {
            **forward_collisions(src, dst, concepts),
            **backward_collisions(src, dst, concepts),
        }
        for src in LANGUAGES
        for dst in LANGUAGES
        if src != dst
    }
    problems = {lang: profile_problems(profiles[lang]) for lang in LANGUAGES if lang in profiles}
    missing_profiles = [lang for lang in LANGUAGES if lang not in profiles]
    ok = (
        not any(duplicates.values())
        and not any(collisions.values())
        and not any(problems.values())
        and not missing_profiles
    )
    return {
        "ok": ok,
        "concepts": len(concepts),
        "duplicate_tokens": {k: v for k, v in duplicates.items() if v},
        "collisions": {k: v for k, v in collisions.items() if v},
        "profile_problems": {k: v for k, v in problems.items() if v},
        "missing_profiles": missing_profiles,
    }


def write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
