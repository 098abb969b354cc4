"""
String similarity helpers used by reference scoring.

Every function here is total: any pair of strings (empty included) yields a
number, never an exception.
"""
import re
from typing import Iterable, Set

from rapidfuzz.distance import Levenshtein

_SEPARATORS = re.compile(r"[\s\-_(),]")
_DIGIT_RUN = re.compile(r"\b\d{3,}\b", re.ASCII)
_CODE = re.compile(r"\b[a-z]{1,4}-?\d{1,10}\b", re.IGNORECASE | re.ASCII)


def _prep(s: str) -> str:
    return (s or "").lower().strip()


def edit_distance(a: str, b: str) -> int:
    """Unit-cost Levenshtein distance, case-insensitive, ignoring surrounding whitespace."""
    return Levenshtein.distance(_prep(a), _prep(b))


def similarity(a: str, b: str) -> float:
    """1.0 for identical strings, falling towards 0.0 as the edit distance grows."""
    a, b = a or "", b or ""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1 - edit_distance(a, b) / longest


def subsequence_score(pattern: str, target: str) -> float:
    """
    Scores whether every character of `pattern` appears in `target` in order.
    0.0 when any character is missing; otherwise 0.5-1.0, higher when the
    match completes early in the target.
    """
    p = _prep(pattern)
    t = _prep(target)

    if not p:
        return 1.0
    if not t:
        return 0.0

    pi = 0
    ti = 0
    matched = 0
    while ti < len(t) and pi < len(p):
        if p[pi] == t[ti]:
            matched += 1
            pi += 1
        ti += 1

    if pi < len(p):
        return 0.0

    matched_fraction = matched / len(p)
    position_bonus = 1 - ti / len(t) / 2
    return max(0.5, min(1.0, (matched_fraction + position_bonus) / 2))


def extract_tokens(text: str) -> Set[str]:
    """
    Words longer than 2 chars plus reference-like fragments: standalone digit
    runs (3+) and codes such as INV-001 / ORD12345 (upper-cased).
    """
    if not text:
        return set()

    tokens = set(_DIGIT_RUN.findall(text))
    tokens.update(m.upper() for m in _CODE.findall(text))
    tokens.update(w for w in _SEPARATORS.split(text.lower()) if len(w) > 2)
    return tokens


def compare_token_sets(a: Iterable[str], b: Iterable[str]) -> float:
    """
    Average, over the tokens of `a`, of each token's best match in `b`.
    Directional: compare_token_sets(a, b) != compare_token_sets(b, a) in general.
    """
    a, b = set(a), set(b)
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0

    total = 0.0
    for token in a:
        if token in b:
            total += 1.0
            continue
        total += max(max(similarity(token, other), subsequence_score(token, other)) for other in b)
    return total / len(a)
