"""Fugen-S removal for German compound modifiers.

German compounds often join their parts with a linking 's' ("Sicherheits-",
"Ordnungs-"). Words ending in one of the endings below are followed by such an
's' when used as a modifier, so an 's' after them is stripped. No dictionary
is consulted.

Endings after http://www.spiegel.de/kultur/zwiebelfisch/zwiebelfisch-der-gebrauch-des-fugen-s-im-ueberblick-a-293195.html
"""

from __future__ import annotations

from collections import defaultdict

# shortest ending ('en') + 's' + at least one char of the word
MIN_LENGTH = 4

FUGEN_S_ENDINGS: frozenset[str] = frozenset({
    # endings followed by a Fugen-S
    "tum", "ling", "ion", "tät", "keit", "schaft", "sicht", "ung", "en",
    # endings followed by a Fugen-S even for feminine ('die') nouns
    "heit",
})


def _by_last_char(endings: frozenset[str]) -> dict[str, frozenset[str]]:
    tree: dict[str, set[str]] = defaultdict(set)
    for ending in endings:
        tree[ending[-1]].add(ending)
    return {char: frozenset(group) for char, group in tree.items()}


# keyed by the character in front of the trailing 's'
_ENDINGS_BY_LAST_CHAR = _by_last_char(FUGEN_S_ENDINGS)


def strip_fugen_s(word: str) -> str:
    """Return ``word`` without its trailing Fugen-S, or ``word`` unchanged."""
    length = len(word)
    if length < MIN_LENGTH or word[-1].lower() != "s":
        return word
    candidates = _ENDINGS_BY_LAST_CHAR.get(word[-2])
    if not candidates:
        return word
    stem = word[:-1]
    for ending in candidates:
        if len(ending) < length - 1 and stem.endswith(ending):
            return stem
    return word
