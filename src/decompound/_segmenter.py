"""Hyphenation-driven compound segmentation.

Both variants walk the hyphenation points of a word and test candidate spans
against a dictionary:

* ``Variant.COMPOUND`` tries every start point and, for each, every end point
  from the right (longest first), so "Donaudampfschiff" yields donau, dampf
  and schiff.
* ``Variant.PRIMARY`` only considers spans that end at the end of the word and
  looks for the primary (head) word, e.g. schiff or dampfschiff.

Without a dictionary every span within the size bounds is accepted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from ._types import CompoundToken, Variant

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ._types import SegmentationPolicy


class WordSet(Protocol):
    def contains(self, text: str, offset: int = 0, length: int | None = None) -> bool: ...


class HyphenationSource(Protocol):
    def hyphenate(
        self, text: str, offset: int = 0, length: int | None = None
    ) -> tuple[int, ...] | None: ...


def epenthesis_length(part: str, epenthesis: Sequence[str]) -> int:
    """Length of the filler suffix at the end of ``part``, or 0.

    With no configured fillers, 1 is returned so that exactly one trailing
    character is tried. Otherwise the first configured filler that is a
    proper suffix of ``part`` wins.
    """
    if not epenthesis:
        return 1
    for filler in epenthesis:
        if filler and len(filler) < len(part) and part.endswith(filler):
            return len(filler)
    return 0


def _known(dictionary: WordSet | None, word: str) -> bool:
    # genitive 's' and other binding letters: also try one char shorter
    return dictionary is not None and (
        dictionary.contains(word)
        or (len(word) > 1 and dictionary.contains(word, 0, len(word) - 1))
    )


def decompose(
    word: str,
    hyphenation: HyphenationSource | Sequence[int] | None,
    dictionary: WordSet | None,
    policy: SegmentationPolicy,
) -> list[CompoundToken]:
    """Decompose ``word`` into accepted subword spans in discovery order.

    Args:
        word: The token text.
        hyphenation: Either a source to hyphenate ``word`` with, or the
            hyphenation points already computed (including 0 and
            ``len(word)``). ``None`` means the word has no break points.
        dictionary: Word set to validate subwords, or None to accept any
            span within the size bounds.
        policy: Size bounds and match policy.
    """
    if len(word) < policy.min_word_size:
        return []

    if policy.variant is Variant.PRIMARY:
        skip = policy.only_longest_match
    else:
        skip = not policy.calc_sub_matches
    if skip and _known(dictionary, word):
        return []  # the whole token is in the dictionary

    if hasattr(hyphenation, "hyphenate"):
        points = hyphenation.hyphenate(word)
    else:
        points = hyphenation
    if not points:
        return []

    if policy.variant is Variant.PRIMARY:
        return _primary_word(word, points, dictionary, policy)
    return _compound_words(word, points, dictionary, policy)


def _compound_words(
    word: str,
    hyp: Sequence[int],
    dictionary: WordSet | None,
    policy: SegmentationPolicy,
) -> list[CompoundToken]:
    min_size = policy.min_subword_size
    max_size = min(policy.max_subword_size, len(word) - 1)
    last = len(hyp) - 1
    tokens: list[CompoundToken] = []
    consumed = -1  # hyphenation index where the last accepted span ended

    i = 0
    while i < len(hyp):
        if policy.no_overlapping_matches:
            i = max(i, consumed)
        start = hyp[i]
        until = max(consumed, i) if policy.no_sub_matches else i
        for j in range(last, until, -1):
            part_length = hyp[j] - start
            if part_length > max_size:
                continue
            # points are increasing: every remaining part is shorter
            if part_length < min_size:
                break

            token = None
            if dictionary is None or dictionary.contains(word, start, part_length):
                token = CompoundToken(start, part_length)
            elif j < last:  # no epenthesis at the end of the word
                strip = epenthesis_length(
                    word[start:start + part_length], policy.epenthesis
                )
                if (
                    strip > 0
                    and part_length - strip >= min_size
                    and dictionary.contains(word, start, part_length - strip)
                ):
                    token = CompoundToken(start, part_length - strip)

            if token is not None:
                tokens.append(token)
                consumed = j
                if not policy.calc_sub_matches:
                    break
        i += 1
    return tokens


def _primary_word(
    word: str,
    hyp: Sequence[int],
    dictionary: WordSet | None,
    policy: SegmentationPolicy,
) -> list[CompoundToken]:
    min_size = policy.min_subword_size
    max_size = min(policy.max_subword_size, len(word) - 1)
    end = hyp[-1]
    tokens: list[CompoundToken] = []

    for start in hyp:
        part_length = end - start
        if part_length > max_size:
            continue
        if part_length < min_size:
            break

        if dictionary is None or dictionary.contains(word, start, part_length):
            tokens.append(CompoundToken(start, part_length))
        else:
            strip = epenthesis_length(
                word[start:start + part_length], policy.epenthesis
            )
            if (
                strip > 0
                and part_length - strip >= min_size
                and dictionary.contains(word, start, part_length - strip)
            ):
                tokens.append(CompoundToken(start, part_length - strip))
            else:
                continue
        if policy.only_longest_match:
            break
    return tokens
