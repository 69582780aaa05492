"""Token stream stages.

Each stage is called with an iterable of tokens and yields tokens, one input
token at a time, in input order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import Stemmer

from ._fugen_s import strip_fugen_s
from ._loader import read_stem_overrides
from ._segmenter import decompose
from ._types import Token

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from ._config import StemmerOverrideConfig
    from ._hunspell import HunspellStemmer
    from ._segmenter import HyphenationSource, WordSet
    from ._types import SegmentationPolicy


class CompoundWordFilter:
    """Adds the subwords of compound tokens after the original token.

    Subwords are stacked on the original (``position_increment=0``) and keep
    its offsets.
    """

    __slots__ = ("_hyphenator", "_dictionary", "_policy")

    def __init__(
        self,
        hyphenator: HyphenationSource,
        dictionary: WordSet | None,
        policy: SegmentationPolicy,
    ) -> None:
        self._hyphenator = hyphenator
        self._dictionary = dictionary
        self._policy = policy

    @property
    def policy(self) -> SegmentationPolicy:
        return self._policy

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            yield token
            if token.keyword or len(token.text) < self._policy.min_word_size:
                continue
            word = token.text
            for part in decompose(word, self._hyphenator, self._dictionary, self._policy):
                yield Token(
                    part.text_of(word),
                    start_offset=token.start_offset,
                    end_offset=token.end_offset,
                    position_increment=0,
                )


class FugenSFilter:
    """Strips the linking 's' of German compound modifiers."""

    __slots__ = ()

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if not token.keyword:
                token.text = strip_fugen_s(token.text)
            yield token


class StemmerOverrideMap:
    """Fixed word -> stem mappings; the first mapping for a word wins."""

    __slots__ = ("_stems", "_ignore_case", "__weakref__")

    def __init__(self, pairs: Iterable[tuple[str, str]], ignore_case: bool = False) -> None:
        self._ignore_case = ignore_case
        self._stems: dict[str, str] = {}
        for word, stem in pairs:
            if ignore_case:
                word = word.lower()
            self._stems.setdefault(word, stem)

    @classmethod
    def load(cls, config: StemmerOverrideConfig) -> StemmerOverrideMap:
        pairs: list[tuple[str, str]] = []
        for name in config.files:
            path = config.loader.resolve(name)
            pairs.extend(read_stem_overrides(path, config.encoding))
        return cls(pairs, config.ignore_case)

    def get(self, word: str) -> str | None:
        return self._stems.get(word.lower() if self._ignore_case else word)

    def __len__(self) -> int:
        return len(self._stems)


class StemmerOverrideFilter:
    """Replaces mapped words by their stem and marks them as keywords."""

    __slots__ = ("_overrides",)

    def __init__(self, overrides: StemmerOverrideMap) -> None:
        self._overrides = overrides

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if not token.keyword:
                stem = self._overrides.get(token.text)
                if stem is not None:
                    token.text = stem
                    token.keyword = True
            yield token


class SnowballStemFilter:
    """Snowball stemming of non-keyword tokens."""

    __slots__ = ("_stemmer",)

    def __init__(self, language: str = "german") -> None:
        self._stemmer = Stemmer.Stemmer(language)

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if not token.keyword:
                token.text = self._stemmer.stemWord(token.text)
            yield token


class HunspellStemFilter:
    """Replaces non-keyword tokens by their Hunspell stems.

    The first stem takes the token's place; further stems are stacked on it
    (``position_increment=0``). With ``longest_only`` only the longest stem is
    kept. Words without a stem pass through unchanged.
    """

    __slots__ = ("_stemmer", "_longest_only")

    def __init__(self, stemmer: HunspellStemmer, longest_only: bool = False) -> None:
        self._stemmer = stemmer
        self._longest_only = longest_only

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.keyword:
                yield token
                continue
            stems = self._stemmer.stems(token.text)
            if not stems:
                yield token
                continue
            if self._longest_only:
                stems = [min(stems, key=lambda s: (-len(s), s))]
            token.text = stems[0]
            yield token
            for stem in stems[1:]:
                yield Token(
                    stem,
                    start_offset=token.start_offset,
                    end_offset=token.end_offset,
                    position_increment=0,
                )
