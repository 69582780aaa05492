"""Hyphenation points from pyphen pattern dictionaries."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pyphen

from ._errors import ConfigurationError, ResourceLoadError

if TYPE_CHECKING:
    from ._config import HyphenatorConfig

# characters that must stay in front of the first / after the last break
REMAIN_CHAR_COUNT = 1
PUSH_CHAR_COUNT = 1


def language_patterns(lang: str) -> tuple[str, Path]:
    """Resolve ``lang`` to a bundled pyphen language and its pattern file."""
    code = pyphen.language_fallback(lang)
    if code is None:
        raise ConfigurationError(f"No hyphenation patterns for language {lang!r}")
    return code, Path(str(pyphen.LANGUAGES[code]))


class Hyphenator:
    """Hyphenation pattern set.

    ``hyphenate`` returns the break offsets of a word, including 0 and the
    word length, or None if the word has no break.
    """

    __slots__ = ("_patterns", "_remain", "_push", "__weakref__")

    def __init__(
        self,
        patterns: pyphen.HyphDict,
        remain_char_count: int = REMAIN_CHAR_COUNT,
        push_char_count: int = PUSH_CHAR_COUNT,
    ) -> None:
        self._patterns = patterns
        self._remain = remain_char_count
        self._push = push_char_count

    @classmethod
    def from_file(cls, path: Path | str) -> Hyphenator:
        # pyphen.Pyphen memoizes by path; build the patterns directly so a
        # changed file is read again
        try:
            patterns = pyphen.HyphDict(Path(path))
        except LookupError as exc:
            # the first line names the charset of the pattern file
            raise ResourceLoadError(f"{path} is not a hyphenation pattern file: {exc}") from exc
        return cls(patterns)

    @classmethod
    def load(cls, config: HyphenatorConfig) -> Hyphenator:
        if config.is_language:
            _, path = language_patterns(config.source)
        else:
            path = config.loader.resolve(config.source)
        return cls.from_file(path)

    def hyphenate(
        self, text: str, offset: int = 0, length: int | None = None
    ) -> tuple[int, ...] | None:
        if length is None:
            length = len(text) - offset
        if length < self._remain + self._push:
            return None
        word = text[offset:offset + length]
        inner = [
            int(p) for p in self._patterns.positions(word)
            if self._remain <= p <= length - self._push
        ]
        if not inner:
            return None
        return (0, *inner, length)
