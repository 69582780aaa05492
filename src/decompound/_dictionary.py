"""Word dictionary used to confirm candidate subwords."""

from __future__ import annotations

from typing import TYPE_CHECKING

import ahocorasick

from ._loader import read_words

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._config import DictionaryConfig


class Dictionary:
    """Immutable set of known words stored in a character trie.

    With ``ignore_case`` words are lower-cased when added and when looked up.
    """

    __slots__ = ("_trie", "_ignore_case", "__weakref__")

    def __init__(self, words: Iterable[str], ignore_case: bool = False) -> None:
        self._ignore_case = ignore_case
        self._trie = ahocorasick.Automaton()
        for word in words:
            if not word:
                continue
            if ignore_case:
                word = word.lower()
            if word not in self._trie:
                self._trie.add_word(word, len(word))

    @classmethod
    def load(cls, config: DictionaryConfig) -> Dictionary:
        """Build the dictionary from the files named by ``config``."""
        words: list[str] = []
        for name in config.files:
            path = config.loader.resolve(name)
            words.extend(read_words(path, config.encoding))
        return cls(words, config.ignore_case)

    @property
    def ignore_case(self) -> bool:
        return self._ignore_case

    def contains(self, text: str, offset: int = 0, length: int | None = None) -> bool:
        """Whether ``text[offset:offset + length]`` is a known word."""
        if length is None:
            length = len(text) - offset
        word = text[offset:offset + length]
        if self._ignore_case:
            word = word.lower()
        return self._trie.exists(word)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return len(self._trie)
