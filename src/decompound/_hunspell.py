"""Hunspell stemming dictionaries backed by the ``hunspell`` bindings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ._errors import ConfigurationError

if TYPE_CHECKING:
    from ._config import HunspellDictionaryConfig


class HunspellStemmer:
    """Stems words with a loaded Hunspell affix/dictionary pair.

    ``speller`` is any object with a ``stem(word)`` method returning a list of
    stems (``bytes`` in the dictionary's encoding, or ``str``).
    """

    __slots__ = ("_speller", "_ignore_case", "_encoding", "__weakref__")

    def __init__(self, speller: Any, ignore_case: bool = False, encoding: str = "utf-8") -> None:
        self._speller = speller
        self._ignore_case = ignore_case
        self._encoding = encoding

    @classmethod
    def load(cls, config: HunspellDictionaryConfig) -> HunspellStemmer:
        try:
            import hunspell
        except ImportError:
            raise ConfigurationError(
                "hunspellStem needs the 'hunspell' package: "
                "pip install 'decompound[hunspell]'"
            ) from None
        affix = str(config.loader.resolve(config.affix))
        dictionaries = [str(config.loader.resolve(name)) for name in config.files]
        speller = hunspell.HunSpell(dictionaries[0], affix)
        for extra in dictionaries[1:]:
            speller.add_dic(extra)
        return cls(speller, config.ignore_case, speller.get_dic_encoding())

    @property
    def ignore_case(self) -> bool:
        return self._ignore_case

    def stems(self, word: str) -> list[str]:
        """Distinct stems of ``word`` in dictionary order; empty if unknown."""
        found = self._speller.stem(word)
        if not found and self._ignore_case and word != word.lower():
            found = self._speller.stem(word.lower())
        stems: list[str] = []
        for stem in found:
            if isinstance(stem, bytes):
                stem = stem.decode(self._encoding)
            if stem not in stems:
                stems.append(stem)
        return stems
