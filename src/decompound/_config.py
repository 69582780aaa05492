"""Option parsing and fingerprinted resource configurations."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ._errors import ConfigurationError
from ._hash import sha256_file
from ._hyphenator import language_patterns
from ._loader import ResourceLoader, split_file_names

if TYPE_CHECKING:
    from collections.abc import Mapping

_TRUE = frozenset({"true", "yes", "on", "1"})
_FALSE = frozenset({"false", "no", "off", "0"})


class Args:
    """Consumes string options; whatever is left over is an error."""

    __slots__ = ("_args",)

    def __init__(self, args: Mapping[str, str] | None = None) -> None:
        self._args = dict(args or {})

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._args.pop(name, default)

    def require(self, name: str) -> str:
        value = self._args.pop(name, None)
        if value is None:
            raise ConfigurationError(f"Configuration Error: missing parameter '{name}'")
        return value

    def get_int(self, name: str, default: int) -> int:
        value = self._args.pop(name, None)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"Configuration Error: '{name}' must be an integer, got {value!r}"
            ) from None

    def get_bool(self, name: str, default: bool) -> bool:
        value = self._args.pop(name, None)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        lowered = str(value).strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ConfigurationError(
            f"Configuration Error: '{name}' must be a boolean, got {value!r}"
        )

    def get_list(self, name: str) -> tuple[str, ...]:
        return split_file_names(self._args.pop(name, None))

    def get_encoding(self, name: str = "encoding", default: str = "utf-8") -> str:
        """Canonical codec name, so that spellings of one charset compare equal."""
        value = self._args.pop(name, None) or default
        try:
            return codecs.lookup(value).name
        except LookupError:
            raise ConfigurationError(
                f"Configuration Error: '{name}' names an unknown charset {value!r}"
            ) from None

    def check_empty(self) -> None:
        if self._args:
            raise ConfigurationError(f"Unknown parameters: {self._args}")


@dataclass(frozen=True)
class DictionaryConfig:
    files: tuple[str, ...]
    digest: str
    ignore_case: bool = False
    encoding: str = "utf-8"
    loader: ResourceLoader = field(
        default_factory=ResourceLoader, compare=False, repr=False
    )

    @classmethod
    def from_files(
        cls,
        loader: ResourceLoader,
        files: tuple[str, ...],
        ignore_case: bool = False,
        encoding: str = "utf-8",
    ) -> DictionaryConfig:
        return cls(files, loader.fingerprint(files), ignore_case, encoding, loader)

    def __str__(self) -> str:
        return (
            f"DictionaryConfig [dictionary={list(self.files)}"
            f"(sha256={self.digest[:16]}), ignoreCase={self.ignore_case}, "
            f"encoding={self.encoding}]"
        )


@dataclass(frozen=True)
class HyphenatorConfig:
    """Hyphenation patterns from a ``.dic`` file or a bundled pyphen language.

    For a language, ``source`` is the resolved pyphen language code.
    """

    source: str
    digest: str
    is_language: bool = False
    loader: ResourceLoader = field(
        default_factory=ResourceLoader, compare=False, repr=False
    )

    @classmethod
    def from_file(cls, loader: ResourceLoader, name: str) -> HyphenatorConfig:
        return cls(name, loader.fingerprint((name,)), False, loader)

    @classmethod
    def from_language(cls, lang: str) -> HyphenatorConfig:
        code, path = language_patterns(lang)
        return cls(code, sha256_file(path), True)

    def __str__(self) -> str:
        kind = "lang" if self.is_language else "hyphenator"
        return f"HyphenatorConfig [{kind}={self.source}(sha256={self.digest[:16]})]"


@dataclass(frozen=True)
class StemmerOverrideConfig:
    files: tuple[str, ...]
    digest: str
    ignore_case: bool = False
    encoding: str = "utf-8"
    loader: ResourceLoader = field(
        default_factory=ResourceLoader, compare=False, repr=False
    )

    @classmethod
    def from_files(
        cls,
        loader: ResourceLoader,
        files: tuple[str, ...],
        ignore_case: bool = False,
        encoding: str = "utf-8",
    ) -> StemmerOverrideConfig:
        return cls(files, loader.fingerprint(files), ignore_case, encoding, loader)

    def __str__(self) -> str:
        return (
            f"StemmerOverrideConfig [dictionary={list(self.files)}"
            f"(sha256={self.digest[:16]}), ignoreCase={self.ignore_case}, "
            f"encoding={self.encoding}]"
        )


@dataclass(frozen=True)
class HunspellDictionaryConfig:
    """A Hunspell affix file with its dictionaries.

    ``digest`` covers the affix file followed by every dictionary file.
    """

    affix: str
    files: tuple[str, ...]
    digest: str
    ignore_case: bool = False
    loader: ResourceLoader = field(
        default_factory=ResourceLoader, compare=False, repr=False
    )

    @classmethod
    def from_files(
        cls,
        loader: ResourceLoader,
        affix: str,
        files: tuple[str, ...],
        ignore_case: bool = False,
    ) -> HunspellDictionaryConfig:
        return cls(affix, files, loader.fingerprint((affix, *files)), ignore_case, loader)

    def __str__(self) -> str:
        return (
            f"HunspellDictionaryConfig [affix={self.affix}, dictionary={list(self.files)}"
            f"(sha256={self.digest[:16]}), ignoreCase={self.ignore_case}]"
        )
