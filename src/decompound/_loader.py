"""Resolving resource names to files and reading word lists."""

from __future__ import annotations

import codecs
from pathlib import Path
from typing import Any

import msgpack

from ._errors import ResourceLoadError
from ._hash import sha256_files

_MSGPACK_SUFFIXES = (".bin", ".msgpack")


class ResourceLoader:
    """Resolves resource names (as written in configuration) to files.

    Relative names are resolved against ``base_dir``, which defaults to the
    current working directory.
    """

    __slots__ = ("_base_dir",)

    def __init__(self, base_dir: Path | str | None = None) -> None:
        self._base_dir = Path.cwd() if base_dir is None else Path(base_dir)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def resolve(self, name: str) -> Path:
        path = Path(name)
        if not path.is_absolute():
            path = self._base_dir / path
        return path

    def fingerprint(self, names: tuple[str, ...]) -> str:
        """Content digest over the files behind ``names``."""
        return sha256_files(self.resolve(n) for n in names)

    def __repr__(self) -> str:
        return f"ResourceLoader({str(self._base_dir)!r})"


def split_file_names(value: str | None) -> tuple[str, ...]:
    """Split a comma separated list of file names, dropping blanks."""
    if not value:
        return ()
    return tuple(n.strip() for n in value.split(",") if n.strip())


def _load_msgpack(path: Path, **kwargs: Any) -> Any:
    with open(path, "rb") as f:
        return msgpack.unpackb(f.read(), raw=False, **kwargs)


def read_lines(path: Path, encoding: str = "utf-8") -> list[str]:
    """Non-blank, non-comment lines of a text file, stripped."""
    if codecs.lookup(encoding).name == "utf-8":
        encoding = "utf-8-sig"  # drops a leading BOM
    with open(path, encoding=encoding) as f:
        lines = []
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                lines.append(line)
        return lines


def read_words(path: Path, encoding: str = "utf-8") -> list[str]:
    """Words from a text word list or a msgpack packed list of strings."""
    if path.suffix in _MSGPACK_SUFFIXES:
        words = _load_msgpack(path)
        if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
            raise ResourceLoadError(f"{path} does not contain a list of words")
        return words
    return read_lines(path, encoding)


def read_stem_overrides(path: Path, encoding: str = "utf-8") -> list[tuple[str, str]]:
    """``word<TAB>stem`` pairs from a stemmer override file."""
    pairs: list[tuple[str, str]] = []
    for lineno, line in enumerate(read_lines(path, encoding), 1):
        word, sep, stem = line.partition("\t")
        if not sep or not stem.strip():
            raise ResourceLoadError(
                f"{path}: line {lineno} is not a 'word<TAB>stem' mapping"
            )
        pairs.append((word.strip(), stem.strip()))
    return pairs

