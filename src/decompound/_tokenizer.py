"""Whitespace tokenizer feeding the filter stages."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ._types import Token

if TYPE_CHECKING:
    from collections.abc import Iterator

_TOKEN_RE = re.compile(r"\S+")


class Tokenizer:
    """Splits text on whitespace; offsets index into the input text.

    ``keywords`` are emitted with ``keyword=True`` so filters leave them as is.
    """

    __slots__ = ("_keywords",)

    def __init__(self, keywords: frozenset[str] = frozenset()) -> None:
        self._keywords = keywords

    def __call__(self, text: str) -> Iterator[Token]:
        for m in _TOKEN_RE.finditer(text):
            word = m.group()
            yield Token(
                word,
                start_offset=m.start(),
                end_offset=m.end(),
                keyword=word in self._keywords,
            )
