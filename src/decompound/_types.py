"""Data structures for decompound."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from ._errors import ConfigurationError

DEFAULT_MIN_WORD_SIZE = 5
DEFAULT_MIN_SUBWORD_SIZE = 2
DEFAULT_MAX_SUBWORD_SIZE = 15


@dataclass(slots=True)
class Token:
    text: str
    start_offset: int = 0
    end_offset: int = -1         # -1: derive from start_offset + len(text)
    position_increment: int = 1  # 0 for subwords stacked on the original
    keyword: bool = False        # keyword tokens are never rewritten

    def __post_init__(self) -> None:
        if self.end_offset < 0:
            self.end_offset = self.start_offset + len(self.text)


@dataclass(slots=True, frozen=True)
class CompoundToken:
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length

    def text_of(self, word: str) -> str:
        return word[self.start:self.end]


class Variant(enum.Enum):
    """Selects the decomposition algorithm and its defaults."""

    COMPOUND = "compound"
    PRIMARY = "primary"

    @property
    def default_only_longest_match(self) -> bool:
        return self is Variant.PRIMARY


@dataclass(slots=True, frozen=True)
class SegmentationPolicy:
    variant: Variant = Variant.COMPOUND
    min_word_size: int = DEFAULT_MIN_WORD_SIZE
    min_subword_size: int = DEFAULT_MIN_SUBWORD_SIZE
    max_subword_size: int = DEFAULT_MAX_SUBWORD_SIZE
    only_longest_match: bool = False
    no_sub_matches: bool = False
    no_overlapping_matches: bool = False
    epenthesis: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.min_word_size < 0:
            raise ConfigurationError(
                f"minWordSize must be >= 0, got {self.min_word_size}"
            )
        if self.min_subword_size < 1:
            raise ConfigurationError(
                f"minSubwordSize must be >= 1, got {self.min_subword_size}"
            )
        if self.max_subword_size < self.min_subword_size:
            raise ConfigurationError(
                f"maxSubwordSize ({self.max_subword_size}) must be >= "
                f"minSubwordSize ({self.min_subword_size})"
            )
        # null and empty entries never match
        cleaned = tuple(e for e in self.epenthesis if e)
        if cleaned != self.epenthesis:
            object.__setattr__(self, "epenthesis", cleaned)

    @classmethod
    def for_variant(cls, variant: Variant, **kwargs) -> SegmentationPolicy:
        """Policy with the variant's defaults, overridden by ``kwargs``."""
        kwargs.setdefault("only_longest_match", variant.default_only_longest_match)
        return cls(variant=variant, **kwargs)

    @property
    def calc_sub_matches(self) -> bool:
        """True when every nested dictionary match is wanted."""
        return not (
            self.only_longest_match
            or self.no_sub_matches
            or self.no_overlapping_matches
        )
