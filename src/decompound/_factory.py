"""Filter factories configured from string options.

A factory is created once per configured pipeline stage. It validates its
options on construction, resolves shared resources in ``inform`` and wraps
token streams in ``create``. Resources come from a ``ResourceCache`` so that
identically configured stages share one loaded copy.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import Stemmer

from ._cache import ResourceCache, ResourceType
from ._config import (
    Args,
    DictionaryConfig,
    HunspellDictionaryConfig,
    HyphenatorConfig,
    StemmerOverrideConfig,
)
from ._dictionary import Dictionary
from ._errors import ConfigurationError
from ._filters import (
    CompoundWordFilter,
    FugenSFilter,
    HunspellStemFilter,
    SnowballStemFilter,
    StemmerOverrideFilter,
    StemmerOverrideMap,
)
from ._hunspell import HunspellStemmer
from ._hyphenator import Hyphenator
from ._loader import ResourceLoader, split_file_names
from ._tokenizer import Tokenizer
from ._types import (
    DEFAULT_MAX_SUBWORD_SIZE,
    DEFAULT_MIN_SUBWORD_SIZE,
    DEFAULT_MIN_WORD_SIZE,
    SegmentationPolicy,
    Variant,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence
    from pathlib import Path

    from ._types import Token

logger = logging.getLogger(__name__)

DICTIONARY_RESOURCE: ResourceType[DictionaryConfig, Dictionary] = ResourceType(
    "decompound.dictionary", DictionaryConfig, Dictionary
)
HYPHENATOR_RESOURCE: ResourceType[HyphenatorConfig, Hyphenator] = ResourceType(
    "decompound.hyphenator", HyphenatorConfig, Hyphenator
)
STEMMER_OVERRIDE_RESOURCE: ResourceType[StemmerOverrideConfig, StemmerOverrideMap] = (
    ResourceType("decompound.stemmer_override", StemmerOverrideConfig, StemmerOverrideMap)
)
HUNSPELL_RESOURCE: ResourceType[HunspellDictionaryConfig, HunspellStemmer] = ResourceType(
    "decompound.hunspell", HunspellDictionaryConfig, HunspellStemmer
)


def _register_loaders(cache: ResourceCache) -> None:
    cache.register_loader(DICTIONARY_RESOURCE, lambda ref: Dictionary.load(ref.key))
    cache.register_loader(HYPHENATOR_RESOURCE, lambda ref: Hyphenator.load(ref.key))
    cache.register_loader(
        STEMMER_OVERRIDE_RESOURCE, lambda ref: StemmerOverrideMap.load(ref.key)
    )
    cache.register_loader(HUNSPELL_RESOURCE, lambda ref: HunspellStemmer.load(ref.key))


class FilterFactory:
    """Base for factories; stages without resources only implement ``create``."""

    name = ""

    def __init__(
        self, args: Mapping[str, str] | None = None, cache: ResourceCache | None = None
    ) -> None:
        self._cache = cache if cache is not None else ResourceCache.instance()
        reader = Args(args)
        self._configure(reader)
        reader.check_empty()

    def _configure(self, reader: Args) -> None:
        """Consume this factory's options from ``reader``."""

    def inform(self, loader: ResourceLoader) -> None:
        """Resolve shared resources; called once before ``create``."""

    def create(self, tokens: Iterable[Token]) -> Iterator[Token]:
        raise NotImplementedError


class HyphenationCompoundWordFilterFactory(FilterFactory):
    """Decomposes compounds into every dictionary-confirmed subword."""

    name = "hyphenationCompoundWord"
    variant = Variant.COMPOUND

    def _configure(self, reader: Args) -> None:
        _register_loaders(self._cache)
        self._hyphenator_file = reader.get("hyphenator")
        self._lang = reader.get("lang")
        if (self._hyphenator_file is None) == (self._lang is None):
            raise ConfigurationError(
                "Configuration Error: exactly one of 'hyphenator' or 'lang' is required"
            )
        self._dictionary_files = reader.get_list("dictionary")
        self._ignore_case = reader.get_bool("ignoreCase", False)
        self._encoding = reader.get_encoding()
        self._policy = self._read_policy(reader)
        self._hyphenator: Hyphenator | None = None
        self._dictionary: Dictionary | None = None

    def _read_policy(self, reader: Args) -> SegmentationPolicy:
        return SegmentationPolicy.for_variant(
            self.variant,
            min_word_size=reader.get_int("minWordSize", DEFAULT_MIN_WORD_SIZE),
            min_subword_size=reader.get_int("minSubwordSize", DEFAULT_MIN_SUBWORD_SIZE),
            max_subword_size=reader.get_int("maxSubwordSize", DEFAULT_MAX_SUBWORD_SIZE),
            only_longest_match=reader.get_bool(
                "onlyLongestMatch", self.variant.default_only_longest_match
            ),
            no_sub_matches=reader.get_bool("noSubMatches", False),
            no_overlapping_matches=reader.get_bool("noOverlappingMatches", False),
            epenthesis=reader.get_list("epenthesis"),
        )

    @property
    def policy(self) -> SegmentationPolicy:
        return self._policy

    @property
    def dictionary(self) -> Dictionary | None:
        return self._dictionary

    @property
    def hyphenator(self) -> Hyphenator | None:
        return self._hyphenator

    def inform(self, loader: ResourceLoader) -> None:
        if self._dictionary_files:
            config = DictionaryConfig.from_files(
                loader, self._dictionary_files, self._ignore_case, self._encoding
            )
            logger.debug("%s: resolve %s", self.name, config)
            self._dictionary = self._cache.get_resource(
                DICTIONARY_RESOURCE.create_reference(config)
            )
        if self._lang is not None:
            hyph_config = HyphenatorConfig.from_language(self._lang)
        else:
            hyph_config = HyphenatorConfig.from_file(loader, self._hyphenator_file)
        logger.debug("%s: resolve %s", self.name, hyph_config)
        self._hyphenator = self._cache.get_resource(
            HYPHENATOR_RESOURCE.create_reference(hyph_config)
        )

    def create(self, tokens: Iterable[Token]) -> Iterator[Token]:
        if self._hyphenator is None:
            raise ConfigurationError(f"{self.name}: inform() must be called before create()")
        return CompoundWordFilter(self._hyphenator, self._dictionary, self._policy)(tokens)


class PrimaryWordFilterFactory(HyphenationCompoundWordFilterFactory):
    """Adds the primary (head) word of compounds, e.g. 'hest' for 'læsehest'."""

    name = "primaryWord"
    variant = Variant.PRIMARY

    def _read_policy(self, reader: Args) -> SegmentationPolicy:
        return SegmentationPolicy.for_variant(
            self.variant,
            min_word_size=reader.get_int("minWordSize", DEFAULT_MIN_WORD_SIZE),
            min_subword_size=reader.get_int("minSubwordSize", DEFAULT_MIN_SUBWORD_SIZE),
            max_subword_size=reader.get_int("maxSubwordSize", DEFAULT_MAX_SUBWORD_SIZE),
            only_longest_match=reader.get_bool(
                "onlyLongestMatch", self.variant.default_only_longest_match
            ),
            epenthesis=reader.get_list("epenthesis"),
        )


class FugenSFilterFactory(FilterFactory):
    name = "fugenS"

    def create(self, tokens: Iterable[Token]) -> Iterator[Token]:
        return FugenSFilter()(tokens)


class StemmerOverrideFilterFactory(FilterFactory):
    """Maps listed words to fixed stems; without files it passes tokens through."""

    name = "stemmerOverride"

    def _configure(self, reader: Args) -> None:
        _register_loaders(self._cache)
        self._files = reader.get_list("dictionary")
        self._ignore_case = reader.get_bool("ignoreCase", False)
        self._encoding = reader.get_encoding()
        self._overrides: StemmerOverrideMap | None = None

    @property
    def ignore_case(self) -> bool:
        return self._ignore_case

    def inform(self, loader: ResourceLoader) -> None:
        if not self._files:
            return
        config = StemmerOverrideConfig.from_files(
            loader, self._files, self._ignore_case, self._encoding
        )
        logger.debug("%s: resolve %s", self.name, config)
        self._overrides = self._cache.get_resource(
            STEMMER_OVERRIDE_RESOURCE.create_reference(config)
        )

    def create(self, tokens: Iterable[Token]) -> Iterator[Token]:
        if self._overrides is None:
            return iter(tokens)
        return StemmerOverrideFilter(self._overrides)(tokens)


class SnowballStemFilterFactory(FilterFactory):
    name = "snowballStem"

    def _configure(self, reader: Args) -> None:
        self._language = reader.get("language", "german")
        if self._language not in Stemmer.algorithms():
            raise ConfigurationError(
                f"Configuration Error: unknown snowball language {self._language!r}"
            )

    def create(self, tokens: Iterable[Token]) -> Iterator[Token]:
        return SnowballStemFilter(self._language)(tokens)


class HunspellStemFilterFactory(FilterFactory):
    """Stems tokens with a Hunspell affix file and its dictionaries."""

    name = "hunspellStem"

    def _configure(self, reader: Args) -> None:
        _register_loaders(self._cache)
        self._files = split_file_names(reader.require("dictionary"))
        if not self._files:
            raise ConfigurationError("Configuration Error: missing parameter 'dictionary'")
        self._affix = reader.require("affix")
        self._ignore_case = reader.get_bool("ignoreCase", False)
        self._longest_only = reader.get_bool("longestOnly", False)
        # accepted for compatibility; the dictionary data controls both
        reader.get_bool("strictAffixParsing", True)
        reader.get_int("recursionCap", 0)
        self._stemmer: HunspellStemmer | None = None

    @property
    def stemmer(self) -> HunspellStemmer | None:
        return self._stemmer

    def inform(self, loader: ResourceLoader) -> None:
        config = HunspellDictionaryConfig.from_files(
            loader, self._affix, self._files, self._ignore_case
        )
        logger.debug("%s: resolve %s", self.name, config)
        self._stemmer = self._cache.get_resource(HUNSPELL_RESOURCE.create_reference(config))

    def create(self, tokens: Iterable[Token]) -> Iterator[Token]:
        if self._stemmer is None:
            raise ConfigurationError(f"{self.name}: inform() must be called before create()")
        return HunspellStemFilter(self._stemmer, self._longest_only)(tokens)


FILTER_FACTORIES: dict[str, type[FilterFactory]] = {
    factory.name: factory
    for factory in (
        HyphenationCompoundWordFilterFactory,
        PrimaryWordFilterFactory,
        FugenSFilterFactory,
        StemmerOverrideFilterFactory,
        SnowballStemFilterFactory,
        HunspellStemFilterFactory,
    )
}


def create_factory(
    name: str, args: Mapping[str, str] | None = None, cache: ResourceCache | None = None
) -> FilterFactory:
    """Look up a factory by its registry name and construct it."""
    try:
        factory_cls = FILTER_FACTORIES[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown filter {name!r}; expected one of {sorted(FILTER_FACTORIES)}"
        ) from None
    return factory_cls(args, cache)


class Analyzer:
    """Tokenizer followed by a chain of filter stages."""

    __slots__ = ("_tokenizer", "_factories")

    def __init__(self, tokenizer: Tokenizer, factories: Sequence[FilterFactory]) -> None:
        self._tokenizer = tokenizer
        self._factories = tuple(factories)

    @property
    def factories(self) -> tuple[FilterFactory, ...]:
        return self._factories

    def stream(self, text: str) -> Iterator[Token]:
        tokens: Iterable[Token] = self._tokenizer(text)
        for factory in self._factories:
            tokens = factory.create(tokens)
        return iter(tokens)

    def analyze(self, text: str) -> list[Token]:
        return list(self.stream(text))

    def terms(self, text: str) -> list[str]:
        return [t.text for t in self.stream(text)]


def build_analyzer(
    filters: Sequence[tuple[str, Mapping[str, str]]],
    base_dir: Path | str | None = None,
    cache: ResourceCache | None = None,
    keywords: Iterable[str] = (),
) -> Analyzer:
    """Build an analyzer from ``[(filter_name, options), ...]``.

    Resource names in the options are resolved against ``base_dir``.
    """
    loader = ResourceLoader(base_dir)
    factories = []
    for name, args in filters:
        factory = create_factory(name, args, cache)
        factory.inform(loader)
        factories.append(factory)
    return Analyzer(Tokenizer(frozenset(keywords)), factories)
