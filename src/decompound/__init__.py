"""Decompound: hyphenation-based decomposition of Germanic compound words."""

from __future__ import annotations

from ._cache import ResourceCache, ResourceRef, ResourceType
from ._config import (
    Args,
    DictionaryConfig,
    HunspellDictionaryConfig,
    HyphenatorConfig,
    StemmerOverrideConfig,
)
from ._dictionary import Dictionary
from ._errors import (
    ConfigurationError,
    DecompoundError,
    FingerprintError,
    ResourceLoadError,
)
from ._factory import (
    FILTER_FACTORIES,
    Analyzer,
    FilterFactory,
    FugenSFilterFactory,
    HunspellStemFilterFactory,
    HyphenationCompoundWordFilterFactory,
    PrimaryWordFilterFactory,
    SnowballStemFilterFactory,
    StemmerOverrideFilterFactory,
    build_analyzer,
    create_factory,
)
from ._filters import (
    CompoundWordFilter,
    FugenSFilter,
    HunspellStemFilter,
    SnowballStemFilter,
    StemmerOverrideFilter,
    StemmerOverrideMap,
)
from ._fugen_s import strip_fugen_s
from ._hunspell import HunspellStemmer
from ._hyphenator import Hyphenator
from ._loader import ResourceLoader
from ._segmenter import decompose, epenthesis_length
from ._tokenizer import Tokenizer
from ._types import CompoundToken, SegmentationPolicy, Token, Variant

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Analyzer",
    "Args",
    "CompoundToken",
    "CompoundWordFilter",
    "ConfigurationError",
    "DecompoundError",
    "Dictionary",
    "DictionaryConfig",
    "FILTER_FACTORIES",
    "FilterFactory",
    "FingerprintError",
    "FugenSFilter",
    "FugenSFilterFactory",
    "HunspellDictionaryConfig",
    "HunspellStemFilter",
    "HunspellStemFilterFactory",
    "HunspellStemmer",
    "HyphenationCompoundWordFilterFactory",
    "Hyphenator",
    "HyphenatorConfig",
    "PrimaryWordFilterFactory",
    "ResourceCache",
    "ResourceLoadError",
    "ResourceLoader",
    "ResourceRef",
    "ResourceType",
    "SegmentationPolicy",
    "SnowballStemFilter",
    "SnowballStemFilterFactory",
    "StemmerOverrideConfig",
    "StemmerOverrideFilter",
    "StemmerOverrideFilterFactory",
    "StemmerOverrideMap",
    "Token",
    "Tokenizer",
    "Variant",
    "build_analyzer",
    "create_factory",
    "decompose",
    "epenthesis_length",
    "strip_fugen_s",
]
