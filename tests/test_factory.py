"""Tests for filter factories and analyzers built from options."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from decompound import (
    FILTER_FACTORIES,
    Args,
    ConfigurationError,
    FingerprintError,
    HunspellStemFilterFactory,
    HunspellStemmer,
    HyphenationCompoundWordFilterFactory,
    PrimaryWordFilterFactory,
    ResourceLoadError,
    ResourceLoader,
    Variant,
    build_analyzer,
    create_factory,
)


def _compound(cache, **options):
    args = {"hyphenator": "hyph.dic", "dictionary": "words.txt", "ignoreCase": "true"}
    args.update(options)
    return HyphenationCompoundWordFilterFactory(args, cache)


def test_registry_names():
    assert set(FILTER_FACTORIES) == {
        "hyphenationCompoundWord", "primaryWord", "fugenS", "stemmerOverride", "snowballStem",
        "hunspellStem",
    }


def test_defaults(cache):
    policy = _compound(cache).policy
    assert policy.variant is Variant.COMPOUND
    assert (policy.min_word_size, policy.min_subword_size, policy.max_subword_size) == (5, 2, 15)
    assert not policy.only_longest_match
    assert not policy.no_sub_matches
    assert not policy.no_overlapping_matches
    assert policy.epenthesis == ()


def test_primary_defaults(cache):
    factory = PrimaryWordFilterFactory({"hyphenator": "hyph.dic"}, cache)
    assert factory.policy.variant is Variant.PRIMARY
    assert factory.policy.only_longest_match


def test_options_parsed(cache):
    policy = _compound(
        cache, minWordSize="8", minSubwordSize="3", maxSubwordSize="12",
        onlyLongestMatch="true", noSubMatches="yes", noOverlappingMatches="1",
        epenthesis="es, s",
    ).policy
    assert (policy.min_word_size, policy.min_subword_size, policy.max_subword_size) == (8, 3, 12)
    assert policy.only_longest_match and policy.no_sub_matches and policy.no_overlapping_matches
    assert policy.epenthesis == ("es", "s")


def test_unknown_parameter(cache):
    with pytest.raises(ConfigurationError, match="Unknown parameters.*bogusArg"):
        _compound(cache, bogusArg="bogusValue")


def test_primary_rejects_compound_only_options(cache):
    with pytest.raises(ConfigurationError, match="noSubMatches"):
        PrimaryWordFilterFactory({"hyphenator": "hyph.dic", "noSubMatches": "true"}, cache)


def test_hyphenator_or_lang_required(cache):
    with pytest.raises(ConfigurationError, match="hyphenator"):
        HyphenationCompoundWordFilterFactory({"dictionary": "words.txt"}, cache)
    with pytest.raises(ConfigurationError, match="hyphenator"):
        HyphenationCompoundWordFilterFactory({"hyphenator": "h.dic", "lang": "de_DE"}, cache)


@pytest.mark.parametrize("key, value", [
    ("minWordSize", "five"),
    ("onlyLongestMatch", "maybe"),
])
def test_malformed_values_name_the_key(cache, key, value):
    with pytest.raises(ConfigurationError, match=key):
        _compound(cache, **{key: value})


def test_inconsistent_sizes(cache):
    with pytest.raises(ConfigurationError, match="maxSubwordSize"):
        _compound(cache, minSubwordSize="6", maxSubwordSize="4")


def test_unknown_filter(cache):
    with pytest.raises(ConfigurationError, match="Unknown filter"):
        create_factory("porterStem", {}, cache)


def test_unknown_snowball_language(cache):
    with pytest.raises(ConfigurationError, match="klingon"):
        create_factory("snowballStem", {"language": "klingon"}, cache)


def test_create_before_inform(cache):
    with pytest.raises(ConfigurationError, match="inform"):
        list(_compound(cache).create([]))


def test_missing_resource_file(cache, loader):
    factory = _compound(cache, dictionary="missing.txt")
    with pytest.raises(FingerprintError):
        factory.inform(loader)


def test_donaudampfschiff_end_to_end(cache, resource_dir):
    analyzer = build_analyzer(
        [("hyphenationCompoundWord",
          {"hyphenator": "hyph.dic", "dictionary": "words.txt", "ignoreCase": "true"})],
        base_dir=resource_dir, cache=cache,
    )
    assert analyzer.terms("Donaudampfschiff") == [
        "Donaudampfschiff", "Donau", "dampf", "schiff",
    ]


def test_ausbildungsleiter_longest_match(cache, resource_dir):
    analyzer = build_analyzer(
        [("hyphenationCompoundWord",
          {"hyphenator": "hyph.dic", "dictionary": "words.txt", "onlyLongestMatch": "true"})],
        base_dir=resource_dir, cache=cache,
    )
    assert analyzer.terms("ausbildungsleiter") == ["ausbildungsleiter", "ausbildungs", "leiter"]


def test_fugen_s_chain(cache, resource_dir):
    analyzer = build_analyzer([("fugenS", {})], base_dir=resource_dir, cache=cache)
    assert analyzer.terms("Reis Sicherheits und Ordnungsdienst") == [
        "Reis", "Sicherheit", "und", "Ordnungsdienst",
    ]


def test_keywords_survive_whole_chain(cache, resource_dir):
    (resource_dir / "stems.txt").write_text("Sicherheits\tsicherheit\n", encoding="utf-8")
    analyzer = build_analyzer(
        [
            ("stemmerOverride", {"dictionary": "stems.txt"}),
            ("fugenS", {}),
            ("snowballStem", {"language": "german"}),
        ],
        base_dir=resource_dir, cache=cache, keywords=["Ordnungs"],
    )
    tokens = analyzer.analyze("Sicherheits Ordnungs")
    assert [t.text for t in tokens] == ["sicherheit", "Ordnungs"]
    assert all(t.keyword for t in tokens)


def test_stemmer_override_without_files_passes_through(cache, resource_dir):
    analyzer = build_analyzer([("stemmerOverride", {})], base_dir=resource_dir, cache=cache)
    assert analyzer.terms("Häuser") == ["Häuser"]


def test_identical_configurations_share_resources(cache, loader):
    first = _compound(cache)
    second = _compound(cache, onlyLongestMatch="true")
    first.inform(loader)
    second.inform(loader)
    assert first.dictionary is second.dictionary
    assert first.hyphenator is second.hyphenator


def test_case_flag_gives_separate_dictionary(cache, loader):
    first = _compound(cache)
    second = _compound(cache, ignoreCase="false")
    first.inform(loader)
    second.inform(loader)
    assert first.dictionary is not second.dictionary
    assert first.hyphenator is second.hyphenator


def test_changed_file_gives_fresh_resource(cache, resource_dir, loader):
    first = _compound(cache)
    first.inform(loader)
    (resource_dir / "words.txt").write_text("donau\ndampf\n", encoding="utf-8")
    second = _compound(cache)
    second.inform(loader)
    assert first.dictionary is not second.dictionary
    assert second.dictionary.contains("dampf")
    assert not second.dictionary.contains("schiff")
    assert first.dictionary.contains("schiff")


def test_concurrent_pipelines_share_one_load(cache, resource_dir, monkeypatch):
    from decompound._dictionary import Dictionary

    calls = []
    lock = threading.Lock()
    original = Dictionary.load.__func__

    def counting_load(cls, config):
        with lock:
            calls.append(config)
        return original(cls, config)

    monkeypatch.setattr(Dictionary, "load", classmethod(counting_load))
    barrier = threading.Barrier(6)

    def build():
        factory = _compound(cache)
        barrier.wait()
        factory.inform(ResourceLoader(resource_dir))
        return factory.dictionary

    with ThreadPoolExecutor(max_workers=6) as pool:
        dictionaries = [f.result() for f in [pool.submit(build) for _ in range(6)]]

    assert len(calls) == 1
    assert all(d is dictionaries[0] for d in dictionaries)


def test_bundled_language(cache, resource_dir):
    analyzer = build_analyzer(
        [("primaryWord", {"lang": "de_DE", "dictionary": "words.txt", "ignoreCase": "true"})],
        base_dir=resource_dir, cache=cache,
    )
    terms = analyzer.terms("Haus")
    assert terms == ["Haus"]


# --- Option reader ---

def test_require_names_missing_key():
    reader = Args({"affix": "de.aff"})
    assert reader.require("affix") == "de.aff"
    with pytest.raises(ConfigurationError, match="missing parameter 'dictionary'"):
        reader.require("dictionary")


def test_encoding_spellings_compare_equal():
    assert Args({"encoding": "latin-1"}).get_encoding() == "iso8859-1"
    assert Args({"encoding": "ISO-8859-1"}).get_encoding() == "iso8859-1"
    assert Args().get_encoding() == "utf-8"


def test_unknown_encoding(cache):
    with pytest.raises(ConfigurationError, match="encoding"):
        _compound(cache, encoding="NOT-A-CHARSET")


def test_dictionary_encoding_option(cache, resource_dir):
    (resource_dir / "latin1.txt").write_bytes("kapitän\npatent\n".encode("iso8859-1"))
    (resource_dir / "hyph.dic").write_text("UTF-8\nn1p\n", encoding="utf-8")
    analyzer = build_analyzer(
        [("hyphenationCompoundWord",
          {"hyphenator": "hyph.dic", "dictionary": "latin1.txt", "encoding": "latin-1"})],
        base_dir=resource_dir, cache=cache,
    )
    assert analyzer.terms("kapitänpatent") == ["kapitänpatent", "kapitän", "patent"]


def test_stemmer_override_encoding_option(cache, resource_dir):
    (resource_dir / "stems.txt").write_bytes("Häuser\thaus\n".encode("cp1252"))
    analyzer = build_analyzer(
        [("stemmerOverride", {"dictionary": "stems.txt", "encoding": "cp1252"})],
        base_dir=resource_dir, cache=cache,
    )
    assert analyzer.terms("Häuser") == ["haus"]


# --- Malformed resources ---

@pytest.mark.parametrize("content", [
    "NOT-A-CHARSET\nu1d\n",
    "# compound parts\ndonau\n",
])
def test_malformed_hyphenator_file(cache, resource_dir, content):
    (resource_dir / "bad.dic").write_text(content, encoding="utf-8")
    with pytest.raises(ResourceLoadError):
        build_analyzer(
            [("hyphenationCompoundWord", {"hyphenator": "bad.dic"})],
            base_dir=resource_dir, cache=cache,
        )
    assert len(cache) == 0


# --- Hunspell ---

class FakeSpeller:
    def __init__(self, stems):
        self._stems = stems

    def stem(self, word):
        return [s.encode("utf-8") for s in self._stems.get(word, [])]


@pytest.fixture
def hunspell_dir(resource_dir):
    (resource_dir / "de.aff").write_text("SET UTF-8\n", encoding="utf-8")
    (resource_dir / "de.dic").write_text("1\nhaus\n", encoding="utf-8")
    return resource_dir


@pytest.fixture
def fake_hunspell(monkeypatch):
    calls = []

    def load(cls, config):
        calls.append(config)
        return cls(FakeSpeller({"häuser": ["haus"]}), config.ignore_case)

    monkeypatch.setattr(HunspellStemmer, "load", classmethod(load))
    return calls


def test_hunspell_requires_dictionary_and_affix(cache):
    with pytest.raises(ConfigurationError, match="missing parameter 'dictionary'"):
        HunspellStemFilterFactory({"affix": "de.aff"}, cache)
    with pytest.raises(ConfigurationError, match="missing parameter 'affix'"):
        HunspellStemFilterFactory({"dictionary": "de.dic"}, cache)


def test_hunspell_accepts_legacy_options(cache):
    HunspellStemFilterFactory(
        {"dictionary": "de.dic", "affix": "de.aff",
         "strictAffixParsing": "false", "recursionCap": "2"},
        cache,
    )


def test_hunspell_identical_configurations_share_resources(cache, hunspell_dir, fake_hunspell):
    loader = ResourceLoader(hunspell_dir)
    args = {"dictionary": "de.dic", "affix": "de.aff", "ignoreCase": "true"}
    first = HunspellStemFilterFactory(args, cache)
    second = HunspellStemFilterFactory(dict(args, longestOnly="true"), cache)
    first.inform(loader)
    second.inform(loader)
    assert first.stemmer is second.stemmer
    assert len(fake_hunspell) == 1
    third = HunspellStemFilterFactory(dict(args, ignoreCase="false"), cache)
    third.inform(loader)
    assert third.stemmer is not first.stemmer
    assert len(fake_hunspell) == 2


def test_hunspell_changed_affix_gives_fresh_resource(cache, hunspell_dir, fake_hunspell):
    loader = ResourceLoader(hunspell_dir)
    args = {"dictionary": "de.dic", "affix": "de.aff"}
    first = HunspellStemFilterFactory(args, cache)
    first.inform(loader)
    (hunspell_dir / "de.aff").write_text("SET ISO8859-1\n", encoding="utf-8")
    second = HunspellStemFilterFactory(args, cache)
    second.inform(loader)
    assert first.stemmer is not second.stemmer


def test_hunspell_pipeline(cache, hunspell_dir, fake_hunspell):
    analyzer = build_analyzer(
        [("hunspellStem", {"dictionary": "de.dic", "affix": "de.aff"})],
        base_dir=hunspell_dir, cache=cache,
    )
    assert analyzer.terms("die häuser") == ["die", "haus"]


def test_hunspell_with_real_dictionary(cache, hunspell_dir):
    pytest.importorskip("hunspell")
    (hunspell_dir / "de.aff").write_text(
        "SET UTF-8\n\nSFX S Y 1\nSFX S 0 er .\n", encoding="utf-8"
    )
    (hunspell_dir / "de.dic").write_text("1\nhaus/S\n", encoding="utf-8")
    analyzer = build_analyzer(
        [("hunspellStem", {"dictionary": "de.dic", "affix": "de.aff"})],
        base_dir=hunspell_dir, cache=cache,
    )
    assert analyzer.terms("hauser") == ["haus"]
