"""Tests for the word dictionary."""

import msgpack

from decompound import Dictionary, DictionaryConfig


def test_contains_span():
    dictionary = Dictionary(["dampf"])
    assert dictionary.contains("donaudampfschiff", 5, 5)
    assert not dictionary.contains("donaudampfschiff", 5, 4)
    assert dictionary.contains("dampf")


def test_case_sensitive_by_default():
    dictionary = Dictionary(["donau"])
    assert not dictionary.contains("Donau")


def test_ignore_case():
    dictionary = Dictionary(["Donau"], ignore_case=True)
    assert dictionary.contains("DONAU")
    assert dictionary.contains("donau")
    assert dictionary.ignore_case


def test_duplicates_and_blanks():
    dictionary = Dictionary(["donau", "donau", "", "Donau"], ignore_case=True)
    assert len(dictionary) == 1


def test_in_operator():
    dictionary = Dictionary(["schiff"])
    assert "schiff" in dictionary
    assert "schif" not in dictionary
    assert 42 not in dictionary


def test_load_from_files(resource_dir, loader):
    (resource_dir / "more.bin").write_bytes(msgpack.packb(["kapitän"]))
    config = DictionaryConfig.from_files(loader, ("words.txt", "more.bin"), True)
    dictionary = Dictionary.load(config)
    assert dictionary.contains("Kapitän")
    assert dictionary.contains("Leiter")
    assert not dictionary.contains("# compound parts")


def test_config_equality_uses_content(resource_dir, loader):
    a = DictionaryConfig.from_files(loader, ("words.txt",))
    b = DictionaryConfig.from_files(loader, ("words.txt",))
    assert a == b and hash(a) == hash(b)
    (resource_dir / "words.txt").write_text("anders\n", encoding="utf-8")
    assert DictionaryConfig.from_files(loader, ("words.txt",)) != a


def test_config_flags_take_part_in_equality(loader):
    assert DictionaryConfig.from_files(loader, ("words.txt",), False) != (
        DictionaryConfig.from_files(loader, ("words.txt",), True)
    )


def test_load_with_charset(resource_dir, loader):
    (resource_dir / "latin1.txt").write_bytes("kapitän\n".encode("iso8859-1"))
    config = DictionaryConfig.from_files(loader, ("latin1.txt",), encoding="iso8859-1")
    assert Dictionary.load(config).contains("kapitän")


def test_config_encoding_takes_part_in_equality(loader):
    assert DictionaryConfig.from_files(loader, ("words.txt",), encoding="utf-8") != (
        DictionaryConfig.from_files(loader, ("words.txt",), encoding="iso8859-1")
    )
