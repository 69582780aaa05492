"""Shared fixtures for decompound tests."""

import pytest

from decompound import ResourceCache, ResourceLoader

# pyphen pattern file: breaks donau|dampf|schiff and ausbildungs|leiter
PATTERNS = "UTF-8\nu1d\nf1s\ns1l\n"


class SyllableHyphenator:
    """Hyphenation source returning fixed syllables per lower-cased word."""

    def __init__(self, syllables):
        self._syllables = {w: parts for w, parts in syllables.items()}
        self.calls = 0

    def hyphenate(self, text, offset=0, length=None):
        self.calls += 1
        if length is None:
            length = len(text) - offset
        parts = self._syllables.get(text[offset:offset + length].lower())
        if not parts:
            return None
        points = [0]
        for part in parts:
            points.append(points[-1] + len(part))
        assert points[-1] == length
        return tuple(points)


@pytest.fixture
def syllables():
    return SyllableHyphenator({
        "donaudampfschiff": ["do", "nau", "dampf", "schiff"],
        "ausbildungsleiter": ["aus", "bil", "dungs", "lei", "ter"],
        "basketballkurv": ["bas", "ket", "ball", "kurv"],
        "læsehest": ["læ", "se", "hest"],
    })


@pytest.fixture
def cache():
    """A private cache so tests do not share the process-wide one."""
    return ResourceCache()


@pytest.fixture
def resource_dir(tmp_path):
    (tmp_path / "hyph.dic").write_text(PATTERNS, encoding="utf-8")
    (tmp_path / "words.txt").write_text(
        "# compound parts\ndonau\ndampf\nschiff\n\nausbildungs\nausbildung\nleiter\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def loader(resource_dir):
    return ResourceLoader(resource_dir)
