"""Tests for SHA-256 content fingerprints."""

import hashlib

import pytest

from decompound import FingerprintError, ResourceLoadError
from decompound._hash import sha256_file, sha256_files


def test_known_value(tmp_path):
    path = tmp_path / "a.txt"
    path.write_bytes(b"hello")
    assert sha256_file(path) == hashlib.sha256(b"hello").hexdigest()


def test_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    assert sha256_file(path) == hashlib.sha256(b"").hexdigest()


def test_content_not_path(tmp_path):
    """Same bytes under different names give the same digest."""
    a = tmp_path / "a.txt"
    b = tmp_path / "b.txt"
    a.write_text("donau\n")
    b.write_text("donau\n")
    assert sha256_file(a) == sha256_file(b)
    b.write_text("dampf\n")
    assert sha256_file(a) != sha256_file(b)


def test_combined_digest_is_order_sensitive(tmp_path):
    a = tmp_path / "a.txt"
    b = tmp_path / "b.txt"
    a.write_text("a")
    b.write_text("b")
    assert sha256_files([a, b]) != sha256_files([b, a])
    assert sha256_files([a, b]) == sha256_files([a, b])


def test_large_file_chunks(tmp_path):
    data = b"x" * 200_000
    path = tmp_path / "big.bin"
    path.write_bytes(data)
    assert sha256_file(path) == hashlib.sha256(data).hexdigest()


def test_missing_file(tmp_path):
    with pytest.raises(FingerprintError):
        sha256_file(tmp_path / "missing.txt")
    assert issubclass(FingerprintError, ResourceLoadError)
