"""SHA-256 content fingerprints for resource files."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

from ._errors import FingerprintError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

_CHUNK_SIZE = 65536


def sha256_file(path: Path) -> str:
    """Compute the SHA-256 hex digest of a file's bytes."""
    h = hashlib.sha256()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
                h.update(chunk)
    except OSError as exc:
        raise FingerprintError(f"Unable to fingerprint {path}: {exc}") from exc
    return h.hexdigest()


def sha256_files(paths: Iterable[Path]) -> str:
    """Combined digest over several files, sensitive to their order."""
    h = hashlib.sha256()
    for path in paths:
        h.update(bytes.fromhex(sha256_file(path)))
    return h.hexdigest()
