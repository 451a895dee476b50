"""Content addressing for component files."""

import hashlib
from pathlib import Path


def digest(content: bytes | str) -> str:
    """Return the SHA-256 hex digest of component content.

    Text is encoded as UTF-8 first, so a string and its encoded bytes
    produce the same digest.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def digest_file(path: Path) -> str:
    """Digest the raw bytes of a file on disk."""
    return digest(path.read_bytes())
