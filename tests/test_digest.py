"""Tests for content addressing."""

import hashlib

from compsync.digest import digest, digest_file


def test_digest_is_sha256_hex():
    result = digest(b"export const Button = () => null;\n")
    assert len(result) == 64
    assert result == hashlib.sha256(b"export const Button = () => null;\n").hexdigest()


def test_digest_is_stable():
    content = b"<div>hello</div>"
    assert digest(content) == digest(content)


def test_digest_changes_with_single_byte():
    assert digest(b"<div>hello</div>") != digest(b"<div>hellO</div>")
    assert digest(b"abc") != digest(b"abc\n")


def test_digest_text_matches_utf8_bytes():
    text = "const label = \"Größe\";"
    assert digest(text) == digest(text.encode("utf-8"))


def test_digest_file_matches_content(temp_dir):
    content = "export function Card() {}\n".encode()
    path = temp_dir / "card.tsx"
    path.write_bytes(content)
    assert digest_file(path) == digest(content)
