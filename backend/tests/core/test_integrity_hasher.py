"""Integrity Hasher — tests for the keyed tracking digest.

Tests cover:
    - Determinism and hex shape
    - Binding to value, identity and secret key
    - Single-bit mutation of digest or identity fails matches()
    - Secret never shows in repr
"""

import pytest

from board.core.integrity_hasher import IntegrityHasher

SECRET = "k" * 64


def _flip_bit(text: str, index: int = 0) -> str:
    flipped = chr(ord(text[index]) ^ 1)
    return text[:index] + flipped + text[index + 1:]


def test_digest_is_deterministic():
    hasher = IntegrityHasher(SECRET)
    assert hasher.digest(42, "alice") == hasher.digest(42, "alice")


def test_digest_is_lowercase_sha256_hex():
    digest = IntegrityHasher(SECRET).digest(42, "alice")
    assert len(digest) == 64
    assert digest == digest.lower()
    int(digest, 16)


def test_digest_depends_on_value():
    hasher = IntegrityHasher(SECRET)
    assert hasher.digest(1, "alice") != hasher.digest(2, "alice")


def test_digest_depends_on_identity():
    hasher = IntegrityHasher(SECRET)
    assert hasher.digest(1, "alice") != hasher.digest(1, "bob")


def test_digest_depends_on_secret():
    assert IntegrityHasher(SECRET).digest(1, "alice") != IntegrityHasher(
        "x" * 64,
    ).digest(1, "alice")


def test_matches_accepts_own_digest():
    hasher = IntegrityHasher(SECRET)
    assert hasher.matches(7, "alice", hasher.digest(7, "alice"))


@pytest.mark.parametrize("index", [0, 10, 63])
def test_matches_rejects_single_bit_digest_mutation(index):
    hasher = IntegrityHasher(SECRET)
    digest = hasher.digest(7, "alice")
    assert not hasher.matches(7, "alice", _flip_bit(digest, index))


def test_matches_rejects_single_bit_identity_mutation():
    hasher = IntegrityHasher(SECRET)
    digest = hasher.digest(7, "alice")
    assert not hasher.matches(7, _flip_bit("alice"), digest)


def test_matches_rejects_non_ascii_digest_without_raising():
    hasher = IntegrityHasher(SECRET)
    assert not hasher.matches(7, "alice", "ダイジェスト")


def test_empty_secret_rejected():
    with pytest.raises(ValueError):
        IntegrityHasher("")


def test_repr_hides_secret():
    assert SECRET not in repr(IntegrityHasher(SECRET))
