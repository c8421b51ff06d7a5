"""Tests for hash module."""

import pytest
from hypothesis import given, strategies as st

from pagewright.core.hash import (
    Algorithm,
    create_hasher,
    fingerprint,
    hash_bytes,
    hash_fields,
    hash_string,
)


def test_hash_string_xxhash():
    """Test xxhash string hashing."""
    result = hash_string("test", Algorithm.XXHASH64)
    assert isinstance(result, str)
    assert len(result) == 16  # xxhash64 produces 16 hex chars

    # Same input = same hash
    assert hash_string("test", Algorithm.XXHASH64) == result


def test_hash_string_sha256():
    """Test SHA256 string hashing."""
    result = hash_string("test", Algorithm.SHA256)
    assert result == "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08"


def test_hash_string_truncate():
    """Test hash truncation."""
    full = hash_string("test", Algorithm.SHA256)
    truncated = hash_string("test", Algorithm.SHA256, truncate=16)

    assert len(truncated) == 16
    assert full.startswith(truncated)


def test_hash_bytes():
    """Test byte hashing."""
    assert hash_bytes(b"test data") == hash_string("test data")
    assert len(hash_bytes(b"test data", Algorithm.XXHASH64)) == 16


def test_hash_fields():
    """Test multi-field hashing."""
    result = hash_fields("field1", "field2", "field3")

    # Order matters
    assert result != hash_fields("field3", "field2", "field1")

    # Field boundaries matter
    assert hash_fields("ab", "c") != hash_fields("a", "bc")

    # Deterministic
    assert result == hash_fields("field1", "field2", "field3")


def test_create_hasher():
    """Test hasher creation."""
    assert len(create_hasher(Algorithm.XXHASH64).digest(b"test")) == 16
    assert len(create_hasher(Algorithm.SHA256).digest(b"test")) == 64


def test_create_hasher_invalid():
    """Test invalid algorithm."""
    with pytest.raises(ValueError):
        create_hasher("invalid")  # type: ignore


def test_fingerprint_distinguishes_values():
    assert fingerprint({"padding": 16}) != fingerprint({"padding": 17})
    assert fingerprint([1, 2]) != fingerprint([2, 1])
    assert len(fingerprint({"a": 1}, Algorithm.SHA256)) == 64


_STYLE = st.dictionaries(
    st.text(alphabet="abcdefghijklmnop-", min_size=1, max_size=12),
    st.one_of(st.integers(), st.text(max_size=10), st.booleans()),
    max_size=10,
)


@given(_STYLE)
def test_fingerprint_ignores_key_order(style):
    """Property test: equal mappings fingerprint equally in any insertion order."""
    reordered = dict(reversed(list(style.items())))
    assert fingerprint(style) == fingerprint(reordered)


@given(st.text(min_size=1, max_size=1000))
def test_hash_deterministic(text):
    """Property test: hashing is deterministic."""
    assert hash_string(text, Algorithm.XXHASH64) == hash_string(text, Algorithm.XXHASH64)
