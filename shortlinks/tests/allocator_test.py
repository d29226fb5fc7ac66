import random
from unittest.mock import MagicMock

import pytest

from shortlinks.core.errors import AlreadyExists, InvalidFormat
from shortlinks.db import repository
from shortlinks.services.allocator import CodeAllocator
from shortlinks.utils.encoding import ALPHABET, is_valid_short_code


def test_generated_code_is_six_alphanumerics(db_session):
    allocator = CodeAllocator(rng=random.Random(0))
    for _ in range(50):
        code = allocator.allocate(db_session)
        assert len(code) == 6
        assert code.isalnum() and code.isascii()


def test_generated_code_is_reproducible_with_seed(db_session):
    first = CodeAllocator(rng=random.Random(99))
    second = CodeAllocator(rng=random.Random(99))
    assert [first.allocate(db_session) for _ in range(5)] == [second.allocate(db_session) for _ in range(5)]


def test_generation_draws_from_whole_alphabet():
    allocator = CodeAllocator(rng=random.Random(7))
    drawn = "".join(allocator.generate() for _ in range(2000))
    assert set(drawn) == set(ALPHABET)
    assert len(ALPHABET) == 62


def test_generated_code_skips_reserved_words(scripted_rng):
    allocator = CodeAllocator(rng=scripted_rng("healthQwErTy"))
    assert allocator.generate() == "QwErTy"


def test_generated_code_does_not_query_store():
    db = MagicMock()
    CodeAllocator(rng=random.Random(1)).allocate(db)
    db.query.assert_not_called()


@pytest.mark.parametrize("code", ["abc123", "ABCdef12", "Zz9Zz9z"])
def test_custom_code_returned_unchanged(db_session, code):
    assert CodeAllocator().allocate(db_session, code) == code


@pytest.mark.parametrize("code", ["abc12", "abcdefghi", "abc-12", "abc 123", "ábc123", "health"])
def test_invalid_custom_code_rejected_before_store_access(code):
    db = MagicMock()
    with pytest.raises(InvalidFormat):
        CodeAllocator().allocate(db, code)
    db.query.assert_not_called()


def test_taken_custom_code_rejected(db_session):
    repository.create_link(db_session, "taken1", "https://example.com/first")
    with pytest.raises(AlreadyExists) as exc_info:
        CodeAllocator().allocate(db_session, "taken1")
    assert "already exists" in exc_info.value.message.lower()


def test_custom_code_check_is_case_sensitive(db_session):
    repository.create_link(db_session, "MixEd1", "https://example.com/first")
    assert CodeAllocator().allocate(db_session, "mixed1") == "mixed1"


def test_is_valid_short_code():
    assert is_valid_short_code("abcdef")
    assert is_valid_short_code("abcdefgh")
    assert not is_valid_short_code("abcdefghi")
    assert not is_valid_short_code("abc123\n")


@pytest.mark.parametrize("code", ["HEALTH", "Health", "hEaLtH12"])
def test_reserved_check_is_exact_match(db_session, code):
    assert CodeAllocator().allocate(db_session, code) == code


def test_generated_uppercase_lookalike_is_kept(scripted_rng):
    assert CodeAllocator(rng=scripted_rng("HEALTH")).generate() == "HEALTH"
