"""
PasteBin Backend — Paste Store Unit Tests
===========================================

What:  Tests for PasteStore create / get_for_view / get_raw semantics.
How:   Exercises the store directly, no HTTP involved.

What we test:
    ✅ Content validation (missing, empty, non-text, size boundary)
    ✅ Defaulting of language and title, title truncation
    ✅ View counting on full reads only
    ✅ NotFoundError for unknown ids
    ✅ Id collision retry and exhaustion
    ✅ No lost view increments under concurrent readers
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import timezone
from unittest.mock import MagicMock

import pytest

from app.exceptions import IdentifierExhaustedError, NotFoundError, ValidationError
from app.services.paste_store import PasteStore


class TestPasteStoreCreate:
    """Tests for paste creation and input validation."""

    def setup_method(self):
        self.store = PasteStore()

    def test_create_returns_id_and_stored_paste(self):
        paste_id, paste = self.store.create("hello", language="python", title="greeting")

        assert paste.id == paste_id
        assert paste.content == "hello"
        assert paste.language == "python"
        assert paste.title == "greeting"
        assert paste.views == 0
        assert paste.created_at.tzinfo == timezone.utc
        assert paste_id in self.store
        assert len(self.store) == 1

    def test_id_is_eight_hex_characters(self):
        paste_id, _ = self.store.create("hello")

        assert len(paste_id) == 8
        int(paste_id, 16)

    def test_language_defaults_to_plaintext(self):
        _, paste = self.store.create("hello")
        assert paste.language == "plaintext"

    def test_title_defaults_to_empty_string(self):
        _, paste = self.store.create("hello")
        assert paste.title == ""

    def test_long_title_is_truncated_to_100_characters(self):
        _, paste = self.store.create("hello", title="t" * 150)
        assert paste.title == "t" * 100

    def test_short_title_is_kept_as_is(self):
        _, paste = self.store.create("hello", title="t" * 100)
        assert paste.title == "t" * 100

    def test_content_at_limit_is_accepted(self):
        _, paste = self.store.create("x" * 50_000)
        assert len(paste.content) == 50_000

    def test_content_over_limit_is_rejected(self):
        with pytest.raises(ValidationError, match="Content too large or missing"):
            self.store.create("x" * 50_001)
        assert len(self.store) == 0

    def test_empty_content_is_rejected(self):
        with pytest.raises(ValidationError, match="Content too large or missing"):
            self.store.create("")
        assert len(self.store) == 0

    def test_missing_content_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            self.store.create(None)
        assert exc_info.value.field == "content"
        assert len(self.store) == 0

    def test_non_text_content_is_rejected(self):
        with pytest.raises(ValidationError):
            self.store.create(12345)

    def test_non_text_title_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            self.store.create("hello", title=["not", "text"])
        assert exc_info.value.field == "title"
        assert len(self.store) == 0

    def test_identical_content_gets_distinct_ids(self):
        first_id, _ = self.store.create("same")
        second_id, _ = self.store.create("same")

        assert first_id != second_id
        assert self.store.get_raw(first_id) == "same"
        assert self.store.get_raw(second_id) == "same"
        assert len(self.store) == 2

    def test_custom_limits(self):
        store = PasteStore(max_content_length=5, max_title_length=3, default_language="text")

        _, paste = store.create("abcde", title="abcdef")
        assert paste.title == "abc"
        assert paste.language == "text"
        with pytest.raises(ValidationError):
            store.create("abcdef")

    def test_explicit_zero_title_length_is_honored(self):
        store = PasteStore(max_title_length=0)

        _, paste = store.create("hello", title="dropped")

        assert paste.title == ""

    def test_explicit_empty_default_language_is_honored(self):
        store = PasteStore(default_language="")

        _, paste = store.create("hello")

        assert paste.language == ""


class TestPasteStoreIdentifiers:
    """Tests for id allocation and collision handling."""

    def test_colliding_id_is_redrawn(self):
        ids = iter(["aaaa0000", "aaaa0000", "bbbb1111"])
        store = PasteStore(id_factory=lambda: next(ids))

        first_id, _ = store.create("first")
        second_id, _ = store.create("second")

        assert first_id == "aaaa0000"
        assert second_id == "bbbb1111"
        assert store.get_raw("aaaa0000") == "first"

    def test_exhausted_attempts_raise_and_keep_existing_paste(self):
        store = PasteStore(id_factory=lambda: "cafebabe", id_max_attempts=3)
        store.create("original")

        with pytest.raises(IdentifierExhaustedError) as exc_info:
            store.create("intruder")

        assert exc_info.value.attempts == 3
        assert store.get_raw("cafebabe") == "original"
        assert len(store) == 1

    def test_zero_attempts_never_draws_an_id(self):
        factory = MagicMock(return_value="cafebabe")
        store = PasteStore(id_factory=factory, id_max_attempts=0)

        with pytest.raises(IdentifierExhaustedError):
            store.create("hello")

        factory.assert_not_called()
        assert len(store) == 0


class TestPasteStoreReads:
    """Tests for get_for_view and get_raw."""

    def setup_method(self):
        self.store = PasteStore()
        self.paste_id, _ = self.store.create("print('hi')", language="python", title="demo")

    def test_get_for_view_increments_views(self):
        first = self.store.get_for_view(self.paste_id)
        second = self.store.get_for_view(self.paste_id)

        assert first.views == 1
        assert second.views == 2
        assert second.content == "print('hi')"

    def test_views_equal_number_of_full_reads(self):
        for _ in range(7):
            paste = self.store.get_for_view(self.paste_id)
        assert paste.views == 7

    def test_returned_paste_is_a_snapshot(self):
        first = self.store.get_for_view(self.paste_id)
        self.store.get_for_view(self.paste_id)
        assert first.views == 1

    def test_get_raw_returns_content_without_counting(self):
        for _ in range(5):
            assert self.store.get_raw(self.paste_id) == "print('hi')"

        assert self.store.get_for_view(self.paste_id).views == 1

    def test_get_for_view_unknown_id_raises(self):
        with pytest.raises(NotFoundError) as exc_info:
            self.store.get_for_view("00000000")
        assert exc_info.value.message == "Paste not found"

    def test_get_raw_unknown_id_raises(self):
        with pytest.raises(NotFoundError):
            self.store.get_raw("00000000")


class TestPasteStoreConcurrency:
    """Tests for atomicity under concurrent access from threads."""

    def test_concurrent_views_are_not_lost(self):
        store = PasteStore()
        paste_id, _ = store.create("popular")

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda _: store.get_for_view(paste_id), range(400)))

        assert store.get_for_view(paste_id).views == 401

    def test_concurrent_creates_get_unique_ids(self):
        store = PasteStore()

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda i: store.create(f"paste {i}"), range(200)))

        ids = {paste_id for paste_id, _ in results}
        assert len(ids) == 200
        assert len(store) == 200
