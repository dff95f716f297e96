"""
PasteBin Backend — Identifier Generation Tests
================================================
"""

import string
from unittest.mock import patch

import pytest

from app.services.id_generator import generate_paste_id


class TestGeneratePasteId:

    def test_default_id_is_eight_lowercase_hex_characters(self):
        paste_id = generate_paste_id()

        assert len(paste_id) == 8
        assert set(paste_id) <= set(string.hexdigits.lower())

    def test_length_follows_byte_count(self):
        assert len(generate_paste_id(16)) == 32

    def test_uses_secrets_module(self):
        with patch("app.services.id_generator.secrets.token_hex", return_value="deadbeef") as mock_hex:
            assert generate_paste_id() == "deadbeef"
        mock_hex.assert_called_once_with(4)

    def test_non_positive_byte_count_rejected(self):
        with pytest.raises(ValueError):
            generate_paste_id(0)

    def test_ids_do_not_repeat(self):
        ids = {generate_paste_id(16) for _ in range(500)}
        assert len(ids) == 500
