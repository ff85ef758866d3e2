"""
Tests for input sanitizing helpers, response helpers and secret normalization.
"""

from types import SimpleNamespace

import pytest

from cellarbook.config import normalize_secret_string
from cellarbook.utils import blank_to_none, escape_like, first_row, sanitize_filename, sanitize_text_input


class TestSanitize:
    """Test free-text and filename cleaning."""

    def test_text_truncated_and_collapsed(self):
        """Long text is cut and runs of blank lines collapse to one."""
        assert sanitize_text_input("a\n\n\n\nb", max_length=100) == "a\n\nb"
        assert sanitize_text_input("x" * 10, max_length=4) == "xxxx"
        assert sanitize_text_input(None) == ""

    def test_blank_to_none(self):
        """Blank form fields become NULL, others are stripped."""
        assert blank_to_none("  ") is None
        assert blank_to_none(None) is None
        assert blank_to_none(" Rack B ") == "Rack B"

    def test_escape_like(self):
        """LIKE metacharacters are escaped."""
        assert escape_like("100%_pure\\") == "100\\%\\_pure\\\\"

    def test_filename(self):
        """Accents and punctuation are stripped from storage names."""
        assert sanitize_filename("Château d'Yquem 2001") == "chateau_dyquem_2001"


class TestFirstRow:
    """Test picking the first row from a query response."""

    def test_first_of_many(self):
        """The first returned row wins."""
        assert first_row(SimpleNamespace(data=[{"id": "a"}, {"id": "b"}])) == {"id": "a"}

    @pytest.mark.parametrize("data", [[], None])
    def test_empty_response(self, data):
        """No rows gives an empty dict."""
        assert first_row(SimpleNamespace(data=data)) == {}


class TestSecrets:
    """Test secret string normalization."""

    @pytest.mark.parametrize("raw", ['"abc"', "'abc'", "  abc  ", "“abc”"])
    def test_quotes_and_whitespace_stripped(self, raw):
        """Stray quotes and whitespace are removed."""
        assert normalize_secret_string(raw, "KEY") == "abc"

    @pytest.mark.parametrize("raw", [None, "", '""'])
    def test_missing_or_empty(self, raw):
        """Missing or empty secrets raise ValueError."""
        with pytest.raises(ValueError):
            normalize_secret_string(raw, "KEY")
