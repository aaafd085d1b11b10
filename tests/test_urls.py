"""Tests for URL helpers."""

from treemarks.utils.urls import complete_url, interpret_text, is_url


class TestIsUrl:
    def test_https(self):
        assert is_url("https://example.com") is True

    def test_http_with_path(self):
        assert is_url("http://example.com/a/b") is True

    def test_plain_words(self):
        assert is_url("my favourite site") is False

    def test_missing_scheme(self):
        assert is_url("example.com") is False

    def test_no_dot(self):
        assert is_url("http://localhost") is False


class TestCompleteUrl:
    def test_adds_scheme(self):
        assert complete_url("example.com") == "http://example.com"

    def test_keeps_https(self):
        assert complete_url("https://example.com") == "https://example.com"

    def test_empty_stays_folder(self):
        assert complete_url("") == ""
        assert complete_url("   ") == ""


class TestInterpretText:
    def test_url_goes_to_url_field(self):
        assert interpret_text("https://example.com") == ("url", "https://example.com")

    def test_words_go_to_title_field(self):
        assert interpret_text("  Recipes ") == ("title", "Recipes")

    def test_bare_domain_is_a_title(self):
        assert interpret_text("example.com") == ("title", "example.com")
