"""Tests for link extraction."""

from app.bot.link_extractor import LinkExtractor


class TestLinkExtractor:
    def setup_method(self) -> None:
        self.extractor = LinkExtractor()

    def test_extract_links_in_order_with_duplicates(self) -> None:
        text = "check https://a.co/x and www.b.org/y then https://a.co/x again"

        extracted = self.extractor.extract_links(text)

        assert extracted == ["https://a.co/x", "www.b.org/y", "https://a.co/x"]

    def test_extract_links_runs_through_non_whitespace(self) -> None:
        url = "http://ex.com/a+b?c=1&d=(2)."
        text = f"see {url}\nnext line"

        assert self.extractor.extract_links(text) == [url]

    def test_extract_links_empty_or_missing_text(self) -> None:
        assert self.extractor.extract_links("") == []
        assert self.extractor.extract_links(None) == []

    def test_plain_text_has_no_links(self) -> None:
        text = "no links here, just example.com and ftp://files"

        assert self.extractor.extract_links(text) == []
        assert self.extractor.has_links(text) is False

    def test_has_links(self) -> None:
        assert self.extractor.has_links("go to https://x.io") is True
        assert self.extractor.has_links(None) is False
