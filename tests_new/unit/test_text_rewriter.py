"""Tests for link substitution and header/footer composition."""

from app.bot.text_rewriter import replace_links, wrap_with_header_footer
from app.models import ChatSettings

POWERED_BY = "✅ Powered by PowerURLShortener.link"


class TestReplaceLinks:
    def test_replaces_every_occurrence(self) -> None:
        text = "check https://a.co/x and https://a.co/x again"
        links = ["https://a.co/x", "https://a.co/x"]
        shortened = ["https://s.ly/1", "https://s.ly/1"]

        assert replace_links(text, links, shortened) == (
            "check https://s.ly/1 and https://s.ly/1 again"
        )

    def test_special_characters_are_matched_literally(self) -> None:
        link = "http://ex.com/a+b?c=1"
        # Would match if '.' and '+' were treated as pattern syntax
        text = f"{link} http://exXcom/aac=1"

        result = replace_links(text, [link], ["https://s.ly/q"])

        assert result == "https://s.ly/q http://exXcom/aac=1"

    def test_skips_unchanged_or_empty_short_links(self) -> None:
        text = "a https://one.io b https://two.io c https://three.io"
        links = ["https://one.io", "https://two.io", "https://three.io"]
        shortened = ["https://one.io", "", "https://s.ly/3"]

        assert replace_links(text, links, shortened) == (
            "a https://one.io b https://two.io c https://s.ly/3"
        )

    def test_other_text_is_untouched(self) -> None:
        text = "prefix https://a.co/x suffix"

        result = replace_links(text, ["https://a.co/x"], ["https://s.ly/1"])

        assert result == "prefix https://s.ly/1 suffix"

    def test_link_that_prefixes_another_does_not_split_it(self) -> None:
        text = "https://a.co/x https://a.co/xyz"
        links = ["https://a.co/x", "https://a.co/xyz"]
        shortened = ["https://s.ly/1", "https://s.ly/2"]

        assert replace_links(text, links, shortened) == "https://s.ly/1 https://s.ly/2"

    def test_backslashes_in_short_link_are_literal(self) -> None:
        result = replace_links("go https://a.co", ["https://a.co"], [r"https://s.ly/\1"])

        assert result == r"go https://s.ly/\1"


class TestWrapWithHeaderFooter:
    def test_header_footer_and_branding(self) -> None:
        settings = ChatSettings(header="HEAD\n", footer="FOOT")

        result = wrap_with_header_footer("body", settings, POWERED_BY)

        assert result == f"HEAD\nbody\nFOOT\n\n{POWERED_BY}"

    def test_branding_always_appended(self) -> None:
        result = wrap_with_header_footer("body", ChatSettings(), POWERED_BY)

        assert result == f"body\n\n{POWERED_BY}"
