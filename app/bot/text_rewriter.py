"""Link substitution and header/footer composition."""

import re

from ..models import ChatSettings


def replace_links(text: str, original_links: list[str], shortened_links: list[str]) -> str:
    """Replace every occurrence of each original link with its short form.

    Links are matched literally, so characters such as ``.``, ``+`` and ``?``
    carry no pattern meaning. Pairs whose short form is empty or unchanged
    are left alone.

    Args:
        text: Source text containing the original links.
        original_links: Links as extracted from ``text``.
        shortened_links: Short links paired by index with ``original_links``.

    Returns:
        Text with all links substituted.
    """
    replacements: dict[str, str] = {}
    for index, link in enumerate(original_links):
        short = shortened_links[index] if index < len(shortened_links) else None
        if not short or short == link:
            continue
        replacements.setdefault(link, short)

    if not replacements:
        return text

    # Longest first so a link that prefixes another never splits it
    pattern = re.compile(
        "|".join(re.escape(link) for link in sorted(replacements, key=len, reverse=True))
    )
    return pattern.sub(lambda match: replacements[match.group(0)], text)


def wrap_with_header_footer(body: str, settings: ChatSettings, powered_by: str) -> str:
    """Surround processed content with the chat's header, footer and branding line."""
    header = settings.header or ""
    footer = f"\n{settings.footer}" if settings.footer else ""
    return f"{header}{body}{footer}\n\n{powered_by}"
