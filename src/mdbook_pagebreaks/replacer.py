"""Line-anchored substitution of the page-break marker."""

import re

PAGE_BREAK = "{{---}}"
HTML_BREAK = '<div class="mdbook_pagebreak">&nbsp;</div>'

# Only markers that begin a line count; "Hello {{---}}" is plain text.
_PAGE_BREAK_PATTERN = re.compile(r"^" + re.escape(PAGE_BREAK), re.MULTILINE)


def replace_page_breaks(text: str, replacement: str) -> str:
    """Replace every page-break marker that starts a line.

    Text following the marker on the same line is kept. The replacement is
    inserted literally, backslashes included.

    Args:
        text: Chapter source text
        replacement: String to put in place of each marker

    Returns:
        Text with all line-anchored markers replaced
    """
    return _PAGE_BREAK_PATTERN.sub(lambda _match: replacement, text)


def replace_html_page_breaks(text: str) -> str:
    """Replace line-anchored markers with the HTML page-break div."""
    return replace_page_breaks(text, HTML_BREAK)


def remove_page_breaks(text: str) -> str:
    """Strip line-anchored markers."""
    return replace_page_breaks(text, "")


def count_page_breaks(text: str) -> int:
    """Count the markers that replace_page_breaks would substitute."""
    return len(_PAGE_BREAK_PATTERN.findall(text))
