"""mdbook-pagebreaks - Turn {{---}} markers into page breaks in mdBook output."""

__version__ = "0.1.0"

from .preprocessor import PageBreaks, process
from .replacer import (
    HTML_BREAK,
    PAGE_BREAK,
    remove_page_breaks,
    replace_html_page_breaks,
    replace_page_breaks,
)

__all__ = [
    "HTML_BREAK",
    "PAGE_BREAK",
    "PageBreaks",
    "process",
    "remove_page_breaks",
    "replace_html_page_breaks",
    "replace_page_breaks",
    "__version__",
]
