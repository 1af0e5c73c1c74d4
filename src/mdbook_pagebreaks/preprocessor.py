"""mdBook preprocessor that turns page-break markers into HTML or nothing."""

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import IO, Any, Dict, NamedTuple, Optional, Tuple

from .book import Book
from .exceptions import InvalidInputError
from .replacer import remove_page_breaks, replace_html_page_breaks

# Version of the mdBook preprocessor protocol this package was written against
MDBOOK_VERSION = "0.4.21"

_IDENT = r"(?:0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*)"
_VERSION_PATTERN = re.compile(
    r"(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    rf"(?:-({_IDENT}(?:\.{_IDENT})*))?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
)


class RenderPolicy(Enum):
    """What to put in place of a page-break marker."""

    RENDER_AS_HTML = "html"
    STRIP_ONLY = "strip"

    def apply(self, text: str) -> str:
        if self is RenderPolicy.RENDER_AS_HTML:
            return replace_html_page_breaks(text)
        return remove_page_breaks(text)


def policy_for_renderer(renderer: str) -> RenderPolicy:
    """Pick the policy for a renderer name; anything but ``html`` strips."""
    if renderer == "html":
        return RenderPolicy.RENDER_AS_HTML
    return RenderPolicy.STRIP_ONLY


@dataclass
class PreprocessorContext:
    """The first element of the JSON array mdBook sends on stdin."""

    root: str = ""
    config: Dict[str, Any] = field(default_factory=dict)
    renderer: str = ""
    mdbook_version: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "PreprocessorContext":
        if not isinstance(data, dict):
            raise InvalidInputError("Preprocessor context must be a JSON object")
        for key in ("root", "renderer", "mdbook_version"):
            if not isinstance(data.get(key) or "", str):
                raise InvalidInputError(f"Context field {key!r} must be a string")
        if not isinstance(data.get("config") or {}, dict):
            raise InvalidInputError("Context field 'config' must be an object")

        return cls(
            root=data.get("root") or "",
            config=data.get("config") or {},
            renderer=data.get("renderer") or "",
            mdbook_version=data.get("mdbook_version") or "",
        )

    def preprocessor_config(self, name: str) -> Optional[Dict[str, Any]]:
        """Return the ``[preprocessor.<name>]`` table from book.toml, if any."""
        tables = self.config.get("preprocessor") or {}
        return tables.get(name)


class PageBreaks:
    """Replaces ``{{---}}`` markers in every chapter of a book.

    The HTML renderer gets a ``mdbook_pagebreak`` div per marker; every other
    renderer gets the markers removed.
    """

    name = "pagebreaks"

    def run(self, ctx: PreprocessorContext, book: Book) -> Book:
        """Apply the renderer's policy to all chapter content in place."""
        policy = policy_for_renderer(ctx.renderer)
        return book.for_each_chapter(policy.apply)

    def supports_renderer(self, renderer: str) -> bool:
        return True


def process(book: Book, renderer: str) -> Book:
    """Run the page-break preprocessor for the given renderer."""
    return PageBreaks().run(PreprocessorContext(renderer=renderer), book)


def parse_input(stream: IO[str]) -> Tuple[PreprocessorContext, Book]:
    """Read the ``[context, book]`` pair mdBook writes to a preprocessor.

    Raises:
        InvalidInputError: If the input is not valid preprocessor JSON
    """
    try:
        data = json.load(stream)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidInputError(f"Unable to parse the input: {e}") from e

    if not isinstance(data, list) or len(data) != 2:
        raise InvalidInputError("Expected a JSON array of [context, book]")

    return PreprocessorContext.from_dict(data[0]), Book.from_dict(data[1])


def write_output(book: Book, stream: IO[str]) -> None:
    json.dump(book.to_dict(), stream, ensure_ascii=False)


class Version(NamedTuple):
    """A semantic version; ``pre`` holds the dot-separated pre-release tag."""

    major: int
    minor: int
    patch: int
    pre: Tuple[str, ...] = ()

    def precedence(self) -> Tuple[Any, ...]:
        """Sort key: a pre-release sorts before its release."""
        if not self.pre:
            return (self.major, self.minor, self.patch, (1,))
        # Numeric identifiers sort below alphanumeric ones
        ids = tuple(
            (0, int(part), "") if part.isdigit() else (1, 0, part)
            for part in self.pre
        )
        return (self.major, self.minor, self.patch, (0, ids))


def parse_version(version: str) -> Version:
    """Parse a full semantic version such as ``0.4.21`` or ``0.5.0-alpha.1``.

    Build metadata after ``+`` is accepted and discarded.

    Raises:
        InvalidInputError: If the string is not a semantic version
    """
    match = _VERSION_PATTERN.fullmatch(version) if isinstance(version, str) else None
    if not match:
        raise InvalidInputError(f"Invalid mdBook version: {version!r}")

    major, minor, patch, pre = match.groups()
    return Version(
        int(major), int(minor), int(patch), tuple(pre.split(".")) if pre else ()
    )


def version_matches(actual: str, required: str = MDBOOK_VERSION) -> bool:
    """Check ``actual`` against a caret requirement on ``required``.

    ``0.4.21`` accepts ``>=0.4.21, <0.5.0``; ``1.2.0`` accepts ``>=1.2.0, <2.0.0``.
    A pre-release only matches when ``required`` is a pre-release of the same
    ``major.minor.patch``.
    """
    have = parse_version(actual)
    want = parse_version(required)

    if have.pre and not (want.pre and have[:3] == want[:3]):
        return False
    if have.precedence() < want.precedence():
        return False
    if (want.major, want.minor) == (0, 0):
        return have[:3] == want[:3]
    if want.major == 0:
        return have[:2] == want[:2]
    return have.major == want.major
