"""In-memory model of the book tree exchanged with mdBook.

Mirrors the JSON that ``mdbook`` sends to preprocessors. Only chapter content
is ever rewritten; everything else must survive a load/dump cycle unchanged.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from .exceptions import InvalidBookError

# Keys of a chapter object, in the order mdBook writes them
CHAPTER_KEYS = (
    "name",
    "content",
    "number",
    "sub_items",
    "path",
    "source_path",
    "parent_names",
)


@dataclass
class Chapter:
    """A chapter: the only kind of item that carries text."""

    name: str
    content: str = ""
    number: Optional[List[int]] = None
    sub_items: List["BookItem"] = field(default_factory=list)
    path: Optional[str] = None
    source_path: Optional[str] = None
    parent_names: List[str] = field(default_factory=list)
    # Fields added by newer mdBook releases, passed through untouched
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Chapter":
        if not isinstance(data, dict) or not isinstance(data.get("name"), str):
            raise InvalidBookError(f"Chapter must be an object with a name: {data!r}")
        if not isinstance(data.get("content") or "", str):
            raise InvalidBookError(
                f"Content of chapter {data['name']!r} must be a string"
            )

        return cls(
            name=data["name"],
            content=data.get("content") or "",
            number=data.get("number"),
            sub_items=[item_from_dict(item) for item in data.get("sub_items") or []],
            path=data.get("path"),
            source_path=data.get("source_path"),
            parent_names=list(data.get("parent_names") or []),
            extra={k: v for k, v in data.items() if k not in CHAPTER_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "content": self.content,
            "number": self.number,
            "sub_items": [item_to_dict(item) for item in self.sub_items],
            "path": self.path,
            "source_path": self.source_path,
            "parent_names": self.parent_names,
        }
        data.update(self.extra)
        return data


@dataclass
class Separator:
    """A horizontal rule in the summary."""

    pass


@dataclass
class PartTitle:
    """A part heading in the summary."""

    title: str


BookItem = Union[Chapter, Separator, PartTitle]


def item_from_dict(data: Any) -> BookItem:
    """Build a book item from its externally tagged JSON form.

    Raises:
        InvalidBookError: If the item kind is not known
    """
    if data == "Separator":
        return Separator()

    if isinstance(data, dict) and len(data) == 1:
        if "Chapter" in data:
            return Chapter.from_dict(data["Chapter"])
        if "PartTitle" in data:
            return PartTitle(str(data["PartTitle"]))

    raise InvalidBookError(f"Unknown book item: {data!r}")


def item_to_dict(item: BookItem) -> Any:
    if isinstance(item, Chapter):
        return {"Chapter": item.to_dict()}
    if isinstance(item, PartTitle):
        return {"PartTitle": item.title}
    return "Separator"


@dataclass
class Book:
    """The whole book: an ordered list of top-level items."""

    sections: List[BookItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Book":
        """Build a book from mdBook's JSON object.

        Raises:
            InvalidBookError: If ``sections`` is missing or holds unknown items
        """
        if not isinstance(data, dict) or not isinstance(data.get("sections"), list):
            raise InvalidBookError("Book must be an object with a 'sections' list")

        return cls(sections=[item_from_dict(item) for item in data["sections"]])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sections": [item_to_dict(item) for item in self.sections],
            "__non_exhaustive": None,
        }

    def iter_chapters(self) -> Iterator[Chapter]:
        """Yield every chapter depth-first, in reading order."""
        stack: List[BookItem] = list(reversed(self.sections))
        while stack:
            item = stack.pop()
            if isinstance(item, Chapter):
                yield item
                stack.extend(reversed(item.sub_items))

    def for_each_chapter(self, func: Callable[[str], str]) -> "Book":
        """Rewrite the content of every chapter in place.

        Args:
            func: Called with a chapter's content, returns the new content

        Returns:
            This book, for chaining
        """
        for chapter in self.iter_chapters():
            chapter.content = func(chapter.content)
        return self
